"""Application layer for Douanier."""
