"""Domain layer for Douanier."""
