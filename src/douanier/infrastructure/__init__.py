"""Infrastructure layer for Douanier."""
