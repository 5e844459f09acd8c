"""Background tasks."""

from douanier.infrastructure.tasks.session_sweeper import SessionSweeper

__all__ = ["SessionSweeper"]
