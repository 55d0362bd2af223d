"""Task store package."""
from .service import TaskStore

__all__ = ["TaskStore"]
