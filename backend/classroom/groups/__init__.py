"""Groups and their rosters."""
from .service import GroupDirectory

__all__ = ["GroupDirectory"]
