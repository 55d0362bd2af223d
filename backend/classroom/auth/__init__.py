"""Authentication package for the application."""
from .models import Requester, LoginRequest, Token
from .service import AuthService, get_current_user, verify_token
from .router import router as auth_router

__all__ = [
    'Requester',
    'LoginRequest',
    'Token',
    'AuthService',
    'get_current_user',
    'verify_token',
    'auth_router',
]
