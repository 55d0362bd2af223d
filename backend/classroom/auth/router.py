"""Authentication router for issuing tokens."""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from classroom.database import get_db
from .models import LoginRequest, Requester, Token
from .service import AuthService, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency to get an instance of AuthService."""
    return AuthService(db)


@router.post("/login", response_model=Token, response_model_by_alias=True)
async def login_for_access_token(
    credentials: LoginRequest,
    service: AuthService = Depends(get_auth_service),
):
    """Exchange a personal id and role for an access token."""
    user = service.authenticate_user(credentials.personal_id, credentials.role)
    if not user:
        logger.info(f"Rejected login for personal id {credentials.personal_id!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(token=service.create_access_token(user))


@router.get("/me", response_model=Requester)
async def read_users_me(current_user: Requester = Depends(get_current_user)):
    """Get the identity carried by the current token."""
    return current_user
