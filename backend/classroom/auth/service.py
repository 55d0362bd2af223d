"""Authentication service for issuing and verifying bearer tokens."""
from datetime import datetime, timedelta, UTC
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from classroom.models import User, UserRole
from .models import Requester, SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


class AuthService:
    def __init__(self, db: Session):
        self.db = db

    def create_access_token(self, user: User, expires_delta: Optional[timedelta] = None) -> str:
        """Create a signed token carrying the user's id, role and name."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
        to_encode = {
            "sub": str(user.id),
            "role": user.role.value,
            "name": user.name,
            "exp": datetime.now(UTC) + expires_delta,
            "type": "access",
        }
        return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)

    def authenticate_user(self, personal_id: str, role: UserRole) -> Optional[User]:
        """Find the user with this personal id and role."""
        return (
            self.db.query(User)
            .filter(User.personal_id == personal_id, User.role == role)
            .first()
        )


def verify_token(token: str) -> Requester:
    """Decode a bearer token into the requester it was issued for."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        raise credentials_exception
    subject = payload.get("sub")
    role = payload.get("role")
    name = payload.get("name")
    if subject is None or role is None or name is None:
        raise credentials_exception
    try:
        return Requester(id=int(subject), role=UserRole(role), name=name)
    except ValueError:
        raise credentials_exception


def get_current_user(token: str = Depends(oauth2_scheme)) -> Requester:
    """Dependency to get the current requester from the JWT token."""
    return verify_token(token)
