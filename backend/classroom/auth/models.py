"""Authentication schemas and token settings."""
import os

from pydantic import BaseModel, Field

from classroom.models.enums import UserRole
from classroom.models.questions import CamelModel

# JWT Configuration
SECRET_KEY = os.getenv("JWT_SECRET_KEY", "your-secret-key-keep-it-secure")  # Override in production
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(24 * 60)))


class Requester(BaseModel):
    """Authenticated caller decoded from a bearer token."""
    id: int
    role: UserRole
    name: str

    @property
    def is_teacher(self) -> bool:
        return self.role == UserRole.teacher

    @property
    def is_student(self) -> bool:
        return self.role == UserRole.student


class LoginRequest(CamelModel):
    personal_id: str = Field(..., min_length=1)
    role: UserRole


class Token(CamelModel):
    token: str
    token_type: str = "bearer"
