"""Request and response schemas for groups and their members."""
from classroom.models import UserRole
from classroom.models.questions import CamelModel


class UserResponse(CamelModel):
    id: int
    name: str
    role: UserRole
    personal_id: str


class GroupCreate(CamelModel):
    name: str
    student_ids: list[int] = []


class GroupResponse(CamelModel):
    id: int
    name: str
    teacher_id: int


class GroupDetail(GroupResponse):
    students: list[UserResponse] = []
