"""Demo roster for local development."""
import logging

from sqlalchemy.orm import Session

from .models import Group, User, UserRole

logger = logging.getLogger(__name__)

DEMO_TEACHER = ("Ada Lovelace", "T01")
DEMO_STUDENTS = [
    ("Charles Babbage", "S01"),
    ("Grace Hopper", "S02"),
    ("Alan Turing", "S03"),
]
DEMO_GROUP = "Mathematics Pioneers"


def seed_demo_data(db: Session) -> bool:
    """Insert one teacher, three students and their group into an empty database.

    Returns False without touching anything if users already exist.
    """
    if db.query(User).first() is not None:
        return False

    logger.info("Seeding database...")
    name, personal_id = DEMO_TEACHER
    teacher = User(name=name, role=UserRole.teacher, personal_id=personal_id)
    students = [
        User(name=name, role=UserRole.student, personal_id=personal_id)
        for name, personal_id in DEMO_STUDENTS
    ]
    db.add(Group(name=DEMO_GROUP, teacher=teacher, students=students))
    db.commit()
    logger.info("Seeding complete.")
    return True
