"""User & Authentication Model"""

from sqlalchemy import Column, String, Integer

from app.models.base import BaseModel
from app.models.enums import UserRole


class User(BaseModel):
    """
    Account used to obtain short tokens.
    ``role`` is the only authorization dimension; ADMIN (3) and above may
    mutate schools, classes and students.
    """
    __tablename__ = "users"

    name = Column(String(300), nullable=False)
    username = Column(String(20), unique=True, nullable=False, index=True)
    email = Column(String(255), nullable=True)
    hashed_password = Column(String(255), nullable=False)
    role = Column(Integer, default=int(UserRole.MEMBER), nullable=False)

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.role})>"
