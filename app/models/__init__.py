"""Models Package - Export all models for easy imports"""

from app.models.base import BaseModel
from app.models.enums import UserRole
from app.models.school import School, school_classes
from app.models.academic import Class, Student, class_students
from app.models.user import User


__all__ = [
    "BaseModel",
    "UserRole",
    "School",
    "school_classes",
    "Class",
    "Student",
    "class_students",
    "User",
]
