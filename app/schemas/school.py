from app.core.validation import FieldRule
from app.schemas.academic import SchoolView

CREATE_SCHOOL_RULES = [
    FieldRule("schoolName", "longText", required=True),
    FieldRule("classes", "arrayOfIds"),
]

ASSIGN_CLASSES_RULES = [
    FieldRule("classes", "arrayOfIds", required=True),
]

__all__ = ["CREATE_SCHOOL_RULES", "ASSIGN_CLASSES_RULES", "SchoolView"]
