"""School, Class & Student Schemas"""

from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.validation import FieldRule


class DocumentView(BaseModel):
    """Public projection of a stored document, serialized with camelCase keys"""
    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SchoolView(DocumentView):
    school_name: str
    classes: List[Union["ClassView", str]] = []


class ClassView(DocumentView):
    class_name: str
    school: Optional[Union[SchoolView, str]] = None
    students: List[Union["StudentView", str]] = []


class StudentView(DocumentView):
    student_name: str
    student_class: Optional[Union[ClassView, str]] = None
    student_school: Optional[Union[SchoolView, str]] = None


SchoolView.model_rebuild()
ClassView.model_rebuild()
StudentView.model_rebuild()


# Rule-sets

CREATE_CLASS_RULES = [
    FieldRule("className", "longText", required=True),
    FieldRule("students", "arrayOfIds"),
    FieldRule("school", "id", required=True),
]

ASSIGN_STUDENTS_RULES = [
    FieldRule("students", "arrayOfIds", required=True),
]

CREATE_STUDENT_RULES = [
    FieldRule("studentName", "longText", required=True),
    FieldRule("studentClass", "id", required=True),
    FieldRule("studentSchool", "id", required=True),
]

UPDATE_STUDENT_RULES = [
    FieldRule("newClass", "id", required=True),
    FieldRule("newSchool", "id", required=True),
]
