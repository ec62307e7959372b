"""
Collection definitions: how document fields map onto tables.

Documents are plain dicts keyed by their wire names (``schoolName``,
``studentClass``...). A collection lists three kinds of fields:

- ``fields``: plain values stored in a column
- ``references``: a single id pointing into another collection
- ``sets``: a unique, unordered set of ids kept in an association table
"""

from dataclasses import dataclass, field
from typing import Dict

from sqlalchemy import Table

from app.models import Class, School, Student, User, class_students, school_classes


@dataclass(frozen=True)
class Reference:
    column: str
    target: str


@dataclass(frozen=True)
class ReferenceSet:
    table: Table
    owner_column: str
    member_column: str
    target: str


@dataclass(frozen=True)
class Collection:
    name: str
    model: type
    fields: Dict[str, str] = field(default_factory=dict)
    references: Dict[str, Reference] = field(default_factory=dict)
    sets: Dict[str, ReferenceSet] = field(default_factory=dict)

    def column_for(self, doc_field: str) -> str:
        """ORM attribute backing a plain or reference field"""
        if doc_field in self.fields:
            return self.fields[doc_field]
        if doc_field in self.references:
            return self.references[doc_field].column
        raise KeyError(f"{self.name} has no scalar field {doc_field!r}")


SCHOOL = Collection(
    name="school",
    model=School,
    fields={"schoolName": "school_name"},
    sets={
        "classes": ReferenceSet(
            table=school_classes, owner_column="school_id", member_column="class_id", target="class"
        ),
    },
)

CLASS = Collection(
    name="class",
    model=Class,
    fields={"className": "class_name"},
    references={"school": Reference(column="school_id", target="school")},
    sets={
        "students": ReferenceSet(
            table=class_students, owner_column="class_id", member_column="student_id", target="student"
        ),
    },
)

STUDENT = Collection(
    name="student",
    model=Student,
    fields={"studentName": "student_name"},
    references={
        "studentClass": Reference(column="class_id", target="class"),
        "studentSchool": Reference(column="school_id", target="school"),
    },
)

USER = Collection(
    name="user",
    model=User,
    fields={
        "name": "name",
        "username": "username",
        "email": "email",
        "password": "hashed_password",
        "role": "role",
    },
)

COLLECTIONS: Dict[str, Collection] = {c.name: c for c in (SCHOOL, CLASS, STUDENT, USER)}
