"""Class and Student collections"""

from sqlalchemy import Column, String, Table, ForeignKey, Uuid

from app.database import Base
from app.models.base import BaseModel


class Class(BaseModel):
    """
    A class inside a school.
    ``school_id`` is a plain reference: nothing checks the school exists and
    deleting the school leaves it dangling.
    """
    __tablename__ = "classes"

    class_name = Column(String(300), nullable=False)
    school_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Class {self.class_name}>"


class Student(BaseModel):
    """A student enrolled in exactly one class of one school"""
    __tablename__ = "students"

    student_name = Column(String(300), nullable=False)
    class_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    school_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Student {self.student_name}>"


# Set field Class.students
class_students = Table(
    "class_students",
    Base.metadata,
    Column("class_id", Uuid(as_uuid=True), ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
    Column("student_id", Uuid(as_uuid=True), primary_key=True),
)
