"""School collection"""

from sqlalchemy import Column, String, Table, ForeignKey, Uuid

from app.database import Base
from app.models.base import BaseModel


class School(BaseModel):
    """
    A school and the set of classes assigned to it.
    Class ids live in ``school_classes``; they are not foreign keys, so a
    deleted class stays listed until someone reassigns.
    """
    __tablename__ = "schools"

    school_name = Column(String(300), nullable=False)

    def __repr__(self) -> str:
        return f"<School {self.school_name}>"


# Set field School.classes (composite key keeps membership unique)
school_classes = Table(
    "school_classes",
    Base.metadata,
    Column("school_id", Uuid(as_uuid=True), ForeignKey("schools.id", ondelete="CASCADE"), primary_key=True),
    Column("class_id", Uuid(as_uuid=True), primary_key=True),
)
