"""User Schemas"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.validation import FieldRule


# User Response Schema
class UserView(BaseModel):
    """Public user projection; the password hash is never part of it"""
    id: str
    name: str
    username: str
    email: Optional[str] = None
    role: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Token claims carried by a short token
class TokenClaims(BaseModel):
    user_id: str
    user_role: int

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


CREATE_USER_RULES = [
    FieldRule("name", "longText", required=True),
    FieldRule("username", "username", required=True),
    FieldRule("email", "email", required=True),
    FieldRule("password", "password", required=True),
]

LOGIN_RULES = [
    FieldRule("username", "username", required=True),
    FieldRule("password", "password", required=True),
]
