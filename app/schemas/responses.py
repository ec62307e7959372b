"""API Response Schemas (for the OpenAPI document)"""

from typing import Any, Dict

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """
    Domain failure returned as a value.

    Example:
        {"error": "school not found"}
    """
    error: str


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str


# Documented failure statuses shared by the entity routes
ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid id or payload"},
    403: {"model": ErrorResponse, "description": "Caller role too low"},
    404: {"model": ErrorResponse, "description": "Entity not found"},
}
