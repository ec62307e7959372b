"""Map service results onto HTTP responses"""

from typing import Any, Dict

from fastapi import status
from fastapi.responses import JSONResponse

_STATUS_BY_ERROR = {
    "unauthorized": status.HTTP_403_FORBIDDEN,
    "wrong password": status.HTTP_401_UNAUTHORIZED,
    "username already taken": status.HTTP_409_CONFLICT,
}


def status_for_error(message: str) -> int:
    if message in _STATUS_BY_ERROR:
        return _STATUS_BY_ERROR[message]
    if message.endswith(" not found"):
        return status.HTTP_404_NOT_FOUND
    # malformed ids and field validation failures
    return status.HTTP_400_BAD_REQUEST


def render(result: Dict[str, Any], success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Error values get their mapped status; anything else is a success."""
    if "error" in result:
        return JSONResponse(status_code=status_for_error(result["error"]), content=result)
    return JSONResponse(status_code=success_status, content=result)
