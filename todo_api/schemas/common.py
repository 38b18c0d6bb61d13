"""Common response schemas shared across routers."""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    403: {"model": ErrorResponse, "description": "Not the owner and not an admin"},
    404: {"model": ErrorResponse, "description": "Todo not found"},
}
