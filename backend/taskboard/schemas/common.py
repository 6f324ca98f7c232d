"""Shared response shapes."""

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Acknowledgement for operations that return no resource (deletes)."""
    message: str
