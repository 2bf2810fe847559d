"""JSON envelope shared by every endpoint."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """Success response body: ``{success, data, message}``."""

    success: bool = True
    data: Optional[T] = None
    message: str


class ErrorEnvelope(BaseModel):
    """Failure response body. ``errors`` maps fields to messages."""

    success: bool = False
    message: str
    errors: dict[str, list[str]] | None = None


def ok(data: T, message: str) -> Envelope[T]:
    """Wrap a payload in a success envelope."""
    return Envelope(data=data, message=message)
