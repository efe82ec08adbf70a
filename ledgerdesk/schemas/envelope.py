from typing import Generic, TypeVar
from pydantic import BaseModel, Field

T = TypeVar("T")


class ActionResult(BaseModel, Generic[T]):
    """Uniform success/failure wrapper returned by every action."""

    success: bool
    data: T | None = None
    error: str | None = Field(None, description="Human-readable failure message")

    @classmethod
    def ok(cls, data: T | None = None) -> "ActionResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ActionResult[T]":
        return cls(success=False, error=error)
