"""
Tagged results returned across the public library boundary.

Every public operation returns either ``Ok`` (success variant carrying a
payload) or ``Failure`` (error kind + human readable message). Both flatten
into the uniform ``{"success": ..., ...}`` shape via ``to_response``.
"""

from typing import Any, Generic, Literal, TypeVar, Union
from pydantic import BaseModel

from stripekit.common.core.constants import ErrorKind
from stripekit.common.core.exceptions import AppException

T = TypeVar("T")


class Ok(BaseModel, Generic[T]):
    """Successful outcome."""

    success: Literal[True] = True
    value: T

    def to_response(self) -> dict[str, Any]:
        if isinstance(self.value, BaseModel):
            payload = self.value.model_dump(by_alias=True, mode="json")
        elif isinstance(self.value, dict):
            payload = dict(self.value)
        else:
            payload = {"value": self.value}
        return {"success": True, **payload}


class Failure(BaseModel):
    """Failed outcome."""

    success: Literal[False] = False
    kind: ErrorKind
    error: str

    @classmethod
    def from_exception(cls, exc: AppException) -> "Failure":
        return cls(kind=exc.kind, error=exc.message)

    def to_response(self) -> dict[str, Any]:
        return {"success": False, "error": self.error}


Result = Union[Ok, Failure]
