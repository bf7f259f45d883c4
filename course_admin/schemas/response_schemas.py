from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from course_admin.utils.errors import ClientError

T = TypeVar("T")


class OperationResult(BaseModel, Generic[T]):
    """
    Outcome of one client operation.

    API calls report failures through this object instead of raising, so every
    caller has to look at `success` before using `data`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool = Field(..., description="Whether the operation succeeded")
    data: Optional[T] = Field(default=None, description="Parsed response body")
    error: Optional[ClientError] = Field(default=None, description="Failure reason")

    @classmethod
    def ok(cls, data: Optional[T] = None) -> "OperationResult[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: ClientError) -> "OperationResult[T]":
        return cls(success=False, error=error)

    @property
    def message(self) -> str:
        if self.error is not None:
            return self.error.message
        return "Request successful"

    @property
    def error_code(self) -> Optional[str]:
        return self.error.error_code if self.error is not None else None

    def unwrap(self) -> T:
        """Return the data or raise the stored error."""
        if not self.success:
            raise self.error or ClientError("Operation failed")
        return self.data
