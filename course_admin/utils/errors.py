from typing import Any, Dict, List, Optional

from pydantic import ValidationError


class ClientError(Exception):
    """Base class for failures scoped to a single user action."""

    def __init__(self, message: str, error_code: str = "CLIENT_ERROR"):
        super().__init__(message)
        self.message = message
        self.error_code = error_code


class FormValidationError(ClientError):
    """Raised before any network call when form input fails its schema."""

    def __init__(
        self,
        field_errors: Dict[str, List[str]],
        message: str = "Form validation failed",
        error_code: str = "VALIDATION_ERROR",
    ):
        super().__init__(message, error_code)
        self.field_errors = field_errors


class ApiRequestError(ClientError):
    """The backend answered with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        errors: Optional[List[Dict[str, Any]]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message, error_code or f"HTTP_{status_code}")
        self.status_code = status_code
        self.errors = errors or []

    @property
    def field_errors(self) -> Dict[str, List[str]]:
        """Backend validation errors keyed by field, when the body carries them."""
        field_errors: Dict[str, List[str]] = {}
        for error in self.errors:
            field = error.get("field")
            message = error.get("message") or error.get("msg")
            if not field or not message:
                continue
            # "body -> studentId" style paths keep only the last segment
            field = str(field).split("->")[-1].strip()
            field_errors.setdefault(field, []).append(str(message))
        return field_errors


class AuthenticationError(ApiRequestError):
    """A 401 from the backend; the session has already been cleared."""

    def __init__(
        self,
        message: str = "Session expired. Please log in again.",
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message, 401, errors, error_code="UNAUTHORIZED")


class NotFoundError(ApiRequestError):
    """Custom exception for resource not found errors."""

    def __init__(
        self,
        message: str = "Resource not found",
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message, 404, errors, error_code="NOT_FOUND")


class NetworkError(ClientError):
    """The request never produced an HTTP response."""

    def __init__(self, message: str, error_code: str = "NETWORK_ERROR"):
        super().__init__(message, error_code)


class DataConsistencyError(ClientError):
    """Client-side data does not line up, e.g. a denormalized code with no match."""

    def __init__(self, message: str, error_code: str = "DATA_CONSISTENCY_ERROR"):
        super().__init__(message, error_code)


def describe_validation_errors(exc: ValidationError) -> Dict[str, List[str]]:
    """Group pydantic validation messages by (aliased) field name."""
    field_errors: Dict[str, List[str]] = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "__root__"
        field_errors.setdefault(field, []).append(error["msg"])
    return field_errors
