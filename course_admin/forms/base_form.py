from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from course_admin.schemas.response_schemas import OperationResult
from course_admin.utils.errors import (
    ApiRequestError,
    ClientError,
    FormValidationError,
    describe_validation_errors,
)
from course_admin.utils.logging import get_logger
from course_admin.utils.notifications import LoggingNotifier, Notification, Notifier

logger = get_logger()

RecordT = TypeVar("RecordT", bound=BaseModel)
SchemaT = TypeVar("SchemaT", bound=BaseModel)

SubmitCallback = Callable[[Any], Awaitable[OperationResult[Any]]]


class FormMode(str, Enum):
    CREATE = "create"
    EDIT = "edit"


class EntityForm(Generic[RecordT, SchemaT]):
    """
    Modal input surface for creating or editing one entity.

    Subclasses provide the validation schema, the default values and the
    conversion from validated input to the request body. The submit callback
    is injected by the owning list view and performs the API call.
    """

    entity_label: str = "Record"
    schema: Type[BaseModel]
    created_verb: str = "created"
    create_verb: str = "create"

    def __init__(
        self,
        on_submit: SubmitCallback,
        notifier: Optional[Notifier] = None,
        record: Optional[RecordT] = None,
    ):
        self.on_submit = on_submit
        self.notifier = notifier or LoggingNotifier()
        self.record = record
        self.mode = FormMode.EDIT if record is not None else FormMode.CREATE
        self.is_open = False
        self.is_submitting = False
        self.is_loading_data = False
        self.load_error: Optional[ClientError] = None
        self.values: Dict[str, Any] = {}
        self.field_errors: Dict[str, List[str]] = {}
        # Bumped on open/close so late responses for a previous session are dropped
        self._session = 0
        self.reset()

    @property
    def is_edit(self) -> bool:
        return self.mode == FormMode.EDIT

    @property
    def title(self) -> str:
        if self.is_edit:
            return f"Edit {self.entity_label}"
        return f"New {self.entity_label}"

    @property
    def can_submit(self) -> bool:
        return (
            self.is_open
            and not self.is_submitting
            and not self.is_loading_data
            and self.load_error is None
        )

    def default_values(self) -> Dict[str, Any]:
        raise NotImplementedError

    def to_request(self, data: SchemaT) -> BaseModel:
        raise NotImplementedError

    async def load_reference_data(self, session: int) -> None:
        """Fetch whatever the form's select boxes need; nothing by default."""
        return None

    def is_current(self, session: int) -> bool:
        return self.is_open and session == self._session

    def reset(self) -> None:
        self.values = self.default_values()
        self.field_errors = {}

    def set_value(self, field: str, value: Any) -> None:
        self.values[field] = value
        self.field_errors.pop(field, None)

    def set_values(self, **values: Any) -> None:
        for field, value in values.items():
            self.set_value(field, value)

    async def open(self) -> None:
        self._session += 1
        self.is_open = True
        self.load_error = None
        self.reset()
        await self.load_reference_data(self._session)

    def close(self) -> None:
        self._session += 1
        self.is_open = False
        self.is_loading_data = False
        self.load_error = None
        self.reset()

    def validate(self) -> SchemaT:
        """Validate the current values, raising FormValidationError per field."""
        try:
            return self.schema.model_validate(self.values)
        except ValidationError as e:
            raise FormValidationError(describe_validation_errors(e)) from e

    def extra_validation(self, data: SchemaT) -> Dict[str, List[str]]:
        """Checks that need more than the schema, e.g. loaded options."""
        return {}

    def _verb(self, past: bool) -> str:
        if self.is_edit:
            return "updated" if past else "update"
        return self.created_verb if past else self.create_verb

    async def submit(self) -> bool:
        """
        Validate, convert and hand the request to the submit callback.

        Returns True when the record was saved; the form is then closed and
        reset. Validation failures never reach the network. Submission
        failures keep the form open with its values.
        """
        if self.is_submitting:
            return False
        if self.load_error is not None:
            self.notifier.notify(Notification.error(self.load_error.message))
            return False

        try:
            data = self.validate()
        except FormValidationError as e:
            self.field_errors = e.field_errors
            logger.debug(f"{self.entity_label} form rejected: {e.field_errors}")
            return False

        extra_errors = self.extra_validation(data)
        if extra_errors:
            self.field_errors = extra_errors
            return False

        self.field_errors = {}
        request = self.to_request(data)

        self.is_submitting = True
        try:
            result = await self.on_submit(request)
        finally:
            self.is_submitting = False

        if result.success:
            self.notifier.notify(
                Notification.success(
                    "Success",
                    f"{self.entity_label} {self._verb(past=True)} successfully",
                )
            )
            self.close()
            return True

        if isinstance(result.error, ApiRequestError):
            self.field_errors = {
                field: messages
                for field, messages in result.error.field_errors.items()
                if field in self.values
            }
        self.notifier.notify(
            Notification.error(
                f"Failed to {self._verb(past=False)} {self.entity_label.lower()}. "
                "Please try again."
            )
        )
        return False


def changed_fields(
    record: BaseModel, data: BaseModel, fields: List[str]
) -> Dict[str, Any]:
    """Field values in `data` that differ from the same fields on `record`."""
    return {
        field: getattr(data, field)
        for field in fields
        if getattr(record, field, None) != getattr(data, field)
    }
