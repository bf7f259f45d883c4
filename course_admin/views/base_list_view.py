import inspect
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel

from course_admin.forms.base_form import EntityForm
from course_admin.schemas.response_schemas import OperationResult
from course_admin.utils.logging import get_logger
from course_admin.utils.notifications import LoggingNotifier, Notification, Notifier
from course_admin.utils.string_utils import contains_ignore_case, pluralize

logger = get_logger()

T = TypeVar("T", bound=BaseModel)

ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def assume_yes(message: str) -> bool:
    """Confirmation callback for non-interactive use."""
    logger.debug(f"Auto-confirmed: {message}")
    return True


class EntityListView(Generic[T]):
    """
    Filterable table of one entity type.

    The collection is a transient copy of the backend's: it is fetched in full
    on mount and again after every successful create, update or delete. A view
    that is unmounted, or that has started a newer fetch, ignores the response
    of an older one.
    """

    entity_label: str = "Record"
    plural_label: str = "records"

    def __init__(
        self,
        api,
        notifier: Optional[Notifier] = None,
        confirm: Optional[ConfirmCallback] = None,
    ):
        self.api = api
        self.notifier = notifier or LoggingNotifier()
        self.confirm = confirm or assume_yes
        self.items: List[T] = []
        self.filtered: List[T] = []
        self.state = ViewState.IDLE
        self.is_mounted = False
        self.active_form: Optional[EntityForm] = None
        self._search_term = ""
        self._generation = 0

    # Hooks for concrete views

    async def fetch(self) -> OperationResult[List[T]]:
        raise NotImplementedError

    async def create(self, request: BaseModel) -> OperationResult[T]:
        raise NotImplementedError

    async def update(self, item_id: int, request: BaseModel) -> OperationResult[T]:
        raise NotImplementedError

    async def remove(self, item_id: int) -> OperationResult[None]:
        raise NotImplementedError

    def build_form(self, record: Optional[T]) -> EntityForm:
        raise NotImplementedError

    def search_values(self, item: T) -> List[Optional[str]]:
        raise NotImplementedError

    def delete_prompt(self, item: T) -> str:
        return f"Are you sure you want to delete this {self.entity_label.lower()}?"

    def deleted_notification(self, item: T) -> Notification:
        return Notification.success(
            "Success", f"{self.entity_label} deleted successfully"
        )

    # State

    @property
    def is_loading(self) -> bool:
        return self.state == ViewState.LOADING

    @property
    def search_term(self) -> str:
        return self._search_term

    @search_term.setter
    def search_term(self, term: Optional[str]) -> None:
        self._search_term = term or ""
        self._apply_filter()

    @property
    def result_summary(self) -> str:
        return f"{pluralize(len(self.filtered), self.entity_label.lower())} found"

    def matches(self, item: T, term: str) -> bool:
        if not term:
            return True
        return contains_ignore_case(self.search_values(item), term)

    def _apply_filter(self) -> None:
        term = self._search_term
        self.filtered = [item for item in self.items if self.matches(item, term)]

    # Lifecycle

    async def mount(self) -> None:
        self.is_mounted = True
        await self.reload()

    def unmount(self) -> None:
        self.is_mounted = False
        self._generation += 1
        if self.active_form is not None:
            self.active_form.close()
            self.active_form = None

    async def reload(self) -> OperationResult[List[T]]:
        """Fetch the full collection; no retry on failure."""
        self._generation += 1
        generation = self._generation
        self.state = ViewState.LOADING

        result = await self.fetch()

        if not self.is_mounted or generation != self._generation:
            logger.debug(f"Discarding stale {self.plural_label} response")
            return result

        if result.success:
            self.items = list(result.data or [])
            self.state = ViewState.READY
        else:
            self.items = []
            self.state = ViewState.ERROR
            self.notifier.notify(
                Notification.error(f"Failed to load {self.plural_label}")
            )
        self._apply_filter()
        return result

    # Actions

    async def _confirmed(self, message: str) -> bool:
        answer = self.confirm(message)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def delete(self, item: T) -> bool:
        if not await self._confirmed(self.delete_prompt(item)):
            return False

        result = await self.remove(item.id)
        if not result.success:
            self.notifier.notify(
                Notification.error(f"Failed to delete {self.entity_label.lower()}")
            )
            return False

        self.notifier.notify(self.deleted_notification(item))
        await self.reload()
        return True

    def _submit_handler(self, record: Optional[T]):
        async def handle(request: BaseModel) -> OperationResult[Any]:
            if record is None:
                result = await self.create(request)
            else:
                result = await self.update(record.id, request)
            if result.success:
                await self.reload()
            return result

        return handle

    async def open_create_form(self) -> EntityForm:
        return await self._open_form(None)

    async def open_edit_form(self, item: T) -> EntityForm:
        return await self._open_form(item)

    async def _open_form(self, record: Optional[T]) -> EntityForm:
        if self.active_form is not None:
            self.active_form.close()
        form = self.build_form(record)
        self.active_form = form
        await form.open()
        return form
