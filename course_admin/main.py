from pathlib import Path
from typing import Dict, List, Optional, Union

import httpx
from pydantic import ValidationError

from course_admin.config.settings import settings
from course_admin.schemas.auth_schemas import LoginRequest, User
from course_admin.schemas.response_schemas import OperationResult
from course_admin.services.api_client import ApiClient
from course_admin.services.auth_context import AuthContext, TokenStore
from course_admin.utils.errors import FormValidationError, describe_validation_errors
from course_admin.utils.logging import get_logger
from course_admin.utils.notifications import LoggingNotifier, Notification, Notifier
from course_admin.views import (
    CoursesView,
    Dashboard,
    EntityListView,
    RegistrationsView,
    ResultsView,
    StudentsView,
)
from course_admin.views.base_list_view import ConfirmCallback

# Initialize the logger
logger = get_logger()

HOME_PATH = "/"

# Sidebar entries in display order
NAVIGATION = [
    ("Dashboard", "/"),
    ("Students", "/students"),
    ("Courses", "/courses"),
    ("Registrations", "/registrations"),
    ("Results", "/results"),
]


class AdminApplication:
    """
    Wires the auth context, API client and screens together.

    Navigation is reduced to `current_path`; switching paths unmounts the
    previous list view so its in-flight responses are dropped.
    """

    def __init__(
        self,
        token_store: Optional[TokenStore] = None,
        notifier: Optional[Notifier] = None,
        confirm: Optional[ConfirmCallback] = None,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.notifier = notifier or LoggingNotifier()
        self.history: List[str] = []
        self.auth = AuthContext(store=token_store, on_logout=self.navigate_sync)
        self.api = ApiClient(self.auth, base_url=base_url, transport=transport)
        self.dashboard = Dashboard(self.api, self.notifier)
        self.views: Dict[str, EntityListView] = {
            "/students": StudentsView(self.api, self.notifier, confirm),
            "/courses": CoursesView(self.api, self.notifier, confirm),
            "/registrations": RegistrationsView(self.api, self.notifier, confirm),
            "/results": ResultsView(self.api, self.notifier, confirm),
        }
        self.current_path = HOME_PATH if self.auth.is_authenticated else settings.LOGIN_PATH

    async def __aenter__(self) -> "AdminApplication":
        logger.info(f"{settings.NAME} is starting up...")
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        for view in self.views.values():
            if view.is_mounted:
                view.unmount()
        await self.api.aclose()
        logger.info(f"{settings.NAME} is shutting down...")

    @property
    def user(self) -> Optional[User]:
        return self.auth.user

    @property
    def current_view(self) -> Optional[Union[EntityListView, Dashboard]]:
        if self.current_path == HOME_PATH:
            return self.dashboard
        return self.views.get(self.current_path)

    def navigate_sync(self, path: str) -> None:
        """Change path without loading anything; used by the logout callback."""
        previous = self.views.get(self.current_path)
        if previous is not None and previous.is_mounted:
            previous.unmount()
        self.history.append(path)
        self.current_path = path
        logger.debug(f"Navigated to {path}")

    async def navigate(self, path: str) -> None:
        """Switch screens and load the new one."""
        if path != settings.LOGIN_PATH and not self.auth.is_authenticated:
            path = settings.LOGIN_PATH
        self.navigate_sync(path)

        if path == HOME_PATH:
            await self.dashboard.load()
        elif path in self.views:
            await self.views[path].mount()

    async def login(self, username: str, password: str) -> OperationResult:
        try:
            credentials = LoginRequest(username=username, password=password)
        except ValidationError as e:
            return OperationResult.fail(FormValidationError(describe_validation_errors(e)))

        result = await self.api.login(credentials)
        if not result.success:
            self.notifier.notify(Notification.error("Invalid username or password"))
            return result
        await self.navigate(HOME_PATH)
        return result

    def logout(self) -> None:
        self.api.logout()


def create_application(
    storage_path: Optional[Path] = None, **kwargs
) -> AdminApplication:
    """Build the application with credentials persisted at `storage_path`."""
    return AdminApplication(token_store=TokenStore(storage_path), **kwargs)
