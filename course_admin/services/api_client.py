from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from course_admin.config.settings import settings
from course_admin.schemas.auth_schemas import LoginRequest, LoginResponse, User
from course_admin.schemas.course_schemas import (
    Course,
    CourseCreateRequest,
    CourseUpdateRequest,
)
from course_admin.schemas.dashboard_schemas import DashboardStats
from course_admin.schemas.registration_schemas import Registration, RegistrationRequest
from course_admin.schemas.response_schemas import OperationResult
from course_admin.schemas.result_schemas import Result, ResultRequest
from course_admin.schemas.student_schemas import (
    Student,
    StudentCreateRequest,
    StudentUpdateRequest,
)
from course_admin.services.auth_context import AuthContext, user_from_token
from course_admin.utils.context import api_call_scope
from course_admin.utils.errors import (
    ApiRequestError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
)
from course_admin.utils.logging import get_logger

REQUEST_ID_HEADER = "X-Request-ID"

M = TypeVar("M", bound=BaseModel)


class ApiClient:
    """
    Single HTTP gateway to the course-management backend.

    Every request carries the bearer token from the auth context when one is
    stored. Any 401 response logs the user out through the auth context before
    the failure is handed back to the caller. Each operation performs exactly
    one HTTP call and reports failures through OperationResult instead of
    raising.
    """

    def __init__(
        self,
        auth: AuthContext,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: Optional[float] = None,
    ):
        self.auth = auth
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
            event_hooks={
                "request": [self._attach_bearer_token],
                "response": [self._handle_unauthorized],
            },
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # Interceptors

    async def _attach_bearer_token(self, request: httpx.Request) -> None:
        token = self.auth.token
        if token:
            request.headers["Authorization"] = f"Bearer {token}"

    async def _handle_unauthorized(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            get_logger().warning(
                f"401 from {response.request.method} {response.request.url.path}, logging out"
            )
            self.auth.logout()

    # Transport helpers

    async def _call(
        self,
        method: str,
        path: str,
        body: Optional[BaseModel] = None,
        exclude_unset: bool = False,
    ) -> OperationResult[Any]:
        with api_call_scope() as request_id:
            return await self._send(method, path, request_id, body, exclude_unset)

    async def _send(
        self,
        method: str,
        path: str,
        request_id: str,
        body: Optional[BaseModel],
        exclude_unset: bool,
    ) -> OperationResult[Any]:
        logger = get_logger()

        payload = None
        if body is not None:
            payload = body.model_dump(
                mode="json", by_alias=True, exclude_unset=exclude_unset
            )

        logger.debug(f"{method} {path}")
        try:
            response = await self._client.request(
                method, path, json=payload, headers={REQUEST_ID_HEADER: request_id}
            )
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed before a response arrived: {e}")
            return OperationResult.fail(
                NetworkError(f"Could not reach the server ({type(e).__name__})")
            )

        if response.is_success:
            if response.status_code == 204 or not response.content:
                return OperationResult.ok(None)
            try:
                return OperationResult.ok(response.json())
            except ValueError:
                logger.error(f"{method} {path} returned a non-JSON body")
                return OperationResult.fail(
                    ApiRequestError("Malformed response body", response.status_code)
                )

        error = self._error_from_response(response)
        logger.error(f"{method} {path} -> {response.status_code}: {error.message}")
        return OperationResult.fail(error)

    @staticmethod
    def _parse_error_body(
        response: httpx.Response,
    ) -> Tuple[Optional[str], List[Dict[str, Any]]]:
        """Pull a message and field errors out of an error body, if it is JSON."""
        try:
            body = response.json()
        except ValueError:
            return None, []
        if not isinstance(body, dict):
            return None, []

        message = body.get("message")
        if not isinstance(message, str):
            message = None
        errors = body.get("errors")
        errors = list(errors) if isinstance(errors, list) else []
        detail = body.get("detail")
        if isinstance(detail, str):
            message = message or detail
        elif isinstance(detail, list):
            # FastAPI style: [{"loc": ["body", "code"], "msg": "..."}]
            for item in detail:
                if not isinstance(item, dict):
                    continue
                loc = [str(part) for part in item.get("loc", []) if part != "body"]
                errors.append({"field": ".".join(loc), "message": item.get("msg")})
        return message, [e for e in errors if isinstance(e, dict)]

    def _error_from_response(self, response: httpx.Response) -> ApiRequestError:
        message, errors = self._parse_error_body(response)
        status_code = response.status_code
        if status_code == 401:
            return AuthenticationError(
                message or "Session expired. Please log in again.", errors
            )
        if status_code == 404:
            return NotFoundError(message or "Resource not found", errors)
        return ApiRequestError(
            message or f"Request failed with status {status_code}", status_code, errors
        )

    @staticmethod
    def _parse(result: OperationResult[Any], adapter: TypeAdapter) -> OperationResult:
        if not result.success:
            return result
        try:
            return OperationResult.ok(adapter.validate_python(result.data))
        except ValidationError as e:
            get_logger().error(f"Unexpected response shape: {e.errors()}")
            return OperationResult.fail(
                ApiRequestError("Unexpected response from server", 200)
            )

    async def _list(self, path: str, model: Type[M]) -> OperationResult[List[M]]:
        result = await self._call("GET", path)
        if result.success and result.data is None:
            return OperationResult.ok([])
        return self._parse(result, TypeAdapter(List[model]))

    async def _create(
        self, path: str, body: BaseModel, model: Type[M]
    ) -> OperationResult[M]:
        result = await self._call("POST", path, body)
        return self._parse(result, TypeAdapter(model))

    async def _update(
        self, path: str, body: BaseModel, model: Type[M]
    ) -> OperationResult[M]:
        result = await self._call("PUT", path, body, exclude_unset=True)
        return self._parse(result, TypeAdapter(model))

    async def _delete(self, path: str) -> OperationResult[None]:
        result = await self._call("DELETE", path)
        if not result.success:
            return result
        return OperationResult.ok(None)

    # Authentication

    async def login(self, credentials: LoginRequest) -> OperationResult[LoginResponse]:
        result = self._parse(
            await self._call("POST", "/auth/login", credentials),
            TypeAdapter(LoginResponse),
        )
        if result.success:
            login_response: LoginResponse = result.data
            user = user_from_token(login_response.token, credentials.username)
            self.auth.sign_in(login_response.token, user)
        return result

    def logout(self) -> None:
        self.auth.logout()

    @property
    def current_user(self) -> Optional[User]:
        return self.auth.user

    # Students

    async def list_students(self) -> OperationResult[List[Student]]:
        return await self._list("/students", Student)

    async def create_student(
        self, student: StudentCreateRequest
    ) -> OperationResult[Student]:
        return await self._create("/students", student, Student)

    async def update_student(
        self, student_id: int, student: StudentUpdateRequest
    ) -> OperationResult[Student]:
        return await self._update(f"/students/{student_id}", student, Student)

    async def delete_student(self, student_id: int) -> OperationResult[None]:
        return await self._delete(f"/students/{student_id}")

    # Courses

    async def list_courses(self) -> OperationResult[List[Course]]:
        return await self._list("/courses", Course)

    async def create_course(self, course: CourseCreateRequest) -> OperationResult[Course]:
        return await self._create("/courses", course, Course)

    async def update_course(
        self, course_id: int, course: CourseUpdateRequest
    ) -> OperationResult[Course]:
        return await self._update(f"/courses/{course_id}", course, Course)

    async def delete_course(self, course_id: int) -> OperationResult[None]:
        return await self._delete(f"/courses/{course_id}")

    # Registrations

    async def list_registrations(self) -> OperationResult[List[Registration]]:
        return await self._list("/registrations", Registration)

    async def create_registration(
        self, registration: RegistrationRequest
    ) -> OperationResult[Registration]:
        return await self._create("/registrations", registration, Registration)

    async def update_registration(
        self, registration_id: int, registration: RegistrationRequest
    ) -> OperationResult[Registration]:
        return await self._update(
            f"/registrations/{registration_id}", registration, Registration
        )

    async def delete_registration(self, registration_id: int) -> OperationResult[None]:
        return await self._delete(f"/registrations/{registration_id}")

    # Results

    async def list_results(self) -> OperationResult[List[Result]]:
        return await self._list("/results", Result)

    async def create_result(self, result: ResultRequest) -> OperationResult[Result]:
        return await self._create("/results", result, Result)

    async def update_result(
        self, result_id: int, result: ResultRequest
    ) -> OperationResult[Result]:
        return await self._update(f"/results/{result_id}", result, Result)

    async def delete_result(self, result_id: int) -> OperationResult[None]:
        return await self._delete(f"/results/{result_id}")

    # Dashboard

    async def get_dashboard_stats(self) -> OperationResult[DashboardStats]:
        """Aggregate counters from DASHBOARD_STATS_PATH, when the backend has one."""
        if not settings.DASHBOARD_STATS_PATH:
            return OperationResult.fail(
                NotFoundError("No dashboard aggregate endpoint is configured")
            )
        result = await self._call("GET", settings.DASHBOARD_STATS_PATH)
        return self._parse(result, TypeAdapter(DashboardStats))
