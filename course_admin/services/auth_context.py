import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import jwt
from pydantic import ValidationError

from course_admin.config.settings import settings
from course_admin.schemas.auth_schemas import User
from course_admin.utils.logging import get_logger

logger = get_logger()

TOKEN_KEY = "token"
USER_KEY = "user"


class TokenStore:
    """Persistent local storage for the bearer token and the signed-in user."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or settings.AUTH_STORAGE_PATH)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable auth storage {self.path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f)

    def get_token(self) -> Optional[str]:
        return self._read().get(TOKEN_KEY)

    def get_user(self) -> Optional[User]:
        raw_user = self._read().get(USER_KEY)
        if not raw_user:
            return None
        try:
            return User.model_validate(raw_user)
        except ValidationError as e:
            logger.warning(f"Ignoring malformed stored user: {e.error_count()} field error(s)")
            return None

    def save(self, token: str, user: Optional[User]) -> None:
        data: Dict[str, Any] = {TOKEN_KEY: token}
        if user is not None:
            data[USER_KEY] = user.model_dump(by_alias=True)
        self._write(data)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()


class InMemoryTokenStore(TokenStore):
    """Token store that lives only as long as the process."""

    def __init__(self, token: Optional[str] = None, user: Optional[User] = None):
        self._data: Dict[str, Any] = {}
        if token:
            self.save(token, user)

    def _read(self) -> Dict[str, Any]:
        return dict(self._data)

    def _write(self, data: Dict[str, Any]) -> None:
        self._data = dict(data)

    def clear(self) -> None:
        self._data = {}


def user_from_token(token: str, fallback_username: str = "") -> User:
    """
    Build the user record from the token's claims.

    The signature is not checked here; the backend verifies it on every call.
    Opaque (non-JWT) tokens fall back to the username that was used to log in.
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError:
        return User(username=fallback_username)

    username = claims.get("username") or claims.get("sub") or fallback_username
    role = claims.get("role") or claims.get("user_type") or ""
    user_id = claims.get("id") or claims.get("user_id")
    try:
        user_id = int(user_id) if user_id is not None else None
    except (TypeError, ValueError):
        user_id = None
    return User(id=user_id, username=str(username), role=str(role))


class AuthContext:
    """
    Authentication state shared by the API client and the application shell.

    Logging out clears the stored token and user and then calls `on_logout`
    with the login path; navigation itself belongs to whoever passed the
    callback in.
    """

    def __init__(
        self,
        store: Optional[TokenStore] = None,
        on_logout: Optional[Callable[[str], None]] = None,
        login_path: Optional[str] = None,
    ):
        self.store = store if store is not None else TokenStore()
        self.on_logout = on_logout
        self.login_path = login_path or settings.LOGIN_PATH

    @property
    def token(self) -> Optional[str]:
        return self.store.get_token()

    @property
    def user(self) -> Optional[User]:
        return self.store.get_user()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def sign_in(self, token: str, user: Optional[User] = None) -> None:
        self.store.save(token, user)
        logger.info(f"Signed in as {user.username if user else 'unknown user'}")

    def logout(self) -> None:
        self.store.clear()
        logger.info("Cleared stored credentials")
        if self.on_logout is not None:
            self.on_logout(self.login_path)
