import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

# Id of the API call in flight; log lines outside a call use "app"
request_id_context: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    return request_id_context.get()


@contextmanager
def api_call_scope() -> Iterator[str]:
    """Bind a fresh request id for the duration of one API call."""
    request_id = str(uuid.uuid4())
    token = request_id_context.set(request_id)
    try:
        yield request_id
    finally:
        request_id_context.reset(token)
