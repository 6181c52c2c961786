from __future__ import annotations

import logging
from typing import Callable, TypeVar

from minipos.domain.errors import HttpStatusError, MalformedResponseError, NetworkError
from minipos.domain.results import ApiResult, ErrorKind

T = TypeVar("T")

log = logging.getLogger(__name__)

# Body of a non-2xx response that is not JSON at all.
UNREADABLE_ERROR_MESSAGE = "Error"


def call_backend(fn: Callable[[], T], action: str, fallback: str) -> ApiResult[T]:
    """Run one backend call and fold its outcome into an ApiResult."""
    try:
        return ApiResult.success(fn())
    except NetworkError as e:
        return ApiResult.failure(ErrorKind.NETWORK, str(e))
    except HttpStatusError as e:
        if not e.body_is_json:
            message = UNREADABLE_ERROR_MESSAGE
        else:
            message = e.detail or fallback
        log.info("%s_rejected status=%s message=%s", action, e.status_code, message)
        return ApiResult.failure(ErrorKind.HTTP, message, status_code=e.status_code)
    except MalformedResponseError as e:
        return ApiResult.failure(ErrorKind.MALFORMED, str(e) or fallback)
