from __future__ import annotations


class AppError(Exception):
    """Base app error."""


class ConfigError(AppError):
    pass


class ApiError(AppError):
    """Any failure talking to the catalog & sales backend."""


class NetworkError(ApiError):
    pass


class HttpStatusError(ApiError):
    def __init__(self, status_code: int, detail: str | None, body_is_json: bool = True):
        self.status_code = status_code
        self.detail = detail
        self.body_is_json = body_is_json
        super().__init__(detail or f"HTTP {status_code}")


class MalformedResponseError(ApiError):
    pass
