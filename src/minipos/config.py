from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping
from urllib.parse import urlparse
import os
import sys

from minipos.domain.errors import ConfigError

DEFAULT_BACKEND_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class AppPaths:
    base_dir: Path
    logs_dir: Path
    exports_dir: Path


@dataclass(frozen=True)
class Settings:
    backend_url: str
    request_timeout: float = DEFAULT_TIMEOUT


def _windows_appdata() -> Path:
    return Path(os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming")))


def _mac_app_support() -> Path:
    return Path.home() / "Library" / "Application Support"


def get_app_paths(app_name: str = "MiniMarketPOS") -> AppPaths:
    if sys.platform.startswith("win"):
        base = _windows_appdata() / app_name
    elif sys.platform == "darwin":
        base = _mac_app_support() / app_name
    else:
        base = Path.home() / f".{app_name.lower()}"

    logs = base / "logs"
    exports = base / "exports"

    base.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)
    exports.mkdir(parents=True, exist_ok=True)

    return AppPaths(base_dir=base, logs_dir=logs, exports_dir=exports)


def _backend_url(env: Mapping[str, str]) -> str:
    raw = (env.get("MINIPOS_BACKEND_URL") or env.get("BACKEND_URL") or DEFAULT_BACKEND_URL).strip()
    parsed = urlparse(raw)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"Backend URL must be an http(s) origin. Received: {raw!r}")
    return raw.rstrip("/")


def _timeout(env: Mapping[str, str]) -> float:
    raw = (env.get("MINIPOS_REQUEST_TIMEOUT") or "").strip()
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"Request timeout must be a number. Received: {raw!r}")
    if value <= 0:
        raise ConfigError(f"Request timeout must be > 0. Received: {value}")
    return value


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    env = os.environ if env is None else env
    return Settings(backend_url=_backend_url(env), request_timeout=_timeout(env))
