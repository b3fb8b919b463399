"""Load pipeline and store configuration from env and config/settings.yaml."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from brewai.errors import ConfigError
from brewai.log import get_logger

log = get_logger(__name__)

load_dotenv()

CONFIG_DIR: Path = Path(__file__).resolve().parent.parent / "config"
SETTINGS_PATH: Path = CONFIG_DIR / "settings.yaml"

DEFAULT_BASE_URL = "https://api.gumloop.com/api/v1"
DEFAULT_MAX_ATTEMPTS = 30
DEFAULT_DELAY_MS = 2000
DEFAULT_REQUEST_TIMEOUT = 30.0


@dataclass(frozen=True)
class PipelineSettings:
    api_key: str
    user_id: str
    saved_item_id: str
    base_url: str = DEFAULT_BASE_URL
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    delay_ms: int = DEFAULT_DELAY_MS
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    retry_poll_errors: bool = False

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


@dataclass(frozen=True)
class StoreSettings:
    url: str
    key: str


def get_env(key: str, default: str = "") -> str:
    return os.environ.get(key, default).strip()


def load_settings_file(path: Path | None = None) -> dict[str, Any]:
    """Optional YAML overrides; a missing file means no overrides."""
    path = path or SETTINGS_PATH
    if not path.exists():
        return {}
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping, got {type(data).__name__}")
    return data


def _as_int(name: str, value: Any, minimum: int) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None
    if n < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {n}")
    return n


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def load_pipeline_settings(
    env_getter=get_env, settings_path: Path | None = None,
) -> PipelineSettings:
    """Build settings: defaults, then settings.yaml, then GUMLOOP_* env vars."""
    file_cfg = load_settings_file(settings_path)

    def pick(env_key: str, file_key: str, default: Any) -> Any:
        env_val = env_getter(env_key)
        if env_val:
            return env_val
        return file_cfg.get(file_key, default)

    api_key = env_getter("GUMLOOP_API_KEY")
    user_id = env_getter("GUMLOOP_USER_ID")
    saved_item_id = env_getter("GUMLOOP_SAVED_ITEM_ID")
    if api_key and not (user_id and saved_item_id):
        log.warning("GUMLOOP_API_KEY is set but GUMLOOP_USER_ID / GUMLOOP_SAVED_ITEM_ID are missing")

    try:
        timeout = float(pick("GUMLOOP_REQUEST_TIMEOUT", "request_timeout", DEFAULT_REQUEST_TIMEOUT))
    except (TypeError, ValueError):
        raise ConfigError("request_timeout must be a number") from None

    return PipelineSettings(
        api_key=api_key,
        user_id=user_id,
        saved_item_id=saved_item_id,
        base_url=str(pick("GUMLOOP_BASE_URL", "base_url", DEFAULT_BASE_URL)).rstrip("/"),
        max_attempts=_as_int(
            "max_attempts", pick("GUMLOOP_MAX_ATTEMPTS", "max_attempts", DEFAULT_MAX_ATTEMPTS), 1,
        ),
        delay_ms=_as_int("delay_ms", pick("GUMLOOP_DELAY_MS", "delay_ms", DEFAULT_DELAY_MS), 0),
        request_timeout=timeout,
        retry_poll_errors=_as_bool(pick("GUMLOOP_RETRY_POLL_ERRORS", "retry_poll_errors", False)),
    )


def load_store_settings(env_getter=get_env) -> StoreSettings:
    url = env_getter("SUPABASE_URL")
    key = env_getter("SUPABASE_KEY") or env_getter("SUPABASE_ANON_KEY")
    if not url or not key:
        raise ConfigError("SUPABASE_URL and SUPABASE_KEY must be set")
    return StoreSettings(url=url.rstrip("/"), key=key)
