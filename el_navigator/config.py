from __future__ import annotations

from pathlib import PurePath

from dotenv import load_dotenv
from pydantic import ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import constants as cs
from . import exceptions as ex

load_dotenv()


def _source_root_error(value: str) -> str | None:
    stripped = value.strip()
    if stripped and PurePath(stripped).is_absolute():
        return ex.SOURCE_ROOT_ABSOLUTE.format(value=value)
    return None


class AppConfig(BaseSettings):
    """
    (H) Loaded from EL_NAVIGATOR_* environment variables or a .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="EL_NAVIGATOR_",
        case_sensitive=False,
        extra="ignore",
    )

    SOURCE_ROOT_RELATIVE: str = cs.DEFAULT_SOURCE_ROOT_RELATIVE
    INDEX_CACHE_TTL_MS: int = cs.DEFAULT_INDEX_CACHE_TTL_MS
    COMPLETION_ENABLED: bool = True
    HOVER_ENABLED: bool = True
    WATCH_DEBOUNCE_SECONDS: float = cs.DEFAULT_DEBOUNCE_SECONDS
    WATCH_MAX_WAIT_SECONDS: float = cs.DEFAULT_MAX_WAIT_SECONDS

    @field_validator("INDEX_CACHE_TTL_MS")
    @classmethod
    def _check_ttl(cls, value: int) -> int:
        if value < 0:
            raise ValueError(ex.TTL_NON_NEGATIVE.format(value=value))
        return value

    @field_validator("WATCH_DEBOUNCE_SECONDS", "WATCH_MAX_WAIT_SECONDS")
    @classmethod
    def _check_watch_timing(cls, value: float, info: ValidationInfo) -> float:
        if value < 0:
            raise ValueError(
                ex.WATCH_NON_NEGATIVE.format(field=info.field_name, value=value)
            )
        return value

    @field_validator("SOURCE_ROOT_RELATIVE")
    @classmethod
    def _check_source_root(cls, value: str) -> str:
        if error := _source_root_error(value):
            raise ValueError(error)
        return value

    @property
    def index_cache_ttl_seconds(self) -> float:
        return self.INDEX_CACHE_TTL_MS / cs.MS_PER_SECOND

    def with_overrides(
        self,
        source_root: str | None = None,
        ttl_ms: int | None = None,
    ) -> AppConfig:
        updates: dict[str, str | int] = {}
        if source_root is not None:
            if error := _source_root_error(source_root):
                raise ex.ConfigurationError(error)
            updates["SOURCE_ROOT_RELATIVE"] = source_root
        if ttl_ms is not None:
            if ttl_ms < 0:
                raise ex.ConfigurationError(ex.TTL_NON_NEGATIVE.format(value=ttl_ms))
            updates["INDEX_CACHE_TTL_MS"] = ttl_ms
        return self.model_copy(update=updates)


settings = AppConfig()
