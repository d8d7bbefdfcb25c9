"""yorin.core.config

Three config surfaces only:
1) Explicit keyword arguments (constructor / facade)
2) Environment variables (`YORIN_*`)
3) An optional YAML file

Everything else is derived. The delivery core never reads settings directly;
it receives a frozen :class:`DeliveryConfig`.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from yorin import DEFAULT_API_URL
from yorin.core.exceptions import ConfigError
from yorin.core.validation import validate_api_url, validate_secret_key

MISSING_SECRET_KEY = "Yorin secret key is required. Pass it in config or set YORIN_SECRET_KEY environment variable."
INVALID_SECRET_KEY = 'Invalid secret key format. Secret keys should start with "sk_".'
INVALID_API_URL = "Invalid API URL format."

_BLANK_IS_UNSET = frozenset({"secret_key", "api_url"})


@dataclass(frozen=True, slots=True)
class DeliveryConfig:
    """Process-lifetime delivery tunables. Constructed once, never mutated."""

    api_url: str
    secret_key: str
    batch_size: int = 100
    flush_interval_ms: int = 5000
    enable_batching: bool = True
    retry_attempts: int = 3
    retry_delay_ms: int = 1000
    timeout_s: float = 20.0


class LoggingConfig(BaseModel):
    level: str = "WARNING"
    json_output: bool = False

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {v}")
        return v


class Settings(BaseSettings):
    """Root configuration. Single source of truth."""

    secret_key: str = ""
    api_url: str = DEFAULT_API_URL
    debug: bool = False

    batch_size: int = Field(default=100, ge=1)
    flush_interval_ms: int = Field(default=5000, ge=0)
    enable_batching: bool = True
    retry_attempts: int = Field(default=3, ge=0)
    retry_delay_ms: int = Field(default=1000, ge=0)
    timeout_s: float = Field(default=20.0, gt=0)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="YORIN_",
        env_nested_delimiter="__",
        validate_default=True,
        frozen=True,
    )

    @field_validator("secret_key")
    @classmethod
    def secret_key_must_be_valid(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError(MISSING_SECRET_KEY)
        if not validate_secret_key(v):
            raise ValueError(INVALID_SECRET_KEY)
        return v

    @field_validator("api_url")
    @classmethod
    def api_url_must_be_absolute(cls, v: str) -> str:
        v = v.strip()
        if not validate_api_url(v):
            raise ValueError(INVALID_API_URL)
        return v.rstrip("/")

    @classmethod
    def load(cls, **overrides: Any) -> Settings:
        """Build settings, turning validation failures into :class:`ConfigError`.

        ``None`` overrides are ignored so callers can forward optional arguments
        untouched and let the environment fill the gaps. An empty ``secret_key``
        or ``api_url`` counts as unset.
        """

        try:
            return cls(**_given(overrides))
        except ValidationError as e:
            raise ConfigError(_first_error_message(e)) from e

    @classmethod
    def from_yaml(cls, path: Path, **overrides: Any) -> Settings:
        """Load settings from a YAML mapping; explicit overrides win, then env, then file."""

        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")

        try:
            raw = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Config file is not valid YAML: {path}") from e
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}")

        # init kwargs outrank env in pydantic-settings; drop file keys the env already sets
        env_keys = {name for name in cls.model_fields if f"YORIN_{name.upper()}" in _environ()}
        file_values = {k: v for k, v in raw.items() if k not in env_keys}
        file_values.update(_given(overrides))
        return cls.load(**file_values)

    def delivery(self) -> DeliveryConfig:
        return DeliveryConfig(
            api_url=self.api_url,
            secret_key=self.secret_key,
            batch_size=self.batch_size,
            flush_interval_ms=self.flush_interval_ms,
            enable_batching=self.enable_batching,
            retry_attempts=self.retry_attempts,
            retry_delay_ms=self.retry_delay_ms,
            timeout_s=self.timeout_s,
        )


def _given(overrides: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in overrides.items() if v is not None and not (k in _BLANK_IS_UNSET and v == "")}


def _environ() -> dict[str, str]:
    return {k.upper(): v for k, v in os.environ.items()}


def _first_error_message(e: ValidationError) -> str:
    errors = e.errors()
    if not errors:
        return str(e)
    first = errors[0]
    cause = (first.get("ctx") or {}).get("error")
    if isinstance(cause, ValueError):
        return str(cause)
    loc = ".".join(str(p) for p in first.get("loc", ()))
    return f"{loc}: {first.get('msg', 'invalid value')}" if loc else str(first.get("msg"))
