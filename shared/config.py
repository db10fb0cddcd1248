"""
Environment-based configuration for the storefront checkout probe.

This module exposes a small, typed configuration surface shared by the
CLI, the HTTP API and the probe engine. All values are sourced from
environment variables with sensible, non-secret defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal, Optional

Environment = Literal["local", "dev", "staging", "prod"]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36"
)
DEFAULT_HTTP_TIMEOUT_SECONDS = 20.0


@dataclass(frozen=True)
class AppConfig:
    """
    Top-level application configuration.

    Logging settings are shared by every entry point; the http_* fields
    configure the per-probe HTTP session.
    """

    environment: Environment
    log_level: str

    # Optional file path for structured JSON logs; when set, logs are written
    # to file (and stdout if log_stdout).
    log_file: Optional[str]
    # When True, logs go to stdout. When False, only file (if LOG_FILE set). Default True.
    log_stdout: bool

    # Per-request timeout applied to every GET/POST of a probe.
    http_timeout_seconds: float
    user_agent: str
    # Storefronts routinely serve self-signed or expired certificates.
    verify_tls: bool

    @classmethod
    def from_env(cls) -> "AppConfig":
        """
        Construct configuration from environment variables.

        All fields have defaults suitable for local runs.
        """

        environment = os.getenv("APP_ENV", "local")

        if environment not in {"local", "dev", "staging", "prod"}:
            raise ValueError(f"Unsupported APP_ENV value: {environment!r}")

        def _bool_env(name: str, default: bool) -> bool:
            raw = (os.getenv(name) or str(default)).strip().lower()
            return raw in ("true", "1", "yes")

        def _http_timeout_seconds() -> float:
            raw = os.getenv("PROBE_HTTP_TIMEOUT_SECONDS", str(DEFAULT_HTTP_TIMEOUT_SECONDS)).strip()
            try:
                seconds = float(raw)
            except ValueError:
                return DEFAULT_HTTP_TIMEOUT_SECONDS
            return max(1.0, min(120.0, seconds))

        return cls(
            environment=environment,  # type: ignore[arg-type]
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE") or None,
            log_stdout=_bool_env("LOG_STDOUT", True),
            http_timeout_seconds=_http_timeout_seconds(),
            user_agent=os.getenv("PROBE_USER_AGENT") or DEFAULT_USER_AGENT,
            verify_tls=_bool_env("PROBE_VERIFY_TLS", False),
        )


def get_config() -> AppConfig:
    """
    Helper to obtain the current configuration.

    Entry points call this once at startup and pass the result down
    explicitly.
    """

    return AppConfig.from_env()
