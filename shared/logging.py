"""
Structured logging setup for the storefront checkout probe.

All runtime logging goes through structlog, rendered as JSON on top of
the standard logging handlers. The CLI and the HTTP API both call
configure_logging() once at startup; library code only calls get_logger().

Per-probe context (probe_id, target_url, domain, stage) is bound through
contextvars so every event emitted during a probe carries it.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Mapping, Optional

import structlog


def _build_shared_processors() -> list[structlog.types.Processor]:
    """Processor chain shared by every entry point."""

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)

    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        timestamper,
        structlog.processors.EventRenamer("message"),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def _make_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_stdout: bool = True,
    stream: Any = None,
) -> None:
    """
    Configure structlog and the standard logging module.

    - When log_stdout is True (default), a StreamHandler is added. It writes to
      `stream` when given (the CLI passes sys.stderr so stdout stays clean for
      the JSON result), else to sys.stdout.
    - When log_file is set, a FileHandler is added (parent dir created if needed).
    - At least one handler is always added.
    """

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    if log_stdout:
        root.addHandler(_make_handler(logging.StreamHandler(stream or sys.stdout), level))

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        root.addHandler(_make_handler(logging.FileHandler(log_file, encoding="utf-8"), level))

    if not root.handlers:
        # LOG_STDOUT=false and LOG_FILE unset
        root.addHandler(_make_handler(logging.StreamHandler(stream or sys.stdout), level))

    # Quiet urllib3's per-connection chatter; failures are logged by the session.
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=_build_shared_processors(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Obtain a structured logger.

    Usage:
        from shared.logging import get_logger, bind_request_context

        logger = get_logger(__name__)
        bind_request_context(probe_id="...", target_url="https://shop.example/")
        logger.info("probe.started")
    """

    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(name) if name else structlog.get_logger()


def bind_request_context(
    *,
    probe_id: Optional[str] = None,
    target_url: Optional[str] = None,
    domain: Optional[str] = None,
    stage: Optional[str] = None,
    **extra: Any,
) -> Mapping[str, Any]:
    """
    Bind common probe context fields for logging.

    Keys with None values are dropped. Additional keyword arguments are
    also bound into the logging context.
    """

    context: dict[str, Any] = {
        "probe_id": probe_id,
        "target_url": target_url,
        "domain": domain,
        "stage": stage,
        **extra,
    }

    filtered_context = {k: v for k, v in context.items() if v is not None}

    structlog.contextvars.bind_contextvars(**filtered_context)
    return filtered_context


def clear_request_context(*keys: str) -> None:
    """Unbind the given context keys, or all bound context when none given."""

    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()
