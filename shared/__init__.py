"""
Shared utilities for the storefront checkout probe.

This package is intentionally small and focused. It provides:

- `shared.config` for environment-based configuration
- `shared.logging` for structlog-based structured logging

The CLI, the HTTP API and the probe engine treat `shared/` as read-only
infrastructure code.
"""
