"""
User-safe error summaries for probe results and API errors.

Only these strings ever reach a client; raw exception content stays in the
logs.
"""

from __future__ import annotations

# Home page unreachable; the one fatal probe outcome.
BAD_SITE = "Bad site"
# Unexpected exception escaping a probe (API surfaces this as a 500).
PROBE_FAILED = "Probe failed"
