"""
CAPTCHA detection: structural markers for reCAPTCHA, hCaptcha, Turnstile,
PerimeterX and generic captcha widgets.

Pure existence test over a parsed document; no network, no DOM mutation.
"""

from __future__ import annotations

from typing import Iterable, Optional

from prober.document import ParsedDocument, query
from prober.extract.constants import CAPTCHA_INDICATOR_QUERIES


def find_captcha_indicator(
    document: ParsedDocument,
    indicators: Iterable[str] = CAPTCHA_INDICATOR_QUERIES,
) -> Optional[str]:
    """Return the first indicator query that matches, or None (for logging)."""
    for indicator in indicators:
        if query(document, indicator):
            return indicator
    return None


def detect_captcha(document: ParsedDocument) -> bool:
    """Return True if any CAPTCHA indicator is present in the document."""
    return find_captcha_indicator(document) is not None
