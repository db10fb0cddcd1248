"""
Probe data model: the target being probed and the result record.

Both are created and discarded within one probe run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urlparse


@dataclass(frozen=True)
class ProbeTarget:
    """
    The URL being probed plus the two bases derived from it.

    origin: scheme://host[:port], used for catalog, AJAX cart and checkout URLs.
    normalized_base: the input URL without trailing slashes, used for the
    form-style add-to-cart fallback.
    """

    url: str
    origin: str
    normalized_base: str

    @classmethod
    def from_url(cls, url: str) -> "ProbeTarget":
        """Build a target from an absolute http(s) URL; ValueError otherwise."""
        url = (url or "").strip()
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError(f"Not an absolute http(s) URL: {url!r}")
        return cls(
            url=url,
            origin=f"{parsed.scheme}://{parsed.netloc}",
            normalized_base=url.rstrip("/"),
        )

    @property
    def domain(self) -> str:
        return urlparse(self.origin).netloc.lower()

    def origin_url(self, path: str) -> str:
        """Join an absolute path (leading slash) onto the origin."""
        return f"{self.origin}{path}"


@dataclass
class ProbeResult:
    """
    Accumulated signals of one probe.

    payment_methods stays None until the checkout page has been fetched;
    error is set only when the home page was unreachable.
    """

    captcha_detected: bool = False
    product_ids: list[str] = field(default_factory=list)
    payment_methods: Optional[list[str]] = None
    error: Optional[str] = None

    @classmethod
    def failed(cls, summary: str) -> "ProbeResult":
        return cls(error=summary)

    @property
    def checkout_reached(self) -> bool:
        return self.payment_methods is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the output record (captcha / productid / paymentmethod)."""
        if self.error is not None:
            return {"error": self.error}
        out: dict[str, Any] = {
            "captcha": "yes" if self.captcha_detected else "no",
            "productid": list(self.product_ids),
        }
        if self.payment_methods is not None:
            out["paymentmethod"] = list(self.payment_methods)
        return out
