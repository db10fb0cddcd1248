"""
Signal extractors over parsed storefront HTML.

Public API: re-exports the extractors and cascades so that
`from prober.extract import ...` is the single import point for the
orchestrator and tests.
"""

from __future__ import annotations

from prober.extract.captcha import detect_captcha, find_captcha_indicator
from prober.extract.constants import (
    CAPTCHA_INDICATOR_QUERIES,
    CATALOG_CANDIDATE_PATHS,
    PAYMENT_METHOD_QUERIES,
    PAYMENT_METHOD_SENTINELS,
)
from prober.extract.payment_methods import extract_payment_methods
from prober.extract.product_ids import (
    PRODUCT_ID_CASCADE,
    extract_product_ids,
    id_from_add_to_cart_url,
    id_from_attribute,
    iter_product_ids,
    sku_from_ldjson,
)

__all__ = [
    # constants
    "CAPTCHA_INDICATOR_QUERIES",
    "CATALOG_CANDIDATE_PATHS",
    "PAYMENT_METHOD_QUERIES",
    "PAYMENT_METHOD_SENTINELS",
    "PRODUCT_ID_CASCADE",
    # product ids
    "extract_product_ids",
    "iter_product_ids",
    "id_from_add_to_cart_url",
    "id_from_attribute",
    "sku_from_ldjson",
    # payment methods
    "extract_payment_methods",
    # captcha
    "detect_captcha",
    "find_captcha_indicator",
]
