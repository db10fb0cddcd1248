"""
Payment method extraction from a checkout page.

Every query in PAYMENT_METHOD_QUERIES is evaluated (aggregate, not
short-circuit): themes and checkout plugins render the same radio group
under different containers, so recall matters more than precision here.
"""

from __future__ import annotations

from typing import Iterable

from prober.document import ParsedDocument, node_value, query
from prober.extract.constants import PAYMENT_METHOD_QUERIES, PAYMENT_METHOD_SENTINELS


def extract_payment_methods(
    document: ParsedDocument,
    queries: Iterable[str] = PAYMENT_METHOD_QUERIES,
) -> list[str]:
    """
    Return distinct payment method values in first-seen order.

    Values are trimmed; blanks and the saved-card sentinels ("new",
    "true") are dropped.
    """
    seen: set[str] = set()
    methods: list[str] = []
    for expression in queries:
        for node in query(document, expression):
            value = node_value(node).strip()
            if not value or value in PAYMENT_METHOD_SENTINELS or value in seen:
                continue
            seen.add(value)
            methods.append(value)
    return methods
