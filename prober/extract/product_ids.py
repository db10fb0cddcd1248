"""
Product id extraction: ordered cascade of add-to-cart heuristics.

Precision over completeness: the first identifier any heuristic produces is
trusted and ends the scan, so ids from related-products widgets further down
the page are never picked up.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable, Iterator, Optional

from prober.document import ParsedDocument, node_value, query
from prober.extract.constants import (
    ADD_TO_CART_ANCHOR_QUERY,
    ADD_TO_CART_FORM_QUERY,
    ADD_TO_CART_ID_PATTERN,
    ADD_TO_CART_INPUT_QUERY,
    LD_JSON_SCRIPT_QUERY,
    PRODUCT_DATA_ATTRIBUTE_QUERY,
)
from shared.logging import get_logger

logger = get_logger(__name__)

IdReader = Callable[[str], Optional[str]]


def id_from_add_to_cart_url(value: str) -> Optional[str]:
    """Return the numeric id in an `add-to-cart=<digits>` URL, else None."""
    match = ADD_TO_CART_ID_PATTERN.search(value)
    return match.group(1) if match else None


def id_from_attribute(value: str) -> Optional[str]:
    """Return the trimmed attribute value, or None when blank."""
    value = value.strip()
    return value or None


def _is_product_node(node: dict) -> bool:
    node_type = node.get("@type")
    if isinstance(node_type, list):
        return "Product" in node_type
    return node_type == "Product"


def _iter_ldjson_nodes(data: Any) -> Iterator[dict]:
    """Yield top-level objects of a JSON-LD payload, including @graph members."""
    items = data if isinstance(data, list) else [data]
    for item in items:
        if not isinstance(item, dict):
            continue
        yield item
        graph = item.get("@graph")
        if isinstance(graph, list):
            for member in graph:
                if isinstance(member, dict):
                    yield member


def sku_from_ldjson(content: str) -> Optional[str]:
    """
    Return the sku of the first Product object in a JSON-LD block.

    Blocks that do not decode are skipped (None), as are Product objects
    without a usable sku.
    """
    try:
        data = json.loads(content.strip())
    except (json.JSONDecodeError, TypeError):
        logger.debug("product_ids.ldjson_decode_failed", size=len(content))
        return None
    for node in _iter_ldjson_nodes(data):
        if not _is_product_node(node) or "sku" not in node:
            continue
        sku = node["sku"]
        if isinstance(sku, (str, int)) and not isinstance(sku, bool):
            sku = str(sku).strip()
            if sku:
                return sku
    return None


# (query, reader) pairs in priority order.
PRODUCT_ID_CASCADE: tuple[tuple[str, IdReader], ...] = (
    (ADD_TO_CART_ANCHOR_QUERY, id_from_add_to_cart_url),
    (ADD_TO_CART_INPUT_QUERY, id_from_attribute),
    (PRODUCT_DATA_ATTRIBUTE_QUERY, id_from_attribute),
    (ADD_TO_CART_FORM_QUERY, id_from_add_to_cart_url),
    (LD_JSON_SCRIPT_QUERY, sku_from_ldjson),
)


def iter_product_ids(
    document: ParsedDocument,
    cascade: Iterable[tuple[str, IdReader]] = PRODUCT_ID_CASCADE,
) -> Iterator[str]:
    """Lazily yield candidate ids in cascade order, then document order."""
    for expression, reader in cascade:
        for node in query(document, expression):
            product_id = reader(node_value(node))
            if product_id:
                yield product_id


def extract_product_ids(document: ParsedDocument) -> list[str]:
    """
    Return the product ids found by the first heuristic that yields one.

    Stops at the first identifier; remaining matches and lower-priority
    heuristics are not evaluated. Empty list when nothing matches.
    """
    for product_id in iter_product_ids(document):
        return [product_id]
    return []
