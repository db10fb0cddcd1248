"""
Tolerant HTML parsing and XPath querying on top of lxml.

Storefront markup is not under our control: unclosed tags, stray encoding
declarations and empty bodies are all routine. parse_html() never raises;
anything lxml refuses becomes an empty document, which simply matches no
query.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from lxml import etree, html

from shared.logging import get_logger

logger = get_logger(__name__)

ParsedDocument = html.HtmlElement

_EMPTY_MARKUP = b"<html><head></head><body></body></html>"


def _new_parser(encoding: Optional[str] = None) -> html.HTMLParser:
    # One parser per call; lxml parser objects are not meant to be shared
    # between threads running concurrent probes.
    return html.HTMLParser(recover=True, encoding=encoding)


def _empty_document() -> ParsedDocument:
    return html.document_fromstring(_EMPTY_MARKUP, parser=_new_parser("utf-8"))


def parse_html(markup: Union[str, bytes, None]) -> ParsedDocument:
    """
    Parse an HTML body into an lxml tree.

    str input is encoded to UTF-8 first, and the parser is told so, which
    lets documents carrying an XML encoding declaration through. bytes are
    handed to lxml as-is so a <meta charset> in the markup picks the
    encoding. Returns an empty document for empty or unparseable input.
    """
    if markup is None:
        return _empty_document()
    encoding = None
    data = markup
    if isinstance(markup, str):
        data = markup.encode("utf-8", errors="replace")
        encoding = "utf-8"
    if not data.strip():
        return _empty_document()
    try:
        return html.document_fromstring(data, parser=_new_parser(encoding))
    except (etree.ParserError, etree.XMLSyntaxError, ValueError) as e:
        logger.debug("document.parse_failed", error=str(e), size=len(data))
        return _empty_document()


def query(document: ParsedDocument, expression: str) -> list[Any]:
    """
    Evaluate an XPath expression and return matches in document order.

    Attribute and text() selections come back as strings, element
    selections as elements. Non-list results (count(), boolean()) are
    wrapped in a one-item list.
    """
    result = document.xpath(expression)
    if isinstance(result, list):
        return result
    return [result]


def node_value(node: Any) -> str:
    """Return the string value of a query match (attribute, text or element)."""
    if isinstance(node, html.HtmlElement):
        return node.text_content()
    return str(node)
