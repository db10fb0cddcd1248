"""
Probe orchestrator: home page -> catalog fallback -> add-to-cart -> checkout.

Strictly sequential; each stage consumes the previous stage's document or
product id. Only an unreachable home page is fatal (error-shaped result);
every other failure degrades to an absent signal.

Logs: probe.started, probe.home_fetch_failed, probe.captcha_checked,
probe.product_ids_found, probe.fallback_page_checked, probe.product_ids_not_found,
probe.add_to_cart_fallback, probe.add_to_cart_failed, probe.checkout_fetch_failed,
probe.payment_methods_found, probe.completed.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Mapping, Optional, Protocol
from uuid import uuid4

from prober.document import ParsedDocument, parse_html
from prober.error_summary import BAD_SITE
from prober.extract import (
    CATALOG_CANDIDATE_PATHS,
    extract_payment_methods,
    extract_product_ids,
    find_captcha_indicator,
)
from prober.extract.constants import AJAX_ADD_TO_CART_PATH, CART_RESPONSE_MARKER, CHECKOUT_PATH
from prober.http_session import ProbeSession
from prober.models import ProbeResult, ProbeTarget
from shared.config import AppConfig
from shared.logging import bind_request_context, clear_request_context, get_logger

logger = get_logger(__name__)

_CONTEXT_KEYS = ("probe_id", "target_url", "domain", "stage")


class HttpSession(Protocol):
    """What the orchestrator needs from a session: body text or None."""

    def get(self, url: str) -> Optional[str]: ...

    def post(self, url: str, fields: Mapping[str, str]) -> Optional[str]: ...


class ProbeStage(str, Enum):
    FETCH_HOME = "fetch_home"
    DETECT_CAPTCHA_HOME = "detect_captcha_home"
    EXTRACT_PRODUCT_ID = "extract_product_id"
    FALLBACK_CRAWL = "fallback_crawl"
    ADD_TO_CART = "add_to_cart"
    FETCH_CHECKOUT = "fetch_checkout"
    DETECT_CAPTCHA_CHECKOUT = "detect_captcha_checkout"
    EXTRACT_PAYMENT_METHODS = "extract_payment_methods"
    DONE = "done"
    FAILED = "failed"


def _enter(stage: ProbeStage) -> None:
    bind_request_context(stage=stage.value)


def _check_captcha(document: ParsedDocument, page: str) -> bool:
    indicator = find_captcha_indicator(document)
    logger.info("probe.captcha_checked", page=page, detected=indicator is not None, indicator=indicator)
    return indicator is not None


def crawl_catalog_pages(
    session: HttpSession,
    target: ProbeTarget,
    paths: tuple[str, ...] = CATALOG_CANDIDATE_PATHS,
) -> list[str]:
    """
    Fetch candidate catalog pages in order; return ids from the first page that has any.

    A failed fetch counts as a page without ids. Pages after the first hit
    are not fetched. Empty list when every candidate is exhausted.
    """
    for index, path in enumerate(paths, start=1):
        page_url = target.origin_url(path)
        body = session.get(page_url)
        product_ids = extract_product_ids(parse_html(body)) if body is not None else []
        logger.info(
            "probe.fallback_page_checked",
            candidate_index=index,
            url=page_url,
            fetched=body is not None,
            product_ids=product_ids,
        )
        if product_ids:
            return product_ids
    return []


def add_product_to_cart(session: HttpSession, target: ProbeTarget, product_id: str) -> Optional[str]:
    """
    Best-effort add-to-cart; return the last response body, or None.

    Tries the AJAX endpoint on the origin first. If that fails or its body
    does not mention "cart", posts the classic add-to-cart form against the
    input URL instead.
    """
    ajax_url = target.origin_url(AJAX_ADD_TO_CART_PATH)
    response = session.post(ajax_url, {"product_id": product_id, "quantity": "1"})
    if response is not None and CART_RESPONSE_MARKER in response:
        return response

    logger.info(
        "probe.add_to_cart_fallback",
        product_id=product_id,
        ajax_failed=response is None,
    )
    form_url = f"{target.normalized_base}/?add-to-cart={product_id}"
    response = session.post(form_url, {"add-to-cart": product_id})
    if response is None:
        logger.warning("probe.add_to_cart_failed", product_id=product_id)
    return response


def run_probe(
    url: str,
    *,
    session: Optional[HttpSession] = None,
    config: Optional[AppConfig] = None,
) -> ProbeResult:
    """
    Run one full probe against url and return its result.

    When no session is passed, a ProbeSession is built from config (or
    defaults) and closed at the end. Raises ValueError only for a URL that
    is not absolute http(s); all network outcomes are reflected in the result.
    """
    target = ProbeTarget.from_url(url)
    owned: Optional[ProbeSession] = None
    if session is None:
        owned = ProbeSession.from_config(config) if config is not None else ProbeSession()
        session = owned

    bind_request_context(probe_id=uuid4().hex, target_url=target.url, domain=target.domain)
    t0 = time.monotonic()
    try:
        result = _run_stages(session, target)
        logger.info(
            "probe.completed",
            elapsed_ms=int((time.monotonic() - t0) * 1000),
            **result.to_dict(),
        )
        return result
    finally:
        if owned is not None:
            owned.close()
        clear_request_context(*_CONTEXT_KEYS)


def _run_stages(session: HttpSession, target: ProbeTarget) -> ProbeResult:
    _enter(ProbeStage.FETCH_HOME)
    logger.info("probe.started", origin=target.origin)
    home_body = session.get(target.url)
    if home_body is None:
        _enter(ProbeStage.FAILED)
        logger.warning("probe.home_fetch_failed")
        return ProbeResult.failed(BAD_SITE)

    result = ProbeResult()
    home = parse_html(home_body)

    _enter(ProbeStage.DETECT_CAPTCHA_HOME)
    result.captcha_detected = _check_captcha(home, page="home")

    _enter(ProbeStage.EXTRACT_PRODUCT_ID)
    result.product_ids = extract_product_ids(home)

    if not result.product_ids:
        _enter(ProbeStage.FALLBACK_CRAWL)
        result.product_ids = crawl_catalog_pages(session, target)

    if not result.product_ids:
        logger.info("probe.product_ids_not_found")
        _enter(ProbeStage.DONE)
        return result
    logger.info("probe.product_ids_found", product_ids=result.product_ids)

    _enter(ProbeStage.ADD_TO_CART)
    if add_product_to_cart(session, target, result.product_ids[0]) is None:
        _enter(ProbeStage.DONE)
        return result

    _enter(ProbeStage.FETCH_CHECKOUT)
    checkout_body = session.get(target.origin_url(CHECKOUT_PATH))
    if checkout_body is None:
        logger.info("probe.checkout_fetch_failed")
        _enter(ProbeStage.DONE)
        return result
    checkout = parse_html(checkout_body)

    _enter(ProbeStage.DETECT_CAPTCHA_CHECKOUT)
    result.captcha_detected = _check_captcha(checkout, page="checkout")

    _enter(ProbeStage.EXTRACT_PAYMENT_METHODS)
    result.payment_methods = extract_payment_methods(checkout)
    logger.info("probe.payment_methods_found", payment_methods=result.payment_methods)

    _enter(ProbeStage.DONE)
    return result
