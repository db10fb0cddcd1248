"""
Tests for the check endpoint.

Covers: full record, record without checkout, Bad site, missing/invalid URL,
unexpected errors mapped to a user-safe 500 (with their log events), and the
health endpoint.
"""

from __future__ import annotations

from unittest.mock import patch

from fastapi import status

from prober.models import ProbeResult


def test_check_returns_full_record(client, probe_runner):
    probe_runner.result = ProbeResult(
        captcha_detected=False, product_ids=["42"], payment_methods=["cod", "bacs"]
    )
    response = client.get("/check", params={"check": "https://shop.test/"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"captcha": "no", "productid": ["42"], "paymentmethod": ["cod", "bacs"]}
    assert probe_runner.calls == ["https://shop.test/"]


def test_check_omits_payment_methods_when_checkout_not_reached(client, probe_runner):
    probe_runner.result = ProbeResult(captcha_detected=True, product_ids=[])
    response = client.get("/check", params={"check": "https://shop.test/"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"captcha": "yes", "productid": []}


def test_check_bad_site_is_error_record(client, probe_runner):
    probe_runner.result = ProbeResult.failed("Bad site")
    response = client.get("/check", params={"check": "https://down.test/"})

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"error": "Bad site"}


def test_check_without_url_is_400(client, probe_runner):
    response = client.get("/check")

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "no check url" in response.json()["detail"].lower()
    assert probe_runner.calls == []


def test_check_invalid_url_is_400(client, probe_runner):
    probe_runner.error = ValueError("Not an absolute http(s) URL: 'shop.test'")
    with patch("api.routes.checks.logger") as logger:
        response = client.get("/check", params={"check": "shop.test"})

    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"].startswith("Invalid URL")
    assert logger.warning.call_args.args[0] == "check.invalid_url"


def test_check_unexpected_error_is_user_safe_500(client, probe_runner):
    probe_runner.error = KeyError("secret internal detail")
    with patch("api.routes.checks.logger") as logger:
        response = client.get("/check", params={"check": "https://shop.test/"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Probe failed"}
    assert logger.error.call_args.args[0] == "check.unexpected_error"


def test_check_error_message_matching_a_summary_is_not_echoed(client, probe_runner):
    probe_runner.error = RuntimeError("Bad site")
    response = client.get("/check", params={"check": "https://shop.test/"})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"detail": "Probe failed"}


def test_health(client):
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "ok"}
