"""
Tests for the checkout-probe command-line entrypoint.

configure_logging is patched out so the tests do not rebind the process-wide
logging handlers to pytest's capture streams.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest

from prober.main import EXIT_OK, EXIT_USAGE, main
from prober.models import ProbeResult


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("prober.main.configure_logging") as configure:
        yield configure


def test_main_prints_result_record(capsys, no_logging_setup):
    result = ProbeResult(captcha_detected=False, product_ids=["42"], payment_methods=["cod", "bacs"])
    with patch("prober.main.run_probe", return_value=result) as run:
        code = main(["https://shop.test/"])
    assert code == EXIT_OK
    assert run.call_args.args == ("https://shop.test/",)
    assert no_logging_setup.call_count == 1
    out = capsys.readouterr().out
    assert json.loads(out) == {"captcha": "no", "productid": ["42"], "paymentmethod": ["cod", "bacs"]}


def test_main_prints_bad_site(capsys):
    with patch("prober.main.run_probe", return_value=ProbeResult.failed("Bad site")):
        code = main(["https://down.test/", "--pretty"])
    assert code == EXIT_OK
    assert json.loads(capsys.readouterr().out) == {"error": "Bad site"}


def test_main_rejects_invalid_url(capsys):
    code = main(["shop.test"])
    assert code == EXIT_USAGE
    assert "ERROR" in capsys.readouterr().err
