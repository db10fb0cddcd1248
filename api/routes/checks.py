"""
Route handlers for the storefront check endpoint.

GET /check?check=<url> runs one probe synchronously and returns the output
record. The handler is a plain def, so FastAPI runs it in its threadpool and
each request owns its own probe session.
"""

from __future__ import annotations

from typing import Annotated, Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.schemas import ProbeResponse
from prober.error_summary import PROBE_FAILED
from prober.models import ProbeResult
from prober.orchestrator import run_probe
from shared.config import AppConfig, get_config
from shared.logging import get_logger

logger = get_logger(__name__)
router = APIRouter(tags=["checks"])

ProbeRunner = Callable[[str], ProbeResult]


def get_probe_runner() -> ProbeRunner:
    """Dependency returning a callable that probes one URL with env config."""
    config: AppConfig = get_config()

    def _run(url: str) -> ProbeResult:
        return run_probe(url, config=config)

    return _run


@router.get(
    "/check",
    response_model=ProbeResponse,
    response_model_exclude_none=True,
    summary="Probe a storefront for CAPTCHA, a product id and payment methods",
)
def check_storefront(
    runner: Annotated[ProbeRunner, Depends(get_probe_runner)],
    check: Annotated[Optional[str], Query(description="Absolute storefront URL")] = None,
) -> ProbeResponse:
    """
    Probe the storefront at `check`.

    An unreachable home page is still a 200 with {"error": "Bad site"};
    a missing or non-http(s) URL is a 400.
    """
    if not check or not check.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No check URL provided",
        )

    try:
        result = runner(check.strip())
    except ValueError as e:
        logger.warning("check.invalid_url", url=check, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid URL: {str(e)}",
        )
    except Exception as e:
        logger.error(
            "check.unexpected_error",
            url=check,
            error=str(e),
            error_type=type(e).__name__,
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=PROBE_FAILED,
        )

    return ProbeResponse.from_result(result)
