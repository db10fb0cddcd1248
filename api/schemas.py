"""
Pydantic schemas for the probe API response contract.

Field names follow the probe's output record (captcha / productid /
paymentmethod, or error). Routes serialize with exclude_none so absent
signals are omitted rather than rendered as null.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from prober.models import ProbeResult


class ProbeResponse(BaseModel):
    """Response schema for GET /check."""

    captcha: Optional[Literal["yes", "no"]] = Field(
        None, description="Whether a CAPTCHA marker was found (checkout page wins)"
    )
    productid: Optional[list[str]] = Field(None, description="Product ids found, possibly empty")
    paymentmethod: Optional[list[str]] = Field(
        None, description="Payment methods on the checkout page; absent if checkout was not reached"
    )
    error: Optional[str] = Field(None, description="User-safe error summary, e.g. 'Bad site'")

    @classmethod
    def from_result(cls, result: ProbeResult) -> "ProbeResponse":
        return cls(**result.to_dict())


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"
