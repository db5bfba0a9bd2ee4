"""Pydantic schemas for the sales pipeline: deals and revenue projections."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import EmailStr, Field, StrictFloat, StrictStr

from src.bizstudio.schemas.base import CamelModel, PatchModel, RecordModel

MONTH_PATTERN = r"^\d{4}-\d{2}$"


class DealStage(str, Enum):
    """Sales pipeline stage for a deal."""

    PROSPECT = "prospect"
    QUALIFIED = "qualified"
    PROPOSAL = "proposal"
    NEGOTIATION = "negotiation"
    CLOSED_WON = "closed-won"
    CLOSED_LOST = "closed-lost"


# ── Deals ───────────────────────────────────────────────────────────────────


class DealCreate(CamelModel):
    """Request body for creating a deal."""

    title: StrictStr = Field(min_length=1)
    client_name: StrictStr = Field(min_length=1)
    client_email: EmailStr
    value: StrictFloat = Field(ge=0)
    stage: DealStage
    probability: StrictFloat = Field(ge=0, le=100)
    expected_close_date: StrictStr = Field(min_length=1)
    assigned_to: StrictStr = Field(min_length=1)
    notes: StrictStr = ""


class DealUpdate(PatchModel):
    """Partial deal update (all fields optional)."""

    title: StrictStr | None = Field(default=None, min_length=1)
    client_name: StrictStr | None = Field(default=None, min_length=1)
    client_email: EmailStr | None = None
    value: StrictFloat | None = Field(default=None, ge=0)
    stage: DealStage | None = None
    probability: StrictFloat | None = Field(default=None, ge=0, le=100)
    expected_close_date: StrictStr | None = Field(default=None, min_length=1)
    assigned_to: StrictStr | None = Field(default=None, min_length=1)
    notes: StrictStr | None = None


class Deal(RecordModel):
    """Stored deal."""

    title: str
    client_name: str
    client_email: str
    value: float
    stage: DealStage
    probability: float
    expected_close_date: str
    assigned_to: str
    notes: str = ""
    created_at: datetime
    updated_at: datetime

    @property
    def weighted_value(self) -> float:
        return self.value * self.probability / 100


# ── Revenue Projections ─────────────────────────────────────────────────────


class RevenueProjectionCreate(CamelModel):
    """Request body for creating a monthly revenue projection."""

    month: StrictStr = Field(pattern=MONTH_PATTERN)
    projected_revenue: StrictFloat = Field(ge=0)
    actual_revenue: StrictFloat = Field(ge=0)
    confidence: StrictFloat = Field(ge=0, le=100)


class RevenueProjectionUpdate(PatchModel):
    """Partial revenue projection update."""

    month: StrictStr | None = Field(default=None, pattern=MONTH_PATTERN)
    projected_revenue: StrictFloat | None = Field(default=None, ge=0)
    actual_revenue: StrictFloat | None = Field(default=None, ge=0)
    confidence: StrictFloat | None = Field(default=None, ge=0, le=100)


class RevenueProjection(RecordModel):
    """Stored revenue projection. Has no updated_at; updates only merge."""

    month: str
    projected_revenue: float
    actual_revenue: float
    confidence: float
    created_at: datetime
