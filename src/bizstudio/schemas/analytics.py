"""Response schemas for the read-only analytics endpoints."""

from __future__ import annotations

from pydantic import Field

from src.bizstudio.schemas.base import CamelModel
from src.bizstudio.schemas.sales import RevenueProjection


class StageBreakdown(CamelModel):
    count: int = 0
    value: float = 0.0


class PipelineSummary(CamelModel):
    """Pipeline totals. byStage only lists stages that currently hold deals."""

    total_deals: int = 0
    total_value: float = 0.0
    average_deal_size: float = 0.0
    by_stage: dict[str, StageBreakdown] = Field(default_factory=dict)
    weighted_value: float = 0.0


class RevenueForecast(CamelModel):
    projected_revenue_from_deals: float = 0.0
    monthly_projections: list[RevenueProjection] = Field(default_factory=list)
    total_projected_revenue: float = 0.0
    total_actual_revenue: float = 0.0


class AuditSummary(CamelModel):
    total_entries: int = 0
    by_action: dict[str, int] = Field(default_factory=dict)
    by_entity_type: dict[str, int] = Field(default_factory=dict)
