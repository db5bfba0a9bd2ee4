"""Read-only analytics computed on demand from the store.

Every call scans the current collections; nothing is cached, so results
always reflect the latest mutations.
"""

from __future__ import annotations

from collections import Counter

from src.bizstudio.schemas.analytics import (
    AuditSummary,
    PipelineSummary,
    RevenueForecast,
    StageBreakdown,
)
from src.bizstudio.schemas.sales import DealStage
from src.bizstudio.store.memory import Store


class AnalyticsAggregator:
    """Pipeline, forecast and audit-trail summaries.

    Args:
        store: The application Store.
        forecast_months: How many of the most recent monthly projections
            the forecast covers.
    """

    def __init__(self, store: Store, forecast_months: int = 12) -> None:
        self._store = store
        self._forecast_months = forecast_months

    def pipeline_summary(self) -> PipelineSummary:
        """Totals over all deals.

        weightedValue sums value * probability / 100. averageDealSize is 0
        for an empty pipeline.
        """
        deals = self._store.deals.get_all()
        total_value = sum(d.value for d in deals)

        by_stage: dict[str, StageBreakdown] = {}
        for deal in deals:
            bucket = by_stage.setdefault(deal.stage.value, StageBreakdown())
            bucket.count += 1
            bucket.value += deal.value

        return PipelineSummary(
            total_deals=len(deals),
            total_value=total_value,
            average_deal_size=total_value / len(deals) if deals else 0.0,
            by_stage=by_stage,
            weighted_value=sum(d.weighted_value for d in deals),
        )

    def revenue_forecast(self) -> RevenueForecast:
        """Weighted open revenue plus the most recent monthly projections.

        Only closed-lost deals are excluded from projectedRevenueFromDeals;
        closed-won deals still count at their weighted value.
        """
        deals = self._store.deals.get_all()
        from_deals = sum(
            d.weighted_value for d in deals if d.stage != DealStage.CLOSED_LOST
        )

        recent = sorted(
            self._store.revenue_projections.get_all(),
            key=lambda p: p.month,
            reverse=True,
        )[: self._forecast_months]

        return RevenueForecast(
            projected_revenue_from_deals=from_deals,
            monthly_projections=recent,
            total_projected_revenue=sum(p.projected_revenue for p in recent),
            total_actual_revenue=sum(p.actual_revenue for p in recent),
        )

    def audit_summary(self) -> AuditSummary:
        logs = self._store.audit_logs.get_all()
        return AuditSummary(
            total_entries=len(logs),
            by_action=dict(Counter(log.action.value for log in logs)),
            by_entity_type=dict(Counter(log.entity_type for log in logs)),
        )
