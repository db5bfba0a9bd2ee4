"""Process-local entity store.

Store owns one typed collection per entity. A fresh Store starts empty and
lives until process exit; nothing is persisted. Create one per application
(or per test) and inject it, rather than sharing a module-level instance.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from src.bizstudio.schemas.audit import AuditLog
from src.bizstudio.schemas.builder import (
    GenerationHistory,
    Project,
    ProjectStatus,
    Template,
    User,
)
from src.bizstudio.schemas.sales import Deal, DealStage, RevenueProjection
from src.bizstudio.store.collection import (
    AppendOnlyCollection,
    Clock,
    EntityCollection,
)

logger = structlog.get_logger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC so they compare with stored timestamps."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ── Sales pipeline ──────────────────────────────────────────────────────────


class DealCollection(EntityCollection[Deal]):
    def by_stage(self, stage: DealStage | str) -> list[Deal]:
        return self.filter(lambda d: d.stage == stage)


class RevenueProjectionCollection(EntityCollection[RevenueProjection]):
    def by_month_range(self, start_month: str, end_month: str) -> list[RevenueProjection]:
        """Projections whose YYYY-MM month lies in [start_month, end_month]."""
        return self.filter(lambda p: start_month <= p.month <= end_month)


class AuditLogCollection(AppendOnlyCollection[AuditLog]):
    """Append-only audit trail. Every read is ordered newest first."""

    created_field = "timestamp"

    @staticmethod
    def _newest_first(logs: list[AuditLog]) -> list[AuditLog]:
        # Equal timestamps keep reverse insertion order.
        return sorted(reversed(logs), key=lambda log: log.timestamp, reverse=True)

    def get_all(self) -> list[AuditLog]:
        return self._newest_first(self._records)

    def by_entity(self, entity_type: str, entity_id: str) -> list[AuditLog]:
        return self._newest_first(
            self.filter(lambda log: log.entity_type == entity_type and log.entity_id == entity_id)
        )

    def by_user(self, user_id: str) -> list[AuditLog]:
        return self._newest_first(self.filter(lambda log: log.user_id == user_id))

    def by_date_range(self, start: datetime, end: datetime) -> list[AuditLog]:
        start, end = _as_utc(start), _as_utc(end)
        return self._newest_first(self.filter(lambda log: start <= log.timestamp <= end))


# ── App builder ─────────────────────────────────────────────────────────────


class UserCollection(EntityCollection[User]):
    def by_email(self, email: str) -> User | None:
        wanted = email.lower()
        for user in self._records:
            if user.email.lower() == wanted:
                return user
        return None


class ProjectCollection(EntityCollection[Project]):
    def by_user(self, user_id: str) -> list[Project]:
        return self.filter(lambda p: p.user_id == user_id)

    def by_status(self, status: ProjectStatus | str) -> list[Project]:
        return self.filter(lambda p: p.status == status)


class TemplateCollection(EntityCollection[Template]):
    def by_category(self, category: str) -> list[Template]:
        return self.filter(lambda t: t.category == category)

    def popular(self, limit: int) -> list[Template]:
        """Top templates by popularity. Collection order is left untouched."""
        ranked = sorted(self._records, key=lambda t: t.popularity, reverse=True)
        return ranked[: max(limit, 0)]


class GenerationHistoryCollection(AppendOnlyCollection[GenerationHistory]):
    def by_user(self, user_id: str) -> list[GenerationHistory]:
        return self.filter(lambda h: h.user_id == user_id)

    def by_project(self, project_id: str) -> list[GenerationHistory]:
        return self.filter(lambda h: h.project_id == project_id)


# ── Store ───────────────────────────────────────────────────────────────────


class Store:
    """All entity collections for one application instance.

    Args:
        clock: Optional time source; defaults to timezone-aware UTC now.
            Tests pass a controllable clock to make timestamps deterministic.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self.clock: Clock = clock or utcnow
        self.deals = DealCollection(Deal, self.clock)
        self.revenue_projections = RevenueProjectionCollection(RevenueProjection, self.clock)
        self.audit_logs = AuditLogCollection(AuditLog, self.clock)
        self.users = UserCollection(User, self.clock)
        self.projects = ProjectCollection(Project, self.clock)
        self.templates = TemplateCollection(Template, self.clock)
        self.generation_history = GenerationHistoryCollection(GenerationHistory, self.clock)
        logger.debug("store.initialized")

    def sizes(self) -> dict[str, int]:
        """Record count per collection (reported by /health)."""
        return {
            "deals": len(self.deals),
            "revenue_projections": len(self.revenue_projections),
            "audit_logs": len(self.audit_logs),
            "users": len(self.users),
            "projects": len(self.projects),
            "templates": len(self.templates),
            "generation_history": len(self.generation_history),
        }
