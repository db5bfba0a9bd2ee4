"""Service wiring for one application instance.

build_services() creates every service over a single Store so that the API
layer can reach them through ``app.state.services``.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.bizstudio.audit.recorder import Actor, AuditRecorder
from src.bizstudio.config import Settings
from src.bizstudio.schemas.builder import Project, Template
from src.bizstudio.schemas.sales import Deal, RevenueProjection
from src.bizstudio.services.analytics import AnalyticsAggregator
from src.bizstudio.services.codegen import CodeGenerator, MockCodeGenerator
from src.bizstudio.services.entities import AuditedEntityService, UserService
from src.bizstudio.services.generation import GenerationService
from src.bizstudio.store.memory import Store


@dataclass
class Services:
    store: Store
    recorder: AuditRecorder
    deals: AuditedEntityService[Deal]
    revenue_projections: AuditedEntityService[RevenueProjection]
    users: UserService
    projects: AuditedEntityService[Project]
    templates: AuditedEntityService[Template]
    analytics: AnalyticsAggregator
    generation: GenerationService


def build_services(
    store: Store,
    settings: Settings,
    code_generator: CodeGenerator | None = None,
) -> Services:
    """Wire all services around ``store``."""
    recorder = AuditRecorder(
        store.audit_logs,
        default_actor=Actor(
            user_id=settings.AUDIT_DEFAULT_USER_ID,
            user_name=settings.AUDIT_DEFAULT_USER_NAME,
        ),
    )
    projects = AuditedEntityService(store.projects, "Project", recorder)
    generator = code_generator or MockCodeGenerator(settings.GENERATION_DELAY_SECONDS)

    return Services(
        store=store,
        recorder=recorder,
        deals=AuditedEntityService(store.deals, "Deal", recorder),
        revenue_projections=AuditedEntityService(
            store.revenue_projections, "RevenueProjection", recorder
        ),
        users=UserService(store.users, recorder),
        projects=projects,
        templates=AuditedEntityService(store.templates, "Template", recorder),
        analytics=AnalyticsAggregator(store, forecast_months=settings.FORECAST_MONTHS),
        generation=GenerationService(
            generator,
            projects=projects,
            history=store.generation_history,
            default_ui_library=settings.DEFAULT_UI_LIBRARY,
            default_generation_type=settings.DEFAULT_GENERATION_TYPE,
        ),
    )
