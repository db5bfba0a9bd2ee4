"""Generation service -- runs the code generator and records the outcome.

For each request:
1. Resolve uiLibrary / generationType defaults.
2. Await the CodeGenerator (metrics via track_generation).
3. Persist a Project (audited CREATE) when projectName and userId are given.
4. Append a GenerationHistory row, completed or failed.
"""

from __future__ import annotations

import time

import structlog

from src.bizstudio.audit.recorder import Actor
from src.bizstudio.core.errors import InternalError
from src.bizstudio.core.monitoring import track_generation
from src.bizstudio.schemas.builder import (
    GeneratedProject,
    GenerateRequest,
    GenerationHistoryCreate,
    GenerationStatus,
    Project,
    ProjectCreate,
    ProjectStatus,
)
from src.bizstudio.services.codegen import CodeGenerator
from src.bizstudio.services.entities import AuditedEntityService
from src.bizstudio.store.memory import GenerationHistoryCollection

logger = structlog.get_logger(__name__)


class GenerationService:
    """Orchestrates one code-generation request.

    Args:
        generator: Backend producing the code.
        projects: Audited project service used to persist named projects.
        history: Generation history collection (append-only).
        default_ui_library: Used when the request omits uiLibrary.
        default_generation_type: Used when the request omits generationType.
    """

    def __init__(
        self,
        generator: CodeGenerator,
        projects: AuditedEntityService[Project],
        history: GenerationHistoryCollection,
        default_ui_library: str = "tailwind",
        default_generation_type: str = "full-stack",
    ) -> None:
        self._generator = generator
        self._projects = projects
        self._history = history
        self._default_ui_library = default_ui_library
        self._default_generation_type = default_generation_type

    async def generate(self, request: GenerateRequest, actor: Actor | None = None) -> GeneratedProject:
        ui_library = request.ui_library or self._default_ui_library
        generation_type = request.generation_type or self._default_generation_type

        tracker: dict = {}
        try:
            async with track_generation(generation_type) as tracker:
                code = await self._generator.generate(request.prompt, ui_library, generation_type)
        except Exception as exc:
            logger.error(
                "generation.failed",
                generation_type=generation_type,
                user_id=request.user_id,
                exc_info=True,
            )
            self._history.create(
                GenerationHistoryCreate(
                    user_id=request.user_id,
                    prompt=request.prompt,
                    ui_library=ui_library,
                    generation_type=generation_type,
                    status=GenerationStatus.FAILED,
                    duration_ms=tracker.get("duration_ms", 0.0),
                    error=type(exc).__name__,
                )
            )
            raise InternalError("Failed to generate project") from exc

        project_id: str | None = None
        if request.project_name and request.user_id:
            project = self._projects.create(
                ProjectCreate(
                    user_id=request.user_id,
                    name=request.project_name,
                    prompt=request.prompt,
                    status=ProjectStatus.COMPLETED,
                    ui_library=ui_library,
                    generation_type=generation_type,
                    frontend_code=code.frontend_json(),
                    backend_code=code.backend_json(),
                ),
                actor,
            )
            project_id = project.id

        self._history.create(
            GenerationHistoryCreate(
                user_id=request.user_id,
                project_id=project_id,
                prompt=request.prompt,
                ui_library=ui_library,
                generation_type=generation_type,
                status=GenerationStatus.COMPLETED,
                duration_ms=tracker.get("duration_ms", 0.0),
            )
        )
        logger.info(
            "generation.completed",
            generation_type=generation_type,
            project_id=project_id,
            duration_ms=tracker.get("duration_ms"),
        )

        return GeneratedProject(
            id=project_id or f"generated-{int(time.time() * 1000)}",
            prompt=request.prompt,
            ui_library=ui_library,
            generation_type=generation_type,
            status=ProjectStatus.COMPLETED,
            frontend_code=code.frontend_json(),
            backend_code=code.backend_json(),
            project_id=project_id,
        )
