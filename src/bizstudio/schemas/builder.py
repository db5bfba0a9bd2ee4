"""Pydantic schemas for the app builder: users, projects, templates, generations.

Defines:
- Enums: UserRole, ProjectStatus, GenerationStatus
- Users: UserCreate/Update, User
- Projects: ProjectCreate/Update, Project
- Templates: TemplateCreate/Update, Template
- Generation: GenerateRequest, GeneratedProject, GenerationHistoryCreate, GenerationHistory
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import EmailStr, Field, StrictBool, StrictInt, StrictStr

from src.bizstudio.schemas.base import CamelModel, PatchModel, RecordModel


# ── Enums ───────────────────────────────────────────────────────────────────


class UserRole(str, Enum):
    ADMIN = "admin"
    MEMBER = "member"


class ProjectStatus(str, Enum):
    """Lifecycle of a generated project."""

    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"
    DRAFT = "draft"


class GenerationStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"


# ── Users ───────────────────────────────────────────────────────────────────


class UserCreate(CamelModel):
    email: EmailStr
    name: StrictStr = Field(min_length=1)
    role: UserRole = UserRole.MEMBER
    avatar_url: StrictStr | None = None


class UserUpdate(PatchModel):
    email: EmailStr | None = None
    name: StrictStr | None = Field(default=None, min_length=1)
    role: UserRole | None = None
    avatar_url: StrictStr | None = None


class User(RecordModel):
    email: str
    name: str
    role: UserRole = UserRole.MEMBER
    avatar_url: str | None = None
    created_at: datetime
    updated_at: datetime


# ── Projects ────────────────────────────────────────────────────────────────


class ProjectCreate(CamelModel):
    """Request body for creating a project.

    frontendCode/backendCode are JSON-encoded maps of file name to content.
    """

    user_id: StrictStr = Field(min_length=1)
    name: StrictStr = Field(min_length=1)
    description: StrictStr = ""
    prompt: StrictStr = ""
    status: ProjectStatus = ProjectStatus.DRAFT
    ui_library: StrictStr = "tailwind"
    generation_type: StrictStr = "full-stack"
    frontend_code: StrictStr | None = None
    backend_code: StrictStr | None = None
    preview_url: StrictStr | None = None
    download_url: StrictStr | None = None
    github_repo_url: StrictStr | None = None


class ProjectUpdate(PatchModel):
    user_id: StrictStr | None = Field(default=None, min_length=1)
    name: StrictStr | None = Field(default=None, min_length=1)
    description: StrictStr | None = None
    prompt: StrictStr | None = None
    status: ProjectStatus | None = None
    ui_library: StrictStr | None = None
    generation_type: StrictStr | None = None
    frontend_code: StrictStr | None = None
    backend_code: StrictStr | None = None
    preview_url: StrictStr | None = None
    download_url: StrictStr | None = None
    github_repo_url: StrictStr | None = None


class Project(RecordModel):
    user_id: str
    name: str
    description: str = ""
    prompt: str = ""
    status: ProjectStatus = ProjectStatus.DRAFT
    ui_library: str = "tailwind"
    generation_type: str = "full-stack"
    frontend_code: str | None = None
    backend_code: str | None = None
    preview_url: str | None = None
    download_url: str | None = None
    github_repo_url: str | None = None
    created_at: datetime
    updated_at: datetime


# ── Templates ───────────────────────────────────────────────────────────────


class TemplateCreate(CamelModel):
    name: StrictStr = Field(min_length=1)
    description: StrictStr = ""
    category: StrictStr = Field(min_length=1)
    tags: list[StrictStr] = Field(default_factory=list)
    frontend_template: StrictStr = "{}"
    backend_template: StrictStr = "{}"
    popularity: StrictInt = Field(default=0, ge=0)
    is_public: StrictBool = True
    created_by: StrictStr = Field(min_length=1)


class TemplateUpdate(PatchModel):
    name: StrictStr | None = Field(default=None, min_length=1)
    description: StrictStr | None = None
    category: StrictStr | None = Field(default=None, min_length=1)
    tags: list[StrictStr] | None = None
    frontend_template: StrictStr | None = None
    backend_template: StrictStr | None = None
    popularity: StrictInt | None = Field(default=None, ge=0)
    is_public: StrictBool | None = None
    created_by: StrictStr | None = Field(default=None, min_length=1)


class Template(RecordModel):
    """Stored template. Like revenue projections it carries no updated_at."""

    name: str
    description: str = ""
    category: str
    tags: tuple[str, ...] = ()
    frontend_template: str = "{}"
    backend_template: str = "{}"
    popularity: int = 0
    is_public: bool = True
    created_by: str
    created_at: datetime


# ── Generation ──────────────────────────────────────────────────────────────


class GenerateRequest(CamelModel):
    """Request body for POST /api/generate.

    uiLibrary and generationType fall back to the configured defaults.
    A Project is persisted only when both projectName and userId are given.
    """

    prompt: StrictStr = Field(min_length=1)
    ui_library: StrictStr | None = None
    generation_type: StrictStr | None = None
    user_id: StrictStr | None = None
    project_name: StrictStr | None = None


class GeneratedProject(CamelModel):
    """Response for POST /api/generate."""

    id: str
    prompt: str
    ui_library: str
    generation_type: str
    status: ProjectStatus
    frontend_code: str
    backend_code: str
    project_id: str | None = None


class GenerationHistoryCreate(CamelModel):
    user_id: str | None = None
    project_id: str | None = None
    prompt: str
    ui_library: str
    generation_type: str
    status: GenerationStatus
    duration_ms: float = 0.0
    error: str | None = None


class GenerationHistory(RecordModel):
    user_id: str | None = None
    project_id: str | None = None
    prompt: str
    ui_library: str
    generation_type: str
    status: GenerationStatus
    duration_ms: float = 0.0
    error: str | None = None
    created_at: datetime
