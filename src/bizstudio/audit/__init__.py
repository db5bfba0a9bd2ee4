"""Audit trail -- best-effort recording of every entity mutation."""

from src.bizstudio.audit.recorder import Actor, AuditRecorder

__all__ = ["Actor", "AuditRecorder"]
