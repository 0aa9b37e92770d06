"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from typing import Protocol

from app.shared.enums import AuditAction, AuditEntityType


# Audit sink interface
class IAuditService(Protocol):
    """Protocol for recording activity rows. Callers treat failures as non-fatal."""

    async def record(
        self,
        entity_type: AuditEntityType,
        entity_id: str,
        action: AuditAction,
        description: str,
        actor_id: str | None,
    ) -> None:
        """Record one activity entry."""
