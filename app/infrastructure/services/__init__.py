"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.activity_audit_service import ActivityAuditService

__all__ = ["ActivityAuditService"]
