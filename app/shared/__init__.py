"""Shared utilities: actor context, enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import (
    ActorContext,
    acting_as,
    clear_current_user,
    get_actor_context,
    get_current_actor_id,
    get_current_actor_type,
    resolve_actor_id,
    set_current_user,
)
from app.shared.enums import ActorType, AuditAction, AuditEntityType
from app.shared.utils import ensure_utc, generate_cuid, to_zone, utc_now

__all__ = [
    "ActorContext",
    "ActorType",
    "AuditAction",
    "AuditEntityType",
    "acting_as",
    "clear_current_user",
    "ensure_utc",
    "generate_cuid",
    "get_actor_context",
    "get_current_actor_id",
    "get_current_actor_type",
    "resolve_actor_id",
    "set_current_user",
    "to_zone",
    "utc_now",
]
