"""Actor context for engine calls, stored in a contextvar.

The enclosing request handler sets the actor once per request (or wraps a
block in acting_as); engine operations take an explicit actor_id and fall
back to this context when it is omitted. Activity rows record both the
actor id and its type.

Usage:
    set_current_user("user123")
    with acting_as(None, ActorType.SYSTEM):
        ...  # nightly job
"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass

from app.shared.enums import ActorType


@dataclass(frozen=True)
class ActorContext:
    """Who the current engine call acts for."""

    user_id: str | None
    actor_type: ActorType

    def __post_init__(self) -> None:
        if self.actor_type == ActorType.USER and not self.user_id:
            raise ValueError("user_id is required when actor_type is USER")


_ANONYMOUS = ActorContext(user_id=None, actor_type=ActorType.SYSTEM)
_actor: ContextVar[ActorContext] = ContextVar("crm_actor", default=_ANONYMOUS)


def set_current_user(
    user_id: str | None,
    actor_type: ActorType = ActorType.USER,
) -> None:
    """Set the actor for the rest of the current async task.

    Raises:
        ValueError: If actor_type is USER and user_id is None or empty.
    """
    _actor.set(ActorContext(user_id=user_id, actor_type=actor_type))


def clear_current_user() -> None:
    """Reset the actor context to anonymous SYSTEM."""
    _actor.set(_ANONYMOUS)


@contextmanager
def acting_as(
    user_id: str | None, actor_type: ActorType = ActorType.USER
) -> Iterator[ActorContext]:
    """Set the actor for a block and restore the previous one afterwards."""
    token = _actor.set(ActorContext(user_id=user_id, actor_type=actor_type))
    try:
        yield _actor.get()
    finally:
        _actor.reset(token)


def get_actor_context() -> ActorContext:
    return _actor.get()


def get_current_actor_id() -> str | None:
    """Return the current user ID, or None for anonymous/system work."""
    return _actor.get().user_id


def get_current_actor_type() -> ActorType:
    return _actor.get().actor_type


def resolve_actor_id(actor_id: str | None) -> str | None:
    """Return actor_id when given, else the context actor."""
    return actor_id if actor_id is not None else get_current_actor_id()
