"""Row id generation: CUID2 strings (collision-resistant, URL-safe, not time-ordered)."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new primary key for template, document, business record and activity rows."""
    return _next_cuid()
