"""Document use cases: generation and versioning (write/read) and status lifecycle."""

from app.application.use_cases.documents.document_lifecycle import (
    DocumentLifecycleService,
)
from app.application.use_cases.documents.document_versioning import (
    DocumentVersioningService,
)

__all__ = [
    "DocumentLifecycleService",
    "DocumentVersioningService",
]
