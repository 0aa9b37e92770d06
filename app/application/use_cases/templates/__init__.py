"""Template use cases: deletion guard, preview, usage statistics, revision."""

from app.application.use_cases.templates.template_operations import TemplateService

__all__ = ["TemplateService"]
