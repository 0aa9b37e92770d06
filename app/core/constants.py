"""Core constants: placeholder keys, render formats, and retry defaults.

Formats follow the tr-TR conventions the CRM renders documents with
(dd.mm.yyyy dates, 24-hour times).
"""

# System placeholders: derived from the generation clock, never overridable.
SYSTEM_PLACEHOLDER_CURRENT_DATE = "current_date"
SYSTEM_PLACEHOLDER_CURRENT_TIME = "current_time"
SYSTEM_PLACEHOLDER_CURRENT_YEAR = "current_year"
SYSTEM_PLACEHOLDER_KEYS = frozenset({
    SYSTEM_PLACEHOLDER_CURRENT_DATE,
    SYSTEM_PLACEHOLDER_CURRENT_TIME,
    SYSTEM_PLACEHOLDER_CURRENT_YEAR,
})

DATE_FORMAT = "%d.%m.%Y"
TIME_FORMAT = "%H:%M:%S"
YEAR_FORMAT = "%Y"
DATETIME_FORMAT = f"{DATE_FORMAT} {TIME_FORMAT}"

# Separator used when a list attribute (phones, emails) fills one placeholder.
LIST_VALUE_SEPARATOR = ", "

# Caller-data key that names a generated document.
DOCUMENT_NAME_KEY = "name"

# Defaults for services built without Settings (tests, ad-hoc wiring).
DEFAULT_VERSION_ASSIGNMENT_MAX_RETRIES = 5
DEFAULT_DOCUMENT_NAME_MAX_ATTEMPTS = 10
DEFAULT_RECENT_DOCUMENTS_LIMIT = 10
