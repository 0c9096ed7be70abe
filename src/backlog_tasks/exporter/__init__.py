"""Issue export: hierarchy, formatting and orchestration."""

from .exporter import (
    COMPLETED_STATUS_NAME,
    DEFAULT_COMPLETED_STATUS_ID,
    Exporter,
    generate_filename,
    incomplete_status_ids,
    is_completed_status,
)
from .formatters import (
    Formatter,
    JsonFormatter,
    MarkdownFormatter,
    TxtFormatter,
    get_formatter,
)
from .hierarchy import build_hierarchy
from .writer import ExportWriteError, write_export

__all__ = [
    "COMPLETED_STATUS_NAME",
    "DEFAULT_COMPLETED_STATUS_ID",
    "Exporter",
    "generate_filename",
    "incomplete_status_ids",
    "is_completed_status",
    "Formatter",
    "JsonFormatter",
    "MarkdownFormatter",
    "TxtFormatter",
    "get_formatter",
    "build_hierarchy",
    "ExportWriteError",
    "write_export",
]
