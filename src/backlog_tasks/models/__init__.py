"""Data models for backlog-tasks."""

from .config import ConfigError, ExportConfig, OutputFormat
from .export import ExportData, ExportSummary, HierarchicalIssue

__all__ = [
    "ConfigError",
    "ExportConfig",
    "OutputFormat",
    "ExportData",
    "ExportSummary",
    "HierarchicalIssue",
]
