"""Export data model: issue hierarchy and run snapshot."""

from dataclasses import dataclass, field
from datetime import datetime

from ..backlog.models import Issue, Project


@dataclass
class HierarchicalIssue:
    """An issue plus its direct children, in fetch order."""

    issue: Issue
    children: list["HierarchicalIssue"] = field(default_factory=list)


@dataclass(frozen=True)
class ExportSummary:
    """Issue counts for one export (parent_issues counts roots)."""

    total: int = 0
    parent_issues: int = 0
    child_issues: int = 0


@dataclass
class ExportData:
    """Renderer-agnostic snapshot of one export run."""

    project: Project
    exported_at: datetime
    summary: ExportSummary
    issues: list[HierarchicalIssue] = field(default_factory=list)
