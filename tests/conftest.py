"""Shared fixtures for backlog-tasks tests."""

from datetime import date, datetime, timezone

import pytest

from backlog_tasks.backlog.models import Priority, Project, Status, User
from backlog_tasks.models import ExportData, ExportSummary, HierarchicalIssue

from helpers import make_issue


@pytest.fixture
def export_data() -> ExportData:
    """An export with one parent/child pair and one standalone task."""
    parent = make_issue(
        100,
        summary="親課題",
        status=Status(id=2, name="処理中"),
        priority=Priority(id=2, name="高"),
        assignee=User(id=1, name="山田"),
        due_date=date(2024, 12, 1),
        created=datetime(2024, 11, 1, 10, 0, tzinfo=timezone.utc),
        updated=datetime(2024, 11, 25, 15, 30, tzinfo=timezone.utc),
    )
    child = make_issue(
        101,
        parent=100,
        summary="子課題",
        status=Status(id=3, name="処理済み"),
        priority=Priority(id=2, name="高"),
        assignee=User(id=2, name="鈴木"),
        created=datetime(2024, 11, 2, 10, 0, tzinfo=timezone.utc),
        updated=datetime(2024, 11, 14, 15, 30, tzinfo=timezone.utc),
    )
    standalone = make_issue(
        200,
        summary="単独タスク",
        status=Status(id=1, name="未対応"),
        priority=Priority(id=3, name="中"),
        created=datetime(2024, 11, 15, 10, 0, tzinfo=timezone.utc),
        updated=datetime(2024, 11, 20, 15, 30, tzinfo=timezone.utc),
    )
    return ExportData(
        project=Project(id=1, project_key="MYPROJ", name="マイプロジェクト"),
        exported_at=datetime(2024, 11, 27, 14, 30, 52, tzinfo=timezone.utc),
        summary=ExportSummary(total=3, parent_issues=2, child_issues=1),
        issues=[
            HierarchicalIssue(parent, [HierarchicalIssue(child)]),
            HierarchicalIssue(standalone),
        ],
    )


@pytest.fixture
def empty_export() -> ExportData:
    """An export with no issues."""
    return ExportData(
        project=Project(id=1, project_key="MYPROJ", name="マイプロジェクト"),
        exported_at=datetime(2024, 11, 27, 14, 30, 52, tzinfo=timezone.utc),
        summary=ExportSummary(),
        issues=[],
    )
