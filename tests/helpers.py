"""Builders for issue records used across the test modules."""

from datetime import datetime, timezone

from backlog_tasks.backlog.models import Issue


def make_issue(
    id: int,
    parent: int | None = None,
    key: str | None = None,
    summary: str = "task",
    **kwargs,
) -> Issue:
    """Build an Issue with sensible defaults."""
    return Issue(
        id=id,
        issue_key=key or f"MYPROJ-{id}",
        summary=summary,
        created=kwargs.pop("created", datetime(2024, 11, 1, 10, 0, tzinfo=timezone.utc)),
        updated=kwargs.pop("updated", datetime(2024, 11, 2, 10, 0, tzinfo=timezone.utc)),
        parent_issue_id=parent,
        **kwargs,
    )


def api_issue(id: int, parent: int | None = None, **overrides) -> dict:
    """Build an issue item as returned by GET /api/v2/issues."""
    data = {
        "id": id,
        "projectId": 1,
        "issueKey": f"MYPROJ-{id}",
        "keyId": id,
        "summary": f"Issue {id}",
        "status": {"id": 1, "projectId": 1, "name": "未対応", "displayOrder": 1000},
        "priority": {"id": 3, "name": "中"},
        "assignee": None,
        "dueDate": None,
        "parentIssueId": parent,
        "created": "2024-11-01T10:00:00Z",
        "updated": "2024-11-02T10:00:00Z",
    }
    data.update(overrides)
    return data
