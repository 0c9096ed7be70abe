"""Backlog-specific data models."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any


def parse_timestamp(value: str) -> datetime:
    """Parse a Backlog ISO-8601 timestamp (``Z`` suffix allowed)."""
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_due_date(value: str | None) -> date | None:
    """Parse a due date, dropping any time component.

    Backlog reports due dates as ``2024-12-01T00:00:00Z``; older payloads
    and fixtures use the bare ``2024-12-01`` form.
    """
    if not value:
        return None
    return date.fromisoformat(value[:10])


@dataclass(frozen=True)
class Project:
    """A Backlog project."""

    id: int
    project_key: str
    name: str

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Project":
        return cls(
            id=data["id"],
            project_key=data["projectKey"],
            name=data.get("name", ""),
        )


@dataclass(frozen=True)
class Status:
    """An issue status defined for a project."""

    id: int
    name: str
    display_order: int = 0

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Status":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            display_order=data.get("displayOrder", 0),
        )


@dataclass(frozen=True)
class Priority:
    """An issue priority."""

    id: int
    name: str


@dataclass(frozen=True)
class User:
    """A Backlog user (assignee)."""

    id: int
    name: str
    user_id: str | None = None


@dataclass(frozen=True)
class Issue:
    """Representation of a Backlog issue."""

    id: int
    issue_key: str  # e.g., "PROJ-123"
    summary: str
    created: datetime
    updated: datetime
    status: Status | None = None
    priority: Priority | None = None
    assignee: User | None = None
    due_date: date | None = None
    parent_issue_id: int | None = None

    @property
    def status_name(self) -> str | None:
        return self.status.name if self.status else None

    @property
    def priority_name(self) -> str | None:
        return self.priority.name if self.priority else None

    @property
    def assignee_name(self) -> str | None:
        return self.assignee.name if self.assignee else None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Issue":
        """Create an Issue from a Backlog API response item."""
        status = data.get("status")
        priority = data.get("priority")
        assignee = data.get("assignee")

        return cls(
            id=data["id"],
            issue_key=data["issueKey"],
            summary=data.get("summary", ""),
            created=parse_timestamp(data["created"]),
            updated=parse_timestamp(data["updated"]),
            status=Status.from_api_response(status) if status else None,
            priority=Priority(id=priority["id"], name=priority.get("name", ""))
            if priority
            else None,
            assignee=User(
                id=assignee["id"],
                name=assignee.get("name", ""),
                user_id=assignee.get("userId"),
            )
            if assignee
            else None,
            due_date=parse_due_date(data.get("dueDate")),
            parent_issue_id=data.get("parentIssueId"),
        )
