"""Tests for Backlog-specific models."""

from datetime import date, timedelta

from helpers import api_issue

from backlog_tasks.backlog.models import Issue, Project, Status, parse_due_date, parse_timestamp


class TestIssue:
    """Tests for the Issue model."""

    def test_from_api_response(self):
        """Test decoding a full issue payload."""
        issue = Issue.from_api_response(
            api_issue(
                7,
                parent=3,
                assignee={"id": 5, "userId": "suzuki", "name": "鈴木", "roleType": 2},
                dueDate="2024-12-01T00:00:00Z",
            )
        )

        assert issue.id == 7
        assert issue.issue_key == "MYPROJ-7"
        assert issue.parent_issue_id == 3
        assert issue.status_name == "未対応"
        assert issue.priority_name == "中"
        assert issue.assignee_name == "鈴木"
        assert issue.assignee.user_id == "suzuki"
        assert issue.due_date == date(2024, 12, 1)
        assert issue.created.utcoffset() == timedelta(0)

    def test_from_api_response_minimal(self):
        """Test absent optional fields decode to None."""
        issue = Issue.from_api_response(
            {
                "id": 1,
                "issueKey": "P-1",
                "summary": "s",
                "created": "2024-11-01T10:00:00Z",
                "updated": "2024-11-01T10:00:00Z",
            }
        )

        assert issue.status_name is None
        assert issue.priority_name is None
        assert issue.assignee_name is None
        assert issue.due_date is None
        assert issue.parent_issue_id is None


class TestParsing:
    """Tests for timestamp and date helpers."""

    def test_parse_timestamp_z(self):
        assert parse_timestamp("2024-11-01T10:00:00Z").hour == 10

    def test_parse_due_date_forms(self):
        assert parse_due_date("2024-12-01") == date(2024, 12, 1)
        assert parse_due_date("2024-12-01T00:00:00Z") == date(2024, 12, 1)
        assert parse_due_date("") is None
        assert parse_due_date(None) is None


class TestProjectAndStatus:
    """Tests for Project and Status decoding."""

    def test_project(self):
        project = Project.from_api_response({"id": 9, "projectKey": "K", "name": "N"})
        assert project == Project(9, "K", "N")

    def test_status(self):
        status = Status.from_api_response({"id": 4, "name": "完了", "displayOrder": 4000})
        assert status.id == 4
        assert status.display_order == 4000
