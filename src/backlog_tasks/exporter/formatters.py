"""Output formatters for exported issues.

Each formatter turns an ExportData snapshot into UTF-8 bytes. The text
and Markdown layouts render two levels (roots and their direct children);
JSON keeps the full tree.
"""

import json
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Any

from ..backlog.models import Issue
from ..models import ExportData, HierarchicalIssue, OutputFormat

RULE_WIDTH = 80
PLACEHOLDER = "-"
UNASSIGNED = "(未割当)"

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
DATE_FORMAT = "%Y-%m-%d"


def format_rfc3339(value: datetime) -> str:
    """Format a timestamp as RFC 3339, using ``Z`` for UTC."""
    value = value.replace(microsecond=0)
    if value.tzinfo is not None and value.utcoffset() == timedelta(0):
        return value.replace(tzinfo=None).isoformat() + "Z"
    return value.isoformat()


def summary_line(data: ExportData) -> str:
    s = data.summary
    return (
        f"未完了タスク数: {s.total}件"
        f"（親課題: {s.parent_issues}件、子課題: {s.child_issues}件）"
    )


class Formatter(ABC):
    """Base class for export formatters."""

    extension = ""

    @abstractmethod
    def format(self, data: ExportData) -> bytes:
        """Render an export as UTF-8 bytes."""
        pass

    @staticmethod
    def status_name(issue: Issue) -> str:
        return issue.status_name or PLACEHOLDER

    @staticmethod
    def priority_name(issue: Issue) -> str:
        return issue.priority_name or PLACEHOLDER

    @staticmethod
    def assignee_name(issue: Issue) -> str:
        return issue.assignee_name or UNASSIGNED

    @staticmethod
    def due_date(issue: Issue) -> str:
        return issue.due_date.isoformat() if issue.due_date else PLACEHOLDER


class TxtFormatter(Formatter):
    """Plain-text layout with tree connectors for child issues."""

    extension = "txt"

    def format(self, data: ExportData) -> bytes:
        lines = [
            "=" * RULE_WIDTH,
            f"プロジェクト: {data.project.project_key} - {data.project.name}",
            f"取得日時: {data.exported_at.strftime(TIMESTAMP_FORMAT)}",
            summary_line(data),
            "=" * RULE_WIDTH,
            "",
            "",
        ]
        header = "\n".join(lines)

        separator = "\n" + "-" * RULE_WIDTH + "\n\n"
        body = separator.join(self._format_issue(node) for node in data.issues)

        return (header + body).encode("utf-8")

    def _format_issue(self, node: HierarchicalIssue) -> str:
        issue = node.issue
        out = [
            f"[{issue.issue_key}] {issue.summary}\n",
            f"  状態: {self.status_name(issue)}\n",
            f"  優先度: {self.priority_name(issue)}\n",
            f"  担当者: {self.assignee_name(issue)}\n",
            f"  期限日: {self.due_date(issue)}\n",
            f"  作成日: {issue.created.strftime(DATE_FORMAT)}\n",
            f"  更新日: {issue.updated.strftime(DATE_FORMAT)}\n",
        ]

        if node.children:
            out.append("\n")
            last = len(node.children) - 1
            for i, child in enumerate(node.children):
                is_last = i == last
                connector = "  └─ " if is_last else "  ├─ "
                prefix = "       " if is_last else "  │    "
                out.append(f"{connector}[{child.issue.issue_key}] {child.issue.summary}\n")
                out.append(f"{prefix}状態: {self.status_name(child.issue)}\n")
                out.append(f"{prefix}優先度: {self.priority_name(child.issue)}\n")
                out.append(f"{prefix}担当者: {self.assignee_name(child.issue)}\n")
                out.append(f"{prefix}期限日: {self.due_date(child.issue)}\n")
                if not is_last:
                    out.append("  │\n")

        return "".join(out)


class MarkdownFormatter(Formatter):
    """Markdown layout: one section and field table per issue."""

    extension = "md"

    def format(self, data: ExportData) -> bytes:
        out = [
            f"# {data.project.project_key} - {data.project.name} 未完了タスク一覧\n\n",
            f"> 取得日時: {data.exported_at.strftime(TIMESTAMP_FORMAT)}  \n",
            f"> {summary_line(data)}\n\n",
            "---\n\n",
        ]
        for node in data.issues:
            out.append(self._format_issue(node))
            out.append("\n---\n\n")
        return "".join(out).encode("utf-8")

    def _table(self, rows: list[tuple[str, str]]) -> str:
        lines = ["| 項目 | 内容 |\n", "|------|------|\n"]
        lines.extend(f"| {name} | {value} |\n" for name, value in rows)
        return "".join(lines)

    def _field_rows(self, issue: Issue) -> list[tuple[str, str]]:
        return [
            ("状態", self.status_name(issue)),
            ("優先度", self.priority_name(issue)),
            ("担当者", self.assignee_name(issue)),
            ("期限日", self.due_date(issue)),
        ]

    def _format_issue(self, node: HierarchicalIssue) -> str:
        issue = node.issue
        rows = self._field_rows(issue) + [
            ("作成日", issue.created.strftime(DATE_FORMAT)),
            ("更新日", issue.updated.strftime(DATE_FORMAT)),
        ]
        out = [f"## [{issue.issue_key}] {issue.summary}\n", self._table(rows)]

        if node.children:
            out.append("\n### 子課題\n\n")
            for child in node.children:
                out.append(f"#### [{child.issue.issue_key}] {child.issue.summary}\n")
                out.append(self._table(self._field_rows(child.issue)))
                out.append("\n")

        return "".join(out)


class JsonFormatter(Formatter):
    """JSON document with the full, recursively nested issue tree."""

    extension = "json"

    def format(self, data: ExportData) -> bytes:
        document = {
            "project": {
                "id": data.project.id,
                "key": data.project.project_key,
                "name": data.project.name,
            },
            "exportedAt": format_rfc3339(data.exported_at),
            "summary": {
                "total": data.summary.total,
                "parentIssues": data.summary.parent_issues,
                "childIssues": data.summary.child_issues,
            },
            "issues": [self._convert_issue(node) for node in data.issues],
        }
        return json.dumps(document, indent=2, ensure_ascii=False).encode("utf-8")

    def _convert_issue(self, node: HierarchicalIssue) -> dict[str, Any]:
        issue = node.issue
        return {
            "id": issue.id,
            "issueKey": issue.issue_key,
            "summary": issue.summary,
            "status": issue.status_name or "",
            "priority": issue.priority_name or "",
            "assignee": issue.assignee_name,
            "dueDate": issue.due_date.isoformat() if issue.due_date else None,
            "createdAt": format_rfc3339(issue.created),
            "updatedAt": format_rfc3339(issue.updated),
            "children": [self._convert_issue(child) for child in node.children],
        }


FORMATTERS: dict[OutputFormat, type[Formatter]] = {
    OutputFormat.TXT: TxtFormatter,
    OutputFormat.JSON: JsonFormatter,
    OutputFormat.MARKDOWN: MarkdownFormatter,
}


def get_formatter(output_format: OutputFormat | str | None) -> Formatter:
    """Return the formatter for a format, falling back to plain text.

    Args:
        output_format: An OutputFormat or a raw token such as "markdown"

    Returns:
        Formatter instance
    """
    if not isinstance(output_format, OutputFormat):
        try:
            output_format = OutputFormat(output_format)
        except ValueError:
            output_format = OutputFormat.TXT
    return FORMATTERS[output_format]()
