"""Parent/child hierarchy reconstruction."""

from ..backlog.models import Issue
from ..models import ExportSummary, HierarchicalIssue


def build_hierarchy(
    issues: list[Issue],
) -> tuple[list[HierarchicalIssue], ExportSummary]:
    """Build a forest from a flat issue list.

    Every issue gets a node before any linking happens, so a child listed
    ahead of its parent is still attached. An issue whose parent is not in
    ``issues`` (filtered out or never fetched) becomes a root.

    Args:
        issues: Issues in fetch order

    Returns:
        Tuple of (root nodes, summary counts)
    """
    nodes = {issue.id: HierarchicalIssue(issue=issue) for issue in issues}

    roots: list[HierarchicalIssue] = []
    child_count = 0

    for issue in issues:
        node = nodes[issue.id]
        parent = nodes.get(issue.parent_issue_id) if issue.parent_issue_id is not None else None
        if parent is not None and parent is not node:
            parent.children.append(node)
            child_count += 1
        else:
            roots.append(node)

    summary = ExportSummary(
        total=len(issues),
        parent_issues=len(issues) - child_count,
        child_issues=child_count,
    )
    return roots, summary
