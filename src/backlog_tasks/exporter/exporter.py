"""Export orchestration: fetch, build hierarchy, format, write."""

import sys
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import TextIO

from ..backlog import BacklogClient, Status
from ..models import ExportConfig, ExportData
from .formatters import get_formatter
from .hierarchy import build_hierarchy
from .writer import write_export

# Backlog's built-in "完了" (done) status
DEFAULT_COMPLETED_STATUS_ID = 4
COMPLETED_STATUS_NAME = "完了"

FILENAME_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


def is_completed_status(status: Status) -> bool:
    """Check whether a status counts as done."""
    # TODO: projects that renamed their done status and use a non-default
    # id slip through here; consider treating the last status by displayOrder
    # as terminal once that behaviour is confirmed against real spaces.
    return status.id == DEFAULT_COMPLETED_STATUS_ID or status.name == COMPLETED_STATUS_NAME


def incomplete_status_ids(statuses: list[Status]) -> list[int]:
    """Return the IDs of all statuses that are not done, in input order."""
    return [s.id for s in statuses if not is_completed_status(s)]


def generate_filename(project_key: str, timestamp: datetime, extension: str) -> str:
    return f"{project_key}_tasks_{timestamp.strftime(FILENAME_TIMESTAMP_FORMAT)}.{extension}"


class Exporter:
    """Runs one export of a project's incomplete issues."""

    def __init__(
        self,
        client: BacklogClient,
        config: ExportConfig,
        output: TextIO | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the exporter.

        Args:
            client: An opened BacklogClient (or any object with the same methods)
            config: Validated export configuration
            output: Stream for progress messages. Defaults to stdout.
            clock: Returns the export timestamp. Defaults to local now.
        """
        self.client = client
        self.config = config
        self.output = output if output is not None else sys.stdout
        self.clock = clock or (lambda: datetime.now().astimezone())
        self.formatter = get_formatter(config.format)

    def _print(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

    def _on_progress(self, fetched: int, total: int) -> None:
        if total > 0 and fetched == total:
            self._print(f"Fetching issues... {fetched}/{total} (complete)\n")
        else:
            self._print(f"Fetching issues... {fetched}\n")

    async def run(self) -> Path:
        """Export incomplete issues to a file.

        Any failure propagates unchanged and nothing is written.

        Returns:
            Path of the written export file
        """
        cfg = self.config
        self._print(f"Connecting to {cfg.space}.{cfg.domain}...\n")

        project = await self.client.get_project(cfg.project)
        self._print(f"Project: {project.project_key} ({project.name})\n")

        self._print("Fetching statuses... ")
        statuses = await self.client.get_statuses(cfg.project)
        self._print("done\n")

        status_ids = incomplete_status_ids(statuses)

        issues = await self.client.get_issues(
            project.id,
            status_ids,
            assignee_id=cfg.assignee,
            on_progress=self._on_progress,
        )

        self._print("Building hierarchy... ")
        roots, summary = build_hierarchy(issues)
        self._print("done\n\n")

        self._print("Summary:\n")
        self._print(f"  Total issues: {summary.total}\n")
        self._print(f"  Parent issues: {summary.parent_issues}\n")
        self._print(f"  Child issues: {summary.child_issues}\n\n")

        exported_at = self.clock()
        data = ExportData(
            project=project,
            exported_at=exported_at,
            summary=summary,
            issues=roots,
        )

        content = self.formatter.format(data)

        filename = generate_filename(project.project_key, exported_at, self.formatter.extension)
        output_path = write_export(cfg.output or "./", filename, content)

        self._print(f"Output: {output_path}\n")
        self._print("Done!\n")

        return output_path
