"""Configuration model for backlog-tasks."""

import os
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

DEFAULT_DOMAIN = "backlog.com"
DEFAULT_OUTPUT = "./"


class ConfigError(ValueError):
    """Invalid or incomplete configuration.

    ExportConfig.validate raises this for a format token outside
    OutputFormat, so a run never starts with one. get_formatter, called
    directly, is lenient instead and falls back to plain text for such a
    token.
    """

    pass


class OutputFormat(Enum):
    """Supported export formats."""

    TXT = "txt"
    JSON = "json"
    MARKDOWN = "markdown"


@dataclass
class ExportConfig:
    """Settings for one export run."""

    api_key: str | None = None
    space: str | None = None
    domain: str | None = None
    project: str | None = None
    output: str | None = None
    format: str | None = None
    assignee: int | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "ExportConfig":
        """Load connection settings from BACKLOG_* environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            api_key=env.get("BACKLOG_API_KEY") or None,
            space=env.get("BACKLOG_SPACE") or None,
            domain=env.get("BACKLOG_DOMAIN") or None,
        )

    def merge(self, other: "ExportConfig") -> None:
        """Override fields with the non-empty values of another config."""
        for f in fields(self):
            value = getattr(other, f.name)
            if value:
                setattr(self, f.name, value)

    def validate(self) -> None:
        """Check required settings and fill in defaults.

        Raises:
            ConfigError: If a required setting is missing or the format is unknown
        """
        if not self.api_key:
            raise ConfigError("API key is required. Set --api-key or BACKLOG_API_KEY")
        if not self.space:
            raise ConfigError("space is required. Use --space or -s")
        if not self.project:
            raise ConfigError("project is required. Use --project or -p")
        if not self.domain:
            self.domain = DEFAULT_DOMAIN
        if not self.output:
            self.output = DEFAULT_OUTPUT
        if not self.format:
            self.format = OutputFormat.TXT.value

        try:
            OutputFormat(self.format)
        except ValueError:
            raise ConfigError(
                f"invalid format: {self.format}. Use txt, json, or markdown"
            ) from None

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat(self.format or OutputFormat.TXT.value)

    @property
    def base_url(self) -> str:
        return f"https://{self.space}.{self.domain or DEFAULT_DOMAIN}/api/v2"

    def is_project_id(self) -> bool:
        """Check if the project reference is a numeric ID rather than a key."""
        return bool(self.project) and self.project.isdigit()

    def project_id(self) -> int:
        """Return the project reference as an integer ID."""
        if not self.is_project_id():
            raise ConfigError("project is not a numeric ID")
        return int(self.project)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a dictionary, masking the API key."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if self.api_key:
            data["api_key"] = "*" * 8
        return data
