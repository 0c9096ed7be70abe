"""backlog-tasks CLI interface."""

import argparse
import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from .backlog import (
    BacklogAuthenticationError,
    BacklogClient,
    BacklogClientError,
    BacklogNotFoundError,
    BacklogRateLimitError,
    BacklogTransportError,
)
from .exporter import Exporter, ExportWriteError
from .models import ConfigError, ExportConfig

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_API_KEY_REQUIRED = 1
EXIT_AUTH_ERROR = 2
EXIT_PROJECT_NOT_FOUND = 3
EXIT_NETWORK_ERROR = 4
EXIT_OUTPUT_DIR_ERROR = 5
EXIT_RATE_LIMIT_EXCEEDED = 6
EXIT_INVALID_ARGS = 7

QUIET_LOGGERS = ("httpx", "httpcore")

EPILOG = """\
Environment variables:
  BACKLOG_API_KEY  Backlog API key
  BACKLOG_SPACE    Backlog space ID
  BACKLOG_DOMAIN   Backlog domain

Examples:
  # Export to Markdown
  backlog-tasks -s mycompany -p MYPROJ -f markdown

  # Export with API key
  backlog-tasks -k YOUR_API_KEY -s mycompany -p MYPROJ
"""


def get_version() -> str:
    try:
        return version("backlog-tasks")
    except PackageNotFoundError:
        return "dev"


def classify_error(error: Exception) -> int:
    """Map an export failure onto a process exit code."""
    if isinstance(error, BacklogAuthenticationError):
        return EXIT_AUTH_ERROR
    if isinstance(error, BacklogNotFoundError):
        return EXIT_PROJECT_NOT_FOUND
    if isinstance(error, BacklogTransportError):
        return EXIT_NETWORK_ERROR
    if isinstance(error, BacklogRateLimitError):
        return EXIT_RATE_LIMIT_EXCEEDED
    if isinstance(error, ExportWriteError):
        return EXIT_OUTPUT_DIR_ERROR
    return EXIT_INVALID_ARGS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="backlog-tasks",
        description="A CLI tool to export incomplete tasks from Backlog.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--api-key", "-k", help="Backlog API key (or set BACKLOG_API_KEY)")
    parser.add_argument("--space", "-s", help="Backlog space ID (required)")
    parser.add_argument(
        "--domain", "-d", help="Backlog domain: backlog.com, backlog.jp, backlogtool.com (default: backlog.com)"
    )
    parser.add_argument("--project", "-p", help="Project ID or key (required)")
    parser.add_argument("--output", "-o", default="./", help="Output directory (default: ./)")
    parser.add_argument(
        "--format", "-f", default="txt", help="Output format: txt, json, markdown (default: txt)"
    )
    parser.add_argument("--assignee", "-a", type=int, help="Filter by assignee user ID")
    parser.add_argument(
        "--debug", action="store_true", help="Log API requests to stderr"
    )
    parser.add_argument(
        "--version", "-v", action="version", version=f"%(prog)s {get_version()}"
    )
    return parser


def load_config(args: argparse.Namespace) -> ExportConfig:
    """Merge CLI arguments over environment settings."""
    config = ExportConfig.from_env()
    config.merge(
        ExportConfig(
            api_key=args.api_key,
            space=args.space,
            domain=args.domain,
            project=args.project,
            output=args.output,
            format=args.format,
            assignee=args.assignee if args.assignee and args.assignee > 0 else None,
        )
    )
    return config


async def run_export(config: ExportConfig) -> Path:
    async with BacklogClient(config.base_url, config.api_key) as client:
        return await Exporter(client, config).run()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.debug:
        logging.basicConfig(
            level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s"
        )
        # httpx logs full request URLs, and those carry the apiKey parameter
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    config = load_config(args)

    try:
        config.validate()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        if not config.api_key:
            return EXIT_API_KEY_REQUIRED
        return EXIT_INVALID_ARGS

    logger.debug("Configuration: %s", config.to_dict())

    if not Path(config.output).is_dir():
        print(f"Error: Cannot write to directory '{config.output}'", file=sys.stderr)
        return EXIT_OUTPUT_DIR_ERROR

    try:
        asyncio.run(run_export(config))
    except (BacklogClientError, ExportWriteError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return classify_error(e)

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
