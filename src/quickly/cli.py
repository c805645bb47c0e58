"""Command-line entry point for quickly."""

from __future__ import annotations

import argparse
import logging
import sys

from . import __version__
from .colors import assign_colors, get_palette
from .config import QuicklySettings
from .directories import DirectoryConfigError, DirectoryLoader
from .runner import TaskExecutor, WorkerPool, build_tasks

logger = logging.getLogger(__name__)

USAGE = "Usage: quickly [--if-branch SUBSTR] <command> [args...]"


def configure_logging(level: str) -> None:
    """Configure root logging for the CLI."""

    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="[%(asctime)s] [%(levelname)s] %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quickly",
        description="Run a shell command in every configured directory concurrently.",
    )
    parser.add_argument(
        "-b",
        "--if-branch",
        dest="branch_filter",
        metavar="SUBSTR",
        default=None,
        help="Only run in directories whose current branch contains SUBSTR",
    )
    parser.add_argument(
        "-j",
        "--workers",
        type=int,
        default=None,
        help="Number of concurrent workers (default: QUICKLY_WORKERS or CPU count)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command to run; 'status' prints a one-line git summary per directory",
    )
    return parser


def run(args: argparse.Namespace, settings: QuicklySettings | None = None) -> int:
    """Run the command described by ``args`` and return the exit code."""

    command = " ".join(args.command).strip()
    if not command:
        print(USAGE, file=sys.stderr)
        return 1

    settings = settings or QuicklySettings()
    configure_logging(settings.log_level)

    loader = DirectoryLoader(settings.config_path)
    try:
        if loader.ensure_exists():
            print(
                f"Created new config file at {loader.path} with current directory",
                file=sys.stderr,
            )
        directories = loader.load().directories
    except DirectoryConfigError as exc:
        print(f"Error reading config: {exc}", file=sys.stderr)
        return 1

    workers = args.workers if args.workers is not None else settings.worker_count
    if workers < 1:
        print("--workers must be >= 1", file=sys.stderr)
        return 1

    colors = assign_colors(directories, get_palette(settings.palette))
    tasks = build_tasks(directories, command, colors, args.branch_filter)
    logger.info("Running %r in %d directories with %d workers", command, len(tasks), workers)

    executor = TaskExecutor(sys.stdout, shell=settings.shell)
    report = WorkerPool(executor, workers).run(tasks)
    return report.exit_code


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    exit_code = run(args)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
