"""Command-line entry point: ``vibe-coding start <projectName>``."""

from __future__ import annotations

import argparse
import asyncio
import sys

from rich.markup import escape

from vibecode import __version__
from vibecode.bootstrap import BootstrapError, Bootstrapper
from vibecode.config import Config
from vibecode.utils import console, print_error


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vibe-coding",
        description="Create a GitHub repo, scaffold React or Next.js into it, push and deploy to Vercel.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  vibe-coding start demo-app\n"
            "  GITHUB_TOKEN=ghp_... vibe-coding start my-site\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    start = subparsers.add_parser(
        "start",
        help="Create a new GitHub repository and set up the project",
        description="Create a new GitHub repository and set up the project",
    )
    start.add_argument("project_name", metavar="projectName", help="Repository and directory name")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse *argv*, run the bootstrapper, and return the process exit code."""
    args = build_parser().parse_args(argv)

    config = Config.from_env()
    bootstrapper = Bootstrapper(config)

    try:
        asyncio.run(bootstrapper.run(args.project_name))
    except BootstrapError as exc:
        print_error(f"Error: {escape(str(exc))}")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted.[/yellow]")
        return 130

    return 0


def run() -> None:
    """Console-script wrapper around :func:`main`."""
    sys.exit(main())


if __name__ == "__main__":
    run()
