"""Interactive prompts.

Thin wrappers over :mod:`rich.prompt` so the bootstrapper can receive them as
plain callables and tests can substitute canned answers.
"""

from __future__ import annotations

from rich.prompt import Prompt

from vibecode.config import Framework
from vibecode.utils import console


def ask_github_token() -> str:
    """Ask for a GitHub personal access token without echoing it."""
    return Prompt.ask(
        "[blue]Enter your GitHub Personal Access Token[/blue]",
        console=console,
        password=True,
        default="",
        show_default=False,
    )


def ask_framework() -> Framework:
    """Single-select framework prompt. Blocks until a listed choice is entered."""
    labels = [member.label for member in Framework]
    answer = Prompt.ask(
        "Choose a framework for your Vibe Coding project",
        console=console,
        choices=labels,
    )
    return Framework.from_label(answer)
