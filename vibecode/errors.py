"""Exception hierarchy for the Vibe Coding bootstrapper.

Every failure the bootstrapper treats as fatal derives from :class:`VibeError`.
The CLI catches the base class, prints the message and exits with status 1.
"""

from __future__ import annotations


class VibeError(Exception):
    """Base class for all bootstrapper failures."""


class EnvironmentCheckError(VibeError):
    """The host environment cannot run the bootstrapper (Node.js, project name)."""


class CredentialError(VibeError):
    """No usable GitHub token was provided."""


class GitHubError(VibeError):
    """A GitHub REST API call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class CommandError(VibeError):
    """An external command exited with a non-zero status."""

    def __init__(self, message: str, command: str = "", stderr: str = "") -> None:
        self.command = command
        self.stderr = stderr
        super().__init__(message)


class GitError(CommandError):
    """A git command failed."""


class ScaffoldError(CommandError):
    """A scaffolding generator or npm command failed."""


class DeploymentError(CommandError):
    """The Vercel CLI is missing, unauthenticated, or the deploy failed."""
