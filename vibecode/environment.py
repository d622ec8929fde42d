"""Pre-flight checks: project name, Node.js runtime, and GitHub credential."""

from __future__ import annotations

import re
from typing import Callable

from vibecode.config import Config, Framework
from vibecode.errors import CredentialError, EnvironmentCheckError
from vibecode.utils import console, parse_version, print_success, run_command, version_at_least

# GitHub accepts ASCII letters, digits, '.', '-' and '_' in repository names.
_REPO_NAME_RE = re.compile(r"^[A-Za-z0-9._-]{1,100}$")


def validate_project_name(name: str) -> str:
    """Return *name* unchanged if it is usable as a repository and directory name.

    Raises:
        EnvironmentCheckError: If the name contains characters GitHub rejects
            or is one of the reserved ``.``/``..`` names.
    """
    if not _REPO_NAME_RE.match(name) or name in (".", ".."):
        raise EnvironmentCheckError(
            f"Invalid project name '{name}'. Use letters, digits, '.', '-' or '_' "
            "(at most 100 characters)."
        )
    return name


def validate_package_name(name: str, framework: Framework) -> str:
    """Return *name* if the framework's generator accepts it as an npm package name.

    create-next-app names the package after its target directory and refuses
    uppercase letters or a leading ``.``/``_``. create-vite normalises the name
    itself, so React projects are not restricted further.

    Raises:
        EnvironmentCheckError: If the generator would reject *name*.
    """
    if framework is Framework.NEXTJS and (name != name.lower() or name[:1] in (".", "_")):
        raise EnvironmentCheckError(
            f"Invalid project name '{name}' for {framework.label}. npm package names must be "
            "lowercase and cannot start with '.' or '_'."
        )
    return name


async def check_node_version(minimum: str, timeout: float | None = 30.0) -> str:
    """Verify that Node.js is installed and at least *minimum*.

    Returns:
        The installed version string without the leading ``v``.

    Raises:
        EnvironmentCheckError: If ``node`` is missing, unreadable, or too old.
    """
    returncode, stdout, stderr = await run_command(["node", "--version"], timeout=timeout)
    if returncode != 0:
        raise EnvironmentCheckError(
            f"Node.js {minimum} or higher is required but `node` could not be run "
            f"({stderr or 'exit ' + str(returncode)}).\nInstall it from: https://nodejs.org/"
        )

    installed = stdout.strip().lstrip("v")
    try:
        parse_version(installed)
    except ValueError:
        raise EnvironmentCheckError(
            f"Could not determine the Node.js version from {stdout!r}."
        ) from None

    if not version_at_least(installed, minimum):
        raise EnvironmentCheckError(
            f"You need Node.js {minimum} or higher (found {installed}).\n"
            "Upgrade at: https://nodejs.org/"
        )
    return installed


def resolve_github_token(config: Config, ask: Callable[[], str]) -> str:
    """Return the GitHub token from *config*, prompting once if it is missing.

    The entered token is returned to the caller and kept in memory only; it is
    never written to disk or to ``os.environ``.

    Raises:
        CredentialError: If the prompt returns an empty or whitespace-only string.
    """
    if config.github_token and config.github_token.strip():
        console.print("GitHub Token: [green]set[/green]")
        return config.github_token.strip()

    console.print("[red]GitHub Token is missing.[/red]")
    token = (ask() or "").strip()
    if not token:
        raise CredentialError("No token provided. Set GITHUB_TOKEN or enter a token when prompted.")

    print_success("GitHub Token set for this session.")
    console.print(
        "[yellow]Tip: save GITHUB_TOKEN in a `.env` file to avoid entering it every time.[/yellow]"
    )
    return token
