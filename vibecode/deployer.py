"""Vercel deployment through the ``vercel`` CLI.

The CLI is treated as an opaque collaborator: presence is checked with
``shutil.which``, login state with ``vercel whoami``, and the production URL is
read from the text the deploy command prints.
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path

from vibecode.errors import DeploymentError
from vibecode.utils import console, print_success, print_warning, run_command

DEFAULT_URL_PATTERN = r"https://[\w.-]+\.vercel\.app"


def extract_deployment_url(output: str, pattern: str = DEFAULT_URL_PATTERN) -> str | None:
    """Return the first deployment URL found in *output*, or ``None``.

    Never raises for malformed or empty input.
    """
    if not output:
        return None
    match = re.search(pattern, output)
    return match.group(0) if match else None


class VercelDeployer:
    """Drives the Vercel CLI for a single production deployment."""

    def __init__(
        self,
        executable: str = "vercel",
        url_pattern: str = DEFAULT_URL_PATTERN,
        probe_timeout: float | None = 30.0,
        timeout: float | None = None,
    ) -> None:
        self.executable = executable
        self.url_pattern = url_pattern
        self.probe_timeout = probe_timeout
        self.timeout = timeout

    def is_installed(self) -> bool:
        return shutil.which(self.executable) is not None

    async def whoami(self) -> str | None:
        """Return the logged-in Vercel username, or ``None`` when logged out."""
        returncode, stdout, _ = await run_command(
            [self.executable, "whoami"], timeout=self.probe_timeout
        )
        if returncode != 0:
            return None
        # whoami prints the username as its last line
        lines = [line.strip() for line in stdout.splitlines() if line.strip()]
        return lines[-1] if lines else None

    async def login(self) -> None:
        """Run the GitHub-backed login flow with the user's terminal attached."""
        await run_command([self.executable, "login", "--github"], capture=False)

    async def ensure_ready(self) -> str:
        """Verify the CLI is installed and logged in, logging in once if needed.

        Returns:
            The Vercel username.

        Raises:
            DeploymentError: If the CLI is missing or login does not succeed.
        """
        console.print("[blue]Checking for Vercel CLI...[/blue]")
        if not self.is_installed():
            raise DeploymentError(
                "Vercel CLI is not installed.\nRun: npm install -g vercel",
                command=self.executable,
            )
        print_success("Vercel CLI detected!")

        user = await self.whoami()
        if not user:
            console.print("[yellow]Logging into Vercel with GitHub...[/yellow]")
            await self.login()
            user = await self.whoami()
            if not user:
                raise DeploymentError(
                    "Vercel authentication failed. Run `vercel login` and try again.",
                    command=f"{self.executable} login --github",
                )

        print_success(f"Logged into Vercel as {user}")
        return user

    async def deploy(self, project_path: str | Path) -> str | None:
        """Run a production deploy from *project_path*.

        Returns:
            The deployment URL printed by the CLI, or ``None`` if it could not
            be found (reported as a warning; the deploy itself succeeded).

        Raises:
            DeploymentError: If the deploy command exits with a non-zero status.
        """
        cmd = [self.executable, "--prod", "--yes"]
        cmd_str = " ".join(cmd)

        console.print("[blue]Deploying project to Vercel...[/blue]")
        returncode, stdout, stderr = await run_command(cmd, cwd=project_path, timeout=self.timeout)
        if returncode != 0:
            raise DeploymentError(
                f"Vercel deployment failed (exit {returncode}): {cmd_str}\n{stderr}".rstrip(),
                command=cmd_str,
                stderr=stderr,
            )

        url = extract_deployment_url(f"{stdout}\n{stderr}", self.url_pattern)
        if url is None:
            print_warning("Vercel deployment URL not found.")
        return url
