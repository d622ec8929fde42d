"""Git operations for the bootstrapped project.

Clones the freshly created remote, then throws away whatever history the clone
or the scaffolding generator left behind and records a single initial commit
on ``main`` that is pushed with upstream tracking.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from rich.panel import Panel

from vibecode.errors import GitError
from vibecode.utils import console, run_command


async def _run_git(
    *args: str,
    cwd: str | Path | None = None,
    timeout: float | None = None,
    capture: bool = True,
) -> str:
    """Run a git command and return its stdout.

    Raises GitError if the command exits with a non-zero code.
    """
    cmd = ["git", *args]
    cmd_str = " ".join(cmd)

    returncode, stdout, stderr = await run_command(cmd, cwd=cwd, timeout=timeout, capture=capture)
    if returncode != 0:
        raise GitError(
            f"Git command failed (exit {returncode}): {cmd_str}\n{stderr}".rstrip(),
            command=cmd_str,
            stderr=stderr,
        )
    return stdout


class GitClient:
    """Runs the git steps of a bootstrap, checking every exit code."""

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    async def clone(self, clone_url: str, parent_dir: str | Path, name: str) -> Path:
        """Clone *clone_url* into ``parent_dir/name`` and return that path."""
        target = Path(parent_dir) / name
        console.print("Cloning repository locally...")
        await _run_git(
            "clone", clone_url, name,
            cwd=parent_dir, timeout=self.timeout, capture=False,
        )
        return target

    async def reinitialize(
        self,
        repo_path: str | Path,
        remote_url: str,
        commit_message: str,
        gitignore_entries: list[str],
        branch: str = "main",
    ) -> None:
        """Replace the repository history with one commit and push it.

        Steps, each checked: remove ``.git``, ``git init``, write
        ``.gitignore``, stage everything except ``node_modules/``, commit,
        rename the branch, add ``origin`` and push with upstream tracking.
        """
        repo = Path(repo_path)

        git_dir = repo / ".git"
        if git_dir.exists():
            shutil.rmtree(git_dir)

        await _run_git("init", cwd=repo, timeout=self.timeout)

        (repo / ".gitignore").write_text("\n".join(gitignore_entries) + "\n", encoding="utf-8")

        await _run_git("add", "-A", "-f", "--", ".", ":!node_modules/", cwd=repo, timeout=self.timeout)
        await _run_git("commit", "-m", commit_message, cwd=repo, timeout=self.timeout)
        await _run_git("branch", "-M", branch, cwd=repo, timeout=self.timeout)
        await _run_git("remote", "add", "origin", remote_url, cwd=repo, timeout=self.timeout)

        console.print(f"Pushing to [cyan]{remote_url}[/cyan]...")
        await _run_git(
            "push", "-u", "origin", branch,
            cwd=repo, timeout=self.timeout, capture=False,
        )

        console.print(
            Panel(
                f"[green]Project pushed to GitHub[/green]\n"
                f"  Remote: {remote_url}\n"
                f"  Branch: {branch}",
                title="Repository Ready",
                border_style="green",
            )
        )
