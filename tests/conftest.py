"""Shared pytest fixtures for the Vibe Coding test suite.

Provides reusable fixtures for:
- Temporary working and staging directories with a matching ``Config``
- Mock subprocess helpers
- Fake collaborators (GitHub client, git, scaffolder, deployer) that record
  every call and can be told to fail
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from vibecode.config import Config, Framework
from vibecode.errors import DeploymentError, GitHubError
from vibecode.github_client import GitHubUser, Repository
from vibecode.scaffolder import ProjectScaffolder


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------

@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Directory the bootstrapper clones into."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def staging_root(tmp_path: Path) -> Path:
    """Stand-in for the system temp directory."""
    path = tmp_path / "staging"
    path.mkdir()
    return path


@pytest.fixture
def config(workdir: Path, staging_root: Path) -> Config:
    """Config pointing at tmp directories with a token already set."""
    return Config(github_token="ghp_test", workdir=workdir, staging_root=staging_root)


# ---------------------------------------------------------------------------
# Subprocess
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", AsyncMock(return_value=proc)):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------

class FakeGitHub:
    """Records API calls; remembers created names so a second create collides."""

    def __init__(self, login: str = "octocat", existing: set[str] | None = None) -> None:
        self.login = login
        self.existing = set(existing or ())
        self.calls: list[tuple[str, Any]] = []

    async def create_repository(self, name: str, private: bool = False) -> Repository:
        self.calls.append(("create_repository", name))
        if name in self.existing:
            raise GitHubError(
                "Repository creation failed.: name already exists on this account",
                status_code=422,
            )
        self.existing.add(name)
        return Repository(
            name=name,
            html_url=f"https://github.com/{self.login}/{name}",
            clone_url=f"https://github.com/{self.login}/{name}.git",
            owner_login=self.login,
            private=private,
        )

    async def get_authenticated_user(self) -> GitHubUser:
        self.calls.append(("get_authenticated_user", None))
        return GitHubUser(login=self.login)


class FakeGit:
    """Creates the clone directory (with a ``.git``) and records the push."""

    def __init__(self) -> None:
        self.cloned: list[str] = []
        self.reinitialized: list[dict[str, Any]] = []

    async def clone(self, clone_url: str, parent_dir: Path, name: str) -> Path:
        self.cloned.append(clone_url)
        target = Path(parent_dir) / name
        (target / ".git").mkdir(parents=True)
        return target

    async def reinitialize(self, repo_path, remote_url, commit_message, gitignore_entries, branch="main"):
        repo = Path(repo_path)
        self.reinitialized.append(
            {
                "repo_path": repo,
                "remote_url": remote_url,
                "commit_message": commit_message,
                "branch": branch,
            }
        )
        (repo / ".gitignore").write_text("\n".join(gitignore_entries) + "\n", encoding="utf-8")


class FakeScaffolder(ProjectScaffolder):
    """Real placeholder rendering; the generator and npm are simulated."""

    def __init__(self) -> None:
        super().__init__()
        self.scaffolded: list[tuple[Framework, Path]] = []
        self.installed: list[Path] = []
        self.dev_servers: list[Path] = []

    async def scaffold(self, framework: Framework, project_root) -> Path:
        root = Path(project_root)
        assert not any(root.iterdir()), "staging directory must be empty"
        self.scaffolded.append((framework, root))
        (root / "package.json").write_text('{"name": "generated"}', encoding="utf-8")
        (root / ".gitignore").write_text("dist\n", encoding="utf-8")
        (root / ".git").mkdir()
        if framework is Framework.REACT:
            (root / "src").mkdir()
            (root / "src" / "App.tsx").write_text("generated app", encoding="utf-8")
        else:
            (root / "src" / "app").mkdir(parents=True)
            (root / "src" / "app" / "page.tsx").write_text("generated page", encoding="utf-8")
        return root

    async def install_dependencies(self, project_root) -> None:
        self.installed.append(Path(project_root))

    def start_dev_server(self, project_root) -> subprocess.Popen:
        self.dev_servers.append(Path(project_root))
        server = MagicMock(spec=subprocess.Popen)
        server.pid = 4242
        return server


class FakeDeployer:
    """Vercel stand-in: installed and logged in unless told otherwise."""

    def __init__(
        self,
        installed: bool = True,
        output_url: str | None = "https://demo-app-octocat.vercel.app",
    ) -> None:
        self.installed = installed
        self.output_url = output_url
        self.deployed: list[Path] = []
        self.checked = False

    async def ensure_ready(self) -> str:
        self.checked = True
        if not self.installed:
            raise DeploymentError("Vercel CLI is not installed.\nRun: npm install -g vercel")
        return "vibe-user"

    async def deploy(self, project_path) -> str | None:
        self.deployed.append(Path(project_path))
        return self.output_url


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()


@pytest.fixture
def fake_scaffolder() -> FakeScaffolder:
    return FakeScaffolder()


@pytest.fixture
def fake_deployer() -> FakeDeployer:
    return FakeDeployer()
