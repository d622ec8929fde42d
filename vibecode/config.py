"""Vibe Coding configuration.

Typed settings for a single bootstrap run. Values come from defaults, from the
process environment, or from a ``.env`` file in the working directory (loaded
with python-dotenv, never overriding variables that are already set).
"""

from __future__ import annotations

import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field


class Framework(str, Enum):
    """Frontend frameworks the bootstrapper can scaffold."""

    REACT = "react"
    NEXTJS = "nextjs"

    @property
    def label(self) -> str:
        """Human-readable name shown in the selection prompt."""
        return _FRAMEWORK_LABELS[self]

    @property
    def dev_port(self) -> int:
        """Port the framework's dev server listens on by default."""
        return 5173 if self is Framework.REACT else 3000

    @property
    def local_url(self) -> str:
        return f"http://localhost:{self.dev_port}"

    @classmethod
    def from_label(cls, label: str) -> "Framework":
        """Map a prompt label (``"React"``, ``"Next.js"``) back to a member."""
        for member, member_label in _FRAMEWORK_LABELS.items():
            if member_label == label:
                return member
        raise ValueError(f"Unknown framework: {label!r}")


_FRAMEWORK_LABELS: dict[Framework, str] = {
    Framework.REACT: "React",
    Framework.NEXTJS: "Next.js",
}


class ProjectDescriptor(BaseModel):
    """The user's chosen project. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Repository and directory name")
    framework: Framework


class Config(BaseModel):
    """Global settings for one bootstrap run.

    Created once by the CLI entry point (usually via :meth:`from_env`) and
    passed to the :class:`~vibecode.bootstrap.Bootstrapper`.
    """

    github_token: str | None = Field(default=None, repr=False)
    github_api_url: str = Field(default="https://api.github.com")
    github_web_url: str = Field(default="https://github.com")
    api_timeout: float = Field(default=30.0, gt=0)

    min_node_version: str = Field(default="18.18.0")
    probe_timeout: float = Field(
        default=30.0, gt=0, description="Timeout for quick probes such as `node --version`"
    )

    workdir: Path = Field(default_factory=Path.cwd)
    staging_root: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))

    commit_message: str = Field(default="Initial commit with selected framework")
    default_branch: str = Field(default="main")
    gitignore_entries: list[str] = Field(default=["node_modules/", ".vercel"])

    deployment_url_pattern: str = Field(default=r"https://[\w.-]+\.vercel\.app")
    start_dev_server: bool = Field(default=True)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def repo_path(self, project_name: str) -> Path:
        """Directory the remote repository is cloned into."""
        return self.workdir / project_name

    def staging_path(self, project_name: str) -> Path:
        """Throw-away directory the scaffolding generator writes into."""
        return self.staging_root / project_name

    def remote_url(self, owner: str, project_name: str) -> str:
        """HTTPS remote for ``owner/project_name``."""
        return f"{self.github_web_url.rstrip('/')}/{owner}/{project_name}.git"

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, dotenv_path: Path | None = None) -> "Config":
        """Build a ``Config`` from environment variables.

        A ``.env`` file is read first (from *dotenv_path*, or searched from the
        current working directory upwards); variables already present in the environment win.

        Recognised variables (all optional):
            GITHUB_TOKEN, VIBE_GITHUB_API_URL, VIBE_STAGING_DIR,
            VIBE_MIN_NODE_VERSION.
        """
        load_dotenv(dotenv_path=dotenv_path or find_dotenv(usecwd=True), override=False)

        kwargs: dict[str, Any] = {}
        token = os.environ.get("GITHUB_TOKEN", "").strip()
        if token:
            kwargs["github_token"] = token
        if os.environ.get("VIBE_GITHUB_API_URL"):
            kwargs["github_api_url"] = os.environ["VIBE_GITHUB_API_URL"]
        if os.environ.get("VIBE_STAGING_DIR"):
            kwargs["staging_root"] = Path(os.environ["VIBE_STAGING_DIR"])
        if os.environ.get("VIBE_MIN_NODE_VERSION"):
            kwargs["min_node_version"] = os.environ["VIBE_MIN_NODE_VERSION"]

        return cls(**kwargs)
