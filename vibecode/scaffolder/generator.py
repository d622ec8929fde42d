"""Scaffolding orchestration.

Runs the framework's generator inside an empty staging directory, overwrites
the entry component with the Vibe Coding placeholder, and moves the result
into the cloned repository. Also drives the local developer loop
(``npm install`` followed by a background ``npm run dev``).
"""

from __future__ import annotations

import asyncio
import shutil
import subprocess
from pathlib import Path

from vibecode.config import Framework
from vibecode.errors import ScaffoldError
from vibecode.utils import console, run_command
from vibecode.scaffolder.frameworks import get_spec
from vibecode.scaffolder.templates import TemplateRenderer


def prepare_staging(staging_path: str | Path) -> Path:
    """Create *staging_path* as an empty directory, removing anything already there.

    Generators refuse to write into a non-empty directory.
    """
    path = Path(staging_path)
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()
    path.mkdir(parents=True)
    return path


def merge_into(source_dir: str | Path, target_dir: str | Path) -> list[Path]:
    """Move every entry of *source_dir* (dotfiles included) into *target_dir*.

    Entries already present in the target under the same name are replaced.
    The emptied *source_dir* is removed afterwards.

    Returns:
        The moved paths at their new location, sorted by name.
    """
    source = Path(source_dir)
    target = Path(target_dir)
    target.mkdir(parents=True, exist_ok=True)

    moved: list[Path] = []
    for entry in sorted(source.iterdir(), key=lambda p: p.name):
        destination = target / entry.name
        if destination.is_dir() and not destination.is_symlink():
            shutil.rmtree(destination)
        elif destination.exists() or destination.is_symlink():
            destination.unlink()
        shutil.move(str(entry), str(destination))
        moved.append(destination)

    source.rmdir()
    return moved


class ProjectScaffolder:
    """Wraps the npm/npx generators and the project's npm scripts."""

    def __init__(self, renderer: TemplateRenderer | None = None, timeout: float | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()
        self.timeout = timeout

    async def scaffold(self, framework: Framework, project_root: str | Path) -> Path:
        """Run the framework generator inside *project_root*.

        Raises:
            ScaffoldError: If the generator exits with a non-zero status.
        """
        spec = get_spec(framework)
        root = Path(project_root)
        cmd = list(spec.generator_command)
        cmd_str = " ".join(cmd)

        console.print(f"[blue]Setting up {framework.label} project in {root}...[/blue]")
        returncode, _, stderr = await run_command(
            cmd, cwd=root, timeout=self.timeout, capture=False
        )
        if returncode != 0:
            raise ScaffoldError(
                f"{framework.label} generator failed (exit {returncode}): {cmd_str}\n{stderr}".rstrip(),
                command=cmd_str,
                stderr=stderr,
            )
        return root

    async def write_placeholder(
        self,
        framework: Framework,
        project_root: str | Path,
        project_name: str,
    ) -> Path:
        """Overwrite the framework's entry component with the placeholder UI."""
        spec = get_spec(framework)
        target = Path(project_root) / spec.placeholder_path
        return await self.renderer.render_to_file(
            spec.placeholder_template,
            target,
            {"project_name": project_name, "framework_label": framework.label},
        )

    async def install_dependencies(self, project_root: str | Path) -> None:
        """Run ``npm install`` in *project_root*."""
        console.print("[blue]Installing dependencies...[/blue]")
        returncode, _, stderr = await run_command(
            ["npm", "install"], cwd=project_root, timeout=self.timeout, capture=False
        )
        if returncode != 0:
            raise ScaffoldError(
                f"npm install failed (exit {returncode})\n{stderr}".rstrip(),
                command="npm install",
                stderr=stderr,
            )

    def start_dev_server(self, project_root: str | Path) -> subprocess.Popen:
        """Launch ``npm run dev`` in the background and return immediately.

        The server is not awaited and keeps running after the bootstrapper
        exits. Its output goes to the terminal.
        """
        try:
            return subprocess.Popen(["npm", "run", "dev"], cwd=str(project_root))
        except FileNotFoundError:
            raise ScaffoldError("npm is not installed or not on PATH.", command="npm run dev") from None


async def stage_project(
    scaffolder: ProjectScaffolder,
    framework: Framework,
    staging_path: str | Path,
    project_name: str,
) -> Path:
    """Scaffold into a fresh staging directory and write the placeholder.

    Returns:
        The path of the written placeholder file.
    """
    staging = await asyncio.to_thread(prepare_staging, staging_path)
    console.print(f"Using temporary directory for project setup: [cyan]{staging}[/cyan]")
    await scaffolder.scaffold(framework, staging)
    return await scaffolder.write_placeholder(framework, staging, project_name)
