"""Vibe Coding bootstrap orchestrator.

Implements the linear project-creation sequence:

Step 1: CHECK ENVIRONMENT -- Validate the project name and the Node.js version.
Step 2: GITHUB TOKEN      -- Resolve the access token (environment or prompt).
Step 3: FRAMEWORK         -- Ask for React or Next.js.
Step 4: CREATE REPOSITORY -- Create the public GitHub repo, resolve the login.
Step 5: CLONE             -- Clone the empty repo into the working directory.
Step 6: SCAFFOLD          -- Generate into staging, write placeholder, merge.
Step 7: PUSH              -- Re-initialise git, commit, push to ``main``.
Step 8: DEPLOY            -- Vercel production deploy, report the URL.
Step 9: DEV SERVER        -- ``npm install`` and a background ``npm run dev``.

Every collaborator is injected so the sequence can run against fakes.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Awaitable, Callable

from pydantic import BaseModel, Field
from rich.panel import Panel

from vibecode.config import Config, Framework, ProjectDescriptor
from vibecode.deployer import VercelDeployer
from vibecode.environment import (
    check_node_version,
    resolve_github_token,
    validate_package_name,
    validate_project_name,
)
from vibecode.errors import VibeError
from vibecode.git import GitClient
from vibecode.github_client import GitHubClient, Repository
from vibecode.prompts import ask_framework, ask_github_token
from vibecode.scaffolder import ProjectScaffolder, merge_into, stage_project
from vibecode.utils import console, print_step_header, print_success, print_summary_table

STEP_NAMES: dict[int, str] = {
    1: "CHECK ENVIRONMENT",
    2: "GITHUB TOKEN",
    3: "FRAMEWORK",
    4: "CREATE REPOSITORY",
    5: "CLONE",
    6: "SCAFFOLD",
    7: "PUSH",
    8: "DEPLOY",
    9: "DEV SERVER",
}


class BootstrapError(Exception):
    """Raised when a bootstrap step fails. Carries the failing step number."""

    def __init__(self, step: int, message: str) -> None:
        self.step = step
        super().__init__(f"Step {step} ({STEP_NAMES.get(step, '?')}): {message}")


class BootstrapResult(BaseModel):
    """What a successful run produced."""

    project: ProjectDescriptor
    repository: Repository
    owner: str
    repo_path: Path
    placeholder_path: Path
    deployment_url: str | None = Field(default=None)
    local_url: str | None = Field(default=None)
    dev_server_pid: int | None = Field(default=None)


class Bootstrapper:
    """Runs the project-creation sequence once.

    Attributes:
        config: Settings for this run.
        github: GitHub client, created once the token is known.
    """

    def __init__(
        self,
        config: Config,
        *,
        github_factory: Callable[[str], GitHubClient] | None = None,
        git: GitClient | None = None,
        scaffolder: ProjectScaffolder | None = None,
        deployer: VercelDeployer | None = None,
        ask_token: Callable[[], str] = ask_github_token,
        choose_framework: Callable[[], Framework] = ask_framework,
        node_check: Callable[[str], Awaitable[str]] | None = None,
    ) -> None:
        self.config = config
        self._github_factory = github_factory or (
            lambda token: GitHubClient(token, base_url=config.github_api_url, timeout=config.api_timeout)
        )
        self.git = git or GitClient()
        self.scaffolder = scaffolder or ProjectScaffolder()
        self.deployer = deployer or VercelDeployer(
            url_pattern=config.deployment_url_pattern,
            probe_timeout=config.probe_timeout,
        )
        self._ask_token = ask_token
        self._choose_framework = choose_framework
        self._node_check = node_check or (
            lambda minimum: check_node_version(minimum, timeout=config.probe_timeout)
        )
        self.github: GitHubClient | None = None
        self._step = 0

    def _begin(self, step: int) -> None:
        self._step = step
        print_step_header(step, len(STEP_NAMES), STEP_NAMES[step])

    async def run(self, project_name: str) -> BootstrapResult:
        """Create, scaffold, push and deploy *project_name*.

        Raises:
            BootstrapError: On the first failing step, or when a prompt gets
                end-of-input. Work already done (e.g. a created repository)
                is not rolled back.
        """
        console.print(
            Panel(
                f"[bold bright_cyan]Starting Vibe Coding project:[/bold bright_cyan] {project_name}\n"
                f"Directory : {self.config.repo_path(project_name)}",
                title="[bold]Vibe Coding[/bold]",
                border_style="bright_cyan",
            )
        )
        try:
            return await self._run(project_name)
        except VibeError as exc:
            raise BootstrapError(self._step, str(exc)) from exc
        except EOFError:
            # stdin closed or empty at an interactive prompt
            raise BootstrapError(self._step, "No input received at the prompt.") from None

    async def _run(self, project_name: str) -> BootstrapResult:
        config = self.config

        self._begin(1)
        validate_project_name(project_name)
        node_version = await self._node_check(config.min_node_version)
        print_success(f"Node.js {node_version} detected")

        self._begin(2)
        token = resolve_github_token(config, self._ask_token)
        self.github = self._github_factory(token)

        self._begin(3)
        framework = self._choose_framework()
        validate_package_name(project_name, framework)
        project = ProjectDescriptor(name=project_name, framework=framework)
        print_success(f"Selected framework: {framework.label}")

        self._begin(4)
        console.print("[blue]Creating a new GitHub repository...[/blue]")
        repository = await self.github.create_repository(project.name, private=False)
        print_success(f"Repo created: {repository.html_url}")
        user = await self.github.get_authenticated_user()
        owner = user.login

        self._begin(5)
        repo_path = await self.git.clone(repository.clone_url, config.workdir, project.name)

        self._begin(6)
        staging_path = config.staging_path(project.name)
        staged_placeholder = await stage_project(
            self.scaffolder, project.framework, staging_path, project.name
        )
        console.print("Moving project files into the cloned GitHub repo...")
        await asyncio.to_thread(merge_into, staging_path, repo_path)
        placeholder_path = repo_path / staged_placeholder.relative_to(staging_path)

        self._begin(7)
        await self.git.reinitialize(
            repo_path,
            remote_url=config.remote_url(owner, project.name),
            commit_message=config.commit_message,
            gitignore_entries=config.gitignore_entries,
            branch=config.default_branch,
        )
        print_success("Project is set up and pushed to GitHub!")

        self._begin(8)
        await self.deployer.ensure_ready()
        deployment_url = await self.deployer.deploy(repo_path)
        if deployment_url:
            console.print(f"[bold white on blue] Your project is live at -> {deployment_url} [/bold white on blue]")

        result = BootstrapResult(
            project=project,
            repository=repository,
            owner=owner,
            repo_path=repo_path,
            placeholder_path=placeholder_path,
            deployment_url=deployment_url,
        )

        if config.start_dev_server:
            self._begin(9)
            await self.scaffolder.install_dependencies(repo_path)
            console.print("[green]Starting your project locally...[/green]")
            server = self.scaffolder.start_dev_server(repo_path)
            result.dev_server_pid = server.pid
            result.local_url = framework.local_url
            console.print(
                f"[cyan]Done! Your project is running at:\n"
                f"   - {framework.label}: {framework.local_url}[/cyan]"
            )

        self._print_summary(result)
        return result

    @staticmethod
    def _print_summary(result: BootstrapResult) -> None:
        print_summary_table(
            {
                "Project": result.project.name,
                "Framework": result.project.framework.label,
                "Repository": result.repository.html_url,
                "Local path": str(result.repo_path),
                "Deployment": result.deployment_url or "(URL not found)",
                "Dev server": result.local_url or "(not started)",
            },
            title="Vibe Coding Summary",
        )
