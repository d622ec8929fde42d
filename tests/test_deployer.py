"""Unit tests for the Vercel deployer (vibecode.deployer).

Tests cover:
- extract_deployment_url (present, absent, empty, custom pattern)
- VercelDeployer.is_installed / whoami
- ensure_ready (missing CLI, logged in, login flow, login failure)
- deploy (URL from output, URL missing, command failure)
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from vibecode.deployer import VercelDeployer, extract_deployment_url
from vibecode.errors import DeploymentError

DEPLOY_OUTPUT = """\
Vercel CLI 37.4.2
Inspect: https://vercel.com/octocat/demo-app/8Fx2 [2s]
Production: https://demo-app-a1b2c3-octocat.vercel.app [40s]
"""


# ---------------------------------------------------------------------------
# extract_deployment_url
# ---------------------------------------------------------------------------


class TestExtractDeploymentUrl:
    @pytest.mark.unit
    def test_finds_url(self):
        assert extract_deployment_url(DEPLOY_OUTPUT) == "https://demo-app-a1b2c3-octocat.vercel.app"

    @pytest.mark.unit
    def test_exact_url_only(self):
        assert extract_deployment_url("https://my-app.vercel.app") == "https://my-app.vercel.app"

    @pytest.mark.unit
    def test_first_match_wins(self):
        text = "https://a.vercel.app then https://b.vercel.app"
        assert extract_deployment_url(text) == "https://a.vercel.app"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "text",
        ["", "Error: something went wrong", "http://plain.vercel.app", "https://vercel.com/dashboard", "\x00\xff"],
    )
    def test_not_found_returns_none(self, text):
        assert extract_deployment_url(text) is None

    @pytest.mark.unit
    def test_none_input(self):
        assert extract_deployment_url(None) is None

    @pytest.mark.unit
    def test_custom_pattern(self):
        assert extract_deployment_url("live at https://x.example.dev", r"https://[\w.-]+\.example\.dev") == (
            "https://x.example.dev"
        )


# ---------------------------------------------------------------------------
# VercelDeployer
# ---------------------------------------------------------------------------


class TestIsInstalled:
    @pytest.mark.unit
    def test_present(self):
        with patch("vibecode.deployer.shutil.which", return_value="/usr/local/bin/vercel"):
            assert VercelDeployer().is_installed() is True

    @pytest.mark.unit
    def test_absent(self):
        with patch("vibecode.deployer.shutil.which", return_value=None):
            assert VercelDeployer().is_installed() is False


class TestWhoami:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_logged_in(self):
        with patch("vibecode.deployer.run_command", AsyncMock(return_value=(0, "Vercel CLI 37.4.2\nocto", ""))):
            assert await VercelDeployer().whoami() == "octo"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_logged_out_nonzero(self):
        with patch("vibecode.deployer.run_command", AsyncMock(return_value=(1, "", "Error: not logged in"))):
            assert await VercelDeployer().whoami() is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_empty_output(self):
        with patch("vibecode.deployer.run_command", AsyncMock(return_value=(0, "  ", ""))):
            assert await VercelDeployer().whoami() is None


class TestEnsureReady:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_cli(self):
        deployer = VercelDeployer()
        deployer.whoami = AsyncMock()
        with patch("vibecode.deployer.shutil.which", return_value=None):
            with pytest.raises(DeploymentError, match="npm install -g vercel"):
                await deployer.ensure_ready()
        deployer.whoami.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_already_logged_in(self):
        deployer = VercelDeployer()
        deployer.whoami = AsyncMock(return_value="octo")
        deployer.login = AsyncMock()
        with patch("vibecode.deployer.shutil.which", return_value="/bin/vercel"):
            assert await deployer.ensure_ready() == "octo"
        deployer.login.assert_not_called()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_login_then_recheck(self):
        deployer = VercelDeployer()
        deployer.whoami = AsyncMock(side_effect=[None, "octo"])
        deployer.login = AsyncMock()
        with patch("vibecode.deployer.shutil.which", return_value="/bin/vercel"):
            assert await deployer.ensure_ready() == "octo"
        deployer.login.assert_awaited_once()
        assert deployer.whoami.await_count == 2

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_login_failure(self):
        deployer = VercelDeployer()
        deployer.whoami = AsyncMock(return_value=None)
        deployer.login = AsyncMock()
        with patch("vibecode.deployer.shutil.which", return_value="/bin/vercel"):
            with pytest.raises(DeploymentError, match="authentication failed"):
                await deployer.ensure_ready()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_login_uses_github(self):
        run = AsyncMock(return_value=(0, "", ""))
        with patch("vibecode.deployer.run_command", run):
            await VercelDeployer().login()
        assert run.call_args.args[0] == ["vercel", "login", "--github"]
        assert run.call_args.kwargs["capture"] is False


class TestDeploy:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_returns_url_from_output(self, tmp_path: Path):
        run = AsyncMock(return_value=(0, "https://demo-app.vercel.app", "Deploying..."))
        with patch("vibecode.deployer.run_command", run):
            url = await VercelDeployer().deploy(tmp_path)

        assert url == "https://demo-app.vercel.app"
        assert run.call_args.args[0] == ["vercel", "--prod", "--yes"]
        assert run.call_args.kwargs["cwd"] == tmp_path
        assert run.await_count == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_url_in_stderr(self, tmp_path: Path):
        with patch("vibecode.deployer.run_command", AsyncMock(return_value=(0, "", DEPLOY_OUTPUT))):
            assert await VercelDeployer().deploy(tmp_path) == "https://demo-app-a1b2c3-octocat.vercel.app"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_url_not_found_warns(self, tmp_path: Path):
        with patch("vibecode.deployer.run_command", AsyncMock(return_value=(0, "done", ""))):
            with patch("vibecode.deployer.print_warning") as warn:
                url = await VercelDeployer().deploy(tmp_path)
        assert url is None
        warn.assert_called_once_with("Vercel deployment URL not found.")

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_failure_raises(self, tmp_path: Path):
        with patch("vibecode.deployer.run_command", AsyncMock(return_value=(1, "", "Error: build failed"))):
            with pytest.raises(DeploymentError, match="Vercel deployment failed") as exc_info:
                await VercelDeployer().deploy(tmp_path)
        assert exc_info.value.stderr == "Error: build failed"
