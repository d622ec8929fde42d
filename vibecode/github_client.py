"""Async client for the GitHub REST API.

Wraps the two endpoints the bootstrapper needs (``POST /user/repos`` and
``GET /user``) with timeout handling and structured responses. Every failure
is raised as :class:`~vibecode.errors.GitHubError` carrying GitHub's own
error message; nothing is retried.

Typical usage::

    client = GitHubClient(token)
    repo = await client.create_repository("demo-app")
    print(repo.html_url)
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import BaseModel, Field

from vibecode.errors import GitHubError


class GitHubUser(BaseModel):
    """The identity the access token authenticates as."""

    login: str


class Repository(BaseModel):
    """A repository returned by the create-repository call."""

    name: str
    html_url: str = Field(description="Web URL of the repository")
    clone_url: str = Field(description="HTTPS clone URL")
    owner_login: str = Field(default="")
    private: bool = Field(default=False)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Repository":
        return cls(
            name=data["name"],
            html_url=data["html_url"],
            clone_url=data["clone_url"],
            owner_login=(data.get("owner") or {}).get("login", ""),
            private=bool(data.get("private", False)),
        )


class GitHubClient:
    """Async client for the GitHub REST API.

    A fresh ``httpx.AsyncClient`` is opened per call; the token is sent as a
    bearer credential and never logged.
    """

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.github.com",
        timeout: float = 30.0,
    ) -> None:
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` configured with auth headers and timeout."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={
                "Authorization": f"Bearer {self.token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            },
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Build a readable message from a GitHub error response.

        GitHub puts a summary in ``message`` and validation details in
        ``errors[].message`` (e.g. "name already exists on this account").
        """
        try:
            data = response.json()
        except ValueError:
            return f"HTTP {response.status_code}: {response.text[:500]}"

        if not isinstance(data, dict):
            return f"HTTP {response.status_code}"

        message = data.get("message") or f"HTTP {response.status_code}"
        details = [
            err.get("message")
            for err in data.get("errors", [])
            if isinstance(err, dict) and err.get("message")
        ]
        if details:
            message = f"{message}: {'; '.join(details)}"
        return message

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            async with self._client() as client:
                response = await client.request(method, path, **kwargs)
        except httpx.ConnectError:
            raise GitHubError(f"Cannot connect to GitHub at {self.base_url}.") from None
        except httpx.TimeoutException:
            raise GitHubError(f"Request to GitHub timed out after {self.timeout}s.") from None
        except httpx.HTTPError as exc:
            raise GitHubError(f"GitHub request failed: {exc}") from exc

        if response.is_error:
            raise GitHubError(self._error_message(response), status_code=response.status_code)
        return response.json()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_authenticated_user(self) -> GitHubUser:
        """Return the user the token belongs to (``GET /user``)."""
        data = await self._request("GET", "/user")
        return GitHubUser(login=data["login"])

    async def create_repository(self, name: str, private: bool = False) -> Repository:
        """Create a repository owned by the authenticated user.

        Name collisions surface as a ``GitHubError`` with status 422.
        """
        data = await self._request(
            "POST",
            "/user/repos",
            json={"name": name, "private": private},
        )
        return Repository.from_api(data)
