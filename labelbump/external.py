"""Collaborators that talk to GitHub and the Actions runner."""

import json
import os
import subprocess

from typing import Optional, Protocol

from .context import EventContext
from .logging import LoggerSink, LoggingMixin


class MissingTokenError(RuntimeError):
    """Exception indicating that no GitHub credential is available."""


class DebugSink(Protocol):
    """Anything that can record a debug message."""

    # pylint: disable=too-few-public-methods

    def record(self, message: str) -> None:
        """Record a single debug message."""


class Client(Protocol):
    """The GitHub REST calls needed to locate tags."""

    def list_commits(
        self, owner: str, repo: str, ref: str, per_page: int = 100
    ) -> list[dict]:
        """List commits reachable from `ref`, newest first."""

    def list_pull_request_commits(
        self, owner: str, repo: str, pull_number: int, per_page: int = 100
    ) -> list[dict]:
        """List the commits on a pull request."""

    def list_tags(self, owner: str, repo: str, per_page: int = 100) -> list[dict]:
        """List repository tags."""


class External(Protocol):
    """Everything the resolvers need from the outside world."""

    def get_input(self, name: str, trim_whitespace: bool = True) -> str:
        """Return the named action input, or an empty string."""

    def log_debug(self, message: str) -> None:
        """Emit a debug trace."""

    def get_token(self) -> str:
        """Return the API credential."""

    def get_client(self, token: str) -> Client:
        """Construct an API client."""

    def get_event_context(self) -> EventContext:
        """Return the triggering event."""


class GitHubClient(LoggingMixin):
    """GitHub REST client backed by the `gh` command-line tool."""

    def __init__(self, token: str):
        self.token = token

    def _get(self, endpoint: str, **params) -> list[dict]:
        """Run `gh api` for a GET request and decode the JSON response."""
        args = ["gh", "api", "--method", "GET", endpoint]
        for key, value in params.items():
            args.extend(["--raw-field", f"{key}={value}"])

        self.logger.debug("Running %s", args)

        return json.loads(
            subprocess.check_output(
                args,
                env={**os.environ, "GH_TOKEN": self.token},
            )
        )

    def list_commits(
        self, owner: str, repo: str, ref: str, per_page: int = 100
    ) -> list[dict]:
        return self._get(f"repos/{owner}/{repo}/commits", sha=ref, per_page=per_page)

    def list_pull_request_commits(
        self, owner: str, repo: str, pull_number: int, per_page: int = 100
    ) -> list[dict]:
        return self._get(
            f"repos/{owner}/{repo}/pulls/{pull_number}/commits", per_page=per_page
        )

    def list_tags(self, owner: str, repo: str, per_page: int = 100) -> list[dict]:
        return self._get(f"repos/{owner}/{repo}/tags", per_page=per_page)


class ActionsExternal:
    """External services as seen from inside a GitHub Actions job."""

    def __init__(self, sink: Optional[DebugSink] = None):
        self.sink = sink if sink is not None else LoggerSink()

    def get_input(self, name: str, trim_whitespace: bool = True) -> str:
        # Matches the runner's encoding of `with:` inputs
        value = os.environ.get(f"INPUT_{name.replace(' ', '_').upper()}", "")
        return value.strip() if trim_whitespace else value

    def log_debug(self, message: str):
        self.sink.record(message)

    def get_token(self) -> str:
        for token in (
            self.get_input("github_token"),
            os.environ.get("GITHUB_TOKEN"),
            os.environ.get("GH_TOKEN"),
        ):
            if token:
                return token

        raise MissingTokenError(
            "No GitHub token found in the `github_token` input, "
            "GITHUB_TOKEN, or GH_TOKEN"
        )

    def get_client(self, token: str) -> GitHubClient:
        return GitHubClient(token)

    def get_event_context(self) -> EventContext:
        return EventContext.from_environment()
