"""Immutable snapshot of the event that triggered the workflow."""

import json
import os

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


class InvalidEventError(ValueError):
    """Exception indicating that the event payload is unusable."""


@dataclass(frozen=True)
class PullRequest:
    """The subset of a pull request payload used to pick a version bump."""

    number: int
    merged: bool = False
    labels: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: dict) -> "PullRequest":
        """Parse the `pull_request` object of a webhook payload."""
        return cls(
            number=payload["number"],
            merged=bool(payload.get("merged") or False),
            labels=tuple(label["name"] for label in payload.get("labels") or []),
        )


@dataclass(frozen=True)
class EventContext:
    """Repository coordinates plus the optional pull request."""

    owner: str
    repo: str
    default_branch: str
    pull_request: Optional[PullRequest] = None

    @classmethod
    def from_event_data(cls, owner_repo: str, event_data: dict) -> "EventContext":
        """Build a context from `owner/repo` and a decoded event payload."""
        owner, _, repo = owner_repo.partition("/")
        if not owner or not repo:
            raise InvalidEventError(f"Repository `{owner_repo}` is not `owner/repo`")

        try:
            default_branch = event_data["repository"]["default_branch"]
        except (KeyError, TypeError) as err:
            raise InvalidEventError(
                "Event payload does not include the repository default branch"
            ) from err

        pull_request = None
        if pr_payload := event_data.get("pull_request"):
            pull_request = PullRequest.from_payload(pr_payload)

        return cls(
            owner=owner,
            repo=repo,
            default_branch=default_branch,
            pull_request=pull_request,
        )

    @classmethod
    def from_environment(cls) -> "EventContext":
        """Parse an EventContext from the GitHub Actions environment."""
        with Path(os.environ["GITHUB_EVENT_PATH"]).open(encoding="utf-8") as infile:
            event_data = json.load(infile)

        return cls.from_event_data(os.environ["GITHUB_REPOSITORY"], event_data)
