"""Local plugin providing a fake set of external services."""

from unittest.mock import Mock

import pytest

from labelbump.context import EventContext, PullRequest


class FakeExternal:
    """An in-memory stand-in for the GitHub Actions runner and API."""

    def __init__(self, context, inputs=None, commits=None, pr_commits=None, tags=None):
        self.context = context
        self.inputs = inputs or {}
        self.messages = []

        self.client = Mock()
        self.client.list_commits.return_value = [
            {"sha": sha} for sha in commits or []
        ]
        self.client.list_pull_request_commits.return_value = [
            {"sha": sha} for sha in pr_commits or []
        ]
        self.client.list_tags.return_value = [
            {"name": name, "commit": {"sha": sha}} for name, sha in tags or []
        ]
        self.get_client = Mock(return_value=self.client)

    def get_input(self, name, trim_whitespace=True):
        value = self.inputs.get(name, "")
        return value.strip() if trim_whitespace else value

    def log_debug(self, message):
        self.messages.append(message)

    def get_token(self):
        return "fake-token"

    def get_event_context(self):
        return self.context


def make_context(merged=False, labels=None, number=7, with_pr=True):
    """Return an EventContext, optionally with a pull request."""
    pull_request = None
    if with_pr:
        pull_request = PullRequest(
            number=number, merged=merged, labels=tuple(labels or ())
        )

    return EventContext(
        owner="uclahs-cds",
        repo="example",
        default_branch="main",
        pull_request=pull_request,
    )


@pytest.fixture(name="make_external")
def fixture_make_external():
    """Factory fixture for FakeExternal objects."""

    def factory(**kwargs):
        context_kwargs = {
            key: kwargs.pop(key)
            for key in ("merged", "labels", "number", "with_pr")
            if key in kwargs
        }
        return FakeExternal(make_context(**context_kwargs), **kwargs)

    return factory
