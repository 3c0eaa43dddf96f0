"""Pick the next semantic version from GitHub tags and pull request labels."""

from .context import EventContext, PullRequest
from .labels import (
    BumpAction,
    BumpLabel,
    MultipleBumpLabelsError,
    get_action_from_pr_labels,
)
from .tags import get_latest_default_branch_tag, get_latest_pr_tag
from .utils import get_action_input

__all__ = [
    "BumpAction",
    "BumpLabel",
    "EventContext",
    "MultipleBumpLabelsError",
    "PullRequest",
    "get_action_from_pr_labels",
    "get_action_input",
    "get_latest_default_branch_tag",
    "get_latest_pr_tag",
]
