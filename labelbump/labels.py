"""Pick a semantic version bump from pull request labels."""

import enum
import json

from dataclasses import dataclass

from .external import External


class MultipleBumpLabelsError(ValueError):
    """Exception indicating that a pull request has conflicting bump labels."""


class BumpLabel(str, enum.Enum):
    """Label suffixes recognized on pull requests."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    GENERATE_PRERELEASE = "generate_prerelease"

    @classmethod
    def sizes(cls) -> tuple["BumpLabel", ...]:
        """Return the labels that select a bump size."""
        return (cls.MAJOR, cls.MINOR, cls.PATCH)

    def with_prefix(self, prefix: str) -> str:
        """Return the full (lowercase) label name."""
        return f"{prefix.lower()}{self.value}"


BUMP_TYPES = tuple(label.value for label in BumpLabel.sizes())


@dataclass(frozen=True)
class BumpAction:
    """The bump to apply and whether to make it a prerelease."""

    action: str
    prerelease: bool = False

    def __post_init__(self):
        if self.action not in BUMP_TYPES:
            raise ValueError(
                f"Invalid bump action `{self.action}`, expected one of {BUMP_TYPES}"
            )


def get_action_from_pr_labels(ext: External, prefix: str, default: str) -> BumpAction:
    """
    Return the bump selected by the labels on the active pull request.

    Only `{prefix}major`, `{prefix}minor`, `{prefix}patch`, and
    `{prefix}generate_prerelease` are considered, case-insensitively. If no
    size label is present (or there is no pull request), `default` is used.

    Raises MultipleBumpLabelsError if more than one size label is present.
    """
    if default not in BUMP_TYPES:
        raise ValueError(
            f"Invalid default bump `{default}`, expected one of {BUMP_TYPES}"
        )

    ext.log_debug("Getting labels from the active pull request.")

    pull_request = ext.get_event_context().pull_request
    merged = pull_request.merged if pull_request else False
    labels = [name.lower() for name in pull_request.labels] if pull_request else None

    ext.log_debug(
        "Labels on the active pull request: " + json.dumps(labels, indent=2)
    )
    if merged:
        ext.log_debug("Pull request is merged, will not generate a prerelease version.")

    recognized = {label.with_prefix(prefix): label for label in BumpLabel}
    applicable = [recognized[label] for label in labels or [] if label in recognized]

    ext.log_debug(
        "Applicable labels on the active pull request: "
        + json.dumps([label.with_prefix(prefix) for label in applicable], indent=2)
    )

    prerelease = not merged and BumpLabel.GENERATE_PRERELEASE in applicable
    sizes = [label for label in applicable if label in BumpLabel.sizes()]

    if len(sizes) > 1:
        raise MultipleBumpLabelsError(
            "Multiple applicable labels found on the active pull request. "
            "Please only use one of the following labels: "
            + ", ".join(label.with_prefix(prefix) for label in BumpLabel.sizes())
        )

    if not sizes:
        ext.log_debug(
            "No applicable labels found on the active pull request or not "
            f"operating in a pull request. Using default bump: {default}"
        )
        return BumpAction(default, prerelease)

    return BumpAction(sizes[0].value, prerelease)
