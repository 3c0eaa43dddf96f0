"""Get the next tag version from the latest tag and pull request labels."""

import os

from collections.abc import Container, Iterable
from logging import getLogger
from pathlib import Path
from typing import Optional

import semver

from .external import ActionsExternal, External
from .labels import get_action_from_pr_labels
from .logging import setup_logging, NOTICE
from .tags import get_latest_default_branch_tag, get_latest_pr_tag, get_tag_names
from .utils import get_action_input, str_to_bool, tag_to_semver, version_to_tag_str


class TagExistsError(RuntimeError):
    """Exception indicating that the computed tag is already taken."""


def pick_version_tag(
    candidates: Iterable[Optional[str]], tag_prefix: str = "v"
) -> Optional[str]:
    """Return the first candidate tag that is a semantic version."""
    logger = getLogger(__name__)

    for tag in candidates:
        if tag is None:
            continue

        try:
            tag_to_semver(tag, tag_prefix)
        except ValueError as err:
            logger.debug("%s - skipping", err)
            continue

        return tag

    return None


def get_next_semver(
    latest_tag: Optional[str],
    bump_type: str,
    prerelease: bool,
    tag_prefix: str = "v",
    prerelease_id: str = "rc",
    existing_tags: Container[str] = frozenset(),
) -> str:
    """
    Return the next semantic version after `latest_tag`.

    Prereleases are bumped until they no longer collide with `existing_tags`.
    Raises TagExistsError if a full release tag is already taken.
    """
    logger = getLogger(__name__)

    last_version = semver.Version(0, 0, 0)
    if latest_tag is None:
        logger.log(NOTICE, "No prior tag found - defaulting to %s", last_version)
    else:
        try:
            last_version = tag_to_semver(latest_tag, tag_prefix)
        except ValueError as err:
            logger.log(
                NOTICE, "%s - defaulting to %s", err, last_version
            )

    next_version = last_version.next_version(part=bump_type)

    if prerelease:
        next_version = next_version.bump_prerelease(token=prerelease_id)
        # Look for the next non-existing prerelease version
        while version_to_tag_str(next_version, tag_prefix) in existing_tags:
            logger.debug(
                "Prerelease %s already exists, bumping again...", next_version
            )
            next_version = next_version.bump_prerelease(token=prerelease_id)

    logger.info("%s -> %s -> %s", last_version, bump_type, next_version)

    next_tag = version_to_tag_str(next_version, tag_prefix)
    if next_tag in existing_tags:
        logger.error("Tag %s already exists!", next_tag)
        raise TagExistsError(f"Tag {next_tag} already exists")

    return str(next_version)


def write_outputs(outputs: dict):
    """Append step outputs to the GitHub Actions output file."""
    with Path(os.environ["GITHUB_OUTPUT"]).open(mode="a", encoding="utf-8") as outfile:
        for key, value in outputs.items():
            outfile.write(f"{key}={value}\n")


def compute_outputs(ext: External) -> dict:
    """Resolve tags and labels into the step outputs."""
    label_prefix = get_action_input(ext, "label_prefix", "release:")
    default_bump = get_action_input(ext, "default_bump", "patch")
    tag_prefix = get_action_input(ext, "tag_prefix", "v")
    prerelease_id = get_action_input(ext, "prerelease_id", "rc")
    prefer_pr_tag = str_to_bool(get_action_input(ext, "prefer_pr_tag", "true"))

    bump = get_action_from_pr_labels(ext, label_prefix, default_bump)

    default_branch_tag = get_latest_default_branch_tag(ext)
    pr_tag = get_latest_pr_tag(ext) if prefer_pr_tag else None
    latest_tag = pick_version_tag((pr_tag, default_branch_tag), tag_prefix)

    next_version = get_next_semver(
        latest_tag,
        bump.action,
        bump.prerelease,
        tag_prefix,
        prerelease_id,
        existing_tags=get_tag_names(ext),
    )
    next_tag = version_to_tag_str(next_version, tag_prefix)
    getLogger(__name__).log(
        NOTICE, "New version (tag): %s (%s)", next_version, next_tag
    )

    return {
        "latest_tag": latest_tag or "",
        "default_branch_tag": default_branch_tag or "",
        "pr_tag": pr_tag or "",
        "action": bump.action,
        "prerelease": str(bump.prerelease).lower(),
        "next_version": next_version,
        "next_tag": next_tag,
    }


def entrypoint():
    """Main entrypoint for this module."""
    setup_logging()

    try:
        write_outputs(compute_outputs(ActionsExternal()))
    except Exception:
        getLogger(__name__).exception("Failed to determine the next version")
        raise
