"""Locate the most recent tag reachable from a set of commits."""

import json

from typing import Optional

from .external import Client, External


# GitHub caps a single page at 100 items
PAGE_SIZE = 100


def build_tag_map(tags: list[dict]) -> dict[str, str]:
    """
    Return a dictionary mapping commit hashes to tag names.

    If several tags point at the same commit the last one listed wins.
    """
    return {tag["commit"]["sha"]: tag["name"] for tag in tags}


def find_latest_tag(commit_hashes: list[str], tag_map: dict[str, str]) -> Optional[str]:
    """Return the tag of the first (newest) commit that has one."""
    for commit_hash in commit_hashes:
        if commit_hash in tag_map:
            return tag_map[commit_hash]

    return None


def _resolve_tag(
    ext: External, client: Client, owner: str, repo: str, commits: list[dict]
) -> Optional[str]:
    """Match already-fetched commits against the repository tags."""
    commit_hashes = [commit["sha"] for commit in commits]
    ext.log_debug(
        f"Last {PAGE_SIZE} commit hashes: " + json.dumps(commit_hashes, indent=2)
    )

    tag_map = build_tag_map(client.list_tags(owner, repo, per_page=PAGE_SIZE))
    ext.log_debug(
        f"Last {PAGE_SIZE} tags and their related commit hashes: "
        + json.dumps(tag_map, indent=2)
    )

    latest_tag = find_latest_tag(commit_hashes, tag_map)

    if latest_tag:
        ext.log_debug(f"Determined latest tag is: {latest_tag}")
    else:
        ext.log_debug(f"No tags found in the last {PAGE_SIZE} commits.")

    return latest_tag


def get_latest_default_branch_tag(ext: External) -> Optional[str]:
    """Return the most recent tag on the default branch, or None."""
    ext.log_debug(
        f"Searching last {PAGE_SIZE} commits from the default branch for a tag."
    )

    client = ext.get_client(ext.get_token())
    context = ext.get_event_context()

    ext.log_debug(f"Default branch for repo: {context.default_branch}")

    commits = client.list_commits(
        context.owner, context.repo, ref=context.default_branch, per_page=PAGE_SIZE
    )

    return _resolve_tag(ext, client, context.owner, context.repo, commits)


def get_latest_pr_tag(ext: External) -> Optional[str]:
    """Return the most recent tag among the pull request's commits, or None."""
    context = ext.get_event_context()

    if context.pull_request is None:
        ext.log_debug("No pull request found, skipping PR commit tag search.")
        return None

    ext.log_debug(
        f"Searching last {PAGE_SIZE} commits from pull request "
        f"#{context.pull_request.number} for a tag."
    )

    client = ext.get_client(ext.get_token())
    commits = client.list_pull_request_commits(
        context.owner,
        context.repo,
        pull_number=context.pull_request.number,
        per_page=PAGE_SIZE,
    )

    return _resolve_tag(ext, client, context.owner, context.repo, commits)


def get_tag_names(ext: External) -> set[str]:
    """Return the names of the most recent repository tags."""
    client = ext.get_client(ext.get_token())
    context = ext.get_event_context()

    return {
        tag["name"]
        for tag in client.list_tags(context.owner, context.repo, per_page=PAGE_SIZE)
    }
