"""Utility functions."""

import argparse

from typing import Union

import semver

from .external import External


def get_action_input(ext: External, name: str, default: str) -> str:
    """Return the named action input, falling back to `default`."""
    value = ext.get_input(name, trim_whitespace=True)
    if value:
        ext.log_debug(f"Using user-passed input for variable {name}. ({value})")
        return value

    ext.log_debug(f"Using default value for variable {name}. ({default})")
    return default


def tag_to_semver(tag: str, tag_prefix: str = "v") -> semver.version.Version:
    """
    Return the Version associated with this git tag.

    Raises ValueError for invalid tags.
    """
    if not tag.startswith(tag_prefix):
        raise ValueError(f"Tag `{tag}` doesn't start with a `{tag_prefix}`")

    return semver.Version.parse(tag[len(tag_prefix):])


def version_to_tag_str(
    version: Union[str, semver.version.Version], tag_prefix: str = "v"
) -> str:
    """Return the git tag associated with this version."""
    version = str(version)
    return f"{tag_prefix}{version.removeprefix(tag_prefix)}"


def str_to_bool(value: str) -> bool:
    """Convert a string to a boolean (case-insensitive)."""
    truthy_values = {"true", "t", "yes", "y", "1"}
    falsey_values = {"false", "f", "no", "n", "0"}

    # Normalize input to lowercase
    value = value.lower()

    if value in truthy_values:
        return True

    if value in falsey_values:
        return False

    raise argparse.ArgumentTypeError(f"Invalid boolean value: '{value}'")
