"""
Comparison of requested protoc versions with self-reported ones.

Recent protoc releases print the tag name on `protoc --version`
("libprotoc 22.0"). Older releases, and a few broken ones, print something
else; each known case is listed in a table below. The checks run in order and
the first applicable one decides.
"""

from typing import Dict, FrozenSet, Tuple

# Releases whose binaries report a wrong version
SELF_REPORT_DEFECTS: FrozenSet[Tuple[str, str]] = frozenset(
    {
        ("3.0.2", "3.0.0"),
        ("3.10.0-rc1", "30.10.0"),
        ("3.12.2", "3.12.1"),
        ("3.19.0-rc2", "3.19.0-rc1"),
        # These print nothing at all
        ("21.0-rc1", ""),
        ("21.0-rc2", ""),
    }
)

# Release candidates with non-default tag names report the base version
NON_STANDARD_RC: Dict[str, str] = {
    "3.2.0rc2": "3.2.0",
    "3.7.0rc1": "3.7.0",
    "3.7.0rc2": "3.7.0",
    "3.7.0-rc.3": "3.7.0",
}

# Release candidates of these series report the base version
LEGACY_RC_PREFIXES: Tuple[str, ...] = (
    "3.8.",
    "3.9.",
    "3.10.",
    "3.11.",
    "3.12.",
    "3.13.",
)

# Series that report with a "3." prefix, e.g. "21.12" -> "3.21.12"
THREE_PREFIXED_SERIES: Tuple[str, ...] = ("21.",)

# Alpha and beta releases report the base version
PRE_RELEASES: Dict[str, str] = {
    "3.0.0-alpha-1": "3.0.0",
    "3.0.0-alpha-2": "3.0.0",
    "3.0.0-alpha-3": "3.0.0",
    "3.0.0-beta-1": "3.0.0",
    "3.0.0-beta-2": "3.0.0",
    "3.0.0-beta-3": "3.0.0",
    "3.0.0-beta-4": "3.0.0",
}

VERSION_OUTPUT_PREFIX = "libprotoc "


def parse_version_output(stdout: str) -> str:
    """
    Extract the version from `protoc --version` output.

    Example:
        >>> parse_version_output("libprotoc 3.21.12\\n")
        '3.21.12'
    """
    return stdout.strip().replace(VERSION_OUTPUT_PREFIX, "")


def compare_versions(required: str, returned: str) -> bool:
    """
    Check a self-reported version against the requested one.

    Args:
        required: Requested version (tag name without `v`)
        returned: Version printed by the binary, see parse_version_output()

    Returns:
        True if the binary is the requested release
    """
    if (required, returned) in SELF_REPORT_DEFECTS:
        return True

    if NON_STANDARD_RC.get(required) == returned:
        return True

    if "-rc" in required and required.startswith(LEGACY_RC_PREFIXES):
        return required.split("-rc", 1)[0] == returned

    if required.startswith(THREE_PREFIXED_SERIES):
        return f"3.{required}" == returned

    if PRE_RELEASES.get(required) == returned:
        return True

    return required == returned
