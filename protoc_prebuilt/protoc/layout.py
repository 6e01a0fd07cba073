"""
Paths inside an installed protoc asset.

Asset structure by release:
- the binary is located in `bin/`, includes in `include/`;
- before "3.0.0-beta-4" (included) the binary is located in the asset root;
- from "3.0.0-alpha-3" to "3.0.0-beta-3" (included) the `include/` content is
  located in the asset root;
- before "3.0.0-alpha-3" no includes are shipped, so the returned include
  path may not exist.
"""

from pathlib import Path
from typing import FrozenSet, Optional

from protoc_prebuilt.core.platform import detect_platform

BINARY_IN_ROOT_VERSIONS: FrozenSet[str] = frozenset(
    {
        "2.4.1",
        "2.5.0",
        "2.6.0",
        "2.6.1",
        "3.0.0-alpha-1",
        "3.0.0-alpha-2",
        "3.0.0-alpha-3",
        "3.0.0-beta-1",
        "3.0.0-beta-2",
        "3.0.0-beta-3",
        "3.0.0-beta-4",
    }
)


def is_binary_in_root(version: str) -> bool:
    """Check whether a release keeps protoc in the asset root."""
    return version in BINARY_IN_ROOT_VERSIONS


def get_bin_path(version: str, protoc_out_dir: Path, os_name: Optional[str] = None) -> Path:
    """
    Get the protoc binary path inside an install directory.

    Args:
        version: Requested version
        protoc_out_dir: Install directory of the asset
        os_name: Target OS (default: detected platform)

    Returns:
        Path to the protoc binary

    Example:
        >>> get_bin_path("22.0", Path("/opt/protoc"), "linux")
        PosixPath('/opt/protoc/bin/protoc')
    """
    if os_name is None:
        os_name = detect_platform().os

    protoc_bin = Path(protoc_out_dir)
    if not is_binary_in_root(version):
        protoc_bin = protoc_bin / "bin"

    suffix = ".exe" if os_name == "windows" else ""
    return protoc_bin / f"protoc{suffix}"


def get_include_path(version: str, protoc_bin: Path) -> Path:
    """
    Get the include directory path next to a protoc binary.

    Args:
        version: Requested version
        protoc_bin: Path returned by get_bin_path()

    Returns:
        Path to the include directory
    """
    protoc_include = Path(protoc_bin).parent
    if not is_binary_in_root(version):
        protoc_include = protoc_include.parent / "include"

    return protoc_include
