"""
Platform detection for protoc-prebuilt.

Detects the current operating system and CPU architecture and normalizes them
to the identifiers the asset name resolver understands:

    OS:           linux, macos, windows (others pass through lower-cased)
    Architecture: x86, x86_64, aarch64, powerpc64, s390x (others pass through)

Usage:
    from protoc_prebuilt.core.platform import detect_platform

    platform_info = detect_platform()
    print(platform_info.platform_string())  # e.g. 'linux-x86_64'
"""

import functools
import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformInfo:
    """
    Operating system and architecture pair.

    Attributes:
        os: Operating system ('linux', 'macos', 'windows', ...)
        arch: CPU architecture ('x86', 'x86_64', 'aarch64', 'powerpc64', 's390x', ...)
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get canonical platform string.

        Example:
            >>> PlatformInfo('macos', 'aarch64').platform_string()
            'macos-aarch64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformInfo for the running interpreter
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def clear_platform_cache() -> None:
    """Clear the detect_platform() cache (used by tests)."""
    detect_platform.cache_clear()


def _detect_os() -> str:
    """
    Detect operating system.

    Returns:
        Normalized OS name: 'linux', 'macos', 'windows', or the lower-cased
        system name for anything else
    """
    system = platform.system().lower()

    if system == "darwin":
        return "macos"
    return system


def _detect_architecture() -> str:
    """
    Detect CPU architecture.

    Returns:
        Normalized architecture: 'x86', 'x86_64', 'aarch64', 'powerpc64',
        's390x', or the lower-cased machine name for anything else
    """
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x86_64"
    elif machine in ("aarch64", "arm64"):
        return "aarch64"
    elif machine in ("i386", "i486", "i586", "i686", "x86"):
        return "x86"
    elif machine in ("ppc64", "ppc64le", "powerpc64", "powerpc64le"):
        return "powerpc64"
    elif machine == "s390x":
        return "s390x"
    else:
        # Unknown architectures are rejected later by the asset name resolver
        return machine
