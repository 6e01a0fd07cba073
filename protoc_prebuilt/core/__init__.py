"""
Core functionality for protoc-prebuilt.

This package contains the foundational modules (configuration, platform
detection, transport, extraction, locking) that the protoc engine builds on.
"""

from .config import PrebuiltConfig, str_to_bool, get_github_token

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .locking import LockManager

from .exceptions import (
    ProtocPrebuiltError,
    PlatformNotSupportedError,
    EnvironmentVariableError,
    ForcePathError,
    VersionNotFoundError,
    PlatformVersionNotFoundError,
    GitHubApiError,
    DownloadError,
    FilesystemError,
    ArchiveExtractionError,
    InsecureArchiveError,
    LockTimeout,
    ProtocRunError,
    VersionCheckError,
)

__all__ = [
    "PrebuiltConfig",
    "str_to_bool",
    "get_github_token",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "LockManager",
    "ProtocPrebuiltError",
    "PlatformNotSupportedError",
    "EnvironmentVariableError",
    "ForcePathError",
    "VersionNotFoundError",
    "PlatformVersionNotFoundError",
    "GitHubApiError",
    "DownloadError",
    "FilesystemError",
    "ArchiveExtractionError",
    "InsecureArchiveError",
    "LockTimeout",
    "ProtocRunError",
    "VersionCheckError",
]
