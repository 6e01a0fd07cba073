"""
protoc-prebuilt: install pre-built protobuf compiler releases.

Usage:
    from protoc_prebuilt import init

    protoc_bin, protoc_include = init("22.0")
"""

__version__ = "0.1.0"

from protoc_prebuilt.core.config import PrebuiltConfig  # noqa: E402
from protoc_prebuilt.core.exceptions import (  # noqa: E402
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
    LockTimeout,
    ProtocRunError,
    VersionCheckError,
)
from protoc_prebuilt.prebuilt import init  # noqa: E402

__all__ = [
    "__version__",
    "init",
    "PrebuiltConfig",
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
    "LockTimeout",
    "ProtocRunError",
    "VersionCheckError",
]
