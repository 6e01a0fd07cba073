"""
Centralized exception hierarchy for protoc-prebuilt.

Every failure of an install or initialization call surfaces as exactly one
of these exceptions; nothing is retried or swallowed along the way.
"""

from typing import Optional


# ============================================================================
# Base Exceptions
# ============================================================================


class ProtocPrebuiltError(Exception):
    """Base exception for all protoc-prebuilt errors."""

    pass


# ============================================================================
# Resolution Exceptions
# ============================================================================


class PlatformNotSupportedError(ProtocPrebuiltError):
    """Raised when no pre-built binary is published for a platform."""

    def __init__(self, os_name: str, arch: str):
        self.os_name = os_name
        self.arch = arch
        super().__init__(
            f"Pre-built binaries for `{os_name}-{arch}` platform don't provided"
        )


class EnvironmentVariableError(ProtocPrebuiltError):
    """Raised when a required environment variable is not set."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Environment variable `{name}` is not set")


class ForcePathError(ProtocPrebuiltError):
    """Raised when a forced binary or include path is invalid."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"Force defined paths error: {message}")


# ============================================================================
# Remote Exceptions
# ============================================================================


class VersionNotFoundError(ProtocPrebuiltError):
    """Raised when the requested version has no release."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Pre-built binaries version `{version}` not exists")


class PlatformVersionNotFoundError(ProtocPrebuiltError):
    """Raised when a release exists but has no asset for the platform."""

    def __init__(self, version: str, os_name: str = "", arch: str = ""):
        self.version = version
        self.os_name = os_name
        self.arch = arch
        msg = f"Pre-built binaries version `{version}`"
        if os_name:
            msg += f" for `{os_name}-{arch}` platform"
        super().__init__(msg + " don't provided")


class GitHubApiError(ProtocPrebuiltError):
    """Raised for any non-success GitHub response other than 404."""

    def __init__(self, status: int, body: str):
        self.status = status
        self.body = body
        super().__init__(f"GitHub API response error: {status} {body}")


class DownloadError(ProtocPrebuiltError):
    """Raised when the HTTP transport fails (DNS, TLS, connection, proxy)."""

    pass


# ============================================================================
# Local Exceptions
# ============================================================================


class FilesystemError(ProtocPrebuiltError):
    """Base exception for local filesystem operations."""

    pass


class ArchiveExtractionError(FilesystemError):
    """Failed to extract an archive."""

    pass


class InsecureArchiveError(ArchiveExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


class LockTimeout(ProtocPrebuiltError):
    """Raised when an install lock cannot be acquired within timeout."""

    pass


# ============================================================================
# Verification Exceptions
# ============================================================================


class ProtocRunError(ProtocPrebuiltError):
    """Raised when the test run of the protoc binary fails."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        self.returncode = returncode
        super().__init__(message)


class VersionCheckError(ProtocPrebuiltError):
    """Raised when the binary reports a version other than the requested one."""

    def __init__(self, required: str, returned: str):
        self.required = required
        self.returned = returned
        super().__init__(
            "Pre-built binaries version check error: "
            f"require `{required}`, returned `{returned}`"
        )
