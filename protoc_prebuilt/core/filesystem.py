"""
File system utilities for protoc-prebuilt.

This module provides:
- Archive extraction (zip) with directory traversal protection
- Preservation of Unix permission bits, so extracted binaries stay executable
- Safe directory removal restricted to a required prefix
"""

import logging
import os
import shutil
import stat
import zipfile
from pathlib import Path
from typing import Optional, Union

from protoc_prebuilt.core.exceptions import (
    ArchiveExtractionError,
    FilesystemError,
    InsecureArchiveError,
)

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check if path is relative to parent.

    Args:
        path: Path to check
        parent: Potential parent path

    Returns:
        True if path is under parent, False otherwise
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(
    archive_path: Union[str, Path],
    destination: Union[str, Path],
) -> None:
    """
    Extract an archive to a destination directory.

    Archives are read as zip, the format of every protoc release asset.

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to (created if missing)

    Raises:
        ArchiveExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths

    Example:
        >>> extract_archive('protoc-22.0-linux-x86_64.zip', '/tmp/protoc')
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ArchiveExtractionError(f"Archive not found: {archive_path}")

    try:
        destination.mkdir(parents=True, exist_ok=True)
        _extract_zip(archive_path, destination)
    except InsecureArchiveError:
        raise
    except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError) as e:
        raise ArchiveExtractionError(f"Failed to extract {archive_path}: {e}") from e


def _extract_zip(archive_path: Path, destination: Path) -> None:
    """Extract a ZIP archive, restoring Unix permission bits."""
    with zipfile.ZipFile(archive_path, "r") as zf:
        members = zf.infolist()
        total = len(members)

        # Validate all paths first
        for member in members:
            _validate_archive_path(member.filename, destination)

        for member in members:
            extracted = zf.extract(member, destination)
            _restore_permissions(member, Path(extracted))

    logger.debug(f"Extracted {total} entries to {destination}")


def _restore_permissions(member: zipfile.ZipInfo, path: Path) -> None:
    """Apply the Unix mode stored in a zip entry (zipfile drops it)."""
    if IS_WINDOWS or member.is_dir():
        return

    # Entries written on Windows carry no mode
    mode = (member.external_attr >> 16) & 0o777
    if mode:
        os.chmod(path, mode)


# ============================================================================
# Safe File Operations
# ============================================================================


def safe_unlink(path: Union[str, Path]) -> None:
    """
    Remove a file if it exists.

    Raises:
        FilesystemError: If the file exists but cannot be removed
    """
    path = Path(path)
    try:
        path.unlink()
    except FileNotFoundError:
        return
    except OSError as e:
        raise FilesystemError(f"Failed to remove file '{path}': {e}") from e


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_rmtree('/tmp/out/protoc-22.0-linux-x86_64.extract',
        ...             require_prefix='/tmp/out')
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:

            def handle_remove_readonly(func, path, exc):
                """Error handler for Windows read-only files."""
                if not os.access(path, os.W_OK):
                    os.chmod(path, stat.S_IWRITE)
                    func(path)
                else:
                    raise

            shutil.rmtree(path, onerror=handle_remove_readonly)
        else:
            shutil.rmtree(path)

    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e
