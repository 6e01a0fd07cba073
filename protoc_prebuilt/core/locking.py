"""
Concurrent install control for protoc-prebuilt.

Two build processes sharing one output root may ask for the same asset at the
same time. A per-asset file lock serializes them so only one downloads; the
other finds the install directory in place once it gets the lock.

Usage:
    from protoc_prebuilt.core.locking import LockManager

    lock_manager = LockManager(out_dir / ".locks")
    with lock_manager.asset_lock("protoc-22.0-linux-x86_64"):
        # Safely install the asset
        pass
"""

import logging
from contextlib import contextmanager
from pathlib import Path

from filelock import FileLock, Timeout

from protoc_prebuilt.core.exceptions import FilesystemError, LockTimeout

logger = logging.getLogger(__name__)

LOCK_DIR_NAME = ".locks"


class LockManager:
    """
    Manages install locks under an output root.

    Uses file-based locking with the `filelock` library for cross-platform
    compatibility and automatic release on process death.

    Attributes:
        lock_dir: Directory where lock files are stored
    """

    def __init__(self, lock_dir: Path):
        """
        Initialize lock manager.

        Args:
            lock_dir: Directory for lock files (created on first lock)
        """
        self.lock_dir = Path(lock_dir)

    @contextmanager
    def asset_lock(self, asset_name: str, timeout: int = 300):
        """
        Acquire the install lock of one asset.

        Args:
            asset_name: Asset base name, e.g. 'protoc-22.0-linux-x86_64'
            timeout: Maximum wait time in seconds (default: 300)

        Yields:
            None

        Raises:
            LockTimeout: If lock can't be acquired within timeout
            FilesystemError: If the lock file can't be created
        """
        lock_path = self.lock_dir / f"{asset_name}.lock"
        lock = FileLock(lock_path, timeout=timeout)

        try:
            self.lock_dir.mkdir(parents=True, exist_ok=True)
            lock.acquire()
        except Timeout as e:
            raise LockTimeout(
                f"Could not acquire install lock for {asset_name} after {timeout}s. "
                "Another process may be installing it."
            ) from e
        except OSError as e:
            raise FilesystemError(f"Failed to create lock '{lock_path}': {e}") from e

        logger.debug(f"Acquired install lock: {lock_path}")
        try:
            yield
        finally:
            lock.release()
            logger.debug(f"Released install lock: {lock_path}")


__all__ = ["LockManager", "LOCK_DIR_NAME"]
