"""
Download and installation of pre-built protoc assets.

This module orchestrates one install of a protoc release asset:
1. Skip everything if the install directory already exists
2. Check the release tag exists on GitHub
3. Download the platform asset archive
4. Extract it next to the install directory, then move it into place
5. Remove the archive

Any failure is final; the caller decides whether to call again.
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import requests

from protoc_prebuilt.core.config import PrebuiltConfig
from protoc_prebuilt.core.download import create_session, request_with_token, save_response
from protoc_prebuilt.core.exceptions import (
    FilesystemError,
    GitHubApiError,
    PlatformVersionNotFoundError,
    ProtocPrebuiltError,
    VersionNotFoundError,
)
from protoc_prebuilt.core.filesystem import extract_archive, safe_rmtree, safe_unlink
from protoc_prebuilt.core.locking import LOCK_DIR_NAME, LockManager
from protoc_prebuilt.core.platform import PlatformInfo, detect_platform
from protoc_prebuilt.protoc.assets import get_protoc_asset_name

logger = logging.getLogger(__name__)

GITHUB_REPOSITORY = "protocolbuffers/protobuf"
RELEASE_TAG_URL = (
    f"https://api.github.com/repos/{GITHUB_REPOSITORY}/releases/tags/v{{version}}"
)
ASSET_URL = (
    f"https://github.com/{GITHUB_REPOSITORY}/releases/download/v{{version}}/{{asset}}"
)


@dataclass
class InstallResult:
    """Result of an install operation."""

    asset_name: str
    """Asset base name, e.g. 'protoc-22.0-linux-x86_64'"""

    install_dir: Path
    """Directory the asset is extracted to"""

    was_cached: bool
    """Whether the install directory already existed (no download made)"""

    download_time: float = 0.0
    """Time spent downloading in seconds"""


def _raise_for_github_status(response: requests.Response) -> None:
    """Raise GitHubApiError for a non-success, non-404 response."""
    if not response.ok:
        raise GitHubApiError(response.status_code, response.text)


class ProtocInstaller:
    """
    Installs protoc release assets under an output root.

    Each asset gets its own directory `<out_dir>/<asset-name>`. The existence
    of that directory marks the asset as installed; its content is never
    re-verified.

    Example:
        >>> installer = ProtocInstaller(Path("target/protoc"))
        >>> result = installer.install("22.0")
        >>> print(result.install_dir)
        target/protoc/protoc-22.0-linux-x86_64
    """

    def __init__(
        self,
        out_dir: Path,
        config: Optional[PrebuiltConfig] = None,
        session: Optional[requests.Session] = None,
        lock_manager: Optional[LockManager] = None,
    ):
        """
        Initialize installer.

        Args:
            out_dir: Output root for install directories
            config: Configuration for transport (default: from environment)
            session: HTTP session (default: created from config)
            lock_manager: Lock manager (default: locks under out_dir)
        """
        self.out_dir = Path(out_dir)
        self.config = config if config is not None else PrebuiltConfig.from_env()
        self.session = session if session is not None else create_session(self.config)
        self.lock_manager = lock_manager or LockManager(self.out_dir / LOCK_DIR_NAME)

    def get_install_dir(self, asset_name: str) -> Path:
        """Get the install directory of an asset."""
        return self.out_dir / asset_name

    def is_installed(self, asset_name: str) -> bool:
        """Check if an asset install directory exists."""
        return self.get_install_dir(asset_name).exists()

    def install(
        self, version: str, platform: Optional[PlatformInfo] = None
    ) -> InstallResult:
        """
        Install a protoc version for a platform unless already installed.

        Args:
            version: Tag name without the `v` prefix, e.g. "22.0"
            platform: Target platform (default: detected platform)

        Returns:
            InstallResult describing the install directory

        Raises:
            PlatformNotSupportedError: If no asset exists for the platform
            VersionNotFoundError: If the release tag doesn't exist
            PlatformVersionNotFoundError: If the release has no asset for the platform
            GitHubApiError: For other unsuccessful GitHub responses
            DownloadError: If the transport fails
            ArchiveExtractionError: If the archive can't be extracted
            FilesystemError: If local file operations fail
        """
        if platform is None:
            platform = detect_platform()

        asset_name = get_protoc_asset_name(version, platform.os, platform.arch)
        install_dir = self.get_install_dir(asset_name)

        if install_dir.exists():
            logger.info(f"protoc already installed: {install_dir}")
            return InstallResult(asset_name, install_dir, was_cached=True)

        with self.lock_manager.asset_lock(asset_name):
            # Another process may have finished while we waited
            if install_dir.exists():
                logger.info(f"protoc installed by another process: {install_dir}")
                return InstallResult(asset_name, install_dir, was_cached=True)

            logger.info(f"Installing protoc {version} for {platform}")
            self.check_version_exists(version)

            download_start = time.time()
            self._download_and_extract(version, platform, asset_name, install_dir)

            return InstallResult(
                asset_name,
                install_dir,
                was_cached=False,
                download_time=time.time() - download_start,
            )

    def check_version_exists(self, version: str) -> None:
        """
        Check the release tag exists for a version.

        Raises:
            VersionNotFoundError: On 404
            GitHubApiError: On any other unsuccessful status
        """
        url = RELEASE_TAG_URL.format(version=version)
        response = request_with_token(self.session, self.config, url)

        if response.status_code == 404:
            raise VersionNotFoundError(version)
        _raise_for_github_status(response)

    def download(
        self, version: str, asset_file_name: str, platform: Optional[PlatformInfo] = None
    ) -> requests.Response:
        """
        Request a release asset.

        Args:
            version: Tag name without the `v` prefix
            asset_file_name: Asset file name including `.zip`
            platform: Platform for error messages

        Returns:
            Streaming response with a success status

        Raises:
            PlatformVersionNotFoundError: On 404
            GitHubApiError: On any other unsuccessful status
        """
        url = ASSET_URL.format(version=version, asset=asset_file_name)
        logger.info(f"Downloading from: {url}")
        response = request_with_token(self.session, self.config, url, stream=True)

        if response.status_code == 404:
            response.close()
            if platform is not None:
                raise PlatformVersionNotFoundError(version, platform.os, platform.arch)
            raise PlatformVersionNotFoundError(version)
        _raise_for_github_status(response)

        return response

    def _download_and_extract(
        self, version: str, platform: PlatformInfo, asset_name: str, install_dir: Path
    ) -> None:
        """
        Download the asset archive and extract it into install_dir.

        Extraction goes into a sibling directory first, so install_dir only
        appears once its content is complete. The archive and the sibling
        directory never outlive this call.
        """
        asset_file_name = f"{asset_name}.zip"
        archive_path = self.out_dir / asset_file_name
        temp_extract_dir = self.out_dir / f"{asset_name}.extract"

        try:
            response = self.download(version, asset_file_name, platform)
            save_response(response, archive_path)

            # Leftover from an interrupted run
            safe_rmtree(temp_extract_dir, require_prefix=self.out_dir)

            logger.info(f"Extracting to: {install_dir}")
            extract_archive(archive_path, temp_extract_dir)

            try:
                temp_extract_dir.rename(install_dir)
            except OSError as e:
                raise FilesystemError(
                    f"Failed to move '{temp_extract_dir}' to '{install_dir}': {e}"
                ) from e

        except ProtocPrebuiltError as e:
            logger.error(f"Install of {asset_name} failed: {e}")
            self._cleanup_on_error(archive_path, temp_extract_dir)
            raise

        safe_unlink(archive_path)
        logger.info(f"Installed {asset_name}")

    def _cleanup_on_error(self, archive_path: Path, temp_extract_dir: Path) -> None:
        """
        Remove temporary files after an error.

        Cleanup failures are logged, the original error is what the caller sees.
        """
        try:
            safe_unlink(archive_path)
        except FilesystemError as e:
            logger.warning(f"Failed to remove archive: {e}")

        try:
            safe_rmtree(temp_extract_dir, require_prefix=self.out_dir)
        except FilesystemError as e:
            logger.warning(f"Failed to remove temp extraction: {e}")
