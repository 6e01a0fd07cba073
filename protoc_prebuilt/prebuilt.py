"""
Entry point: install a pre-built protoc if needed and return its paths.

Usage:
    from protoc_prebuilt import init

    protoc_bin, protoc_include = init("22.0")
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Tuple

from protoc_prebuilt.core.config import OUT_DIR_ENV, PrebuiltConfig
from protoc_prebuilt.core.exceptions import (
    EnvironmentVariableError,
    FilesystemError,
    ProtocRunError,
    VersionCheckError,
)
from protoc_prebuilt.core.platform import PlatformInfo, detect_platform
from protoc_prebuilt.protoc.installer import ProtocInstaller
from protoc_prebuilt.protoc.layout import get_bin_path, get_include_path
from protoc_prebuilt.protoc.overrides import check_force_bin, check_force_include
from protoc_prebuilt.protoc.version import compare_versions, parse_version_output

logger = logging.getLogger(__name__)

VERSION_PROBE_ARG = "--version"


def run_version_probe(protoc_bin: Path, timeout: int = 60) -> subprocess.CompletedProcess:
    """
    Run `protoc --version`.

    Args:
        protoc_bin: Path to the protoc binary
        timeout: Timeout in seconds

    Returns:
        Completed process with raw stdout bytes

    Raises:
        ProtocRunError: If the binary can't be started or exits non-zero
    """
    try:
        result = subprocess.run(
            [str(protoc_bin), VERSION_PROBE_ARG],
            capture_output=True,
            timeout=timeout,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise ProtocRunError(f"test run protoc fail: {e}") from e

    if result.returncode != 0:
        raise ProtocRunError(
            f"test run protoc fail: {protoc_bin} exited with code {result.returncode}",
            returncode=result.returncode,
        )

    return result


def verify_protoc_version(version: str, stdout: bytes) -> str:
    """
    Check `protoc --version` output against the requested version.

    Returns:
        The self-reported version

    Raises:
        ProtocRunError: If the output is not valid UTF-8
        VersionCheckError: If the versions don't match
    """
    try:
        text = stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ProtocRunError("parse test run protoc output fail") from e

    returned = parse_version_output(text)
    if not compare_versions(version, returned):
        raise VersionCheckError(version, returned)

    logger.debug(f"protoc reports version {returned!r}, matches {version!r}")
    return returned


def _install_bin(
    version: str,
    config: PrebuiltConfig,
    platform: PlatformInfo,
    installer: Optional[ProtocInstaller],
) -> Path:
    if config.out_dir is None:
        raise EnvironmentVariableError(OUT_DIR_ENV)

    if installer is None:
        installer = ProtocInstaller(config.out_dir, config)

    result = installer.install(version, platform)
    return get_bin_path(version, result.install_dir, platform.os)


def init(
    version: str,
    config: Optional[PrebuiltConfig] = None,
    platform: Optional[PlatformInfo] = None,
    installer: Optional[ProtocInstaller] = None,
) -> Tuple[Path, Path]:
    """
    Install pre-built protoc if it hasn't been done before and return its paths.

    The version should be a tag name of the protobuf repository without the
    `v` prefix, for example "21.12" or "22.0-rc3".

    Args:
        version: Requested protoc version
        config: Configuration (default: read from environment)
        platform: Target platform (default: detected platform)
        installer: Installer to use (default: one for config.out_dir)

    Returns:
        Tuple of the protoc binary path and the include directory path

    Raises:
        ProtocPrebuiltError: Any resolution, install or verification error
    """
    if config is None:
        config = PrebuiltConfig.from_env()
    if platform is None:
        platform = detect_platform()

    protoc_bin = check_force_bin(config.force_protoc_path)
    if protoc_bin is None:
        protoc_bin = _install_bin(version, config, platform, installer)

    if not protoc_bin.exists():
        raise FilesystemError(f"protoc binary not found: {protoc_bin}")

    result = run_version_probe(protoc_bin)

    if config.check_version:
        verify_protoc_version(version, result.stdout)
    else:
        logger.debug("Version check disabled")

    protoc_include = check_force_include(config.force_include_path)
    if protoc_include is None:
        protoc_include = get_include_path(version, protoc_bin)

    logger.info(f"protoc {version}: {protoc_bin}")
    return protoc_bin, protoc_include
