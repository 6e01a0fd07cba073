"""
Forced protoc binary and include paths.

PROTOC_PREBUILT_FORCE_PROTOC_PATH and PROTOC_PREBUILT_FORCE_INCLUDE_PATH let a
caller use an existing protoc instead of a downloaded one. A set variable must
point at the right kind of filesystem entry; anything else is an error rather
than a silent fallback to downloading.
"""

import logging
import os
import stat
from pathlib import Path
from typing import Optional

from protoc_prebuilt.core.config import FORCE_INCLUDE_PATH_ENV, FORCE_PROTOC_PATH_ENV
from protoc_prebuilt.core.exceptions import ForcePathError

logger = logging.getLogger(__name__)


def _is_dir(path: str, env_name: str) -> bool:
    try:
        attr = os.stat(path)
    except OSError:
        raise ForcePathError(f"nothing exists by {env_name} path {path}") from None
    return stat.S_ISDIR(attr.st_mode)


def check_force_bin(value: Optional[str]) -> Optional[Path]:
    """
    Validate a forced protoc binary path.

    Args:
        value: Value of PROTOC_PREBUILT_FORCE_PROTOC_PATH, or None if unset

    Returns:
        The path, or None when no override is requested

    Raises:
        ForcePathError: If nothing exists at the path or it is a directory
    """
    if value is None:
        return None

    if _is_dir(value, FORCE_PROTOC_PATH_ENV):
        raise ForcePathError(f"directory found by {FORCE_PROTOC_PATH_ENV} path {value}")

    logger.info(f"Using forced protoc binary: {value}")
    return Path(value)


def check_force_include(value: Optional[str]) -> Optional[Path]:
    """
    Validate a forced include directory path.

    Args:
        value: Value of PROTOC_PREBUILT_FORCE_INCLUDE_PATH, or None if unset

    Returns:
        The path, or None when no override is requested

    Raises:
        ForcePathError: If nothing exists at the path or it is a file
    """
    if value is None:
        return None

    if not _is_dir(value, FORCE_INCLUDE_PATH_ENV):
        raise ForcePathError(f"file found by {FORCE_INCLUDE_PATH_ENV} path {value}")

    logger.info(f"Using forced include directory: {value}")
    return Path(value)
