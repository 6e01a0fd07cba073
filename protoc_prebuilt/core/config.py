"""
Environment-sourced configuration for protoc-prebuilt.

All environment variables are read once, in PrebuiltConfig.from_env(), and the
resulting value is passed down to the installer and transport. Inner
components never consult os.environ themselves, so tests can build a
PrebuiltConfig directly instead of mutating the process environment.

Environment variables:
    OUT_DIR                                 Output root for installations
    PROTOC_PREBUILT_FORCE_PROTOC_PATH       Use this protoc binary instead
    PROTOC_PREBUILT_FORCE_INCLUDE_PATH      Use this include directory instead
    PROTOC_PREBUILT_NOT_CHECK_VERSION       Skip the --version comparison
    PROTOC_PREBUILT_NOT_USE_PROXY           Ignore proxy variables
    PROTOC_PREBUILT_NOT_ADD_GITHUB_TOKEN    Never send an Authorization header
    PROTOC_PREBUILT_GITHUB_TOKEN_ENV_NAME   Name of the token variable
                                            (default: GITHUB_TOKEN)
    http_proxy, HTTP_PROXY, https_proxy, HTTPS_PROXY, no_proxy, NO_PROXY
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

OUT_DIR_ENV = "OUT_DIR"
FORCE_PROTOC_PATH_ENV = "PROTOC_PREBUILT_FORCE_PROTOC_PATH"
FORCE_INCLUDE_PATH_ENV = "PROTOC_PREBUILT_FORCE_INCLUDE_PATH"
NOT_CHECK_VERSION_ENV = "PROTOC_PREBUILT_NOT_CHECK_VERSION"
NOT_USE_PROXY_ENV = "PROTOC_PREBUILT_NOT_USE_PROXY"
NOT_ADD_GITHUB_TOKEN_ENV = "PROTOC_PREBUILT_NOT_ADD_GITHUB_TOKEN"
GITHUB_TOKEN_ENV_NAME_ENV = "PROTOC_PREBUILT_GITHUB_TOKEN_ENV_NAME"
DEFAULT_GITHUB_TOKEN_ENV = "GITHUB_TOKEN"

PROXY_ENVS = ("http_proxy", "HTTP_PROXY", "https_proxy", "HTTPS_PROXY")
NO_PROXY_ENVS = ("no_proxy", "NO_PROXY")

FALSE_VALUES = frozenset({"", "0", "no", "off", "false"})


def str_to_bool(value: str) -> bool:
    """
    Convert an environment value to bool.

    "", "0", "no", "off" and "false" are false, every other value is true.
    """
    return value not in FALSE_VALUES


def var_bool(environ: Mapping[str, str], key: str) -> bool:
    """Read a boolean toggle; an unset variable is false."""
    value = environ.get(key)
    if value is None:
        return False
    return str_to_bool(value)


def _first_set(environ: Mapping[str, str], keys) -> Optional[str]:
    for key in keys:
        value = environ.get(key)
        if value is not None:
            return value
    return None


def get_github_token(environ: Mapping[str, str]) -> Optional[str]:
    """
    Fetch the GitHub authorization token.

    The token is read from the variable named by
    PROTOC_PREBUILT_GITHUB_TOKEN_ENV_NAME (GITHUB_TOKEN by default).
    Surrounding whitespace is trimmed and an empty token counts as absent.

    Args:
        environ: Environment mapping

    Returns:
        Token string, or None for unauthenticated requests
    """
    if var_bool(environ, NOT_ADD_GITHUB_TOKEN_ENV):
        return None

    token_key = environ.get(GITHUB_TOKEN_ENV_NAME_ENV, DEFAULT_GITHUB_TOKEN_ENV)
    value = environ.get(token_key)
    if value is None:
        return None

    value = value.strip()
    return value or None


@dataclass
class PrebuiltConfig:
    """
    Configuration for one protoc-prebuilt call.

    Attributes:
        out_dir: Output root where assets are installed (None if unset)
        force_protoc_path: Raw forced binary path, validated later
        force_include_path: Raw forced include path, validated later
        check_version: Compare the binary's self-reported version
        use_proxy: Honor proxy settings
        github_token: Bearer token for GitHub requests
        proxy: Proxy URL from the environment
        no_proxy: Comma-separated proxy exclusion list
    """

    out_dir: Optional[Path] = None
    force_protoc_path: Optional[str] = None
    force_include_path: Optional[str] = None
    check_version: bool = True
    use_proxy: bool = True
    github_token: Optional[str] = None
    proxy: Optional[str] = None
    no_proxy: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PrebuiltConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Environment mapping (default: os.environ)

        Returns:
            PrebuiltConfig instance

        Example:
            >>> config = PrebuiltConfig.from_env({"OUT_DIR": "/tmp/out"})
            >>> config.out_dir
            PosixPath('/tmp/out')
        """
        if environ is None:
            environ = os.environ

        out_dir = environ.get(OUT_DIR_ENV)

        config = cls(
            out_dir=Path(out_dir) if out_dir is not None else None,
            force_protoc_path=environ.get(FORCE_PROTOC_PATH_ENV),
            force_include_path=environ.get(FORCE_INCLUDE_PATH_ENV),
            check_version=not var_bool(environ, NOT_CHECK_VERSION_ENV),
            use_proxy=not var_bool(environ, NOT_USE_PROXY_ENV),
            github_token=get_github_token(environ),
            proxy=_first_set(environ, PROXY_ENVS),
            no_proxy=_first_set(environ, NO_PROXY_ENVS),
        )

        logger.debug(
            f"Loaded configuration: out_dir={config.out_dir}, "
            f"check_version={config.check_version}, use_proxy={config.use_proxy}, "
            f"token={'set' if config.github_token else 'unset'}"
        )
        return config
