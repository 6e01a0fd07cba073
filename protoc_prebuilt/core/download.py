"""
HTTP transport for GitHub release metadata and assets.

This module provides:
- A requests session with protoc-prebuilt User-Agent and optional bearer token
- Proxy selection from configuration, honoring no_proxy exclusions
- Streaming download of a response body to disk

Requests are made exactly once; there is no retry or resume logic.
"""

import logging
import time
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import urlsplit

import requests
from requests.exceptions import RequestException

from protoc_prebuilt import __version__
from protoc_prebuilt.core.config import PrebuiltConfig
from protoc_prebuilt.core.exceptions import DownloadError, FilesystemError

logger = logging.getLogger(__name__)

# GitHub API requires a User-Agent header
USER_AGENT = f"protoc-prebuilt/{__version__}"

GITHUB_HOST = "github.com"
GITHUB_API_HOST = "api.github.com"

CHUNK_SIZE = 8192


def check_proxy(proxy: str, no_proxy: Optional[str], url: str) -> Optional[str]:
    """
    Decide whether a proxy applies to a URL.

    Exclusions are only recognized for the two hosts this package talks to:
    ".github.com" excludes both, "github.com" excludes the asset host,
    "api.github.com" and ".api.github.com" exclude the metadata host, and
    "*" excludes everything.

    Args:
        proxy: Proxy URL from the environment
        no_proxy: Comma-separated exclusion list, or None
        url: Target URL

    Returns:
        Proxy URL to use, or None if the request should go direct

    Example:
        >>> check_proxy("http://localhost:3128", "api.github.com",
        ...             "https://api.github.com/repos")
        >>> check_proxy("localhost:3128", None, "https://github.com/")
        'http://localhost:3128'
    """
    if no_proxy is not None:
        if no_proxy.strip() == "*":
            return None

        host = urlsplit(url).hostname or ""
        is_main = host == GITHUB_HOST
        is_api = host == GITHUB_API_HOST

        for entry in no_proxy.split(","):
            entry = entry.strip()
            if not entry:
                continue
            if entry == ".github.com" and (is_main or is_api):
                return None
            if entry == "github.com" and is_main:
                return None
            if entry in ("api.github.com", ".api.github.com") and is_api:
                return None

    # requests needs an explicit scheme for proxy URLs
    if "://" not in proxy:
        proxy = f"http://{proxy}"

    return proxy


def get_proxies(config: PrebuiltConfig, url: str) -> Dict[str, str]:
    """
    Build the requests `proxies` mapping for a URL.

    Returns:
        Mapping for both schemes, or an empty dict for direct connections
    """
    if not config.use_proxy or not config.proxy:
        return {}

    proxy = check_proxy(config.proxy, config.no_proxy, url)
    if proxy is None:
        logger.debug(f"Proxy disabled by no_proxy for {url}")
        return {}

    return {"http": proxy, "https": proxy}


def create_session(config: PrebuiltConfig) -> requests.Session:
    """
    Create an HTTP session for GitHub requests.

    The session ignores proxy variables of the process environment; proxies
    come only from the configuration so they can be disabled and tested.
    """
    session = requests.Session()
    session.trust_env = False
    session.headers["User-Agent"] = USER_AGENT

    if config.github_token:
        session.headers["Authorization"] = f"Bearer {config.github_token}"

    return session


def request_with_token(
    session: requests.Session,
    config: PrebuiltConfig,
    url: str,
    stream: bool = False,
    timeout: int = 30,
) -> requests.Response:
    """
    Send a GET request with the session's User-Agent and token.

    The response is returned whatever its status; callers decide how each
    status is interpreted.

    Args:
        session: Session from create_session()
        config: Configuration supplying proxy settings
        url: URL to request
        stream: Leave the body unread for streaming
        timeout: Request timeout in seconds

    Returns:
        requests.Response

    Raises:
        DownloadError: If the transport fails (connection, TLS, proxy, timeout)
    """
    logger.debug(f"GET {url}")

    try:
        response = session.get(
            url,
            proxies=get_proxies(config, url),
            stream=stream,
            timeout=timeout,
            allow_redirects=True,
        )
    except RequestException as e:
        raise DownloadError(f"Request to {url} failed: {e}") from e

    logger.debug(f"GET {url} -> {response.status_code}")
    return response


def save_response(response: requests.Response, destination: Path) -> Path:
    """
    Stream a response body to a file.

    An existing file at destination is replaced.

    Args:
        response: Streaming response with a success status
        destination: File to write

    Returns:
        Path to the written file

    Raises:
        DownloadError: If reading the body fails
        FilesystemError: If writing the file fails
    """
    destination = Path(destination)

    try:
        if destination.exists():
            logger.debug(f"Removing stale archive: {destination}")
            destination.unlink()
    except OSError as e:
        raise FilesystemError(f"Failed to remove '{destination}': {e}") from e

    content_length = response.headers.get("content-length")
    try:
        total_size = int(content_length) if content_length else 0
    except ValueError:
        logger.debug(f"Ignoring invalid Content-Length: {content_length!r}")
        total_size = 0

    downloaded = 0
    start_time = time.time()

    try:
        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    f.write(chunk)
                    downloaded += len(chunk)
    except RequestException as e:
        raise DownloadError(f"Download of {response.url} failed: {e}") from e
    except OSError as e:
        raise FilesystemError(f"Failed to write '{destination}': {e}") from e
    finally:
        response.close()

    elapsed = time.time() - start_time
    if total_size:
        logger.info(f"Downloaded {downloaded}/{total_size} bytes in {elapsed:.2f}s")
    else:
        logger.info(f"Downloaded {downloaded} bytes in {elapsed:.2f}s")

    return destination
