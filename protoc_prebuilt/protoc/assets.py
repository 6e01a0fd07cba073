"""
Release asset naming for pre-built protoc binaries.

Assets are published as `protoc-$VERSION-$PLATFORM.zip`. Both parts drifted over
the years, so the mapping is table-driven: every irregular spelling is an
explicit entry, and any combination without an entry is an error rather than
a guessed name.

Example:
    >>> get_protoc_asset_name("22.0-rc3", "macos", "aarch64")
    'protoc-22.0-rc-3-osx-aarch_64'
"""

from typing import Dict, Tuple

from protoc_prebuilt.core.exceptions import PlatformNotSupportedError

RC_MARKER = "rc"

# Tags like "v22.0-rc3" publish assets named "protoc-22.0-rc-3-*". These
# release candidates were named some other way.
ASSET_VERSION_EXCEPTIONS: Dict[str, str] = {
    "3.7.0-rc.3": "3.7.0-rc-3",
    "3.7.0rc2": "3.7.0-rc-2",
    "3.7.0rc1": "3.7.0-rc1",
    "3.2.0rc2": "3.2.0rc2",
}

ASSET_OS: Dict[str, str] = {
    "linux": "linux",
    "macos": "osx",
    "windows": "win",
}

ASSET_ARCH: Dict[str, Dict[str, str]] = {
    "linux": {
        "aarch64": "aarch_64",
        "powerpc64": "ppcle_64",
        "s390x": "s390_64",
        "x86": "x86_32",
        "x86_64": "x86_64",
    },
    "macos": {
        "aarch64": "aarch_64",
        "x86": "x86_32",
        "x86_64": "x86_64",
    },
    "windows": {
        "x86": "32",
        "x86_64": "64",
    },
}

# Linux s390x spelling by the first four characters of the version
LINUX_S390X_BY_PREFIX: Dict[str, str] = {
    "3.10": "s390x_64",
    "3.11": "s390x_64",
    "3.12": "s390x",
    "3.13": "s390x",
    "3.14": "s390x",
    "3.15": "s390x",
}

# Single releases with a one-off architecture spelling
ASSET_ARCH_VERSION_EXCEPTIONS: Dict[Tuple[str, str, str], str] = {
    ("linux", "x86", "3.0.0-beta-4"): "x86-32",
}

# Windows assets have no separator between os and arch ("win64")
OS_ARCH_SEPARATOR: Dict[str, str] = {
    "windows": "",
}


def prepare_asset_version(version: str) -> str:
    """
    Map a release tag version to its spelling inside asset names.

    Args:
        version: Tag name without the `v` prefix, e.g. "22.0-rc3"

    Returns:
        Version as it appears in the asset name, e.g. "22.0-rc-3"
    """
    if RC_MARKER not in version:
        return version

    if version in ASSET_VERSION_EXCEPTIONS:
        return ASSET_VERSION_EXCEPTIONS[version]

    prefix, suffix = version.split(RC_MARKER, 1)
    return f"{prefix}rc-{suffix}"


def get_asset_arch(version: str, os_name: str, arch: str) -> str:
    """
    Map an architecture to its asset name spelling for an OS and version.

    Raises:
        PlatformNotSupportedError: If the (os, arch) pair is not published
    """
    arch_table = ASSET_ARCH.get(os_name)
    if arch_table is None or arch not in arch_table:
        raise PlatformNotSupportedError(os_name, arch)

    exception = ASSET_ARCH_VERSION_EXCEPTIONS.get((os_name, arch, version))
    if exception is not None:
        return exception

    if os_name == "linux" and arch == "s390x":
        return LINUX_S390X_BY_PREFIX.get(version[0:4], arch_table[arch])

    return arch_table[arch]


def get_protoc_asset_name(version: str, os_name: str, arch: str) -> str:
    """
    Format the protoc asset base name for a version and platform.

    Args:
        version: Tag name without the `v` prefix
        os_name: 'linux', 'macos' or 'windows'
        arch: 'x86', 'x86_64', 'aarch64', 'powerpc64' or 's390x'

    Returns:
        Asset name without the `.zip` extension

    Raises:
        PlatformNotSupportedError: If no asset is published for the platform

    Example:
        >>> get_protoc_asset_name("21.12", "windows", "x86_64")
        'protoc-21.12-win64'
    """
    asset_os = ASSET_OS.get(os_name)
    if asset_os is None:
        raise PlatformNotSupportedError(os_name, arch)

    asset_arch = get_asset_arch(version, os_name, arch)
    separator = OS_ARCH_SEPARATOR.get(os_name, "-")

    return f"protoc-{prepare_asset_version(version)}-{asset_os}{separator}{asset_arch}"
