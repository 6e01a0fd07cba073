"""
Resolution and acquisition of pre-built protoc releases.

Provides asset naming, install layout, version comparison, forced path
overrides and the installer that ties them together.
"""

from .assets import get_protoc_asset_name, prepare_asset_version
from .installer import InstallResult, ProtocInstaller
from .layout import get_bin_path, get_include_path, is_binary_in_root
from .overrides import check_force_bin, check_force_include
from .version import compare_versions, parse_version_output

__all__ = [
    "get_protoc_asset_name",
    "prepare_asset_version",
    "InstallResult",
    "ProtocInstaller",
    "get_bin_path",
    "get_include_path",
    "is_binary_in_root",
    "check_force_bin",
    "check_force_include",
    "compare_versions",
    "parse_version_output",
]
