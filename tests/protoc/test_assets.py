"""
Unit tests for release asset naming.

Every irregular spelling in the naming tables has its own case, so a table
edit that breaks a historical asset name fails loudly.
"""

import pytest

from protoc_prebuilt.core.exceptions import PlatformNotSupportedError
from protoc_prebuilt.protoc.assets import (
    ASSET_VERSION_EXCEPTIONS,
    get_asset_arch,
    get_protoc_asset_name,
    prepare_asset_version,
)


class TestPrepareAssetVersion:
    """Tests for prepare_asset_version()."""

    @pytest.mark.parametrize(
        "version, expected",
        [
            ("22.0", "22.0"),
            ("21.12", "21.12"),
            ("3.0.0-beta-3", "3.0.0-beta-3"),
            ("3.0.0-alpha-1", "3.0.0-alpha-1"),
        ],
    )
    def test_non_rc_versions_unchanged(self, version, expected):
        """Test versions without rc marker are returned as is."""
        assert prepare_asset_version(version) == expected

    @pytest.mark.parametrize(
        "version, expected",
        [
            ("22.0-rc3", "22.0-rc-3"),
            ("3.14.0-rc1", "3.14.0-rc-1"),
            ("26.0-rc1", "26.0-rc-1"),
        ],
    )
    def test_rc_general_rule(self, version, expected):
        """Test rc versions get a hyphen between rc and its number."""
        assert prepare_asset_version(version) == expected

    @pytest.mark.parametrize(
        "version, expected",
        [
            ("3.7.0-rc.3", "3.7.0-rc-3"),
            ("3.7.0rc2", "3.7.0-rc-2"),
            ("3.7.0rc1", "3.7.0-rc1"),
            ("3.2.0rc2", "3.2.0rc2"),
        ],
    )
    def test_rc_exceptions(self, version, expected):
        """Test release candidates with non-default asset names."""
        assert prepare_asset_version(version) == expected

    def test_every_exception_is_covered(self):
        """Test the exception table holds exactly the four known releases."""
        assert set(ASSET_VERSION_EXCEPTIONS) == {
            "3.7.0-rc.3",
            "3.7.0rc2",
            "3.7.0rc1",
            "3.2.0rc2",
        }


class TestGetProtocAssetName:
    """Tests for get_protoc_asset_name()."""

    @pytest.mark.parametrize(
        "version, os_name, arch, expected",
        [
            ("22.0", "linux", "x86", "protoc-22.0-linux-x86_32"),
            ("22.0", "linux", "x86_64", "protoc-22.0-linux-x86_64"),
            ("22.0", "linux", "aarch64", "protoc-22.0-linux-aarch_64"),
            ("22.0", "linux", "powerpc64", "protoc-22.0-linux-ppcle_64"),
            ("22.0", "linux", "s390x", "protoc-22.0-linux-s390_64"),
            ("22.0", "macos", "x86", "protoc-22.0-osx-x86_32"),
            ("22.0", "macos", "x86_64", "protoc-22.0-osx-x86_64"),
            ("22.0-rc3", "macos", "aarch64", "protoc-22.0-rc-3-osx-aarch_64"),
            ("21.12", "windows", "x86", "protoc-21.12-win32"),
            ("21.12", "windows", "x86_64", "protoc-21.12-win64"),
            ("21.0", "linux", "s390x", "protoc-21.0-linux-s390_64"),
        ],
    )
    def test_default_names(self, version, os_name, arch, expected):
        """Test asset names for the support matrix."""
        assert get_protoc_asset_name(version, os_name, arch) == expected

    def test_beta_4_linux_x86_hyphen(self):
        """Test 3.0.0-beta-4 uses a hyphen in the 32-bit linux arch."""
        assert (
            get_protoc_asset_name("3.0.0-beta-4", "linux", "x86")
            == "protoc-3.0.0-beta-4-linux-x86-32"
        )

    def test_beta_4_exception_only_for_linux_x86(self):
        """Test the beta-4 spelling doesn't leak to other platforms."""
        assert (
            get_protoc_asset_name("3.0.0-beta-4", "macos", "x86")
            == "protoc-3.0.0-beta-4-osx-x86_32"
        )
        assert (
            get_protoc_asset_name("3.0.0-beta-3", "linux", "x86")
            == "protoc-3.0.0-beta-3-linux-x86_32"
        )

    @pytest.mark.parametrize(
        "version, expected",
        [
            ("3.10.0-rc1", "protoc-3.10.0-rc-1-linux-s390x_64"),
            ("3.10.1", "protoc-3.10.1-linux-s390x_64"),
            ("3.11.2", "protoc-3.11.2-linux-s390x_64"),
            ("3.12.0-rc1", "protoc-3.12.0-rc-1-linux-s390x"),
            ("3.13.0", "protoc-3.13.0-linux-s390x"),
            ("3.14.0", "protoc-3.14.0-linux-s390x"),
            ("3.15.4", "protoc-3.15.4-linux-s390x"),
            ("3.16.0", "protoc-3.16.0-linux-s390_64"),
            ("3.9.0", "protoc-3.9.0-linux-s390_64"),
        ],
    )
    def test_s390x_version_ranges(self, version, expected):
        """Test linux s390x spelling across version ranges."""
        assert get_protoc_asset_name(version, "linux", "s390x") == expected

    def test_s390x_short_version(self):
        """Test a version shorter than the range prefix falls back to default."""
        assert get_asset_arch("3.1", "linux", "s390x") == "s390_64"

    def test_rc_exception_in_full_name(self):
        """Test rc exceptions apply inside the asset name."""
        assert (
            get_protoc_asset_name("3.7.0rc1", "windows", "x86")
            == "protoc-3.7.0-rc1-win32"
        )
        assert (
            get_protoc_asset_name("3.2.0rc2", "linux", "x86_64")
            == "protoc-3.2.0rc2-linux-x86_64"
        )


class TestUnsupportedPlatforms:
    """Tests for platforms without published assets."""

    @pytest.mark.parametrize(
        "os_name, arch",
        [
            ("freebsd", "x86_64"),
            ("freebsd", "aarch64"),
            ("windows", "aarch64"),
            ("windows", "powerpc64"),
            ("windows", "s390x"),
            ("macos", "powerpc64"),
            ("macos", "s390x"),
            ("linux", "arm"),
            ("linux", "riscv64"),
        ],
    )
    def test_unsupported_platform_raises(self, os_name, arch):
        """Test unmapped platforms raise instead of guessing a name."""
        with pytest.raises(PlatformNotSupportedError) as exc_info:
            get_protoc_asset_name("22.0", os_name, arch)

        assert exc_info.value.os_name == os_name
        assert exc_info.value.arch == arch
        assert f"{os_name}-{arch}" in str(exc_info.value)
