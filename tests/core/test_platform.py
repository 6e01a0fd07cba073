"""
Unit tests for the platform detection module.
"""

import pytest
from unittest.mock import patch

from protoc_prebuilt.core.platform import (
    PlatformInfo,
    _detect_architecture,
    _detect_os,
    clear_platform_cache,
    detect_platform,
)


class TestPlatformInfo:
    """Tests for PlatformInfo dataclass."""

    def test_platform_string(self):
        """Test platform string generation."""
        assert PlatformInfo("linux", "x86_64").platform_string() == "linux-x86_64"
        assert str(PlatformInfo("macos", "aarch64")) == "macos-aarch64"

    def test_equality(self):
        """Test platform values compare by value."""
        assert PlatformInfo("linux", "x86") == PlatformInfo("linux", "x86")


class TestDetectOS:
    """Tests for OS detection."""

    @pytest.mark.parametrize(
        "system, expected",
        [
            ("Linux", "linux"),
            ("Darwin", "macos"),
            ("Windows", "windows"),
            ("FreeBSD", "freebsd"),
        ],
    )
    def test_detect_os(self, system, expected):
        """Test OS names are normalized."""
        with patch("platform.system", return_value=system):
            assert _detect_os() == expected


class TestDetectArchitecture:
    """Tests for architecture detection."""

    @pytest.mark.parametrize(
        "machine, expected",
        [
            ("x86_64", "x86_64"),
            ("AMD64", "x86_64"),
            ("aarch64", "aarch64"),
            ("arm64", "aarch64"),
            ("i686", "x86"),
            ("i386", "x86"),
            ("ppc64le", "powerpc64"),
            ("s390x", "s390x"),
            ("riscv64", "riscv64"),
        ],
    )
    def test_detect_architecture(self, machine, expected):
        """Test architecture names are normalized."""
        with patch("platform.machine", return_value=machine):
            assert _detect_architecture() == expected


class TestDetectPlatform:
    """Tests for cached detection."""

    def test_detect_platform_cached(self):
        """Test detection runs once until the cache is cleared."""
        with patch("platform.system", return_value="Linux"), patch(
            "platform.machine", return_value="x86_64"
        ):
            first = detect_platform()

        with patch("platform.system", return_value="Windows"), patch(
            "platform.machine", return_value="x86"
        ):
            assert detect_platform() is first
            clear_platform_cache()
            assert detect_platform() == PlatformInfo("windows", "x86")
