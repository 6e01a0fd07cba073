"""
Pytest configuration and shared fixtures for protoc-prebuilt tests.
"""

import io
import zipfile
from pathlib import Path
from typing import Callable

import pytest

from protoc_prebuilt.core.config import PrebuiltConfig
from protoc_prebuilt.core.platform import PlatformInfo, clear_platform_cache


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_platform_cache():
    """Keep detect_platform() results from leaking between tests."""
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    """Output root for installations."""
    path = tmp_path / "out"
    path.mkdir()
    return path


@pytest.fixture
def config(out_dir: Path) -> PrebuiltConfig:
    """Configuration pointing at the temporary output root, no proxy, no token."""
    return PrebuiltConfig(out_dir=out_dir)


@pytest.fixture
def linux_x64() -> PlatformInfo:
    """Linux x86_64 platform."""
    return PlatformInfo("linux", "x86_64")


@pytest.fixture
def make_protoc_zip() -> Callable[..., bytes]:
    """
    Factory building an in-memory protoc release archive.

    The archive holds `bin/protoc` (mode 755) and `include/google/protobuf/any.proto`,
    or `protoc` in the root when legacy=True.
    """

    def _make(legacy: bool = False, script: bytes = b"#!/bin/sh\necho libprotoc 22.0\n"):
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as zf:
            bin_name = "protoc" if legacy else "bin/protoc"
            info = zipfile.ZipInfo(bin_name)
            info.create_system = 3
            info.external_attr = 0o755 << 16
            zf.writestr(info, script)

            proto_dir = "google/protobuf" if legacy else "include/google/protobuf"
            zf.writestr(f"{proto_dir}/any.proto", 'syntax = "proto3";\n')
            zf.writestr("readme.txt", "Protocol Buffers - Google's data interchange format\n")
        return buffer.getvalue()

    return _make
