"""Unit tests for platform module."""

import errno
import os
from unittest.mock import patch

import pytest

from tcpclient import platform
from tcpclient.platform import PlatformInfo, WINDOWS_MAX_CHUNK, POSIX_MAX_CHUNK


@pytest.fixture
def fresh_platform():
    """Reset process-wide state around a test."""
    platform.shutdown()
    yield
    platform.initialize()


class TestInitialize:
    """One-time network stack initialization."""

    def test_initialize_returns_info(self, fresh_platform):
        """Test initialization records platform details."""
        info = platform.initialize()

        assert isinstance(info, PlatformInfo)
        assert info.max_chunk == platform.max_chunk_size()
        assert platform.is_initialized() is True

    def test_initialize_is_idempotent(self, fresh_platform):
        """Test repeated initialization returns the cached info."""
        first = platform.initialize()
        second = platform.initialize()

        assert first is second

    def test_shutdown(self, fresh_platform):
        """Test teardown clears state and can run twice."""
        platform.initialize()
        platform.shutdown()
        platform.shutdown()

        assert platform.is_initialized() is False

    @patch("tcpclient.platform.atexit.register")
    def test_teardown_registered_once(self, mock_register, fresh_platform):
        """Test the exit hook is registered at most once per process."""
        platform._atexit_registered = False

        platform.initialize()
        platform.shutdown()
        platform.initialize()

        mock_register.assert_called_once_with(platform.shutdown)


class TestChunkLimits:
    """Per-platform send/recv size limits."""

    @patch("tcpclient.platform.sys.platform", "win32")
    def test_windows_limit(self):
        """Test Windows calls are limited to int range."""
        assert platform.max_chunk_size() == WINDOWS_MAX_CHUNK == 2**31 - 1

    @patch("tcpclient.platform.sys.platform", "linux")
    def test_posix_limit(self):
        """Test POSIX calls are limited to ssize_t range."""
        assert platform.max_chunk_size() == POSIX_MAX_CHUNK


class TestFormatNetworkError:
    """Platform error detail strings."""

    @patch("tcpclient.platform.sys.platform", "linux")
    def test_posix_errno(self):
        """Test errno codes map to strerror text."""
        error = ConnectionRefusedError(errno.ECONNREFUSED, "Connection refused")

        assert platform.format_network_error(error) == os.strerror(
            errno.ECONNREFUSED
        )

    @patch("tcpclient.platform.sys.platform", "win32")
    def test_windows_code(self):
        """Test Windows codes are reported as WSA errors."""
        assert platform.format_network_error(code=10061) == "WSA error 10061"

    def test_no_code(self):
        """Test errors without a code fall back to their text."""
        assert platform.format_network_error(TimeoutError("timed out")) == "timed out"

    def test_nothing(self):
        """Test a missing error still yields text."""
        assert platform.format_network_error() == "unknown error"
