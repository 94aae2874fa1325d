"""Process-wide network stack setup and platform error helpers."""

import atexit
import logging
import os
import sys
import threading
from dataclasses import dataclass
from typing import Optional

from tcpclient.errors import PlatformInitError

log = logging.getLogger(__name__)

# Largest byte count a single send/recv call accepts.
WINDOWS_MAX_CHUNK = 2**31 - 1
POSIX_MAX_CHUNK = sys.maxsize


@dataclass(frozen=True)
class PlatformInfo:
    """Snapshot of the network stack taken at initialization."""

    name: str
    max_chunk: int
    has_ipv6: bool


_lock = threading.Lock()
_info: Optional[PlatformInfo] = None
_atexit_registered = False


def is_windows() -> bool:
    return sys.platform.startswith("win")


def max_chunk_size() -> int:
    """Return the largest byte count accepted by one socket call."""
    return WINDOWS_MAX_CHUNK if is_windows() else POSIX_MAX_CHUNK


def initialize() -> PlatformInfo:
    """
    Bring up the network stack once per process.

    Safe to call from every client and from several threads; only the
    first call does any work and registers the paired teardown.

    Returns:
        The cached PlatformInfo

    Raises:
        PlatformInitError: If the interpreter has no usable socket support
    """
    global _info, _atexit_registered

    with _lock:
        if _info is not None:
            return _info

        try:
            import socket
        except ImportError as e:
            raise PlatformInitError(f"socket support unavailable: {e}") from e

        for name in ("getaddrinfo", "socket", "AF_UNSPEC", "SOCK_STREAM"):
            if not hasattr(socket, name):
                raise PlatformInitError(f"socket module lacks {name}")

        _info = PlatformInfo(
            name=sys.platform,
            max_chunk=max_chunk_size(),
            has_ipv6=bool(getattr(socket, "has_ipv6", False)),
        )
        if not _atexit_registered:
            atexit.register(shutdown)
            _atexit_registered = True

        log.debug(
            "Network stack initialized on %s (max chunk %d, ipv6=%s)",
            _info.name,
            _info.max_chunk,
            _info.has_ipv6,
        )
        return _info


def shutdown() -> None:
    """Tear down process-wide state. Idempotent."""
    global _info

    with _lock:
        if _info is None:
            return
        _info = None
    log.debug("Network stack shut down")


def is_initialized() -> bool:
    return _info is not None


def format_network_error(error: Optional[BaseException] = None, code: Optional[int] = None) -> str:
    """
    Build a readable description of a platform network error.

    Args:
        error: Exception raised by the socket layer, if any
        code: Explicit error code, used when no exception carries one

    Returns:
        "WSA error <code>" on Windows, the strerror text elsewhere
    """
    if code is None and error is not None:
        code = getattr(error, "winerror", None) if is_windows() else None
        if code is None:
            code = getattr(error, "errno", None)

    if code is not None:
        if is_windows():
            return f"WSA error {code}"
        return os.strerror(code)

    if error is not None:
        text = getattr(error, "strerror", None) or str(error)
        return text or error.__class__.__name__
    return "unknown error"
