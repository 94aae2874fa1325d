"""Error types raised by the TCP client."""

from typing import Optional


class TcpClientError(Exception):
    """Base class for every error raised by tcpclient."""


class InvalidArgumentError(TcpClientError, ValueError):
    """Raised when a caller passes an unusable argument (empty host, missing buffer)."""


class NotConnectedError(TcpClientError, RuntimeError):
    """Raised when an operation needs a live connection and there is none."""

    def __init__(self, message: str = "socket is not connected"):
        super().__init__(message)


class PlatformInitError(TcpClientError, RuntimeError):
    """Raised when the process-wide network stack cannot be initialized."""


class NetworkError(TcpClientError, OSError):
    """
    Base for errors reported by the resolver or the socket layer.

    Attributes:
        errno: Platform error code, or None when the platform gave none
        detail: Human readable description of the platform error
    """

    def __init__(self, message: str, detail: str = "", code: Optional[int] = None):
        text = f"{message}: {detail}" if detail else message
        super().__init__(text)
        self.message = text
        self.errno = code
        self.strerror = detail or None
        self.detail = detail

    def __str__(self) -> str:
        return self.message


class ResolutionError(NetworkError):
    """Raised when name resolution fails or yields no usable address."""


class TcpConnectionError(NetworkError, ConnectionError):
    """
    Raised when every resolved candidate address failed to connect.

    Attributes:
        attempts: Number of candidate addresses that were tried
    """

    def __init__(
        self,
        message: str,
        detail: str = "",
        code: Optional[int] = None,
        attempts: int = 0,
    ):
        super().__init__(message, detail, code)
        self.attempts = attempts


class TransferError(NetworkError):
    """
    Raised when a send or receive call fails.

    Attributes:
        bytes_transferred: Bytes handed to the OS before the failing call
    """

    def __init__(
        self,
        message: str,
        detail: str = "",
        code: Optional[int] = None,
        bytes_transferred: int = 0,
    ):
        super().__init__(message, detail, code)
        self.bytes_transferred = bytes_transferred
