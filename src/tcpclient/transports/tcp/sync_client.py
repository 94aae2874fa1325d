"""Synchronous TCP client implementation."""

import logging
import socket
from typing import Optional, Union

from tcpclient import platform
from tcpclient.config.settings import ClientConfig
from tcpclient.errors import (
    InvalidArgumentError,
    NotConnectedError,
    ResolutionError,
    TcpConnectionError,
    TransferError,
)

log = logging.getLogger(__name__)

Payload = Union[bytes, bytearray, memoryview, str]


class TcpClient:
    """
    Blocking TCP client owning at most one connected socket.

    A client cannot be copied. Ownership of its socket can be handed to
    another client with take() or take_from(), which leaves the source
    unconnected.
    """

    def __init__(self, config: Optional[ClientConfig] = None):
        """
        Initialize TCP client.

        Args:
            config: Client settings, defaults to ClientConfig()

        Raises:
            PlatformInitError: If the network stack cannot be initialized
        """
        self._socket: Optional[socket.socket] = None
        self._connected = False
        self.config = config if config is not None else ClientConfig()
        platform.initialize()

    @classmethod
    def take(cls, other: "TcpClient") -> "TcpClient":
        """
        Create a client that takes over the socket owned by other.

        Args:
            other: Source client, left unconnected afterwards

        Returns:
            New client owning other's socket
        """
        client = cls(config=other.config)
        client._socket = other._socket
        client._connected = other._connected
        other._reset_socket()
        return client

    def take_from(self, other: "TcpClient") -> "TcpClient":
        """
        Close this client's socket and take over the socket owned by other.

        Args:
            other: Source client, left unconnected afterwards

        Returns:
            This client
        """
        if other is self:
            return self
        self.close()
        self._socket = other._socket
        self._connected = other._connected
        other._reset_socket()
        return self

    def connect(self, host: str, port: int) -> None:
        """
        Resolve host and connect to the first candidate address that accepts.

        Args:
            host: Server hostname or literal IP address
            port: Server port

        Raises:
            InvalidArgumentError: If host is empty or port is out of range
            ResolutionError: If the name cannot be resolved
            TcpConnectionError: If no resolved address accepted the connection
        """
        if not isinstance(host, str) or not host:
            raise InvalidArgumentError("host must not be empty")
        if isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 0xFFFF:
            raise InvalidArgumentError(f"port must be an integer in 0..65535, got {port!r}")

        self.close()
        platform.initialize()

        candidates = self._resolve(host, port)

        last_error: Optional[OSError] = None
        for family, socktype, proto, _, address in candidates:
            log.debug("Connecting to %s:%d via %s", host, port, address)
            try:
                sock = socket.socket(family, socktype, proto)
            except OSError as e:
                log.debug("Socket creation for %s failed: %s", address, e)
                last_error = e
                continue

            try:
                sock.settimeout(self.config.timeout)
                sock.connect(address)
            except OSError as e:
                log.debug("Connect to %s failed: %s", address, e)
                last_error = e
                sock.close()
                continue

            self._socket = sock
            self._connected = True
            log.debug("Connected to %s:%d at %s", host, port, address)
            return

        raise TcpConnectionError(
            "connect failed",
            platform.format_network_error(last_error),
            getattr(last_error, "errno", None),
            attempts=len(candidates),
        ) from last_error

    def _resolve(self, host: str, port: int) -> list:
        try:
            results = socket.getaddrinfo(
                host, port, socket.AF_UNSPEC, socket.SOCK_STREAM, socket.IPPROTO_TCP
            )
        except socket.gaierror as e:
            detail = e.strerror or str(e)
            raise ResolutionError("getaddrinfo failed", detail, e.errno) from e
        except UnicodeError as e:
            raise ResolutionError("getaddrinfo failed", str(e)) from e

        if not results:
            raise ResolutionError("getaddrinfo failed", "no addresses resolved")
        return results

    def send(self, data: Optional[Payload], length: Optional[int] = None) -> int:
        """
        Send data to server, blocking until every byte is written.

        Args:
            data: Bytes to send; text is encoded with the configured encoding
            length: Number of leading bytes of data to send, defaults to all

        Returns:
            Number of bytes sent, always the requested length

        Raises:
            InvalidArgumentError: If data is missing or length does not fit it
            NotConnectedError: If not connected
            TransferError: If the socket reports an error
        """
        if data is None:
            if length:
                raise InvalidArgumentError("data must not be None when length > 0")
            return 0

        if isinstance(data, str):
            data = data.encode(self.config.encoding)

        try:
            view = memoryview(data).cast("B")
        except TypeError as e:
            raise InvalidArgumentError(f"cannot send {type(data).__name__}: {e}") from e
        if length is None:
            length = view.nbytes
        elif length < 0 or length > view.nbytes:
            raise InvalidArgumentError(
                f"length {length} outside buffer of {view.nbytes} bytes"
            )

        if length == 0:
            return 0

        self._ensure_connected()

        chunk_limit = platform.max_chunk_size()
        total_sent = 0
        while total_sent < length:
            chunk = min(length - total_sent, chunk_limit)
            try:
                sent = self._socket.send(view[total_sent : total_sent + chunk])
            except OSError as e:
                raise TransferError(
                    "send failed",
                    platform.format_network_error(e),
                    e.errno,
                    bytes_transferred=total_sent,
                ) from e
            if sent <= 0:
                raise TransferError(
                    "send failed",
                    "connection made no progress",
                    bytes_transferred=total_sent,
                )
            total_sent += sent

        return total_sent

    def receive(self, max_bytes: Optional[int] = None) -> bytes:
        """
        Receive data from server with a single blocking read.

        An empty result means the peer shut the connection down; the client
        is closed before returning.

        Args:
            max_bytes: Upper bound on bytes returned, defaults to config.receive_size

        Returns:
            Received bytes, possibly fewer than max_bytes

        Raises:
            NotConnectedError: If not connected
            TransferError: If the socket reports an error
        """
        self._ensure_connected()

        if max_bytes is None:
            max_bytes = self.config.receive_size
        if max_bytes < 0:
            raise InvalidArgumentError(f"max_bytes must not be negative, got {max_bytes}")
        if max_bytes == 0:
            return b""

        try:
            data = self._socket.recv(min(max_bytes, platform.max_chunk_size()))
        except OSError as e:
            raise TransferError(
                "receive failed", platform.format_network_error(e), e.errno
            ) from e

        if not data:
            log.debug("Peer closed the connection")
            self.close()
            return b""
        return data

    def close(self) -> None:
        """Close connection. Safe to call repeatedly."""
        if self._socket is not None:
            try:
                self._socket.close()
            except OSError as e:
                log.debug("Error while closing socket: %s", e)
            log.debug("Connection closed")
        self._reset_socket()

    def is_connected(self) -> bool:
        return self._connected

    @property
    def connected(self) -> bool:
        return self._connected

    def _reset_socket(self) -> None:
        self._socket = None
        self._connected = False

    def _ensure_connected(self) -> None:
        if not self._connected or self._socket is None:
            raise NotConnectedError()

    def __copy__(self):
        raise TypeError(f"{type(self).__name__} cannot be copied; use take()")

    def __deepcopy__(self, memo):
        raise TypeError(f"{type(self).__name__} cannot be copied; use take()")

    def __reduce__(self):
        raise TypeError(f"{type(self).__name__} cannot be pickled")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

    def __del__(self):
        # __init__ may have failed before the socket attribute was set
        if getattr(self, "_socket", None) is not None:
            self.close()


def create_connection(
    host: str, port: int, config: Optional[ClientConfig] = None
) -> TcpClient:
    """
    Build a client and connect it.

    Args:
        host: Server hostname or IP
        port: Server port
        config: Optional client settings

    Returns:
        A connected TcpClient
    """
    client = TcpClient(config=config)
    try:
        client.connect(host, port)
    except Exception:
        client.close()
        raise
    return client
