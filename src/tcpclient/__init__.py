"""Minimal blocking TCP client."""

import logging

from tcpclient.config.settings import ClientConfig
from tcpclient.errors import (
    InvalidArgumentError,
    NotConnectedError,
    PlatformInitError,
    ResolutionError,
    TcpClientError,
    TcpConnectionError,
    TransferError,
)
from tcpclient.transports.tcp.sync_client import TcpClient, create_connection

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "TcpClient",
    "create_connection",
    "ClientConfig",
    "TcpClientError",
    "InvalidArgumentError",
    "NotConnectedError",
    "PlatformInitError",
    "ResolutionError",
    "TcpConnectionError",
    "TransferError",
    "__version__",
]
