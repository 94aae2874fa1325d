"""Client configuration settings."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ClientConfig:
    """TCP client configuration."""

    receive_size: int = 4096
    # None keeps every socket call fully blocking
    timeout: Optional[float] = None
    # Used when send() is given text instead of bytes
    encoding: str = "utf-8"
