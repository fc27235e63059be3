"""Transport interface.

This is the (small) contract that transport implementations should follow.
It lives outside :mod:`rosbridge_client.protocol` so the protocol remains
transport-agnostic. A transport moves text frames over one connection and
reports four events: a frame arrived, the connection opened, the
connection closed, the connection failed.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional

logger = logging.getLogger(__name__)


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportTimeout(TransportError):
    """A caller-imposed deadline passed before a response arrived."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class ConnectionLost(TransportConnectionError):
    """The connection was torn down while an operation was outstanding."""


class NotConnected(TransportConnectionError):
    """The operation was refused because the connection is not ready."""


class ServiceError(TransportError):
    """The remote service answered with a negative result."""

    def __init__(self, service, values=None):
        self.service = service
        self.values = values
        TransportError.__init__(self, "service %s failed: %r" % (service, values))


def _ignore(*args) -> None:
    return None


class Transport(ABC):
    """Minimal contract for a wire-level transport.

    Subclasses call :meth:`_frame`, :meth:`_opened`, :meth:`_closed` and
    :meth:`_errored` from whatever thread observes the event; the callbacks
    installed with :meth:`on_frame` and friends receive them.
    """

    def __init__(self, url: Optional[str] = None):
        self.url = url
        self._on_frame: Callable[[str], None] = _ignore
        self._on_open: Callable[[], None] = _ignore
        self._on_close: Callable[[], None] = _ignore
        self._on_error: Callable[[BaseException], None] = _ignore

    # --- event wiring ---
    def on_frame(self, callback: Callable[[str], None]) -> None:
        self._on_frame = callback

    def on_open(self, callback: Callable[[], None]) -> None:
        self._on_open = callback

    def on_close(self, callback: Callable[[], None]) -> None:
        self._on_close = callback

    def on_error(self, callback: Callable[[BaseException], None]) -> None:
        self._on_error = callback

    # --- contract ---
    @abstractmethod
    def connect(self) -> None:
        """Begin establishing the connection; :meth:`_opened` follows."""

    @abstractmethod
    def close(self) -> None:
        """Tear down the connection; :meth:`_closed` follows."""

    @abstractmethod
    def send_frame(self, text: str) -> bool:
        """Send one text frame. Return False if it could not be written."""

    @property
    def is_open(self) -> bool:
        """Whether the transport is currently connected."""
        return False

    # --- helpers for subclasses ---
    def _frame(self, text) -> None:
        if isinstance(text, bytes):
            try:
                text = text.decode()
            except UnicodeDecodeError:
                logger.debug("dropping undecodable frame from %s", self.url)
                return
        self._on_frame(text)

    def _opened(self) -> None:
        self._on_open()

    def _closed(self) -> None:
        self._on_close()

    def _errored(self, error: BaseException) -> None:
        self._on_error(error)
