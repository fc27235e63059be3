"""Transport layer implementations.

The concrete transports are imported on demand by
:func:`rosbridge_client.config.transport`, so that only the library for the
selected backend needs to be importable.
"""

from .base import (
    Transport,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    ConnectionLost,
    NotConnected,
    ServiceError,
)
