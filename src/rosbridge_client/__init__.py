""" Python client for the rosbridge v2.0 protocol. A :class:`Connection`
    carries JSON messages to and from a rosbridge server; :class:`Topic`
    and :class:`Service` handles publish, subscribe, call and advertise
    through it.
"""

# Utility components.

from . import json
from . import weakref
from . import stream

# Submodules used by multiple other components.

from . import protocol
from . import config
from . import transport

# Primary public-facing interfaces.

from .status import Status
from .connection import Connection
from .registry import ServiceCall
from .service import Service, Response, NoResponse, NO_RESPONSE
from .topic import Topic
from .transport import (
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    ConnectionLost,
    NotConnected,
    ServiceError,
)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
