""" Client-side handle for a named service: calling it, or advertising a
    local handler that answers calls made through the bridge.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from .protocol import message as messages

logger = logging.getLogger(__name__)


class Response:
    """ The outcome of a service handler that should be answered. *values*
        is sent back as-is; *result* False reports a failure to the caller.
    """

    def __init__(self, values: Any = None, result: bool = True):
        self.values = values
        self.result = bool(result)

    def __repr__(self):
        return 'Response(%r, result=%r)' % (self.values, self.result)

    def __eq__(self, other):
        if isinstance(other, Response):
            return self.values == other.values and self.result == other.result
        return NotImplemented


class NoResponse:
    """ The outcome of a service handler that answers on its own, or not
        at all. Use the :data:`NO_RESPONSE` instance.
    """

    def __repr__(self):
        return 'NO_RESPONSE'


NO_RESPONSE = NoResponse()


class Service:
    """ A named service reached through *connection*. The same name may be
        wrapped by any number of :class:`Service` instances.

        A handler passed to :func:`advertise` is invoked with the request
        arguments (a dictionary) and returns one of: a :class:`Response`,
        a dictionary (shorthand for ``Response(dictionary)``),
        :data:`NO_RESPONSE` or None, or a :class:`concurrent.futures.Future`
        that later resolves to one of those.
    """

    def __init__(self, connection, name: str, type: Optional[str] = None):
        self.connection = connection
        self.name = name
        self.type = type
        self.handler: Optional[Callable] = None
        self.lock = threading.Lock()

    def __repr__(self):
        return '<Service %s type=%s advertised=%r>' % (self.name, self.type, self.is_advertised)

    @property
    def is_advertised(self) -> bool:
        return self.handler is not None

    def call(self, request: Optional[dict] = None):
        """ Invoke the service with *request* as its arguments, and return
            the :class:`rosbridge_client.registry.ServiceCall` tracking the
            response. If the connection is not ready the returned call has
            already failed with :class:`NotConnected`.
        """

        return self.connection.call_service(self.name, request)

    def advertise(self, handler: Callable) -> bool:
        """ Answer calls to this service with *handler*. Returns False, and
            leaves the service unadvertised, if the connection is not ready.
            Advertising again replaces the handler. When several handles
            advertise one name, the latest handler answers, and the bridge
            is only told about the first.
        """

        if callable(handler):
            pass
        else:
            raise TypeError('handler must be callable')

        registry = self.connection.registry

        with self.lock:
            if self.handler is not None:
                registry.replace_service(self.name, self.handler, handler)
                self.handler = handler
                return True

            # Register before sending, so that a request arriving right
            # after the bridge accepts the advertisement finds the handler.

            holders = registry.add_service(self.name, handler)

            if holders > 1 or self.connection.send(messages.advertise_service(self.name, self.type)):
                self.handler = handler
                return True

            registry.remove_service(self.name, handler)
            return False

    def unadvertise(self) -> bool:
        """ Stop answering calls to this service through this handle.
            ``unadvertise_service`` is sent once no handle on the connection
            advertises the name. Unadvertising a service that is not
            advertised does nothing and returns False.
        """

        with self.lock:
            handler = self.handler
            if handler is None:
                return False

            self.handler = None
            remaining = self.connection.registry.remove_service(self.name, handler)

        if remaining != 0:
            return True

        if self.connection.send(messages.unadvertise_service(self.name)):
            pass
        else:
            logger.debug("unadvertise_service for %s not sent, not connected", self.name)

        return True


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
