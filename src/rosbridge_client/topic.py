""" Client-side handle for a named topic. Any number of :class:`Topic`
    instances may share one name on one connection; the connection keeps
    a single registration per name, and the bridge is told to stop
    delivering (or to drop an advertisement) only when the last holder
    lets go.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, List, Optional

from .protocol import message as messages

logger = logging.getLogger(__name__)


class Topic:
    """ The *throttle_rate* and *queue_length* arguments are forwarded with
        subscribe requests, *latch* and *queue_size* with advertise
        requests, as the rosbridge protocol defines them.
    """

    def __init__(self, connection, name: str, type: Optional[str] = None,
                 throttle_rate: int = 0, queue_length: int = 0,
                 queue_size: int = 100, latch: bool = False):

        self.connection = connection
        self.name = name
        self.type = type
        self.throttle_rate = throttle_rate
        self.queue_length = queue_length
        self.queue_size = queue_size
        self.latch = latch

        self.listeners: List[Callable[[Any], None]] = []
        self.subscribe_id: Optional[str] = None
        self.advertise_id: Optional[str] = None
        self.publish_id: Optional[str] = None
        self.lock = threading.Lock()

    def __repr__(self):
        return '<Topic %s type=%s>' % (self.name, self.type)

    @property
    def is_subscribed(self) -> bool:
        return len(self.listeners) > 0

    @property
    def is_advertised(self) -> bool:
        return self.advertise_id is not None

    # --- subscriber role ---
    def subscribe(self, listener: Callable[[Any], None]) -> bool:
        """ Invoke *listener* with the ``msg`` of every message published
            on this topic. The listener is registered whether or not the
            connection is ready; the return value reports whether the
            subscribe request reached the transport.
        """

        if callable(listener):
            pass
        else:
            raise TypeError('listener must be callable')

        connection = self.connection
        id = connection.request_subscriber(self.name)

        with self.lock:
            self.subscribe_id = id
            self.listeners.append(listener)
            connection.registry.add_listener(self.name, listener, id)

        request = messages.subscribe(id, self.name, self.type, self.throttle_rate, self.queue_length)
        return connection.send(request)

    def unsubscribe(self, listener: Optional[Callable[[Any], None]] = None) -> bool:
        """ Remove *listener*, or every listener added through this handle
            if none is given. Once no listener is left on the topic name an
            ``unsubscribe`` request is sent, best effort. Returns True if
            anything was removed.
        """

        with self.lock:
            if listener is None:
                removed = self.listeners
                self.listeners = []
            elif listener in self.listeners:
                self.listeners.remove(listener)
                removed = [listener]
            else:
                removed = []

            if len(self.listeners) == 0:
                self.subscribe_id = None

        released = []
        for callback in removed:
            released.extend(self.connection.registry.remove_listener(self.name, callback))

        for id in released:
            if self.connection.send(messages.unsubscribe(id, self.name)):
                pass
            else:
                logger.debug("unsubscribe %s not sent, not connected", id)

        return len(removed) > 0

    # --- advertiser role ---
    def advertise(self) -> bool:
        """ Declare this client a publisher of the topic. Returns False if
            the connection is not ready; advertising twice through the same
            handle is a no-op.
        """

        with self.lock:
            if self.advertise_id is not None:
                return True

            connection = self.connection
            id = connection.request_advertiser(self.name)
            request = messages.advertise(id, self.name, self.type, self.latch, self.queue_size)

            if connection.send(request):
                self.advertise_id = id
                connection.registry.add_advertiser(self.name, id)
                return True

        return False

    def unadvertise(self) -> bool:
        """ Withdraw this handle's advertisement. The ``unadvertise`` request
            is sent once no handle on this connection advertises the topic.
            Returns False if this handle was not advertising.
        """

        with self.lock:
            id = self.advertise_id
            if id is None:
                return False
            self.advertise_id = None

        for released in self.connection.registry.remove_advertiser(self.name, id):
            if self.connection.send(messages.unadvertise(released, self.name)):
                pass
            else:
                logger.debug("unadvertise %s not sent, not connected", released)

        return True

    # --- publisher role ---
    def publish(self, msg: dict) -> bool:
        """ Publish *msg* on the topic. The publisher id is allocated on the
            first call and reused afterwards. Returns False if the
            connection is not ready.
        """

        with self.lock:
            if self.publish_id is None:
                self.publish_id = self.connection.request_publisher(self.name)
                self.connection.registry.add_publisher(self.name)
            id = self.publish_id

        return self.connection.send(messages.publish(self.name, msg, id))

    def close(self) -> None:
        """ Release every role this handle holds on the topic.
        """

        self.unsubscribe()
        self.unadvertise()

        with self.lock:
            id = self.publish_id
            self.publish_id = None

        if id is not None:
            self.connection.registry.remove_publisher(self.name)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
