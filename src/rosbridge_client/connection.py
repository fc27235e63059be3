""" The :class:`Connection` is the hub shared by every :class:`Topic` and
    :class:`Service` handle for one bridge session. It owns the transport,
    allocates operation identifiers, tracks the connection status, gates
    every outbound frame on that status, and routes inbound frames.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from . import config
from . import json
from .identifier import Allocator
from .protocol import fields
from .protocol import message as messages
from .registry import Registry, ServiceCall
from .router import Router
from .status import Status, StatusMachine
from .stream import Stream
from .transport.base import ConnectionLost, NotConnected, Transport

logger = logging.getLogger(__name__)


class Connection:
    """ A client session with a rosbridge server at *url*. A *transport*
        may be injected; otherwise one is built by
        :func:`rosbridge_client.config.transport` when :func:`connect` is
        called.

        :ivar registry: The :class:`Registry` of topics, service calls and
            advertised services.
        :ivar diagnostics: A :class:`Stream` of inbound ``status`` frames.
    """

    def __init__(self, url: Optional[str] = None, transport: Optional[Transport] = None):

        self._url = url
        self._allocator = Allocator()
        self._status = StatusMachine()
        self._status.hooks.append(self._transition)

        self.registry = Registry()
        self.diagnostics = Stream('diagnostics')
        self.router = Router(self.registry, self.diagnostics, self.send)

        self.transport: Optional[Transport] = None
        if transport is not None:
            self._attach(transport)

    def __repr__(self):
        return '<Connection %s %s>' % (self._url, self._status.current.value)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    # --- read-only state ---
    @property
    def url(self) -> Optional[str]:
        return self._url

    @property
    def status(self) -> Status:
        return self._status.current

    @status.setter
    def status(self, status: Status) -> None:
        """ Explicit status assignment, for forced resets and for tests.
            It notifies subscribers exactly as a transport event would.
        """
        self._status.assign(status)

    @property
    def status_stream(self) -> Stream:
        return self._status.stream

    @property
    def ids(self) -> int:
        return self._allocator.count()

    @property
    def subscribers(self) -> int:
        return self._allocator.count(fields.SUBSCRIBE)

    @property
    def advertisers(self) -> int:
        return self._allocator.count(fields.ADVERTISE)

    @property
    def publishers(self) -> int:
        return self._allocator.count(fields.PUBLISH)

    @property
    def service_callers(self) -> int:
        return self._allocator.count(fields.CALL_SERVICE)

    # --- identifier allocation ---
    def request_subscriber(self, name: str) -> str:
        return self._allocator.allocate(fields.SUBSCRIBE, name)

    def request_advertiser(self, name: str) -> str:
        return self._allocator.allocate(fields.ADVERTISE, name)

    def request_publisher(self, name: str) -> str:
        return self._allocator.allocate(fields.PUBLISH, name)

    def request_service_caller(self, name: str) -> str:
        return self._allocator.allocate(fields.CALL_SERVICE, name)

    # --- lifecycle ---
    def _attach(self, transport: Transport) -> None:
        self.transport = transport
        transport.on_frame(self.router.on_frame)
        transport.on_open(self._transport_opened)
        transport.on_close(self._transport_closed)
        transport.on_error(self._transport_errored)

    def connect(self, url: Optional[str] = None) -> None:
        """ Start connecting to the bridge. The status moves to CONNECTING
            immediately, and to CONNECTED or ERRORED once the transport
            reports the outcome; watch :attr:`status_stream` to find out.
            Calling it while already CONNECTING or CONNECTED does nothing.
        """

        if url is not None:
            if self.transport is not None and url != self._url:
                raise ValueError('connection is already bound to ' + repr(self._url))
            self._url = url

        if self.transport is None:
            self._url = config.url(self._url)
            self._attach(config.transport(self._url))

        if self._status.current.terminal:
            # A session that ended may still hold a transport with live
            # threads or sockets; release them before starting over. This
            # joins the transport's reader, so the status lock is not held.
            self._close_transport()

        with self._status.lock:
            current = self._status.current
            if current == Status.CONNECTING or current == Status.CONNECTED:
                logger.debug("connect to %s ignored while %s", self._url, current.value)
                return

            self._status.connecting()

        try:
            self.transport.connect()
        except Exception as error:
            logger.warning("cannot connect to %s: %s", self._url, error)
            self._transport_errored(error)

    def close(self) -> None:
        """ Close the transport and fail every outstanding service call.
        """

        self._close_transport()

        if self._status.current.terminal:
            self._sweep()
        else:
            self._status.closed()

    def _close_transport(self) -> None:
        if self.transport is None:
            return
        try:
            self.transport.close()
        except Exception:
            logger.exception("error closing transport for %s", self._url)

    def _transport_opened(self) -> None:
        # Only a pending connect may complete. CLOSED and ERRORED end the
        # session, and ZeroMQ reports its own silent reconnects as opens.
        with self._status.lock:
            if self._status.current != Status.CONNECTING:
                logger.debug("ignoring open of %s while %s", self._url, self._status.current.value)
                return
            self._status.opened()

    def _transport_closed(self) -> None:
        # ERRORED is terminal; a close that follows an error does not
        # overwrite it.
        with self._status.lock:
            if self._status.current == Status.ERRORED:
                return
            self._status.closed()

    def _transport_errored(self, error: BaseException) -> None:
        logger.warning("transport error on %s: %s", self._url, error)
        self._status.errored()

    def _transition(self, previous: Status, status: Status) -> None:
        if status.terminal:
            self._sweep()

    def _sweep(self) -> None:
        for call in self.registry.sweep_calls():
            call._fail(ConnectionLost('connection to %s was torn down' % (self._url,)))

    # --- outbound ---
    def send(self, message: Dict[str, Any]) -> bool:
        """ Send *message* if, and only if, the connection is CONNECTED at
            the moment of sending. Returns False without touching the
            transport otherwise.
        """

        # The status lock is not held across the write: the transport
        # serializes writers with its own lock, and reports a write on a
        # socket that went away in the meantime as a failed send.

        with self._status.lock:
            transport = self.transport
            if self._status.current != Status.CONNECTED or transport is None:
                return False

        text = json.dumps_text(message)
        return transport.send_frame(text)

    def call_service(self, name: str, args: Optional[Dict[str, Any]] = None) -> ServiceCall:
        """ Call the service *name* with *args*, returning the pending
            :class:`ServiceCall`. If the request cannot be sent the call
            comes back already failed with :class:`NotConnected`, and
            nothing is left in the registry.
        """

        id = self.request_service_caller(name)
        call = ServiceCall(id, name, args)

        # Registered before sending, so that a fast response cannot arrive
        # ahead of its pending entry.

        self.registry.add_call(call)

        if self.send(messages.call_service(id, name, args)):
            return call

        self.registry.pop_call(id)
        call._fail(NotConnected('cannot call %s, connection is %s' % (name, self._status.current.value)))
        return call

    def authenticate(self, mac: str, client: str, dest: str, rand: str, t: int, level: str, end: int) -> bool:
        """ Send an ``auth`` request. *t* and *end* are integer timestamps,
            as expected by the bridge's authentication plugin.
        """

        return self.send(messages.auth(mac, client, dest, rand, t, level, end))

    def set_status_level(self, level: Optional[str] = None, id: Optional[str] = None) -> bool:
        """ Ask the bridge to emit ``status`` frames at *level* or above; one
            of ``info``, ``warning``, ``error``, or ``none``.
        """

        return self.send(messages.set_level(level, id))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
