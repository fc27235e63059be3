""" Bookkeeping for everything a :class:`Connection` has outstanding: the
    per-topic registrations shared by :class:`Topic` handles, the service
    calls still waiting for a response, and the handlers advertised by
    :class:`Service` handles.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Dict, List, Optional

from .transport.base import ServiceError, TransportTimeout

logger = logging.getLogger(__name__)


class ServiceCall:
    """ Client-side record of one service invocation. It is resolved
        exactly once: either :func:`_complete` is called with the result
        and values from the bridge, or :func:`_fail` is called with a local
        error. Only the first resolution counts.

        :ivar result: True or False once the bridge has answered, otherwise None.
        :ivar values: The values returned by the bridge, if any.
        :ivar error: The local exception that failed the call, if any.
    """

    def __init__(self, id: str, service: str, args: Optional[dict] = None):
        self.id = id
        self.service = service
        self.args = args
        self.result: Optional[bool] = None
        self.values: Any = None
        self.error: Optional[BaseException] = None

        self.lock = threading.Lock()
        self.event = threading.Event()
        self.callbacks: List[Callable[['ServiceCall'], None]] = []

    def __repr__(self):
        if self.poll() == False:
            state = 'pending'
        elif self.error is not None:
            state = 'error=%r' % (self.error,)
        else:
            state = 'result=%r' % (self.result,)
        return '<ServiceCall %s %s>' % (self.id, state)

    @property
    def succeeded(self) -> bool:
        return self.poll() and self.error is None and self.result == True

    @property
    def failed(self) -> bool:
        return self.poll() and not self.succeeded

    def poll(self) -> bool:
        """ Return True if the call has been resolved, otherwise False.
        """
        return self.event.is_set()

    def wait(self, timeout: Optional[float] = None) -> Any:
        """ Block until the call is resolved and return the values sent
            by the bridge. A negative result raises :class:`ServiceError`;
            a local failure raises the exception recorded by :func:`_fail`.
            If *timeout* seconds pass first, :class:`TransportTimeout` is
            raised and the call remains pending.
        """

        if self.event.wait(timeout) == False:
            raise TransportTimeout("%s: no response in %.2f sec" % (self.id, timeout))

        if self.error is not None:
            raise self.error

        if self.result == False:
            raise ServiceError(self.service, self.values)

        return self.values

    def add_done_callback(self, callback: Callable[['ServiceCall'], None]) -> None:
        """ Invoke *callback* with this call once it is resolved; right
            away, on the calling thread, if that has already happened.
        """

        with self.lock:
            if self.event.is_set() == False:
                self.callbacks.append(callback)
                return

        self._invoke(callback)

    def _resolve(self, result, values, error) -> bool:

        with self.lock:
            if self.event.is_set():
                return False

            self.result = result
            self.values = values
            self.error = error
            self.event.set()

            callbacks = self.callbacks
            self.callbacks = []

        for callback in callbacks:
            self._invoke(callback)

        return True

    def _invoke(self, callback):
        try:
            callback(self)
        except Exception:
            logger.exception("done callback for %s failed", self.id)

    def _complete(self, result: bool, values: Any = None) -> bool:
        return self._resolve(bool(result), values, None)

    def _fail(self, error: BaseException) -> bool:
        return self._resolve(False, None, error)


class TopicRegistration:
    """ Shared state for one topic name. Listeners are held in
        registration order, alongside the ids of the subscribe requests
        sent for them. Advertisers are tracked by the id each holder is
        advertising under, while every advertise id ever recorded is kept
        until the last holder withdraws. Publishers are a reference count.
        A registration with no holders left is removed from the
        :class:`Registry`.
    """

    def __init__(self, name: str):
        self.name = name
        self.listeners: List[Callable[[Any], None]] = []
        self.subscribe_ids: List[str] = []
        self.advertise_ids: List[str] = []
        self.advertising: List[str] = []
        self.publishers = 0

    def __repr__(self):
        return '<TopicRegistration %s listeners=%d advertisers=%d publishers=%d>' % (
            self.name, len(self.listeners), self.advertisers, self.publishers)

    @property
    def advertisers(self) -> int:
        return len(self.advertising)

    @property
    def empty(self) -> bool:
        return len(self.listeners) == 0 and self.advertisers == 0 and self.publishers == 0


class Registry:
    """ Thread-safe registry of topic registrations, pending service calls
        and advertised service handlers. All methods return snapshots or
        scalar results; no internal container is handed out.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.topics: Dict[str, TopicRegistration] = {}
        self.pending: Dict[str, ServiceCall] = {}
        self.services: Dict[str, List[Callable]] = {}

    # --- topics ---
    def _topic(self, name: str) -> TopicRegistration:
        try:
            registration = self.topics[name]
        except KeyError:
            registration = TopicRegistration(name)
            self.topics[name] = registration
        return registration

    def _prune(self, registration: TopicRegistration) -> None:
        if registration.empty:
            self.topics.pop(registration.name, None)

    def add_listener(self, topic: str, listener: Callable[[Any], None], id: Optional[str] = None) -> int:
        """ Add *listener* for *topic*, remembering the *id* of the
            subscribe request sent on its behalf. Returns the number of
            listeners now registered on that name.
        """

        with self.lock:
            registration = self._topic(topic)
            registration.listeners.append(listener)
            if id is not None and id not in registration.subscribe_ids:
                registration.subscribe_ids.append(id)
            return len(registration.listeners)

    def remove_listener(self, topic: str, listener: Callable[[Any], None]) -> List[str]:
        """ Remove one registration of *listener* from *topic*. If that
            leaves the topic with no listeners, return the subscribe ids
            that should now be released; otherwise return an empty list.
            Removing a listener that is not registered is a no-op.
        """

        with self.lock:
            registration = self.topics.get(topic)
            if registration is None:
                return []

            try:
                registration.listeners.remove(listener)
            except ValueError:
                return []

            released = []
            if len(registration.listeners) == 0:
                released = registration.subscribe_ids
                registration.subscribe_ids = []

            self._prune(registration)
            return released

    def listeners(self, topic: str) -> List[Callable[[Any], None]]:
        with self.lock:
            registration = self.topics.get(topic)
            if registration is None:
                return []
            return list(registration.listeners)

    def add_advertiser(self, topic: str, id: str) -> int:
        with self.lock:
            registration = self._topic(topic)
            if id not in registration.advertising:
                registration.advertising.append(id)
            if id not in registration.advertise_ids:
                registration.advertise_ids.append(id)
            return registration.advertisers

    def remove_advertiser(self, topic: str, id: str) -> List[str]:
        """ Drop the advertiser holding *id*. When it was the last one,
            return every advertise id recorded for the topic, so that each
            can be released; otherwise an empty list.
        """

        with self.lock:
            registration = self.topics.get(topic)
            if registration is None or id not in registration.advertising:
                return []

            registration.advertising.remove(id)

            released = []
            if registration.advertisers == 0:
                released = registration.advertise_ids
                registration.advertise_ids = []

            self._prune(registration)
            return released

    def add_publisher(self, topic: str) -> int:
        with self.lock:
            registration = self._topic(topic)
            registration.publishers += 1
            return registration.publishers

    def remove_publisher(self, topic: str) -> int:
        with self.lock:
            registration = self.topics.get(topic)
            if registration is None or registration.publishers == 0:
                return 0

            registration.publishers -= 1
            remaining = registration.publishers
            self._prune(registration)
            return remaining

    def registration(self, topic: str) -> Optional[TopicRegistration]:
        with self.lock:
            return self.topics.get(topic)

    # --- service calls ---
    def add_call(self, call: ServiceCall) -> None:
        with self.lock:
            self.pending[call.id] = call

    def pop_call(self, id: str) -> Optional[ServiceCall]:
        with self.lock:
            return self.pending.pop(id, None)

    def sweep_calls(self) -> List[ServiceCall]:
        """ Remove and return every pending service call.
        """

        with self.lock:
            pending = list(self.pending.values())
            self.pending.clear()
        return pending

    # --- advertised services ---
    def add_service(self, name: str, handler: Callable) -> int:
        """ Register *handler* for the service *name*, and return how many
            handlers now hold that name. The most recently registered
            handler answers inbound calls.
        """

        with self.lock:
            handlers = self.services.setdefault(name, [])
            handlers.append(handler)
            return len(handlers)

    def replace_service(self, name: str, previous: Callable, handler: Callable) -> bool:
        """ Swap *previous* for *handler*, making it the one that answers.
            Returns False, changing nothing, if *previous* is not registered.
        """

        with self.lock:
            handlers = self.services.get(name)
            if handlers is None or previous not in handlers:
                return False

            handlers.remove(previous)
            handlers.append(handler)
            return True

    def remove_service(self, name: str, handler: Callable) -> Optional[int]:
        """ Remove one registration of *handler* for *name*, leaving any
            other holder in place. Returns the number of handlers still
            registered, or None if *handler* was not registered.
        """

        with self.lock:
            handlers = self.services.get(name)
            if handlers is None or handler not in handlers:
                return None

            handlers.remove(handler)
            if len(handlers) == 0:
                del self.services[name]
                return 0

            return len(handlers)

    def service(self, name: str) -> Optional[Callable]:
        with self.lock:
            handlers = self.services.get(name)
            if handlers is None:
                return None
            return handlers[-1]
