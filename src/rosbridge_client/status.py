""" Connection status, as both a polled value and a stream of transitions.
"""

from __future__ import annotations

import enum
import logging
import threading

from .stream import Stream

logger = logging.getLogger(__name__)


class Status(enum.Enum):
    NONE = 'none'
    CONNECTING = 'connecting'
    CONNECTED = 'connected'
    CLOSED = 'closed'
    ERRORED = 'errored'

    @property
    def terminal(self) -> bool:
        return self in (Status.CLOSED, Status.ERRORED)


class StatusMachine:
    """ Sole owner of the current :class:`Status`. Every change is emitted
        on :attr:`stream`; the current value is never derived from the
        stream, and a subscriber attached after a change does not see it.

        The :attr:`lock` is reentrant so that subscribers may inspect the
        status, or send, from within a notification. Holding it freezes
        the status, which is how outbound sends are gated. Hooks and
        subscribers run with the lock held; the lock is taken before any
        transport lock and is never held across a transport write, close
        or thread join.

        :ivar current: The present :class:`Status`.
        :ivar stream: A :class:`Stream` of every subsequent transition.
    """

    def __init__(self):
        self.current = Status.NONE
        self.lock = threading.RLock()
        self.stream = Stream('status')
        self.hooks = list()


    def assign(self, status: Status) -> bool:
        """ Move to *status*, notify any subscribers, and return True. Assigning
            the current status again is not a transition; nothing is
            emitted and False is returned.
        """

        status = Status(status)

        with self.lock:
            previous = self.current

            if status == previous:
                return False

            self.current = status
            logger.info("status %s -> %s", previous.value, status.value)

            # Internal hooks run before external subscribers, so that by
            # the time an application sees CLOSED or ERRORED any pending
            # work has already been swept.

            for hook in self.hooks:
                hook(previous, status)

            self.stream.emit(status)

        return True


    def is_connected(self) -> bool:
        return self.current == Status.CONNECTED


    # Transport-driven transitions.

    def connecting(self):
        return self.assign(Status.CONNECTING)

    def opened(self):
        return self.assign(Status.CONNECTED)

    def closed(self):
        return self.assign(Status.CLOSED)

    def errored(self):
        return self.assign(Status.ERRORED)

    def reset(self):
        return self.assign(Status.NONE)


# end of class StatusMachine


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
