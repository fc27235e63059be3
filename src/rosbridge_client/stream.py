""" A minimal broadcast channel. A :class:`Stream` delivers each emitted
    event to every listener attached at the time of emission; nothing is
    buffered or replayed for listeners attached later.

    A listener stays attached until its :class:`Subscription` is cancelled,
    whether or not the caller keeps the subscription around. A bound
    method is the exception: the stream does not keep its instance alive,
    and once that instance is collected the listener is dropped.
"""

import logging

from . import weakref

logger = logging.getLogger(__name__)


class Subscription:

    def __init__(self, stream, reference):
        self.stream = stream
        self.reference = reference
        self.cancelled = False


    def cancel(self):
        """ Stop delivering events to this subscription. Cancelling twice
            is harmless.
        """

        if self.cancelled:
            return

        self.cancelled = True
        self.stream._detach(self)


# end of class Subscription



class Stream:

    def __init__(self, name=None):
        self.name = name
        self.callbacks = weakref.Callbacks()


    def __len__(self):
        return len(self.callbacks.alive())


    def listen(self, callback):
        """ Attach *callback* to this stream, and return the
            :class:`Subscription` that detaches it.
        """

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        reference = self.callbacks.add(callback)
        return Subscription(self, reference)


    def _detach(self, subscription):
        self.callbacks.discard(subscription.reference)


    def emit(self, event):
        """ Deliver *event* to every live listener, in the order they were
            attached. A listener raising an exception does not stop
            delivery to the others.
        """

        for callback in self.callbacks.alive():
            try:
                callback(event)
            except Exception:
                logger.exception("%s subscriber failed on %r", self.name, event)
                continue


# end of class Stream


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
