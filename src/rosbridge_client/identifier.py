""" Allocation of operation identifiers. Every identifier carries a
    sequence number drawn from a single counter shared by all kinds, so no
    two identifiers issued by one :class:`Allocator` are ever equal.
"""

import threading

from .protocol import fields


class Allocator:
    """ Issue identifiers of the form ``<kind>:<name>:<sequence>``. The
        *sequence* is the value of the shared counter after it has been
        incremented; the first identifier issued ends in ``:1``.

        Each kind also has its own counter, reported for observability.
        Neither the shared counter nor the per-kind counters are ever reset.
    """

    def __init__(self):
        self.lock = threading.Lock()
        self.total = 0
        self.counts = dict.fromkeys(fields.KINDS, 0)


    def allocate(self, kind, name):

        if kind in self.counts:
            pass
        else:
            raise ValueError('invalid identifier kind: ' + repr(kind))

        # Both counters move together, under the same lock, so that no two
        # concurrent callers can consume the same sequence number.

        self.lock.acquire()
        self.total += 1
        self.counts[kind] += 1
        sequence = self.total
        self.lock.release()

        return '%s:%s:%d' % (kind, name, sequence)


    def count(self, kind=None):
        """ Return the number of identifiers issued for *kind*, or for all
            kinds together if *kind* is None.
        """

        if kind is None:
            return self.total

        return self.counts[kind]


# end of class Allocator


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
