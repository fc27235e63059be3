import threading
import weakref


def ref(thing):
    """ Return a weak reference to the supplied argument, regardless of
        whether it is a simple object or a bound method.
    """

    try:
        thing.__func__
        thing.__self__
    except AttributeError:
        return weakref.ref(thing)
    else:
        return weakref.WeakMethod(thing)



class Strong:
    """ A reference with the same calling convention as a weak one, that
        keeps its referent alive.
    """

    def __init__(self, thing):
        self.thing = thing

    def __call__(self):
        return self.thing



def hold(callback):
    """ Return a reference to *callback* suitable for a callback list. A
        bound method is referenced weakly, so that registering it does not
        keep its instance alive; plain functions, lambdas and builtin
        methods have no other owner and are held strongly.
    """

    try:
        callback.__func__
        callback.__self__
    except AttributeError:
        return Strong(callback)
    else:
        return ref(callback)



class Callbacks:
    """ An ordered collection of callables, each held as :func:`hold`
        describes. Once the instance behind a bound method is gone its
        entry is quietly pruned the next time :func:`alive` runs.
    """

    def __init__(self):
        self.references = list()
        self.lock = threading.Lock()


    def __len__(self):
        return len(self.references)


    def add(self, callback):

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        reference = hold(callback)

        self.lock.acquire()
        self.references.append(reference)
        self.lock.release()

        return reference


    def discard(self, reference):

        self.lock.acquire()
        try:
            self.references.remove(reference)
        except ValueError:
            pass
        self.lock.release()


    def alive(self):
        """ Return a list of the callbacks that are still alive, in the
            order they were registered. Dead references are removed.
        """

        self.lock.acquire()
        references = list(self.references)
        self.lock.release()

        callbacks = list()
        invalid = list()

        for reference in references:
            callback = reference()

            if callback is None:
                invalid.append(reference)
            else:
                callbacks.append(callback)

        for reference in invalid:
            self.discard(reference)

        return callbacks


# end of class Callbacks


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
