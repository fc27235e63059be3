import rosbridge_client


class Referenced:
    def a_method(self):
        pass


def test_persistent_object():
    thing = Referenced()

    reference = rosbridge_client.weakref.ref(thing)
    assert reference is not None
    assert callable(reference)

    dereferenced = reference()
    assert dereferenced is not None


def test_persistent_object_method():
    """ This is the reason the local weak reference wrapper exists, and why
        weakref.WeakMethod exists: the standard weakref.ref() reference cannot
        refer to a bound method, as they immediately lose scope and are
        deallocated.
    """

    thing = Referenced()

    reference = rosbridge_client.weakref.ref(thing.a_method)
    dereferenced = reference()
    assert dereferenced is not None
    assert callable(dereferenced)


def test_removed_object_method():
    thing = Referenced()

    reference = rosbridge_client.weakref.ref(thing.a_method)
    del thing

    dereferenced = reference()
    assert dereferenced is None


def test_callbacks_prune_dead_references():

    callbacks = rosbridge_client.weakref.Callbacks()

    first = Referenced()
    second = Referenced()
    callbacks.add(first.a_method)
    callbacks.add(second.a_method)
    assert len(callbacks) == 2

    del first

    alive = callbacks.alive()
    assert len(alive) == 1
    assert alive[0] == second.a_method
    assert len(callbacks) == 1


def test_callbacks_keep_order():

    callbacks = rosbridge_client.weakref.Callbacks()
    things = [Referenced() for count in range(5)]

    for thing in things:
        callbacks.add(thing.a_method)

    assert callbacks.alive() == [thing.a_method for thing in things]


def test_callbacks_discard():

    callbacks = rosbridge_client.weakref.Callbacks()
    thing = Referenced()

    reference = callbacks.add(thing.a_method)
    callbacks.discard(reference)
    callbacks.discard(reference)

    assert callbacks.alive() == []


def test_callbacks_reject_non_callables():

    callbacks = rosbridge_client.weakref.Callbacks()

    try:
        callbacks.add(Referenced())
    except TypeError:
        pass
    else:
        raise AssertionError('expected a TypeError')


def test_callbacks_hold_functions():

    callbacks = rosbridge_client.weakref.Callbacks()
    seen = list()

    callbacks.add(seen.append)
    callbacks.add(lambda value: None)

    assert len(callbacks.alive()) == 2


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
