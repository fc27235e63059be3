""" Environment-driven defaults. ``ROSBRIDGE_URL`` names the bridge to
    contact when none is given explicitly; ``ROSBRIDGE_TRANSPORT`` selects
    the transport used for URLs whose scheme does not already decide it.
    Both are read when they are needed, not at import time.
"""

import os

default_url = 'ws://localhost:9090'
default_transport = 'websocket'

transports = ('websocket', 'zmq')


def url(default=None):
    """ Return the bridge URL to use: the supplied *default* if it is set,
        otherwise ``ROSBRIDGE_URL``, otherwise ``ws://localhost:9090``.
    """

    if default is not None:
        return str(default)

    try:
        found = os.environ['ROSBRIDGE_URL']
    except KeyError:
        return default_url

    found = found.strip()
    if found == '':
        return default_url

    return found



def backend(url):
    """ Return the name of the transport that should carry *url*.
    """

    scheme = url.split('://', 1)[0].lower()

    if scheme in ('ws', 'wss'):
        return 'websocket'

    if scheme in ('tcp', 'zmq', 'ipc', 'inproc'):
        return 'zmq'

    name = os.environ.get('ROSBRIDGE_TRANSPORT', default_transport)
    name = name.strip().lower()

    if name in transports:
        return name

    raise ValueError("unknown ROSBRIDGE_TRANSPORT backend: %s" % (repr(name)))



def transport(address=None):
    """ Factory for a :class:`rosbridge_client.transport.Transport` instance
        suitable for *address*.
    """

    address = url(address)
    name = backend(address)

    if name == 'websocket':
        from .transport.websocket import WebSocketTransport
        return WebSocketTransport(address)

    from .transport.zmq import ZmqTransport
    return ZmqTransport(address)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
