import pytest

import rosbridge_client
from faketransport import FakeTransport


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def ros(transport):
    """ A connection with an injected transport, not yet connected.
    """

    return rosbridge_client.Connection(url='ws://localhost:9090', transport=transport)


@pytest.fixture
def connected(ros, transport):
    """ A connection whose transport has reported that it is open.
    """

    ros.connect()
    transport.open()
    assert ros.status == rosbridge_client.Status.CONNECTED
    return ros

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
