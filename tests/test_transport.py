import json
import threading

import websocket
import zmq

import rosbridge_client
from rosbridge_client import Status
from rosbridge_client.transport.websocket import WebSocketTransport
from rosbridge_client.transport.zmq import ZmqTransport, normalize


class Recorder:

    def __init__(self, transport):
        self.frames = list()
        self.events = list()
        self.opened = threading.Event()
        self.arrived = threading.Event()

        transport.on_frame(self.frame)
        transport.on_open(self.open)
        transport.on_close(lambda: self.events.append('close'))
        transport.on_error(lambda error: self.events.append('error'))

    def frame(self, text):
        self.frames.append(text)
        self.arrived.set()

    def open(self):
        self.events.append('open')
        self.opened.set()



class FakeApp:

    def __init__(self, fail=False):
        self.fail = fail
        self.sent = list()
        self.closed = False

    def send(self, text):
        if self.fail:
            raise websocket.WebSocketConnectionClosedException('socket is already closed.')
        self.sent.append(text)

    def close(self):
        self.closed = True



def test_websocket_events():

    transport = WebSocketTransport('ws://localhost:9090')
    recorder = Recorder(transport)

    assert transport.is_open == False
    assert transport.send_frame('{}') == False

    transport.app = FakeApp()
    transport._ws_open(transport.app)
    assert transport.is_open
    assert recorder.events == ['open']

    transport._ws_message(transport.app, '{"op": "status"}')
    assert recorder.frames == ['{"op": "status"}']

    assert transport.send_frame('{"op": "publish"}') == True
    assert transport.app.sent == ['{"op": "publish"}']

    transport._ws_error(transport.app, OSError('reset'))
    transport._ws_close(transport.app, 1006, 'gone')
    assert recorder.events == ['open', 'error', 'close']
    assert transport.is_open == False


def test_websocket_send_failure():

    transport = WebSocketTransport('ws://localhost:9090')
    transport.app = FakeApp(fail=True)
    transport.connected = True

    assert transport.send_frame('{}') == False


def test_websocket_close():

    transport = WebSocketTransport('ws://localhost:9090')
    transport.close()

    app = FakeApp()
    transport.app = app
    transport.connected = True
    transport.close()

    assert app.closed
    assert transport.is_open == False


def test_websocket_drives_connection():

    transport = WebSocketTransport('ws://localhost:9090')
    ros = rosbridge_client.Connection('ws://localhost:9090', transport)
    received = list()
    ros.registry.add_listener('/chatter', received.append)

    # connect() without starting the WebSocket thread.
    ros.status = Status.CONNECTING
    transport.app = FakeApp()
    transport._ws_open(transport.app)
    assert ros.status == Status.CONNECTED

    transport._ws_message(transport.app, json.dumps({'op': 'publish', 'topic': '/chatter', 'msg': {'data': 1}}))
    assert received == [{'data': 1}]

    transport._ws_error(transport.app, OSError('reset'))
    transport._ws_close(transport.app)
    assert ros.status == Status.ERRORED


def test_zmq_normalize():
    assert normalize('zmq://localhost:9090') == 'tcp://localhost:9090'
    assert normalize('tcp://localhost:9090') == 'tcp://localhost:9090'


def test_zmq_round_trip():
    """ Exchange frames with a ROUTER socket standing in for the bridge.
    """

    context = zmq.Context.instance()
    server = context.socket(zmq.ROUTER)
    server.setsockopt(zmq.LINGER, 0)
    port = server.bind_to_random_port('tcp://127.0.0.1')

    transport = ZmqTransport('zmq://127.0.0.1:%d' % (port))
    recorder = Recorder(transport)

    try:
        transport.connect()
        assert recorder.opened.wait(5)
        assert transport.is_open

        assert transport.send_frame('{"op": "subscribe", "topic": "/chatter"}') == True

        assert server.poll(5000)
        identity, frame = server.recv_multipart()
        assert json.loads(frame) == {'op': 'subscribe', 'topic': '/chatter'}

        server.send_multipart([identity, b'{"op": "publish", "topic": "/chatter", "msg": {}}'])
        assert recorder.arrived.wait(5)
        assert recorder.frames == ['{"op": "publish", "topic": "/chatter", "msg": {}}']

    finally:
        transport.close()
        server.close()

    assert transport.is_open == False
    assert transport.send_frame('{}') == False
    assert 'close' in recorder.events


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
