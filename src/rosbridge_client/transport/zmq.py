""" ZeroMQ transport, for bridges exposed on a raw socket rather than a
    WebSocket. Each rosbridge message travels as a single-part ZeroMQ
    message over a DEALER socket. Connection events come from a ZeroMQ
    monitor socket, since ZeroMQ itself reconnects silently.
"""

import logging
import threading

import zmq
import zmq.utils.monitor

from . import base

logger = logging.getLogger(__name__)

zmq_context = zmq.Context()


def normalize(url):
    """ Accept ``zmq://host:port`` as a synonym for ``tcp://host:port``.
    """

    if url.startswith('zmq://'):
        url = 'tcp://' + url[len('zmq://'):]

    return url



class ZmqTransport(base.Transport):

    poll_timeout = 100

    def __init__(self, url):
        base.Transport.__init__(self, url)

        self.connected = False
        self.shutdown = False
        self.socket = None
        self.socket_lock = threading.Lock()
        self.monitor = None
        self.monitor_thread = None
        self.thread = None


    @property
    def is_open(self):
        return self.connected


    def connect(self):

        if self.socket is not None:
            return

        identity = "rosbridge_client.%d" % (id(self))

        self.shutdown = False
        self.socket = zmq_context.socket(zmq.DEALER)
        self.socket.setsockopt(zmq.LINGER, 0)
        self.socket.identity = identity.encode()

        self.monitor = self.socket.get_monitor_socket()
        self.monitor_thread = threading.Thread(target=self.check_socket)
        self.monitor_thread.daemon = True
        self.monitor_thread.start()

        try:
            self.socket.connect(normalize(self.url))
        except zmq.ZMQError as error:
            logger.warning("cannot connect to %s: %s", self.url, error)
            self._errored(error)
            return

        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def check_socket(self):
        """ Translate monitor events into transport events. A completed
            connection (or handshake) opens the transport; a disconnect
            after that closes it.
        """

        monitor = self.monitor

        while True:
            monitor.poll()
            event = zmq.utils.monitor.recv_monitor_message(monitor)
            event_code = event['event']

            if event_code == zmq.EVENT_CONNECTED or event_code == zmq.EVENT_HANDSHAKE_SUCCEEDED:
                if self.connected == False:
                    self.connected = True
                    self._opened()

            elif event_code == zmq.EVENT_DISCONNECTED:
                if self.connected:
                    self.connected = False
                    self._closed()

            if event_code == zmq.EVENT_MONITOR_STOPPED:
                break

        monitor.close()


    def run(self):

        socket = self.socket
        poller = zmq.Poller()
        poller.register(socket, zmq.POLLIN)

        while self.shutdown == False:
            try:
                sockets = poller.poll(self.poll_timeout)
            except zmq.ZMQError:
                break

            for active, flag in sockets:
                if socket == active:
                    self._frame(socket.recv())


    def close(self):

        socket = self.socket
        if socket is None:
            return

        self.shutdown = True
        was_connected = self.connected
        self.connected = False

        # ZeroMQ sockets must not be closed while another thread is using
        # them; wait for the receive loop to notice the shutdown flag.

        thread = self.thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        self.thread = None

        self.socket_lock.acquire()
        try:
            socket.disable_monitor()
            socket.close()
        finally:
            self.socket = None
            self.socket_lock.release()

        if was_connected:
            self._closed()


    def send_frame(self, text):

        if self.socket is None or self.connected == False:
            return False

        # The lock around the ZeroMQ socket is necessary in a multithreaded
        # application; ZeroMQ makes no attempt to be thread-safe.

        self.socket_lock.acquire()
        try:
            if self.socket is None:
                return False
            self.socket.send(text.encode(), zmq.NOBLOCK)
        except zmq.ZMQError as error:
            logger.debug("send to %s failed: %s", self.url, error)
            return False
        finally:
            self.socket_lock.release()

        return True


# end of class ZmqTransport


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
