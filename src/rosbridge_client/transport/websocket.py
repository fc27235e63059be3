""" WebSocket transport, the standard carrier for a rosbridge server.
    The connection runs in a background thread managed by
    :class:`websocket.WebSocketApp`; inbound frames are delivered from that
    thread, one at a time, in arrival order.
"""

import logging
import threading

import websocket

from . import base

logger = logging.getLogger(__name__)


class WebSocketTransport(base.Transport):

    ping_interval = 0

    def __init__(self, url):
        base.Transport.__init__(self, url)

        self.app = None
        self.thread = None
        self.connected = False
        self.socket_lock = threading.Lock()


    @property
    def is_open(self):
        return self.connected


    def connect(self):

        if self.thread is not None and self.thread.is_alive():
            return

        self.app = websocket.WebSocketApp(self.url,
                                          on_open=self._ws_open,
                                          on_message=self._ws_message,
                                          on_error=self._ws_error,
                                          on_close=self._ws_close)

        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    def run(self):
        try:
            self.app.run_forever(ping_interval=self.ping_interval)
        except Exception as error:
            logger.exception("websocket loop for %s failed", self.url)
            self.connected = False
            self._errored(error)


    def close(self):

        app = self.app
        if app is None:
            return

        self.connected = False
        app.close()


    def send_frame(self, text):

        app = self.app
        if app is None or self.connected == False:
            return False

        # websocket-client does not serialize concurrent writers on one
        # socket; without the lock, frames from two threads can interleave.

        self.socket_lock.acquire()
        try:
            app.send(text)
        except (websocket.WebSocketException, OSError) as error:
            logger.debug("send to %s failed: %s", self.url, error)
            return False
        finally:
            self.socket_lock.release()

        return True


    def _ws_open(self, app):
        self.connected = True
        self._opened()


    def _ws_message(self, app, message):
        self._frame(message)


    def _ws_error(self, app, error):
        self.connected = False
        logger.warning("websocket error on %s: %s", self.url, error)
        self._errored(error)


    def _ws_close(self, app, status_code=None, message=None):
        self.connected = False
        self._closed()


# end of class WebSocketTransport


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
