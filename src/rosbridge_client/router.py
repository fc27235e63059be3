""" Dispatch of inbound frames. The :class:`Router` is driven by exactly
    one thread per connection, the transport's receive loop, so frames are
    handled one at a time in arrival order.
"""

import concurrent.futures
import logging

from . import json
from .protocol import fields
from .protocol import message as messages
from .service import NoResponse, Response

logger = logging.getLogger(__name__)


class Router:
    """ Route each inbound frame to its destination:

        * ``publish`` frames go to every listener registered on the topic,
          in registration order.
        * Service responses resolve the pending :class:`ServiceCall` with
          the matching id, which is removed from the registry.
        * ``status`` frames are emitted on the *diagnostics* stream.
        * ``call_service`` requests go to the handler advertised for the
          service, and its outcome is sent back as a ``service_response``.

        Anything else, including frames that are not valid JSON objects,
        and responses or publications nobody is waiting for, is dropped.
    """

    def __init__(self, registry, diagnostics, send):
        self.registry = registry
        self.diagnostics = diagnostics
        self.send = send


    def on_frame(self, raw):

        try:
            message = json.loads(raw)
        except json.DecodeError:
            logger.debug("dropping malformed frame: %r", raw)
            return

        if isinstance(message, dict):
            pass
        else:
            logger.debug("dropping non-object frame: %r", raw)
            return

        try:
            self._dispatch(message)
        except Exception:
            logger.exception("failed to route frame: %r", raw)


    def _dispatch(self, message):

        op = message.get(fields.OP)

        if op == fields.PUBLISH:
            self._publish(message)
        elif messages.is_response(message):
            self._response(message)
        elif op == fields.STATUS:
            self.diagnostics.emit(message)
        elif op == fields.CALL_SERVICE:
            self._request(message)
        else:
            logger.debug("dropping frame with unhandled op %r", op)


    def _publish(self, message):

        topic = message.get(fields.TOPIC)
        if isinstance(topic, str):
            pass
        else:
            return

        msg = message.get(fields.MSG)

        for listener in self.registry.listeners(topic):
            try:
                listener(msg)
            except Exception:
                logger.exception("listener on %s failed", topic)
                continue


    def _response(self, message):

        id = message.get(fields.ID)
        if isinstance(id, str):
            pass
        else:
            return

        call = self.registry.pop_call(id)

        if call is None:
            # Late, duplicate, or not ours.
            logger.debug("dropping response for unknown call %r", id)
            return

        call._complete(message.get(fields.RESULT, False), message.get(fields.VALUES))


    def _request(self, message):

        service = message.get(fields.SERVICE)
        if isinstance(service, str):
            pass
        else:
            return

        handler = self.registry.service(service)
        if handler is None:
            logger.debug("dropping request for unadvertised service %r", service)
            return

        id = message.get(fields.ID)
        args = message.get(fields.ARGS)
        if args is None:
            args = dict()

        try:
            outcome = handler(args)
        except Exception as error:
            logger.exception("handler for %s failed", service)
            self._respond(id, service, False, str(error))
            return

        self._answer(id, service, outcome)


    def _answer(self, id, service, outcome):

        if isinstance(outcome, concurrent.futures.Future):
            def resolved(future):
                try:
                    result = future.result()
                except Exception as error:
                    self._respond(id, service, False, str(error))
                else:
                    self._answer(id, service, result)

            outcome.add_done_callback(resolved)
            return

        if outcome is None or isinstance(outcome, NoResponse):
            return

        if isinstance(outcome, Response):
            self._respond(id, service, outcome.result, outcome.values)
        elif isinstance(outcome, dict):
            self._respond(id, service, True, outcome)
        else:
            error = 'service handler returned %s, expected a Response or a dict' % (type(outcome).__name__)
            self._respond(id, service, False, error)


    def _respond(self, id, service, result, values):

        response = messages.service_response(id, service, result, values)

        if self.send(response):
            pass
        else:
            logger.debug("response to %s for %s not sent, not connected", id, service)


# end of class Router


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
