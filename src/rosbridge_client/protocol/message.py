"""Convenience constructors for rosbridge protocol messages.

Every message is a plain dictionary with string keys; it becomes one JSON
text frame on the wire. Optional fields are omitted rather than sent as
null.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from . import fields

Message = Dict[str, Any]


def _message(op: str, **items) -> Message:
    message = {fields.OP: op}
    for key, value in items.items():
        if value is not None:
            message[key] = value
    return message


def subscribe(id: str, topic: str, type: Optional[str] = None, throttle_rate: int = 0, queue_length: int = 0) -> Message:
    message = _message(fields.SUBSCRIBE, id=id, topic=topic, type=type)
    if throttle_rate:
        message["throttle_rate"] = throttle_rate
    if queue_length:
        message["queue_length"] = queue_length
    return message


def unsubscribe(id: str, topic: str) -> Message:
    return _message(fields.UNSUBSCRIBE, id=id, topic=topic)


def advertise(id: str, topic: str, type: str, latch: bool = False, queue_size: int = 100) -> Message:
    message = _message(fields.ADVERTISE, id=id, topic=topic, type=type)
    message["latch"] = bool(latch)
    message["queue_size"] = queue_size
    return message


def unadvertise(id: str, topic: str) -> Message:
    return _message(fields.UNADVERTISE, id=id, topic=topic)


def publish(topic: str, msg: Mapping[str, Any], id: Optional[str] = None) -> Message:
    return _message(fields.PUBLISH, id=id, topic=topic, msg=dict(msg))


def call_service(id: str, service: str, args: Optional[Mapping[str, Any]] = None) -> Message:
    if args is None:
        args = {}
    return _message(fields.CALL_SERVICE, id=id, service=service, args=dict(args))


def service_response(id: Optional[str], service: Optional[str], result: bool, values: Any = None) -> Message:
    message = _message(fields.SERVICE_RESPONSE, id=id, service=service, values=values)
    message[fields.RESULT] = bool(result)
    return message


def advertise_service(service: str, type: str) -> Message:
    return _message(fields.ADVERTISE_SERVICE, service=service, type=type)


def unadvertise_service(service: str) -> Message:
    return _message(fields.UNADVERTISE_SERVICE, service=service)


def auth(mac: str, client: str, dest: str, rand: str, t: int, level: str, end: int) -> Message:
    return _message(fields.AUTH, mac=mac, client=client, dest=dest, rand=rand, t=t, level=level, end=end)


def set_level(level: Optional[str] = None, id: Optional[str] = None) -> Message:
    if level is not None and level not in fields.LEVELS:
        raise ValueError("invalid status level: " + repr(level))
    return _message(fields.SET_LEVEL, id=id, level=level)


def is_response(message: Mapping[str, Any]) -> bool:
    """A service response either carries the service_response op or,
    in the older form, no op at all alongside an id and a result."""

    op = message.get(fields.OP)
    if op == fields.SERVICE_RESPONSE:
        return True
    return op is None and fields.ID in message and fields.RESULT in message
