"""Protocol constants.

Keep these in one place to avoid stringly-typed message handling.
"""

# Operations, as they appear in the 'op' field.

ADVERTISE = "advertise"
ADVERTISE_SERVICE = "advertise_service"
AUTH = "auth"
CALL_SERVICE = "call_service"
PUBLISH = "publish"
SERVICE_RESPONSE = "service_response"
SET_LEVEL = "set_level"
STATUS = "status"
SUBSCRIBE = "subscribe"
UNADVERTISE = "unadvertise"
UNADVERTISE_SERVICE = "unadvertise_service"
UNSUBSCRIBE = "unsubscribe"

# Identifier kinds issued by the allocator.

KINDS = (SUBSCRIBE, ADVERTISE, PUBLISH, CALL_SERVICE)

# Field names.

OP = "op"
ID = "id"
TOPIC = "topic"
TYPE = "type"
MSG = "msg"
SERVICE = "service"
ARGS = "args"
RESULT = "result"
VALUES = "values"
LEVEL = "level"

# Levels accepted by set_level, most to least verbose.

LEVELS = ("info", "warning", "error", "none")
