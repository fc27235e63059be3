"""
rosbridge Protocol Layer
========================

Semantic message structures for the rosbridge v2.0 JSON protocol. One
message is one JSON object, carried as one text frame.

The protocol layer MUST NOT depend on any transport implementation
(e.g. WebSocket, ZeroMQ).

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

User Code
    │
    ▼
Facades (topic.py, service.py)
    - subscribe() / publish() / advertise()
    - call() / advertise(handler)

    │
    ▼
Connection (connection.py)
    - identifier allocation
    - status state machine and send gate
    - registry of topic registrations and pending service calls
    - router for inbound frames

    │
    ▼
Message Constructors (message.py)
    One function per outbound frame shape

    │
    ▼
Field Vocabulary (fields.py)
    Canonical op and field names

---------------------------------------------------------------------

Below the Protocol Layer
------------------------

Transport Layer
    Moves text frames
    - WebSocket
    - ZeroMQ

---------------------------------------------------------------------
"""

from . import fields
from . import message


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
