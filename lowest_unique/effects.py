"""Outbound effects produced by the game session.

The session never talks to the transport directly. Each command returns a
list of effects which the server delivers in order.
"""
from typing import Any, NamedTuple, Optional


class Emit(NamedTuple):
    event: str
    payload: Any
    to: Optional[str] = None  # None broadcasts to every connected channel


class Disconnect(NamedTuple):
    sid: str


def unicast(sid, event, payload=None):
    return Emit(event, {} if payload is None else payload, sid)


def broadcast(event, payload=None):
    return Emit(event, {} if payload is None else payload)
