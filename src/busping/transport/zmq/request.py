"""ZeroMQ method call transport.

A client holds a DEALER socket connected to the service's ROUTER socket.
Everything is single-threaded and blocking: a client sends a call and
waits for the matching reply, a server handles one inbound message at a
time before waiting for the next.
"""

from __future__ import annotations

import atexit
import logging
import time
import traceback
from typing import Callable, Dict, Optional

import zmq

from ...protocol import fields
from ...protocol.message import Message
from ...protocol.value import Basic
from ..base import (
    Connection,
    RemoteError,
    TransportConnectionError,
    TransportPortError,
    TransportProtocolError,
    TransportTimeout,
)
from .framing import from_frames, to_frames


log = logging.getLogger(__name__)

zmq_context = zmq.Context()

Handler = Callable[[Message], Optional[Message]]


class Client(Connection):
    """Issue calls via a ZeroMQ DEALER socket and receive replies."""

    def __init__(self, endpoint: str, name: Optional[str] = None):
        self.endpoint = endpoint
        self.name = name or f"request.Client.{id(self)}"
        self.socket = None

    @property
    def is_open(self) -> bool:
        return self.socket is not None

    def open(self) -> None:
        if self.socket is not None:
            return

        socket = zmq_context.socket(zmq.DEALER)
        socket.setsockopt(zmq.LINGER, 0)
        socket.identity = self.name.encode()

        try:
            socket.connect(self.endpoint)
        except zmq.ZMQError as exc:
            socket.close()
            raise TransportConnectionError(
                f"failed to open connection to {self.endpoint}: {exc}"
            ) from exc

        self.socket = socket

    def close(self) -> None:
        if self.socket is not None:
            self.socket.close()
            self.socket = None

    def send(self, msg: Message) -> None:
        if self.socket is None:
            raise TransportConnectionError("connection is not open")

        msg.sender = self.name
        self.socket.send_multipart(to_frames(msg))

    def call(self, msg: Message, timeout: Optional[float] = None) -> Message:
        if msg.type != fields.METHOD_CALL:
            raise ValueError(f"only method calls have replies, not {msg.type}")

        self.send(msg)

        deadline = None if timeout is None else time.monotonic() + timeout
        poller = zmq.Poller()
        poller.register(self.socket, zmq.POLLIN)

        while True:
            if deadline is None:
                wait = None
            else:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise TransportTimeout(
                        f"{msg.member} @ {self.endpoint}: no reply in {timeout:.3f} sec"
                    )
                wait = max(1, int(remaining * 1000))

            events = dict(poller.poll(wait))
            if self.socket not in events:
                continue

            parts = self.socket.recv_multipart()

            try:
                _prefix, reply = from_frames(parts)
            except TransportProtocolError as exc:
                log.warning("discarding undecodable reply: %s", exc)
                continue

            # Replies to earlier calls that timed out can still arrive;
            # they are of no further interest to anyone.

            if reply.reply_serial != msg.serial:
                log.debug("discarding stale reply to serial %s", reply.reply_serial)
                continue

            if reply.type == fields.ERROR:
                raise RemoteError(reply.error_name, _error_text(reply))

            return reply


class Server:
    """Receive calls via a ZeroMQ ROUTER socket and reply to them.

    Handlers are registered per object path. A handler receives the
    inbound message and returns the reply, or None if it does not
    implement the requested member.
    """

    def __init__(self, endpoint: str, name: Optional[str] = None):
        self.name = name
        self.handlers: Dict[str, Handler] = {}
        self.shutdown = False

        self.socket = zmq_context.socket(zmq.ROUTER)
        self.socket.setsockopt(zmq.LINGER, 0)

        try:
            self.socket.bind(endpoint)
        except zmq.ZMQError as exc:
            self.socket.close()
            raise TransportPortError(f"cannot bind {endpoint}: {exc}") from exc

        # Resolves wildcard ports to the port actually bound.
        self.endpoint = self.socket.getsockopt_string(zmq.LAST_ENDPOINT)

    # --- object path registration ---
    def register(self, path: str, handler: Handler) -> None:
        if path in self.handlers:
            raise ValueError(f"object path already registered: {path}")
        self.handlers[path] = handler

    def unregister(self, path: str) -> None:
        self.handlers.pop(path, None)

    # --- dispatch ---
    def dispatch(self, msg: Message) -> Optional[Message]:
        """Return the reply for *msg*, if any; signals never get one."""

        is_call = msg.type == fields.METHOD_CALL

        if msg.type != fields.METHOD_CALL and msg.type != fields.SIGNAL:
            log.debug("ignoring unsolicited %s", msg.type)
            return None

        if is_call and self.name is not None and msg.destination not in (None, self.name):
            return Message.error_reply(msg, fields.ERROR_SERVICE_UNKNOWN,
                                       f"The name {msg.destination} is not provided by this service")

        handler = self.handlers.get(msg.path)
        if handler is None:
            if is_call:
                return Message.error_reply(msg, fields.ERROR_UNKNOWN_OBJECT,
                                           f"No such object path '{msg.path}'")
            return None

        try:
            reply = handler(msg)
        except Exception as exc:
            log.debug("handler for %s failed:\n%s", msg.path, traceback.format_exc())
            if is_call:
                return Message.error_reply(msg, fields.ERROR_FAILED, f"{exc.__class__.__name__}: {exc}")
            return None

        if not is_call:
            return None

        if reply is None:
            return Message.error_reply(msg, fields.ERROR_UNKNOWN_METHOD,
                                       f"No such method '{msg.member}' on '{msg.interface}' at '{msg.path}'")

        return reply

    def process(self, timeout: Optional[float] = None) -> bool:
        """Handle at most one inbound message, waiting up to *timeout*
        seconds for it to arrive. Return True if a message was handled.
        """

        wait = None if timeout is None else int(timeout * 1000)
        if not self.socket.poll(wait, zmq.POLLIN):
            return False

        parts = self.socket.recv_multipart()

        try:
            prefix, msg = from_frames(parts)
        except TransportProtocolError as exc:
            log.warning("discarding undecodable message: %s", exc)
            return True

        log.debug("received %s serial=%d path=%s member=%s", msg.type, msg.serial, msg.path, msg.member)

        reply = self.dispatch(msg)

        if reply is not None:
            reply.sender = self.name
            self.socket.send_multipart(to_frames(reply, prefix))

        return True

    def serve_forever(self, poll_interval: float = 0.1) -> None:
        while not self.shutdown:
            self.process(poll_interval)

    def close(self) -> None:
        self.shutdown = True
        self.socket.close()


def _error_text(reply: Message) -> Optional[str]:
    for value in reply.body:
        if isinstance(value, Basic) and value.tag == fields.STRING:
            return value.value
    return None


def _cleanup() -> None:
    zmq_context.destroy(linger=0)


atexit.register(_cleanup)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
