"""ZMQ multipart framing for protocol messages.

Client <-> Service (DEALER<->ROUTER)
    (optional routing prefix...), version, header_json, body_json
"""

from __future__ import annotations

from typing import Sequence, Tuple

from ...protocol import wire
from ...protocol.errors import WireError
from ...protocol.message import Message
from ..base import TransportProtocolError


VERSION_BYTES = b"busping.%d" % (wire.version)


def to_frames(msg: Message, prefix: Sequence[bytes] = ()) -> Tuple[bytes, ...]:
    """Encode a protocol Message to multipart frames, after any routing *prefix*."""

    header, body = wire.pack(msg)
    return tuple(prefix) + (VERSION_BYTES, header, body)


def from_frames(parts: Sequence[bytes]) -> Tuple[Tuple[bytes, ...], Message]:
    """Decode multipart frames into (routing prefix, Message).

    ROUTER sockets prepend an identity frame. We expect either:
        [version, header, body]
    or
        [ident, version, header, body]
    """

    if not parts:
        raise TransportProtocolError("empty message")

    if parts[0] == VERSION_BYTES:
        prefix: Tuple[bytes, ...] = ()
        start = 0
    else:
        prefix = (parts[0],)
        start = 1

    if len(parts) != start + 3:
        raise TransportProtocolError(f"expected {start + 3} frames, received {len(parts)}")

    their_version = parts[start]
    if their_version != VERSION_BYTES:
        raise TransportProtocolError(
            f"message is protocol {their_version!r}, recipient expects {VERSION_BYTES!r}"
        )

    try:
        msg = wire.unpack(parts[start + 1], parts[start + 2])
    except WireError as exc:
        raise TransportProtocolError(str(exc)) from exc

    return prefix, msg


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
