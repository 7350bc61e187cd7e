"""Convenience constructors for outbound messages."""

from __future__ import annotations

from typing import Iterable, Optional

from . import fields
from .builder import MessageBuilder
from .clone import multiply as multiply_contents
from .message import Message
from .parser import parse_inputs


def message(type: str, destination: Optional[str] = None, path: Optional[str] = None,
            interface: Optional[str] = None, member: Optional[str] = None,
            inputs: Iterable[str] = (), multiply: int = 1) -> Message:
    """ Build a method call or signal whose body holds the values parsed
        from the textual *inputs*, in order. If *multiply* is greater than
        one the body is replaced with an array of that many copies of it.
    """

    type = fields.message_type_from_string(type)
    builder = MessageBuilder()

    if type == fields.METHOD_CALL:
        builder.method_call(destination, path, interface, member)
    else:
        builder.signal(path, interface, member)

    for value in parse_inputs(inputs):
        builder.append(value)

    msg = builder.build()

    if multiply > 1:
        msg = multiply_contents(msg, multiply)

    return msg


def method_call(destination: Optional[str], path: str, interface: Optional[str], member: str, *inputs: str) -> Message:
    return message(fields.METHOD_CALL, destination, path, interface, member, inputs)


def signal(path: str, interface: str, member: str, *inputs: str) -> Message:
    return message(fields.SIGNAL, None, path, interface, member, inputs)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
