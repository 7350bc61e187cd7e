from . import errors
from . import fields
from . import signature
from . import value
from . import parser
from . import message
from . import builder
from . import wire
from . import clone
from . import factory
from . import printer

from .message import Message
from .builder import MessageBuilder


"""
busping Protocol Layer
======================

This package defines the transport-agnostic value model used by busping:
typed value trees, the textual grammar that produces them, and the
algorithms that build, copy, and multiply messages carrying them.

The protocol layer MUST NOT depend on any transport implementation.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Command-line inputs / received messages
    │
    ▼
Factory (factory.py)
    "build message from parsed inputs"
    Applies the content multiplier when asked

    │
    ▼
Clone (clone.py)
    Generic deep copy of a body of unknown shape
    - clone(), copy(), duplicate()
    - multiply()

    │
    ▼
Message Builder (builder.py)
    Append cursor with nested container scopes
    - Enforces container/signature consistency
    - The only place a message body grows

    │
    ▼
Parser (parser.py)
    TYPE[:VALUE][:...] expressions -> value trees

    │
    ▼
Value Model (value.py, message.py)
    Basic | Array | Struct | DictEntry | Variant
    Message header + body

    │
    ▼
Vocabulary (fields.py, signature.py, errors.py)
    Type codes and names, signature grammar, exceptions

Beside the stack: wire.py maps Message <-> bytes for the transport, and
printer.py renders a Message for humans.

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
