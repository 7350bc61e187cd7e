""" Python implementation of busping: a message bus benchmarking client
    and its echo test service, built on a generic marshaller for typed,
    self-describing value trees.
"""

# Utility components.

from . import json
from . import config
from . import log

# The transport-agnostic value model, and the transport beneath it.

from . import protocol
from . import transport

# Primary public-facing interfaces.

from . import ping
from . import service

from .protocol import Message, MessageBuilder
from .protocol.factory import message

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
