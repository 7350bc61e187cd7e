"""Transport layer implementations."""

import os

from .base import (
    Connection,
    RemoteError,
    TransportError,
    TransportTimeout,
    TransportConnectionError,
    TransportPortError,
    TransportProtocolError,
)

_BACKEND = os.environ.get("BUSPING_TRANSPORT", "zmq")

if _BACKEND == "zmq":
    from .zmq import framing
    from .zmq import request
else:
    raise ImportError(f"unknown BUSPING_TRANSPORT backend: {_BACKEND!r}")

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
