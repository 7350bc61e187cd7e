"""Message bus connection contract.

A bus backend provides a client :class:`Connection` that can send a message
and, for method calls, wait for the reply. The contract and its exceptions
live outside :mod:`busping.protocol`, which knows nothing about buses.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..protocol.message import Message


# Exceptions shared by every backend

class TransportError(Exception):
    """Base class for every failure to deliver a message or its reply."""


class TransportTimeout(TransportError):
    """A method call did not receive a timely reply."""


class TransportConnectionError(TransportError):
    """The bus endpoint could not be reached."""


class TransportPortError(TransportError):
    """No suitable endpoint could be bound."""


class TransportProtocolError(TransportError):
    """A peer sent frames that could not be decoded."""


class RemoteError(TransportError):
    """The remote side answered a method call with an error message."""

    def __init__(self, name: str, text: Optional[str] = None):
        self.name = name
        self.text = text

        if text:
            TransportError.__init__(self, f"{name}: {text}")
        else:
            TransportError.__init__(self, name)


class Connection(ABC):
    """Minimal contract for a client connection to a message bus."""

    @abstractmethod
    def open(self) -> None:
        """Connect to the bus endpoint."""

    @abstractmethod
    def close(self) -> None:
        """Disconnect; pending replies are discarded."""

    @abstractmethod
    def send(self, msg: Message) -> None:
        """Send a Message without waiting for any reply."""

    @abstractmethod
    def call(self, msg: Message, timeout: Optional[float] = None) -> Message:
        """Send a method call and block until its reply arrives.

        Raise :class:`TransportTimeout` if no reply arrives within *timeout*
        seconds, or :class:`RemoteError` if the reply is an error.
        """

    @property
    def is_open(self) -> bool:
        """Whether the connection is currently established."""
        return False

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
