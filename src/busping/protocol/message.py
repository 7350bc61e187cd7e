""" A class representation of a bus message: a header identifying what
    kind of message it is and where it is going, and a body holding an
    ordered sequence of values.
"""

import itertools
import threading

from . import fields
from .value import Basic


class Message:
    """ The :class:`Message` is a thin container: the header fields, plus
        the *body*, a list of :mod:`value` instances. A message owns its
        body; nothing in the body is shared with any other message unless
        the caller puts it there.

        Method calls are addressed by *destination*, *path*, *interface*,
        and *member*; signals by *path*, *interface*, and *member*. Method
        returns and errors refer back to the call they answer via the
        *reply_serial*. Every message is assigned a locally unique serial
        number if one is not provided.

        :ivar body: The list of top-level values carried by the message.
        :ivar valid_types: A set of valid strings for the message type.
    """

    valid_types = fields.message_types

    def __init__(self, type, path=None, interface=None, member=None,
                 destination=None, body=None, serial=None,
                 reply_serial=None, sender=None, error_name=None):

        if type in self.valid_types:
            pass
        else:
            raise ValueError('invalid message type: ' + repr(type))

        if type == fields.METHOD_CALL:
            if path is None or member is None:
                raise ValueError('a method call requires a path and a member')

        elif type == fields.SIGNAL:
            if path is None or interface is None or member is None:
                raise ValueError('a signal requires a path, an interface, and a member')

        elif type == fields.ERROR:
            if error_name is None:
                raise ValueError('an error requires an error name')

        if path is not None:
            # Validates the path, raising InvalidValueError if it is bad.
            Basic(fields.OBJECT_PATH, path)

        if serial is None:
            serial = _serial_next()

        self.type = type
        self.path = path
        self.interface = interface
        self.member = member
        self.destination = destination
        self.serial = serial
        self.reply_serial = reply_serial
        self.sender = sender
        self.error_name = error_name

        if body is None:
            self.body = list()
        else:
            self.body = list(body)


    def __iter__(self):
        return iter(self.body)


    def __len__(self):
        return len(self.body)


    def __repr__(self):
        return 'Message(%s, serial=%d, signature=%r, destination=%r, path=%r, interface=%r, member=%r)' % (
                self.type, self.serial, self.signature, self.destination,
                self.path, self.interface, self.member)


    @property
    def signature(self):
        """ The concatenated signature of every value in the body. """

        return ''.join(value.signature for value in self.body)


    def header(self):
        """ Return the header fields as a dictionary. """

        header = dict()
        header['type'] = self.type
        header['serial'] = self.serial
        header['reply_serial'] = self.reply_serial
        header['destination'] = self.destination
        header['path'] = self.path
        header['interface'] = self.interface
        header['member'] = self.member
        header['sender'] = self.sender
        header['error_name'] = self.error_name

        return header


    def expects_reply(self):
        return self.type == fields.METHOD_CALL


    def renumber(self):
        """ Assign a fresh serial number, as for a newly created message. """

        self.serial = _serial_next()


    @classmethod
    def method_return(cls, call, body=None):
        """ Return a new method return addressed to the sender of *call*. """

        return cls(fields.METHOD_RETURN, destination=call.sender,
                   reply_serial=call.serial, body=body)


    @classmethod
    def error_reply(cls, call, name, text=None):
        """ Return a new error addressed to the sender of *call*. The
            optional *text* becomes the single string in the error body.
        """

        body = list()
        if text is not None:
            body.append(Basic(fields.STRING, str(text)))

        return cls(fields.ERROR, destination=call.sender,
                   reply_serial=call.serial, error_name=name, body=body)


# end of class Message



_serial_min = 1
_serial_max = 0xFFFFFFFF
_serial_lock = threading.Lock()
_serial_ticker = itertools.count(_serial_min)


def _serial_next():
    """ Return the next serial number for a newly constructed message.
        Serial numbers are never zero, and wrap around at 32 bits.
    """

    global _serial_ticker
    _serial_lock.acquire()
    serial = next(_serial_ticker)

    if serial >= _serial_max:
        _serial_ticker = itertools.count(_serial_min)

        if serial > _serial_max:
            # This shouldn't happen, but here we are...
            serial = next(_serial_ticker)

    _serial_lock.release()

    return serial


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
