""" Exceptions raised by the protocol layer. Every one of these indicates
    a usage or programming mistake: bad command-line input, a value that
    does not fit its type, or a message that was assembled incorrectly.
    None of them are expected during normal operation, and none of them
    are retried.
"""


class MarshalError(Exception):
    """ Base class for all value marshalling errors. """


class UnknownTypeError(MarshalError):
    """ A type name or type code is not part of the closed set of
        supported types.
    """


class MalformedInputError(MarshalError):
    """ A textual value expression is missing a required token, or has
        tokens left over after a complete value.
    """


class MalformedDictionaryError(MalformedInputError):
    """ A dictionary item list has a key with no matching value. """


class InvalidValueError(MarshalError):
    """ A scalar does not convert to, or does not fit in, its type. """


class SignatureError(MarshalError):
    """ A type signature is not well-formed. """


class BuilderError(MarshalError):
    """ A container scope was opened, filled or closed inconsistently
        with its signature.
    """


class WireError(MarshalError):
    """ Encoded message data could not be decoded; the source is not a
        well-formed message.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
