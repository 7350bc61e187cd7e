""" Generic deep copy of message bodies. Nothing here knows the shape of
    the message being copied: the body is walked value by value, and
    every container is recreated in the destination with the same type
    and contents, however deeply nested.
"""

from . import fields
from . import wire
from .builder import MessageBuilder
from .errors import BuilderError
from .value import Basic, Struct


def append_args(values, builder):
    """ Append a deep copy of every value in *values* to the current scope
        of *builder*. Basic values are appended as-is; a container opens a
        matching scope, recursively copies its children, and closes it.
        Structs and dict entries are opened without a signature, their
        members supply it; arrays and variants are opened with the
        signature of their source contents.
    """

    for value in values:

        if isinstance(value, Basic):
            builder.append_basic(value.tag, value.value)
            continue

        if value.tag == fields.STRUCT or value.tag == fields.DICT_ENTRY:
            signature = None
        else:
            signature = value.contents_signature

        builder.open(value.tag, signature)
        append_args(value.children, builder)
        builder.close()


def clone_header(message):
    """ Return a :class:`MessageBuilder` primed with the header of
        *message*. Only method calls carry a destination.
    """

    builder = MessageBuilder()

    if message.type == fields.METHOD_CALL:
        builder.method_call(message.destination, message.path, message.interface, message.member)
    elif message.type == fields.SIGNAL:
        builder.signal(message.path, message.interface, message.member)
    else:
        raise ValueError('cannot clone the header of a %s message' % (message.type))

    return builder


def clone(message):
    """ Return an independent deep copy of *message* with a new serial
        number, built by walking the body of the original.
    """

    builder = clone_header(message)
    append_args(message.body, builder)
    return builder.build()


def copy(message):
    """ Return an independent copy of *message* by encoding it with the
        wire codec and decoding the result. The serial number and the rest
        of the header are preserved.
    """

    header, body = wire.pack(message)
    return wire.unpack(header, body)


def duplicate(message, use_clone=True):
    """ Return a duplicate of *message* for sending, either a :func:`clone`
        or a renumbered :func:`copy`. Either way the duplicate has a serial
        number of its own, so a late reply to an earlier duplicate can never
        match it.
    """

    if use_clone:
        return clone(message)

    duplicate = copy(message)
    duplicate.renumber()
    return duplicate


def multiply(message, count):
    """ Return a new message with the header of *message* whose body is a
        single array holding *count* copies of the original body. A body
        with exactly one value is repeated as-is; a body with several
        values is repeated as a struct of those values, so that the array
        element is always a single complete type. In that case the element
        signature is the body signature in parentheses, not the body
        signature itself, which would describe several types.
    """

    count = int(count)
    if count < 1:
        raise ValueError('multiply count must be at least 1, not %d' % (count))

    if len(message.body) == 0:
        raise BuilderError('cannot multiply a message with an empty body')

    builder = clone_header(message)

    if len(message.body) == 1:
        element = message.signature
        template = message.body
    else:
        template = [Struct(message.body)]
        element = template[0].signature

    builder.open(fields.ARRAY, element)

    for repetition in range(count):
        append_args(template, builder)

    builder.close()

    return builder.build()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
