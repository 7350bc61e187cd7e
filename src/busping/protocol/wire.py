""" Serialize :class:`Message` instances to bytes and back.

    A message becomes two byte strings: a JSON header, and a JSON body.
    The header carries the signature of the body, which is what drives
    decoding; the body is a JSON array with one element per top-level
    value:

        basic values    JSON scalars; non-finite doubles as the strings
                        "inf", "-inf", and "nan"
        array, struct   JSON arrays
        dict entry      a two-element array, [key, value]
        variant         a two-element array, [signature, value]
"""

from __future__ import annotations

import math
from typing import Any, Tuple

from .. import json
from . import fields
from . import signature as signatures
from .errors import MarshalError, WireError
from .message import Message
from .value import Array, Basic, DictEntry, Struct, Value, Variant


# This is the version of the header layout implemented here; a message
# with any other version is rejected.

version = 1

_non_finite = {'inf': math.inf, '-inf': -math.inf, 'nan': math.nan}


def pack(message: Message) -> Tuple[bytes, bytes]:
    """ Serialize Message -> (header bytes, body bytes) """

    header = message.header()
    header['version'] = version
    header['signature'] = message.signature

    body = [encode_value(value) for value in message.body]

    return json.dumps(header), json.dumps(body)


def unpack(header_bytes: bytes, body_bytes: bytes) -> Message:
    """ Deserialize (header bytes, body bytes) -> Message """

    try:
        header = json.loads(header_bytes)
        body = json.loads(body_bytes)
    except json.DecodeError as error:
        raise WireError('undecodable message: ' + str(error)) from error

    if not isinstance(header, dict):
        raise WireError('message header is not a JSON object')

    their_version = header.get('version')
    if their_version != version:
        raise WireError('message header is version %r, recipient expects %r' % (their_version, version))

    if not isinstance(body, list):
        raise WireError('message body is not a JSON array')

    try:
        types = signatures.split(header.get('signature', ''))

        if len(types) != len(body):
            raise WireError('signature %r describes %d values, body has %d' % (header.get('signature'), len(types), len(body)))

        values = [decode_value(type, data) for type, data in zip(types, body)]

        message = Message(
            header.get('type'),
            path=header.get('path'),
            interface=header.get('interface'),
            member=header.get('member'),
            destination=header.get('destination'),
            body=values,
            serial=header.get('serial'),
            reply_serial=header.get('reply_serial'),
            sender=header.get('sender'),
            error_name=header.get('error_name'),
        )

    except WireError:
        raise
    except (MarshalError, ValueError) as error:
        raise WireError('malformed message: ' + str(error)) from error

    return message


def encode_value(value: Value) -> Any:
    """ Return the JSON-ready representation of a single value. """

    if isinstance(value, Basic):
        if value.tag == fields.DOUBLE and (math.isinf(value.value) or math.isnan(value.value)):
            return str(value.value)
        return value.value

    if isinstance(value, Variant):
        return [value.contents_signature, encode_value(value.value)]

    if isinstance(value, (Array, Struct, DictEntry)):
        return [encode_value(child) for child in value.children]

    raise TypeError('not a value: ' + repr(value))


def decode_value(signature: str, data: Any) -> Value:
    """ Return the value described by the single complete type *signature*
        from its JSON representation *data*.
    """

    code = signatures.type_code(signature)

    if fields.is_basic(code):
        if code == fields.DOUBLE:
            if isinstance(data, str) and data in _non_finite:
                data = _non_finite[data]
            elif isinstance(data, int) and not isinstance(data, bool):
                data = float(data)
        return Basic(code, data)

    if code == fields.VARIANT:
        inner, data = _sequence(signature, data, 2)
        if not signatures.is_single(inner):
            raise WireError('variant signature is not a single complete type: ' + repr(inner))
        return Variant(decode_value(inner, data))

    if code == fields.ARRAY:
        element = signature[1:]
        items = _sequence(signature, data)
        return Array(element, [decode_value(element, item) for item in items])

    if code == fields.STRUCT:
        types = signatures.struct_fields(signature)
        members = _sequence(signature, data, len(types))
        return Struct([decode_value(type, member) for type, member in zip(types, members)])

    if code == fields.DICT_ENTRY:
        key_type, value_type = signatures.dict_entry_types(signature)
        key, value = _sequence(signature, data, 2)
        return DictEntry(decode_value(key_type, key), decode_value(value_type, value))

    raise WireError('cannot decode type ' + repr(signature))


def _sequence(signature, data, length=None):

    if not isinstance(data, list):
        raise WireError('%r value must be a JSON array, not %s' % (signature, type(data).__name__))

    if length is not None and len(data) != length:
        raise WireError('%r value must have %d elements, not %d' % (signature, length, len(data)))

    return data


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
