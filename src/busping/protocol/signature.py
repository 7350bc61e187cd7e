""" Parsing and validation of type signatures. A signature is a string of
    type codes describing zero or more complete types; for example, the
    signature ``ia{sv}(ii)`` describes an int32, an array of dictionary
    entries mapping strings to variants, and a struct of two int32 values.
"""

from . import fields
from .errors import SignatureError


maximum_length = 255
maximum_depth = 64


def split(signature):
    """ Split *signature* into a list of complete types. An empty signature
        is valid and returns an empty list; anything malformed raises
        :class:`SignatureError`.
    """

    if not isinstance(signature, str):
        raise SignatureError('signature must be a string, not ' + type(signature).__name__)

    if len(signature) > maximum_length:
        raise SignatureError('signature exceeds %d characters' % (maximum_length))

    types = list()
    position = 0

    while position < len(signature):
        end = _complete(signature, position, 1)
        types.append(signature[position:end])
        position = end

    return types


def validate(signature):
    """ Return *signature* unmodified if it is well-formed. """

    split(signature)
    return signature


def is_single(signature):
    """ Return True if *signature* describes exactly one complete type. """

    try:
        types = split(signature)
    except SignatureError:
        return False

    return len(types) == 1


def type_code(signature):
    """ Return the type code for the leading type in *signature*, mapping
        the struct and dict-entry delimiters to their type codes.
    """

    try:
        code = signature[0]
    except (IndexError, TypeError):
        raise SignatureError('empty signature has no type code') from None

    if code == fields.STRUCT_BEGIN:
        return fields.STRUCT
    if code == fields.DICT_ENTRY_BEGIN:
        return fields.DICT_ENTRY

    return code


def struct_fields(signature):
    """ Return the list of field types for a single struct *signature*. """

    if signature[:1] != fields.STRUCT_BEGIN or signature[-1:] != fields.STRUCT_END:
        raise SignatureError('not a struct signature: ' + repr(signature))

    return split(signature[1:-1])


def dict_entry_types(signature):
    """ Return the (key, value) types for a single dict-entry *signature*. """

    if signature[:1] != fields.DICT_ENTRY_BEGIN or signature[-1:] != fields.DICT_ENTRY_END:
        raise SignatureError('not a dict entry signature: ' + repr(signature))

    return signature[1], signature[2:-1]


def _complete(signature, position, depth):
    """ Return the index just past the complete type that begins at
        *position* in *signature*.
    """

    if depth > maximum_depth:
        raise SignatureError('signature nesting exceeds %d levels' % (maximum_depth))

    try:
        code = signature[position]
    except IndexError:
        raise SignatureError('incomplete signature: ' + repr(signature)) from None

    if code in fields.basic_types or code == fields.VARIANT:
        return position + 1

    if code == fields.ARRAY:
        position += 1
        if signature[position:position + 1] == fields.DICT_ENTRY_BEGIN:
            return _dict_entry(signature, position, depth + 1)
        return _complete(signature, position, depth + 1)

    if code == fields.STRUCT_BEGIN:
        position += 1
        if signature[position:position + 1] == fields.STRUCT_END:
            raise SignatureError('empty struct in signature: ' + repr(signature))

        while True:
            if position >= len(signature):
                raise SignatureError('unterminated struct in signature: ' + repr(signature))
            if signature[position] == fields.STRUCT_END:
                return position + 1
            position = _complete(signature, position, depth + 1)

    if code == fields.DICT_ENTRY_BEGIN:
        raise SignatureError('dict entry outside of an array: ' + repr(signature))

    raise SignatureError("invalid type code '%s' in signature %s" % (code, repr(signature)))


def _dict_entry(signature, position, depth):

    key = position + 1

    if signature[key:key + 1] not in fields.basic_types:
        raise SignatureError('dict entry key must be a basic type: ' + repr(signature))

    end = _complete(signature, key + 1, depth + 1)

    if signature[end:end + 1] != fields.DICT_ENTRY_END:
        raise SignatureError('dict entry must have exactly one key and one value: ' + repr(signature))

    return end + 1


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
