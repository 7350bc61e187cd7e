""" Protocol vocabulary: type codes, type names, and message kinds.

Keep these in one place to avoid stringly-typed value handling. The type
codes are the single-character codes used in signatures; the container
codes for struct and dict-entry are never written into a signature
directly, the delimiters are used instead.
"""

from .errors import UnknownTypeError


# Basic types.

STRING = 's'
INT16 = 'n'
UINT16 = 'q'
INT32 = 'i'
UINT32 = 'u'
INT64 = 'x'
UINT64 = 't'
DOUBLE = 'd'
BYTE = 'y'
BOOLEAN = 'b'
OBJECT_PATH = 'o'

# Container types.

VARIANT = 'v'
ARRAY = 'a'
STRUCT = 'r'
DICT_ENTRY = 'e'

STRUCT_BEGIN = '('
STRUCT_END = ')'
DICT_ENTRY_BEGIN = '{'
DICT_ENTRY_END = '}'

basic_types = frozenset((STRING, INT16, UINT16, INT32, UINT32, INT64,
                         UINT64, DOUBLE, BYTE, BOOLEAN, OBJECT_PATH))

container_types = frozenset((VARIANT, ARRAY, STRUCT, DICT_ENTRY))


# Inclusive integer ranges, keyed by type code.

integer_ranges = {
    BYTE:   (0, 0xFF),
    INT16:  (-0x8000, 0x7FFF),
    UINT16: (0, 0xFFFF),
    INT32:  (-0x80000000, 0x7FFFFFFF),
    UINT32: (0, 0xFFFFFFFF),
    INT64:  (-0x8000000000000000, 0x7FFFFFFFFFFFFFFF),
    UINT64: (0, 0xFFFFFFFFFFFFFFFF),
}


# The first name for each type is the canonical one, as used on the
# command line; the remaining names are accepted aliases.

_names = (
    (STRING,        ('string',)),
    (INT16,         ('int16',)),
    (UINT16,        ('uint16',)),
    (INT32,         ('int32',)),
    (UINT32,        ('uint32',)),
    (INT64,         ('int64',)),
    (UINT64,        ('uint64',)),
    (DOUBLE,        ('double',)),
    (BYTE,          ('byte',)),
    (BOOLEAN,       ('boolean',)),
    (OBJECT_PATH,   ('objpath', 'object-path')),
    (VARIANT,       ('variant',)),
    (ARRAY,         ('array',)),
    (STRUCT,        ('struct',)),
    (DICT_ENTRY,    ('dict', 'dict-entry')),
)

_by_name = dict()
_by_type = dict()

for _type, _aliases in _names:
    _by_type[_type] = _aliases[0]
    for _alias in _aliases:
        _by_name[_alias] = _type

del _type, _aliases, _alias


def type_from_name(name):
    """ Return the type code for the human-readable type *name*. An
        unrecognized name raises :class:`UnknownTypeError`; there is no
        default type.
    """

    try:
        return _by_name[name]
    except (KeyError, TypeError):
        raise UnknownTypeError("Unknown type '%s'" % (name,)) from None


def name_from_type(type):
    """ Return the canonical name for the type code *type*. """

    try:
        return _by_type[type]
    except KeyError:
        raise UnknownTypeError("Unknown type code '%s'" % (type,)) from None


def is_basic(type):
    return type in basic_types


def is_container(type):
    return type in container_types


# Message kinds.

METHOD_CALL = 'method_call'
METHOD_RETURN = 'method_return'
ERROR = 'error'
SIGNAL = 'signal'

message_types = frozenset((METHOD_CALL, METHOD_RETURN, ERROR, SIGNAL))

# Only these kinds can be originated from the command line; returns and
# errors are always generated in response to a call.

outbound_types = frozenset((METHOD_CALL, SIGNAL))


def message_type_from_string(text):
    """ Validate and return the message kind named by *text*, which must
        be one of the kinds that can be originated by a client.
    """

    if text in outbound_types:
        return text

    raise ValueError("Message type '%s' is not supported" % (text,))


# Well-known error names used by the transport and the echo service.

ERROR_FAILED = 'org.freedesktop.DBus.Error.Failed'
ERROR_SERVICE_UNKNOWN = 'org.freedesktop.DBus.Error.ServiceUnknown'
ERROR_UNKNOWN_OBJECT = 'org.freedesktop.DBus.Error.UnknownObject'
ERROR_UNKNOWN_METHOD = 'org.freedesktop.DBus.Error.UnknownMethod'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
