""" The value tree. A message body is an ordered sequence of values; each
    value is either a :class:`Basic` scalar or one of the four containers,
    :class:`Array`, :class:`Struct`, :class:`DictEntry`, and
    :class:`Variant`. The set is closed: code walking a value tree can
    dispatch on these five classes and nothing else.

    Values validate themselves on construction, so a tree that exists is
    a tree that can be put on the wire. Values compare structurally.
"""

import re

from dataclasses import dataclass, field
from typing import Any, List

from . import fields
from . import signature as signatures
from .errors import BuilderError, InvalidValueError, UnknownTypeError


_object_path = re.compile(r'^(/|(/[A-Za-z0-9_]+)+)$')


class Value:
    """ Common base for every node in a value tree. Every subclass has a
        *tag*, its type code.
    """

    @property
    def signature(self):
        raise NotImplementedError


    @property
    def children(self):
        return ()


    def is_container(self):
        return fields.is_container(self.tag)


# end of class Value



@dataclass
class Basic(Value):
    """ A scalar value with its type code. Integers are range-checked for
        their width, doubles are normalized to float, booleans must be
        genuine booleans, and strings may not contain NUL characters.
    """

    tag: str
    value: Any

    def __post_init__(self):
        self.value = _check_basic(self.tag, self.value)


    @property
    def signature(self):
        return self.tag


# end of class Basic



@dataclass
class Array(Value):
    """ A homogeneous sequence; every item has the *element* signature. """

    element: str
    items: List[Value] = field(default_factory=list)

    tag = fields.ARRAY

    def __post_init__(self):

        if not signatures.is_single(fields.ARRAY + self.element):
            raise BuilderError('array element signature must be a single complete type: ' + repr(self.element))

        self.items = list(self.items)

        for item in self.items:
            if item.signature != self.element:
                raise BuilderError("array of '%s' cannot hold a '%s' item" % (self.element, item.signature))


    @property
    def signature(self):
        return fields.ARRAY + self.element


    @property
    def contents_signature(self):
        return self.element


    @property
    def children(self):
        return tuple(self.items)


# end of class Array



@dataclass
class Struct(Value):
    """ A fixed, heterogeneous, ordered sequence of one or more fields. """

    members: List[Value] = field(default_factory=list)

    tag = fields.STRUCT

    def __post_init__(self):
        self.members = list(self.members)

        if len(self.members) == 0:
            raise BuilderError('a struct must have at least one field')


    @property
    def signature(self):
        return fields.STRUCT_BEGIN + self.contents_signature + fields.STRUCT_END


    @property
    def contents_signature(self):
        return ''.join(child.signature for child in self.members)


    @property
    def children(self):
        return tuple(self.members)


# end of class Struct



@dataclass
class DictEntry(Value):
    """ A single key/value pair; only valid as the item of an array. The
        key is always a basic value.
    """

    key: Value
    value: Value

    tag = fields.DICT_ENTRY

    def __post_init__(self):

        if not isinstance(self.key, Basic):
            raise BuilderError('dict entry key must be a basic type, not ' + repr(self.key.signature))

        if not isinstance(self.value, Value):
            raise BuilderError('dict entry value must be a value, not ' + type(self.value).__name__)


    @property
    def signature(self):
        return fields.DICT_ENTRY_BEGIN + self.contents_signature + fields.DICT_ENTRY_END


    @property
    def contents_signature(self):
        return self.key.signature + self.value.signature


    @property
    def children(self):
        return (self.key, self.value)


# end of class DictEntry



@dataclass
class Variant(Value):
    """ A value that carries its own signature. """

    value: Value

    tag = fields.VARIANT

    def __post_init__(self):

        if not isinstance(self.value, Value):
            raise BuilderError('variant content must be a value, not ' + type(self.value).__name__)

        if isinstance(self.value, DictEntry):
            raise BuilderError('a dict entry cannot be held directly by a variant')


    @property
    def signature(self):
        return fields.VARIANT


    @property
    def contents_signature(self):
        return self.value.signature


    @property
    def children(self):
        return (self.value,)


# end of class Variant



def _check_basic(tag, value):

    if not fields.is_basic(tag):
        raise UnknownTypeError("'%s' is not a basic type" % (tag,))

    name = fields.name_from_type(tag)

    if tag in fields.integer_ranges:
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidValueError('%s value must be an integer, not %s' % (name, repr(value)))

        minimum, maximum = fields.integer_ranges[tag]
        if value < minimum or value > maximum:
            raise InvalidValueError('%s value %d out of range [%d, %d]' % (name, value, minimum, maximum))

        return value

    if tag == fields.DOUBLE:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidValueError('double value must be a number, not ' + repr(value))
        return float(value)

    if tag == fields.BOOLEAN:
        if not isinstance(value, bool):
            raise InvalidValueError('boolean value must be True or False, not ' + repr(value))
        return value

    # Only strings and object paths remain.

    if not isinstance(value, str):
        raise InvalidValueError('%s value must be a str, not %s' % (name, type(value).__name__))

    if '\0' in value:
        raise InvalidValueError('%s value may not contain NUL characters' % (name))

    if tag == fields.OBJECT_PATH and _object_path.fullmatch(value) is None:
        raise InvalidValueError('invalid object path: ' + repr(value))

    return value


def unwrap(value):
    """ Return the plain Python equivalent of a value tree: scalars for
        basic values, lists for arrays (a dict for an array of dict
        entries), tuples for structs and dict entries, and the contents
        of a variant.
    """

    if isinstance(value, Basic):
        return value.value

    if isinstance(value, Array):
        if value.element.startswith(fields.DICT_ENTRY_BEGIN):
            return dict(unwrap(item) for item in value.items)
        return [unwrap(item) for item in value.items]

    if isinstance(value, Struct):
        return tuple(unwrap(child) for child in value.members)

    if isinstance(value, DictEntry):
        return (unwrap(value.key), unwrap(value.value))

    if isinstance(value, Variant):
        return unwrap(value.value)

    raise TypeError('not a value: ' + repr(value))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
