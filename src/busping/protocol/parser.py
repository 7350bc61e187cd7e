""" Parse textual value expressions into value trees.

An expression is a ``:`` delimited sequence of tokens, starting with a
type name::

    string:hello
    int32:0x1f
    array:uint16:1,2,3
    struct:int32:7:string:hello:double:3.5
    dict:int32:string:1,one,2,two
    variant:boolean:true

Arrays and dictionaries take their items from a single ``,`` delimited
token. Struct members are (type, value) pairs that continue until the
end of the struct's span; a nested struct therefore always extends to
the end of its enclosing expression. A variant holds exactly one
(type, value) pair, which may itself be a container.

The value that ends a top-level expression takes the remainder of the
expression verbatim, so ``string:http://example.com`` is a single string.
"""

import re

from . import fields
from .errors import (
    InvalidValueError,
    MalformedDictionaryError,
    MalformedInputError,
    MarshalError,
)
from .value import Array, Basic, DictEntry, Struct, Variant


_integer = re.compile(r'^\s*([+-]?)(0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)\s*$')
_double = re.compile(r'^[+-]?((\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|inf|infinity|nan)$', re.IGNORECASE)


class Cursor:
    """ A position within an immutable sequence of tokens. A :class:`Cursor`
        is never modified; every read returns the token along with a new
        :class:`Cursor` positioned past it.
    """

    __slots__ = ('tokens', 'position')

    def __init__(self, tokens, position=0):
        self.tokens = tuple(tokens)
        self.position = position


    @classmethod
    def from_text(cls, text):
        return cls(text.split(':'))


    def __repr__(self):
        return 'Cursor(%r, %d)' % (self.tokens, self.position)


    def exhausted(self):
        return self.position >= len(self.tokens)


    def take(self):
        """ Return the next token and the advanced cursor. Reading past the
            end of the tokens is an error.
        """

        if self.exhausted():
            raise MalformedInputError('Data item is badly formed: missing token')

        token = self.tokens[self.position]
        return token, Cursor(self.tokens, self.position + 1)


    def take_value(self):
        """ Return the next token, or an empty token if none remain. A
            missing value is equivalent to an empty one; whether that is
            acceptable is up to the type it converts to.
        """

        if self.exhausted():
            return '', self

        return self.take()


    def take_type(self):
        """ Return the type code named by the next token. The token must
            be present and non-empty.
        """

        token, cursor = self.take()

        if token == '':
            raise MalformedInputError('Data item is badly formed: empty type name')

        return fields.type_from_name(token), cursor


    def remainder(self):
        """ Return every remaining token re-joined with ``:``, and an
            exhausted cursor.
        """

        rest = ':'.join(self.tokens[self.position:])
        return rest, Cursor(self.tokens, len(self.tokens))


# end of class Cursor



def parse_integer(token, type=fields.INT32):
    """ Convert *token* to an integer using the C ``strtol`` base
        conventions: ``0x`` for hexadecimal, a leading zero for octal,
        decimal otherwise. Unlike ``strtol``, an unparseable token is an
        error rather than zero; range checks are left to the caller.
    """

    match = _integer.match(token)

    if match is None:
        name = fields.name_from_type(type)
        raise InvalidValueError("invalid %s literal '%s'" % (name, token))

    sign, digits = match.groups()

    if digits[:2] in ('0x', '0X'):
        number = int(digits[2:], 16)
    elif digits.startswith('0'):
        number = int(digits, 8)
    else:
        number = int(digits, 10)

    if sign == '-':
        number = -number

    return number


def convert(type, token):
    """ Convert the text *token* to a :class:`Basic` value of *type*. """

    if type in fields.integer_ranges:
        value = parse_integer(token, type)

    elif type == fields.DOUBLE:
        # strtod syntax: no underscores, no surrounding blanks.
        if _double.fullmatch(token) is None:
            raise InvalidValueError("invalid double literal '%s'" % (token))
        value = float(token)

    elif type == fields.BOOLEAN:
        if token == 'true':
            value = True
        elif token == 'false':
            value = False
        else:
            raise InvalidValueError("Expected 'true' or 'false' instead of '%s'" % (token))

    elif fields.is_basic(type):
        value = token

    else:
        name = fields.name_from_type(type)
        raise MalformedInputError('%s is not a basic type in this position' % (name))

    return Basic(type, value)


def parse_value(cursor, type, last=False):
    """ Parse one value of *type* starting at *cursor*. Return the value
        and the cursor positioned past every token it consumed. If *last*
        is True the value ends its top-level expression: a basic value
        takes the remainder of the expression, and a container with no
        element type left defaults to string elements.
    """

    if fields.is_basic(type):
        token, cursor = _value_token(cursor, last)
        return convert(type, token), cursor

    if type == fields.ARRAY:
        element, cursor = _element_type(cursor, last)
        _require_basic(element, 'array element')

        token, cursor = _value_token(cursor, last)
        items = [convert(element, item) for item in _split_items(token)]
        return Array(element, items), cursor

    if type == fields.DICT_ENTRY:
        key_type, cursor = _element_type(cursor, last)
        value_type, cursor = cursor.take_type()
        _require_basic(key_type, 'dictionary key')
        _require_basic(value_type, 'dictionary value')

        token, cursor = _value_token(cursor, last)
        items = _split_items(token)

        if len(items) % 2 != 0:
            raise MalformedDictionaryError('Malformed dictionary: key %s has no value' % (repr(items[-1])))

        entries = list()
        for index in range(0, len(items), 2):
            key = convert(key_type, items[index])
            value = convert(value_type, items[index + 1])
            entries.append(DictEntry(key, value))

        element = fields.DICT_ENTRY_BEGIN + key_type + value_type + fields.DICT_ENTRY_END
        return Array(element, entries), cursor

    if type == fields.VARIANT:
        inner_type, cursor = _element_type(cursor, last)
        inner, cursor = parse_value(cursor, inner_type, last)
        return Variant(inner), cursor

    if type == fields.STRUCT:
        members = list()

        while not cursor.exhausted():
            member_type, cursor = cursor.take_type()

            # A nested struct has no terminator, it runs to the end of
            # the expression along with everything else.

            if member_type == fields.STRUCT:
                member, cursor = parse_value(cursor, member_type, last)
            else:
                member, cursor = parse_value(cursor, member_type, False)

            members.append(member)

        return Struct(members), cursor

    raise MalformedInputError('unsupported data type ' + repr(type))


def parse_expression(text):
    """ Parse a single ``TYPE[:VALUE][:...]`` expression, returning one
        value. Any error is re-raised with the offending expression
        appended to the message.
    """

    cursor = Cursor.from_text(text)

    try:
        code, cursor = cursor.take_type()
        value, cursor = parse_value(cursor, code, last=True)

        if not cursor.exhausted():
            rest, cursor = cursor.remainder()
            raise MalformedInputError("unexpected trailing data '%s'" % (rest))

    except MarshalError as error:
        raise error.__class__("%s (in '%s')" % (error, text)) from None

    return value


def parse_inputs(texts):
    """ Parse every expression in *texts*, in order, returning a list of
        top-level values.
    """

    return [parse_expression(text) for text in texts]


def _value_token(cursor, last):
    if last:
        return cursor.remainder()
    return cursor.take_value()


def _element_type(cursor, last):
    if last:
        rest, end = cursor.remainder()
        if rest == '':
            return fields.STRING, end
    return cursor.take_type()


def _require_basic(type, role):
    if not fields.is_basic(type):
        name = fields.name_from_type(type)
        raise MalformedInputError('%s must be a basic type, not %s' % (role, name))


def _split_items(token):
    # Empty items are skipped, so 'a,,b' is two items and '' is none.
    return [item for item in token.split(',') if item != '']


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
