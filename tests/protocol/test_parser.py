import pytest

from busping.protocol import fields
from busping.protocol.errors import (
    BuilderError,
    InvalidValueError,
    MalformedDictionaryError,
    MalformedInputError,
    UnknownTypeError,
)
from busping.protocol.parser import Cursor, parse_expression, parse_inputs, parse_integer
from busping.protocol.value import Array, Basic, DictEntry, Struct, Variant


def test_cursor_is_immutable():

    cursor = Cursor.from_text('int32:7:rest')

    token, advanced = cursor.take()
    assert token == 'int32'
    assert cursor.position == 0
    assert advanced.position == 1

    rest, exhausted = advanced.remainder()
    assert rest == '7:rest'
    assert exhausted.exhausted()
    assert advanced.position == 1

    with pytest.raises(MalformedInputError):
        exhausted.take()

    token, same = exhausted.take_value()
    assert token == ''
    assert same is exhausted


def test_basic():

    assert parse_expression('string:hello') == Basic('s', 'hello')
    assert parse_expression('int32:-7') == Basic('i', -7)
    assert parse_expression('uint64:18446744073709551615') == Basic('t', 0xFFFFFFFFFFFFFFFF)
    assert parse_expression('double:3.5') == Basic('d', 3.5)
    assert parse_expression('double:1e3') == Basic('d', 1000.0)
    assert parse_expression('byte:0xff') == Basic('y', 255)
    assert parse_expression('boolean:false') == Basic('b', False)
    assert parse_expression('objpath:/com/bmw/Test') == Basic('o', '/com/bmw/Test')
    assert parse_expression('object-path:/') == Basic('o', '/')


def test_string_takes_remainder():

    assert parse_expression('string:http://example.com:80') == Basic('s', 'http://example.com:80')
    assert parse_expression('string') == Basic('s', '')
    assert parse_expression('string:') == Basic('s', '')


def test_integer_prefixes():

    assert parse_integer('0x1f') == 31
    assert parse_integer('0X1F') == 31
    assert parse_integer('017') == 15
    assert parse_integer('0') == 0
    assert parse_integer('-0x10') == -16
    assert parse_integer('+42') == 42
    assert parse_integer(' 42 ') == 42

    for bad in ('', 'abc', '08', '1.5', '0x', '--1', '12abc'):
        with pytest.raises(InvalidValueError):
            parse_integer(bad)


def test_numeric_failures_are_errors():

    bad = (
        'int16:40000',
        'int16:-32769',
        'uint16:-1',
        'uint32:0x100000000',
        'byte:256',
        'int32:abc',
        'int32:',
        'int32',
        'double:',
        'double:three',
        'double:1_000',
        'double: 1.5',
        'double:1.5 ',
        'double:0x10',
        'double:1e',
    )

    for expression in bad:
        with pytest.raises(InvalidValueError):
            parse_expression(expression)


def test_double_literals():

    good = {
        'double:3.5': 3.5,
        'double:-2.': -2.0,
        'double:.25': 0.25,
        'double:+1e3': 1000.0,
        'double:6E-1': 0.6,
        'double:-Infinity': float('-inf'),
    }

    for expression, expected in good.items():
        assert parse_expression(expression) == Basic('d', expected)

    nan = parse_expression('double:NaN').value
    assert nan != nan


def test_boolean_strictness():

    assert parse_expression('boolean:true') == Basic('b', True)

    for bad in ('boolean:1', 'boolean:0', 'boolean:True', 'boolean:yes', 'boolean:'):
        with pytest.raises(InvalidValueError, match="Expected 'true' or 'false'"):
            parse_expression(bad)


def test_array_homogeneity():

    value = parse_expression('array:uint16:1,2,3')
    assert value == Array('q', [Basic('q', 1), Basic('q', 2), Basic('q', 3)])
    assert value.signature == 'aq'

    value = parse_expression('array:boolean:true,false')
    assert value == Array('b', [Basic('b', True), Basic('b', False)])

    # Empty items are skipped.
    assert parse_expression('array:int32:1,,2,') == Array('i', [Basic('i', 1), Basic('i', 2)])

    with pytest.raises(InvalidValueError):
        parse_expression('array:boolean:true,1')


def test_array_elements_must_be_basic():

    for bad in ('array:array:int32:1', 'array:struct:1', 'array:variant:1', 'array:dict:s:s:a,b'):
        with pytest.raises(MalformedInputError):
            parse_expression(bad)


def test_empty_element_type_defaults_to_string():

    assert parse_expression('array') == Array('s', [])
    assert parse_expression('array:') == Array('s', [])
    assert parse_expression('variant') == Variant(Basic('s', ''))
    assert parse_expression('variant:') == Variant(Basic('s', ''))

    # An element type that is present is always honored.
    assert parse_expression('array:int32') == Array('i', [])
    assert parse_expression('array:int32:') == Array('i', [])

    # A dictionary still needs its value type.
    for bad in ('dict', 'dict:', 'array::'):
        with pytest.raises(MalformedInputError):
            parse_expression(bad)


def test_empty_element_type_inside_struct_is_an_error():

    with pytest.raises(MalformedInputError):
        parse_expression('struct:int32:1:array')

    with pytest.raises(MalformedInputError):
        parse_expression('struct:variant')


def test_struct_heterogeneity():

    value = parse_expression('struct:int32:7:string:hello:double:3.5')

    assert isinstance(value, Struct)
    assert [member.tag for member in value.members] == ['i', 's', 'd']
    assert value == Struct([Basic('i', 7), Basic('s', 'hello'), Basic('d', 3.5)])
    assert value.signature == '(isd)'


def test_struct_nesting():

    value = parse_expression('struct:int32:1:array:int16:4,5:string:x')
    assert value == Struct([Basic('i', 1), Array('n', [Basic('n', 4), Basic('n', 5)]), Basic('s', 'x')])

    value = parse_expression('struct:int32:1:dict:string:int32:a,1:boolean:true')
    assert value.signature == '(ia{si}b)'

    value = parse_expression('struct:int32:1:variant:uint16:9:string:x')
    assert value == Struct([Basic('i', 1), Variant(Basic('q', 9)), Basic('s', 'x')])

    # A nested struct runs to the end of the expression.
    value = parse_expression('struct:int32:1:struct:string:a:string:b')
    assert value == Struct([Basic('i', 1), Struct([Basic('s', 'a'), Basic('s', 'b')])])


def test_struct_missing_value():

    # The last type in a struct may omit its value, which is then empty.
    assert parse_expression('struct:int32:1:string') == Struct([Basic('i', 1), Basic('s', '')])

    with pytest.raises(InvalidValueError):
        parse_expression('struct:string:a:int32')

    with pytest.raises(MalformedInputError):
        parse_expression('struct:int32:1:')


def test_empty_struct():

    # A struct must have at least one member.
    with pytest.raises(BuilderError):
        parse_expression('struct')


def test_dictionary_arity():

    value = parse_expression('dict:int32:string:1,one,2,two')

    assert value.signature == 'a{is}'
    assert len(value.items) == 2

    for item, (key, text) in zip(value.items, ((1, 'one'), (2, 'two'))):
        assert isinstance(item, DictEntry)
        assert item.key == Basic(fields.INT32, key)
        assert item.value == Basic(fields.STRING, text)

    with pytest.raises(MalformedDictionaryError, match='Malformed dictionary'):
        parse_expression('dict:int32:string:1,one,2')

    assert parse_expression('dict-entry:string:boolean:') == Array('{sb}', [])


def test_dictionary_types_must_be_basic():

    with pytest.raises(MalformedInputError):
        parse_expression('dict:string:variant:a,b')

    with pytest.raises(MalformedInputError):
        parse_expression('dict:array:string:a,b')


def test_variant():

    assert parse_expression('variant:int32:5') == Variant(Basic('i', 5))
    assert parse_expression('variant:string:a:b') == Variant(Basic('s', 'a:b'))
    assert parse_expression('variant:array:int32:1,2') == Variant(Array('i', [Basic('i', 1), Basic('i', 2)]))
    assert parse_expression('variant:variant:boolean:true') == Variant(Variant(Basic('b', True)))

    value = parse_expression('variant:struct:int32:1:string:x')
    assert value.contents_signature == '(is)'


def test_unknown_and_missing_types():

    with pytest.raises(UnknownTypeError, match='flonk'):
        parse_expression('flonk:1')

    with pytest.raises(UnknownTypeError):
        parse_expression('struct:int32:1:flonk:2')

    with pytest.raises(MalformedInputError):
        parse_expression('')

    with pytest.raises(MalformedInputError):
        parse_expression(':5')


def test_error_names_expression():

    with pytest.raises(InvalidValueError, match="in 'int16:99999'"):
        parse_expression('int16:99999')


def test_parse_inputs():

    values = parse_inputs(['string:hello', 'array:int32:1', 'variant:byte:2'])
    assert [value.signature for value in values] == ['s', 'ai', 'v']

    assert parse_inputs([]) == []


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
