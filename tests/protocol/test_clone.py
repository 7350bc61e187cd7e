import pytest

from busping.protocol import clone, factory, fields
from busping.protocol.errors import BuilderError
from busping.protocol.message import Message
from busping.protocol.value import Array, Basic, Struct


inputs = (
    'int32:-5',
    'string:http://example.com',
    'array:uint16:1,2,3',
    'dict:string:int64:a,1,b,-2',
    'variant:struct:int32:1:string:two',
    'struct:byte:0x10:boolean:true:struct:double:2.5:objpath:/a/b',
)


def new_call(*inputs):
    return factory.message(fields.METHOD_CALL, 'com.bmw.Test', '/com/bmw/Test',
                           'com.bmw.Test', 'getEcho', inputs)


def walk(values):
    """ Yield every node in a list of value trees. """

    for value in values:
        yield value
        for node in walk(value.children):
            yield node


def shares_nodes(first, second):

    mine = set(id(node) for node in walk(first.body) if node.is_container())
    theirs = set(id(node) for node in walk(second.body) if node.is_container())

    return bool(mine & theirs)


def test_clone():

    original = new_call(*inputs)
    copied = clone.clone(original)

    assert copied.body == original.body
    assert copied.signature == original.signature
    assert copied.serial != original.serial
    assert copied.destination == original.destination
    assert copied.path == original.path
    assert copied.interface == original.interface
    assert copied.member == original.member
    assert shares_nodes(original, copied) is False

    # Changing the copy leaves the original alone.
    copied.body[2].items.append(Basic('q', 4))
    assert len(original.body[2].items) == 3


def test_clone_signal():

    original = factory.message(fields.SIGNAL, None, '/com/bmw/Test', 'com.bmw.Test',
                               'changed', ('string:hello',))
    copied = clone.clone(original)

    assert copied.type == fields.SIGNAL
    assert copied.destination is None
    assert copied.body == original.body


def test_clone_empty():

    original = new_call()
    copied = clone.clone(original)

    assert copied.body == []
    assert copied.signature == ''


def test_clone_header():

    call = new_call('int32:1')
    reply = Message.method_return(call)

    with pytest.raises(ValueError):
        clone.clone_header(reply)

    error = Message.error_reply(call, fields.ERROR_FAILED, 'no')

    with pytest.raises(ValueError):
        clone.clone(error)


def test_copy():

    original = new_call(*inputs)
    copied = clone.copy(original)

    assert copied.body == original.body
    assert copied.serial == original.serial
    assert copied.header() == original.header()
    assert shares_nodes(original, copied) is False


def test_duplicate():

    original = new_call('string:hello')

    cloned = clone.duplicate(original)
    assert cloned.serial != original.serial
    assert cloned.body == original.body

    copied = clone.duplicate(original, use_clone=False)
    assert copied.serial != original.serial
    assert copied.body == original.body

    again = clone.duplicate(original, use_clone=False)
    assert again.serial not in (original.serial, copied.serial)
    assert again.header()['member'] == original.member


def test_multiply_single():

    original = new_call('array:int32:1,2')
    multiplied = clone.multiply(original, 3)

    assert multiplied.signature == 'aai'
    assert len(multiplied.body) == 1

    array = multiplied.body[0]
    assert array.element == 'ai'
    assert array.items == [original.body[0]] * 3
    assert shares_nodes(original, multiplied) is False

    # Header is carried over, serial is new.
    assert multiplied.member == original.member
    assert multiplied.serial != original.serial


def test_multiply_once():

    original = new_call('string:hello')
    multiplied = clone.multiply(original, 1)

    assert multiplied.body == [Array('s', [Basic('s', 'hello')])]


def test_multiply_once_is_clone():

    original = new_call(*inputs[:3])

    once = clone.multiply(original, 1)
    direct = clone.clone(original)

    assert once.body[0].items == [Struct(direct.body)]

    single = new_call(inputs[4])
    assert clone.multiply(single, 1).body[0].items == clone.clone(single).body


def test_multiply_counts_add():

    original = new_call('array:int32:4,5')

    whole = clone.multiply(original, 5).body[0].items
    first = clone.multiply(original, 2).body[0].items
    rest = clone.multiply(original, 3).body[0].items

    assert whole[:2] == first
    assert whole[2:] == rest
    assert len(set(id(item) for item in whole)) == 5


def test_multiply_several():

    original = new_call('int32:1', 'string:two')
    multiplied = clone.multiply(original, 2)

    element = Struct([Basic('i', 1), Basic('s', 'two')])

    assert multiplied.signature == 'a(is)'
    assert multiplied.body == [Array('(is)', [element, element])]


def test_multiply_nested():

    original = new_call('string:x')

    twice = clone.multiply(clone.multiply(original, 2), 3)

    assert twice.signature == 'aas'
    assert len(twice.body[0].items) == 3

    for item in twice.body[0].items:
        assert item == Array('s', [Basic('s', 'x'), Basic('s', 'x')])


def test_multiply_errors():

    with pytest.raises(ValueError):
        clone.multiply(new_call('int32:1'), 0)

    with pytest.raises(BuilderError):
        clone.multiply(new_call(), 2)


def test_factory_multiply():

    multiplied = new_call('int32:7')
    assert multiplied.signature == 'i'

    multiplied = factory.message(fields.METHOD_CALL, 'com.bmw.Test', '/com/bmw/Test',
                                 'com.bmw.Test', 'getEcho', ('int32:7',), multiply=4)

    assert multiplied.signature == 'ai'
    assert multiplied.body[0].items == [Basic('i', 7)] * 4


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
