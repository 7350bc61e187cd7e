from __future__ import annotations

from typing import Any, List, Optional

from . import fields
from . import signature as signatures
from .errors import BuilderError
from .message import Message
from .value import Array, Basic, DictEntry, Struct, Value, Variant


class _Scope:
    """ One open container. The *signature* is the signature of the
        contents: the element type for an array, the contained type for a
        variant, and the concatenated member types for a struct or dict
        entry. It may be None for a struct or dict entry, in which case
        the contents define it.
    """

    def __init__(self, type: Optional[str], signature: Optional[str]):
        self.type = type
        self.signature = signature
        self.children: List[Value] = []


class MessageBuilder:
    """ Fluent construction of a :class:`Message`. The header is set with
        one of the semantic setters; the body is appended through a cursor
        that can open and close nested container scopes, in the same
        fashion as a streaming marshaller.
    """

    def __init__(self):

        self._type: Optional[str] = None
        self._destination: Optional[str] = None
        self._path: Optional[str] = None
        self._interface: Optional[str] = None
        self._member: Optional[str] = None
        self._sender: Optional[str] = None
        self._reply_serial: Optional[int] = None
        self._error_name: Optional[str] = None

        self._scopes: List[_Scope] = [_Scope(None, None)]

    # Semantic type setters
    def method_call(self, destination: Optional[str], path: str, interface: Optional[str], member: str):
        self._type = fields.METHOD_CALL
        self._destination = destination
        self._path = path
        self._interface = interface
        self._member = member
        return self

    def signal(self, path: str, interface: str, member: str):
        self._type = fields.SIGNAL
        self._destination = None
        self._path = path
        self._interface = interface
        self._member = member
        return self

    def reply_to(self, call: Message):
        self._type = fields.METHOD_RETURN
        self._destination = call.sender
        self._reply_serial = call.serial
        return self

    def error_to(self, call: Message, name: str):
        self._type = fields.ERROR
        self._destination = call.sender
        self._reply_serial = call.serial
        self._error_name = name
        return self

    # Routing
    def to(self, destination: Optional[str]):
        self._destination = destination
        return self

    def sender(self, sender: Optional[str]):
        self._sender = sender
        return self

    # Body
    @property
    def depth(self) -> int:
        """ The number of containers currently open. """
        return len(self._scopes) - 1

    @property
    def signature(self) -> str:
        """ The signature of the top-level values appended so far. """
        return ''.join(value.signature for value in self._scopes[0].children)

    def append_basic(self, type: str, value: Any):
        self._add(Basic(type, value))
        return self

    def open(self, type: str, signature: Optional[str] = None):
        """ Open a nested container scope of *type*. Arrays and variants
            require the *signature* of their contents; it is optional for
            structs and dict entries.
        """

        if not fields.is_container(type):
            raise BuilderError("cannot open a container of type '%s'" % (type,))

        if signature is None:
            if type == fields.ARRAY or type == fields.VARIANT:
                name = fields.name_from_type(type)
                raise BuilderError('opening %s requires a contents signature' % (name))
        elif type == fields.ARRAY:
            if not signatures.is_single(fields.ARRAY + signature):
                raise BuilderError('invalid element signature: ' + repr(signature))
        elif type == fields.VARIANT:
            if not signatures.is_single(signature):
                raise BuilderError('invalid contents signature: ' + repr(signature))

        if type == fields.DICT_ENTRY:
            parent = self._scopes[-1]
            if parent.type != fields.ARRAY or not parent.signature.startswith(fields.DICT_ENTRY_BEGIN):
                raise BuilderError('a dict entry can only be opened inside an array of dict entries')

        self._scopes.append(_Scope(type, signature))
        return self

    def close(self):
        """ Close the innermost open container and append it to its parent.
            A container that fails validation is left open.
        """

        if len(self._scopes) == 1:
            raise BuilderError('no open container to close')

        scope = self._scopes[-1]
        children = scope.children

        if scope.type == fields.ARRAY:
            value = Array(scope.signature, children)

        elif scope.type == fields.VARIANT:
            if len(children) != 1:
                raise BuilderError('a variant holds exactly one value, not %d' % (len(children)))
            value = Variant(children[0])

        elif scope.type == fields.DICT_ENTRY:
            if len(children) != 2:
                raise BuilderError('a dict entry holds exactly a key and a value, not %d values' % (len(children)))
            value = DictEntry(children[0], children[1])

        else:
            value = Struct(children)

        if scope.signature is not None and value.contents_signature != scope.signature:
            raise BuilderError("container opened as '%s' was filled with '%s'" % (scope.signature, value.contents_signature))

        self._scopes.pop()
        self._add(value)
        return self

    def append(self, value: Value):
        """ Append *value*, recursively opening, filling, and closing a
            scope for every container in the tree.
        """

        if isinstance(value, Basic):
            return self.append_basic(value.tag, value.value)

        self.open(value.tag, value.contents_signature)

        for child in value.children:
            self.append(child)

        return self.close()

    def _add(self, value: Value) -> None:

        scope = self._scopes[-1]

        if scope.type == fields.ARRAY:
            if value.signature != scope.signature:
                raise BuilderError("array of '%s' cannot hold a '%s' item" % (scope.signature, value.signature))

        elif scope.type == fields.VARIANT:
            if scope.children:
                raise BuilderError('a variant holds exactly one value')
            if value.signature != scope.signature:
                raise BuilderError("variant of '%s' cannot hold a '%s' value" % (scope.signature, value.signature))

        elif scope.type == fields.DICT_ENTRY:
            if len(scope.children) == 2:
                raise BuilderError('a dict entry holds exactly a key and a value')
            if not scope.children and not isinstance(value, Basic):
                raise BuilderError('dict entry key must be a basic type, not ' + repr(value.signature))

        elif isinstance(value, DictEntry):
            raise BuilderError('a dict entry can only be appended to an array of dict entries')

        scope.children.append(value)

    # Finalize
    def build(self) -> Message:

        if self._type is None:
            raise BuilderError('Message type not specified')

        if len(self._scopes) != 1:
            raise BuilderError('%d container(s) left open' % (len(self._scopes) - 1))

        body = self._scopes[0].children
        self._scopes = [_Scope(None, None)]

        return Message(
            self._type,
            path=self._path,
            interface=self._interface,
            member=self._member,
            destination=self._destination,
            body=body,
            reply_serial=self._reply_serial,
            sender=self._sender,
            error_name=self._error_name,
        )


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
