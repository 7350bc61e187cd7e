""" Human-readable rendering of messages, in the style of the message bus
    monitoring tools: one header line, then one line per value, with
    containers indented beneath their opening line.
"""

from . import fields
from .value import Array, Basic, DictEntry, Struct, Variant


_labels = {
    fields.STRING:      'string',
    fields.INT16:       'int16',
    fields.UINT16:      'uint16',
    fields.INT32:       'int32',
    fields.UINT32:      'uint32',
    fields.INT64:       'int64',
    fields.UINT64:      'uint64',
    fields.DOUBLE:      'double',
    fields.BYTE:        'byte',
    fields.BOOLEAN:     'boolean',
    fields.OBJECT_PATH: 'object path',
}

_kinds = {
    fields.METHOD_CALL:     'method call',
    fields.METHOD_RETURN:   'method return',
    fields.ERROR:           'error',
    fields.SIGNAL:          'signal',
}


def format_header(message):

    line = '%s sender=%s -> destination=%s serial=%d' % (
            _kinds[message.type], message.sender, message.destination, message.serial)

    if message.type == fields.METHOD_CALL or message.type == fields.SIGNAL:
        line += ' path=%s; interface=%s; member=%s' % (message.path, message.interface, message.member)
    else:
        if message.type == fields.ERROR:
            line += ' error_name=%s' % (message.error_name)
        line += ' reply_serial=%s' % (message.reply_serial)

    return line


def format_value(value, depth=1):
    """ Return the list of lines describing *value*, indented for *depth*. """

    indent = '   ' * depth

    if isinstance(value, Basic):
        return [indent + _format_basic(value)]

    if isinstance(value, Variant):
        inner = format_value(value.value, depth + 1)
        inner[0] = indent + 'variant ' + inner[0].lstrip()
        return inner

    if isinstance(value, Array):
        opening, closing = 'array [', ']'
    elif isinstance(value, Struct):
        opening, closing = 'struct {', '}'
    elif isinstance(value, DictEntry):
        opening, closing = 'dict entry(', ')'
    else:
        raise TypeError('not a value: ' + repr(value))

    lines = [indent + opening]
    for child in value.children:
        lines.extend(format_value(child, depth + 1))
    lines.append(indent + closing)

    return lines


def format_message(message):
    """ Return a multi-line string describing *message*. """

    lines = [format_header(message)]

    for value in message.body:
        lines.extend(format_value(value))

    return '\n'.join(lines)


def _format_basic(value):

    label = _labels[value.tag]
    scalar = value.value

    if value.tag == fields.STRING or value.tag == fields.OBJECT_PATH:
        scalar = '"%s"' % (scalar)
    elif value.tag == fields.BOOLEAN:
        scalar = 'true' if scalar else 'false'

    return '%s %s' % (label, scalar)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
