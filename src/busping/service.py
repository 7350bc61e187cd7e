""" The echo test service: the other end of a benchmarking run. It
    answers two methods on its object path:

    ``getEcho``
        Reply with a deep copy of whatever the call carried.

    ``getLastReply``
        Reply with a copy of the previous reply, re-addressed to the
        caller, without looking at the call's arguments at all. Before
        any reply exists this behaves like ``getEcho``.
"""

import logging

from . import config
from .protocol import clone
from .protocol import fields
from .protocol.builder import MessageBuilder


log = logging.getLogger(__name__)


class EchoService:
    """ Message handler for the echo service; register :func:`handle` for
        an object path on a transport server.

        :ivar last_reply: The most recent reply, kept until superseded.
    """

    def __init__(self):
        self.last_reply = None
        self.handled = 0


    def handle(self, message):
        """ Return the reply to *message*, or None if the member is not
            one this service implements.
        """

        if message.type != fields.METHOD_CALL:
            return None

        member = message.member

        if member == 'getLastReply':
            reply = self.echo_last_reply(message)
        elif member == 'getEcho':
            reply = self.echo(message)
        else:
            return None

        self.handled += 1
        return reply


    def echo(self, call):
        """ Reply with a clone of the arguments carried by *call*. """

        builder = MessageBuilder().reply_to(call)
        clone.append_args(call.body, builder)
        reply = builder.build()

        log.debug('echo %d value(s) with signature %r', len(reply.body), reply.signature)

        self.last_reply = reply
        return reply


    def echo_last_reply(self, call):
        """ Reply with a copy of the previous reply. """

        if self.last_reply is None:
            return self.echo(call)

        reply = clone.copy(self.last_reply)
        reply.renumber()
        reply.destination = call.sender
        reply.reply_serial = call.serial

        self.last_reply = reply
        return reply


# end of class EchoService



def serve(server, path=config.DEFAULT_PATH):
    """ Register a new :class:`EchoService` on *server* at *path* and
        handle calls until the server is shut down.
    """

    service = EchoService()
    server.register(path, service.handle)

    log.info('echo service %s listening on %s at %s', server.name, server.endpoint, path)

    try:
        server.serve_forever()
    finally:
        server.unregister(path)

    return service


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
