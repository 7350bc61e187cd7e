""" Command-line entry points for the benchmarking client (``busping``)
    and the echo test service (``busping-service``).
"""

import argparse
import logging
import sys

from . import config
from . import log
from . import ping
from . import service
from .protocol import factory
from .protocol import fields
from .protocol import printer
from .protocol.errors import MarshalError
from .transport import TransportError
from .transport.zmq.request import Client, Server


def fatal(prog, text):
    sys.stderr.write('%s: ERROR: %s\n' % (prog, text))
    return 1


def positive(text):
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError('must be at least 1, not %d' % (value))
    return value


def non_negative(text):
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError('must not be negative, not %d' % (value))
    return value


def ping_parser():

    parser = argparse.ArgumentParser(
        prog='busping',
        description='Send a message repeatedly over a message bus and report timing statistics.',
        epilog='Each INPUT is a TYPE[:VALUE][:...] expression, for example '
               'string:hello, array:uint16:1,2,3, struct:int32:7:string:hi, '
               'dict:int32:string:1,one,2,two, or variant:boolean:true.'
    )
    parser.add_argument('inputs', metavar='INPUT', nargs='*',
        help='Value to append to the message body')
    parser.add_argument('-t', '--type', default=fields.METHOD_CALL,
        help='Message type, method_call or signal (default: %(default)s)')
    parser.add_argument('-d', '--destination', default=config.DEFAULT_NAME,
        help='Destination name for method calls (default: %(default)s)')
    parser.add_argument('-p', '--path', default=config.DEFAULT_PATH,
        help='Object path (default: %(default)s)')
    parser.add_argument('-i', '--interface', default=config.DEFAULT_INTERFACE,
        help='Interface name (default: %(default)s)')
    parser.add_argument('-m', '--member', default=config.DEFAULT_MEMBER,
        help='Method or signal name (default: %(default)s)')
    parser.add_argument('-c', '--count', type=non_negative, default=1,
        help='Number of messages to send (default: %(default)s)')
    parser.add_argument('-r', '--reply-timeout', type=int, default=-1,
        help='Reply timeout in milliseconds; negative for the default of %d' % (config.DEFAULT_TIMEOUT))
    parser.add_argument('--clone', action='store_true',
        help='Duplicate the message by walking its contents instead of copying it')
    parser.add_argument('-x', '--contents-multiply', type=positive, default=1,
        help='Repeat the message contents this many times inside an array (default: %(default)s)')
    parser.add_argument('-v', '--verbose', action='store_true',
        help='Print the message, progress, and the summary table')
    parser.add_argument('-b', '--bash', action='store_true',
        help='Print the summary as shell variable assignments')
    parser.add_argument('--system', action='store_true',
        help='Use the system bus instead of the session bus')
    parser.add_argument('-a', '--address', default=None,
        help='Connect to this endpoint instead of a well-known bus')
    parser.add_argument('--log-file', default=None,
        help='Also write log messages to this file')

    return parser


def service_parser():

    parser = argparse.ArgumentParser(
        prog='busping-service',
        description='Echo test service answering getEcho and getLastReply.'
    )
    parser.add_argument('-n', '--name', default=config.DEFAULT_NAME,
        help='Name to serve (default: %(default)s)')
    parser.add_argument('-p', '--path', default=config.DEFAULT_PATH,
        help='Object path to serve (default: %(default)s)')
    parser.add_argument('--system', action='store_true',
        help='Listen on the system bus endpoint instead of the session bus')
    parser.add_argument('-a', '--address', default=None,
        help='Listen on this endpoint instead of a well-known bus')
    parser.add_argument('-v', '--verbose', action='store_true',
        help='Log every message handled')
    parser.add_argument('--log-file', default=None,
        help='Also write log messages to this file')

    return parser


def ping_main(argv=None):

    args = ping_parser().parse_args(argv)
    prog = 'busping'

    log.setup(logging.INFO if args.verbose else logging.WARNING, args.log_file)

    try:
        message = factory.message(args.type, args.destination, args.path,
                                  args.interface, args.member, args.inputs,
                                  args.contents_multiply)
    except (MarshalError, ValueError) as error:
        return fatal(prog, error)

    if args.verbose:
        sys.stderr.write(printer.format_message(message) + '\n')

    if args.reply_timeout < 0:
        timeout = config.DEFAULT_TIMEOUT / 1000
    else:
        timeout = args.reply_timeout / 1000

    endpoint = config.endpoint(args.system, args.address)
    client = Client(endpoint)

    try:
        client.open()
    except TransportError as error:
        label = config.bus_label(args.system, args.address)
        return fatal(prog, "Failed to open connection to '%s' message bus: %s" % (label, error))

    try:
        stats = ping.run(client, message, args.count, timeout, args.clone, args.verbose)
    finally:
        client.close()

    ping.summary(stats, args.bash, args.verbose)
    return 0


def service_main(argv=None):

    args = service_parser().parse_args(argv)
    prog = 'busping-service'

    log.setup(logging.DEBUG if args.verbose else logging.INFO, args.log_file)

    endpoint = config.endpoint(args.system, args.address)

    try:
        server = Server(endpoint, args.name)
    except TransportError as error:
        return fatal(prog, "Failed to get bus name '%s': %s" % (args.name, error))

    try:
        service.serve(server, args.path)
    except KeyboardInterrupt:
        pass
    finally:
        server.close()

    return 0


if __name__ == '__main__':
    sys.exit(ping_main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
