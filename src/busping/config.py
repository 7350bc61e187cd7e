""" Configuration defaults, and the environment variables that override
    them. Command-line arguments in turn override both; see :mod:`cli`.
"""

import os


DEFAULT_NAME = 'com.bmw.Test'
DEFAULT_PATH = '/com/bmw/Test'
DEFAULT_INTERFACE = 'com.bmw.Test'
DEFAULT_MEMBER = 'getEcho'

# The default reply timeout, in milliseconds.

DEFAULT_TIMEOUT = 25000

# Progress is reported no more often than this many seconds.

PROGRESS_INTERVAL = 2

SESSION_ENDPOINT = 'tcp://127.0.0.1:10079'
SYSTEM_ENDPOINT = 'tcp://127.0.0.1:10080'

SESSION_VARIABLE = 'BUSPING_SESSION_BUS_ADDRESS'
SYSTEM_VARIABLE = 'BUSPING_SYSTEM_BUS_ADDRESS'


def endpoint(system=False, address=None):
    """ Return the endpoint to connect to or listen on. An explicit
        *address* always wins; otherwise the environment variable for the
        requested bus is consulted, falling back to the built-in default.
    """

    if address:
        return address

    if system:
        return os.environ.get(SYSTEM_VARIABLE) or SYSTEM_ENDPOINT

    return os.environ.get(SESSION_VARIABLE) or SESSION_ENDPOINT


def bus_label(system=False, address=None):
    """ Return a short description of the bus, for error messages. """

    if address:
        return address
    if system:
        return 'system'
    return 'session'


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
