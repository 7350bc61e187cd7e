import pytest
import threading

import busping
from busping.transport.zmq.request import Server


@pytest.fixture
def echo_service():
    """ Run an echo service on an ephemeral local port, in a background
        thread, for the duration of a single test. The fixture value is
        the (server, service) pair; the server's endpoint attribute has
        the actual port filled in.
    """

    server = Server('tcp://127.0.0.1:*', busping.config.DEFAULT_NAME)
    service = busping.service.EchoService()
    server.register(busping.config.DEFAULT_PATH, service.handle)

    thread = threading.Thread(target=server.serve_forever, args=(0.05,))
    thread.daemon = True
    thread.start()

    yield server, service

    # The socket belongs to the service thread until it exits.

    server.shutdown = True
    thread.join()
    server.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
