""" The benchmarking client: send the same message over and over, timing
    how long it takes to duplicate the template and how long it takes to
    send each duplicate and receive the reply.

    Timings are accumulated in a :class:`Statistics` instance owned by the
    caller; nothing here keeps process-wide state.
"""

import logging
import sys
import time

from . import config
from .protocol import clone
from .transport import TransportError


log = logging.getLogger(__name__)

USEC_PER_SEC = 1000000


def now():
    """ Return the monotonic clock, in microseconds. """

    return time.monotonic_ns() // 1000


class Statistics:
    """ Counters for one benchmarking session. All times are cumulative
        and measured in microseconds.

        :ivar sent: Number of messages sent.
        :ivar received: Number of replies received.
        :ivar errors: Number of sends that failed at the transport level.
        :ivar duplicate_time: Time spent duplicating the template message.
        :ivar send_time: Time spent sending and waiting for replies.
    """

    def __init__(self, count=0):

        self.count = count
        self.start_time = now()
        self.sent = 0
        self.received = 0
        self.errors = 0
        self.duplicate_time = 0
        self.send_time = 0


    @property
    def total(self):
        return self.sent + self.received


    def elapsed(self):
        return now() - self.start_time


    def msgs_per_sec(self, elapsed=None):
        """ Return the aggregate message rate, replies included. """

        if elapsed is None:
            elapsed = self.elapsed()

        if elapsed > 0:
            return self.total * USEC_PER_SEC // elapsed

        return self.total


    def percent_done(self):
        if self.count > 0:
            return (100 * self.sent) // self.count
        return 100


# end of class Statistics



class Progress:
    """ Periodic progress reporting to *stream*, no more often than every
        *interval* seconds, and only when *verbose* is set.
    """

    def __init__(self, stats, verbose=False, interval=config.PROGRESS_INTERVAL, stream=None):

        self.stats = stats
        self.verbose = verbose
        self.interval = interval * USEC_PER_SEC
        self.stream = stream
        self.last_update = None


    def update(self):

        if not self.verbose:
            return

        stats = self.stats
        elapsed = stats.elapsed()

        if self.last_update is not None:
            if elapsed - self.last_update < self.interval:
                return

            sent = stats.sent
            if elapsed > 0:
                rate = sent * USEC_PER_SEC // elapsed
            else:
                rate = 0

            stream = self.stream or sys.stderr
            stream.write('Sent %d message%s in %d seconds (%d msgs/sec, %d%% done)\n' % (
                    sent, '' if sent == 1 else 's', elapsed // USEC_PER_SEC,
                    rate, stats.percent_done()))

        self.last_update = elapsed


# end of class Progress



def send_message(connection, message, stats, timeout=None, use_clone=False):
    """ Duplicate the template *message* and send the duplicate; a method
        call waits up to *timeout* seconds for its reply. Transport errors
        are logged and counted, never raised. Return True on success.
    """

    start = now()
    duplicate = clone.duplicate(message, use_clone)
    stats.duplicate_time += now() - start

    start = now()
    stats.sent += 1

    try:
        if duplicate.expects_reply():
            connection.call(duplicate, timeout)
            stats.received += 1
        else:
            connection.send(duplicate)
    except TransportError as error:
        log.warning('Send error %s: %s', error.__class__.__name__, error)
        stats.errors += 1
        return False
    finally:
        stats.send_time += now() - start

    return True


def run(connection, message, count, timeout=None, use_clone=False, verbose=False, stream=None):
    """ Send *message* *count* times over *connection*, returning the
        :class:`Statistics` for the run.
    """

    stats = Statistics(count)
    progress = Progress(stats, verbose, stream=stream)

    for iteration in range(count):
        send_message(connection, message, stats, timeout, use_clone)
        progress.update()

    return stats


def summary(stats, script=False, verbose=False, stdout=None, stderr=None):
    """ Print the final report. In *script* mode the figures are printed as
        shell assignments on *stdout*, and the table only goes to *stderr*
        when *verbose* is also set; otherwise the table goes to *stdout*.
    """

    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    elapsed = stats.elapsed()
    elapsed_sec = elapsed // USEC_PER_SEC
    msgs_per_sec = stats.msgs_per_sec(elapsed)

    if script:
        stdout.write('BUSPING_SENT=%d;\n'
                     'BUSPING_RECEIVED=%d;\n'
                     'BUSPING_TOTAL=%d;\n'
                     'BUSPING_TIME=%d;\n'
                     'BUSPING_TIME_SEC=%d;\n'
                     'BUSPING_MSGS_PER_SEC=%d;\n'
                     'BUSPING_DUPLICATE_TIME=%d;\n'
                     'BUSPING_SEND_TIME=%d;\n' % (
                stats.sent, stats.received, stats.total,
                elapsed, elapsed_sec, msgs_per_sec,
                stats.duplicate_time, stats.send_time))

    if not script or verbose:
        stream = stderr if script else stdout
        stream.write('sent       received   total      '
                     'time (sec)   time (usec)   msgs/sec (total) '
                     'duplicate time  send time\n'
                     '%-10d %-10d %-10d '
                     '%-12d %-13d %-16d '
                     '%-15d %d\n' % (
                stats.sent, stats.received, stats.total,
                elapsed_sec, elapsed, msgs_per_sec,
                stats.duplicate_time, stats.send_time))

    stdout.flush()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
