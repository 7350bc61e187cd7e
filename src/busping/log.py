"""
Configures the root logger with a console handler and, optionally, a
rotating file handler.

Call :func:`setup` once at startup, before any work that might log.
"""

import logging
from logging.handlers import RotatingFileHandler


FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup(level=logging.WARNING, filename=None):
    """Apply a unified log format to console and (optional) file output.

    Parameters
    ----------
    level : int
        Minimum severity level (e.g. ``logging.DEBUG``, ``logging.INFO``).
    filename : str, optional
        Also log to this file, rotated at 1 MB with 2 backups.
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(FORMAT)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)

    root.handlers.clear()
    root.addHandler(ch)

    if filename:
        fh = RotatingFileHandler(filename, maxBytes=1_000_000, backupCount=2)
        fh.setFormatter(fmt)
        root.addHandler(fh)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
