#!

"""Bounded polling of a single parameter.

"""

import time

from .common import *
from . import transport
from . import logging

def poll (tport, name, predicate, attempts = VALIDATE_ATTEMPTS,
          interval = VALIDATE_INTERVAL):
    """Read parameter "name" until predicate (value) is true, and
    return that value.  At most "attempts" reads are made, with
    "interval" seconds between them.  If the predicate never holds,
    PollTimeout is raised; its "value" attribute is the last value
    read.  Errors from the reads are not retried.
    """
    if attempts < 1:
        raise ValueError ("attempts must be at least 1")
    for attempt in range (1, attempts + 1):
        value = transport.read_one (tport, name)
        if predicate (value):
            logging.trace ("Poll of {} done after {} attempts", name, attempt)
            return value
        if attempt < attempts:
            time.sleep (interval)
    logging.debug ("Poll of {} timed out, last value {}", name, value)
    raise PollTimeout ("{} not reached after {} attempts", name, attempts,
                       value = value, attempts = attempts)
