#!

"""Transport interface for talking to a sign.

The request/response protocol itself (normally SNMP) is supplied by
the user as a Transport subclass.  The dialogs only use it through
the read, read_one and write functions here, which normalize what
comes back.
"""

from abc import abstractmethod, ABCMeta
import importlib

from .common import *
from .values import *
from . import logging

class Transport (metaclass = ABCMeta):
    """Abstract base class for a transport to one sign.

    Failures to get a response at all should be reported by raising
    TransportError (OSError is accepted too, and converted).
    """
    @abstractmethod
    def connect (self):
        """Establish the session, if needed.  Called at the start of
        every dialog, so it must be harmless to call it again.
        """

    @abstractmethod
    def get (self, names):
        """Read the parameters whose identifiers are in the sequence
        "names".  Returns a mapping of identifier to value.  Values may
        be Value instances or plain int, bytes, str or None.
        """

    @abstractmethod
    def set (self, requests):
        """Write the supplied sequence of WriteRequest items as a
        single request.  Returns the error status of the response
        (an int, 0 meaning noError).
        """

def _call (method, *args):
    try:
        return method (*args)
    except NtcipException:
        raise
    except OSError as e:
        raise TransportError ("{}", e) from e

def connect (transport):
    _call (transport.connect)

def read (transport, names):
    """Read the listed parameters as one request.  Returns a dict of
    identifier to Value, with an entry for every requested name.
    """
    names = list (names)
    if logging.tracing:
        logging.trace ("get {}", ", ".join (names))
    results = _call (transport.get, names)
    ret = dict ()
    for name, v in results.items ():
        if name not in names:
            logging.debug ("Unexpected result {} in response", name)
            raise MissingResult ("no available results")
        ret[name] = makevalue (v)
    for name in names:
        if name not in ret:
            logging.debug ("No result for {} in response", name)
            raise MissingResult ("no available results")
    return ret

def read_one (transport, name):
    """Read a single parameter.  If the answer is empty, ask once more.
    """
    v = read (transport, [ name ])[name]
    if isinstance (v, Null):
        logging.trace ("Empty value for {}, retrying", name)
        v = read (transport, [ name ])[name]
    return v

def write (transport, requests):
    """Write the supplied WriteRequest items as one request, and
    return the response error status.
    """
    requests = list (requests)
    if logging.tracing:
        logging.trace ("set {}", ", ".join (str (r) for r in requests))
    status = ErrorStatus (_call (transport.set, requests))
    if status != NO_ERROR:
        logging.debug ("Set response error status {}", status)
    return status

def load_factory (spec):
    """Find the transport factory named by "spec", in the form
    "module:callable".
    """
    modname, sep, attr = spec.partition (":")
    if not sep or not modname or not attr:
        raise ValueError ("Transport must be given as module:callable")
    mod = importlib.import_module (modname)
    f = mod
    for a in attr.split ("."):
        f = getattr (f, a)
    if not callable (f):
        raise ValueError ("{} is not callable".format (spec))
    return f
