#!

"""Values exchanged with a sign through the transport.

A transport delivers loosely typed payloads.  These are turned into
instances of the tagged value classes here, and the dialogs take them
apart with the as_xxx conversion functions, which fail with WrongType
on anything other than the expected type rather than guessing.
"""

from collections import namedtuple

from .common import *

# Wire types (ASN.1 BER tags, and the SNMPv2 exception tags)
INTEGER = 0x02
OCTET_STRING = 0x04
NULL = 0x05
NO_SUCH_OBJECT = 0x80
NO_SUCH_INSTANCE = 0x81
END_OF_MIB_VIEW = 0x82

class Value (object):
    """Abstract base class for values received from or sent to a
    sign.  Subclasses define class attribute "syntax", the wire type.
    """
    __slots__ = ()
    syntax = None

class Integer (Value, int):
    __slots__ = ()
    syntax = INTEGER

class OctetString (Value, bytes):
    __slots__ = ()
    syntax = OCTET_STRING

    def __new__ (cls, v = b""):
        if isinstance (v, str):
            try:
                v = v.encode ("latin1")
            except UnicodeEncodeError as e:
                raise EncodeError ("Text {!r} has characters outside "
                                   "latin-1: {}", v, e) from e
        return bytes.__new__ (cls, v)

    def __str__ (self):
        return str (self, "latin1")

    def __repr__ (self):
        return "OctetString({})".format (bytes.__repr__ (self))

class Null (Value):
    """No value.  The subclasses are the SNMPv2 exception values, which
    a sign answers with for parameters it does not have.
    """
    __slots__ = ()
    syntax = NULL

    def __bool__ (self):
        return False

    def __eq__ (self, other):
        return type (self) is type (other)

    def __hash__ (self):
        return hash (type (self))

    def __repr__ (self):
        return self.__class__.__name__ + "()"

    __str__ = __repr__

class NoSuchObject (Null):
    __slots__ = ()
    syntax = NO_SUCH_OBJECT

class NoSuchInstance (Null):
    __slots__ = ()
    syntax = NO_SUCH_INSTANCE

class EndOfMibView (Null):
    __slots__ = ()
    syntax = END_OF_MIB_VIEW

_nulls = { c.syntax : c for c in (Null, NoSuchObject, NoSuchInstance,
                                  EndOfMibView) }

def makevalue (v):
    """Turn a payload delivered by a transport into a Value instance.
    Payloads may be Value instances already, None (no value), int,
    bytes-like, or str.
    """
    if isinstance (v, Value):
        return v
    if v is None:
        return Null ()
    if isinstance (v, bool):
        raise WrongType ("Unsupported value {!r}", v)
    if isinstance (v, int):
        return Integer (v)
    if isinstance (v, (bytes, bytearray, memoryview, str)):
        return OctetString (v)
    raise WrongType ("Unsupported value {!r}", v)

def typename (v):
    if isinstance (v, Value):
        return v.__class__.__name__
    return type (v).__name__

def as_int (v, name = "value"):
    if not isinstance (v, Integer):
        raise WrongType ("{} is {}, expecting Integer", name, typename (v))
    return int (v)

def as_bytes (v, name = "value"):
    if not isinstance (v, OctetString):
        raise WrongType ("{} is {}, expecting OctetString",
                         name, typename (v))
    return bytes (v)

def as_text (v, name = "value"):
    return str (as_bytes (v, name), "latin1")

def encodevalue (v, syntax):
    """Build the Value of wire type "syntax" for a write.
    """
    if syntax == INTEGER:
        if isinstance (v, Integer):
            return v
        if isinstance (v, int) and not isinstance (v, bool):
            return Integer (v)
    elif syntax == OCTET_STRING:
        if isinstance (v, OctetString):
            return v
        if isinstance (v, (bytes, bytearray, memoryview, str)):
            return OctetString (v)
    elif syntax in _nulls:
        if v is None:
            return _nulls[syntax] ()
    raise WrongType ("Can't encode {} as wire type {:#04x}",
                     typename (v), syntax)

class EnumValue (int):
    """An integer with symbolic names for its values.  Subclasses
    supply class attribute "names", a dict of value to name.
    """
    names = { }

    def __new__ (cls, v):
        if isinstance (v, str):
            for k, n in cls.names.items ():
                if n == v:
                    return int.__new__ (cls, k)
            raise ValueError ("Invalid {} name {}".format (cls.__name__, v))
        return int.__new__ (cls, v)

    def __str__ (self):
        try:
            return self.names[self]
        except KeyError:
            return "{}({})".format (self.__class__.__name__, int (self))

    __repr__ = __str__

    def __format__ (self, spec):
        if spec:
            return int (self).__format__ (spec)
        return str (self)

class ErrorStatus (EnumValue):
    "SNMP error-status of a response"
    names = { 0 : "noError", 1 : "tooBig", 2 : "noSuchName",
              3 : "badValue", 4 : "readOnly", 5 : "genErr",
              6 : "noAccess", 7 : "wrongType", 8 : "wrongLength",
              9 : "wrongEncoding", 10 : "wrongValue", 11 : "noCreation",
              12 : "inconsistentValue", 13 : "resourceUnavailable",
              14 : "commitFailed", 15 : "undoFailed",
              16 : "authorizationError", 17 : "notWritable",
              18 : "inconsistentName" }

NO_ERROR = ErrorStatus (0)
NO_SUCH_NAME = ErrorStatus (2)
BAD_VALUE = ErrorStatus (3)
GEN_ERR = ErrorStatus (5)

class WriteRequest (namedtuple ("WriteRequest", "name value syntax")):
    """One parameter assignment: identifier, Value, and wire type."""
    __slots__ = ()

    def __str__ (self):
        return "{} = {!r}".format (self.name, self.value)
