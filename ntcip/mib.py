#!

"""NTCIP 1203 parameter catalogue.

The dialogs address sign parameters (MIB objects) through a Catalogue,
an immutable mapping from parameter name to Parameter.  The standard
catalogue "dms" is built when this module is loaded; dialogs are
handed a catalogue rather than reaching for this one, so a test can
substitute its own.
"""

import collections.abc
import types

from .common import *
from .values import *

READ_ONLY = "read-only"
READ_WRITE = "read-write"

MANDATORY = "mandatory"
OPTIONAL = "optional"

# Object identifier prefixes
DMS = "1.3.6.1.4.1.1206.4.2.3"
DMSMESSAGE = DMS + ".5"
DMSMESSAGEENTRY = DMSMESSAGE + ".8.1"
SIGNCONTROL = DMS + ".6"
STATERROR = DMS + ".9.7"

class MessageStatus (EnumValue):
    "dmsMessageStatus: state of a message table entry"
    names = { 1 : "notUsed", 2 : "modifying", 3 : "validating",
              4 : "valid", 5 : "error", 6 : "modifyReq",
              7 : "validateReq", 8 : "notUsedReq" }

NOT_USED = MessageStatus (1)
MODIFYING = MessageStatus (2)
VALIDATING = MessageStatus (3)
VALID = MessageStatus (4)
ERROR = MessageStatus (5)
MODIFY_REQ = MessageStatus (6)
VALIDATE_REQ = MessageStatus (7)
NOT_USED_REQ = MessageStatus (8)

class MemoryType (EnumValue):
    "dmsMessageMemoryType: first index of the message table"
    names = { 1 : "other", 2 : "permanent", 3 : "changeable",
              4 : "volatile", 5 : "currentBuffer", 6 : "schedule",
              7 : "blank" }

class ValidateError (EnumValue):
    names = { 1 : "other", 2 : "none", 3 : "beacons",
              4 : "pixelService", 5 : "syntaxMULTI" }

class ActivateError (EnumValue):
    names = { 1 : "other", 2 : "none", 3 : "priority",
              4 : "messageStatus", 5 : "messageMemoryType",
              6 : "messageNumber", 7 : "messageCRC", 8 : "syntaxMULTI",
              9 : "localMode", 10 : "centralMode", 11 : "centralOverride" }

class MultiSyntaxError (EnumValue):
    names = { 1 : "other", 2 : "none", 3 : "unsupportedTag",
              4 : "unsupportedTagValue", 5 : "textTooBig",
              6 : "fontNotDefined", 7 : "characterNotDefined",
              8 : "fieldDeviceNotExist", 9 : "fieldDeviceError",
              10 : "flashRegionError", 11 : "tagConflict",
              12 : "tooManyPages", 13 : "fontVersionID",
              14 : "graphicID", 15 : "graphicNotDefined" }

# shortErrorStatus bit positions.  Bit 0 is reserved.
SHORT_ERRORS = { 1 : "communications", 2 : "power", 3 : "attachedDevice",
                 4 : "lamp", 5 : "pixel", 6 : "photocell", 7 : "message",
                 8 : "controller", 9 : "temperature",
                 10 : "climateControl", 11 : "criticalTemperature",
                 12 : "drumRotor", 13 : "doorOpen", 14 : "humidity" }

class Parameter (object):
    """A read-only sign parameter.

    "indices" is the number of index values the identifier takes: 0 for
    a scalar (identifier ends in .0), 2 for message table columns
    (memory type and message number).  "values" is an EnumValue class
    for enumerated parameters, "bits" a dict of bit number to name for
    bitmaps.
    """
    access = READ_ONLY

    def __init__ (self, name, oid, syntax, indices = 0, values = None,
                  bits = None, status = MANDATORY):
        self.name = name
        self.oid = oid
        self.syntax = syntax
        self.indices = indices
        self.values = values
        self.bits = bits
        self.status = status

    def identifier (self, *index):
        if len (index) != self.indices:
            raise TypeError ("{} takes {} index values, {} given"
                             .format (self.name, self.indices, len (index)))
        if not index:
            return self.oid + ".0"
        return ".".join ([ self.oid ] + [ str (int (i)) for i in index ])

    def format (self, value):
        """Convert a value of this parameter to its display form.
        """
        if self.bits is not None:
            v = as_int (value, self.name)
            ret = list ()
            b = 0
            while v:
                if v & 1:
                    ret.append (self.bits.get (b, "bit{}".format (b)))
                v >>= 1
                b += 1
            return ret
        if self.values is not None:
            return self.values (as_int (value, self.name))
        if self.syntax == OCTET_STRING:
            return as_text (value, self.name)
        return value

    def __str__ (self):
        return self.name

    def __repr__ (self):
        return "{}({}, {})".format (self.__class__.__name__,
                                    self.name, self.oid)

class WritableParameter (Parameter):
    "A read-write sign parameter"
    access = READ_WRITE

    def write (self, value, *index):
        """Return the WriteRequest that sets this parameter to "value".
        """
        return WriteRequest (self.identifier (*index),
                             encodevalue (value, self.syntax), self.syntax)

class Catalogue (collections.abc.Mapping):
    """Immutable mapping of parameter name to Parameter.  Entries are
    also available as attributes.
    """
    def __init__ (self, params):
        params = { p.name : p for p in params }
        self._params = types.MappingProxyType (params)

    def __getitem__ (self, name):
        return self._params[name]

    def __iter__ (self):
        return iter (self._params)

    def __len__ (self):
        return len (self._params)

    def __getattr__ (self, name):
        if name.startswith ("_"):
            raise AttributeError (name)
        try:
            return self._params[name]
        except KeyError:
            raise AttributeError (name) from None

    def __setattr__ (self, name, value):
        if name != "_params" or "_params" in self.__dict__:
            raise AttributeError ("Catalogue is read-only")
        super ().__setattr__ (name, value)

dms = Catalogue ((
    WritableParameter ("dmsMessageMultiString", DMSMESSAGEENTRY + ".3",
                       OCTET_STRING, 2),
    WritableParameter ("dmsMessageOwner", DMSMESSAGEENTRY + ".4",
                       OCTET_STRING, 2),
    Parameter ("dmsMessageCRC", DMSMESSAGEENTRY + ".5", INTEGER, 2),
    WritableParameter ("dmsMessageBeacon", DMSMESSAGEENTRY + ".6",
                       INTEGER, 2, status = OPTIONAL),
    WritableParameter ("dmsMessagePixelService", DMSMESSAGEENTRY + ".7",
                       INTEGER, 2, status = OPTIONAL),
    WritableParameter ("dmsMessageRunTimePriority", DMSMESSAGEENTRY + ".8",
                       INTEGER, 2),
    WritableParameter ("dmsMessageStatus", DMSMESSAGEENTRY + ".9",
                       INTEGER, 2, values = MessageStatus),
    Parameter ("dmsValidateMessageError", DMSMESSAGE + ".9", INTEGER,
               values = ValidateError),
    WritableParameter ("dmsActivateMessage", SIGNCONTROL + ".3",
                       OCTET_STRING),
    Parameter ("dmsActivateMsgError", SIGNCONTROL + ".17", INTEGER,
               values = ActivateError),
    Parameter ("dmsMultiSyntaxError", SIGNCONTROL + ".18", INTEGER,
               values = MultiSyntaxError),
    Parameter ("dmsMultiSyntaxErrorPosition", SIGNCONTROL + ".19", INTEGER),
    Parameter ("dmsMultiOtherErrorDescription", SIGNCONTROL + ".20",
               OCTET_STRING),
    Parameter ("dmsActivateErrorMsgCode", SIGNCONTROL + ".24",
               OCTET_STRING),
    Parameter ("shortErrorStatus", STATERROR + ".1", INTEGER,
               bits = SHORT_ERRORS),
    ))
