#!

"""Activation code encoding (dmsActivateMessage).

A request to display a message is a 12 byte structure:

    offset  length  field
    0       2       duration (minutes, 65535 = indefinite)
    2       1       activation priority
    3       1       message memory type
    4       2       message number
    6       2       message CRC
    8       4       IPv4 address of the requester

The CRC lets the sign check that the message it has stored is the one
the management station means to activate.  It is the ISO/IEC 3309
(HDLC) 16 bit frame check sequence of the MULTI string octets followed
by the beacon and pixel service values, one octet each, and goes on the
wire low order byte first as HDLC transmits it.
"""

import re

import crc

from .common import *
from . import packet
from . import logging

class MessageCRC (crc.CRC, poly = 0x1021, initial = True, final = True):
    "ISO/IEC 3309 CRC-16 over the message contents"

def _octets (v):
    if isinstance (v, str):
        try:
            return v.encode ("latin1")
        except UnicodeEncodeError as e:
            raise EncodeError ("MULTI string {!r} has characters outside "
                               "latin-1: {}", v, e) from e
    return bytes (v)

def message_crc (multi, beacon = 0, pixel_service = 0):
    """Return the CRC object for a message with the given MULTI
    string (str or bytes), beacon and pixel service values.
    """
    flags = list ()
    for name, v in (("beacon", beacon), ("pixel service", pixel_service)):
        v = int (v)
        if not 0 <= v <= 255:
            raise FieldOverflow ("{} value {} does not fit in a byte", name, v)
        flags.append (v)
    return MessageCRC (_octets (multi) + bytes (flags))

_ipaddr_re = re.compile (r"(\d{1,3})\.(\d{1,3})\.(\d{1,3})\.(\d{1,3})",
                         re.ASCII)

class Ipaddr (packet.Field, bytes):
    """An IPv4 address, stored as its 4 octets.  Can be made from a
    dotted decimal string or a 4 byte string.
    """
    __slots__ = ()

    def __new__ (cls, s):
        if isinstance (s, str):
            m = _ipaddr_re.fullmatch (s)
            if not m:
                raise InvalidAddress ("Invalid IPv4 address {!r}", s)
            octets = [ int (o) for o in m.groups () ]
            if max (octets) > 255:
                raise InvalidAddress ("Invalid IPv4 address {!r}", s)
            s = bytes (octets)
        elif isinstance (s, (bytes, bytearray, memoryview)):
            s = bytes (s)
            if len (s) != 4:
                raise InvalidAddress ("Invalid IPv4 address {}", s)
        else:
            raise InvalidAddress ("Invalid IPv4 address {!r}", s)
        return bytes.__new__ (cls, s)

    def encode (self):
        return bytes (self)

    @classmethod
    def decode (cls, buf):
        if len (buf) < 4:
            logging.debug ("Not 4 bytes left for address field")
            raise MissingData
        return cls (buf[:4]), buf[4:]

    def __str__ (self):
        return ".".join (str (o) for o in self)

    def __format__ (self, format):
        return str (self)

class ActivateCode (packet.Packet):
    _layout = ((packet.B, "duration", 2),
               (packet.B, "priority", 1),
               (packet.B, "memory_type", 1),
               (packet.B, "number", 2),
               (packet.BV, "crc", 2),
               (Ipaddr, "source"))

def encode_activate_code (multi, beacon, pixel_service, memory_type,
                          duration, priority, number, requester = REQUESTER):
    """Return the activation code, as bytes, for displaying the message
    with the supplied contents that is stored at entry
    (memory_type, number) of the message table.
    """
    code = ActivateCode (duration = duration, priority = priority,
                         memory_type = memory_type, number = number,
                         crc = bytes (message_crc (multi, beacon,
                                                   pixel_service)),
                         source = requester)
    ret = code.encode ()
    logging.trace ("Activate code {}: {}", code, ret.hex ())
    return ret

def decode_activate_code (buf):
    """Decode an activation code into an ActivateCode object.
    """
    ret, buf = ActivateCode.decode (buf)
    if buf:
        logging.debug ("Unexpected data after activate code: {}", buf)
        raise ExtraData
    return ret
