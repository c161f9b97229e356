#!

"""Classes for fixed layout binary records.

A record type is a subclass of Packet whose "_layout" lists its
fields in wire order.  NTCIP encodes multi-byte integers big-endian,
so that is what the integer field here does.
"""

import abc

from .common import *
from . import logging

class InvalidField (NtcipException):
    """Invalid field descriptor."""

def maxint (flen):
    return (1 << (flen * 8)) - 1

class Field:
    """Abstract base class for fields in a Packet.

    A field type has a second base class for its Python data type (int
    for B, bytes for BV).  It defines an encode method, taking the
    arguments given for it in the layout, that returns the field as a
    byte string, and a decode classmethod that takes a buffer plus the
    same arguments, and returns the field value and the rest of the
    buffer.
    """
    __slots__ = ()

    @abc.abstractmethod
    def encode (self):
        pass

    @classmethod
    def checktype (cls, name, val):
        """Called prior to encoding the value.  "val" may be an
        instance of cls, something to convert to one, or None if the
        field was not supplied, which is an error.
        """
        if isinstance (val, cls):
            return val
        if val is None:
            raise EncodeError ("Field {} not set", name)
        try:
            return cls (val)
        except (TypeError, ValueError) as e:
            raise EncodeError ("Field {}: {}", name, e) from None

    @classmethod
    @abc.abstractmethod
    def decode (cls, buf):
        pass

class B (Field, int):
    "An unsigned integer of fixed length, big-endian"
    __slots__ = ()

    def encode (self, flen):
        if not 0 <= self <= maxint (flen):
            logging.debug ("Value {} does not fit {} byte field", int (self), flen)
            raise FieldOverflow ("Value {} does not fit {} byte field",
                                 int (self), flen)
        return self.to_bytes (flen, "big")

    @classmethod
    def decode (cls, buf, flen):
        if len (buf) < flen:
            logging.debug ("Not {} bytes left for integer field", flen)
            raise MissingData
        return cls (int.from_bytes (buf[:flen], "big")), buf[flen:]

class BV (Field, bytes):
    "A byte string of fixed length"
    __slots__ = ()

    def encode (self, flen):
        if len (self) != flen:
            raise FieldOverflow ("Value length {} for {} byte field",
                                 len (self), flen)
        return bytes (self)

    @classmethod
    def decode (cls, buf, flen):
        if len (buf) < flen:
            logging.debug ("Not {} bytes left for byte string field", flen)
            raise MissingData
        return cls (buf[:flen]), buf[flen:]

    def __format__ (self, format):
        return "".join ("{:02X}".format (i) for i in self)

class packet_encoding_meta (type):
    """Metaclass for "Packet" that turns the "_layout" class attribute
    into the encode/decode table "_codetable", and the field names into
    "__slots__".

    Each layout row is a tuple of field type, field name, and any
    further arguments for the field's encode and decode methods.
    """
    def __new__ (cls, name, bases, classdict):
        packetbase = None
        for b in bases:
            if isinstance (b, cls):
                assert packetbase is None, "Multiple Packet base classes"
                packetbase = b
        if packetbase is None:
            return type.__new__ (cls, name, bases, classdict)
        allslots = list (packetbase._allslots)
        codetable = list (packetbase._codetable)
        slots = list ()
        for ftype, fname, *args in classdict.get ("_layout", ()):
            if not (isinstance (ftype, type) and issubclass (ftype, Field)):
                raise InvalidField ("Invalid field type {}", ftype)
            if fname in allslots:
                raise InvalidField ("Duplicate field {} in layout", fname)
            codetable.append ((ftype, fname, tuple (args)))
            allslots.append (fname)
            slots.append (fname)
        if not codetable:
            raise InvalidField ("Required attribute '_layout' "
                                "not defined in class '{}'", name)
        classdict["__slots__"] = tuple (slots)
        classdict["_codetable"] = tuple (codetable)
        classdict["_allslots"] = tuple (allslots)
        return type.__new__ (cls, name, bases, classdict)

class Packet (Field, metaclass = packet_encoding_meta):
    """Base class for fixed layout records.

    The "_layout" class attribute is a sequence of tuples: field
    class, field name, then the field length.

    B: unsigned integer, big-endian, of the given length in bytes.
    Encoding a value that doesn't fit raises FieldOverflow.

    BV: byte string of exactly the given length.

    Other Field subclasses may be used if they follow the same
    conventions.
    """
    __slots__ = _allslots = ()
    _codetable = ()

    def __new__ (cls, buf = None, **kwargs):
        if cls is __class__:
            raise TypeError ("Can't instantiate object of "
                             "class {}".format (cls.__name__))
        if buf:
            ret, buf = cls.decode (buf)
            if buf:
                logging.debug ("Unexpected data for {} after parse: {}",
                               cls.__name__, bytes (buf))
                raise ExtraData
            return ret
        return super (__class__, cls).__new__ (cls)

    def __init__ (self, buf = None, **kwargs):
        """Initialize a Packet object.  If "buf" is supplied, the
        object was decoded from it (by __new__).  Keyword arguments
        set the fields of those names.
        """
        super ().__init__ ()
        for k, v in kwargs.items ():
            setattr (self, k, v)

    def encode (self):
        """Encode the record according to the current field values.
        """
        data = [ ]
        for ftype, fname, args in self._codetable:
            val = ftype.checktype (fname, getattr (self, fname, None))
            data.append (val.encode (*args))
        return b"".join (data)

    @classmethod
    def decode (cls, buf):
        """Decode a buffer, returning the resulting Packet instance
        and the rest of the buffer.
        """
        ret = cls ()
        buf = bytes (buf)
        for ftype, fname, args in cls._codetable:
            val, buf = ftype.decode (buf, *args)
            setattr (ret, fname, val)
        return ret, buf

    def __bytes__ (self):
        return self.encode ()

    def __len__ (self):
        return len (bytes (self))

    def __bool__ (self):
        return True

    def __iter__ (self):
        return iter (bytes (self))

    def format (self):
        ret = list ()
        for a in self._allslots:
            v = getattr (self, a, None)
            if v is not None:
                ret.append ("{}={}".format (a, v))
        return "{}({})".format (self.__class__.__name__, ", ".join (ret))

    def __str__ (self):
        return self.format ()

    __repr__ = __str__

    def __eq__ (self, other):
        return bytes (self) == bytes (other)

    def __ne__ (self, other):
        return bytes (self) != bytes (other)

    __hash__ = None
