#!

"""Compute CRC

A general table driven CRC generator.  A particular CRC is defined by
deriving a subclass of CRC, giving the CRC parameters as class
keywords; the 256 entry lookup table for it is built once, when the
subclass is defined.

The parameter naming follows Ross Williams, "A Painless Guide to CRC
Error Detection Algorithms".
"""

import collections.abc

def _reverse (value, width):
    ret = 0
    for i in range (width):
        ret = (ret << 1) | (value & 1)
        value >>= 1
    return ret

def _maketable (poly, width, reflect):
    ret = list ()
    if reflect:
        # Reflected: bits leave the register at the bottom
        rpoly = _reverse (poly, width)
        for i in range (256):
            for j in range (8):
                if i & 1:
                    i = (i >> 1) ^ rpoly
                else:
                    i >>= 1
            ret.append (i)
    else:
        top = 1 << (width - 1)
        mask = (1 << width) - 1
        for i in range (256):
            i <<= width - 8
            for j in range (8):
                if i & top:
                    i = ((i << 1) ^ poly) & mask
                else:
                    i = (i << 1) & mask
            ret.append (i)
    return ret

class _CRCMeta (type):
    """Metaclass for CRC.  Processes the class keywords into the
    class attributes used by the update methods.
    """
    def __new__ (cls, name, bases, classdict, poly = None, initial = 0,
                 final = 0, reversed = True, width = 0):
        if not bases:
            # The CRC base class itself
            return type.__new__ (cls, name, bases, classdict)
        if poly is None:
            raise TypeError ("CRC subclass {} needs a polynomial".format (name))
        if isinstance (poly, collections.abc.Iterable):
            # Sequence of powers; the highest one is the width
            *powers, width = sorted (poly)
            poly = 0
            for p in powers:
                poly |= 1 << p
        elif width == 0:
            for width in 8, 16, 32, 64:
                if poly < (1 << width):
                    break
        if width < 8:
            raise ValueError ("CRC width must be at least 8")
        crcmask = (1 << width) - 1
        if poly > crcmask:
            raise ValueError ("Width is too small for specified polynomial")
        if initial is True:
            initial = crcmask
        if final is True:
            final = crcmask
        classdict["width"] = width
        classdict["widthb"] = (width + 7) // 8
        classdict["poly"] = poly
        classdict["initial"] = initial
        classdict["final"] = final
        classdict["crcmask"] = crcmask
        classdict["reversed"] = reversed
        classdict["crctable"] = _maketable (poly, width, reversed)
        nc = type.__new__ (cls, name, bases, classdict)
        # Find the register value left behind by running a buffer
        # followed by its own CRC through the generator.  It does not
        # depend on the data, which the second buffer confirms.
        checks = set ()
        for data in b"\x00", b"\x01\x42":
            c = nc (data)
            c.update (bytes (c))
            checks.add (c.value)
        if len (checks) != 1:
            raise RuntimeError ("Unable to find good CRC check value")
        nc.goodvalue = checks.pop ()
        return nc

    def __init__ (cls, *args, **kwds):
        pass

class CRC (metaclass = _CRCMeta):
    """Base class for defining CRC generators/checkers.  Derive a
    subclass with these keyword arguments:

    poly: the CRC polynomial, either as an integer whose bits are the
        terms other than the highest one, or as a sequence of the
        powers of the polynomial including the highest one.  Required.
    initial: initial register value, default zero.  True means all ones.
    final: value XORed into the register to give the CRC, default
        zero.  True means all ones.
    reversed: True (the default) if data bits are processed least
        significant first.
    width: CRC width in bits; may be omitted for 8, 16, 32 or 64 bit
        CRCs given as an integer polynomial.

    For example, the HDLC frame check sequence of ISO/IEC 3309:

        class FCS16 (CRC, poly = 0x1021, initial = True, final = True):
            pass
    """
    def __init__ (self, data = b""):
        if type (self) is CRC:
            raise TypeError ("Can't instantiate object of "
                             "class {}".format (self.__class__.__name__))
        self._value = self.initial
        self.update (data)

    def update (self, data):
        """Update the CRC state with the additional data supplied.
        """
        c = self._value
        table = self.crctable
        if self.reversed:
            for b in data:
                c = table[(c ^ b) & 0xff] ^ (c >> 8)
        else:
            sh = self.width - 8
            mask = self.crcmask
            for b in data:
                c = table[((c >> sh) ^ b) & 0xff] ^ ((c << 8) & mask)
        self._value = c

    @property
    def value (self):
        """The CRC of the data processed so far, as an integer."""
        return self._value ^ self.final

    def __bytes__ (self):
        """The CRC as a byte string, in the order it is transmitted."""
        if self.reversed:
            return self.value.to_bytes (self.widthb, "little")
        return self.value.to_bytes (self.widthb, "big")

    def __int__ (self):
        return self.value

    @property
    def good (self):
        """True if the data processed so far ends in the correct CRC
        for the data that precedes it.
        """
        return self.value == self.goodvalue
