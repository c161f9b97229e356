#!/usr/bin/env python3

from tests.ntest import *

from ntcip import packet

class alltypes (packet.Packet):
    _layout = ((packet.B, "int2", 2),
               (packet.B, "int1", 1),
               (packet.BV, "byte3", 3),
               (packet.B, "int4", 4))

class moretypes (alltypes):
    _layout = ((packet.B, "extra", 1),)

testdata = b"\x01\x02\x03abc\x00\x01\x00\x05"

class TestPacket (NtTest):
    def test_abc (self):
        # Can't instantiate the Packet base class
        with self.assertRaises (TypeError):
            a = packet.Packet ()

    def test_nolayout (self):
        with self.assertRaises (packet.InvalidField):
            class foo (packet.Packet): pass

    def test_badlayout1 (self):
        with self.assertRaises (packet.InvalidField):
            class foo (packet.Packet): _layout = ((int, "name", 1),)

    def test_badlayout2 (self):
        # Can't have a duplicate field name
        with self.assertRaises (packet.InvalidField):
            class foo (packet.Packet):
                _layout = ((packet.B, "dupname", 2),
                           (packet.B, "dupname", 2))

    def test_badlayout3 (self):
        # Can't redefine a field from a base class
        with self.assertRaises (packet.InvalidField):
            class bar (alltypes):
                _layout = ((packet.B, "int1", 2),)

    def test_decode (self):
        a = alltypes (testdata)
        self.assertEqual (a.int2, 258)
        self.assertEqual (a.int1, 3)
        self.assertEqual (a.byte3, b"abc")
        self.assertEqual (a.int4, 65541)
        self.assertIsInstance (a.int2, packet.B)
        self.assertEqual (bytes (a), testdata)
        self.assertEqual (len (a), 10)

    def test_decode_rest (self):
        a, rest = alltypes.decode (testdata + b"xyz")
        self.assertEqual (a.int4, 65541)
        self.assertEqual (rest, b"xyz")

    def test_encode (self):
        a = alltypes (int2 = 0xffff, int1 = 0, byte3 = b"xyz", int4 = 7)
        self.assertEqual (bytes (a), b"\xff\xff\x00xyz\x00\x00\x00\x07")

    def test_inherit (self):
        a = moretypes (testdata + b"\x2a")
        self.assertEqual (a.int1, 3)
        self.assertEqual (a.extra, 42)
        self.assertEqual (moretypes._allslots,
                          ("int2", "int1", "byte3", "int4", "extra"))

    def test_short (self):
        for l in range (len (testdata)):
            with self.assertRaises (MissingData):
                alltypes (testdata[:l] or b"\x00")

    def test_extra (self):
        with self.assertRaises (ExtraData):
            alltypes (testdata + b"\x00")

    def test_overflow (self):
        a = alltypes (int2 = 65536, int1 = 0, byte3 = b"xyz", int4 = 7)
        with self.assertRaises (FieldOverflow):
            bytes (a)
        a = alltypes (int2 = -1, int1 = 0, byte3 = b"xyz", int4 = 7)
        with self.assertRaises (FieldOverflow):
            bytes (a)
        a = alltypes (int2 = 1, int1 = 0, byte3 = b"wxyz", int4 = 7)
        with self.assertRaises (FieldOverflow):
            bytes (a)

    def test_missing (self):
        a = alltypes (int2 = 1, byte3 = b"xyz", int4 = 7)
        with self.assertRaises (EncodeError):
            bytes (a)
        a = alltypes (int2 = "junk", int1 = 0, byte3 = b"xyz", int4 = 7)
        with self.assertRaises (EncodeError):
            bytes (a)

    def test_eq (self):
        a = alltypes (testdata)
        b = alltypes (int2 = 258, int1 = 3, byte3 = b"abc", int4 = 65541)
        self.assertEqual (a, b)
        b.int1 = 4
        self.assertNotEqual (a, b)

    def test_format (self):
        a = alltypes (testdata)
        self.assertEqual (str (a), "alltypes(int2=258, int1=3, "
                          "byte3=616263, int4=65541)")

if __name__ == "__main__":
    unittest.main ()
