#!/usr/bin/env python3

from tests.ntest import *

import crc

check = b"123456789"

class X25 (crc.CRC, poly = 0x1021, initial = True, final = True):
    pass

class CCITT (crc.CRC, poly = 0x1021, initial = True, reversed = False):
    pass

class ARC (crc.CRC, poly = 0x8005):
    pass

class KERMIT (crc.CRC, poly = (16, 12, 5, 0)):
    pass

class XMODEM (crc.CRC, poly = 0x1021, reversed = False):
    pass

class CRC8 (crc.CRC, poly = 0x07, reversed = False):
    pass

class CRC32 (crc.CRC, poly = 0x04C11DB7, initial = True, final = True):
    pass

class TestCRC (unittest.TestCase):
    def test_abc (self):
        with self.assertRaises (TypeError):
            crc.CRC ()

    def test_nopoly (self):
        with self.assertRaises (TypeError):
            class foo (crc.CRC): pass

    def test_narrow (self):
        with self.assertRaises (ValueError):
            class foo (crc.CRC, poly = 0x1021, width = 12): pass
        with self.assertRaises (ValueError):
            class bar (crc.CRC, poly = 0x3, width = 4): pass

    def test_params (self):
        self.assertEqual (X25.width, 16)
        self.assertEqual (X25.initial, 0xffff)
        self.assertEqual (X25.final, 0xffff)
        self.assertEqual (KERMIT.poly, 0x1021)
        self.assertEqual (KERMIT.width, 16)
        self.assertEqual (KERMIT.crctable, X25.crctable)
        self.assertEqual (CRC8.width, 8)
        self.assertEqual (CRC32.width, 32)

    def test_check (self):
        for cls, v in ((X25, 0x906e), (CCITT, 0x29b1), (ARC, 0xbb3d),
                       (KERMIT, 0x2189), (XMODEM, 0x31c3), (CRC8, 0xf4),
                       (CRC32, 0xcbf43926)):
            with self.subTest (crc = cls.__name__):
                c = cls (check)
                self.assertEqual (c.value, v)
                self.assertEqual (int (c), v)

    def test_update (self):
        c = X25 ()
        self.assertEqual (c.value, 0)
        for b in check:
            c.update (bytes ([ b ]))
        self.assertEqual (c.value, 0x906e)
        c = X25 (check[:4])
        c.update (check[4:])
        self.assertEqual (c.value, 0x906e)

    def test_bytes (self):
        # Reflected CRCs go low byte first, the others high byte first
        self.assertEqual (bytes (X25 (check)), b"\x6e\x90")
        self.assertEqual (bytes (XMODEM (check)), b"\x31\xc3")
        self.assertEqual (bytes (CRC32 (check)), b"\x26\x39\xf4\xcb")
        self.assertEqual (bytes (CRC8 (check)), b"\xf4")

    def test_good (self):
        for cls in X25, CCITT, ARC, KERMIT, XMODEM, CRC8, CRC32:
            with self.subTest (crc = cls.__name__):
                c = cls (check)
                self.assertFalse (c.good)
                c.update (bytes (cls (check)))
                self.assertTrue (c.good)
        self.assertEqual (X25.goodvalue, 0x0f47)
        self.assertEqual (XMODEM.goodvalue, 0)
        c = X25 (check + b"\x6e\x91")
        self.assertFalse (c.good)

if __name__ == "__main__":
    unittest.main ()
