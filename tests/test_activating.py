#!/usr/bin/env python3

from tests.ntest import *

from ntcip.sign import Sign

MULTI = entry ("dmsMessageMultiString", 4, 5)
BEACON = entry ("dmsMessageBeacon", 4, 5)
PIXEL = entry ("dmsMessagePixelService", 4, 5)
ACTIVATE = mib.dms.dmsActivateMessage.identifier ()
ERRORS = mib.dms.shortErrorStatus.identifier ()

fixture = bytes.fromhex ("010B3704000595F96708090A")

class TestActivating (NtTest):
    def setUp (self):
        super ().setUp ()
        self.t = FakeTransport ({ MULTI : b"[jp3]TEST [fl]Flashing[/fl]",
                                  BEACON : 0, PIXEL : 0, ERRORS : 0 })
        self.sign = Sign (self.t, dconfig = self.dialogconfig (
            requester = "103.8.9.10"))

    def activate (self):
        return self.sign.activate (4, 5, 267, 55)

    def test_activate (self):
        code = self.activate ()
        self.assertEqual (bytes (code), fixture)
        self.assertEqual (code.number, 5)
        self.assertEqual (self.t.gets (), [ (MULTI, BEACON, PIXEL),
                                            (ERRORS,) ])
        self.assertEqual (self.t.sets (), [ ((ACTIVATE, fixture),) ])
        self.assertIsInstance (self.t.values[ACTIVATE], OctetString)
        self.assertDebug ("activated")

    def test_flags (self):
        self.t.values[BEACON] = 1
        code = self.activate ()
        self.assertEqual (code.crc, b"\x4d\xe0")
        self.t.values[BEACON] = 0
        self.t.values[PIXEL] = 1
        code = self.activate ()
        self.assertEqual (code.crc, b"\x1c\xe8")

    def test_default_requester (self):
        sign = Sign (self.t)
        code = sign.activate (4, 5, 267, 55)
        self.assertEqual (str (code.source), "127.0.0.1")

    def test_empty_errors (self):
        # No value for shortErrorStatus (after one retry) counts as
        # no errors
        self.t.values[ERRORS] = None
        code = self.activate ()
        self.assertEqual (bytes (code), fixture)
        self.assertEqual (self.t.gets (ERRORS), 2)

    def test_blocked (self):
        self.t.values[ERRORS] = 1 << 11
        with self.assertRaises (ActivationBlocked) as e:
            self.activate ()
        x = e.exception
        self.assertEqual (x.errors, [ "criticalTemperature" ])
        self.assertIsInstance (x, DeviceCondition)
        self.assertEqual (x.step, "activate message")
        self.assertEqual (str (x),
                          "activate message failed: criticalTemperature")
        # The code was sent anyway
        self.assertEqual (len (self.t.sets ()), 1)

    def test_several_errors (self):
        self.t.values[ERRORS] = (1 << 4) | (1 << 13)
        with self.assertRaises (ActivationBlocked) as e:
            self.activate ()
        self.assertEqual (e.exception.errors, [ "lamp", "doorOpen" ])

    def test_refused (self):
        self.t.setstatus[ACTIVATE] = 5
        with self.assertRaises (ActivateFailed) as e:
            self.activate ()
        x = e.exception
        self.assertEqual (x.status, GEN_ERR)
        self.assertIsInstance (x, DiagnosisNotPerformed)
        self.assertEqual (x.step, "activate message")
        self.assertIn ("genErr", str (x))
        self.assertEqual (self.t.gets (ERRORS), 0)

    def test_missing (self):
        del self.t.values[PIXEL]
        with self.assertRaises (MissingResult) as e:
            self.activate ()
        self.assertEqual (e.exception.step, "get message")
        self.assertEqual (self.t.sets (), [ ])

    def test_unsupported_flags (self):
        # Signs without beacons or pixel service answer with exception
        # values; the code is computed with 0 for them
        self.t.values[BEACON] = NoSuchInstance ()
        self.t.values[PIXEL] = NoSuchObject ()
        code = self.activate ()
        self.assertEqual (bytes (code), fixture)
        self.assertEqual (self.t.sets (), [ ((ACTIVATE, fixture),) ])
        self.assertDebug ("not supported")

    def test_wrong_type (self):
        self.t.values[BEACON] = b"\x00"
        with self.assertRaises (WrongType) as e:
            self.activate ()
        self.assertEqual (e.exception.step, "get message")
        self.assertEqual (self.t.sets (), [ ])

    def test_bad_requester (self):
        cfg = self.dialogconfig (requester = "1.2.3")
        with self.assertRaises (InvalidAddress) as e:
            Sign (self.t, dconfig = cfg).activate (4, 5, 267, 55)
        self.assertEqual (e.exception.step, "encode activate message")
        self.assertEqual (self.t.sets (), [ ])

    def test_overflow (self):
        with self.assertRaises (FieldOverflow) as e:
            self.sign.activate (4, 5, 70000, 55)
        self.assertEqual (e.exception.step, "encode activate message")

if __name__ == "__main__":
    unittest.main ()
