#!/usr/bin/env python3

from tests.ntest import *

import tempfile

class TestConfig (NtTest):
    def setUp (self):
        super ().setUp ()
        self.tmp = tempfile.TemporaryDirectory ()

    def tearDown (self):
        self.tmp.cleanup ()
        super ().tearDown ()

    def cfile (self, text, name = "ntcip.conf"):
        fn = os.path.join (self.tmp.name, name)
        with open (fn, "wt") as f:
            f.write (text)
        return fn

    def config (self, text):
        return config.Config (open (self.cfile (text), "rt"))

    def test_defaults (self):
        c = self.config ("# Nothing here\n\n")
        self.assertEqual (c.sign, { })
        self.assertEqual (c.dialog.validate_attempts, VALIDATE_ATTEMPTS)
        self.assertEqual (c.dialog.validate_interval, VALIDATE_INTERVAL)
        self.assertEqual (c.dialog.requester, REQUESTER)

    def test_dialog (self):
        c = self.config ("dialog --validate-attempts 5 "
                         "--validate-interval 0.5 --requester 10.1.2.3\n")
        self.assertEqual (c.dialog.validate_attempts, 5)
        self.assertEqual (c.dialog.validate_interval, 0.5)
        self.assertEqual (c.dialog.requester, "10.1.2.3")

    def test_sign (self):
        c = self.config ("sign vms1 --transport tests.ntest:fakefactory "
                         "--host 10.0.0.1 --community private\n"
                         "  sign vms-2 --transport x:y   # second sign\n")
        self.assertEqual (sorted (c.sign), [ "VMS-2", "VMS1" ])
        s = c.sign["VMS1"]
        self.assertEqual (s.name, "VMS1")
        self.assertEqual (s.transport, "tests.ntest:fakefactory")
        self.assertEqual (s.host, "10.0.0.1")
        self.assertEqual (s.port, 161)
        self.assertEqual (s.community, "private")
        self.assertEqual (s.timeout, 2.0)
        self.assertEqual (s.retries, 1)
        self.assertIsNone (c.sign["VMS-2"].host)

    def test_include (self):
        self.cfile ("sign vms3 --transport x:y\n", "signs.conf")
        c = self.config ("@signs.conf\ndialog --validate-attempts 2\n")
        self.assertIn ("VMS3", c.sign)
        self.assertEqual (c.dialog.validate_attempts, 2)

    def test_errors (self):
        for text in ("dialog --validate-attempts 0\n",
                     "dialog --validate-attempts 101\n",
                     "dialog --validate-interval -1\n",
                     "dialog --requester 300.1.1.1\n",
                     "sign vms1\n",
                     "sign vms! --transport x:y\n",
                     "sign vms1 --transport x:y --port 0\n",
                     "nosuchthing\n"):
            with self.subTest (text = text):
                with self.assertRaises (SystemExit):
                    self.config (text)
                self.assertDebug ("Reading config")
        self.assertEqual (logging.error.call_count, 8)

    def test_defaults_fn (self):
        d = config.defaults ("dialog")
        self.assertEqual (d.validate_attempts, VALIDATE_ATTEMPTS)
        self.assertFalse (d.collection)
        with self.assertRaises (ValueError):
            config.defaults ("sign")

    def test_help (self):
        p, msg = config.configparser.parse_args ([ "sign", "-h" ])
        self.assertIsNone (p)
        self.assertIn ("--transport", msg)

if __name__ == "__main__":
    unittest.main ()
