#!/usr/bin/env python3

from tests.ntest import *

from ntcip.statemachine import StateMachine, label

class counter (StateMachine):
    def __init__ (self, n):
        super ().__init__ ()
        self.n = n
        self.result = 0

    @label ("start counting")
    def s0 (self):
        return self.count

    def count (self):
        self.result += 1
        if self.result == self.n:
            return None
        return self.count

class TestStateMachine (NtTest):
    def test_run (self):
        sm = counter (3)
        self.assertEqual (str (sm), "counter<state: s0>")
        self.assertEqual (sm.statelabel (), "start counting")
        self.assertEqual (sm.run (), 3)
        self.assertEqual (str (sm), "counter<finished>")
        self.assertTrace ("new state")
        self.assertEqual (logging.trace.call_count, 4)

    def test_label (self):
        sm = counter (1)
        sm.set_state (sm.count)
        self.assertEqual (sm.statelabel (), "count")
        self.assertEqual (sm.statename (), "counter<state: count>")

if __name__ == "__main__":
    unittest.main ()
