"""
Tests for the variable environment.
"""
import unittest
from atendo.environment import FIXED_SLOTS, Environment
from atendo.errors import UnboundSlot
from atendo.packets import compile_request
from atendo.sexpr import read


class TestEnvironment(unittest.TestCase):

    def setUp(self):
        self.env = Environment()

    def test_fixed_slots_start_empty(self):
        for slot in FIXED_SLOTS:
            self.assertIsNone(self.env.get(slot))
        self.assertFalse(self.env.is_declared("go-var1"))

    def test_reading_undeclared_slot_raises(self):
        with self.assertRaises(UnboundSlot) as ctx:
            self.env.get("go-var1")
        self.assertEqual(ctx.exception.slot, "go-var1")

    def test_first_write_declares_slot(self):
        self.env.set("go-var1", "jack")
        self.assertTrue(self.env.is_declared("go-var1"))
        self.assertEqual(self.env.get("go-var1"), "jack")

    def test_assigning_nil_still_declares(self):
        self.env.set("go-var3", None)
        self.assertIsNone(self.env.get("go-var3"))

    def test_reset_drops_adhoc_slots(self):
        self.env.set("go-var1", "jack")
        self.env.set("concept", "something")
        self.env.reset()
        self.assertFalse(self.env.is_declared("go-var1"))
        self.assertIsNone(self.env.get("concept"))

    def test_snapshot_and_restore(self):
        self.env.set("go-var1", "jack")
        saved = self.env.snapshot()
        self.env.set("go-var1", "mary")
        self.env.set("go-var2", "store")
        self.env.restore(saved)
        self.assertEqual(self.env.get("go-var1"), "jack")
        self.assertFalse(self.env.is_declared("go-var2"))


class TestSequentialAssignment(unittest.TestCase):
    """Assignments in one request see the writes made before them."""

    def test_later_assignment_reads_earlier_one(self):
        env = Environment()
        request = compile_request(read("((assign x 1 y (+ x 1)))"))
        request.fire(env)
        self.assertEqual(env.get("x"), 1)
        self.assertEqual(env.get("y"), 2)

    def test_assign_clauses_apply_in_order(self):
        env = Environment()
        request = compile_request(read("((assign subject 'jack) (assign go-var1 subject subject nil))"))
        request.fire(env)
        self.assertEqual(env.get("go-var1"), "jack")
        self.assertIsNone(env.get("subject"))

    def test_reading_before_writing_fails(self):
        env = Environment()
        request = compile_request(read("((assign y (+ x 1) x 1))"))
        with self.assertRaises(UnboundSlot):
            request.fire(env)


if __name__ == '__main__':
    unittest.main()
