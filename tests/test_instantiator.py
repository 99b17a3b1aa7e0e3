"""
Tests for template instantiation.
"""
import unittest
from atendo.cd_form import Compound, Frame, Var, build_template
from atendo.environment import Environment
from atendo.errors import CyclicBinding, UnboundSlot
from atendo.instantiator import instantiate
from atendo.sexpr import format_tree, read


def template(text):
    return build_template(read(text))


class TestInstantiate(unittest.TestCase):

    def setUp(self):
        self.env = Environment()

    def test_null_roles_are_pruned(self):
        """Tests that a role whose variable is nil disappears from the result."""
        self.env.set("V1", "jack")
        self.env.set("V2", "store")
        self.env.set("V3", None)
        result = instantiate(template("(ptrans (actor ?V1) (object ?V1) (to ?V2) (from ?V3))"), self.env)
        self.assertEqual(format_tree(result), "(ptrans (actor jack) (object jack) (to store))")

    def test_frame_with_all_roles_pruned_keeps_header(self):
        self.env.set("x", None)
        self.assertEqual(instantiate(template("(ptrans (actor ?x))"), self.env), Frame("ptrans"))

    def test_atoms_unchanged(self):
        self.assertEqual(instantiate("jack", self.env), "jack")
        self.assertIsNone(instantiate(None, self.env))

    def test_multi_level_resolution(self):
        """Tests that a slot holding a template with references is resolved too."""
        self.env.set("buyer", Frame("person", (("name", Frame("jack")),)))
        self.env.set("event", template("(atrans (to ?buyer))"))
        result = instantiate(Var("event"), self.env)
        self.assertEqual(format_tree(result), "(atrans (to (person (name (jack)))))")

    def test_same_variable_twice_is_not_a_cycle(self):
        self.env.set("go-var1", Frame("jack"))
        result = instantiate(template("(ptrans (actor ?go-var1) (object ?go-var1))"), self.env)
        self.assertEqual(result.roles[0][1], result.roles[1][1])

    def test_compound_frames_instantiated_independently(self):
        self.env.set("buy-var1", Frame("jack"))
        self.env.set("buy-var3", None)
        result = instantiate(
            template("((atrans (actor ?buy-var1) (from ?buy-var3)) (atrans (to ?buy-var3) (from ?buy-var1)))"),
            self.env,
        )
        self.assertIsInstance(result, Compound)
        self.assertEqual(format_tree(result), "((atrans (actor (jack))) (atrans (from (jack))))")

    def test_direct_cycle_detected(self):
        """Tests that a slot referring to itself raises instead of looping."""
        self.env.set("loop", Frame("self", (("ref", Var("loop")),)))
        with self.assertRaises(CyclicBinding) as ctx:
            instantiate(Var("loop"), self.env)
        self.assertEqual(ctx.exception.chain, ("loop", "loop"))

    def test_transitive_cycle_detected(self):
        self.env.set("a", template("(x (r ?b))"))
        self.env.set("b", template("(y (r ?a))"))
        with self.assertRaises(CyclicBinding) as ctx:
            instantiate(template("(top (v ?a))"), self.env)
        self.assertEqual(ctx.exception.chain, ("a", "b", "a"))

    def test_unbound_variable(self):
        with self.assertRaises(UnboundSlot):
            instantiate(template("(ptrans (actor ?nobody))"), self.env)

    def test_result_does_not_change_when_slot_changes(self):
        self.env.set("go-var2", Frame("store"))
        result = instantiate(template("(ptrans (to ?go-var2))"), self.env)
        self.env.set("go-var2", Frame("house"))
        self.assertEqual(format_tree(result), "(ptrans (to (store)))")


if __name__ == '__main__':
    unittest.main()
