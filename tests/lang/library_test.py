import io
import unittest

from funlang.lang.lexical import Location
from funlang.lang.library import build_library, equals
from funlang.lang.runtime import Builtin

LOC = Location("test.fun", 1, 1)


class LibraryTestCase(unittest.TestCase):

    def setUp(self):
        self.out = io.StringIO()
        self.lib = build_library(self.out)

    def call(self, name, *args):
        return self.lib.get(name, LOC)(*args)

    def test_bindings(self):
        names = [
            "Core.+", "Core.-", "Core.*", "Core./", "Core.==", "Core.!=", "Core.<", "Core.<=", "Core.>", "Core.>=",
            "List.length", "List.add", "List.build", "println",
        ]
        for name in names:
            builtin = self.lib.get(name, LOC)
            self.assertIsInstance(builtin, Builtin, name)
            self.assertEqual(name, builtin.name)

        self.assertIs(True, self.lib.get("true", LOC))
        self.assertIs(False, self.lib.get("false", LOC))
        self.assertIsNone(self.lib.get("null", LOC))

    def test_libraries_are_independent(self):
        other = build_library(io.StringIO())
        other.set("Core.+", None)
        self.assertIsInstance(self.lib.get("Core.+", LOC), Builtin)

    def test_arithmetic(self):
        cases = {
            ("Core.+", 1.0, 2.0): 3.0,
            ("Core.-", 1.0, 2.0): -1.0,
            ("Core.*", 1.5, 2.0): 3.0,
            ("Core./", 1.0, 4.0): 0.25,
            ("Core.+", "n = ", 3.0): "n = 3",
            ("Core.+", 2.5, "!"): "2.5!",
        }
        for (name, *args), expected in cases.items():
            self.assertEqual(expected, self.call(name, *args), name)

        self.assertIs(float, type(self.call("Core.+", True, True)))
        self.assertIs(float, type(self.call("Core.*", False, 3.0)))

        should_raise = [("Core.-", "a", 1.0), ("Core.*", None, 1.0), ("Core.+", (1.0,), 1.0), ("Core./", 1.0, 0.0)]
        for name, *args in should_raise:
            self.assertRaises((TypeError, ZeroDivisionError), self.call, name, *args)

    def test_comparison(self):
        cases = {
            ("Core.<", 1.0, 2.0): True,
            ("Core.<=", 2.0, 2.0): True,
            ("Core.>", 1.0, 2.0): False,
            ("Core.>=", 1.0, 2.0): False,
            ("Core.<", "a", "b"): True,
            ("Core.==", 1.0, 1.0): True,
            ("Core.!=", 1.0, 1.0): False,
            ("Core.==", 1.0, "1"): False,
            ("Core.!=", 1.0, "1"): True,
        }
        for (name, *args), expected in cases.items():
            self.assertIs(expected, self.call(name, *args), (name, args))

        self.assertRaises(TypeError, self.call, "Core.<", 1.0, "a")

    def test_equals(self):
        should_pass = [(1.0, 1.0), ("a", "a"), (None, None), ((1.0, (2.0,)), (1.0, (2.0,))), ((), ())]
        for left, right in should_pass:
            self.assertTrue(equals(left, right), (left, right))

        should_fail = [(True, 1.0), (False, 0.0), (None, False), ((1.0,), (1.0, 2.0)), ((True,), (1.0,)), ("", None)]
        for left, right in should_fail:
            self.assertFalse(equals(left, right), (left, right))

        builtin = self.lib.get("println", LOC)
        self.assertTrue(equals(builtin, builtin))
        self.assertFalse(equals(builtin, self.lib.get("List.build", LOC)))

    def test_lists(self):
        items = self.call("List.build", 1.0, 2.0, 3.0)
        self.assertEqual((1.0, 2.0, 3.0), items)
        self.assertEqual((), self.call("List.build"))
        self.assertEqual(3.0, self.call("List.length", items))

        added = self.call("List.add", items, 4.0)
        self.assertEqual((1.0, 2.0, 3.0, 4.0), added)
        self.assertEqual((1.0, 2.0, 3.0), items)

        self.assertRaises(TypeError, self.call, "List.length", "abc")
        self.assertRaises(TypeError, self.call, "List.add", 1.0, 2.0)

    def test_arity(self):
        should_raise = [("List.length",), ("List.add", ()), ("Core.+", 1.0), ("Core.==", 1.0, 2.0, 3.0)]
        for name, *args in should_raise:
            with self.assertRaises(TypeError) as ctx:
                self.call(name, *args)
            self.assertIn("argument(s), got", str(ctx.exception), name)

        self.assertEqual((1.0, 2.0), self.call("List.build", 1.0, 2.0))

    def test_println(self):
        self.assertIsNone(self.call("println", "x =", 1.0, True))
        self.call("println")
        self.assertEqual("x = 1 true\n\n", self.out.getvalue())


if __name__ == '__main__':
    unittest.main()
