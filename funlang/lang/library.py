"""Standard library: the root Context every funlang program runs in. Operators are parsed into calls to the Core.*
functions, and array literals into calls to List.build.
"""

import sys

from funlang.lang.runtime import Builtin, Context, kind, render


def number(value):
    """Returns value as a float if it is a number (booleans count as 0 and 1), otherwise raises TypeError."""
    if kind(value) not in ("number", "boolean"):
        raise TypeError(f"expected number, got {kind(value)} '{render(value)}'")
    return float(value)


def add(left, right):
    if isinstance(left, str) or isinstance(right, str):
        return render(left) + render(right)
    return number(left) + number(right)


def equals(left, right):
    """Strict equality: values of different kinds are never equal. Lists are compared item by item."""
    if kind(left) != kind(right):
        return False
    if isinstance(left, tuple):
        return len(left) == len(right) and all(equals(a, b) for a, b in zip(left, right))
    if kind(left) == "function":
        return left is right
    return left == right


def list_value(value):
    if not isinstance(value, tuple):
        raise TypeError(f"expected list, got {kind(value)} '{render(value)}'")
    return value


def build_library(out=None):
    """Returns a new Context holding the standard library. println writes to out (sys.stdout if None)."""
    lib = Context()

    def define(name, func, arity=None):
        lib.set(name, Builtin(name, func, arity))

    define("Core.+", add, 2)
    define("Core.-", lambda left, right: number(left) - number(right), 2)
    define("Core.*", lambda left, right: number(left) * number(right), 2)
    define("Core./", lambda left, right: number(left) / number(right), 2)

    define("Core.==", equals, 2)
    define("Core.!=", lambda left, right: not equals(left, right), 2)
    define("Core.<", lambda left, right: left < right, 2)
    define("Core.<=", lambda left, right: left <= right, 2)
    define("Core.>", lambda left, right: left > right, 2)
    define("Core.>=", lambda left, right: left >= right, 2)

    define("List.length", lambda items: float(len(list_value(items))), 1)
    define("List.add", lambda items, item: list_value(items) + (item,), 2)
    define("List.build", lambda *items: items)

    def println(*args):
        print(*(render(arg) for arg in args), file=out if out is not None else sys.stdout)

    define("println", println)

    lib.set("true", True)
    lib.set("false", False)
    lib.set("null", None)

    return lib
