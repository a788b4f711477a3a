"""Tree-walking interpreter for funlang.

Runtime values are plain Python objects: float (numbers), str, bool, None (null, and also the value of parameters that
were not passed), tuple (lists) and the two invocable types defined here, Closure and Builtin. Variables are resolved
through a chain of Contexts: one per block, one per function call, with the standard library at the root.
"""

from itertools import zip_longest
from typing import Tuple, Union

from funlang.lang.error import GenericException
from funlang.lang.lexical import Location
from funlang.lang.tree import AssignmentEx, BlockEx, CallEx, FunctionEx, IdentifierEx, IfEx, LiteralEx


class Context:
    """A single scope. Lookups walk outward through parents, assignments always write locally."""

    def __init__(self, parent=None):
        self.parent = parent
        self.scope = {}

    def get(self, name, loc):
        """Returns value of name in the nearest enclosing scope. Errors at loc if name is not defined anywhere."""
        context = self
        while context is not None:
            if name in context.scope:
                return context.scope[name]
            context = context.parent

        return loc.error(f"Variable {name} is not defined")

    def set(self, name, value):
        self.scope[name] = value


class Closure:
    """A user defined function: params and body of a FunctionEx paired with the Context it was declared in. The
    Context is captured by reference, so later assignments in that same scope are visible to the body.
    """

    def __init__(self, interpreter, node, context):
        self.interpreter = interpreter
        self.node = node
        self.context = context

    @property
    def name(self):
        return self.node.identifier

    def __call__(self, *args):
        """Missing arguments are bound to None, extra arguments are ignored."""
        call_context = Context(self.context)

        params = self.node.params
        for param, arg in zip_longest(params, args[:len(params)]):
            call_context.set(param, arg)

        return self.interpreter.evaluate(self.node.body, call_context)

    def __repr__(self):
        return f"<fun {self.name}>"


class Builtin:
    """A standard library function implemented in Python."""

    def __init__(self, name, func, arity=None):
        self.name = name
        self.func = func
        self.arity = arity  # None for variadic builtins

    def __call__(self, *args):
        if self.arity is not None and len(args) != self.arity:
            raise TypeError(f"expected {self.arity} argument(s), got {len(args)}")
        return self.func(*args)

    def __repr__(self):
        return f"<builtin {self.name}>"


Value = Union[float, str, bool, None, Tuple["Value", ...], Closure, Builtin]
Invocable = (Closure, Builtin)


def kind(value):
    """Name of the runtime type of value, as used in error messages."""
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "boolean"
    elif isinstance(value, (int, float)):
        return "number"
    elif isinstance(value, str):
        return "string"
    elif isinstance(value, tuple):
        return "list"
    elif isinstance(value, Invocable):
        return "function"
    raise TypeError(f"not a funlang value: {value!r}")


def truthy(value):
    """null, false, 0 and "" are false, everything else (empty lists included) is true."""
    if value is None or value is False:
        return False
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    elif isinstance(value, str):
        return value != ""
    return True


def render(value, nested=False):
    """Human readable form of value, as printed by println and the shell. Strings are only quoted inside lists."""
    if value is None:
        return "null"
    elif isinstance(value, bool):
        return "true" if value else "false"
    elif isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    elif isinstance(value, str):
        return f'"{value}"' if nested else value
    elif isinstance(value, tuple):
        return "[" + ", ".join(render(item, nested=True) for item in value) + "]"
    return str(value)


class Interpreter:
    """Evaluates Modules and expressions against a library Context, which becomes the root of every scope chain."""

    def __init__(self, library):
        self.library = library
        self._evaluators = {
            LiteralEx: self.eval_literal,
            IdentifierEx: self.eval_identifier,
            BlockEx: self.eval_block,
            IfEx: self.eval_if,
            AssignmentEx: self.eval_assignment,
            CallEx: self.eval_call,
            FunctionEx: self.eval_function,
        }

    def run(self, module):
        """Declares every function of module in a fresh module scope, then calls main() and returns its value."""
        module_context = Context(self.library)

        for function in module.functions:
            self.evaluate(function, module_context)

        loc = Location(module.source_file, 1, 1)
        main = module_context.get("main", loc)
        return self.invoke(main, (), loc)

    def evaluate(self, node, context):
        return self._evaluators[type(node)](node, context)

    def invoke(self, func, args, loc):
        """Calls func with args. Python errors raised by a Builtin are reported at loc."""
        if not isinstance(func, Invocable):
            loc.error(f"Attempt to call non-function '{render(func)}'")

        if isinstance(func, Closure):
            return func(*args)

        try:
            return func(*args)
        except GenericException:
            raise
        except (ArithmeticError, TypeError, ValueError) as e:
            loc.error(f"Error in {func.name}: {e}")

    @staticmethod
    def eval_literal(node, context):
        return node.value

    @staticmethod
    def eval_identifier(node, context):
        return context.get(node.name, node.loc)

    def eval_block(self, node, context):
        block_context = Context(context)

        result = None
        for expression in node.body:
            result = self.evaluate(expression, block_context)
        return result

    def eval_if(self, node, context):
        if truthy(self.evaluate(node.condition, context)):
            return self.evaluate(node.then_branch, context)
        elif node.else_branch is not None:
            return self.evaluate(node.else_branch, context)
        return None

    def eval_assignment(self, node, context):
        result = self.evaluate(node.body, context)
        context.set(node.identifier, result)
        return result

    def eval_call(self, node, context):
        func = self.evaluate(node.func, context)
        if not isinstance(func, Invocable):
            node.func.loc.error(f"Attempt to call non-function '{render(func)}'")

        args = tuple(self.evaluate(arg, context) for arg in node.args)
        return self.invoke(func, args, node.loc)

    def eval_function(self, node, context):
        closure = Closure(self, node, context)
        context.set(node.identifier, closure)
        return closure

