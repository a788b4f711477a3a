"""Abstract syntax tree shared by the parser and the interpreter.

A Module is the parsed form of one source file: for now there is no way to import another module, but if that is
added later the info would go here.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from funlang.lang.lexical import Location


@dataclass(frozen=True)
class FunctionEx:
    """A function declaration: fun main() = {}"""
    loc: Location
    identifier: str
    params: Tuple[str, ...]
    body: "Expression"


@dataclass(frozen=True)
class AssignmentEx:
    """A value declaration: val x = 5"""
    loc: Location
    identifier: str
    body: "Expression"


@dataclass(frozen=True)
class BlockEx:
    """The contents of curly brackets: x * { y + 1 }"""
    loc: Location
    body: Tuple["Expression", ...]


@dataclass(frozen=True)
class CallEx:
    """Calling a function: sum(x, y). Operators are calls too, to Core.+ and friends."""
    loc: Location
    func: "Expression"
    args: Tuple["Expression", ...]


@dataclass(frozen=True)
class IfEx:
    """if (condition) then_branch else else_branch"""
    loc: Location
    condition: "Expression"
    then_branch: "Expression"
    else_branch: Optional["Expression"] = None


@dataclass(frozen=True)
class IdentifierEx:
    loc: Location
    name: str


@dataclass(frozen=True)
class LiteralEx:
    """A number or string literal."""
    loc: Location
    value: Union[str, float]


Expression = Union[FunctionEx, AssignmentEx, BlockEx, CallEx, IfEx, IdentifierEx, LiteralEx]


@dataclass
class Module:
    source_file: str = ""
    functions: List[FunctionEx] = field(default_factory=list)
