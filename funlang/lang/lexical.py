"""Lexical analysis for funlang. Turns raw source text into a list of Tokens terminated by a single EOF Token.

Tokens are classified by their first character, then greedily extended while the next character belongs to the body
of the same class:

```
<identifier> ::= [a-z] [a-zA-Z0-9]*     ; "fun", "val", "if" and "else" are reclassified as keywords
<module>     ::= [A-Z] [a-zA-Z0-9.]*    ; capitalized dotted path, ex: List.build
<operator>   ::= [<>=+\\-*/!]+
<symbol>     ::= "(" | ")" | "[" | "]" | "{" | "}" | ","
<number>     ::= [0-9] [0-9.]*
<string>     ::= '"' <char>* '"'        ; no escapes, may span lines
```
"""

import os
from dataclasses import dataclass
from enum import Enum

from funlang.lang.error import GenericException


@dataclass(frozen=True)
class Location:
    """Position of a character in a source file, attached to every Token and AST node for error messages."""
    source_file: str
    line: int
    column: int

    def render(self, message):
        """Returns message tagged with this location."""
        return f"{message} from {self.source_file} at {self}"

    def error(self, message):
        """Aborts the current operation with a GenericException located here."""
        raise GenericException(message, self)

    def __str__(self):
        return f"{self.line}:{self.column}"


class TokenType(Enum):
    IDENTIFIER = "identifier"
    MODULE = "module"
    OPERATOR = "operator"
    SYMBOL = "symbol"
    KEYWORD = "keyword"
    STRING = "string"
    NUMBER = "number"
    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """A single 'word' of source: keywords like 'fun', names like 'x', operators like '+' or symbols like '('."""
    type: TokenType
    word: str
    loc: Location


ALPHA_LOWER = "abcdefghijklmnopqrstuvwxyz"
ALPHA_UPPER = ALPHA_LOWER.upper()
ALPHA = ALPHA_LOWER + ALPHA_UPPER
DIGITS = "0123456789"

SYMBOLS = "()[]{},"
OPERATORS = "<>=+-*/!"

# (type, initial characters, body characters). Checked in order: the first rule whose initial characters contain the
# next character wins, so a character claimed by two rules would always go to the earlier one.
RULES = [
    (TokenType.IDENTIFIER, ALPHA_LOWER, DIGITS + ALPHA),
    (TokenType.MODULE, ALPHA_UPPER, DIGITS + ALPHA + "."),
    (TokenType.OPERATOR, OPERATORS, OPERATORS),
    (TokenType.SYMBOL, SYMBOLS, ""),
    (TokenType.NUMBER, DIGITS, DIGITS + "."),
]

KEYWORDS = frozenset(["fun", "val", "if", "else"])


class Lexer:
    """Single-use cursor over raw source text."""

    def __init__(self, source_file, raw):
        self.source_file = source_file
        self.raw = raw

        self.index = 0
        self.line = 1
        self.column = 1

    @classmethod
    def from_file(cls, path):
        """Returns a Lexer over the contents of path. Errors are reported against the file's base name."""
        try:
            with open(path, "r", encoding="utf-8") as file:
                raw = file.read()
        except OSError:
            raise GenericException(f"'{path}' could not be opened")

        return cls(os.path.basename(path), raw)

    def lex_all(self):
        """Lexes the whole input and makes sure nothing is left dangling after the EOF token."""
        tokens = self.lex()

        self.eat_whitespace()
        if self.index != len(self.raw):
            self.here().error(f"Expected EOF but found {self.raw[self.index]}")

        return tokens

    def here(self):
        return Location(self.source_file, self.line, self.column)

    def eat_whitespace(self):
        """Advances through any whitespace, incrementing line and column as needed."""
        while self.index < len(self.raw):
            char = self.raw[self.index]
            if char in " \t\r":
                self.index += 1
                self.column += 1
            elif char == "\n":
                self.index += 1
                self.line += 1
                self.column = 1
            else:
                return

    def eat_word(self, first, loc):
        """Reads the rest of a word starting with first (already consumed)."""
        for token_type, init, body in RULES:
            if first in init:
                word = first

                while self.index < len(self.raw) and self.raw[self.index] in body:
                    word += self.raw[self.index]
                    self.index += 1
                    self.column += 1

                if word in KEYWORDS:
                    return Token(TokenType.KEYWORD, word, loc)
                return Token(token_type, word, loc)

        return loc.error(f"Invalid character {first}")

    def eat_string(self, loc):
        """Reads a string literal up to its closing quote (the opening quote is already consumed). Multiline strings
        are allowed, escapes are not.
        """
        word = ""

        while self.index < len(self.raw):
            char = self.raw[self.index]
            self.index += 1
            self.column += 1

            if char == '"':
                return Token(TokenType.STRING, word, loc)

            word += char
            if char == "\n":
                self.line += 1
                self.column = 1

        return loc.error(f"Unexpected EOF at {self.here()}. Unclosed string literal starting")

    def lex(self):
        """Returns the list of Tokens in self.raw, ending with an EOF Token."""
        tokens = []

        while True:
            self.eat_whitespace()

            # location of the start of the token, not the middle of it
            loc = self.here()

            if self.index == len(self.raw):
                tokens.append(Token(TokenType.EOF, "", loc))
                return tokens

            char = self.raw[self.index]
            self.index += 1
            self.column += 1

            if char == '"':
                tokens.append(self.eat_string(loc))
            else:
                tokens.append(self.eat_word(char, loc))
