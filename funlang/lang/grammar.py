"""Recursive descent parser for funlang. Grammar, from loosest to tightest binding:

```
<module>      ::= <function>* EOF
<expression>  ::= "fun" <function> | "val" <assignment> | "if" <if> | <compare>
<function>    ::= <identifier> "(" [<identifier> ("," <identifier>)*] ")" "=" <expression>
<assignment>  ::= <identifier> "=" <expression>
<if>          ::= "(" <expression> ")" <expression> ["else" <expression>]
<compare>     ::= <sum> [("==" | "!=" | "<=" | ">=" | "<" | ">") <sum>]
<sum>         ::= <product> [("+" | "-") <product>]
<product>     ::= <call> [("*" | "/") <call>]
<call>        ::= <block> ["(" [<expression> ("," <expression>)*] ")"]
<block>       ::= "{" <expression>* "}" | <array>
<array>       ::= "[" [<expression> ("," <expression>)*] "]" | <term>
<term>        ::= <string> | <number> | <module> | <identifier>
```

Binary levels apply at most one operator: 1 + 2 * 3 and 1 * 2 + 3 are fine, but 1 + 2 + 3 leaves "+ 3" unparsed (use
{1 + 2} + 3). Operators and array literals are sugar for calls to Core.<op> and List.build.
"""

from more_itertools import peekable

from funlang.lang.error import GenericException
from funlang.lang.lexical import TokenType
from funlang.lang.tree import AssignmentEx, BlockEx, CallEx, FunctionEx, IdentifierEx, IfEx, LiteralEx, Module


COMPARE_OPERATORS = ("==", "!=", "<=", ">=", "<", ">")
SUM_OPERATORS = ("+", "-")
PRODUCT_OPERATORS = ("*", "/")


def found(token):
    return token.word if token.type is not TokenType.EOF else "EOF"


class Parser:
    """Consumes a list of Tokens (ending with EOF) exactly once."""

    def __init__(self, tokens):
        self.tokens = peekable(tokens)

    @classmethod
    def parse(cls, tokens):
        """Parses tokens into a Module."""
        return cls(tokens).parse_module()

    def peek(self):
        token = self.tokens.peek(None)
        if token is None:
            raise GenericException("Invalid token stream. No EOF!")
        return token

    def advance(self):
        token = self.peek()
        next(self.tokens)
        return token

    @staticmethod
    def matches(token, word):
        """Whether token is the keyword/operator/symbol word (string literals never match)."""
        return token.word == word and token.type is not TokenType.STRING

    def expect_type(self, token_type, message):
        token = self.advance()
        if token.type is not token_type:
            token.loc.error(f"Syntax error. Expected {message} but found {found(token)}")
        return token

    def expect_exact(self, word):
        token = self.advance()
        if not Parser.matches(token, word):
            token.loc.error(f"Syntax error. Expected '{word}' but found {found(token)}")
        return token

    def check_type(self, token_type):
        """Consumes and returns the next token if it has token_type, otherwise returns None."""
        if self.peek().type is token_type:
            return self.advance()
        return None

    def check_exact(self, word):
        """Consumes and returns the next token if it is word, otherwise returns None."""
        if Parser.matches(self.peek(), word):
            return self.advance()
        return None

    def parse_module(self):
        module = Module(self.peek().loc.source_file)

        while not self.check_type(TokenType.EOF):
            keyword = self.expect_exact("fun")
            module.functions.append(self.parse_function(keyword))

        return module

    def parse_line(self):
        """Parses any number of expressions up to EOF. Used by the interactive shell."""
        expressions = []

        while not self.check_type(TokenType.EOF):
            expressions.append(self.parse_expression())

        return expressions

    def parse_expression(self):
        keyword = self.check_exact("fun")
        if keyword:
            return self.parse_function(keyword)

        keyword = self.check_exact("val")
        if keyword:
            return self.parse_assignment(keyword)

        keyword = self.check_exact("if")
        if keyword:
            return self.parse_if(keyword)

        return self.parse_compare()

    def parse_function(self, keyword):
        """Parses the rest of a function declaration; keyword is the already consumed 'fun' token."""
        identifier = self.expect_type(TokenType.IDENTIFIER, "function name").word
        self.expect_exact("(")

        params = []
        first_param = self.check_type(TokenType.IDENTIFIER)
        if first_param:
            params.append(first_param.word)

            while self.check_exact(","):
                params.append(self.expect_type(TokenType.IDENTIFIER, "parameter").word)

        self.expect_exact(")")
        self.expect_exact("=")
        body = self.parse_expression()

        return FunctionEx(keyword.loc, identifier, tuple(params), body)

    def parse_assignment(self, keyword):
        identifier = self.expect_type(TokenType.IDENTIFIER, "value name").word
        self.expect_exact("=")
        body = self.parse_expression()

        return AssignmentEx(keyword.loc, identifier, body)

    def parse_if(self, keyword):
        self.expect_exact("(")
        condition = self.parse_expression()
        self.expect_exact(")")
        then_branch = self.parse_expression()

        else_branch = None
        if self.check_exact("else"):
            else_branch = self.parse_expression()

        return IfEx(keyword.loc, condition, then_branch, else_branch)

    def parse_binary(self, operand, operators):
        """Parses operand, optionally followed by exactly one of operators and another operand."""
        left = operand()

        token = self.peek()
        if token.type is TokenType.OPERATOR and token.word in operators:
            self.advance()
            func = IdentifierEx(token.loc, f"Core.{token.word}")
            return CallEx(token.loc, func, (left, operand()))

        return left

    def parse_compare(self):
        return self.parse_binary(self.parse_sum, COMPARE_OPERATORS)

    def parse_sum(self):
        return self.parse_binary(self.parse_product, SUM_OPERATORS)

    def parse_product(self):
        return self.parse_binary(self.parse_call, PRODUCT_OPERATORS)

    def parse_arguments(self, close):
        """Parses a comma separated, possibly empty list of expressions up to and including close."""
        args = []
        if self.check_exact(close):
            return tuple(args)

        args.append(self.parse_expression())
        while self.check_exact(","):
            args.append(self.parse_expression())

        self.expect_exact(close)
        return tuple(args)

    def parse_call(self):
        func = self.parse_block()

        if self.check_exact("("):
            return CallEx(func.loc, func, self.parse_arguments(")"))
        return func

    def parse_block(self):
        open_brace = self.check_exact("{")
        if not open_brace:
            return self.parse_array()

        body = []
        while not self.check_exact("}"):
            body.append(self.parse_expression())

        return BlockEx(open_brace.loc, tuple(body))

    def parse_array(self):
        open_bracket = self.check_exact("[")
        if not open_bracket:
            return self.parse_term()

        func = IdentifierEx(open_bracket.loc, "List.build")
        return CallEx(open_bracket.loc, func, self.parse_arguments("]"))

    def parse_term(self):
        token = self.advance()

        if token.type is TokenType.STRING:
            return LiteralEx(token.loc, token.word)

        elif token.type is TokenType.NUMBER:
            try:
                value = float(token.word)
            except ValueError:
                token.loc.error(f"Invalid number literal {token.word}")
            return LiteralEx(token.loc, value)

        elif token.type in (TokenType.MODULE, TokenType.IDENTIFIER):
            return IdentifierEx(token.loc, token.word)

        return token.loc.error(f"Syntax error. Expected term but found '{found(token)}'")
