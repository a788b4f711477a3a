"""Session control for funlang. Drives lexing, parsing and interpretation, either for a whole source file or, in
command-line mode, for expressions entered one at a time into a persistent scope.
"""

from funlang.lang.error import GenericException
from funlang.lang.grammar import Parser
from funlang.lang.lexical import Lexer
from funlang.lang.library import build_library
from funlang.lang.runtime import Context, Interpreter


class Session:
    """Governs a funlang session, with control over the scope that command-line expressions are evaluated in."""
    SH_FILE = "<in>"  # command-line interpreter filename
    OPENERS = "({["
    CLOSERS = ")}]"

    def __init__(self, error_handler, path, cmd_line, out=None, verbose=False):
        self.error_handler = error_handler

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.verbose = verbose    # whether or not to print notes about each stage

        self.interpreter = Interpreter(build_library(out))
        self.context = Context(self.interpreter.library)  # scope of command-line expressions

        self.module = None   # parsed Module, if running a file
        self.to_exec = []    # list of command-line expressions to evaluate
        self.results = []    # list of values produced by run

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            self.module = Parser.parse(self.lex(Lexer.from_file(path)))
            self._note(f"parsed {len(self.module.functions)} function(s) from {self.path}")

        elif not cmd_line:
            raise GenericException(f"'{Session.SH_FILE}' is a reserved filename")

    @staticmethod
    def preprocess_line(line):
        """Removes trailing whitespace from line. Returns updated line and whether it needs a continuation, which is
        the case while brackets outside of string literals are left open.
        """
        line = line.rstrip()

        balance = 0
        in_string = False
        for char in line:
            if char == '"':
                in_string = not in_string
            elif in_string:
                continue
            elif char in Session.OPENERS:
                balance += 1
            elif char in Session.CLOSERS:
                balance -= 1

        return line, in_string or balance > 0

    def _note(self, msg):
        if self.verbose:
            self.error_handler.note(msg)

    def lex(self, lexer):
        """Lexes everything lexer holds, registering its source with the error handler so diagnostics can quote it."""
        self.error_handler.register_file(lexer.source_file, lexer.raw)
        tokens = lexer.lex_all()
        self._note(f"lexed {len(tokens)} token(s) from {lexer.source_file}")
        return tokens

    def add(self, line):
        """Parses a command-line entry. Evaluation is delayed until run is called."""
        if not line or line.isspace():
            raise ValueError("line cannot be empty")

        self.to_exec.extend(Parser(self.lex(Lexer(Session.SH_FILE, line))).parse_line())

    def run(self):
        """Runs this session: calls main() of the file being interpreted, or evaluates pending command-line
        expressions. Will raise any errors that are encountered.
        """
        if self.module is not None:
            self.results.append(self.interpreter.run(self.module))
            return

        try:
            for expression in self.to_exec:
                self.results.append(self.interpreter.evaluate(expression, self.context))
        finally:
            self.to_exec = []

    def pop(self):
        """Returns the most recent result and forgets all results."""
        result = self.results[-1]
        self.results = []
        return result
