"""Error handling for funlang. Only GenericExceptions should be encountered during running: if another type of
error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """A funlang error. Every lexical, syntax and runtime error carries the Location it was detected at, and its str
    form is the full diagnostic: '<msg> from <file> at <line>:<column>'.
    """

    def __init__(self, msg, loc=None, internal=False):
        self.msg = msg
        self.loc = loc
        self.internal = internal
        super().__init__(loc.render(msg) if loc is not None else msg)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report custom funlang errors."""
    ERROR = "red"
    NOTE = "cyan"

    def __init__(self, fatal=True, out=None):
        self.fatal = fatal
        self.out = out
        self.sources = {}  # dict of file: source text, used to show the offending line

    def register_file(self, path, source):
        """Registers source text of path so that diagnostics can point into it."""
        self.sources[path] = source

    def diagnose(self, error):
        """Returns offending source line with a caret under error.loc, or None if the line is unknown."""
        loc = error.loc
        source = self.sources.get(loc.source_file) if loc is not None else None
        if source is None:
            return None

        lines = source.splitlines()
        if not 0 < loc.line <= len(lines):
            return None
        line = lines[loc.line - 1]

        # handle indentation with tabs: len("\t") is 1, but it will be printed as 8 characters
        padding = len(line[:loc.column - 1].expandtabs(8))

        diagnosis = "  " + line.expandtabs(8) + "\n"
        diagnosis += "  " + " " * padding + colored("^", ErrorHandler.ERROR, attrs=["bold"])
        return diagnosis

    def _print(self, msg):
        print(msg, file=self.out if self.out is not None else sys.stderr)

    def note(self, msg):
        """Prints an informational note (used by --verbose)."""
        self._print(colored("note: ", ErrorHandler.NOTE, attrs=["bold"]) + msg)

    def throw(self, error):
        """Reports error, which must be a GenericException. Exits with status 1 if self.fatal."""
        error_msg = ""
        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + str(error)
        self._print(error_msg)

        diagnosis = self.diagnose(error)
        if not error.internal and diagnosis:
            self._print(diagnosis)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
