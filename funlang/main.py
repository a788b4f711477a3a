"""Uses the funlang lexer, parser and interpreter to run .fun files, or to run in command-line mode. Also uses the
error handling context manager. Called from the funlang console script.
"""

import argparse
import sys

from funlang.lang.error import ErrorHandler
from funlang.lang.runtime import render
from funlang.lang.session import Session
from funlang.lang.shell import Shell


DEFAULT_RECURSION_LIMIT = 20000  # every funlang call takes a handful of Python frames


def main(argv=None):
    """Runs funlang interpreter. Called from funlang console script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="funlang")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--recursion-limit", help="maximum Python recursion depth", type=int,
                            default=DEFAULT_RECURSION_LIMIT)
        parser.add_argument("-v", "--verbose", help="print a note after each stage", action="store_true")
        args = parser.parse_args(argv)

        sys.setrecursionlimit(args.recursion_limit)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, verbose=args.verbose)
            sess.run()

            for result in sess.results:
                if result is not None:
                    print(render(result))

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, verbose=args.verbose)).cmdloop()


if __name__ == "__main__":
    main()
