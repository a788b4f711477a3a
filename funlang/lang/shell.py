"""Handles interactive/command-line mode for the funlang interpreter. Uses cmd as backend."""

import cmd

from funlang.lang.runtime import render


class Shell(cmd.Cmd):
    """funlang interpreter shell."""
    intro = "funlang interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Evaluates arbitrary funlang expressions."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            if self._tmp_line:
                line = self._tmp_line + "\n" + line
            line, add_to_prev = self.sess.preprocess_line(line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            try:
                self.sess.add(line)
            except ValueError:
                return  # if line is empty, terminate

            self.sess.run()

            if self.sess.results:
                result = self.sess.pop()
                if result is not None:
                    print(render(result), file=self.stdout)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the funlang interpreter!\n\n"
              "Every line is an expression evaluated in a scope that lasts until you exit, so\n"
              "values and functions you declare stay around. Try 'val x = 5', then\n"
              "'fun double(n) = n * 2', then 'double(x)'. Operators apply once per level:\n"
              "write '{1 + 2} + 3' rather than '1 + 2 + 3'.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
