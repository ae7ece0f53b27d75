"""CLI entry point for the Lox interpreter.

Usage:
    python -m lox [-v|-vv|-vvv] <script>
    python -m lox [-v...] --emit-ast <script>
    python -m lox [-v...]

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given script and print its AST as JSON

Without a script an interactive prompt is started; expression statements
typed there print their value. Debug information is written to `debug.txt`
in the current directory when verbosity is greater than zero.

Exit status: 65 when the script has lexical or parse errors, 70 when it
stops on a runtime error, 66 when it cannot be read.
"""

import argparse
import cmd
import json
import sys
from pathlib import Path

from .ast_json import ast_to_obj
from .errors import ErrorReporter
from .interpreter import Interpreter, run_source
from .parser import parse_program

EXIT_DATA_ERROR = 65
EXIT_NO_INPUT = 66
EXIT_SOFTWARE = 70


class Shell(cmd.Cmd):
    """Interactive Lox prompt sharing one interpreter across lines."""
    intro = "Lox interpreter\nType 'exit' or press Ctrl-D to leave."
    prompt = "> "

    def __init__(self, interpreter: Interpreter, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.interpreter = interpreter

    def onecmd(self, line):
        """Leaves on a bare `exit` or end of input; anything else is Lox source."""
        command = line.strip()
        if command in ('exit', 'EOF'):
            return super().onecmd(command)
        if not command:
            return self.emptyline()
        return self.default(line)

    def default(self, line):
        """Runs a line of Lox source."""
        run_source(line, repl=True, interpreter=self.interpreter)
        # errors on one line do not carry over to the next
        self.interpreter.reporter.reset()

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True


def read_source(path: Path) -> str:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except OSError:
        print(f"Error: file {path} could not be read", file=sys.stderr)
        sys.exit(EXIT_NO_INPUT)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Lox language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--emit-ast', action='store_true', help='print the AST of the script as JSON instead of running it')
    parser.add_argument('script', nargs='?', help='Lox script to execute (omit for an interactive prompt)')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        if not args.script:
            parser.error('--emit-ast needs a script')
        reporter = ErrorReporter()
        statements = parse_program(read_source(Path(args.script)), reporter)
        if reporter.had_error:
            sys.exit(EXIT_DATA_ERROR)
        print(json.dumps(ast_to_obj(statements), ensure_ascii=False, indent=2))
        return

    interpreter = Interpreter(ErrorReporter(), debug_level=args.v)
    try:
        # Interactive mode
        if not args.script:
            Shell(interpreter).cmdloop()
            return

        # Default: execute script file
        reporter = run_source(read_source(Path(args.script)), interpreter=interpreter)
    finally:
        interpreter.close()

    if reporter.had_error:
        sys.exit(EXIT_DATA_ERROR)
    if reporter.had_runtime_error:
        sys.exit(EXIT_SOFTWARE)


if __name__ == '__main__':
    main()
