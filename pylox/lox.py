import argparse
import sys

from pylox.errors import Diagnostics, LoxRuntimeError
from pylox.interpreter import Interpreter
from pylox.parser import Parser
from pylox.printer import AstPrinter
from pylox.resolver import Resolver
from pylox.scanner import Scanner

EX_USAGE = 64
EX_NOINPUT = 66

# Each Lox call takes several host frames; the default limit of 1000 would
# cap Lox recursion at a depth of about 150.
RECURSION_LIMIT = 20000


class PyLox:
    def __init__(self, dump_tokens=False, dump_ast=False):
        self.dump_tokens = dump_tokens
        self.dump_ast = dump_ast
        self.diagnostics = Diagnostics()
        self.interpreter = Interpreter(self.diagnostics)
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

    def run_file(self, filename):
        with open(filename, "r", encoding="utf-8") as file:
            self.run(file.read())
        return self.diagnostics.exit_code()

    def run_prompt(self):
        while True:
            try:
                line = input("> ")
            except EOFError:
                print()
                break
            self.run(line)
            self.diagnostics.reset()
        return 0

    def run(self, source):
        tokens = Scanner(source, self.diagnostics).scan_tokens()
        if self.dump_tokens:
            for token in tokens:
                print(token)
            return

        # Nesting deep enough to exhaust the host stack is reported at the
        # last token, since the node that overflowed is not known.
        end = tokens[-1]
        try:
            statements = Parser(tokens, self.diagnostics).parse()
            if self.diagnostics.had_error:
                return

            if self.dump_ast:
                printer = AstPrinter()
                for statement in statements:
                    print(printer.print(statement))
                return

            Resolver(self.interpreter, self.diagnostics).resolve(statements)
        except RecursionError:
            self.diagnostics.token_error(end, "Too much nesting.")
            return
        if self.diagnostics.had_error:
            return

        try:
            self.interpreter.interpret(statements)
        except RecursionError:
            self.diagnostics.runtime_error(LoxRuntimeError(end, "Stack overflow."))


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="pylox", usage="jlox [script]", description="Run Lox scripts")
    parser.add_argument("script", nargs="*", help=argparse.SUPPRESS)
    parser.add_argument("--tokens", action="store_true",
                        help="print the scanned tokens instead of running")
    parser.add_argument("--ast", action="store_true",
                        help="print the parsed syntax tree instead of running")
    args = parser.parse_args(argv)

    if len(args.script) > 1:
        print(parser.format_usage(), end="")
        return EX_USAGE

    lox = PyLox(dump_tokens=args.tokens, dump_ast=args.ast)
    if not args.script:
        return lox.run_prompt()

    try:
        return lox.run_file(args.script[0])
    except OSError as error:
        print(f"Could not read '{args.script[0]}': {error.strerror}", file=sys.stderr)
        return EX_NOINPUT
    except UnicodeDecodeError:
        print(f"Could not read '{args.script[0]}': not valid UTF-8", file=sys.stderr)
        return EX_NOINPUT
