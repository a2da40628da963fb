import sys

from pylox.tokens import TokenType


class ParseError(RuntimeError):
    pass


class LoxRuntimeError(RuntimeError):
    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message


class Return(Exception):
    """Unwinds a Lox function body back to the call that invoked it."""

    def __init__(self, value):
        super().__init__()
        self.value = value


class Diagnostics:
    """Collects the error state of a run and reports errors on stderr.

    Static errors (scanning, parsing, resolving) set ``had_error``; errors
    raised while interpreting set ``had_runtime_error``. The driver turns the
    two flags into an exit status.
    """

    def __init__(self):
        self.had_error = False
        self.had_runtime_error = False

    def error(self, line, message):
        self.report(line, "", message)

    def token_error(self, token, message):
        if token.type == TokenType.EOF:
            self.report(token.line, " at end", message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def runtime_error(self, error):
        print(f"{error.message}\n[line {error.token.line}]", file=sys.stderr)
        self.had_runtime_error = True

    def report(self, line, where, message):
        print(f"[line {line}] Error{where}: {message}", file=sys.stderr)
        self.had_error = True

    def reset(self):
        self.had_error = False

    def exit_code(self):
        if self.had_error:
            return 65
        if self.had_runtime_error:
            return 70
        return 0
