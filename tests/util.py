import io
from contextlib import redirect_stderr, redirect_stdout

from pylox import PyLox


class Result:
  def __init__(self, out: str, err: str, status: int):
    self.out = out
    self.err = err
    self.status = status

  @property
  def lines(self) -> list[str]:
    return self.out.splitlines()


def run_test(code: str) -> Result:
  lox = PyLox()
  out, err = io.StringIO(), io.StringIO()
  with redirect_stdout(out), redirect_stderr(err):
    lox.run(code)
  return Result(out.getvalue(), err.getvalue(), lox.diagnostics.exit_code())


def run_lines(code: str) -> list[str]:
  return run_test(code).lines
