import subprocess
import sys
from pathlib import Path


def run_cli(*args: str, input: str = "") -> subprocess.CompletedProcess:
  return subprocess.run(
    [sys.executable, "-m", "pylox", *args],
    input=input, capture_output=True, text=True,
    cwd=Path(__file__).resolve().parent.parent)


def write(tmp_path: Path, code: str) -> str:
  path = tmp_path / "script.lox"
  path.write_text(code, encoding="utf-8")
  return str(path)


def test_run_file(tmp_path: Path) -> None:
  result = run_cli(write(tmp_path, 'print "hello";\nprint 1 + 2;'))
  assert result.stdout == "hello\n3\n"
  assert result.returncode == 0


def test_compile_error_exit_code(tmp_path: Path) -> None:
  result = run_cli(write(tmp_path, 'print "x";\nvar 3 = 1;'))
  assert "[line 2] Error at '3': Expect variable name." in result.stderr
  assert result.stdout == ""
  assert result.returncode == 65


def test_runtime_error_exit_code(tmp_path: Path) -> None:
  result = run_cli(write(tmp_path, '"a" + 1;'))
  assert result.stderr == "Operands must be two numbers or two strings.\n[line 1]\n"
  assert result.returncode == 70


def test_usage(tmp_path: Path) -> None:
  result = run_cli("one.lox", "two.lox")
  assert result.stdout == "usage: jlox [script]\n"
  assert result.returncode == 64


def test_missing_file(tmp_path: Path) -> None:
  result = run_cli(str(tmp_path / "missing.lox"))
  assert "Could not read" in result.stderr
  assert result.returncode == 66


def test_repl_keeps_state_and_recovers() -> None:
  result = run_cli(input='var a = 1;\nprint a +;\nprint a;\nprint nope;\nprint a + 1;\n')
  assert result.stdout.split("> ") == ["", "", "", "1\n", "", "2\n", "\n"]
  assert "Expect expression." in result.stderr
  assert "Undefined variable 'nope'." in result.stderr
  assert result.returncode == 0


def test_dump_tokens(tmp_path: Path) -> None:
  result = run_cli("--tokens", write(tmp_path, "var x = 1;"))
  assert result.stdout.splitlines() == [
    "VAR var null", "IDENTIFIER x null", "EQUAL = null",
    "NUMBER 1 1.0", "SEMICOLON ; null", "EOF  null"]


def test_dump_ast(tmp_path: Path) -> None:
  result = run_cli("--ast", write(tmp_path, "print -1 + x;"))
  assert result.stdout == "(print (+ (- 1) x))\n"


def test_file_not_utf8(tmp_path: Path) -> None:
  path = tmp_path / "latin1.lox"
  path.write_bytes(b'print "caf\xe9";')
  result = run_cli(str(path))
  assert "not valid UTF-8" in result.stderr
  assert "Traceback" not in result.stderr
  assert result.returncode == 66
