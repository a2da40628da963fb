from pylox.errors import Diagnostics
from pylox.parser import Parser
from pylox.printer import AstPrinter
from pylox.scanner import Scanner
from pylox.syntax import Expr, Stmt

from util import run_test


def parse(code: str) -> tuple[list, Diagnostics]:
  diagnostics = Diagnostics()
  tokens = Scanner(code, diagnostics).scan_tokens()
  return Parser(tokens, diagnostics).parse(), diagnostics


def printed(code: str) -> list[str]:
  statements, diagnostics = parse(code)
  assert not diagnostics.had_error
  return [AstPrinter().print(statement) for statement in statements]


def test_precedence() -> None:
  assert printed("-123 * (45.67);") == ["(; (* (- 123) (group 45.67)))"]
  assert printed("1 + 2 * 3 - 4 / 5;") == ["(; (- (+ 1 (* 2 3)) (/ 4 5)))"]
  assert printed("a or b and c == d < e;") == ["(; (or a (and b (== c (< d e)))))"]
  assert printed("!!true != nil;") == ["(; (!= (! (! true)) nil))"]


def test_assignment_is_right_associative() -> None:
  assert printed("a = b = 1;") == ["(; (= a (= b 1)))"]


def test_property_assignment() -> None:
  statements, _ = parse("a.b.c = 2;")
  expr = statements[0].expression
  assert isinstance(expr, Expr.Set)
  assert expr.name.lexeme == "c"
  assert isinstance(expr.object, Expr.Get)
  assert printed("a.b.c = 2;") == ["(; (= (. (. a b) c) 2))"]


def test_calls_and_properties() -> None:
  assert printed("f(1)(2, \"x\").g();") == [
    "(; (call (. (call (call f 1) 2 \"x\") g)))"]


def test_declarations() -> None:
  assert printed("var a; var b = 1;") == ["(var a)", "(var b = 1)"]
  assert printed("fun add(a, b) { return a + b; }") == [
    "(fun add (a b) (return (+ a b)))"]
  assert printed("class B < A { init() { this.x = super.y; } }") == [
    "(class B < A (fun init () (; (= (. this x) (super y)))))"]


def test_control_flow() -> None:
  assert printed("if (a) print 1; else { print 2; }") == [
    "(if a (print 1) (block (print 2)))"]
  assert printed("while (x) return;") == ["(while x (return))"]


def test_for_desugars_to_while() -> None:
  assert printed("for (var i = 0; i < 3; i = i + 1) print i;") == [
    "(block (var i = 0) (while (< i 3) (block (print i) (; (= i (+ i 1))))))"]
  assert printed("for (;;) print 1;") == ["(while true (print 1))"]


def test_for_is_equivalent_to_desugared_form() -> None:
  loop = run_test("for (var i = 0; i < 3; i = i + 1) print i;")
  desugared = run_test("{ var i = 0; while (i < 3) { print i; i = i + 1; } }")
  assert loop.lines == desugared.lines == ["0", "1", "2"]


def test_expressions_get_distinct_identities() -> None:
  statements, _ = parse("a; a;")
  first, second = statements[0].expression, statements[1].expression
  assert first.id != second.id
  assert first is not second


def test_invalid_assignment_target() -> None:
  result = run_test("1 + 2 = 3;")
  assert "[line 1] Error at '=': Invalid assignment target." in result.err
  assert result.status == 65


def test_missing_variable_name() -> None:
  result = run_test('print "x";\nvar 3 = 1;')
  assert "[line 2] Error at '3': Expect variable name." in result.err
  assert result.out == ""
  assert result.status == 65


def test_error_at_end() -> None:
  result = run_test("print 1")
  assert "[line 1] Error at end: Expect ';' after value." in result.err


def test_synchronize_reports_several_errors() -> None:
  statements, diagnostics = parse("var = 1; print 2; var 4; print 5;")
  assert diagnostics.had_error
  assert [type(statement) for statement in statements] == [Stmt.Print, Stmt.Print]


def test_too_many_arguments() -> None:
  arguments = ", ".join(["1"] * 256)
  result = run_test(f"f({arguments});")
  assert "Can't have more than 255 arguments." in result.err


def test_too_many_parameters() -> None:
  params = ", ".join(f"p{i}" for i in range(256))
  result = run_test(f"fun f({params}) {{}}")
  assert "Can't have more than 255 parameters." in result.err
