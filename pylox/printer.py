from pylox.runtime import stringify
from pylox.syntax import Expr, Stmt


class AstPrinter:
    """Renders syntax trees as fully parenthesized prefix expressions.

    ``-123 * (45.67)`` prints as ``(* (- 123) (group 45.67))``.
    """

    def print(self, node):
        if isinstance(node, Stmt):
            return self.print_stmt(node)
        return self.print_expr(node)

    def print_expr(self, expr):
        match expr:
            case Expr.Assign(name, value):
                return self.parenthesize("=", name.lexeme, value)
            case Expr.Binary(left, operator, right) | Expr.Logical(left, operator, right):
                return self.parenthesize(operator.lexeme, left, right)
            case Expr.Call(callee, _, arguments):
                return self.parenthesize("call", callee, *arguments)
            case Expr.Get(obj, name):
                return self.parenthesize(".", obj, name.lexeme)
            case Expr.Grouping(expression):
                return self.parenthesize("group", expression)
            case Expr.Literal(value):
                if isinstance(value, str):
                    return f'"{value}"'
                return stringify(value)
            case Expr.Set(obj, name, value):
                return self.parenthesize(
                    "=", self.parenthesize(".", obj, name.lexeme), value)
            case Expr.Super(_, method):
                return self.parenthesize("super", method.lexeme)
            case Expr.This():
                return "this"
            case Expr.Unary(operator, right):
                return self.parenthesize(operator.lexeme, right)
            case Expr.Variable(name):
                return name.lexeme
        raise TypeError(f"Unknown expression: {expr!r}")

    def print_stmt(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                return self.parenthesize("block", *statements)
            case Stmt.Class(name, superclass, methods):
                parts = [name.lexeme]
                if superclass is not None:
                    parts += ["<", superclass]
                return self.parenthesize("class", *parts, *methods)
            case Stmt.Expression(expression):
                return self.parenthesize(";", expression)
            case Stmt.Function(name, params, body):
                params = "(" + " ".join(param.lexeme for param in params) + ")"
                return self.parenthesize("fun", name.lexeme, params, *body)
            case Stmt.If(condition, then_branch, None):
                return self.parenthesize("if", condition, then_branch)
            case Stmt.If(condition, then_branch, else_branch):
                return self.parenthesize("if", condition, then_branch, else_branch)
            case Stmt.Print(expression):
                return self.parenthesize("print", expression)
            case Stmt.Return(_, None):
                return "(return)"
            case Stmt.Return(_, value):
                return self.parenthesize("return", value)
            case Stmt.Var(name, None):
                return self.parenthesize("var", name.lexeme)
            case Stmt.Var(name, initializer):
                return self.parenthesize("var", name.lexeme, "=", initializer)
            case Stmt.While(condition, body):
                return self.parenthesize("while", condition, body)
        raise TypeError(f"Unknown statement: {stmt!r}")

    def parenthesize(self, name, *parts):
        text = [name]
        for part in parts:
            text.append(part if isinstance(part, str) else self.print(part))
        return "(" + " ".join(text) + ")"
