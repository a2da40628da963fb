import math
import time

from pylox.environment import Environment
from pylox.errors import LoxRuntimeError, Return
from pylox.runtime import (
    LoxCallable, LoxClass, LoxFunction, LoxInstance, NativeFunction,
    is_equal, is_truthy, stringify)
from pylox.syntax import Expr, Stmt
from pylox.tokens import TokenType


def divide(left, right):
    try:
        return left / right
    except ZeroDivisionError:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)


def check_number_operand(operator, operand):
    if not isinstance(operand, float):
        raise LoxRuntimeError(operator, "Operand must be a number.")


def check_number_operands(operator, left, right):
    if not isinstance(left, float) or not isinstance(right, float):
        raise LoxRuntimeError(operator, "Operands must be numbers.")


class Interpreter:
    def __init__(self, diagnostics):
        self.diagnostics = diagnostics
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}

        self.globals.define("clock", NativeFunction("clock", 0, time.time))

    def interpret(self, statements):
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            self.diagnostics.runtime_error(error)

    def resolve(self, expr, depth):
        self.locals[expr.id] = depth

    def execute_block(self, statements, environment):
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                self.execute(statement)
        finally:
            self.environment = previous

    def execute(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                self.execute_block(statements, Environment(self.environment))
            case Stmt.Class():
                self.execute_class(stmt)
            case Stmt.Expression(expression):
                self.evaluate(expression)
            case Stmt.Function(name):
                function = LoxFunction(stmt, self.environment, False)
                self.environment.define(name.lexeme, function)
            case Stmt.If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition)):
                    self.execute(then_branch)
                elif else_branch is not None:
                    self.execute(else_branch)
            case Stmt.Print(expression):
                print(stringify(self.evaluate(expression)))
            case Stmt.Return(_, value):
                raise Return(None if value is None else self.evaluate(value))
            case Stmt.Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case Stmt.While(condition, body):
                while is_truthy(self.evaluate(condition)):
                    self.execute(body)
            case _:
                raise TypeError(f"Unknown statement: {stmt!r}")

    def execute_class(self, stmt):
        superclass = None
        if stmt.superclass is not None:
            superclass = self.evaluate(stmt.superclass)
            if not isinstance(superclass, LoxClass):
                raise LoxRuntimeError(
                    stmt.superclass.name, "Superclass must be a class.")

        self.environment.define(stmt.name.lexeme, None)

        if superclass is not None:
            self.environment = Environment(self.environment)
            self.environment.define("super", superclass)

        methods = {
            method.name.lexeme: LoxFunction(
                method, self.environment, method.name.lexeme == "init")
            for method in stmt.methods}

        klass = LoxClass(stmt.name.lexeme, superclass, methods)

        if superclass is not None:
            self.environment = self.environment.enclosing

        self.environment.assign(stmt.name, klass)

    def evaluate(self, expr):
        match expr:
            case Expr.Assign(name, value):
                value = self.evaluate(value)
                distance = self.locals.get(expr.id)
                if distance is not None:
                    self.environment.assign_at(distance, name, value)
                else:
                    self.globals.assign(name, value)
                return value
            case Expr.Binary(left, operator, right):
                return self.binary(
                    self.evaluate(left), operator, self.evaluate(right))
            case Expr.Call(callee, paren, arguments):
                return self.call(
                    self.evaluate(callee), paren,
                    [self.evaluate(argument) for argument in arguments])
            case Expr.Get(obj, name):
                instance = self.evaluate(obj)
                if isinstance(instance, LoxInstance):
                    return instance.get(name)
                raise LoxRuntimeError(name, "Only instances have properties.")
            case Expr.Grouping(expression):
                return self.evaluate(expression)
            case Expr.Literal(value):
                return value
            case Expr.Logical(left, operator, right):
                left = self.evaluate(left)
                if operator.type == TokenType.OR:
                    if is_truthy(left):
                        return left
                elif not is_truthy(left):
                    return left
                return self.evaluate(right)
            case Expr.Set(obj, name, value):
                instance = self.evaluate(obj)
                if not isinstance(instance, LoxInstance):
                    raise LoxRuntimeError(name, "Only instances have fields.")
                value = self.evaluate(value)
                instance.set(name, value)
                return value
            case Expr.Super(_, method):
                return self.super_method(expr, method)
            case Expr.This(keyword):
                return self.lookup_variable(keyword, expr)
            case Expr.Unary(operator, right):
                right = self.evaluate(right)
                if operator.type == TokenType.MINUS:
                    check_number_operand(operator, right)
                    return -right
                return not is_truthy(right)
            case Expr.Variable(name):
                return self.lookup_variable(name, expr)
            case _:
                raise TypeError(f"Unknown expression: {expr!r}")

    def binary(self, left, operator, right):
        match operator.type:
            case TokenType.BANG_EQUAL:
                return not is_equal(left, right)
            case TokenType.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenType.GREATER:
                check_number_operands(operator, left, right)
                return left > right
            case TokenType.GREATER_EQUAL:
                check_number_operands(operator, left, right)
                return left >= right
            case TokenType.LESS:
                check_number_operands(operator, left, right)
                return left < right
            case TokenType.LESS_EQUAL:
                check_number_operands(operator, left, right)
                return left <= right
            case TokenType.MINUS:
                check_number_operands(operator, left, right)
                return left - right
            case TokenType.PLUS:
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxRuntimeError(
                    operator, "Operands must be two numbers or two strings.")
            case TokenType.SLASH:
                check_number_operands(operator, left, right)
                return divide(left, right)
            case TokenType.STAR:
                check_number_operands(operator, left, right)
                return left * right
        raise LoxRuntimeError(operator, f"Unknown operator '{operator.lexeme}'.")

    def call(self, callee, paren, arguments):
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(
                paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity():
            raise LoxRuntimeError(
                paren, f"Expected {callee.arity()} arguments but got {len(arguments)}.")
        try:
            return callee.call(self, arguments)
        except RecursionError:
            raise LoxRuntimeError(paren, "Stack overflow.") from None

    def super_method(self, expr, method):
        distance = self.locals[expr.id]
        superclass = self.environment.get_at(distance, "super")
        # "this" is bound in the scope just inside the one holding "super".
        instance = self.environment.get_at(distance - 1, "this")

        bound = superclass.find_method(method.lexeme)
        if bound is None:
            raise LoxRuntimeError(
                method, f"Undefined property '{method.lexeme}'.")
        return bound.bind(instance)

    def lookup_variable(self, name, expr):
        distance = self.locals.get(expr.id)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)
