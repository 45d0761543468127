import math
import time

from pylox.environment import Environment
from pylox.errors import LoxRuntimeError
from pylox.runtime import LoxCallable, LoxClass, LoxFunction, LoxInstance, NativeFunction, Return
from pylox.syntax import Expr, Stmt


def is_truthy(value):
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    if left is None:
        return right is None
    # bool is a subclass of int in Python, but true is never equal to 1 in Lox.
    if type(left) is not type(right):
        return False
    # NaN is equal to itself in Lox.
    if isinstance(left, float) and math.isnan(left):
        return math.isnan(right)
    return left == right


def stringify(value):
    match value:
        case None:
            return "nil"
        case bool():
            return "true" if value else "false"
        case float():
            if math.isnan(value):
                return "NaN"
            if math.isinf(value):
                return "Infinity" if value > 0 else "-Infinity"
            text = str(value)
            if text.endswith(".0"):
                text = text[:-2]
            return text
        case _:
            return str(value)


def divide(left, right):
    if right != 0.0:
        return left / right
    if left == 0.0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


class Interpreter:
    def __init__(self, out=None):
        self.out = out
        self.globals = Environment()
        self.environment = self.globals
        self.locals = {}

        self.define_native("clock", 0, time.time)

    def define_native(self, name, arity, function):
        self.globals.define(name, NativeFunction(name, arity, function))

    def interpret(self, statements, locals=None):
        if locals:
            self.locals.update(locals)
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            return error
        return None

    def execute_block(self, statements, environment):
        previous = self.environment
        try:
            self.environment = environment
            for statement in statements:
                if (completion := self.execute(statement)) is not None:
                    return completion
            return None
        finally:
            self.environment = previous

    def execute(self, stmt):
        match stmt:
            case Stmt.Block(statements):
                return self.execute_block(statements, Environment(self.environment))
            case Stmt.Class():
                self.execute_class(stmt)
            case Stmt.Expression(expression):
                self.evaluate(expression)
            case Stmt.Function(name):
                function = LoxFunction(stmt, self.environment)
                self.environment.define(name.lexeme, function)
            case Stmt.If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
            case Stmt.Print(expression):
                value = self.evaluate(expression)
                print(stringify(value), file=self.out)
            case Stmt.Return(_, value):
                return Return(None if value is None else self.evaluate(value))
            case Stmt.Var(name, initializer):
                value = None
                if initializer is not None:
                    value = self.evaluate(initializer)
                self.environment.define(name.lexeme, value)
            case Stmt.While(condition, body):
                while is_truthy(self.evaluate(condition)):
                    if (completion := self.execute(body)) is not None:
                        return completion
            case _:
                raise TypeError(f"Unknown statement {stmt!r}")
        return None

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
                distance = self.locals.get(expr)
                if distance is not None:
                    self.environment.assign_at(distance, name.lexeme, value)
                else:
                    self.globals.assign(name, value)
                return value
            case Expr.Binary(left, operator, right):
                return self.evaluate_binary(
                    operator, self.evaluate(left), self.evaluate(right))
            case Expr.Call(callee, paren, arguments):
                return self.evaluate_call(callee, paren, arguments)
            case Expr.Get(obj, name):
                obj = self.evaluate(obj)
                if isinstance(obj, LoxInstance):
                    return obj.get(name)
                raise LoxRuntimeError(name, "Only instances have properties.")
            case Expr.Grouping(expression):
                return self.evaluate(expression)
            case Expr.Literal(value):
                return value
            case Expr.Logical(left, operator, right):
                left = self.evaluate(left)
                if operator.type == "OR":
                    if is_truthy(left):
                        return left
                elif not is_truthy(left):
                    return left
                return self.evaluate(right)
            case Expr.Set(obj, name, value):
                obj = self.evaluate(obj)
                if not isinstance(obj, LoxInstance):
                    raise LoxRuntimeError(name, "Only instances have fields.")
                value = self.evaluate(value)
                obj.set(name, value)
                return value
            case Expr.Super(_, method):
                return self.evaluate_super(expr, method)
            case Expr.This(keyword):
                return self.lookup_variable(keyword, expr)
            case Expr.Unary(operator, right):
                right = self.evaluate(right)
                match operator.type:
                    case "BANG":
                        return not is_truthy(right)
                    case "MINUS":
                        self.check_number_operands(operator, right)
                        return -right
            case Expr.Variable(name):
                return self.lookup_variable(name, expr)
        raise TypeError(f"Unknown expression {expr!r}")

    def evaluate_binary(self, operator, left, right):
        match operator.type:
            case "BANG_EQUAL":
                return not is_equal(left, right)
            case "EQUAL_EQUAL":
                return is_equal(left, right)
            case "PLUS":
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxRuntimeError(
                    operator, "Operands must be two numbers or two strings.")

        self.check_number_operands(operator, left, right)
        match operator.type:
            case "GREATER":
                return left > right
            case "GREATER_EQUAL":
                return left >= right
            case "LESS":
                return left < right
            case "LESS_EQUAL":
                return left <= right
            case "MINUS":
                return left - right
            case "SLASH":
                return divide(left, right)
            case "STAR":
                return left * right
        raise TypeError(f"Unknown binary operator {operator.lexeme!r}")

    def evaluate_call(self, callee, paren, arguments):
        callee = self.evaluate(callee)
        arguments = [self.evaluate(argument) for argument in arguments]

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

    def evaluate_super(self, expr, method):
        distance = self.locals[expr]
        superclass = self.environment.get_at(distance, "super")
        # "this" is always bound one environment inside "super".
        instance = self.environment.get_at(distance - 1, "this")

        function = superclass.find_method(method.lexeme)
        if function is None:
            raise LoxRuntimeError(
                method, f"Undefined property '{method.lexeme}'.")
        return function.bind(instance)

    def lookup_variable(self, name, expr):
        distance = self.locals.get(expr)
        if distance is not None:
            return self.environment.get_at(distance, name.lexeme)
        return self.globals.get(name)

    def check_number_operands(self, operator, *operands):
        if all(isinstance(operand, float) for operand in operands):
            return
        if len(operands) == 1:
            raise LoxRuntimeError(operator, "Operand must be a number.")
        raise LoxRuntimeError(operator, "Operands must be numbers.")
