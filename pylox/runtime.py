from typing import Any, NamedTuple

from pylox.environment import Environment
from pylox.errors import LoxRuntimeError


class Return(NamedTuple):
    """Completion of a `return` statement, carried up to the call boundary."""
    value: Any


class LoxCallable:
    def arity(self):
        raise NotImplementedError()

    def call(self, interpreter, arguments):
        raise NotImplementedError()


class NativeFunction(LoxCallable):
    def __init__(self, name, arity, function):
        self.name = name
        self._arity = arity
        self.function = function

    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.function(*arguments)

    def __str__(self):
        return "<native fn>"


class LoxFunction(LoxCallable):
    def __init__(self, declaration, closure, is_initializer=False):
        self.declaration = declaration
        self.closure = closure
        self.is_initializer = is_initializer

    def arity(self):
        return len(self.declaration.params)

    def bind(self, instance):
        environment = Environment(self.closure)
        environment.define("this", instance)
        return LoxFunction(self.declaration, environment, self.is_initializer)

    def call(self, interpreter, arguments):
        environment = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            environment.define(param.lexeme, argument)

        completion = interpreter.execute_block(
            self.declaration.body, environment)

        if self.is_initializer:
            return self.closure.get_at(0, "this")
        if completion is not None:
            return completion.value
        return None

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"


class LoxClass(LoxCallable):
    def __init__(self, name, superclass, methods):
        self.name = name
        self.superclass = superclass
        self.methods = methods

    def find_method(self, name):
        klass = self
        while klass is not None:
            if name in klass.methods:
                return klass.methods[name]
            klass = klass.superclass
        return None

    def arity(self):
        initializer = self.find_method("init")
        return 0 if initializer is None else initializer.arity()

    def call(self, interpreter, arguments):
        instance = LoxInstance(self)
        initializer = self.find_method("init")
        if initializer is not None:
            initializer.bind(instance).call(interpreter, arguments)
        return instance

    def __str__(self):
        return self.name


class LoxInstance:
    def __init__(self, klass):
        self.klass = klass
        self.fields = {}

    def get(self, name):
        try:
            return self.fields[name.lexeme]
        except KeyError:
            pass

        method = self.klass.find_method(name.lexeme)
        if method is None:
            raise LoxRuntimeError(
                name, f"Undefined property '{name.lexeme}'.")
        return method.bind(self)

    def set(self, name, value):
        self.fields[name.lexeme] = value

    def __str__(self):
        return f"{self.klass} instance"
