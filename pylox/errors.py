class LoxError(Exception):
    def __init__(self, line, message):
        super().__init__(message)
        self.line = line
        self.message = message


class StaticError(LoxError):
    def __init__(self, line, where, message):
        super().__init__(line, message)
        self.where = where

    def __str__(self):
        return f"[line {self.line}] Error{self.where}: {self.message}"


class ScanError(StaticError):
    def __init__(self, line, message):
        super().__init__(line, "", message)


def where_of(token):
    if token.type == "EOF":
        return " at end"
    return f" at '{token.lexeme}'"


class ParseError(StaticError):
    def __init__(self, token, message):
        super().__init__(token.line, where_of(token), message)
        self.token = token


class ResolutionError(StaticError):
    def __init__(self, token, message):
        super().__init__(token.line, where_of(token), message)
        self.token = token


class LoxRuntimeError(LoxError):
    def __init__(self, token, message):
        super().__init__(token.line, message)
        self.token = token

    def __str__(self):
        return f"{self.message}\n[line {self.line}]"
