from typing import Any, NamedTuple


KEYWORDS = {
    "and",
    "class",
    "else",
    "false",
    "for",
    "fun",
    "if",
    "nil",
    "or",
    "print",
    "return",
    "super",
    "this",
    "true",
    "var",
    "while",
}


class Token(NamedTuple):
    type: str
    lexeme: str
    literal: Any
    line: int

    def __str__(self):
        return f"{self.type} {self.lexeme} {self.literal}"
