from pylox.errors import ScanError
from pylox.tokens import KEYWORDS, Token


def is_digit(c):
    return "0" <= c <= "9"


def is_alpha(c):
    return "a" <= c <= "z" or "A" <= c <= "Z" or c == "_"


def is_alphanumeric(c):
    return is_alpha(c) or is_digit(c)


class Scanner:
    def __init__(self, source):
        self.source = source
        self.start = 0
        self.current = 0
        self.line = 1
        self.tokens = []
        self.errors = []

    def scan_tokens(self):
        while not self.at_end():
            self.start = self.current
            self.scan_token()
        self.tokens.append(Token("EOF", "", None, self.line))
        return self.tokens

    def scan_token(self):
        match c := self.advance():
            case "(": self.add_token("LEFT_PAREN")
            case ")": self.add_token("RIGHT_PAREN")
            case "{": self.add_token("LEFT_BRACE")
            case "}": self.add_token("RIGHT_BRACE")
            case ",": self.add_token("COMMA")
            case ".": self.add_token("DOT")
            case "-": self.add_token("MINUS")
            case "+": self.add_token("PLUS")
            case ";": self.add_token("SEMICOLON")
            case "*": self.add_token("STAR")
            case "!": self.add_token("BANG_EQUAL" if self.match("=") else "BANG")
            case "=": self.add_token("EQUAL_EQUAL" if self.match("=") else "EQUAL")
            case "<": self.add_token("LESS_EQUAL" if self.match("=") else "LESS")
            case ">": self.add_token("GREATER_EQUAL" if self.match("=") else "GREATER")
            case "/": self.comment() if self.match("/") else self.add_token("SLASH")
            case " " | "\r" | "\t": pass
            case "\n": self.line += 1
            case "\"": self.string()
            case _:
                if is_digit(c):
                    self.number()
                elif is_alpha(c):
                    self.identifier()
                else:
                    self.error("Unexpected character.")

    def comment(self):
        while self.peek() != "\n" and not self.at_end():
            self.current += 1

    def string(self):
        while self.peek() != "\"" and not self.at_end():
            if self.peek() == "\n":
                self.line += 1
            self.current += 1

        if self.at_end():
            self.error("Unterminated string.")
            return

        self.current += 1  # Closing "
        value = self.source[self.start + 1: self.current - 1]
        self.add_token("STRING", value)

    def number(self):
        while is_digit(self.peek()):
            self.current += 1

        # A trailing '.' belongs to the next token.
        if self.peek() == "." and is_digit(self.peek_next()):
            self.current += 1
            while is_digit(self.peek()):
                self.current += 1

        value = float(self.source[self.start:self.current])
        self.add_token("NUMBER", value)

    def identifier(self):
        while is_alphanumeric(self.peek()):
            self.current += 1

        text = self.source[self.start:self.current]
        if text in KEYWORDS:
            self.add_token(text.upper())
        else:
            self.add_token("IDENTIFIER")

    def add_token(self, type, literal=None):
        lexeme = self.source[self.start:self.current]
        self.tokens.append(Token(type, lexeme, literal, self.line))

    def error(self, message):
        self.errors.append(ScanError(self.line, message))

    def match(self, expected):
        if not self.at_end():
            if self.source[self.current] == expected:
                self.current += 1
                return True
        return False

    def advance(self):
        c = self.source[self.current]
        self.current += 1
        return c

    def peek(self):
        if self.at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    def at_end(self):
        return not self.current < len(self.source)


def scan(source):
    scanner = Scanner(source)
    tokens = scanner.scan_tokens()
    return tokens, scanner.errors
