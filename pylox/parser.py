from pylox.errors import ParseError
from pylox.syntax import Expr, Stmt

MAX_ARGUMENTS = 255


class Parser:
    def __init__(self, tokens):
        self.tokens = tokens
        self.current = 0
        self.errors = []

    def parse(self):
        statements = []
        while not self.at_end():
            if (statement := self.declaration()) is not None:
                statements.append(statement)
        return statements

    def declaration(self):
        try:
            if self.match("CLASS"):
                return self.class_declaration()
            if self.match("FUN"):
                return self.function("function")
            if self.match("VAR"):
                return self.var_declaration()
            return self.statement()
        except ParseError:
            self.synchronize()
            return None

    def class_declaration(self):
        name = self.consume("IDENTIFIER", "Expect class name.")

        superclass = None
        if self.match("LESS"):
            superclass = Expr.Variable(self.consume(
                "IDENTIFIER", "Expect superclass name."))

        self.consume("LEFT_BRACE", "Expect '{' before class body.")

        methods = []
        while not self.at_end() and self.peek().type != "RIGHT_BRACE":
            methods.append(self.function("method"))

        self.consume("RIGHT_BRACE", "Expect '}' after class body.")
        return Stmt.Class(name, superclass, methods)

    def function(self, kind):
        name = self.consume("IDENTIFIER", f"Expect {kind} name.")
        self.consume("LEFT_PAREN", f"Expect '(' after {kind} name.")

        params = []
        if self.peek().type != "RIGHT_PAREN":
            params.append(self.consume(
                "IDENTIFIER", "Expect parameter name."))
            while self.match("COMMA"):
                if len(params) >= MAX_ARGUMENTS:
                    self.error(
                        self.peek(), f"Can't have more than {MAX_ARGUMENTS} parameters.")
                params.append(self.consume(
                    "IDENTIFIER", "Expect parameter name."))

        self.consume("RIGHT_PAREN", "Expect ')' after parameters.")
        self.consume("LEFT_BRACE", f"Expect '{{' before {kind} body.")
        return Stmt.Function(name, params, self.block())

    def statement(self):
        if self.match("FOR"):
            return self.for_statement()
        if self.match("IF"):
            return self.if_statement()
        if self.match("PRINT"):
            return self.print_statement()
        if keyword := self.match("RETURN"):
            return self.return_statement(keyword)
        if self.match("WHILE"):
            return self.while_statement()
        if self.match("LEFT_BRACE"):
            return Stmt.Block(self.block())
        return self.expression_statement()

    def block(self):
        statements = []
        while self.peek().type != "RIGHT_BRACE" and not self.at_end():
            if (statement := self.declaration()) is not None:
                statements.append(statement)
        self.consume("RIGHT_BRACE", "Expect '}' after block.")
        return statements

    def for_statement(self):
        self.consume("LEFT_PAREN", "Expect '(' after 'for'.")

        if self.match("SEMICOLON"):
            initializer = None
        elif self.match("VAR"):
            initializer = self.var_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if self.peek().type != "SEMICOLON":
            condition = self.expression()
        self.consume("SEMICOLON", "Expect ';' after loop condition.")

        increment = None
        if self.peek().type != "RIGHT_PAREN":
            increment = self.expression()
        self.consume("RIGHT_PAREN", "Expect ')' after for clauses.")

        body = self.statement()

        if increment is not None:
            body = Stmt.Block([body, Stmt.Expression(increment)])
        if condition is None:
            condition = Expr.Literal(True)
        body = Stmt.While(condition, body)
        if initializer is not None:
            body = Stmt.Block([initializer, body])
        return body

    def if_statement(self):
        self.consume("LEFT_PAREN", "Expect '(' after 'if'.")
        condition = self.expression()
        self.consume("RIGHT_PAREN", "Expect ')' after if condition.")
        then_branch = self.statement()
        else_branch = None
        if self.match("ELSE"):
            else_branch = self.statement()
        return Stmt.If(condition, then_branch, else_branch)

    def expression_statement(self):
        expression = self.expression()
        self.consume("SEMICOLON", "Expect ';' after expression.")
        return Stmt.Expression(expression)

    def print_statement(self):
        expression = self.expression()
        self.consume("SEMICOLON", "Expect ';' after value.")
        return Stmt.Print(expression)

    def return_statement(self, keyword):
        value = None
        if self.peek().type != "SEMICOLON":
            value = self.expression()
        self.consume("SEMICOLON", "Expect ';' after return value.")
        return Stmt.Return(keyword, value)

    def var_declaration(self):
        name = self.consume("IDENTIFIER", "Expect variable name.")
        initializer = None
        if self.match("EQUAL"):
            initializer = self.expression()
        self.consume("SEMICOLON", "Expect ';' after variable declaration.")
        return Stmt.Var(name, initializer)

    def while_statement(self):
        self.consume("LEFT_PAREN", "Expect '(' after 'while'.")
        condition = self.expression()
        self.consume("RIGHT_PAREN", "Expect ')' after condition.")
        body = self.statement()
        return Stmt.While(condition, body)

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.logic_or()
        if equals := self.match("EQUAL"):
            value = self.assignment()
            match expr:
                case Expr.Variable(name):
                    return Expr.Assign(name, value)
                case Expr.Get(obj, name):
                    return Expr.Set(obj, name, value)
            # Reported, but the parser is not confused, so no synchronize.
            self.error(equals, "Invalid assignment target.")
        return expr

    def logic_or(self):
        expr = self.logic_and()
        while operator := self.match("OR"):
            expr = Expr.Logical(expr, operator, self.logic_and())
        return expr

    def logic_and(self):
        expr = self.equality()
        while operator := self.match("AND"):
            expr = Expr.Logical(expr, operator, self.equality())
        return expr

    def equality(self):
        expr = self.comparison()
        while operator := self.match("BANG_EQUAL", "EQUAL_EQUAL"):
            expr = Expr.Binary(expr, operator, self.comparison())
        return expr

    def comparison(self):
        expr = self.term()
        while operator := self.match("GREATER", "GREATER_EQUAL", "LESS", "LESS_EQUAL"):
            expr = Expr.Binary(expr, operator, self.term())
        return expr

    def term(self):
        expr = self.factor()
        while operator := self.match("MINUS", "PLUS"):
            expr = Expr.Binary(expr, operator, self.factor())
        return expr

    def factor(self):
        expr = self.unary()
        while operator := self.match("SLASH", "STAR"):
            expr = Expr.Binary(expr, operator, self.unary())
        return expr

    def unary(self):
        if operator := self.match("BANG", "MINUS"):
            return Expr.Unary(operator, self.unary())
        return self.call()

    def call(self):
        expr = self.primary()
        while True:
            if self.match("LEFT_PAREN"):
                expr = self.finish_call(expr)
            elif self.match("DOT"):
                name = self.consume(
                    "IDENTIFIER", "Expect property name after '.'.")
                expr = Expr.Get(expr, name)
            else:
                break
        return expr

    def finish_call(self, callee):
        arguments = []
        if self.peek().type != "RIGHT_PAREN":
            arguments.append(self.expression())
            while self.match("COMMA"):
                if len(arguments) >= MAX_ARGUMENTS:
                    self.error(
                        self.peek(), f"Can't have more than {MAX_ARGUMENTS} arguments.")
                arguments.append(self.expression())
        paren = self.consume("RIGHT_PAREN", "Expect ')' after arguments.")
        return Expr.Call(callee, paren, arguments)

    def primary(self):
        if self.match("FALSE"):
            return Expr.Literal(False)
        if self.match("TRUE"):
            return Expr.Literal(True)
        if self.match("NIL"):
            return Expr.Literal(None)
        if token := self.match("NUMBER", "STRING"):
            return Expr.Literal(token.literal)
        if keyword := self.match("SUPER"):
            self.consume("DOT", "Expect '.' after 'super'.")
            method = self.consume(
                "IDENTIFIER", "Expect superclass method name.")
            return Expr.Super(keyword, method)
        if keyword := self.match("THIS"):
            return Expr.This(keyword)
        if token := self.match("IDENTIFIER"):
            return Expr.Variable(token)
        if self.match("LEFT_PAREN"):
            expr = self.expression()
            self.consume("RIGHT_PAREN", "Expect ')' after expression.")
            return Expr.Grouping(expr)
        raise self.error(self.peek(), "Expect expression.")

    def synchronize(self):
        self.advance()
        while not self.at_end():
            if self.previous().type == "SEMICOLON":
                return
            match self.peek().type:
                case "CLASS" | "FUN" | "VAR" | "FOR" | "IF" | "WHILE" | "PRINT" | "RETURN":
                    return
            self.advance()

    def consume(self, token_type, message):
        if token := self.match(token_type):
            return token
        raise self.error(self.peek(), message)

    def match(self, *token_types):
        if self.peek().type in token_types:
            return self.advance()
        return None

    def advance(self):
        token = self.peek()
        if not self.at_end():
            self.current += 1
        return token

    def at_end(self):
        return self.peek().type == "EOF"

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def error(self, token, message):
        error = ParseError(token, message)
        self.errors.append(error)
        return error


def parse(tokens):
    parser = Parser(tokens)
    statements = parser.parse()
    return statements, parser.errors
