import pytest

from pylox.parser import parse
from pylox.scanner import scan
from pylox.syntax import Expr, Stmt


def parse_source(source):
    tokens, scan_errors = scan(source)
    assert scan_errors == []
    return parse(tokens)


def parse_expression(source):
    statements, errors = parse_source(source + ";")
    assert errors == []
    [statement] = statements
    assert isinstance(statement, Stmt.Expression)
    return statement.expression


def test_factor_binds_tighter_than_term():
    match parse_expression("1 + 2 * 3"):
        case Expr.Binary(Expr.Literal(1.0), plus, Expr.Binary(Expr.Literal(2.0), star, Expr.Literal(3.0))):
            assert plus.type == "PLUS"
            assert star.type == "STAR"
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_binary_operators_are_left_associative():
    match parse_expression("1 - 2 - 3"):
        case Expr.Binary(Expr.Binary(Expr.Literal(1.0), _, Expr.Literal(2.0)), _, Expr.Literal(3.0)):
            pass
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_assignment_is_right_associative():
    match parse_expression("a = b = 1"):
        case Expr.Assign(a, Expr.Assign(b, Expr.Literal(1.0))):
            assert (a.lexeme, b.lexeme) == ("a", "b")
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_or_binds_looser_than_and():
    match parse_expression("a or b and c"):
        case Expr.Logical(Expr.Variable(), operator, Expr.Logical()):
            assert operator.type == "OR"
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_property_assignment_becomes_set():
    match parse_expression("a.b.c = 1"):
        case Expr.Set(Expr.Get(Expr.Variable(), b), c, Expr.Literal(1.0)):
            assert (b.lexeme, c.lexeme) == ("b", "c")
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_call_and_get_chain():
    match parse_expression("a.b(1, 2)(3)"):
        case Expr.Call(Expr.Call(Expr.Get(Expr.Variable(), _), _, first), _, second):
            assert len(first) == 2
            assert len(second) == 1
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_super_and_this():
    match parse_expression("super.method(this)"):
        case Expr.Call(Expr.Super(keyword, method), _, (Expr.This(),)):
            assert keyword.type == "SUPER"
            assert method.lexeme == "method"
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_for_desugars_to_while():
    statements, errors = parse_source("for (var i = 0; i < 3; i = i + 1) print i;")
    assert errors == []
    match statements:
        case [Stmt.Block((Stmt.Var(name, _), Stmt.While(Expr.Binary(), Stmt.Block((Stmt.Print(), Stmt.Expression(Expr.Assign()))))))]:
            assert name.lexeme == "i"
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_empty_for_clauses_loop_on_true():
    statements, errors = parse_source("for (;;) print 1;")
    assert errors == []
    match statements:
        case [Stmt.While(Expr.Literal(True), Stmt.Print())]:
            pass
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_class_declaration():
    statements, errors = parse_source("class B < A { init(x) {} greet() { return 1; } }")
    assert errors == []
    match statements:
        case [Stmt.Class(name, Expr.Variable(superclass), (init, greet))]:
            assert (name.lexeme, superclass.lexeme) == ("B", "A")
            assert [p.lexeme for p in init.params] == ["x"]
            assert greet.name.lexeme == "greet"
        case other:
            pytest.fail(f"unexpected tree {other!r}")


def test_nodes_are_immutable():
    expr = parse_expression("1 + 2")
    with pytest.raises(AttributeError):
        expr.left = None
    assert isinstance(expr, Expr)


def test_identical_references_are_distinct_nodes():
    expr = parse_expression("a + a")
    assert expr.left is not expr.right
    assert expr.left != expr.right
    assert len({expr.left, expr.right}) == 2


def test_error_at_end():
    _, errors = parse_source("print 1")
    assert [(e.where, e.message) for e in errors] == [(" at end", "Expect ';' after value.")]


def test_error_at_token():
    _, errors = parse_source("var 1 = 2;")
    assert [(e.where, e.message) for e in errors] == [(" at '1'", "Expect variable name.")]


def test_recovers_and_reports_every_syntax_error():
    statements, errors = parse_source("var a = ;\nprint a;\nvar = 3;\nprint 4;")
    assert [e.line for e in errors] == [1, 3]
    assert [type(s) for s in statements] == [Stmt.Print, Stmt.Print]


def test_invalid_assignment_target_is_reported_without_synchronizing():
    statements, errors = parse_source("1 + 2 = 3; print 5;")
    assert [(e.where, e.message) for e in errors] == [(" at '='", "Invalid assignment target.")]
    assert len(statements) == 2


def test_too_many_arguments():
    arguments = ", ".join(["1"] * 256)
    statements, errors = parse_source(f"f({arguments});")
    assert [e.message for e in errors] == ["Can't have more than 255 arguments."]
    assert len(statements[0].expression.arguments) == 256


def test_too_many_parameters():
    params = ", ".join(f"p{i}" for i in range(256))
    _, errors = parse_source(f"fun f({params}) {{}}")
    assert [e.message for e in errors] == ["Can't have more than 255 parameters."]
