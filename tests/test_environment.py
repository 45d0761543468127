import pytest

from pylox.environment import Environment
from pylox.errors import LoxRuntimeError
from pylox.tokens import Token


def name(lexeme):
    return Token("IDENTIFIER", lexeme, None, 1)


def test_get_walks_the_chain():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    assert inner.get(name("a")) == 1.0


def test_define_shadows_and_overwrites():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.define("a", 2.0)
    inner.define("a", 3.0)
    assert inner.get(name("a")) == 3.0
    assert outer.get(name("a")) == 1.0


def test_assign_updates_the_defining_frame():
    outer = Environment()
    outer.define("a", 1.0)
    inner = Environment(outer)
    inner.assign(name("a"), 2.0)
    assert outer.values == {"a": 2.0}
    assert inner.values == {}


def test_undefined_variable():
    environment = Environment(Environment())
    with pytest.raises(LoxRuntimeError, match="Undefined variable 'missing'."):
        environment.get(name("missing"))
    with pytest.raises(LoxRuntimeError, match="Undefined variable 'missing'."):
        environment.assign(name("missing"), None)


def test_distance_access():
    root = Environment()
    middle = Environment(root)
    leaf = Environment(middle)
    root.define("x", "root")
    middle.define("x", "middle")
    assert leaf.ancestor(2) is root
    assert leaf.get_at(1, "x") == "middle"
    assert leaf.get_at(2, "x") == "root"
    leaf.assign_at(2, "x", "changed")
    assert root.values["x"] == "changed"


def test_frames_are_shared_by_reference():
    shared = Environment()
    shared.define("count", 0.0)
    first, second = Environment(shared), Environment(shared)
    first.assign(name("count"), 1.0)
    assert second.get(name("count")) == 1.0
