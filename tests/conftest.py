"""Shared fixtures for the pylox test suite."""

import io
from dataclasses import dataclass

import pytest

from pylox.lox import Lox, Reporter


@dataclass
class Result:
    ok: bool
    out: str
    err: str

    @property
    def lines(self):
        return self.out.splitlines()


@pytest.fixture
def run():
    """Run Lox source through the full pipeline and capture both streams."""

    def _run(source):
        out, err = io.StringIO(), io.StringIO()
        ok = Lox(Reporter(err), out).run(source)
        return Result(ok, out.getvalue(), err.getvalue())

    return _run
