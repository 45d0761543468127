import argparse
import sys

from pylox.interpreter import Interpreter
from pylox.parser import parse
from pylox.resolver import resolve
from pylox.scanner import scan

# Each Lox call costs several Python frames.
RECURSION_LIMIT = 10_000


class Reporter:
    """Default diagnostic sink: writes every error to stderr."""

    def __init__(self, err=None):
        self.err = err
        self.had_error = False
        self.had_runtime_error = False

    def report_static(self, line, where, message):
        print(f"[line {line}] Error{where}: {message}", file=self.err or sys.stderr)
        self.had_error = True

    def report_runtime(self, line, message):
        print(f"{message}\n[line {line}]", file=self.err or sys.stderr)
        self.had_runtime_error = True

    def reset(self):
        self.had_error = False
        self.had_runtime_error = False


class Lox:
    def __init__(self, reporter=None, out=None):
        self.reporter = reporter or Reporter()
        self.interpreter = Interpreter(out)

    def run(self, source):
        tokens, scan_errors = scan(source)
        statements, parse_errors = parse(tokens)
        if not self.report(scan_errors + parse_errors):
            return False

        locals, resolve_errors = resolve(statements)
        if not self.report(resolve_errors):
            return False

        error = self.interpreter.interpret(statements, locals)
        if error is not None:
            self.reporter.report_runtime(error.line, error.message)
            return False
        return True

    def report(self, errors):
        for error in sorted(errors, key=lambda error: error.line):
            self.reporter.report_static(error.line, error.where, error.message)
        return not errors

    def run_file(self, filename):
        with open(filename, "r") as file:
            self.run(file.read())

        if self.reporter.had_error:
            return 65
        if self.reporter.had_runtime_error:
            return 70
        return 0

    def run_prompt(self):
        while True:
            try:
                line = input("> ")
            except EOFError:
                print()
                break
            self.run(line)
            self.reporter.reset()
        return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="pylox", description="Run Lox scripts")
    parser.add_argument("filename", nargs="?")
    args, extra = parser.parse_known_args(argv)
    if extra:
        print("Usage: pylox [script]")
        return 64

    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    lox = Lox()
    if args.filename is not None:
        return lox.run_file(args.filename)
    return lox.run_prompt()
