from pylox.interpreter import Interpreter
from pylox.lox import Lox, Reporter
from pylox.parser import parse
from pylox.resolver import resolve
from pylox.scanner import scan

__all__ = ["Interpreter", "Lox", "Reporter", "parse", "resolve", "scan"]
