"""Helpers to build module trees and comments by hand."""

from typing import Optional

from strict_style.domain.location import Position, SourceLocation
from strict_style.domain.rules import RawComment
from strict_style.domain.tree import (
    AnyPattern,
    Apply,
    Argument,
    Attribute,
    Constant,
    EvalItem,
    Expression,
    Ident,
    Module,
    ModuleKind,
    StructurePayload,
    ValueBinding,
    ValueItem,
    VarPattern,
)


def loc(
    line: int = 1,
    column: int = 0,
    end_line: Optional[int] = None,
    end_column: Optional[int] = None,
    filename: str = "src/mock_module.py",
    line_start: int = 0,
) -> SourceLocation:
    """Span on a line starting at `line_start`; columns are relative to it."""
    end_line = line if end_line is None else end_line
    end_column = column + 1 if end_column is None else end_column
    end_line_start = line_start if end_line == line else 0
    return SourceLocation(
        filename,
        Position(line, line_start, line_start + column),
        Position(end_line, end_line_start, end_line_start + end_column),
    )


def string_payload(text: object) -> StructurePayload:
    return StructurePayload((EvalItem(Constant(text, loc()), loc()),))


def deprecated(text: object, name: str = "deprecated", line: int = 1) -> Attribute:
    return Attribute(name, string_payload(text), loc(line))


def ignore(argument: Expression, line: int = 1) -> Apply:
    return Apply(Ident("ignore", loc(line)), (Argument(argument),), loc(line))


def call(function: str, *arguments: Expression, line: int = 1) -> Apply:
    return Apply(Ident(function, loc(line)), tuple(Argument(arg) for arg in arguments), loc(line))


def underscore_binding(expression: Expression, line: int = 1) -> ValueItem:
    return ValueItem((ValueBinding(AnyPattern(loc(line)), expression, loc(line)),), loc(line))


def named_binding(name: str, expression: Expression, line: int = 1) -> ValueItem:
    return ValueItem((ValueBinding(VarPattern(name, loc(line)), expression, loc(line)),), loc(line))


def structure(*items, filename: str = "src/mock_module.py") -> Module:
    return Module(ModuleKind.STRUCTURE, filename, tuple(items))


def signature(*items, filename: str = "src/mock_module.pyi") -> Module:
    return Module(ModuleKind.SIGNATURE, filename, tuple(items))


def comment(text: str, line: int = 1, column: int = 0, filename: str = "src/mock_module.py") -> RawComment:
    return RawComment(text, loc(line, column, end_column=column + len(text) + 1, filename=filename))
