"""Discarded values must carry an explicit type annotation."""

from typing import Iterator, Optional

from strict_style.domain.constants import DISCARD_OPERATION, PSEUDO_BINDING_MARKERS
from strict_style.domain.tree import (
    AnyPattern,
    Apply,
    Coerce,
    Constant,
    Constraint,
    Construct,
    Expression,
    Function,
    Ident,
    ValueBinding,
)
from strict_style.domain.violations import IgnoredReason, Violation

# Annotated (constraint, coercion) or unambiguous without one.
EXEMPT_SHAPES: tuple[type, ...] = (Constraint, Coerce, Construct, Constant, Ident, Function)


def is_pseudo_binding_marker(name: str) -> bool:
    """Extension markers (`test`, `bench`, ...) whose binding is a placeholder."""
    return name in PSEUDO_BINDING_MARKERS


def discarded_argument(expression: Apply) -> Optional[Expression]:
    """The argument of `ignore x`, or None when the application is anything else."""
    function = expression.function
    if not isinstance(function, Ident) or function.name != DISCARD_OPERATION:
        return None
    if len(expression.arguments) != 1:
        return None
    argument = expression.arguments[0]
    if argument.label is not None:
        return None
    return argument.value


class IgnoredValueRule:
    """
    An expression whose result is dropped must say what type it has.

    Values are dropped either by a wildcard binding (`_ = f(x)`) or by the
    discard operation (`ignore(f(x))`). Without an annotation a change to
    the type of `f(x)` (a partial application, a deferred result) goes
    unnoticed.
    """

    code: str = "ignored-value-missing-annotation"
    description: str = "Ignored expressions must come with a type annotation."

    def check_expression(self, expression: Expression, reason: IgnoredReason) -> Iterator[Violation]:
        if isinstance(expression, EXEMPT_SHAPES):
            return
        yield Violation.missing_type_annotation(reason, expression.location)

    def check_binding(self, binding: ValueBinding) -> Iterator[Violation]:
        if isinstance(binding.pattern, AnyPattern):
            yield from self.check_expression(binding.expression, IgnoredReason.UNDERSCORE_BINDING)

    def check_call(self, expression: Apply) -> Iterator[Violation]:
        argument = discarded_argument(expression)
        if argument is not None:
            yield from self.check_expression(argument, IgnoredReason.ARGUMENT_TO_DISCARD)
