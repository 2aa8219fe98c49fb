"""Violation taxonomy and the fatal reporter."""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, NoReturn, Optional

from strict_style.domain.constants import (
    DOC_ERROR_PREFIX,
    DOC_SYNTAX_REFERENCE,
    STYLE_ERROR_PREFIX,
)
from strict_style.domain.location import SourceLocation


class ViolationKind(Enum):
    """Closed set of reasons a check fails. Values are the message symbols."""

    DEPRECATION_NOT_A_STRING = "deprecated-not-a-string"
    DEPRECATION_MISSING_DATE = "deprecated-missing-date"
    DEPRECATION_INVALID_MONTH = "deprecated-invalid-month"
    MISSING_TYPE_ANNOTATION = "ignored-value-missing-annotation"
    COMMENT_NOT_ALLOWED_IN_INTERFACE = "comment-not-allowed-in-interface"
    DOCUMENTATION_SYNTAX_ERROR = "doc-comment-syntax-error"

    @property
    def symbol(self) -> str:
        return self.value


class IgnoredReason(Enum):
    ARGUMENT_TO_DISCARD = "argument-to-discard"
    UNDERSCORE_BINDING = "underscore-binding"


_STYLE_MESSAGES: dict[ViolationKind, str] = {
    ViolationKind.DEPRECATION_NOT_A_STRING: "Invalid deprecated payload, must be a string",
    ViolationKind.DEPRECATION_MISSING_DATE: (
        "deprecated message must start with the date in this format: [since YYYY-MM]"
    ),
    ViolationKind.DEPRECATION_INVALID_MONTH: "invalid month in deprecation date",
    ViolationKind.MISSING_TYPE_ANNOTATION: "Ignored expression must come with a type annotation",
}

_INTERFACE_COMMENT_MESSAGE = (
    "That kind of comment shouldn't be present in interfaces.\n"
    "Either turn it to a documentation comment or use the special '#_' form."
)


@dataclass(frozen=True)
class Violation:
    """One located rule failure. `detail` carries the sub-parser message for doc errors."""

    kind: ViolationKind
    location: SourceLocation
    reason: Optional[IgnoredReason] = None
    detail: Optional[str] = None

    @classmethod
    def missing_type_annotation(
        cls, reason: IgnoredReason, location: SourceLocation
    ) -> "Violation":
        return cls(ViolationKind.MISSING_TYPE_ANNOTATION, location, reason=reason)

    @classmethod
    def documentation_syntax_error(cls, message: str, location: SourceLocation) -> "Violation":
        return cls(ViolationKind.DOCUMENTATION_SYNTAX_ERROR, location, detail=message)

    @property
    def symbol(self) -> str:
        return self.kind.symbol

    @property
    def message(self) -> str:
        if self.kind is ViolationKind.COMMENT_NOT_ALLOWED_IN_INTERFACE:
            return DOC_ERROR_PREFIX + _INTERFACE_COMMENT_MESSAGE
        if self.kind is ViolationKind.DOCUMENTATION_SYNTAX_ERROR:
            return (
                f"{DOC_ERROR_PREFIX}{self.detail}\n"
                f"You can look at {DOC_SYNTAX_REFERENCE}\n"
                "for a description of the recognized syntax."
            )
        return STYLE_ERROR_PREFIX + _STYLE_MESSAGES[self.kind]

    def render(self) -> str:
        return f"{self.location}: {self.message}"


class StyleViolationError(Exception):
    """Fatal, located style error. Aborts the check of the current module."""

    def __init__(self, violation: Violation) -> None:
        super().__init__(violation.render())
        self.violation = violation

    @property
    def location(self) -> SourceLocation:
        return self.violation.location


FailureCallback = Callable[[Violation], None]


def fail(violation: Violation) -> NoReturn:
    """Default failure callback: turn the violation into a fatal error."""
    raise StyleViolationError(violation)
