"""Deprecation notices must be a string starting with `[since YYYY-MM]`."""

import re
from typing import Iterator, Optional

from strict_style.domain.constants import DEPRECATION_ATTRIBUTES
from strict_style.domain.tree import Attribute, Constant, EvalItem, StructurePayload
from strict_style.domain.violations import Violation, ViolationKind

# Unsigned ASCII year and month; the separator after "since" is any run of blanks.
_SINCE_DATE = re.compile(r"\[since[ \t\r\n]*([0-9]+)-([0-9]+)\]")


def single_string_payload(attribute: Attribute) -> Optional[str]:
    """Return the payload's string when it is exactly one plain string expression."""
    payload = attribute.payload
    if not isinstance(payload, StructurePayload) or len(payload.items) != 1:
        return None
    item = payload.items[0]
    if not isinstance(item, EvalItem) or item.attributes:
        return None
    expression = item.expression
    if isinstance(expression, Constant) and isinstance(expression.value, str):
        return expression.value
    return None


class DeprecationRule:
    """Validates the payload of every deprecation attribute."""

    code: str = "deprecated-since-date"
    description: str = "Deprecation payloads are strings that start with [since YYYY-MM]."

    @staticmethod
    def applies_to(attribute: Attribute) -> bool:
        return attribute.name in DEPRECATION_ATTRIBUTES

    def check(self, attribute: Attribute) -> Iterator[Violation]:
        if not self.applies_to(attribute):
            return
        text = single_string_payload(attribute)
        if text is None:
            yield Violation(ViolationKind.DEPRECATION_NOT_A_STRING, attribute.location)
            return
        match = _SINCE_DATE.match(text)
        if match is None:
            yield Violation(ViolationKind.DEPRECATION_MISSING_DATE, attribute.location)
            return
        month = int(match.group(2))
        if month == 0 or month > 12:
            yield Violation(ViolationKind.DEPRECATION_INVALID_MONTH, attribute.location)
