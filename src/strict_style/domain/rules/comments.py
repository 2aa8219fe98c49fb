"""Comment classification and the comment policy for a module."""

import os
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Iterator

from strict_style.domain.constants import ACTION_ITEM_PREFIXES, INTERFACE_MODULE_SUFFIX
from strict_style.domain.location import SourceLocation
from strict_style.domain.rules.doc_syntax import DocSyntaxRule
from strict_style.domain.violations import Violation, ViolationKind


@dataclass(frozen=True)
class RawComment:
    """A comment as scanned from the source: text without delimiters, possibly empty."""

    text: str
    location: SourceLocation


# The classifiers assume a non-empty text.


def is_documentation(text: str) -> bool:
    return text[0] == "*"


def is_suppressed(text: str) -> bool:
    return text[0] == "_"


def is_action_item(text: str) -> bool:
    return text.strip().startswith(ACTION_ITEM_PREFIXES)


def allowed_in_interface(text: str) -> bool:
    return is_documentation(text) or is_suppressed(text) or is_action_item(text)


def is_interface_file(filename: str) -> bool:
    """True for files following the `<name>_intf.<ext>` convention."""
    stem, _ = os.path.splitext(filename)
    return len(stem) > len(INTERFACE_MODULE_SUFFIX) and stem.endswith(INTERFACE_MODULE_SUFFIX)


class CommentPolicyRule:
    """
    Checks every comment of a module.

    In interface context only documentation, suppressed and action-item
    comments may appear. Documentation comments are syntax checked
    everywhere.
    """

    code: str = "comment-not-allowed-in-interface"
    description: str = "Interfaces only hold documentation, suppressed or action-item comments."

    def __init__(self, doc_syntax: DocSyntaxRule) -> None:
        self._doc_syntax = doc_syntax

    def check(self, comments: Iterable[RawComment], interface: bool = False) -> Iterator[Violation]:
        for comment in comments:
            if not comment.text:
                continue
            in_interface = interface or is_interface_file(comment.location.filename)
            if in_interface and not allowed_in_interface(comment.text):
                yield Violation(ViolationKind.COMMENT_NOT_ALLOWED_IN_INTERFACE, comment.location)
            if is_documentation(comment.text):
                yield from self._doc_syntax.check(comment.text, comment.location)
