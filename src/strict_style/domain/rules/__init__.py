"""Style rules. Each rule yields violations; the engine stops at the first one."""

from strict_style.domain.rules.comments import CommentPolicyRule, RawComment
from strict_style.domain.rules.deprecation import DeprecationRule
from strict_style.domain.rules.doc_syntax import DocSyntaxRule
from strict_style.domain.rules.ignored_values import IgnoredValueRule

__all__ = [
    "CommentPolicyRule",
    "DeprecationRule",
    "DocSyntaxRule",
    "IgnoredValueRule",
    "RawComment",
]
