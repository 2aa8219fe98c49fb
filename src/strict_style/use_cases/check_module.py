"""Rule engine: one walk over the module tree, then the comment pass."""

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import Optional

from strict_style.domain.config import CheckerConfig
from strict_style.domain.protocols import DocumentationParserProtocol
from strict_style.domain.rules import (
    CommentPolicyRule,
    DeprecationRule,
    DocSyntaxRule,
    IgnoredValueRule,
    RawComment,
)
from strict_style.domain.rules.ignored_values import is_pseudo_binding_marker
from strict_style.domain.traversal import TreeWalker
from strict_style.domain.tree import (
    Apply,
    Attribute,
    Extension,
    Module,
    ModuleKind,
    StructurePayload,
    ValueBinding,
    ValueItem,
)
from strict_style.domain.violations import FailureCallback, Violation, fail

logger = logging.getLogger(__name__)

TRANSFORMATION_NAME = "strict_style"


class StyleRules:
    """The walk hooks: deprecation attributes, wildcard bindings, pseudo-bindings and discards."""

    def __init__(self, config: CheckerConfig) -> None:
        self._config = config
        self._deprecation = DeprecationRule()
        self._ignored = IgnoredValueRule()

    def walker(self) -> TreeWalker:
        return TreeWalker(
            {
                Attribute: self._on_attribute,
                ValueBinding: self._on_value_binding,
                Extension: self._on_extension,
                Apply: self._on_apply,
            }
        )

    def iter_violations(self, module: Module) -> Iterator[Violation]:
        return self.walker().visit(module)

    def _on_attribute(self, attribute: Attribute, walker: TreeWalker) -> Iterator[Violation]:
        yield from self._deprecation.check(attribute)
        yield from walker.descend(attribute)

    def _on_value_binding(self, binding: ValueBinding, walker: TreeWalker) -> Iterator[Violation]:
        if self._config.annotated_ignores:
            yield from self._ignored.check_binding(binding)
        yield from walker.descend(binding)

    def _on_extension(self, extension: Extension, walker: TreeWalker) -> Iterator[Violation]:
        if not self._config.annotated_ignores or not is_pseudo_binding_marker(extension.name):
            yield from walker.descend(extension)
            return
        if not isinstance(extension.payload, StructurePayload):
            yield from walker.descend(extension)
            return
        # A marker such as `test` binds nothing: skip the check on the marker's own
        # bindings but keep checking everything inside them.
        for item in extension.payload.items:
            if isinstance(item, ValueItem):
                for binding in item.bindings:
                    yield from walker.descend(binding)
                for attribute in item.attributes:
                    yield from walker.visit(attribute)
            else:
                yield from walker.visit(item)

    def _on_apply(self, expression: Apply, walker: TreeWalker) -> Iterator[Violation]:
        if self._config.annotated_ignores:
            yield from self._ignored.check_call(expression)
        yield from walker.descend(expression)


class ModuleChecker:
    """
    Checks one module at a time.

    The first violation found is handed to `fail`, which by default raises
    StyleViolationError. When a callback returns instead of raising, the check
    still stops there.
    """

    def __init__(
        self,
        config: CheckerConfig,
        doc_parser: DocumentationParserProtocol,
        fail: FailureCallback = fail,
    ) -> None:
        self._config = config
        self._fail = fail
        self._rules = StyleRules(config)
        self._comment_policy = CommentPolicyRule(DocSyntaxRule(doc_parser))

    @property
    def config(self) -> CheckerConfig:
        return self._config

    def first_violation(
        self, module: Module, comments: Iterable[RawComment] = (), interface: bool = False
    ) -> Optional[Violation]:
        violation = next(self._rules.iter_violations(module), None)
        if violation is None and self._config.check_comments:
            violation = next(self._comment_policy.check(comments, interface=interface), None)
        return violation

    def _check(self, module: Module, comments: Sequence[RawComment], interface: bool) -> Module:
        logger.debug(
            "Checking %s %s (%d comments, %s)", module.kind.value, module.filename, len(comments), self._config
        )
        violation = self.first_violation(module, comments, interface=interface)
        if violation is not None:
            logger.debug("First violation in %s: %s", module.filename, violation.symbol)
            self._fail(violation)
        return module

    def check_structure(self, structure: Module, comments: Sequence[RawComment] = ()) -> Module:
        """Check an implementation; return it unchanged."""
        return self._check(structure, comments, interface=False)

    def check_signature(self, signature: Module, comments: Sequence[RawComment] = ()) -> Module:
        """Check an interface; return it unchanged. Comments are held to the interface policy."""
        return self._check(signature, comments, interface=True)

    def check(self, module: Module, comments: Sequence[RawComment] = ()) -> Module:
        if module.kind is ModuleKind.SIGNATURE:
            return self.check_signature(module, comments)
        return self.check_structure(module, comments)


class StyleTransformation:
    """The checker as a host transformation: `intf` for interfaces, `impl` for implementations."""

    name: str = TRANSFORMATION_NAME

    def __init__(self, checker: ModuleChecker) -> None:
        self._checker = checker

    def intf(self, signature: Module, comments: Sequence[RawComment] = ()) -> Module:
        return self._checker.check_signature(signature, comments)

    def impl(self, structure: Module, comments: Sequence[RawComment] = ()) -> Module:
        return self._checker.check_structure(structure, comments)
