"""pylint checker running the style rules once per module."""

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Optional

import astroid  # type: ignore[import-untyped]
from pylint.checkers import BaseChecker

if TYPE_CHECKING:
    from pylint.lint import PyLinter

from strict_style.domain.config import CheckerConfig, ConfigurationLoader
from strict_style.domain.constants import MISPLACED_DOCSTRING_MESSAGE
from strict_style.domain.protocols import DocumentationParserProtocol
from strict_style.domain.registry_types import RuleRegistryEntry
from strict_style.domain.rule_msgs import RuleMsgBuilder
from strict_style.domain.violations import Violation
from strict_style.infrastructure.doc_markup import DocMarkupParser
from strict_style.infrastructure.gateways.astroid_gateway import (
    AstroidGateway,
    ModuleLoweringError,
)
from strict_style.use_cases.check_module import ModuleChecker

logger = logging.getLogger(__name__)


class StrictStyleChecker(BaseChecker):
    """
    Lowers each module, runs the rule engine and reports the first violation.

    A violation aborts the check of its module only: exactly one message is
    emitted for it and pylint moves on to the next module.
    """

    name: str = "strict-style"
    options = (
        (
            "annotated-ignores",
            {
                "default": False,
                "type": "yn",
                "metavar": "<y or n>",
                "help": "Force every ignored expression (under ignore(...) or in `_ = ...`) "
                "to have a type annotation.",
            },
        ),
        (
            "check-doc-comments",
            {
                "default": False,
                "type": "yn",
                "metavar": "<y or n>",
                "help": "Only allow documentation, suppressed and action-item comments in "
                "interfaces, check the syntax of documentation comments and enable "
                f"{MISPLACED_DOCSTRING_MESSAGE}.",
            },
        ),
    )

    def __init__(
        self,
        linter: "PyLinter",
        registry: Mapping[str, RuleRegistryEntry],
        ast_gateway: Optional[AstroidGateway] = None,
        config_loader: Optional[ConfigurationLoader] = None,
        doc_parser: Optional[DocumentationParserProtocol] = None,
    ) -> None:
        self.msgs = RuleMsgBuilder.build_msgs(registry)
        super().__init__(linter)
        self._registry = registry
        self._ast_gateway = ast_gateway or AstroidGateway()
        self._config_loader = config_loader
        self._doc_parser = doc_parser or DocMarkupParser()
        self._module_checker: Optional[ModuleChecker] = None
        self._pending: Optional[Violation] = None

    def _build_config(self) -> CheckerConfig:
        file_config = (
            self._config_loader.checker_config() if self._config_loader is not None else CheckerConfig()
        )
        return file_config.merged_with(
            annotated_ignores=self.linter.config.annotated_ignores is True,
            check_comments=self.linter.config.check_doc_comments is True,
        )

    def open(self) -> None:
        """Freeze the configuration for the whole run."""
        config = self._build_config()
        if config.check_comments:
            self.linter.enable(MISPLACED_DOCSTRING_MESSAGE)
        self._module_checker = ModuleChecker(config, self._doc_parser, fail=self._record)
        logger.debug("strict-style configured: %s", config)

    def _record(self, violation: Violation) -> None:
        self._pending = violation

    def visit_module(self, node: astroid.nodes.Module) -> None:
        if self._module_checker is None:
            self.open()
        try:
            source = self._ast_gateway.read_source(node)
            tree = self._ast_gateway.lower(node, source)
            comments = self._ast_gateway.comments(source, tree.filename)
        except (ModuleLoweringError, OSError) as exc:
            logger.warning("strict-style skipped %s: %s", node.name, exc)
            return
        self._pending = None
        self._module_checker.check(tree, comments)
        if self._pending is not None:
            self._report(node, self._pending)
            self._pending = None

    def _report(self, node: astroid.nodes.Module, violation: Violation) -> None:
        msgid = RuleMsgBuilder.msgid_for_symbol(self._registry, violation.symbol) or violation.symbol
        location = violation.location
        self.add_message(
            msgid,
            node=node,
            line=location.start.line,
            col_offset=location.start.column,
            end_lineno=location.end.line,
            end_col_offset=location.end.column,
            args=(violation.message,),
        )
