"""
pylint plugin entry point - composition root for the checker plugin.

Enable with `--load-plugins=strict_style.checker`.
"""

from pylint.lint import PyLinter

from strict_style.domain.config import ConfigurationLoader
from strict_style.infrastructure.doc_markup import DocMarkupParser
from strict_style.infrastructure.gateways.astroid_gateway import AstroidGateway
from strict_style.infrastructure.services.guidance_service import GuidanceService
from strict_style.use_cases.checks.style import StrictStyleChecker


def register(linter: PyLinter) -> None:
    """Register checkers."""
    registry = GuidanceService().get_registry()
    linter.register_checker(
        StrictStyleChecker(
            linter,
            registry=registry,
            ast_gateway=AstroidGateway(),
            config_loader=ConfigurationLoader(),
            doc_parser=DocMarkupParser(),
        )
    )
