"""Pytest configuration and shared fixtures.

Run pytest from this project's root; pythonpath in pyproject.toml puts src/
and the project root on sys.path so `strict_style` and `tests.tree_builders`
import without installing.
"""

import pytest

from strict_style.domain.config import CheckerConfig
from strict_style.infrastructure.doc_markup import DocMarkupParser
from strict_style.use_cases.check_module import ModuleChecker


@pytest.fixture
def all_checks() -> CheckerConfig:
    return CheckerConfig(annotated_ignores=True, check_comments=True)


@pytest.fixture
def doc_parser() -> DocMarkupParser:
    return DocMarkupParser()


@pytest.fixture
def make_checker(doc_parser):
    """Build a ModuleChecker with the given toggles."""

    def _make(annotated_ignores: bool = False, check_comments: bool = False, **kwargs) -> ModuleChecker:
        config = CheckerConfig(annotated_ignores=annotated_ignores, check_comments=check_comments)
        return ModuleChecker(config, doc_parser, **kwargs)

    return _make
