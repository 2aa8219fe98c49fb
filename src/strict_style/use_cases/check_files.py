"""Check a set of files or directories outside of pylint."""

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from strict_style.domain.config import CheckerConfig
from strict_style.domain.protocols import DocumentationParserProtocol
from strict_style.domain.violations import StyleViolationError, Violation
from strict_style.infrastructure.gateways.astroid_gateway import (
    AstroidGateway,
    ModuleLoweringError,
)
from strict_style.use_cases.check_module import ModuleChecker

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".py", ".pyi")


@dataclass(frozen=True)
class FileResult:
    path: Path
    violation: Optional[Violation] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.violation is None and self.error is None


@dataclass
class CheckResult:
    results: list[FileResult] = field(default_factory=list)

    @property
    def violations(self) -> list[FileResult]:
        return [result for result in self.results if result.violation is not None]

    @property
    def errors(self) -> list[FileResult]:
        return [result for result in self.results if result.error is not None]

    @property
    def exit_code(self) -> int:
        if self.violations:
            return 1
        if self.errors:
            return 2
        return 0


def iter_source_files(paths: Iterable[Path]) -> Iterator[Path]:
    for path in paths:
        if path.is_dir():
            for candidate in sorted(path.rglob("*")):
                if candidate.is_file() and candidate.suffix in SOURCE_SUFFIXES:
                    yield candidate
        else:
            yield path


class CheckFilesUseCase:
    """Runs the module checker on every file; one result per file."""

    def __init__(
        self,
        config: CheckerConfig,
        ast_gateway: AstroidGateway,
        doc_parser: DocumentationParserProtocol,
    ) -> None:
        self._gateway = ast_gateway
        self._checker = ModuleChecker(config, doc_parser)

    def check_file(self, path: Path) -> FileResult:
        try:
            module = self._gateway.parse_file(path)
            source = self._gateway.read_source(module)
            tree = self._gateway.lower(module, source)
            comments = self._gateway.comments(source, tree.filename)
        except ModuleLoweringError as exc:
            logger.error("Cannot check %s: %s", path, exc)
            return FileResult(path, error=str(exc))
        try:
            self._checker.check(tree, comments)
        except StyleViolationError as exc:
            return FileResult(path, violation=exc.violation)
        return FileResult(path)

    def execute(self, paths: Iterable[Path]) -> CheckResult:
        result = CheckResult()
        for path in iter_source_files(paths):
            logger.debug("Checking %s", path)
            result.results.append(self.check_file(path))
        return result
