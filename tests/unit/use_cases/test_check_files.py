"""Tests for CheckFilesUseCase and the result aggregation."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from strict_style.domain.config import CheckerConfig
from strict_style.domain.violations import Violation, ViolationKind
from strict_style.infrastructure.doc_markup import DocMarkupParser
from strict_style.infrastructure.gateways.astroid_gateway import AstroidGateway, ModuleLoweringError
from strict_style.use_cases.check_files import (
    CheckFilesUseCase,
    CheckResult,
    FileResult,
    iter_source_files,
)
from tests.tree_builders import loc


@pytest.fixture
def use_case() -> CheckFilesUseCase:
    return CheckFilesUseCase(
        CheckerConfig(annotated_ignores=True, check_comments=True), AstroidGateway(), DocMarkupParser()
    )


def test_iter_source_files(tmp_path: Path) -> None:
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "z.py").write_text("", encoding="utf-8")
    (tmp_path / "a.pyi").write_text("", encoding="utf-8")
    (tmp_path / "readme.md").write_text("", encoding="utf-8")
    explicit = tmp_path / "script"

    found = list(iter_source_files([tmp_path, explicit]))

    assert found == [tmp_path / "a.pyi", tmp_path / "b" / "z.py", explicit]


def test_clean_file(use_case: CheckFilesUseCase, tmp_path: Path) -> None:
    path = tmp_path / "ok.py"
    path.write_text("#* Adds one.\nincrement = lambda x: x + 1\n", encoding="utf-8")

    result = use_case.check_file(path)

    assert result.ok
    assert result == FileResult(path)


def test_first_violation_of_a_file(use_case: CheckFilesUseCase, tmp_path: Path) -> None:
    path = tmp_path / "bad.py"
    path.write_text("_ = compute()\nignore(other())\n", encoding="utf-8")

    result = use_case.check_file(path)

    assert not result.ok
    assert result.violation.kind == ViolationKind.MISSING_TYPE_ANNOTATION
    assert result.violation.location.start.line == 1


def test_doc_comment_spanning_lines(use_case: CheckFilesUseCase, tmp_path: Path) -> None:
    path = tmp_path / "listed.py"
    path.write_text("#* {ul\n#*   {- first}\n#* }\nx = 1\n", encoding="utf-8")

    assert use_case.check_file(path).ok


def test_doc_comment_error_on_a_later_line(use_case: CheckFilesUseCase, tmp_path: Path) -> None:
    path = tmp_path / "listed.py"
    path.write_text("#* {ul\n#*   {- first}\n#*   oops\n#* }\nx = 1\n", encoding="utf-8")

    violation = use_case.check_file(path).violation

    assert violation.kind == ViolationKind.DOCUMENTATION_SYNTAX_ERROR
    assert "Only list items may appear inside '{ul'" in violation.message
    assert violation.location.start.line == 3
    assert violation.location.start.column == 4


def test_decorators_are_checked_in_source_order(use_case: CheckFilesUseCase, tmp_path: Path) -> None:
    path = tmp_path / "decorated.py"
    path.write_text("@wrap(ignore(g()))\n@deprecated('nope')\ndef f():\n    pass\n", encoding="utf-8")

    violation = use_case.check_file(path).violation

    assert violation.kind == ViolationKind.MISSING_TYPE_ANNOTATION
    assert violation.location.start.line == 1


def test_lambda_defaults_are_checked(use_case: CheckFilesUseCase, tmp_path: Path) -> None:
    path = tmp_path / "defaults.py"
    path.write_text("h = lambda x=ignore(g()): x\n", encoding="utf-8")

    violation = use_case.check_file(path).violation

    assert violation.kind == ViolationKind.MISSING_TYPE_ANNOTATION


def test_interface_file_comment(use_case: CheckFilesUseCase, tmp_path: Path) -> None:
    path = tmp_path / "thing_intf.py"
    path.write_text("x = 1  # plain\n", encoding="utf-8")

    result = use_case.check_file(path)

    assert result.violation.kind == ViolationKind.COMMENT_NOT_ALLOWED_IN_INTERFACE


def test_unreadable_file_is_an_error(use_case: CheckFilesUseCase, tmp_path: Path) -> None:
    result = use_case.check_file(tmp_path / "missing.py")

    assert result.error is not None
    assert result.violation is None


def test_lowering_error_from_the_gateway() -> None:
    gateway = MagicMock()
    gateway.parse_file.side_effect = ModuleLoweringError("boom")
    use_case = CheckFilesUseCase(CheckerConfig(), gateway, DocMarkupParser())

    assert use_case.check_file(Path("x.py")) == FileResult(Path("x.py"), error="boom")


def test_execute_keeps_going_after_a_violation(use_case: CheckFilesUseCase, tmp_path: Path) -> None:
    (tmp_path / "a.py").write_text("_ = f()\n", encoding="utf-8")
    (tmp_path / "b.py").write_text("x = 1\n", encoding="utf-8")

    result = use_case.execute([tmp_path])

    assert [file_result.path.name for file_result in result.results] == ["a.py", "b.py"]
    assert [file_result.path.name for file_result in result.violations] == ["a.py"]
    assert result.exit_code == 1


class TestExitCode:
    def test_clean(self) -> None:
        assert CheckResult([FileResult(Path("a.py"))]).exit_code == 0
        assert CheckResult().exit_code == 0

    def test_errors_only(self) -> None:
        assert CheckResult([FileResult(Path("a.py"), error="bad")]).exit_code == 2

    def test_violations_win_over_errors(self) -> None:
        violation = Violation(ViolationKind.DEPRECATION_MISSING_DATE, loc())
        result = CheckResult(
            [FileResult(Path("a.py"), error="bad"), FileResult(Path("b.py"), violation=violation)]
        )

        assert result.exit_code == 1
