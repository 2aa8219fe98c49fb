"""Tests for StrictStyleChecker (E9801-E9806)."""

import unittest
from unittest.mock import MagicMock

import astroid

from strict_style.domain.config import CheckerConfig
from strict_style.infrastructure.gateways.astroid_gateway import AstroidGateway
from strict_style.infrastructure.services.guidance_service import GuidanceService
from strict_style.use_cases.checks.style import StrictStyleChecker


class TestStrictStyleChecker(unittest.TestCase):
    def setUp(self) -> None:
        self.linter = MagicMock()
        self.linter.config.annotated_ignores = False
        self.linter.config.check_doc_comments = False
        self.config_loader = MagicMock()
        self.config_loader.checker_config.return_value = CheckerConfig()

    def _checker(self) -> StrictStyleChecker:
        checker = StrictStyleChecker(
            self.linter,
            registry=GuidanceService().get_registry(),
            ast_gateway=AstroidGateway(),
            config_loader=self.config_loader,
        )
        checker.open()
        return checker

    def _visit(self, code: str, path: str = "pkg/mod.py") -> astroid.nodes.Module:
        module = astroid.parse(code, module_name="mod", path=path)
        self._checker().visit_module(module)
        return module

    def _reported(self) -> list[tuple[str, int, str]]:
        """(msgid, line, message) of every add_message call."""
        # BaseChecker.add_message forwards positionally:
        # (msgid, line, node, args, confidence, col_offset, end_lineno, end_col_offset)
        return [
            (call.args[0], call.args[1], call.args[3][0]) for call in self.linter.add_message.call_args_list
        ]

    def test_msgs_come_from_the_registry(self) -> None:
        checker = self._checker()

        self.assertEqual(checker.msgs["E9803"][1], "deprecated-invalid-month")
        self.assertEqual(len(checker.msgs), 6)

    def test_clean_module(self) -> None:
        self._visit("@deprecated('[since 2021-06] use g')\ndef f():\n    pass\n")

        self.linter.add_message.assert_not_called()

    def test_invalid_month(self) -> None:
        module = self._visit("x = 1\n\n@deprecated('[since 2021-13] use g')\ndef f():\n    pass\n")

        (msgid, line, message), = self._reported()
        self.assertEqual(msgid, "E9803")
        self.assertEqual(line, 3)
        self.assertEqual(message, "Style error: invalid month in deprecation date")
        self.assertIs(self.linter.add_message.call_args.args[2], module)

    def test_one_message_per_module(self) -> None:
        self._visit("@deprecated('no date')\ndef f():\n    pass\n\n@deprecated(3)\ndef g():\n    pass\n")

        self.assertEqual([msgid for msgid, _, _ in self._reported()], ["E9802"])

    def test_ignored_values_need_the_option(self) -> None:
        code = "x = 1\n_ = compute()\n"

        self._visit(code)
        self.linter.add_message.assert_not_called()

        self.linter.config.annotated_ignores = True
        self._visit(code)
        (msgid, line, message), = self._reported()
        self.assertEqual(msgid, "E9804")
        self.assertEqual(line, 2)
        self.assertEqual(message, "Style error: Ignored expression must come with a type annotation")

    def test_annotated_ignores_from_the_configuration_file(self) -> None:
        self.config_loader.checker_config.return_value = CheckerConfig(annotated_ignores=True)

        self._visit("ignore(compute())\n")

        self.assertEqual(self._reported()[0][0], "E9804")

    def test_annotated_discard_passes(self) -> None:
        self.linter.config.annotated_ignores = True

        self._visit("_: int = compute()\nignore(cast(int, compute()))\n")

        self.linter.add_message.assert_not_called()

    def test_comments_in_stub_files(self) -> None:
        code = "#* Documented.\ndef f() -> int: ...\n# plain note\n"

        self._visit(code, path="pkg/mod.pyi")
        self.linter.add_message.assert_not_called()

        self.linter.config.check_doc_comments = True
        self._visit(code, path="pkg/mod.pyi")
        (msgid, line, message), = self._reported()
        self.assertEqual(msgid, "E9805")
        self.assertEqual(line, 3)
        self.assertIn("shouldn't be present in interfaces", message)

    def test_doc_comment_syntax(self) -> None:
        self.linter.config.check_doc_comments = True

        self._visit("x = 1\n#* Returns {b the value.\n")

        (msgid, line, message), = self._reported()
        self.assertEqual(msgid, "E9806")
        self.assertEqual(line, 2)
        self.assertTrue(message.startswith("Documentation error: Missing '}' to close '{b'"))

    def test_check_doc_comments_enables_the_docstring_message(self) -> None:
        self.linter.config.check_doc_comments = True

        self._checker()

        self.linter.enable.assert_called_once_with("pointless-string-statement")

    def test_docstring_message_untouched_by_default(self) -> None:
        self._checker()

        self.linter.enable.assert_not_called()

    def test_unreadable_module_is_skipped(self) -> None:
        gateway = MagicMock()
        gateway.read_source.side_effect = OSError("gone")
        checker = StrictStyleChecker(
            self.linter,
            registry=GuidanceService().get_registry(),
            ast_gateway=gateway,
            config_loader=self.config_loader,
        )
        checker.open()

        checker.visit_module(astroid.parse("x = 1\n"))

        self.linter.add_message.assert_not_called()


class TestRegister(unittest.TestCase):
    def test_register_adds_the_checker(self) -> None:
        from strict_style.checker import register

        linter = MagicMock()

        register(linter)

        (checker,), _ = linter.register_checker.call_args
        self.assertIsInstance(checker, StrictStyleChecker)


if __name__ == "__main__":
    unittest.main()
