"""Unit tests for GuidanceService."""

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from strict_style.domain.violations import ViolationKind
from strict_style.infrastructure.services.guidance_service import GuidanceService


class TestGuidanceService(unittest.TestCase):
    """GuidanceService loads the packaged registry and answers lookups."""

    def setUp(self) -> None:
        self.service = GuidanceService()

    def test_every_violation_kind_has_a_message(self) -> None:
        msgs = self.service.get_msgs()
        symbols = {symbol for _, symbol, _ in msgs.values()}

        self.assertEqual(symbols, {kind.value for kind in ViolationKind})

    def test_msgids_are_errors(self) -> None:
        for msgid in self.service.get_msgs():
            self.assertTrue(msgid.startswith("E98"), msgid)

    def test_template_passes_the_message_through(self) -> None:
        for template, _, _ in self.service.get_msgs().values():
            self.assertEqual(template, "%s")

    def test_get_msgid(self) -> None:
        self.assertEqual(self.service.get_msgid("deprecated-invalid-month"), "E9803")
        self.assertIsNone(self.service.get_msgid("unknown-symbol"))

    def test_get_manual_instructions_by_symbol_and_msgid(self) -> None:
        by_symbol = self.service.get_manual_instructions("ignored-value-missing-annotation")
        by_msgid = self.service.get_manual_instructions("E9804")

        self.assertEqual(by_symbol, by_msgid)
        self.assertIn("_: int = compute()", by_symbol)

    def test_get_manual_instructions_unknown_rule(self) -> None:
        self.assertEqual(
            self.service.get_manual_instructions("E0000"), "No instructions available for this rule."
        )

    def test_doc_syntax_entry_has_references(self) -> None:
        entry = self.service.get_entry("doc-comment-syntax-error")

        self.assertIsNotNone(entry)
        self.assertTrue(entry["references"][0].startswith("http://caml.inria.fr/"))

    def test_get_registry_returns_a_copy(self) -> None:
        registry = self.service.get_registry()
        registry.clear()

        self.assertTrue(self.service.get_registry())

    def test_custom_registry_path(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "registry.yaml"
            path.write_text(
                "strict_style.E9901:\n"
                "  symbol: custom-rule\n"
                "  message_template: 'custom: %s'\n"
                "  manual_instructions: Do the thing.\n",
                encoding="utf-8",
            )
            service = GuidanceService(registry_path=str(path))

        self.assertEqual(service.get_msgs(), {"E9901": ("custom: %s", "custom-rule", "E9901")})
        self.assertEqual(service.get_manual_instructions("custom-rule"), "Do the thing.")

    def test_nonexistent_path_gives_empty_registry(self) -> None:
        service = GuidanceService(registry_path="/nonexistent/registry.yaml")

        self.assertEqual(service.get_registry(), {})
        self.assertEqual(service.get_msgs(), {})

    def test_non_mapping_yaml_gives_empty_registry(self) -> None:
        with TemporaryDirectory() as tmp:
            path = Path(tmp) / "registry.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            service = GuidanceService(registry_path=str(path))

        self.assertEqual(service.get_registry(), {})


if __name__ == "__main__":
    unittest.main()
