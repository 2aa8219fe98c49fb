"""GuidanceService: loads the rule registry and provides per-rule instructions."""

from pathlib import Path
from typing import Optional, cast

import yaml

from strict_style.domain.registry_types import RuleRegistryEntry
from strict_style.domain.rule_msgs import RuleMsgBuilder


class GuidanceService:
    """Loads rule_registry.yaml and answers lookups by msgid or symbol."""

    def __init__(self, registry_path: Optional[str] = None) -> None:
        if registry_path is not None:
            self._path = Path(registry_path)
        else:
            # Default: packaged resource next to this package
            _base = Path(__file__).resolve().parent.parent
            self._path = _base / "resources" / "rule_registry.yaml"
        self._registry: dict[str, RuleRegistryEntry] = {}
        self._load()

    def _load(self) -> None:
        if self._path.exists():
            with open(self._path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
                self._registry = (
                    cast(dict[str, RuleRegistryEntry], data) if isinstance(data, dict) else {}
                )
        else:
            self._registry = {}

    def get_registry(self) -> dict[str, RuleRegistryEntry]:
        """Return a shallow copy of the loaded registry."""
        return dict(self._registry)

    def get_entry(self, rule_code: str) -> Optional[RuleRegistryEntry]:
        return RuleMsgBuilder.get_entry(self._registry, rule_code)

    def get_msgid(self, symbol: str) -> Optional[str]:
        return RuleMsgBuilder.msgid_for_symbol(self._registry, symbol)

    def get_manual_instructions(self, rule_code: str) -> str:
        entry = self.get_entry(rule_code)
        if not entry:
            return "No instructions available for this rule."
        return entry.get("manual_instructions") or entry.get("short_description") or rule_code

    def get_msgs(self) -> dict[str, tuple[str, str, str]]:
        return RuleMsgBuilder.build_msgs(self._registry)
