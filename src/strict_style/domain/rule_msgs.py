"""Pure message-building from a registry dict. No I/O or infrastructure imports."""

from collections.abc import Mapping
from typing import Optional, cast

from strict_style.domain.registry_types import RuleRegistryEntry

REGISTRY_PREFIX = "strict_style."


class RuleMsgBuilder:
    """Builds the pylint msgs dict from a registry mapping."""

    @staticmethod
    def get_entry(
        registry: Mapping[str, RuleRegistryEntry], rule_code: str
    ) -> Optional[RuleRegistryEntry]:
        """Return the registry entry for a rule by msgid or symbol."""
        entry = registry.get(f"{REGISTRY_PREFIX}{rule_code}")
        if isinstance(entry, dict):
            return cast(RuleRegistryEntry, dict(entry))
        for rule_id, candidate in registry.items():
            if not rule_id.startswith(REGISTRY_PREFIX):
                continue
            if isinstance(candidate, dict) and candidate.get("symbol") == rule_code:
                return cast(RuleRegistryEntry, dict(candidate))
        return None

    @staticmethod
    def msgid_for_symbol(registry: Mapping[str, RuleRegistryEntry], symbol: str) -> Optional[str]:
        for rule_id, entry in registry.items():
            if rule_id.startswith(REGISTRY_PREFIX) and entry.get("symbol") == symbol:
                return rule_id[len(REGISTRY_PREFIX):]
        return None

    @staticmethod
    def build_msgs(registry: Mapping[str, RuleRegistryEntry]) -> dict[str, tuple[str, str, str]]:
        """
        Return { msgid: (message_template, symbol, description) } for checker.msgs.

        Entries without a message_template are skipped.
        """
        result: dict[str, tuple[str, str, str]] = {}
        for rule_id, entry in registry.items():
            if not rule_id.startswith(REGISTRY_PREFIX) or not entry.get("message_template"):
                continue
            msgid = rule_id[len(REGISTRY_PREFIX):]
            symbol = entry.get("symbol") or msgid
            description = entry.get("short_description") or entry.get("display_name") or msgid
            result[msgid] = (str(entry["message_template"]), str(symbol), str(description))
        return result
