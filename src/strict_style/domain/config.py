"""Checker configuration and the pyproject.toml loader."""

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib as toml_lib
else:
    import tomli as toml_lib

from strict_style.domain.constants import TOOL_SECTION

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {
    "annotated-ignores": "annotated_ignores",
    "annotated_ignores": "annotated_ignores",
    "check-doc-comments": "check_comments",
    "check_doc_comments": "check_comments",
    "check-comments": "check_comments",
    "check_comments": "check_comments",
}


@dataclass(frozen=True)
class CheckerConfig:
    """
    The two process-wide toggles.

    Built once by the host before any module is checked and passed into every
    check call.
    """

    annotated_ignores: bool = False
    check_comments: bool = False

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> "CheckerConfig":
        """Build from a [tool.strict-style] table. Unknown keys are logged and ignored."""
        values: dict[str, bool] = {}
        for key, value in raw.items():
            field_name = _KNOWN_KEYS.get(key)
            if field_name is None:
                logger.warning("Configuration Warning: unknown key '%s' in [tool.%s].", key, TOOL_SECTION)
                continue
            if not isinstance(value, bool):
                logger.warning(
                    "Configuration Warning: '%s' must be a boolean, got %r.", key, value
                )
                continue
            values[field_name] = value
        return cls(**values)

    def merged_with(self, annotated_ignores: bool = False, check_comments: bool = False) -> "CheckerConfig":
        """Switch on the toggles requested by a host (command line flags win over the file only to enable)."""
        return CheckerConfig(
            annotated_ignores=self.annotated_ignores or annotated_ignores,
            check_comments=self.check_comments or check_comments,
        )


class ConfigurationLoader:
    """
    Loads [tool.strict-style] from the nearest pyproject.toml.

    Looks in `start` (default: CWD) and walks up to the filesystem root.
    """

    def __init__(self, start: Optional[Path] = None) -> None:
        self._start = start or Path.cwd()
        self._config_file: Optional[Path] = None
        self._section: dict[str, object] = {}
        self.load_config()

    def load_config(self) -> None:
        """Find and load the first pyproject.toml that has a [tool.strict-style] table."""
        current_path = self._start.resolve()
        while True:
            config_file = current_path / "pyproject.toml"
            if config_file.exists():
                try:
                    with config_file.open("rb") as f:
                        data = toml_lib.load(f)
                except (OSError, toml_lib.TOMLDecodeError) as exc:
                    logger.warning("Could not read %s: %s", config_file, exc)
                else:
                    section = data.get("tool", {}).get(TOOL_SECTION, {})
                    if isinstance(section, dict) and section:
                        self._config_file = config_file
                        self._section = section
                        logger.debug("Loaded [tool.%s] from %s", TOOL_SECTION, config_file)
                        return
            if current_path.parent == current_path:
                return
            current_path = current_path.parent

    @property
    def config_file(self) -> Optional[Path]:
        return self._config_file

    @property
    def config(self) -> dict[str, object]:
        """Return the raw [tool.strict-style] table."""
        return dict(self._section)

    def checker_config(self) -> CheckerConfig:
        return CheckerConfig.from_mapping(self._section)
