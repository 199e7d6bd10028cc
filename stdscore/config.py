"""
Configuration for the std score calculator.

Name tables (patches, aliases, the ignore set and organization tags) live
in a JSON file so they can be edited without touching code. Runtime knobs
come from environment variables and can be overridden from the command line.
"""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Optional

from stdscore.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TABLES_PATH = Path(__file__).parent / "data" / "name_tables.json"

DEFAULT_PRECISION = 2
MAX_PRECISION = 6

LOCATOR_NAMES = ("first-table", "paragraph")
NAME_STRATEGIES = ("structural", "lookup")


@dataclass(frozen=True)
class NameTables:
    """
    Static lookup data used to canonicalize names.

    Attributes:
        patches: Raw spelling -> corrected spelling (case-sensitive)
        aliases: Lower-cased short code -> full display name
        ignored: Identities excluded from scoring
        organizations: Organization tags stripped from decorated names
    """
    patches: Mapping[str, str] = field(default_factory=dict)
    aliases: Mapping[str, str] = field(default_factory=dict)
    ignored: FrozenSet[str] = frozenset()
    organizations: FrozenSet[str] = frozenset()

    def __post_init__(self):
        # Freeze whatever the caller handed us
        object.__setattr__(self, "patches", MappingProxyType(dict(self.patches)))
        object.__setattr__(
            self,
            "aliases",
            MappingProxyType({key.lower(): value for key, value in self.aliases.items()}),
        )
        object.__setattr__(self, "ignored", frozenset(self.ignored))
        object.__setattr__(self, "organizations", frozenset(self.organizations))

    @property
    def canonical(self) -> FrozenSet[str]:
        """Alias targets; these are already canonical identities."""
        return frozenset(self.aliases.values())

    @classmethod
    def from_dict(cls, data: Dict) -> "NameTables":
        """Build tables from the parsed JSON layout."""
        if not isinstance(data, dict):
            raise ConfigError("Name tables must be a JSON object")

        patches = data.get("patches", {})
        aliases = data.get("aliases", {})
        ignored = data.get("ignored", [])
        organizations = data.get("organizations", [])

        if not isinstance(patches, dict) or not isinstance(aliases, dict):
            raise ConfigError("'patches' and 'aliases' must be JSON objects")
        for key, values in (("ignored", ignored), ("organizations", organizations)):
            if not isinstance(values, list):
                raise ConfigError(f"'{key}' must be a JSON list")

        for table in (patches, aliases):
            for key, value in table.items():
                if not isinstance(value, str) or not key:
                    raise ConfigError(f"Invalid table entry: {key!r} -> {value!r}")

        return cls(
            patches=patches,
            aliases=aliases,
            ignored=_clean_names(ignored),
            organizations=_clean_names(organizations),
        )


def _clean_names(values: Iterable) -> FrozenSet[str]:
    cleaned = set()
    for value in values:
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"Invalid name table entry: {value!r}")
        cleaned.add(value.strip())
    return frozenset(cleaned)


def load_name_tables(path: Optional[str] = None) -> NameTables:
    """
    Load name tables from a JSON file.

    Args:
        path: JSON file to read; the packaged defaults when omitted

    Returns:
        NameTables: Immutable tables

    Raises:
        ConfigError: If the file is missing or malformed
    """
    tables_path = Path(path) if path else DEFAULT_TABLES_PATH
    try:
        with open(tables_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read name tables {tables_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Name tables {tables_path} are not valid JSON: {e}") from e

    tables = NameTables.from_dict(data)
    logger.debug(
        "Loaded name tables from %s (%d patches, %d aliases, %d ignored, %d organizations)",
        tables_path, len(tables.patches), len(tables.aliases), len(tables.ignored), len(tables.organizations),
    )
    return tables


def _env_precision() -> int:
    raw = os.getenv("STDSCORE_PRECISION", str(DEFAULT_PRECISION))
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(f"STDSCORE_PRECISION must be an integer, got {raw!r}") from e


@dataclass
class Settings:
    precision: int = field(default_factory=_env_precision)
    locator: str = field(default_factory=lambda: os.getenv("STDSCORE_LOCATOR", "first-table"))
    name_strategy: str = field(default_factory=lambda: os.getenv("STDSCORE_NAME_STRATEGY", "structural"))
    tables_path: Optional[str] = field(default_factory=lambda: os.getenv("STDSCORE_NAME_TABLES") or None)

    def validate(self) -> "Settings":
        """Check every knob and return self, raising ConfigError on bad values."""
        if not 0 <= self.precision <= MAX_PRECISION:
            raise ConfigError(f"Precision must be between 0 and {MAX_PRECISION}, got {self.precision}")
        if self.locator not in LOCATOR_NAMES:
            raise ConfigError(f"Unknown table locator {self.locator!r} (choose from {', '.join(LOCATOR_NAMES)})")
        if self.name_strategy not in NAME_STRATEGIES:
            raise ConfigError(
                f"Unknown name strategy {self.name_strategy!r} (choose from {', '.join(NAME_STRATEGIES)})"
            )
        return self


def load_settings(**overrides) -> Settings:
    """Apply non-None overrides, read the rest from the environment and validate."""
    known = {f.name for f in fields(Settings)}
    for key in overrides:
        if key not in known:
            raise ConfigError(f"Unknown setting {key!r}")

    # Overridden knobs never touch their environment variable
    settings = Settings(**{key: value for key, value in overrides.items() if value is not None})
    return settings.validate()
