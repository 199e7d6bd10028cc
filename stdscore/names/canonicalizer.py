"""
Name canonicalization.

Maps the raw name found in a roster to a stable identity so that the
same person is matched across files even when exports spell them
differently. Two strategies exist:

- structural: strip export decorations with the name grammar first,
  then apply the patch and alias tables to the core token
- lookup: apply the patch and alias tables to the raw name as-is
"""

from dataclasses import dataclass
from typing import Optional

from stdscore.config import NameTables
from stdscore.errors import ConfigError
from stdscore.names.grammar import NameParts, parse_name


@dataclass(frozen=True)
class Resolution:
    """Every intermediate step taken to canonicalize one raw name."""
    raw: str
    parts: Optional[NameParts]
    token: str
    patched: Optional[str]
    aliased: Optional[str]
    identity: str


class Canonicalizer:
    """Base class holding the tables and the shared lookup steps."""

    name = None

    def __init__(self, tables: NameTables):
        self.tables = tables

    def core_token(self, raw_name: str):
        """Return (parts, token) for a trimmed raw name."""
        raise NotImplementedError

    def explain(self, raw_name: str) -> Resolution:
        """
        Canonicalize a raw name and keep the intermediate steps.

        A name that is already an alias target resolves to itself.
        """
        trimmed = raw_name.strip()
        if trimmed in self.tables.canonical:
            return Resolution(
                raw=trimmed,
                parts=None,
                token=trimmed,
                patched=None,
                aliased=None,
                identity=trimmed,
            )

        parts, token = self.core_token(trimmed)

        patched = self.tables.patches.get(token)
        if patched is not None:
            token = patched

        aliased = self.tables.aliases.get(token.lower())
        identity = aliased if aliased is not None else token

        return Resolution(
            raw=trimmed,
            parts=parts,
            token=token,
            patched=patched,
            aliased=aliased,
            identity=identity,
        )

    def canonicalize(self, raw_name: str) -> str:
        return self.explain(raw_name).identity


class StructuralCanonicalizer(Canonicalizer):
    name = "structural"

    def core_token(self, raw_name: str):
        parts = parse_name(raw_name, self.tables.organizations)
        if parts is None:
            return None, raw_name
        return parts, parts.core


class LookupCanonicalizer(Canonicalizer):
    name = "lookup"

    def core_token(self, raw_name: str):
        return None, raw_name


STRATEGIES = {
    StructuralCanonicalizer.name: StructuralCanonicalizer,
    LookupCanonicalizer.name: LookupCanonicalizer,
}


def get_canonicalizer(name: str, tables: NameTables) -> Canonicalizer:
    """Instantiate a canonicalizer strategy by its configured name."""
    try:
        strategy = STRATEGIES[name]
    except KeyError:
        raise ConfigError(f"Unknown name strategy {name!r}") from None
    return strategy(tables)
