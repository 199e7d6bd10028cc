"""
Value types shared by the std score pipeline.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

# Warning kinds
SHORT_ROW = "short-row"
EMPTY_NAME = "empty-name"
DUPLICATE_IDENTITY = "duplicate-identity"
DEGENERATE_MAX = "degenerate-max"


@dataclass(frozen=True)
class PersonEntry:
    """One person's canonical identity and raw score within a roster."""
    identity: str
    raw_score: float


@dataclass(frozen=True)
class ScorePair:
    """The standardized and raw score of one identity in one file."""
    standardized: float
    raw: float


@dataclass(frozen=True)
class FileResult:
    """
    Parsed and filtered roster of a single document.

    Attributes:
        label: Unique key of the document (usually the file name)
        entries: Person entries in table order, ignored identities removed
        qualifying_max: Highest raw score among the entries
    """
    label: str
    entries: Tuple[PersonEntry, ...]
    qualifying_max: float

    def find(self, identity: str) -> Optional[PersonEntry]:
        """Return the first entry for an identity, or None."""
        for entry in self.entries:
            if entry.identity == identity:
                return entry
        return None

    def standardize(self, raw_score: float) -> float:
        """Rescale a raw score so that the qualifying maximum maps to 100."""
        if self.qualifying_max <= 0:
            return 0.0
        return raw_score / self.qualifying_max * 100.0

    @property
    def identities(self):
        return {entry.identity for entry in self.entries}


@dataclass(frozen=True)
class RankedIdentity:
    """A row of the cross-file summary."""
    identity: str
    average_std: float
    scores: Tuple[Optional[ScorePair], ...]


@dataclass(frozen=True)
class LoadWarning:
    """Non-fatal problem noticed while loading a document."""
    label: str
    kind: str
    message: str
    row: Optional[int] = None

    def __str__(self):
        if self.row is not None:
            return f"{self.label} (row {self.row}): {self.message}"
        return f"{self.label}: {self.message}"


@dataclass
class LoadOutcome:
    """What happened to one document handed to the session."""
    label: str
    accepted: bool
    warnings: List[LoadWarning] = field(default_factory=list)
    error: Optional[str] = None
    entry_count: int = 0
