"""
Cross-file roster store.

Keeps every loaded FileResult in load order and derives standardized
scores, per-person averages and the overall ranking from them. Nothing
is accumulated incrementally: every view is recomputed from the stored
results, so reloading a file can never leave stale totals behind.
"""

from typing import Dict, FrozenSet, List, Optional, Tuple

from stdscore.config import DEFAULT_PRECISION
from stdscore.models import FileResult, RankedIdentity, ScorePair


class RosterStore:
    """
    In-memory collection of per-file results.

    Args:
        precision: Display precision handed through to the renderer
    """

    def __init__(self, precision=DEFAULT_PRECISION):
        self._initial_precision = precision
        self.precision = precision
        self._file_order: List[str] = []
        self._per_file: Dict[str, FileResult] = {}

    def add(self, result: FileResult):
        """Record a file result, replacing any earlier result with the same label."""
        if result.label not in self._per_file:
            self._file_order.append(result.label)
        self._per_file[result.label] = result

    def clear(self):
        """Discard all files and restore the initial precision."""
        self._file_order = []
        self._per_file = {}
        self.precision = self._initial_precision

    def __contains__(self, label):
        return label in self._per_file

    def __len__(self):
        return len(self._file_order)

    @property
    def file_order(self) -> Tuple[str, ...]:
        return tuple(self._file_order)

    def file_result(self, label: str) -> FileResult:
        return self._per_file[label]

    @property
    def all_identities(self) -> FrozenSet[str]:
        identities = set()
        for result in self._per_file.values():
            identities.update(result.identities)
        return frozenset(identities)

    def score_for(self, identity: str, label: str) -> Optional[ScorePair]:
        """
        Return the (standardized, raw) pair of an identity in one file.

        Returns:
            ScorePair: The scores, or None when the identity has no data in
            that file (or the file is unknown)
        """
        result = self._per_file.get(label)
        if result is None:
            return None
        entry = result.find(identity)
        if entry is None:
            return None
        return ScorePair(standardized=result.standardize(entry.raw_score), raw=entry.raw_score)

    def scores_for(self, identity: str) -> Tuple[Optional[ScorePair], ...]:
        """One ScorePair (or None) per file, in load order."""
        return tuple(self.score_for(identity, label) for label in self._file_order)

    def average_std(self, identity: str) -> float:
        """
        Mean standardized score over the files in which the identity appears.

        Raises:
            KeyError: If the identity has no data in any file
        """
        return _average(self.scores_for(identity), identity)

    def rankings(self) -> List[RankedIdentity]:
        """Every identity sorted by average standardized score, best first.

        Ties are broken by identity in ascending order.
        """
        ranked = []
        for identity in self.all_identities:
            scores = self.scores_for(identity)
            ranked.append(RankedIdentity(
                identity=identity,
                average_std=_average(scores, identity),
                scores=scores,
            ))

        ranked.sort(key=lambda r: (-r.average_std, r.identity))
        return ranked


def _average(scores, identity):
    values = [score.standardized for score in scores if score is not None]
    if not values:
        raise KeyError(identity)
    return sum(values) / len(values)
