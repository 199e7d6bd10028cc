"""
Removal of administratively excluded identities (e.g. the "std" baseline
row) before any aggregation happens.
"""

import logging
from typing import Iterable, List

from stdscore.models import PersonEntry

logger = logging.getLogger(__name__)


class IgnoreFilter:
    """
    Drop entries whose identity is in the ignore set.

    Matching is case-insensitive.

    Args:
        ignored: Identities to exclude
    """

    def __init__(self, ignored: Iterable[str]):
        self._ignored = frozenset(identity.casefold() for identity in ignored)

    def is_ignored(self, identity: str) -> bool:
        return identity.casefold() in self._ignored

    def apply(self, entries: Iterable[PersonEntry]) -> List[PersonEntry]:
        kept = []
        dropped = 0
        for entry in entries:
            if self.is_ignored(entry.identity):
                dropped += 1
                continue
            kept.append(entry)

        if dropped:
            logger.debug("Ignored %d entries", dropped)
        return kept
