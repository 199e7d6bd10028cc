"""
Per-file aggregation: find the qualifying maximum of one roster.
"""

import logging
from typing import List, Sequence, Tuple

from stdscore.errors import EmptyResultError
from stdscore.models import DEGENERATE_MAX, DUPLICATE_IDENTITY, FileResult, LoadWarning, PersonEntry

logger = logging.getLogger(__name__)


def build_file_result(label: str, entries: Sequence[PersonEntry]) -> Tuple[FileResult, List[LoadWarning]]:
    """
    Build the FileResult for one document's filtered entries.

    Args:
        label: Document label
        entries: Entries left after the ignore filter, in table order

    Returns:
        tuple: (FileResult, list of LoadWarning)

    Raises:
        EmptyResultError: If no entries are left
    """
    if not entries:
        raise EmptyResultError("No qualifying data in file")

    warnings = []

    seen = set()
    for entry in entries:
        if entry.identity in seen:
            # Only the first entry for an identity is scored
            warnings.append(LoadWarning(
                label,
                DUPLICATE_IDENTITY,
                f"{entry.identity} appears more than once; only the first score is used",
            ))
        seen.add(entry.identity)

    qualifying_max = max(entry.raw_score for entry in entries)
    if qualifying_max <= 0:
        logger.warning("Qualifying maximum of %s is %s", label, qualifying_max)
        warnings.append(LoadWarning(
            label,
            DEGENERATE_MAX,
            f"Qualifying maximum is {qualifying_max:g}; standardized scores for this file are degenerate",
        ))

    result = FileResult(label=label, entries=tuple(entries), qualifying_max=qualifying_max)
    return result, warnings
