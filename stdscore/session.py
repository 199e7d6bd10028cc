"""
Score session: the pipeline from document bytes to the roster store.

A session owns one RosterStore and runs every document through
extract -> canonicalize -> ignore filter -> aggregate. Failures are
scoped to the document that caused them; the store only ever sees
documents that made it through every step.
"""

import logging
import os
from typing import Iterable, List, Optional

from stdscore.config import Settings, load_name_tables, load_settings
from stdscore.errors import DocumentError
from stdscore.models import LoadOutcome, PersonEntry
from stdscore.names import IgnoreFilter, get_canonicalizer
from stdscore.parsing import TableExtractor, get_locator
from stdscore.ranking import RosterStore, build_file_result

logger = logging.getLogger(__name__)


class ScoreSession:
    """
    Load roster documents and keep their aggregated results.

    Args:
        extractor: TableExtractor to parse documents with
        canonicalizer: Canonicalizer mapping raw names to identities
        ignore_filter: IgnoreFilter applied before aggregation
        store: RosterStore receiving accepted documents
    """

    def __init__(self, extractor, canonicalizer, ignore_filter, store=None):
        self.extractor = extractor
        self.canonicalizer = canonicalizer
        self.ignore_filter = ignore_filter
        self.store = store if store is not None else RosterStore()
        self.status = ""

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "ScoreSession":
        """Build a session from configuration (environment defaults when omitted)."""
        settings = (settings or load_settings()).validate()
        tables = load_name_tables(settings.tables_path)
        return cls(
            extractor=TableExtractor(get_locator(settings.locator)),
            canonicalizer=get_canonicalizer(settings.name_strategy, tables),
            ignore_filter=IgnoreFilter(tables.ignored),
            store=RosterStore(precision=settings.precision),
        )

    def process(self, label: str, data: bytes):
        """
        Run one document through the pipeline and record it.

        Returns:
            tuple: (FileResult, list of LoadWarning)

        Raises:
            DocumentError: If the document is rejected
            ValueError: If the label is empty
        """
        if not label:
            raise ValueError("Document label must be a non-empty string")

        extraction = self.extractor.extract(data, label=label)
        entries = [
            PersonEntry(identity=self.canonicalizer.canonicalize(row.name), raw_score=row.score)
            for row in extraction.rows
        ]
        entries = self.ignore_filter.apply(entries)

        result, warnings = build_file_result(label, entries)
        self.store.add(result)
        return result, extraction.warnings + warnings

    def load(self, label: str, data: bytes) -> LoadOutcome:
        """Like process(), but report a rejected document instead of raising."""
        try:
            result, warnings = self.process(label, data)
        except DocumentError as e:
            self.status = f"Parsing failed for {label}: {e}"
            logger.info("Rejected %s: %s", label, e)
            return LoadOutcome(label=label, accepted=False, error=str(e))

        logger.info("Loaded %s: %d entries, qualifying max %s", label, len(result.entries), result.qualifying_max)
        return LoadOutcome(
            label=label,
            accepted=True,
            warnings=warnings,
            entry_count=len(result.entries),
        )

    def load_path(self, path) -> LoadOutcome:
        """Read a file from disk and load it under its file name."""
        label = os.path.basename(os.fspath(path)) or os.fspath(path)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            self.status = f"Loading failed {path}: {e}"
            logger.info("Could not read %s: %s", path, e)
            return LoadOutcome(label=label, accepted=False, error=str(e))
        return self.load(label, data)

    def load_many(self, paths: Iterable) -> List[LoadOutcome]:
        return [self.load_path(path) for path in paths]

    def clear(self):
        self.store.clear()
        self.status = ""
