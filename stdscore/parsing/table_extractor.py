"""
Roster table extraction.

Turns the raw bytes of an exported HTML roster into (name, score) rows.
The table layout is rank | name | total score | anything else; the first
row is a header.
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup

from stdscore.errors import EmptyResultError, EncodingError, ParseError, StructureError
from stdscore.models import EMPTY_NAME, SHORT_ROW, LoadWarning
from stdscore.parsing.locators import FirstTableLocator

logger = logging.getLogger(__name__)

# First number in the score cell, tolerating surrounding text and markup
NUMBER_PATTERN = re.compile(r"-?\d+(?:\.\d+)?")

MIN_CELLS = 3
NAME_COLUMN = 1
SCORE_COLUMN = 2


@dataclass(frozen=True)
class RawRow:
    name: str
    score: float
    row_number: int


@dataclass
class ExtractionResult:
    rows: List[RawRow] = field(default_factory=list)
    warnings: List[LoadWarning] = field(default_factory=list)


def decode_document(data: bytes) -> str:
    """Decode document bytes as UTF-8, dropping a byte-order mark if present."""
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise EncodingError(f"The file is not UTF-8 encoded ({e.reason} at byte {e.start})") from e


def parse_score(text: str) -> Optional[float]:
    """
    Return the first signed decimal found in a cell's text.

    Returns:
        float: The parsed value, or None if the text holds no number

    Raises:
        ParseError: If the number is not a finite float
    """
    match = NUMBER_PATTERN.search(text)
    if match is None:
        return None
    try:
        value = float(match.group(0))
    except ValueError as e:
        raise ParseError(f"Score parsing failed: {match.group(0)}") from e
    if not math.isfinite(value):
        raise ParseError(f"Score out of range: {match.group(0)[:20]}...")
    return value


def _cell_name(cell) -> str:
    anchor = cell.find("a")
    source = anchor if anchor is not None else cell
    return source.get_text().strip()


class TableExtractor:
    """
    Extract roster rows from HTML documents.

    Args:
        locator: Strategy used to find the table (first table by default)
    """

    def __init__(self, locator=None):
        self.locator = locator or FirstTableLocator()

    def extract(self, data: bytes, label: str = "") -> ExtractionResult:
        """
        Parse a document into raw rows.

        Args:
            data: Raw document bytes
            label: Document label used in warnings

        Returns:
            ExtractionResult: Rows in table order plus skipped-row warnings

        Raises:
            EncodingError: If the bytes are not UTF-8
            StructureError: If no table (or no table rows) can be found
            ParseError: If a score cell has no number
            EmptyResultError: If no usable rows remain
        """
        html = decode_document(data)
        soup = BeautifulSoup(html, "html.parser")
        table = self.locator.locate(soup)

        # Rows of nested tables belong to those tables, not to the roster
        rows = [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]
        if not rows:
            raise StructureError("The table has no rows")

        result = ExtractionResult()

        # Skip the header row
        for row_number, tr in enumerate(rows[1:], start=1):
            cells = tr.find_all("td", recursive=False)
            if len(cells) < MIN_CELLS:
                message = f"Expected at least {MIN_CELLS} cells, found {len(cells)}"
                logger.warning("UNEXPECTED row %d in %s: %s", row_number, label or "<document>", message)
                result.warnings.append(LoadWarning(label, SHORT_ROW, message, row_number))
                continue

            name = _cell_name(cells[NAME_COLUMN])
            if not name:
                logger.warning("UNEXPECTED row %d in %s: empty name column", row_number, label or "<document>")
                result.warnings.append(LoadWarning(label, EMPTY_NAME, "Empty name column", row_number))
                continue

            score = parse_score(cells[SCORE_COLUMN].get_text())
            if score is None:
                raise ParseError(
                    f"Unable to parse number in total score column (name: {name}, row {row_number})"
                )

            result.rows.append(RawRow(name=name, score=score, row_number=row_number))

        if not result.rows:
            raise EmptyResultError("No one was parsed from the table")

        return result
