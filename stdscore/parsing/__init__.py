"""
HTML roster parsing.

This package locates the roster table in an exported document and pulls
out each row's name and total score.
"""

from .locators import FirstTableLocator, ParagraphTableLocator, get_locator
from .table_extractor import ExtractionResult, RawRow, TableExtractor, decode_document, parse_score
