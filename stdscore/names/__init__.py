"""
Name handling: the structural name grammar, canonicalization strategies
and the ignore filter.
"""

from .canonicalizer import (
    Canonicalizer,
    LookupCanonicalizer,
    Resolution,
    StructuralCanonicalizer,
    get_canonicalizer,
)
from .grammar import NameParts, Token, parse_name, tokenize
from .ignore_filter import IgnoreFilter
