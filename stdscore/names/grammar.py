"""
Structural grammar for decorated roster names.

Roster exports often decorate a person's name with a stream tag, a cohort
code, a class section and an organization tag, plus a trailing note:

    [OI] G2025-C3-CQYC-wht (王鸿天)

tokenize() splits such a string into tokens and parse_name() assigns each
token a role, leaving the core token that identifies the person.
"""

import re
from dataclasses import dataclass
from typing import AbstractSet, List, NamedTuple, Optional

STREAM = "stream"
SEGMENT = "segment"
ANNOTATION = "annotation"

STREAM_PATTERN = re.compile(r"^\s*[\[【]\s*([^\]】]+?)\s*[\]】]\s*")
ANNOTATION_PATTERN = re.compile(r"\s*[(（]\s*([^()（）]*?)\s*[)）]\s*$")
SEPARATOR_PATTERN = re.compile(r"\s*-\s*")

COHORT_PATTERN = re.compile(r"^(?:[Gg]\d{2,4}|\d{2,4}[届级])$")
SECTION_PATTERN = re.compile(r"^(?:[Cc]\d{1,2}|\d{1,2}班)$")


class Token(NamedTuple):
    kind: str
    text: str


@dataclass(frozen=True)
class NameParts:
    """A decorated name broken down by role."""
    core: str
    stream: Optional[str] = None
    cohort: Optional[str] = None
    section: Optional[str] = None
    organization: Optional[str] = None
    annotation: Optional[str] = None

    @property
    def decorations(self):
        """Roles that were present, in export order."""
        roles = ("stream", "cohort", "section", "organization", "annotation")
        return {role: getattr(self, role) for role in roles if getattr(self, role) is not None}


def tokenize(raw: str) -> List[Token]:
    """
    Split a raw name into stream, segment and annotation tokens.

    A bracketed stream tag or a trailing parenthetical only counts when
    something is left over once it is removed.
    """
    text = raw.strip()
    annotation = None

    match = ANNOTATION_PATTERN.search(text)
    if match and match.start() > 0:
        annotation = match.group(1)
        text = text[:match.start()]

    tokens = []
    match = STREAM_PATTERN.match(text)
    if match and match.end() < len(text):
        tokens.append(Token(STREAM, match.group(1)))
        text = text[match.end():]

    for segment in SEPARATOR_PATTERN.split(text):
        if segment:
            tokens.append(Token(SEGMENT, segment))

    if annotation is not None:
        tokens.append(Token(ANNOTATION, annotation))
    return tokens


def parse_name(raw: str, organizations: AbstractSet[str] = frozenset()) -> Optional[NameParts]:
    """
    Parse a raw name into its parts.

    Cohort and section codes are recognized by shape. Organization tags
    are only recognized when listed in ``organizations``.

    Args:
        raw: Name as found in the roster
        organizations: Known organization tags (case-sensitive)

    Returns:
        NameParts: The parsed record, or None when the name carries no
        decoration (or nothing would be left for the core token)
    """
    fields = {}
    segments = []
    for token in tokenize(raw):
        if token.kind == SEGMENT:
            segments.append(token.text)
        else:
            fields[token.kind] = token.text

    if not segments:
        return None

    # Prefix segments, in the order they appear in exports
    prefix_roles = (
        ("cohort", COHORT_PATTERN.match),
        ("section", SECTION_PATTERN.match),
        ("organization", organizations.__contains__),
    )

    position = 0
    for role, matches in prefix_roles:
        # Always leave one segment for the core
        if len(segments) - position > 1 and matches(segments[position]):
            fields[role] = segments[position]
            position += 1

    if not fields:
        return None

    return NameParts(core="-".join(segments[position:]), **fields)
