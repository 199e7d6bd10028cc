"""
Strategies for finding the roster table inside an HTML document.

Exported rosters have come in two layouts: a plain page where the roster
is simply the first table, and the older export where the table sits
inside the third paragraph of the body.
"""

from bs4 import BeautifulSoup, Tag

from stdscore.errors import ConfigError, StructureError


class FirstTableLocator:
    """Use the first <table> element anywhere in the document."""

    name = "first-table"

    def locate(self, soup: BeautifulSoup) -> Tag:
        table = soup.find("table")
        if table is None:
            raise StructureError("No <table> found in the document")
        return table


class ParagraphTableLocator:
    """
    Use the table nested in the N-th <p> directly under <body>.

    Args:
        position: 1-based paragraph position (older exports use 3)
    """

    name = "paragraph"

    def __init__(self, position=3):
        if position < 1:
            raise ValueError("Paragraph position is 1-based")
        self.position = position

    def locate(self, soup: BeautifulSoup) -> Tag:
        body = soup.body or soup
        paragraphs = body.find_all("p", recursive=False)
        if len(paragraphs) < self.position:
            raise StructureError(f"Paragraph {self.position} under <body> was not found")

        table = paragraphs[self.position - 1].find("table")
        if table is None:
            raise StructureError(f"No <table> found in paragraph {self.position}")
        return table


LOCATORS = {
    FirstTableLocator.name: FirstTableLocator,
    ParagraphTableLocator.name: ParagraphTableLocator,
}


def get_locator(name):
    """Instantiate a locator by its configured name."""
    try:
        return LOCATORS[name]()
    except KeyError:
        raise ConfigError(f"Unknown table locator {name!r}") from None
