import json

import pytest

from stdscore.config import NameTables


def make_roster(rows, before="", header=("Rank", "Name", "Total")):
    """Build an exported roster page; rows are tuples of cell HTML."""
    header_html = ""
    if header:
        header_html = "<tr>" + "".join(f"<th>{cell}</th>" for cell in header) + "</tr>"
    body = "".join(
        "<tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    html = (
        "<html><head><meta charset='utf-8'></head><body>"
        f"{before}<table>{header_html}{body}</table>"
        "</body></html>"
    )
    return html.encode("utf-8")


def roster_from_scores(scores):
    """Roster bytes from (name, score) pairs, ranked in the given order."""
    return make_roster([(str(rank), name, str(score)) for rank, (name, score) in enumerate(scores, start=1)])


@pytest.fixture
def tables():
    return NameTables(
        patches={"whtt": "wht"},
        aliases={"WHT": "王鸿天"},
        ignored={"std"},
        organizations={"CQYC"},
    )


@pytest.fixture
def tables_file(tmp_path):
    path = tmp_path / "tables.json"
    path.write_text(json.dumps({
        "patches": {"Alicia": "Alice"},
        "aliases": {"bb": "Bob"},
        "ignored": ["std"],
    }), encoding="utf-8")
    return path


@pytest.fixture
def midterm():
    return roster_from_scores([("Alice", 90), ("Bob", 80), ("std", 95)])


@pytest.fixture
def final():
    return roster_from_scores([("Alice", 70), ("Carol", 70)])
