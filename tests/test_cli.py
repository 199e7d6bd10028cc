import pytest
from click.testing import CliRunner

from stdscore import __version__
from stdscore.cli import format_table, main
from stdscore.models import FileResult, PersonEntry
from stdscore.ranking import RosterStore

from conftest import roster_from_scores


@pytest.fixture
def runner(monkeypatch):
    for name in ("STDSCORE_PRECISION", "STDSCORE_LOCATOR", "STDSCORE_NAME_STRATEGY", "STDSCORE_NAME_TABLES"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


@pytest.fixture
def roster_files(tmp_path, midterm, final):
    first = tmp_path / "Midterm.html"
    second = tmp_path / "Final.html"
    first.write_bytes(midterm)
    second.write_bytes(final)
    return [str(first), str(second)]


def _row_order(output, names):
    lines = output.splitlines()
    return [next(i for i, line in enumerate(lines) if line.startswith(name + " ")) for name in names]


def test_version(runner):
    result = runner.invoke(main, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_rank_prints_sorted_table(runner, roster_files):
    result = runner.invoke(main, ["rank", *roster_files])

    assert result.exit_code == 0, result.output
    assert "Midterm.html Std" in result.output
    assert "Final.html Raw" in result.output
    first, second, third = _row_order(result.output, ["Alice", "Carol", "Bob"])
    assert first < second < third
    assert "88.89" in result.output
    assert not any(line.startswith("std ") for line in result.output.splitlines())


def test_rank_marks_missing_cells(runner, roster_files):
    result = runner.invoke(main, ["rank", *roster_files])

    bob = next(line for line in result.output.splitlines() if line.startswith("Bob "))
    assert bob.split()[-2:] == ["-", "-"]


def test_rank_precision(runner, roster_files):
    result = runner.invoke(main, ["rank", "--precision", "0", *roster_files])

    assert result.exit_code == 0
    assert "89" in result.output
    assert "88.89" not in result.output


def test_rank_reports_failures_and_continues(runner, roster_files, tmp_path):
    broken = tmp_path / "broken.html"
    broken.write_bytes(b"<html><body>nothing</body></html>")

    result = runner.invoke(main, ["rank", roster_files[0], str(broken)])

    assert result.exit_code == 0
    assert "Parsing failed for broken.html" in result.output
    assert "Alice" in result.output


def test_rank_fails_when_nothing_loads(runner, tmp_path):
    result = runner.invoke(main, ["rank", str(tmp_path / "missing.html")])

    assert result.exit_code == 1
    assert "Loading failed" in result.output
    assert "No files were loaded." in result.output


def test_rank_with_custom_tables(runner, tmp_path, tables_file):
    path = tmp_path / "quiz.html"
    path.write_bytes(roster_from_scores([("Alicia", 50), ("bb", 100)]))

    result = runner.invoke(main, ["rank", "--tables", str(tables_file), str(path)])

    assert result.exit_code == 0, result.output
    bob, alice = _row_order(result.output, ["Bob", "Alice"])
    assert bob < alice


def test_rank_rejects_bad_precision(runner, roster_files):
    result = runner.invoke(main, ["rank", "--precision", "9", *roster_files])

    assert result.exit_code != 0


def test_rank_reports_bad_environment(runner, roster_files, monkeypatch):
    monkeypatch.setenv("STDSCORE_LOCATOR", "last-table")

    result = runner.invoke(main, ["rank", *roster_files])

    assert result.exit_code == 1
    assert "Unknown table locator" in result.output


def test_explain_shows_breakdown(runner):
    result = runner.invoke(main, ["explain", "G2025-CQYC-wht (note)"])

    assert result.exit_code == 0
    assert "cohort: G2025" in result.output
    assert "organization: CQYC" in result.output
    assert "core: wht" in result.output
    assert "Identity: CQYC-王鸿天" in result.output


def test_explain_lookup_strategy(runner):
    result = runner.invoke(main, ["explain", "--names", "lookup", "CQYC-wht"])

    assert "Grammar:  no match" in result.output
    assert "Identity: CQYC-王鸿天" in result.output


def test_format_table_alignment():
    store = RosterStore(precision=1)
    store.add(FileResult("Quiz", (PersonEntry("Alice", 50), PersonEntry("Bob", 100)), 100))

    lines = format_table(store).splitlines()

    assert lines[0].split() == ["Name", "Avg", "Std", "Quiz", "Std", "Quiz", "Raw"]
    assert lines[2].split() == ["Bob", "100.0", "100.0", "100.0"]
    assert lines[3].split() == ["Alice", "50.0", "50.0", "50.0"]
