import pytest

from stdscore.models import FileResult, PersonEntry, ScorePair
from stdscore.ranking import RosterStore, build_file_result


def file_result(label, scores):
    result, _ = build_file_result(label, [PersonEntry(name, score) for name, score in scores])
    return result


@pytest.fixture
def midterm():
    return file_result("Midterm", [("Alice", 90), ("Bob", 80)])


@pytest.fixture
def final():
    return file_result("Final", [("Alice", 70), ("Carol", 70)])


@pytest.fixture
def store(midterm, final):
    store = RosterStore()
    store.add(midterm)
    store.add(final)
    return store


def test_file_order_follows_insertion(store):
    assert store.file_order == ("Midterm", "Final")
    assert len(store) == 2
    assert "Final" in store


def test_all_identities_is_the_union(store):
    assert store.all_identities == frozenset({"Alice", "Bob", "Carol"})


def test_score_pairs_and_no_data(store):
    assert store.score_for("Alice", "Midterm") == ScorePair(standardized=100.0, raw=90)
    assert store.score_for("Carol", "Final") == ScorePair(standardized=100.0, raw=70)
    assert store.score_for("Carol", "Midterm") is None
    assert store.score_for("Alice", "Unknown") is None

    bob = store.scores_for("Bob")
    assert bob[0].standardized == pytest.approx(88.89, abs=0.01)
    assert bob[1] is None


def test_averages_only_count_files_with_data(store):
    assert store.average_std("Alice") == 100.0
    assert store.average_std("Bob") == pytest.approx(88.89, abs=0.01)
    assert store.average_std("Carol") == 100.0


def test_average_of_unknown_identity(store):
    with pytest.raises(KeyError):
        store.average_std("Dave")


def test_ranking_breaks_ties_by_identity(store):
    ranking = store.rankings()

    assert [r.identity for r in ranking] == ["Alice", "Carol", "Bob"]
    assert ranking[0].scores == (
        ScorePair(standardized=100.0, raw=90),
        ScorePair(standardized=100.0, raw=70),
    )
    assert ranking[1].scores[0] is None


def test_average_does_not_depend_on_file_order(midterm, final):
    third = file_result("Quiz", [("Alice", 40), ("Bob", 50)])

    forward = RosterStore()
    backward = RosterStore()
    for result in (midterm, final, third):
        forward.add(result)
    for result in (third, final, midterm):
        backward.add(result)

    for identity in ("Alice", "Bob", "Carol"):
        assert forward.average_std(identity) == pytest.approx(backward.average_std(identity))


def test_re_adding_a_label_replaces_in_place(store):
    store.add(file_result("Midterm", [("Bob", 50), ("Dave", 100)]))

    assert store.file_order == ("Midterm", "Final")
    assert store.file_result("Midterm").qualifying_max == 100
    # Alice's midterm score is gone; only the final counts now
    assert store.score_for("Alice", "Midterm") is None
    assert store.average_std("Alice") == 100.0
    assert store.average_std("Bob") == 50.0
    assert "Dave" in store.all_identities


def test_identities_from_replaced_files_disappear(store):
    store.add(file_result("Final", [("Alice", 10)]))

    assert "Carol" not in store.all_identities
    assert [r.identity for r in store.rankings()] == ["Alice", "Bob"]


def test_degenerate_file_scores_zero_but_has_data():
    store = RosterStore()
    store.add(FileResult(label="Zero", entries=(PersonEntry("Alice", 0),), qualifying_max=0))

    assert store.score_for("Alice", "Zero") == ScorePair(standardized=0.0, raw=0)
    assert store.score_for("Bob", "Zero") is None
    assert store.average_std("Alice") == 0.0


def test_views_are_recomputed_without_side_effects(store):
    first = store.rankings()
    second = store.rankings()

    assert first == second
    assert store.file_order == ("Midterm", "Final")


def test_clear_discards_everything(store):
    store.precision = 5

    store.clear()

    assert store.file_order == ()
    assert store.all_identities == frozenset()
    assert store.rankings() == []
    assert store.precision == 2


def test_precision_is_passed_through():
    assert RosterStore(precision=4).precision == 4
