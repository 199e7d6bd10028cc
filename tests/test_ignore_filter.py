from stdscore.models import PersonEntry
from stdscore.names import IgnoreFilter


def test_ignored_identities_are_dropped_in_order():
    entries = [
        PersonEntry("Alice", 90),
        PersonEntry("std", 95),
        PersonEntry("Bob", 80),
    ]

    kept = IgnoreFilter({"std"}).apply(entries)

    assert kept == [PersonEntry("Alice", 90), PersonEntry("Bob", 80)]


def test_matching_is_case_insensitive():
    ignore = IgnoreFilter(["STD"])

    assert ignore.is_ignored("std")
    assert ignore.is_ignored("Std")
    assert not ignore.is_ignored("student")


def test_empty_ignore_set_keeps_everything():
    entries = [PersonEntry("Alice", 90), PersonEntry("std", 95)]

    assert IgnoreFilter([]).apply(entries) == entries
