import pytest

from conftest import make_entry, make_test
from runtests.core.errors import InvalidIgnorePatternError
from runtests.reporting.classifier import (
    Bucket,
    IgnoreFilter,
    bucket_for_state,
    shows_location,
    visible_entries,
)
from runtests.reporting.models import EntryType, Test, TestState


def _test(state: str, *entries) -> Test:
    return Test.from_dict(make_test("Some.Test", state, list(entries)))


ALL_KINDS = (
    make_entry("Info", "info line"),
    make_entry("Warning", "warn line"),
    make_entry("Error", "error line"),
)


def test_every_state_has_a_bucket():
    assert bucket_for_state(TestState.SUCCESS) == Bucket.PASS
    assert bucket_for_state(TestState.FAIL) == Bucket.FAIL
    assert bucket_for_state(TestState.NOT_RUN) == Bucket.OTHER
    assert bucket_for_state(TestState.IN_PROCESS) == Bucket.OTHER
    assert bucket_for_state(TestState.NOT_ENOUGH_PARTICIPANTS) == Bucket.OTHER


def test_passing_test_hides_info_entries():
    entries = visible_entries(_test("Success", *ALL_KINDS), IgnoreFilter())
    assert [e.event.message for e in entries] == ["warn line", "error line"]


def test_failing_test_shows_all_kinds_in_order():
    entries = visible_entries(_test("Fail", *ALL_KINDS), IgnoreFilter())
    assert [e.event.message for e in entries] == ["info line", "warn line", "error line"]


@pytest.mark.parametrize("state", ["NotRun", "InProcess", "NotEnoughParticipants"])
def test_other_bucket_shows_nothing(state):
    assert visible_entries(_test(state, *ALL_KINDS), IgnoreFilter()) == []


@pytest.mark.parametrize("state", ["Success", "Fail"])
def test_ignore_pattern_suppresses_in_every_bucket(state):
    test = _test(
        state,
        make_entry("Warning", "Retry attempt 1"),
        make_entry("Error", "Deprecated API"),
    )
    entries = visible_entries(test, IgnoreFilter(["^Retry"]))
    assert [e.event.message for e in entries] == ["Deprecated API"]


def test_ignore_patterns_are_unanchored_searches():
    ignore = IgnoreFilter(["shader", "^LogTemp"])
    assert ignore.is_ignored("Compiling shader maps")
    assert ignore.is_ignored("LogTemp: hello")
    assert not ignore.is_ignored("Warning LogTemp")


def test_empty_filter_ignores_nothing():
    ignore = IgnoreFilter()
    assert ignore.patterns == []
    assert not ignore.is_ignored("anything")


def test_invalid_pattern_fails_at_construction():
    with pytest.raises(InvalidIgnorePatternError) as exc_info:
        IgnoreFilter(["ok", "(unclosed"])
    assert exc_info.value.pattern == "(unclosed"


def test_only_warnings_and_errors_show_location():
    assert shows_location(EntryType.WARNING)
    assert shows_location(EntryType.ERROR)
    assert not shows_location(EntryType.INFO)
