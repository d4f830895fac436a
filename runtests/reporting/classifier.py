"""
Display classification for loaded reports.

Each test falls into one of three buckets by state. The bucket decides which
of the test's log entries are eligible for display; configured ignore
patterns then suppress eligible entries whose message matches.
"""

import re
from enum import Enum
from typing import FrozenSet, Iterable, List, Pattern

from runtests.core.errors import InvalidIgnorePatternError
from runtests.reporting.models import Entry, EntryType, Test, TestState


class Bucket(Enum):
    """Display bucket for a test."""
    PASS = "pass"
    FAIL = "fail"
    OTHER = "other"


STATE_BUCKETS = {
    TestState.SUCCESS: Bucket.PASS,
    TestState.FAIL: Bucket.FAIL,
    TestState.NOT_RUN: Bucket.OTHER,
    TestState.IN_PROCESS: Bucket.OTHER,
    TestState.NOT_ENOUGH_PARTICIPANTS: Bucket.OTHER,
}

# Entry kinds shown per bucket; info lines only matter when a test failed
VISIBLE_KINDS = {
    Bucket.PASS: frozenset({EntryType.WARNING, EntryType.ERROR}),
    Bucket.FAIL: frozenset({EntryType.INFO, EntryType.WARNING, EntryType.ERROR}),
    Bucket.OTHER: frozenset(),
}

LOCATED_KINDS: FrozenSet[EntryType] = frozenset({EntryType.WARNING, EntryType.ERROR})


def bucket_for_state(state: TestState) -> Bucket:
    """Map a test state to its display bucket."""
    return STATE_BUCKETS[state]


def shows_location(kind: EntryType) -> bool:
    """Whether an entry of this kind is followed by a ``file:line`` line."""
    return kind in LOCATED_KINDS


class IgnoreFilter:
    """Suppresses log messages matching any of a list of regular expressions."""

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns: List[Pattern[str]] = []
        for pattern in patterns:
            try:
                self.patterns.append(re.compile(pattern))
            except re.error as e:
                raise InvalidIgnorePatternError(pattern, str(e)) from e

    def is_ignored(self, message: str) -> bool:
        """True if ``message`` matches any pattern (unanchored search)."""
        return any(pattern.search(message) for pattern in self.patterns)


def visible_entries(test: Test, ignore_filter: IgnoreFilter) -> List[Entry]:
    """
    Entries of ``test`` to display, in original order.

    Args:
        test: Test whose entries are filtered
        ignore_filter: Suppression patterns, applied to every eligible entry

    Returns:
        Entries whose kind is eligible for the test's bucket and whose
        message is not ignored
    """
    kinds = VISIBLE_KINDS[bucket_for_state(test.state)]
    if not kinds:
        return []
    return [
        entry for entry in test.entries
        if entry.event.kind in kinds and not ignore_filter.is_ignored(entry.event.message)
    ]
