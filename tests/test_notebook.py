from datetime import datetime, timedelta, timezone

import pytest

from virtual_labs.execution.exceptions import EmptyObservationError
from virtual_labs.execution.notebook import NotebookLog


def test_entries_keep_call_order():
    log = NotebookLog()
    texts = [f"observation {i}" for i in range(10)]

    for text in texts:
        log.append(text)

    entries = log.entries()
    assert [e.text for e in entries] == texts
    assert all(a.timestamp <= b.timestamp for a, b in zip(entries, entries[1:]))
    assert len({e.id for e in entries}) == len(texts)


def test_timestamps_never_go_backwards():
    start = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)
    times = iter([start, start - timedelta(seconds=5), start + timedelta(seconds=1)])
    log = NotebookLog(clock=lambda: next(times))

    log.append("first")
    log.append("clock stepped back")
    log.append("third")

    stamps = [e.timestamp for e in log.entries()]
    assert stamps == [start, start, start + timedelta(seconds=1)]


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_blank_text_is_rejected(text):
    log = NotebookLog()

    with pytest.raises(EmptyObservationError):
        log.append(text)
    assert log.entries() == ()


def test_text_is_trimmed_and_context_is_kept():
    log = NotebookLog()

    entry = log.append("  cells turned blue  ", "400x, Methylene Blue")

    assert entry.text == "cells turned blue"
    assert entry.context_tag == "400x, Methylene Blue"


def test_empty_context_tag_is_stored_as_none():
    entry = NotebookLog().append("note", "")
    assert entry.context_tag is None


def test_on_append_receives_each_entry():
    seen = []
    log = NotebookLog(on_append=seen.append)

    first = log.append("one")
    second = log.append("two")

    assert seen == [first, second]


def test_rejected_entry_is_not_forwarded():
    seen = []
    log = NotebookLog(on_append=seen.append)

    with pytest.raises(EmptyObservationError):
        log.append(" ")
    assert seen == []


def test_entries_view_cannot_change_the_log():
    log = NotebookLog()
    log.append("kept")

    view = log.entries()
    assert isinstance(view, tuple)
    assert len(log) == 1


def test_resumes_from_existing_entries():
    original = NotebookLog()
    original.append("before reload")

    resumed = NotebookLog(entries=original.entries())
    resumed.append("after reload")

    assert [e.text for e in resumed.entries()] == ["before reload", "after reload"]
