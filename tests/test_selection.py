"""Tests for SelectionStore."""

from vector_lens.core.selection import SelectionStore


def test_select_and_clear():
    store = SelectionStore()
    assert not store.has_selection
    store.select(3)
    assert store.selected_id == 3
    store.clear()
    assert store.selected_id is None


def test_notifies_only_on_change():
    store = SelectionStore()
    seen = []
    store.subscribe(seen.append)
    store.select(1)
    store.select(1)
    store.select(2)
    store.clear()
    assert seen == [1, 2, None]


def test_unsubscribe():
    store = SelectionStore(selected_id=5)
    seen = []
    unsubscribe = store.subscribe(seen.append)
    unsubscribe()
    unsubscribe()
    store.select(6)
    assert seen == []
