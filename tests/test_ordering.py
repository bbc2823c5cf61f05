# tests/test_ordering.py

from __future__ import annotations

from tasklist_store.tasks.ordering import relocate


def test_relocate_before_target() -> None:
    assert relocate(["x", "y", "z"], "z", "x") == ("z", "x", "y")
    assert relocate(["x", "y", "z"], "x", "z") == ("y", "x", "z")
    assert relocate(("a", "b", "c", "d"), "a", "d") == ("b", "c", "a", "d")


def test_relocate_without_target_moves_to_front() -> None:
    assert relocate(["x", "y", "z"], "z", None) == ("z", "x", "y")
    assert relocate(["x", "y", "z"], "y", "not-here") == ("y", "x", "z")


def test_relocate_absent_or_self_is_unchanged() -> None:
    seq = ["x", "y", "z"]
    assert relocate(seq, "q", "x") == ("x", "y", "z")
    assert relocate(seq, "y", "y") == ("x", "y", "z")
    assert relocate([], "q", None) == ()
    assert seq == ["x", "y", "z"]
