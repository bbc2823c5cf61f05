# tests/test_entity_index.py

from __future__ import annotations

import pytest

from tasklist_store.errors import DuplicateIdError, NotFoundError
from tasklist_store.tasks.entity_index import add_one, remove_many, remove_one, update_many, update_one
from tasklist_store.tasks.task_models import Task, initial_task_state


def test_add_one_appends_id_and_rejects_duplicates() -> None:
    s0 = initial_task_state()
    s1 = add_one(s0, Task(id="t1", title="one"))
    s2 = add_one(s1, Task(id="t2", title="two"))

    assert s2.ids == ("t1", "t2")
    assert s2.entities["t2"].title == "two"
    assert s0.ids == () and s0.entities == {}

    with pytest.raises(DuplicateIdError):
        add_one(s2, Task(id="t1", title="again"))
    assert s2.entities["t1"].title == "one"


def test_update_one_merges_without_recomputing_derived_fields(family_state) -> None:
    s = update_one(family_state, "R", {"title": "pay taxes", "time_spent_on_day": {"2024-01-05": 7}})

    r = s.entities["R"]
    assert r.title == "pay taxes"
    assert r.time_spent_on_day == {"2024-01-05": 7}
    assert r.time_spent == 0
    assert family_state.entities["R"].title == "taxes"


def test_update_one_errors(family_state) -> None:
    with pytest.raises(NotFoundError):
        update_one(family_state, "nope", {"title": "x"})
    with pytest.raises(ValueError):
        update_one(family_state, "R", {"colour": "red"})
    with pytest.raises(ValueError):
        update_one(family_state, "R", {"id": "R2"})


def test_update_many_last_write_wins_and_fails_without_side_effects(family_state) -> None:
    s = update_many(family_state, [("R", {"title": "a"}), ("A", {"is_done": True}), ("R", {"title": "b"})])
    assert s.entities["R"].title == "b"
    assert s.entities["A"].is_done is True

    with pytest.raises(NotFoundError):
        update_many(family_state, [("R", {"title": "changed"}), ("missing", {"title": "x"})])
    assert family_state.entities["R"].title == "taxes"


def test_remove_many_drops_entities_and_ids(family_state) -> None:
    s = remove_many(family_state, ["A", "R", "ghost"])
    assert s.ids == ("P", "B")
    assert set(s.entities) == {"P", "B"}
    # no cascade: P still lists A
    assert s.entities["P"].sub_task_ids == ("A", "B")

    assert remove_one(family_state, "ghost") is family_state
