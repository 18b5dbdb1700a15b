# tests/test_task_store.py

from __future__ import annotations

import base64
import hashlib
import json

import pytest

from taskkeeper.tasks.task_models import Task
from taskkeeper.tasks.task_store import TaskStore, UserAlreadyExistsError


def _snapshot(store: TaskStore) -> str:
    return json.dumps([store.dump_task_lists(), store.dump_users()], sort_keys=True)


def test_register_twice_keeps_single_user(store: TaskStore) -> None:
    store.register("alice", "secret")

    with pytest.raises(UserAlreadyExistsError) as exc:
        store.register("alice", "other")

    assert exc.value.username == "alice"
    assert store.count_users() == 1
    # first password still works, the rejected one does not
    assert store.authenticate("alice", "secret")
    assert not store.authenticate("alice", "other")


def test_usernames_are_case_sensitive(store: TaskStore) -> None:
    store.register("alice", "secret")
    store.register("Alice", "secret")

    assert store.count_users() == 2
    assert store.has_user("Alice")
    assert not store.authenticate("ALICE", "secret")


def test_password_is_never_stored_in_plaintext(store: TaskStore) -> None:
    store.register("alice", "secret")
    store.register("bob", "secret")

    users = {u["username"]: u["password"] for u in store.dump_users()}
    assert "secret" not in users.values()
    # per-call salt: same password, different hashes
    assert users["alice"] != users["bob"]


def test_authenticate_truth_table(store: TaskStore) -> None:
    store.register("alice", "secret")

    assert store.authenticate("alice", "secret") is True
    assert store.authenticate("alice", "secret ") is False
    assert store.authenticate("alice", "") is False
    assert store.authenticate("mallory", "secret") is False


def test_authenticate_rejects_the_password_digest(store: TaskStore) -> None:
    store.register("alice", "secret")
    digest = base64.b64encode(hashlib.sha256(b"secret").digest()).decode("ascii")

    assert store.authenticate("alice", digest) is False


def test_authenticate_with_undecodable_input_is_false(store: TaskStore) -> None:
    store.register("alice", "secret")

    assert store.authenticate("alice", "\udcff") is False
    assert store.authenticate("\udcff", "secret") is False


def test_authenticate_with_malformed_hash_is_false(tmp_path) -> None:
    (tmp_path / "users.json").write_text(
        json.dumps([{"username": "eve", "password": "not-a-bcrypt-hash"}]), "utf-8"
    )
    store = TaskStore.load(tmp_path / "tasks.json", tmp_path / "users.json", bcrypt_rounds=4)

    assert store.authenticate("eve", "not-a-bcrypt-hash") is False


def test_add_task_assigns_sequential_ids(store: TaskStore) -> None:
    for n in range(1, 6):
        store.add_task("alice", f"task {n}")

    tasks = store.get_tasks("alice")
    assert [t.id for t in tasks] == [1, 2, 3, 4, 5]
    assert [t.description for t in tasks] == [f"task {n}" for n in range(1, 6)]
    assert not any(t.completed for t in tasks)


def test_add_task_accepts_empty_description(store: TaskStore) -> None:
    task = store.add_task("alice", "")
    assert task == Task(id=1, description="", completed=False)


def test_task_lists_are_per_user(store: TaskStore) -> None:
    store.add_task("alice", "a1")
    store.add_task("bob", "b1")
    store.add_task("alice", "a2")

    assert [t.id for t in store.get_tasks("alice")] == [1, 2]
    assert [t.id for t in store.get_tasks("bob")] == [1]
    assert store.get_tasks("carol") == []


def test_removed_id_can_be_reassigned(store: TaskStore) -> None:
    store.add_task("alice", "first")
    store.add_task("alice", "second")
    store.remove_task("alice", 2)

    task = store.add_task("alice", "replacement")

    assert task.id == 2
    assert store.get_task("alice", 2) == Task(id=2, description="replacement", completed=False)


def test_reuse_after_removing_middle_task_duplicates_an_id(store: TaskStore) -> None:
    for d in ("one", "two", "three"):
        store.add_task("alice", d)
    store.remove_task("alice", 2)

    store.add_task("alice", "four")

    assert [(t.id, t.description) for t in store.get_tasks("alice")] == [
        (1, "one"),
        (3, "three"),
        (3, "four"),
    ]
    # edit/complete hit the first match; remove drops every match
    store.mark_completed("alice", 3)
    assert [t.completed for t in store.get_tasks("alice")] == [False, True, False]
    store.remove_task("alice", 3)
    assert [t.id for t in store.get_tasks("alice")] == [1]


def test_remove_task_preserves_order(store: TaskStore) -> None:
    for d in ("a", "b", "c", "d"):
        store.add_task("alice", d)

    store.remove_task("alice", 2)

    assert [t.description for t in store.get_tasks("alice")] == ["a", "c", "d"]


def test_edit_task_keeps_id_and_status(store: TaskStore) -> None:
    store.add_task("alice", "old")
    store.mark_completed("alice", 1)

    store.edit_task("alice", 1, "new")

    assert store.get_task("alice", 1) == Task(id=1, description="new", completed=True)


@pytest.mark.parametrize(
    "op",
    [
        lambda s: s.edit_task("alice", 99, "x"),
        lambda s: s.edit_task("nobody", 1, "x"),
        lambda s: s.mark_completed("alice", 99),
        lambda s: s.mark_completed("nobody", 1),
        lambda s: s.remove_task("alice", 99),
        lambda s: s.remove_task("nobody", 1),
    ],
)
def test_missing_user_or_task_is_a_noop(store: TaskStore, op) -> None:
    store.register("alice", "secret")
    store.add_task("alice", "keep me")
    before = _snapshot(store)

    op(store)

    assert _snapshot(store) == before


def test_returned_tasks_are_copies(store: TaskStore) -> None:
    store.add_task("alice", "original")

    store.get_tasks("alice")[0].description = "mutated"
    store.get_task("alice", 1).completed = True  # type: ignore[union-attr]

    assert store.get_task("alice", 1) == Task(id=1, description="original", completed=False)


def test_display_lists_tasks_with_status(store: TaskStore) -> None:
    store.add_task("alice", "buy milk")
    store.add_task("alice", "walk dog")
    store.mark_completed("alice", 2)

    assert store.display("alice") == (
        "Tasks for alice:\n"
        "ID: 1, Description: buy milk, Status: Pending\n"
        "ID: 2, Description: walk dog, Status: Completed"
    )


def test_display_without_tasks(store: TaskStore) -> None:
    assert store.display("alice") == "No tasks found for alice"


def test_display_has_no_side_effects(store: TaskStore) -> None:
    store.display("ghost")
    assert store.dump_task_lists() == []
