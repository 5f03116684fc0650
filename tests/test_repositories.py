import sqlite3
from datetime import date

import pytest

from taskboard.db import SQLiteRepository
from taskboard.repositories import ListQuery
from taskboard.schemas import TaskCreate, TaskUpdate


class TestRepositoryContract:
    """Both backends must behave the same."""

    def test_create_assigns_id_and_created_at(self, any_repo):
        created = any_repo.create(TaskCreate(title="First"))
        assert created["id"]
        assert created["created_at"] is not None
        assert created["completed"] is False
        assert created["description"] is None
        assert created["due_date"] is None

    def test_ids_are_unique(self, any_repo):
        ids = {any_repo.create(TaskCreate(title=f"t{i}"))["id"] for i in range(20)}
        assert len(ids) == 20

    def test_get_returns_stored_fields(self, any_repo):
        created = any_repo.create(
            TaskCreate(title="Round trip", description='{"a": 1}', completed=True, due_date="2030-03-04")
        )
        fetched = any_repo.get(created["id"])
        assert fetched == created
        assert fetched["due_date"] == date(2030, 3, 4)
        assert fetched["description"] == '{"a": 1}'

    def test_get_missing(self, any_repo):
        assert any_repo.get("missing") is None

    def test_update_merges_supplied_fields(self, any_repo):
        created = any_repo.create(TaskCreate(title="Merge", description="keep", due_date="2030-01-01"))
        updated = any_repo.update(created["id"], TaskUpdate(completed=True))
        assert updated["completed"] is True
        assert updated["title"] == "Merge"
        assert updated["description"] == "keep"
        assert updated["due_date"] == date(2030, 1, 1)
        assert updated["created_at"] == created["created_at"]

    def test_update_explicit_null_clears(self, any_repo):
        created = any_repo.create(TaskCreate(title="Clear", description="gone", due_date="2030-01-01"))
        updated = any_repo.update(created["id"], TaskUpdate(description=None, due_date=None))
        assert updated["description"] is None
        assert updated["due_date"] is None

    def test_update_missing(self, any_repo):
        assert any_repo.update("missing", TaskUpdate(title="x")) is None

    def test_delete(self, any_repo):
        created = any_repo.create(TaskCreate(title="Bye"))
        assert any_repo.delete(created["id"]) is True
        assert any_repo.get(created["id"]) is None
        assert any_repo.delete(created["id"]) is False

    def test_list_newest_first_with_total(self, any_repo):
        ids = [any_repo.create(TaskCreate(title=f"t{i}"))["id"] for i in range(5)]
        items, total = any_repo.list(ListQuery(limit=3, offset=1))
        assert total == 5
        assert [t["id"] for t in items] == list(reversed(ids))[1:4]

    def test_list_default_query(self, any_repo):
        any_repo.create(TaskCreate(title="only"))
        items, total = any_repo.list()
        assert total == 1
        assert items[0]["title"] == "only"

    def test_list_offset_beyond_integer_range(self, any_repo):
        any_repo.create(TaskCreate(title="only"))
        items, total = any_repo.list(ListQuery(limit=100, offset=2**70))
        assert items == []
        assert total == 1


class TestSQLiteRepository:
    def test_persists_across_instances(self, tmp_path):
        path = str(tmp_path / "nested" / "tasks.db")
        created = SQLiteRepository(path).create(TaskCreate(title="Durable"))
        assert SQLiteRepository(path).get(created["id"])["title"] == "Durable"

    def test_title_length_constraint(self, sqlite_repo, tmp_path):
        conn = sqlite3.connect(str(tmp_path / "tasks.db"))
        try:
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute(
                    "INSERT INTO tasks (id, title, completed, created_at) VALUES (?, ?, 0, ?)",
                    ("x", "", "2025-01-01T00:00:00+00:00"),
                )
        finally:
            conn.close()

    def test_completed_defaults_to_false(self, sqlite_repo, tmp_path):
        conn = sqlite3.connect(str(tmp_path / "tasks.db"))
        try:
            conn.execute(
                "INSERT INTO tasks (id, title, created_at) VALUES (?, ?, ?)",
                ("raw", "Inserted directly", "2025-01-01T00:00:00+00:00"),
            )
            conn.commit()
        finally:
            conn.close()
        assert sqlite_repo.get("raw")["completed"] is False
