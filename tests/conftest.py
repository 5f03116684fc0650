import os
from pathlib import Path

# Keep tests off the filesystem unless a test asks for SQLite explicitly
os.environ["PERSISTENCE_BACKEND"] = "memory"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from taskboard.db import SQLiteRepository  # noqa: E402
from taskboard.main import app  # noqa: E402
from taskboard.repositories import InMemoryRepository, get_repository  # noqa: E402


@pytest.fixture()
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture()
def sqlite_repo(tmp_path: Path) -> SQLiteRepository:
    return SQLiteRepository(str(tmp_path / "tasks.db"))


@pytest.fixture(params=["memory", "sqlite"])
def any_repo(request, tmp_path: Path):
    """Each repository backend, for contract tests."""
    if request.param == "sqlite":
        return SQLiteRepository(str(tmp_path / "contract.db"))
    return InMemoryRepository()


@pytest.fixture()
def client(repo: InMemoryRepository):
    """
    TestClient bound to a fresh in-memory repository, so every test starts
    from an empty task list.
    """
    app.dependency_overrides[get_repository] = lambda: repo
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_repository, None)

