import pytest
from sqlalchemy import inspect

from task_tracker.db import init_schema, make_engine
from task_tracker.errors import SchemaError, StoreError, TaskNotFoundError
from task_tracker.models import InputTask, OutputTask
from task_tracker.repository import TaskRepository


@pytest.fixture
def engine():
    engine = make_engine("sqlite:///:memory:")
    yield engine
    engine.dispose()


@pytest.fixture
def repo(engine):
    init_schema(engine)
    return TaskRepository(engine)


def test_init_schema_is_idempotent(engine):
    init_schema(engine)
    init_schema(engine)
    columns = [column["name"] for column in inspect(engine).get_columns("tasks")]
    assert columns == ["id", "title", "description", "due_date", "status"]


def test_init_schema_failure_raises(tmp_path):
    broken = make_engine(f"sqlite:///{tmp_path / 'nodir' / 'tasks.db'}")
    with pytest.raises(SchemaError, match="Table creation failed"):
        init_schema(broken)
    broken.dispose()


def test_insert_assigns_increasing_ids(repo):
    first = repo.insert(InputTask(title="One"))
    second = repo.insert(InputTask(title="Two"))
    assert first == 1
    assert second == 2


def test_insert_then_fetch(repo):
    task = InputTask(title="Buy milk", description="2%", due_date="2024-01-01", status="open")
    task_id = repo.insert(task)
    assert repo.fetch_by_id(task_id) == OutputTask(id=task_id, **task.model_dump())


def test_fetch_missing(repo):
    with pytest.raises(TaskNotFoundError):
        repo.fetch_by_id(1)


def test_update_overwrites_fields(repo):
    task_id = repo.insert(InputTask(title="Draft", description="old", status="open"))
    repo.update(task_id, InputTask(title="Final", status="done"))
    assert repo.fetch_by_id(task_id) == OutputTask(id=task_id, title="Final", status="done")


def test_update_missing(repo):
    with pytest.raises(TaskNotFoundError):
        repo.update(7, InputTask(title="Ghost"))
    assert repo.list_all() == []


def test_delete(repo):
    task_id = repo.insert(InputTask(title="Temporary"))
    repo.delete_by_id(task_id)
    with pytest.raises(TaskNotFoundError):
        repo.fetch_by_id(task_id)


def test_delete_missing(repo):
    with pytest.raises(TaskNotFoundError):
        repo.delete_by_id(3)


def test_list_all_in_id_order(repo):
    assert repo.list_all() == []
    ids = [repo.insert(InputTask(title=title)) for title in ("a", "b", "c")]
    repo.delete_by_id(ids[1])
    assert [task.id for task in repo.list_all()] == [ids[0], ids[2]]


def test_ids_survive_delete(repo):
    task_id = repo.insert(InputTask(title="a"))
    repo.delete_by_id(task_id)
    assert repo.insert(InputTask(title="b")) == task_id + 1


def test_store_failure_without_schema(engine):
    repo = TaskRepository(engine)
    with pytest.raises(StoreError) as exc_info:
        repo.insert(InputTask(title="Nowhere"))
    assert exc_info.value.message == "Database insertion failed"

    with pytest.raises(StoreError) as exc_info:
        repo.fetch_by_id(1)
    assert exc_info.value.message == "Database query failed"

    with pytest.raises(StoreError):
        repo.list_all()


def test_failed_insert_leaves_no_row(repo, monkeypatch):
    def broken_flush(*args, **kwargs):
        from sqlalchemy.exc import OperationalError

        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr("sqlalchemy.orm.Session.flush", broken_flush)
    with pytest.raises(StoreError):
        repo.insert(InputTask(title="Half written"))
    monkeypatch.undo()

    assert repo.list_all() == []
