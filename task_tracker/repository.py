import logging

from sqlalchemy import Engine, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from .errors import StoreError, TaskNotFoundError
from .models import InputTask, OutputTask, TaskDB

logger = logging.getLogger(__name__)


class TaskRepository:
    """Single-row CRUD and full scans over the ``tasks`` table.

    Every call runs in its own session opened with ``sessionmaker.begin()``,
    which commits on success and rolls back and closes on any exit path.
    Store faults are re-raised as :class:`StoreError`; a missing row is
    reported as :class:`TaskNotFoundError`.
    """

    def __init__(self, engine: Engine) -> None:
        self.SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def insert(self, task: InputTask) -> int:
        new_task = TaskDB(**task.model_dump())
        try:
            with self.SessionLocal.begin() as db:
                db.add(new_task)
                db.flush()
                task_id = new_task.id
        except SQLAlchemyError as exc:
            logger.exception("Insert failed")
            raise StoreError("Database insertion failed") from exc
        logger.info("Created task %s", task_id)
        return task_id

    def fetch_by_id(self, task_id: int) -> OutputTask:
        try:
            with self.SessionLocal.begin() as db:
                task = db.get(TaskDB, task_id)
                found = task.to_dict() if task else None
        except SQLAlchemyError as exc:
            logger.exception("Fetch of task %s failed", task_id)
            raise StoreError("Database query failed") from exc
        if found is None:
            raise TaskNotFoundError(task_id)
        return OutputTask(**found)

    def update(self, task_id: int, task: InputTask) -> None:
        try:
            with self.SessionLocal.begin() as db:
                prev_task = db.get(TaskDB, task_id)
                if prev_task is None:
                    raise TaskNotFoundError(task_id)
                for key, value in task.model_dump().items():
                    setattr(prev_task, key, value)
        except SQLAlchemyError as exc:
            logger.exception("Update of task %s failed", task_id)
            raise StoreError("Database update failed") from exc
        logger.info("Updated task %s", task_id)

    def delete_by_id(self, task_id: int) -> None:
        try:
            with self.SessionLocal.begin() as db:
                task = db.get(TaskDB, task_id)
                if task is None:
                    raise TaskNotFoundError(task_id)
                db.delete(task)
        except SQLAlchemyError as exc:
            logger.exception("Delete of task %s failed", task_id)
            raise StoreError("Database delete failed") from exc
        logger.info("Deleted task %s", task_id)

    def list_all(self) -> list[OutputTask]:
        try:
            with self.SessionLocal.begin() as db:
                rows = db.scalars(select(TaskDB).order_by(TaskDB.id)).all()
                tasks = [OutputTask(**task.to_dict()) for task in rows]
        except SQLAlchemyError as exc:
            logger.exception("Listing tasks failed")
            raise StoreError("Database query failed") from exc
        return tasks
