class TaskTrackerError(Exception):
    """Base class for errors surfaced by the task tracker."""


class TaskNotFoundError(TaskTrackerError):
    def __init__(self, task_id: object) -> None:
        super().__init__(f"Task {task_id} does not exist")
        self.task_id = task_id


class StoreError(TaskTrackerError):
    """A persistence-layer fault: connection, statement or scan."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class SchemaError(TaskTrackerError):
    pass
