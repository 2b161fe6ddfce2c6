import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .errors import StoreError, TaskNotFoundError
from .models import InputTask, OutputTask
from .repository import TaskRepository

logger = logging.getLogger(__name__)

INVALID_TASK = "Invalid task data"
NOT_FOUND = "Task not found"
DELETED = "Task deleted successfully"

# Largest value SQLite can store in an INTEGER column.
MAX_TASK_ID = 2**63 - 1


def get_repository(request: Request) -> TaskRepository:
    return request.app.state.repository


def parse_task_id(task_id: str) -> int:
    # Anything that cannot name a row is reported as a missing task.
    if not (task_id.isascii() and task_id.isdigit()):
        raise TaskNotFoundError(task_id)
    value = int(task_id)
    if not 0 < value <= MAX_TASK_ID:
        raise TaskNotFoundError(task_id)
    return value


def create_app(repository: TaskRepository) -> FastAPI:
    app = FastAPI(title="Task Tracker")
    app.state.repository = repository

    @app.exception_handler(RequestValidationError)
    async def invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.warning("Rejected body for %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": INVALID_TASK})

    @app.exception_handler(TaskNotFoundError)
    async def not_found_handler(request: Request, exc: TaskNotFoundError) -> JSONResponse:
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=404, content={"error": NOT_FOUND})

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("%s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=500, content={"error": exc.message})

    @app.get("/", status_code=200)
    def read_root() -> dict:
        return {"message": "Server is running!"}

    @app.post("/tasks", status_code=201)
    @app.post("/tasks/", status_code=201, include_in_schema=False)
    def create_task(task: InputTask, repo: TaskRepository = Depends(get_repository)) -> OutputTask:
        task_id = repo.insert(task)
        return OutputTask(id=task_id, **task.model_dump())

    @app.get("/tasks/{task_id}", status_code=200)
    def get_task(task_id: str, repo: TaskRepository = Depends(get_repository)) -> OutputTask:
        return repo.fetch_by_id(parse_task_id(task_id))

    @app.put("/tasks/{task_id}", status_code=200)
    def update_task(
        task_id: str, task: InputTask, repo: TaskRepository = Depends(get_repository)
    ) -> OutputTask:
        value = parse_task_id(task_id)
        repo.update(value, task)
        return OutputTask(id=value, **task.model_dump())

    @app.delete("/tasks/{task_id}", status_code=200)
    def delete_task(task_id: str, repo: TaskRepository = Depends(get_repository)) -> dict:
        repo.delete_by_id(parse_task_id(task_id))
        return {"message": DELETED}

    @app.get("/tasks", status_code=200)
    @app.get("/tasks/", status_code=200, include_in_schema=False)
    def list_tasks(repo: TaskRepository = Depends(get_repository)) -> list[OutputTask]:
        return repo.list_all()

    return app
