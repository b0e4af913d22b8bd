# src/tasktracker/api/app.py

"""
REST API over the task store and the transcript parser.

Every response uses the same envelope:
- success: {"success": true, "data": ...}
- failure: {"success": false, "error": "...", "details"|"message": ...}
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_api import TaskNotFoundError, TaskValidationError

logger = logging.getLogger(__name__)


class TaskCreate(BaseModel):
    # Everything optional here: task_api.validate_task produces the 400 details.
    title: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    dueDate: Optional[str] = None


class TaskUpdate(TaskCreate):
    pass


class StatusUpdate(BaseModel):
    status: Optional[str] = None


class TranscriptIn(BaseModel):
    transcript: Optional[str] = None


def _fail(status_code: int, error: str, **extra: Any) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})


def _build_router(state: AppState) -> APIRouter:
    router = APIRouter(prefix="/api/tasks")

    @router.get("")
    def list_tasks(
        status: Optional[str] = None,
        priority: Optional[str] = None,
        search: Optional[str] = None,
        sort_by: str = Query("createdAt", alias="sortBy"),
        sort_order: str = Query("desc", alias="sortOrder"),
        due_date_from: Optional[str] = Query(None, alias="dueDateFrom"),
        due_date_to: Optional[str] = Query(None, alias="dueDateTo"),
    ) -> dict[str, Any]:
        tasks = task_api.list_tasks(
            state,
            status=status,
            priority=priority,
            search=search,
            due_date_from=due_date_from,
            due_date_to=due_date_to,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        return {"success": True, "data": [t.to_dict() for t in tasks], "count": len(tasks)}

    # Declared before /{task_id} routes so "parse" is never read as an id.
    @router.post("/parse")
    def parse_transcript(body: TranscriptIn) -> dict[str, Any]:
        transcript, parsed = task_api.parse_transcript(state, body.transcript)
        return {"success": True, "data": {"transcript": transcript, "parsed": parsed.to_dict()}}

    @router.get("/{task_id}")
    def get_task(task_id: str) -> dict[str, Any]:
        return {"success": True, "data": task_api.get_task(state, task_id).to_dict()}

    @router.post("", status_code=201)
    def create_task(body: TaskCreate) -> dict[str, Any]:
        task = task_api.create_task(state, body.model_dump(exclude_unset=True))
        return {"success": True, "message": "Task created successfully", "data": task.to_dict()}

    @router.put("/{task_id}")
    def update_task(task_id: str, body: TaskUpdate) -> dict[str, Any]:
        task = task_api.update_task(state, task_id, body.model_dump(exclude_unset=True))
        return {"success": True, "message": "Task updated successfully", "data": task.to_dict()}

    @router.patch("/{task_id}/status")
    def update_status(task_id: str, body: StatusUpdate) -> dict[str, Any]:
        task = task_api.change_status(state, task_id, body.status)
        return {"success": True, "message": "Task status updated successfully", "data": task.to_dict()}

    @router.delete("/{task_id}")
    def delete_task(task_id: str) -> dict[str, Any]:
        task = task_api.delete_task(state, task_id)
        return {"success": True, "message": "Task deleted successfully", "data": task.to_dict()}

    return router


def create_app(state: AppState) -> FastAPI:
    settings = state.settings
    app = FastAPI(title=f"{getattr(settings, 'app_name', 'tasktracker')} API")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(getattr(settings, "cors_origins", ["*"]) or ["*"]),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    def health() -> dict[str, Any]:
        return {"status": "ok", "message": "Task Tracker API is running", "llm": state.llm_enabled}

    app.include_router(_build_router(state))

    @app.exception_handler(TaskNotFoundError)
    async def _not_found(request: Request, exc: TaskNotFoundError) -> JSONResponse:
        return _fail(404, "Task not found")

    @app.exception_handler(TaskValidationError)
    async def _invalid(request: Request, exc: TaskValidationError) -> JSONResponse:
        return _fail(400, "Validation failed", details=exc.details)

    @app.exception_handler(RequestValidationError)
    async def _bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = [f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg', '')}" for e in exc.errors()]
        return _fail(400, "Validation failed", details=details)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        if exc.status_code == 404:
            return _fail(404, "Route not found")
        return _fail(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def _unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _fail(500, "Something went wrong!", message=str(exc))

    return app
