"""Task API endpoints."""

from datetime import datetime, timedelta
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from taskboard.daemon.state import DaemonState, get_state
from taskboard.tasks.constants import TaskStatus
from taskboard.tasks.models import Task

router = APIRouter(prefix="/tasks", tags=["tasks"])


class TaskBody(BaseModel):
    """Request body for task create/update. ``id`` of 0 creates."""

    id: int = Field(0, ge=0, description="Existing task id, or 0 to create")
    name: str = Field("", description="Task name")
    description: str = Field("", description="Task description")
    status: TaskStatus = Field(TaskStatus.NEW)
    start_time: datetime | None = Field(None, description="ISO-8601 start time")
    duration: int | None = Field(None, ge=0, description="Duration in minutes")

    def schedule_fields(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "id": self.id,
            "status": self.status,
            "start_time": self.start_time,
            "duration": timedelta(minutes=self.duration) if self.duration is not None else None,
        }

    def to_task(self) -> Task:
        return Task(**self.schedule_fields())


@router.get("")
def list_tasks(state: DaemonState = Depends(get_state)) -> list[dict[str, Any]]:
    """All tasks."""
    with state.lock:
        return [task.to_dict() for task in state.manager.get_all_tasks()]


@router.get("/{task_id}")
def get_task(task_id: int, state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    """One task; the view is recorded in history."""
    with state.lock:
        task = state.manager.get_task_by_id(task_id)
        if task is None:
            raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
        return task.to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
def save_task(body: TaskBody, state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    """Create a task, or update it when the body carries an id."""
    task = body.to_task()
    with state.lock:
        if task.id:
            state.manager.update_task(task)
        else:
            state.manager.create_task(task)
        return task.to_dict()


@router.delete("")
def delete_all_tasks(state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    with state.lock:
        state.manager.delete_all_tasks()
    return {"deleted": "all"}


@router.delete("/{task_id}")
def delete_task(task_id: int, state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    with state.lock:
        state.manager.delete_task_by_id(task_id)
    return {"deleted": task_id}
