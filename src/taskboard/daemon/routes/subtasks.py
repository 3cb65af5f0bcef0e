"""Subtask API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import Field

from taskboard.daemon.routes.tasks import TaskBody
from taskboard.daemon.state import DaemonState, get_state
from taskboard.tasks.models import Subtask

router = APIRouter(prefix="/subtasks", tags=["subtasks"])


class SubtaskBody(TaskBody):
    """Request body for subtask create/update."""

    epic_id: int = Field(..., ge=1, description="Owning epic id")

    def to_subtask(self) -> Subtask:
        return Subtask(**self.schedule_fields(), epic_id=self.epic_id)


@router.get("")
def list_subtasks(state: DaemonState = Depends(get_state)) -> list[dict[str, Any]]:
    """All subtasks."""
    with state.lock:
        return [subtask.to_dict() for subtask in state.manager.get_all_subtasks()]


@router.get("/{subtask_id}")
def get_subtask(subtask_id: int, state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    """One subtask; the view is recorded in history."""
    with state.lock:
        subtask = state.manager.get_subtask_by_id(subtask_id)
        if subtask is None:
            raise HTTPException(status_code=404, detail=f"Subtask {subtask_id} not found")
        return subtask.to_dict()


@router.post("", status_code=status.HTTP_201_CREATED)
def save_subtask(body: SubtaskBody, state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    """Create a subtask, or update it when the body carries an id."""
    subtask = body.to_subtask()
    with state.lock:
        if subtask.id:
            state.manager.update_subtask(subtask)
        elif state.manager.create_subtask(subtask) is None:
            raise HTTPException(status_code=404, detail=f"Epic {subtask.epic_id} not found")
        return subtask.to_dict()


@router.delete("")
def delete_all_subtasks(state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    with state.lock:
        state.manager.delete_all_subtasks()
    return {"deleted": "all"}


@router.delete("/{subtask_id}")
def delete_subtask(subtask_id: int, state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    with state.lock:
        state.manager.delete_subtask_by_id(subtask_id)
    return {"deleted": subtask_id}
