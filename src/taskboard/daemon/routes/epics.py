"""Epic API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict, Field

from taskboard.daemon.state import DaemonState, get_state
from taskboard.tasks.models import Epic

router = APIRouter(prefix="/epics", tags=["epics"])


class EpicBody(BaseModel):
    """
    Request body for epic create/update.

    Status, schedule and subtask ids are derived, so any such fields in the
    body are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(0, ge=0, description="Existing epic id, or 0 to create")
    name: str = Field("", description="Epic name")
    description: str = Field("", description="Epic description")

    def to_epic(self) -> Epic:
        return Epic(name=self.name, description=self.description, id=self.id)


@router.get("")
def list_epics(state: DaemonState = Depends(get_state)) -> list[dict[str, Any]]:
    """All epics."""
    with state.lock:
        return [epic.to_dict() for epic in state.manager.get_all_epics()]


@router.get("/{epic_id}")
def get_epic(epic_id: int, state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    """One epic; the view is recorded in history."""
    with state.lock:
        epic = state.manager.get_epic_by_id(epic_id)
        if epic is None:
            raise HTTPException(status_code=404, detail=f"Epic {epic_id} not found")
        return epic.to_dict()


@router.get("/{epic_id}/subtasks")
def get_epic_subtasks(epic_id: int, state: DaemonState = Depends(get_state)) -> list[dict[str, Any]]:
    """Subtasks of one epic, in the epic's order."""
    with state.lock:
        if state.manager.get_epic_by_id(epic_id) is None:
            raise HTTPException(status_code=404, detail=f"Epic {epic_id} not found")
        return [subtask.to_dict() for subtask in state.manager.get_epic_subtasks(epic_id)]


@router.post("", status_code=status.HTTP_201_CREATED)
def save_epic(body: EpicBody, state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    """Create an epic, or rename it when the body carries an id."""
    epic = body.to_epic()
    with state.lock:
        if epic.id:
            state.manager.update_epic(epic)
        else:
            state.manager.create_epic(epic)
        return epic.to_dict()


@router.delete("")
def delete_all_epics(state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    with state.lock:
        state.manager.delete_all_epics()
    return {"deleted": "all"}


@router.delete("/{epic_id}")
def delete_epic(epic_id: int, state: DaemonState = Depends(get_state)) -> dict[str, Any]:
    with state.lock:
        state.manager.delete_epic_by_id(epic_id)
    return {"deleted": epic_id}
