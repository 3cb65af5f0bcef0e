"""Read-only views: history and prioritized schedule."""

from typing import Any

from fastapi import APIRouter, Depends

from taskboard.daemon.state import DaemonState, get_state

router = APIRouter(tags=["views"])


@router.get("/history")
def history(state: DaemonState = Depends(get_state)) -> list[dict[str, Any]]:
    """Viewed items, most recent last."""
    with state.lock:
        return [item.to_dict() for item in state.manager.get_history()]


@router.get("/prioritized")
def prioritized(state: DaemonState = Depends(get_state)) -> list[dict[str, Any]]:
    """Scheduled tasks and subtasks, earliest start first."""
    with state.lock:
        return [item.to_dict() for item in state.manager.get_prioritized_tasks()]
