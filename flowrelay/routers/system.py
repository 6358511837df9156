from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["system"])


@router.get("/health")
def health(request: Request) -> dict[str, Any]:
    """Liveness plus which channels and background jobs are running."""
    state = getattr(request.app.state, "relay", None)
    if state is None:
        return {"status": "ok", "channels": [], "reminders": False}
    return {
        "status": "ok",
        "channels": [
            plugin.id for plugin in state.registry.list_channels() if plugin.running
        ],
        "reminders": bool(state.poller is not None and state.poller.running),
    }
