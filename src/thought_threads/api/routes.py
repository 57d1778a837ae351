"""API routes for Thought Threads.

Provides:
- /api/thoughts for listing, adding and clearing thoughts
- /api/thoughts/{id} and /api/thoughts/{id}/position for single thoughts
- /api/graph for the renderer's node-link payload
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from ..graph import build_graph
from ..logging import get_logger
from ..service import EmptyThoughtError, ThoughtNotFoundError, ThoughtService, ThoughtStoreError

LOGGER = get_logger(__name__)

router = APIRouter(prefix="/api")


class ThoughtCreateRequest(BaseModel):
    """Body of a new thought."""

    content: str = ""


class PositionUpdateRequest(BaseModel):
    """New layout coordinates dragged in the renderer."""

    x: float = Field(default=0.0)
    y: float = Field(default=0.0)


class SuccessResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    status: str = "ok"
    thoughts: int = 0


def get_service(request: Request) -> ThoughtService:
    """Get the thought service from app state."""
    service = getattr(request.app.state, "service", None)
    if service is None:
        raise RuntimeError("Thought service not initialized")
    return service


@router.get("/thoughts")
def list_thoughts(request: Request) -> dict[str, Any]:
    return get_service(request).snapshot().to_dict()


@router.post("/thoughts")
def add_thought(request: Request, body: ThoughtCreateRequest) -> dict[str, Any]:
    """Store a thought and return it with the connections it created."""
    service = get_service(request)
    try:
        result = service.add_thought(body.content)
    except EmptyThoughtError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ThoughtStoreError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return result.to_dict()


@router.delete("/thoughts/{thought_id}", response_model=SuccessResponse)
def delete_thought(request: Request, thought_id: int) -> SuccessResponse:
    get_service(request).delete_thought(thought_id)
    return SuccessResponse()


@router.patch("/thoughts/{thought_id}/position", response_model=SuccessResponse)
def update_position(request: Request, thought_id: int, body: PositionUpdateRequest) -> SuccessResponse:
    try:
        get_service(request).move_thought(thought_id, body.x, body.y)
    except ThoughtNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return SuccessResponse()


@router.delete("/thoughts", response_model=SuccessResponse)
def clear_thoughts(request: Request) -> SuccessResponse:
    get_service(request).clear()
    LOGGER.info("Cleared all thoughts via API")
    return SuccessResponse()


@router.get("/graph")
def graph(request: Request) -> dict[str, Any]:
    snapshot = get_service(request).snapshot()
    return build_graph(snapshot.thoughts, snapshot.connections)


@router.get("/health", response_model=HealthResponse)
def health(request: Request) -> HealthResponse:
    return HealthResponse(thoughts=get_service(request).count())
