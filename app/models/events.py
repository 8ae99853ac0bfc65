"""Pydantic models for WebSocket events."""
from __future__ import annotations
from typing import Any, Dict

from pydantic import BaseModel, Field


class ClientMessage(BaseModel):
    """Client → Server message envelope."""
    type: str  # "joinRoom" | "changeDirection" | "ping"
    payload: Any = None


class ServerEvent(BaseModel):
    """Server → Client event envelope."""
    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)


def error_event(message: str) -> Dict[str, Any]:
    return ServerEvent(type="error", payload={"message": message}).model_dump()
