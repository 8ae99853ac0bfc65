"""REST API routes: health, room lookup, payload pre-checks."""
from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter, HTTPException, Request

from app.core.validators import (
    validate_direction_payload,
    validate_join_room_payload,
)
from app.managers.room_manager import room_manager

router = APIRouter()


async def _read_body(request: Request) -> Any:
    try:
        return await request.json()
    except ValueError:
        return None


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok"}


@router.get("/api/rooms")
async def list_rooms() -> Dict[str, Any]:
    return {"rooms": room_manager.list_rooms()}


@router.get("/api/rooms/{room_id}")
async def get_room(room_id: str) -> Dict[str, Any]:
    room = room_manager.get_room(room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Room not found")
    return room.to_dict()


@router.post("/api/validate/join-room")
async def validate_join_room(request: Request) -> Dict[str, Any]:
    return validate_join_room_payload(await _read_body(request)).to_dict()


@router.post("/api/validate/direction")
async def validate_direction(request: Request) -> Dict[str, Any]:
    return validate_direction_payload(await _read_body(request)).to_dict()
