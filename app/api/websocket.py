"""WebSocket endpoint for room and steering messages."""
from __future__ import annotations
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from app.core.validators import ERR_PAYLOAD_FORMAT
from app.managers.connection_manager import connection_manager
from app.managers.room_manager import RoomError, room_manager
from app.models.events import ClientMessage, error_event
from app.models.requests import (
    CreateRoomRequest,
    InvalidPayload,
    parse_direction_change,
    parse_join_room,
)

logger = logging.getLogger(__name__)
ws_router = APIRouter()


@dataclass
class _Session:
    """Which room and address a socket currently speaks for."""
    websocket: WebSocket
    room_id: Optional[str] = None
    eoa: Optional[str] = None


async def _leave(session: _Session) -> None:
    if not session.room_id:
        return
    room_id, eoa = session.room_id, session.eoa
    connection_manager.disconnect(room_id, eoa, session.websocket)
    room = room_manager.leave_room(room_id, eoa)
    if room:
        await connection_manager.broadcast(room_id, "playerLeft", {
            "room_id": room_id,
            "eoa": eoa,
            "room": room.to_dict(),
        })
    session.room_id = None
    session.eoa = None


async def _handle_join(websocket: WebSocket, session: _Session, payload: Any) -> None:
    req = parse_join_room(payload)
    if isinstance(req, CreateRoomRequest):
        room = room_manager.create_room(req)
        event_type = "roomCreated"
    else:
        room = room_manager.join_room(req)
        event_type = "roomJoined"

    if (session.room_id, session.eoa) != (room.room_id, req.eoa):
        await _leave(session)
    connection_manager.connect(room.room_id, req.eoa, websocket)
    session.room_id = room.room_id
    session.eoa = req.eoa

    await connection_manager.send_personal(room.room_id, req.eoa, event_type, room.to_dict())
    if event_type == "roomJoined":
        await connection_manager.broadcast(room.room_id, "playerJoined", {
            "room_id": room.room_id,
            "eoa": req.eoa,
            "room": room.to_dict(),
        }, exclude=req.eoa)


async def _handle_direction(session: _Session, payload: Any) -> None:
    req = parse_direction_change(payload)
    if not session.eoa:
        raise RoomError("Not a member of this room")
    room = room_manager.change_direction(session.eoa, req)
    await connection_manager.broadcast(room.room_id, "directionChanged", {
        "room_id": room.room_id,
        "eoa": session.eoa,
        "direction": req.direction.value,
    })


@ws_router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    await websocket.accept()
    session = _Session(websocket)

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                msg = ClientMessage.model_validate(json.loads(raw))
            except (ValueError, ValidationError):
                await websocket.send_json(error_event(ERR_PAYLOAD_FORMAT))
                continue

            try:
                if msg.type == "joinRoom":
                    await _handle_join(websocket, session, msg.payload)
                elif msg.type == "changeDirection":
                    await _handle_direction(session, msg.payload)
                elif msg.type == "ping":
                    await websocket.send_json({"type": "pong"})
                else:
                    await websocket.send_json(error_event("Unknown message type"))
            except (InvalidPayload, RoomError) as e:
                await websocket.send_json(error_event(str(e)))

    except WebSocketDisconnect:
        logger.info(f"Socket closed for {session.eoa or 'anonymous'} in room {session.room_id}")
        await _leave(session)
    except Exception as e:
        logger.error(f"WebSocket error for {session.eoa} in {session.room_id}: {e}")
        await _leave(session)
        await websocket.close(code=1011)
