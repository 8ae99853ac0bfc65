"""In-memory Room store."""
from __future__ import annotations
import logging
import uuid
from typing import Dict, List, Optional

from app.config import get_settings
from app.game.room import Room
from app.models.requests import CreateRoomRequest, DirectionChangeRequest, JoinRoomRequest

logger = logging.getLogger(__name__)


class RoomError(Exception):
    """A room operation was refused; str(exc) is sent back to the client."""


class RoomManager:
    def __init__(self, max_players: Optional[int] = None) -> None:
        self._rooms: Dict[str, Room] = {}
        if max_players is None:
            max_players = get_settings().max_players_per_room
        self._max_players = max_players

    def create_room(self, req: CreateRoomRequest) -> Room:
        room_id = str(uuid.uuid4())
        room = Room(
            room_id=room_id,
            bet_amount=req.bet_amount,
            creator=req.eoa,
            max_players=self._max_players,
        )
        room.add_player(req.eoa)
        self._rooms[room_id] = room
        logger.info(f"Room {room_id} created by {req.eoa} (bet {room.bet_amount.as_float()})")
        return room

    def join_room(self, req: JoinRoomRequest) -> Room:
        room = self.get_room(req.room_id)
        if not room:
            raise RoomError("Room not found")
        if room.has_player(req.eoa):
            return room
        if not room.add_player(req.eoa):
            raise RoomError("Room is full")
        logger.info(f"{req.eoa} joined room {room.room_id}")
        return room

    def leave_room(self, room_id: str, eoa: str) -> Optional[Room]:
        """Remove a player; the room is dropped once empty. Returns the room if it survives."""
        room_id = room_id.lower()
        room = self._rooms.get(room_id)
        if not room:
            return None
        room.remove_player(eoa)
        logger.info(f"{eoa} left room {room_id}")
        if room.is_empty:
            del self._rooms[room_id]
            logger.info(f"Room {room_id} closed")
            return None
        return room

    def change_direction(self, eoa: str, req: DirectionChangeRequest) -> Room:
        room = self.get_room(req.room_id)
        if not room:
            raise RoomError("Room not found")
        if not room.has_player(eoa):
            raise RoomError("Not a member of this room")
        room.set_direction(eoa, req.direction)
        return room

    def get_room(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id.lower())

    def list_rooms(self) -> List[dict]:
        return [room.to_dict() for room in self._rooms.values()]

    def delete_room(self, room_id: str) -> bool:
        room_id = room_id.lower()
        if room_id in self._rooms:
            del self._rooms[room_id]
            return True
        return False


# Global singleton
room_manager = RoomManager()
