"""
WebSocket connection registry.

Maintains a mapping: room_id → eoa → WebSocket.
"""
from __future__ import annotations
import asyncio
import logging
from typing import Dict, Optional

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self) -> None:
        # room_id → { eoa → WebSocket }
        self._connections: Dict[str, Dict[str, WebSocket]] = {}

    def connect(self, room_id: str, eoa: str, websocket: WebSocket) -> None:
        """Register an already-accepted socket under a room."""
        if room_id not in self._connections:
            self._connections[room_id] = {}
        self._connections[room_id][eoa] = websocket
        logger.info(f"Connected: {eoa} in room {room_id}")

    def disconnect(self, room_id: str, eoa: str, websocket: Optional[WebSocket] = None) -> None:
        """
        Forget a player's socket. With `websocket` given, only that exact socket
        is dropped, so a stale handler cannot evict the player's newer connection.
        """
        room = self._room(room_id)
        current = room.get(eoa)
        if current is None or (websocket is not None and current is not websocket):
            return
        del room[eoa]
        if not room:
            self._connections.pop(room_id, None)
        logger.info(f"Disconnected: {eoa} from room {room_id}")

    async def send_personal(
        self,
        room_id: str,
        eoa: str,
        event_type: str,
        payload: dict,
    ) -> None:
        """Send a message to a specific player."""
        ws = self._room(room_id).get(eoa)
        if ws:
            await self._safe_send(ws, room_id, eoa, event_type, payload)

    async def broadcast(
        self,
        room_id: str,
        event_type: str,
        payload: dict,
        exclude: Optional[str] = None,
    ) -> None:
        """Send the same event to everyone in a room, optionally skipping one player."""
        connections = self._room(room_id)
        tasks = [
            self._safe_send(ws, room_id, eoa, event_type, payload)
            for eoa, ws in list(connections.items())
            if eoa != exclude
        ]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _safe_send(
        self,
        ws: WebSocket,
        room_id: str,
        eoa: str,
        event_type: str,
        payload: dict,
    ) -> None:
        try:
            await ws.send_json({"type": event_type, "payload": payload})
        except Exception as e:
            logger.warning(f"Dropping {eoa} from room {room_id} after failed {event_type}: {e}")
            self.disconnect(room_id, eoa, ws)

    def _room(self, room_id: str) -> Dict[str, WebSocket]:
        return self._connections.get(room_id, {})

    def is_connected(self, room_id: str, eoa: str) -> bool:
        return eoa in self._room(room_id)

    def player_count(self, room_id: str) -> int:
        return len(self._room(room_id))


# Global singleton
connection_manager = ConnectionManager()
