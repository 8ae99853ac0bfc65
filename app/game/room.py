"""Room dataclass and RoomStatus enum."""
from __future__ import annotations
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from app.models.requests import BetAmount, Direction


class RoomStatus(Enum):
    WAITING = "waiting"
    READY = "ready"


@dataclass
class Room:
    """A duel room. Players are identified by lower-cased EOA."""
    room_id: str
    bet_amount: BetAmount
    creator: str
    max_players: int = 2
    players: List[str] = field(default_factory=list)
    directions: Dict[str, Optional[Direction]] = field(default_factory=dict)
    created_at: float = field(default_factory=time.time)

    @property
    def status(self) -> RoomStatus:
        if len(self.players) >= self.max_players:
            return RoomStatus.READY
        return RoomStatus.WAITING

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    @property
    def is_empty(self) -> bool:
        return not self.players

    def has_player(self, eoa: str) -> bool:
        return eoa in self.players

    def add_player(self, eoa: str) -> bool:
        """Seat a player. Returns False if the room is full or they are already seated."""
        if self.is_full or eoa in self.players:
            return False
        self.players.append(eoa)
        self.directions[eoa] = None
        return True

    def remove_player(self, eoa: str) -> None:
        if eoa in self.players:
            self.players.remove(eoa)
        self.directions.pop(eoa, None)

    def set_direction(self, eoa: str, direction: Direction) -> None:
        if eoa not in self.players:
            raise KeyError(eoa)
        self.directions[eoa] = direction

    def to_dict(self) -> dict:
        return {
            "room_id": self.room_id,
            "bet_amount": self.bet_amount.as_float(),
            "creator": self.creator,
            "status": self.status.value,
            "players": list(self.players),
            "max_players": self.max_players,
            "directions": {
                eoa: d.value if d else None for eoa, d in self.directions.items()
            },
            "created_at": self.created_at,
        }
