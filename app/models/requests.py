"""Typed request models built from validated client payloads."""
from __future__ import annotations
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict

from app.core.validators import (
    bet_amount_to_cents,
    validate_direction_payload,
    validate_join_room_payload,
)


class InvalidPayload(ValueError):
    """Raised when a payload fails validation; str(exc) is the client-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


class BetAmount(Enum):
    """Allowed stakes, valued in integer cents."""
    FREE = 0
    CENT = 1
    DIME = 10
    ONE = 100
    TWO = 200

    @property
    def cents(self) -> int:
        return self.value

    def as_float(self) -> float:
        return self.value / 100

    @classmethod
    def from_number(cls, value: Any) -> "BetAmount":
        cents = bet_amount_to_cents(value)
        for member in cls:
            if member.value == cents:
                return member
        raise ValueError("Not an allowed bet amount")


class RoomTarget(BaseModel):
    """Either a brand-new room (room_id is None) or an existing one."""
    model_config = ConfigDict(frozen=True)

    room_id: Optional[str] = None

    @classmethod
    def new(cls) -> "RoomTarget":
        return cls()

    @classmethod
    def existing(cls, room_id: str) -> "RoomTarget":
        return cls(room_id=room_id)

    @property
    def is_new(self) -> bool:
        return self.room_id is None


class CreateRoomRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    eoa: str
    bet_amount: BetAmount = BetAmount.FREE
    target: RoomTarget = RoomTarget.new()


class JoinRoomRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    eoa: str
    bet_amount: BetAmount = BetAmount.FREE
    target: RoomTarget

    @property
    def room_id(self) -> str:
        return self.target.room_id


class DirectionChangeRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    room_id: str
    direction: Direction


RoomRequest = Union[CreateRoomRequest, JoinRoomRequest]


def parse_join_room(payload: Any) -> RoomRequest:
    """Validate a joinRoom payload and return the matching typed request."""
    result = validate_join_room_payload(payload)
    if not result.success:
        raise InvalidPayload(result.error)

    bet_amount = BetAmount.FREE
    if "betAmount" in payload:
        bet_amount = BetAmount.from_number(payload["betAmount"])

    if result.is_creating:
        return CreateRoomRequest(eoa=payload["eoa"].lower(), bet_amount=bet_amount)
    return JoinRoomRequest(
        eoa=payload["eoa"].lower(),
        bet_amount=bet_amount,
        target=RoomTarget.existing(payload["roomId"].lower()),
    )


def parse_direction_change(payload: Any) -> DirectionChangeRequest:
    result = validate_direction_payload(payload)
    if not result.success:
        raise InvalidPayload(result.error)
    return DirectionChangeRequest(
        room_id=payload["roomId"].lower(),
        direction=Direction(payload["direction"]),
    )
