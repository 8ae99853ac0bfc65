"""
Validators for inbound game payloads.

Every composite validator returns a ValidationResult instead of raising, so
the message handler can relay `error` to the client unchanged.
"""
from __future__ import annotations
import logging
import math
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)

_ETH_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")
_ROOM_ID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}",
    re.IGNORECASE,
)

VALID_DIRECTIONS = frozenset({"UP", "DOWN", "LEFT", "RIGHT"})

# Allowed stakes and their value in cents
VALID_BET_AMOUNTS = (
    (Decimal("0"), 0),
    (Decimal("0.01"), 1),
    (Decimal("0.1"), 10),
    (Decimal("1"), 100),
    (Decimal("2"), 200),
)
_INT_BET_CENTS = {0: 0, 1: 100, 2: 200}

ERR_PAYLOAD_FORMAT = "Invalid payload format"
ERR_EOA_REQUIRED = "Ethereum address is required"
ERR_EOA_FORMAT = "Invalid Ethereum address format"
ERR_BET_AMOUNT = "Invalid bet amount. Must be 0, 0.01, 0.1, 1, or 2"
ERR_ROOM_ID_REQUIRED = "Room ID is required"
ERR_ROOM_ID_FORMAT = "Invalid room ID format"
ERR_DIRECTION_REQUIRED = "Direction is required"
ERR_DIRECTION_FORMAT = "Invalid direction format (must be UP, DOWN, LEFT, or RIGHT)"


@dataclass(frozen=True)
class ValidationResult:
    success: bool
    error: Optional[str] = None
    is_creating: Optional[bool] = None
    is_joining: Optional[bool] = None

    @classmethod
    def ok(cls, is_creating: Optional[bool] = None, is_joining: Optional[bool] = None) -> "ValidationResult":
        return cls(success=True, is_creating=is_creating, is_joining=is_joining)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        """Wire shape: {success, error?, isCreating?, isJoining?}."""
        result: Dict[str, Any] = {"success": self.success}
        if self.error is not None:
            result["error"] = self.error
        if self.is_creating is not None:
            result["isCreating"] = self.is_creating
        if self.is_joining is not None:
            result["isJoining"] = self.is_joining
        return result


def is_valid_ethereum_address(address: Any) -> bool:
    """True for '0x' followed by exactly 40 hex chars. No checksum check."""
    return isinstance(address, str) and _ETH_ADDRESS_RE.fullmatch(address) is not None


def is_valid_room_id(room_id: Any) -> bool:
    """True for a UUID version 4 string, any letter case."""
    return isinstance(room_id, str) and _ROOM_ID_RE.fullmatch(room_id) is not None


def is_valid_direction(direction: Any) -> bool:
    return isinstance(direction, str) and direction in VALID_DIRECTIONS


def bet_amount_to_cents(bet_amount: Any) -> Optional[int]:
    """
    Return the allowed stake's value in cents, or None if the value is not
    a number or not exactly one of the allowed stakes.

    Floats go through their shortest repr, so 0.1 matches exactly rather
    than as the binary approximation. Comparison is plain Decimal equality,
    never context arithmetic, so over-precise or huge values cannot round
    into a match.
    """
    if isinstance(bet_amount, bool):
        return None
    if isinstance(bet_amount, int):
        return _INT_BET_CENTS.get(bet_amount)
    if isinstance(bet_amount, float):
        if not math.isfinite(bet_amount):
            return None
        bet_amount = Decimal(repr(bet_amount))
    if not isinstance(bet_amount, Decimal) or not bet_amount.is_finite():
        return None
    for allowed, cents in VALID_BET_AMOUNTS:
        if bet_amount == allowed:
            return cents
    return None


def is_valid_bet_amount(bet_amount: Any) -> bool:
    return bet_amount_to_cents(bet_amount) is not None


def _fields(payload: Any) -> Optional[Mapping]:
    """Object-shaped payloads: mappings, and arrays read as objects with no keys."""
    if isinstance(payload, Mapping):
        return payload
    if isinstance(payload, (list, tuple)):
        return {}
    return None


def _is_present(value: Any) -> bool:
    """False for None, False, 0, NaN and the empty string; everything else counts."""
    if value is None or value is False or value == "":
        return False
    if isinstance(value, Decimal):
        return not (value.is_zero() or value.is_nan())
    if isinstance(value, (int, float)):
        return value == value and value != 0
    return True


def validate_join_room_payload(payload: Any) -> ValidationResult:
    """
    Validate a join/create room payload.

    A missing roomId means the sender wants a new room; a present one
    (even null) is a join and must be a valid room id.
    """
    payload = _fields(payload)
    if payload is None:
        return ValidationResult.fail(ERR_PAYLOAD_FORMAT)

    eoa = payload.get("eoa")
    if not _is_present(eoa):
        return ValidationResult.fail(ERR_EOA_REQUIRED)
    if not is_valid_ethereum_address(eoa):
        return ValidationResult.fail(ERR_EOA_FORMAT)

    if "betAmount" in payload and not is_valid_bet_amount(payload["betAmount"]):
        return ValidationResult.fail(ERR_BET_AMOUNT)

    bet_amount = payload.get("betAmount") or 0
    if "roomId" not in payload:
        logger.info(f"Creating new room with bet amount: {bet_amount}")
        return ValidationResult.ok(is_creating=True)

    room_id = payload["roomId"]
    if not is_valid_room_id(room_id):
        return ValidationResult.fail(ERR_ROOM_ID_FORMAT)
    logger.info(f"Joining existing room: {room_id} with bet amount: {bet_amount}")
    return ValidationResult.ok(is_joining=True)


def validate_direction_payload(payload: Any) -> ValidationResult:
    payload = _fields(payload)
    if payload is None:
        return ValidationResult.fail(ERR_PAYLOAD_FORMAT)

    room_id = payload.get("roomId")
    if not _is_present(room_id):
        return ValidationResult.fail(ERR_ROOM_ID_REQUIRED)
    if not is_valid_room_id(room_id):
        return ValidationResult.fail(ERR_ROOM_ID_FORMAT)

    direction = payload.get("direction")
    if not _is_present(direction):
        return ValidationResult.fail(ERR_DIRECTION_REQUIRED)
    if not is_valid_direction(direction):
        return ValidationResult.fail(ERR_DIRECTION_FORMAT)

    return ValidationResult.ok()
