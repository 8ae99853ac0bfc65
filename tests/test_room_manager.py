"""Unit tests for room_manager.py — RoomManager registry."""
import pytest

from app.managers.room_manager import RoomError, RoomManager
from app.models.requests import (
    BetAmount,
    CreateRoomRequest,
    Direction,
    DirectionChangeRequest,
    JoinRoomRequest,
    RoomTarget,
)

ALICE = "0x" + "a" * 40
BOB = "0x" + "b" * 40
CAROL = "0x" + "c" * 40
MISSING_ROOM = "123e4567-e89b-42d3-a456-426614174000"


def _join(room_id: str, eoa: str) -> JoinRoomRequest:
    return JoinRoomRequest(eoa=eoa, target=RoomTarget.existing(room_id))


class TestCreateRoom:
    def test_create_room(self):
        rm = RoomManager(max_players=2)
        room = rm.create_room(CreateRoomRequest(eoa=ALICE, bet_amount=BetAmount.CENT))
        assert room.players == [ALICE]
        assert room.creator == ALICE
        assert room.bet_amount is BetAmount.CENT
        assert rm.get_room(room.room_id) is room

    def test_room_ids_are_uuid4(self):
        from app.core.validators import is_valid_room_id
        rm = RoomManager()
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        assert is_valid_room_id(room.room_id)

    def test_get_room_case_insensitive(self):
        rm = RoomManager()
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        assert rm.get_room(room.room_id.upper()) is room


class TestJoinRoom:
    def test_join(self):
        rm = RoomManager(max_players=2)
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        joined = rm.join_room(_join(room.room_id, BOB))
        assert joined is room
        assert room.players == [ALICE, BOB]

    def test_join_not_found(self):
        rm = RoomManager()
        with pytest.raises(RoomError, match="Room not found"):
            rm.join_room(_join(MISSING_ROOM, BOB))

    def test_join_full(self):
        rm = RoomManager(max_players=2)
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        rm.join_room(_join(room.room_id, BOB))
        with pytest.raises(RoomError, match="Room is full"):
            rm.join_room(_join(room.room_id, CAROL))

    def test_rejoin_is_noop(self):
        rm = RoomManager(max_players=2)
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        assert rm.join_room(_join(room.room_id, ALICE)) is room
        assert room.players == [ALICE]


class TestLeaveRoom:
    def test_leave_keeps_non_empty_room(self):
        rm = RoomManager()
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        rm.join_room(_join(room.room_id, BOB))
        assert rm.leave_room(room.room_id, ALICE) is room
        assert room.players == [BOB]

    def test_last_player_closes_room(self):
        rm = RoomManager()
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        assert rm.leave_room(room.room_id, ALICE) is None
        assert rm.get_room(room.room_id) is None

    def test_leave_unknown_room(self):
        rm = RoomManager()
        assert rm.leave_room(MISSING_ROOM, ALICE) is None


class TestChangeDirection:
    def test_change_direction(self):
        rm = RoomManager()
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        rm.change_direction(ALICE, DirectionChangeRequest(room_id=room.room_id, direction=Direction.RIGHT))
        assert room.directions[ALICE] is Direction.RIGHT

    def test_room_not_found(self):
        rm = RoomManager()
        with pytest.raises(RoomError, match="Room not found"):
            rm.change_direction(ALICE, DirectionChangeRequest(room_id=MISSING_ROOM, direction=Direction.UP))

    def test_not_a_member(self):
        rm = RoomManager()
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        with pytest.raises(RoomError, match="Not a member of this room"):
            rm.change_direction(BOB, DirectionChangeRequest(room_id=room.room_id, direction=Direction.UP))


class TestListAndDelete:
    def test_list_rooms(self):
        rm = RoomManager()
        rm.create_room(CreateRoomRequest(eoa=ALICE))
        rm.create_room(CreateRoomRequest(eoa=BOB))
        assert len(rm.list_rooms()) == 2

    def test_delete_room(self):
        rm = RoomManager()
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        assert rm.delete_room(room.room_id) is True
        assert rm.delete_room(room.room_id) is False

    def test_delete_room_case_insensitive(self):
        rm = RoomManager()
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        assert rm.delete_room(room.room_id.upper()) is True
        assert rm.get_room(room.room_id) is None


class TestIdNormalisation:
    def test_leave_room_case_insensitive(self):
        rm = RoomManager()
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        rm.join_room(_join(room.room_id, BOB))
        assert rm.leave_room(room.room_id.upper(), BOB) is room
        assert room.players == [ALICE]

    def test_explicit_capacity_is_kept(self):
        rm = RoomManager(max_players=0)
        room = rm.create_room(CreateRoomRequest(eoa=ALICE))
        assert room.max_players == 0
        assert room.is_full
