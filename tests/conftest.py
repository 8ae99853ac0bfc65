"""Shared fixtures for all tests."""
import pytest

from app.managers.connection_manager import connection_manager
from app.managers.room_manager import room_manager


@pytest.fixture(autouse=True)
def _reset_registries():
    """Empty the module-level singletons so tests don't see each other's rooms."""
    room_manager._rooms.clear()
    connection_manager._connections.clear()
    yield
    room_manager._rooms.clear()
    connection_manager._connections.clear()
