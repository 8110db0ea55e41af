"""
Shared pytest fixtures for the Ludo server tests.

Game fixtures are function-scoped so every test gets its own rooms.
"""

import pytest
from fastapi.testclient import TestClient

from ludo_app import game_logic
from ludo_app.main import app
from ludo_app.manager import GameManager


@pytest.fixture
def manager() -> GameManager:
    return GameManager()


@pytest.fixture
def fixed_roll(monkeypatch):
    """Make the die deterministic: ``fixed_roll(6)`` makes every roll a six."""

    def _set(value: int):
        monkeypatch.setattr(game_logic, "roll_dice", lambda: value)

    return _set


@pytest.fixture
def client():
    with TestClient(app) as client:
        yield client
