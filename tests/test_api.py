"""
HTTP tests for the room endpoint.

Covers the action flow through ``POST /api/game/{room_id}``, the snapshot
returned by ``GET`` and the error bodies returned for rejected actions.
"""

import pytest

from ludo_app.manager import game_manager

ROOM_URL = "/api/game/test-room"


def post(client, **body):
    return client.post(ROOM_URL, json=body)


def join_two(client):
    alice = post(client, action="join", playerName="Alice", playerColor="red")
    bob = post(client, action="join", playerName="Bob", playerColor="blue")
    assert alice.status_code == 200
    assert bob.status_code == 200
    return alice.json()["playerId"], bob.json()["playerId"]


class TestGetGame:

    def test_unknown_room(self, client):
        response = client.get("/api/game/nowhere")

        assert response.status_code == 404
        assert response.json() == {"error": "Room not found.", "code": "ROOM_NOT_FOUND"}

    def test_snapshot_uses_camel_case(self, client):
        join_two(client)
        state = client.get(ROOM_URL).json()

        assert state["id"] == "test-room"
        assert state["status"] == "waiting"
        assert state["currentPlayerIndex"] == 0
        assert state["diceValue"] == 0
        assert state["winner"] is None
        assert "lastUpdated" in state
        assert len(state["board"]) == 225
        piece = state["players"][0]["pieces"][0]
        assert piece["position"] == "home"
        assert piece["playerId"] == state["players"][0]["id"]
        assert state["players"][0]["isActive"] is False

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestActions:

    def test_join(self, client):
        response = post(client, action="join", playerName="Alice", playerColor="red")
        data = response.json()

        assert response.status_code == 200
        assert data["success"] is True
        assert data["playerId"] == data["gameState"]["players"][0]["id"]
        assert data["gameState"]["players"][0]["color"] == "red"

    def test_color_taken(self, client):
        join_two(client)
        response = post(client, action="join", playerName="Carol", playerColor="red")

        assert response.status_code == 400
        assert response.json()["code"] == "COLOR_TAKEN"

    def test_room_full(self, client):
        join_two(client)
        post(client, action="join", playerName="Carol", playerColor="green")
        post(client, action="join", playerName="Dan", playerColor="yellow")
        response = post(client, action="join", playerName="Eve", playerColor="red")

        assert response.status_code == 400
        assert response.json()["code"] == "ROOM_FULL"

    def test_start_needs_two_players(self, client):
        post(client, action="join", playerName="Alice", playerColor="red")
        response = post(client, action="start")

        assert response.status_code == 400
        assert response.json() == {"error": "Need at least 2 players.", "code": "NOT_ENOUGH_PLAYERS"}

    def test_roll_before_start(self, client):
        response = post(client, action="roll_dice")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_GAME_STATUS"

    def test_scenario(self, client, fixed_roll):
        alice_id, _ = join_two(client)
        started = post(client, action="start").json()["gameState"]
        assert started["status"] == "playing"
        assert started["players"][0]["isActive"] is True

        fixed_roll(6)
        rolled = post(client, action="roll_dice", playerColor="red").json()
        assert rolled["diceValue"] == 6
        assert rolled["turnPassed"] is False
        assert len(rolled["movablePieces"]) == 4

        piece_id = f"{alice_id}-red-0"
        moved = post(client, action="move_piece", pieceId=piece_id, diceValue=6).json()
        assert moved["originalPosition"] == "home"
        assert moved["newPosition"] == "start"
        assert moved["capturedPieces"] == []
        assert moved["gameState"]["currentPlayerIndex"] == 1
        assert moved["gameState"]["players"][1]["isActive"] is True
        assert moved["gameState"]["diceValue"] == 0

    def test_rejected_move_leaves_state_unchanged(self, client, fixed_roll):
        alice_id, _ = join_two(client)
        post(client, action="start")
        before = client.get(ROOM_URL).json()

        response = post(client, action="move_piece", pieceId=f"{alice_id}-red-0", diceValue=3)

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_MOVE"
        assert client.get(ROOM_URL).json() == before

    def test_unknown_piece(self, client):
        join_two(client)
        post(client, action="start")
        response = post(client, action="move_piece", pieceId="nope", diceValue=6)

        assert response.status_code == 404
        assert response.json()["code"] == "PIECE_NOT_FOUND"

    def test_roll_without_moves_passes_turn(self, client, fixed_roll):
        join_two(client)
        post(client, action="start")
        fixed_roll(2)

        rolled = post(client, action="roll_dice").json()

        assert rolled["diceValue"] == 2
        assert rolled["turnPassed"] is True
        assert rolled["gameState"]["currentPlayerIndex"] == 1


class TestBadRequests:

    @pytest.mark.parametrize("body", [{"action": "dance"}, {}])
    def test_unknown_action(self, client, body):
        response = client.post(ROOM_URL, json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid action.", "code": "UNKNOWN_ACTION"}

    def test_missing_fields(self, client):
        response = post(client, action="join", playerName="Alice")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"
        assert "playerColor" in response.json()["error"]

    def test_unknown_color(self, client):
        response = post(client, action="join", playerName="Alice", playerColor="purple")

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"

    def test_body_must_be_an_object(self, client):
        response = client.post(ROOM_URL, json=["join"])

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_REQUEST"

    def test_internal_error_is_hidden(self, client, monkeypatch):
        async def broken(*args, **kwargs):
            raise RuntimeError("secret detail")

        monkeypatch.setattr(game_manager, "start_game", broken)
        response = post(client, action="start")

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error", "code": "INTERNAL_ERROR"}
