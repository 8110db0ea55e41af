from enum import Enum
from typing import Optional


class ErrorCode(Enum):
    ROOM_NOT_FOUND = (404, "Room not found.")
    COLOR_TAKEN = (400, "Color already taken.")
    ROOM_FULL = (400, "Room is full.")
    NOT_ENOUGH_PLAYERS = (400, "Need at least 2 players.")
    INVALID_GAME_STATUS = (400, "Action not allowed in the current game status.")
    PIECE_NOT_FOUND = (404, "Piece not found.")
    INVALID_MOVE = (400, "Invalid move.")
    NOT_YOUR_TURN = (400, "Not your turn.")
    UNKNOWN_ACTION = (400, "Invalid action.")
    INVALID_REQUEST = (400, "Invalid request.")
    INTERNAL_ERROR = (500, "Internal server error")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def reason(self) -> str:
        return self.value[1]


class GameError(ValueError):
    """A rejected game action. The session is left untouched when this is raised."""

    def __init__(self, code: ErrorCode, message: Optional[str] = None):
        self.code = code
        self.message = message or code.reason
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.code.status_code

    def to_dict(self) -> dict:
        return {"error": self.message, "code": self.code.name}
