import time
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from ludo_app.constants import HOME, LAST_PATH_INDEX
from ludo_app.errors import ErrorCode, GameError


class Color(str, Enum):
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"


class GameStatus(str, Enum):
    WAITING = "waiting"
    PLAYING = "playing"
    FINISHED = "finished"


class CellType(str, Enum):
    PATH = "path"
    CENTER = "center"
    HOME = "home"
    START = "start"


PathIndex = Annotated[int, Field(ge=1, le=LAST_PATH_INDEX)]
PiecePosition = Union[Literal["home", "start", "finish"], PathIndex]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Piece(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, validate_assignment=True)

    id: str
    color: Color
    position: PiecePosition = HOME
    player_id: str


class Player(CamelModel):
    id: str
    name: str
    color: Color
    pieces: List[Piece]
    is_active: bool = False


class BoardCell(CamelModel):
    id: int
    x: int
    y: int
    type: CellType = CellType.PATH
    color: Optional[Color] = None


class Game(CamelModel):
    """Mutable per-room session state."""

    id: str
    players: List[Player] = []
    current_player_index: int = 0
    dice_value: int = 0
    status: GameStatus = GameStatus.WAITING
    winner: Optional[Color] = None
    last_updated: float = Field(default_factory=time.time)
    board: List[BoardCell] = []

    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    def touch(self):
        self.last_updated = time.time()


# --- Actions ---

class JoinAction(CamelModel):
    action: Literal["join"] = "join"
    player_name: str = Field(min_length=1)
    player_color: Color


class StartAction(CamelModel):
    action: Literal["start"] = "start"


class RollDiceAction(CamelModel):
    action: Literal["roll_dice"] = "roll_dice"
    player_color: Optional[Color] = None


class MovePieceAction(CamelModel):
    action: Literal["move_piece"] = "move_piece"
    piece_id: str
    dice_value: int


GameAction = Annotated[
    Union[JoinAction, StartAction, RollDiceAction, MovePieceAction],
    Field(discriminator="action"),
]


# --- Responses ---

class ActionResponse(CamelModel):
    success: bool = True
    game_state: Game


class JoinResponse(ActionResponse):
    player_id: str


class RollResponse(ActionResponse):
    dice_value: int
    turn_passed: bool = False
    movable_pieces: List[str] = []


class MoveResponse(ActionResponse):
    original_position: PiecePosition
    new_position: PiecePosition
    captured_pieces: List[str] = []


ACTIONS = ("join", "start", "roll_dice", "move_piece")

game_action_adapter = TypeAdapter(GameAction)


def parse_action(body) -> Union[JoinAction, StartAction, RollDiceAction, MovePieceAction]:
    """Validate a raw request body into one of the action models."""
    if not isinstance(body, dict):
        raise GameError(ErrorCode.INVALID_REQUEST, "Request body must be a JSON object.")
    if body.get("action") not in ACTIONS:
        raise GameError(ErrorCode.UNKNOWN_ACTION)

    try:
        return game_action_adapter.validate_python(body)
    except ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"][1:])
        raise GameError(ErrorCode.INVALID_REQUEST, f"{field}: {error['msg']}" if field else error["msg"])
