import logging
from typing import Any, Dict, Union

from fastapi import APIRouter, Body

from ludo_app.errors import ErrorCode, GameError
from ludo_app.manager import game_manager
from ludo_app.models import ActionResponse, Game, JoinResponse, MoveResponse, RollResponse, parse_action


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


@router.get("/game/{room_id}")
async def get_game(room_id: str) -> Game:
    return game_manager.get_game(room_id)


@router.post("/game/{room_id}")
async def post_action(
    room_id: str,
    body: Dict[str, Any] = Body(...),
) -> Union[JoinResponse, RollResponse, MoveResponse, ActionResponse]:
    action = parse_action(body)
    try:
        return await game_manager.apply_action(room_id, action)
    except GameError:
        raise
    except Exception:
        logger.exception(f"[Room: {room_id}] Error while applying {action.action}")
        raise GameError(ErrorCode.INTERNAL_ERROR)
