import asyncio
import logging
import uuid
from typing import Dict, List, Optional, Tuple

from ludo_app import game_logic
from ludo_app.board import BOARD
from ludo_app.constants import MAXIMUM_ALLOWED_PLAYERS, MINIMUM_PLAYERS_TO_START
from ludo_app.errors import ErrorCode, GameError
from ludo_app.models import (
    ActionResponse, Color, Game, GameStatus, JoinAction, JoinResponse, MovePieceAction,
    MoveResponse, PiecePosition, Player, RollDiceAction, RollResponse, StartAction
)

logger = logging.getLogger(__name__)

NAMESPACE = uuid.UUID("8d3c5f0e-2b7a-4c1e-9a64-5f2e1d7b3c90")


class GameManager:
    """
    Registry of rooms and the turn state machine that runs on them.

    Each room has its own lock. Every action holds it from its first check
    to its last write, so concurrent requests against one room apply one
    after the other and a rejected action leaves the room untouched.
    """

    def __init__(self, include_board: bool = True):
        self.games: Dict[str, Game] = {}
        self.locks: Dict[str, asyncio.Lock] = {}
        self.registry_lock = asyncio.Lock()
        self.include_board = include_board

    def player_id(self, room_id: str, color: Color) -> str:
        """Deterministic player id, unique within a room."""
        return str(uuid.uuid5(NAMESPACE, f"{room_id}:{Color(color).value}"))

    def get_game(self, room_id: str) -> Game:
        """Get game by room id."""
        if room_id not in self.games:
            raise GameError(ErrorCode.ROOM_NOT_FOUND)
        return self.games[room_id]

    async def get_or_create_game(self, room_id: str) -> Game:
        async with self.registry_lock:
            if room_id not in self.games:
                self.games[room_id] = Game(id=room_id, board=BOARD if self.include_board else [])
                self.locks[room_id] = asyncio.Lock()
                logger.info(f"[Room: {room_id}] Created")
            return self.games[room_id]

    async def clear_game(self, room_id: str):
        """Drop a room and its lock."""
        async with self.registry_lock:
            self.get_game(room_id)
            del self.games[room_id]
            self.locks.pop(room_id, None)

    async def join_game(self, room_id: str, name: str, color: Color) -> Tuple[Game, Player]:
        game = self.get_game(room_id)
        async with self.locks[room_id]:
            if game.status != GameStatus.WAITING:
                raise GameError(ErrorCode.INVALID_GAME_STATUS, "Game has already started.")
            if len(game.players) >= MAXIMUM_ALLOWED_PLAYERS:
                raise GameError(ErrorCode.ROOM_FULL)
            if any(p.color == color for p in game.players):
                raise GameError(ErrorCode.COLOR_TAKEN)

            player = game_logic.create_player(self.player_id(room_id, color), name, color)
            game.players.append(player)
            game.touch()

        logger.info(f"[Room: {room_id}] {name} joined as {Color(color).value}")
        return game, player

    async def start_game(self, room_id: str) -> Game:
        game = self.get_game(room_id)
        async with self.locks[room_id]:
            if game.status != GameStatus.WAITING:
                raise GameError(ErrorCode.INVALID_GAME_STATUS, "Game has already started.")
            if len(game.players) < MINIMUM_PLAYERS_TO_START:
                raise GameError(ErrorCode.NOT_ENOUGH_PLAYERS)

            game.status = GameStatus.PLAYING
            self.set_turn(game, 0)
            game.touch()

        logger.info(f"[Room: {room_id}] Game started with {len(game.players)} players")
        return game

    def set_turn(self, game: Game, index: int):
        game.current_player_index = index
        for i, player in enumerate(game.players):
            player.is_active = i == index

    async def roll_dice(self, room_id: str, player_color: Optional[Color] = None) -> Tuple[Game, int, bool, List[str]]:
        """
        Roll for the active player.

        When no piece can use the roll the turn passes straight to the next
        player and the die is cleared.

        :return: ``(game, roll, turn_passed, movable_piece_ids)``
        """
        game = self.get_game(room_id)
        async with self.locks[room_id]:
            if game.status != GameStatus.PLAYING:
                raise GameError(ErrorCode.INVALID_GAME_STATUS, "Game not started.")
            if game.dice_value:
                raise GameError(ErrorCode.INVALID_GAME_STATUS, "Dice already rolled.")

            player = game.current_player()
            if player_color is not None and player.color != player_color:
                raise GameError(ErrorCode.NOT_YOUR_TURN)

            roll = game_logic.roll_dice()
            movable = game_logic.movable_pieces(player, roll)
            turn_passed = not movable
            if turn_passed:
                game.dice_value = 0
                self.set_turn(game, game_logic.next_player_index(game.current_player_index, game.players))
            else:
                game.dice_value = roll
            game.touch()

        logger.info(f"[Room: {room_id}] {player.name} rolled {roll}" + (", no moves, turn passed" if turn_passed else ""))
        return game, roll, turn_passed, movable

    async def move_piece(self, room_id: str, piece_id: str, dice_value: int) -> Tuple[Game, PiecePosition, PiecePosition, List[str]]:
        """
        Move a piece of the active player by the pending roll.

        A piece at home is brought out to its start square on a six; any
        other piece advances along the path, capturing opposing pieces on
        the square it lands on. The turn then passes to the next player and
        the game ends once one player has every piece finished.

        :return: ``(game, original_position, new_position, captured_piece_ids)``
        """
        game = self.get_game(room_id)
        async with self.locks[room_id]:
            if game.status != GameStatus.PLAYING:
                raise GameError(ErrorCode.INVALID_GAME_STATUS, "Game not started.")

            found = game_logic.find_piece(game.players, piece_id)
            if found is None:
                raise GameError(ErrorCode.PIECE_NOT_FOUND)
            owner_index, piece = found

            if not game_logic.is_valid_die(dice_value):
                raise GameError(ErrorCode.INVALID_MOVE, "Dice value must be between 1 and 6.")
            entering = game_logic.can_enter(piece, dice_value)
            if not entering and not game_logic.can_move(piece, dice_value):
                raise GameError(ErrorCode.INVALID_MOVE)
            if owner_index != game.current_player_index:
                raise GameError(ErrorCode.NOT_YOUR_TURN)
            if not game.dice_value:
                raise GameError(ErrorCode.INVALID_MOVE, "No dice rolled.")
            if game.dice_value != dice_value:
                raise GameError(ErrorCode.INVALID_MOVE, "Dice value does not match the last roll.")

            original_position = piece.position
            if entering:
                piece.position = game_logic.enter_piece(piece, dice_value).position
                captured = []
            else:
                piece.position = game_logic.move_piece(piece, dice_value).position
                captured = game_logic.resolve_captures(game.players, piece)

            game.dice_value = 0
            self.set_turn(game, game_logic.next_player_index(game.current_player_index, game.players))

            winner = game_logic.check_winner(game.players)
            if winner is not None:
                game.winner = winner
                game.status = GameStatus.FINISHED
                for player in game.players:
                    player.is_active = False
            game.touch()

        logger.info(f"[Room: {room_id}] Piece {piece_id} moved {original_position} -> {piece.position}")
        for captured_piece in captured:
            logger.info(f"[Room: {room_id}] Piece {captured_piece.id} captured")
        if winner is not None:
            logger.info(f"[Room: {room_id}] {winner.value} wins")

        return game, original_position, piece.position, [p.id for p in captured]

    async def apply_action(self, room_id: str, action) -> ActionResponse:
        """Create the room if needed and run a parsed action against it."""
        await self.get_or_create_game(room_id)

        if isinstance(action, JoinAction):
            game, player = await self.join_game(room_id, action.player_name, action.player_color)
            return JoinResponse(game_state=game, player_id=player.id)
        elif isinstance(action, StartAction):
            game = await self.start_game(room_id)
            return ActionResponse(game_state=game)
        elif isinstance(action, RollDiceAction):
            game, roll, turn_passed, movable = await self.roll_dice(room_id, action.player_color)
            return RollResponse(game_state=game, dice_value=roll, turn_passed=turn_passed, movable_pieces=movable)
        elif isinstance(action, MovePieceAction):
            game, original, new, captured = await self.move_piece(room_id, action.piece_id, action.dice_value)
            return MoveResponse(game_state=game, original_position=original, new_position=new, captured_pieces=captured)

        raise GameError(ErrorCode.UNKNOWN_ACTION)


game_manager = GameManager()
