# game_logic.py
import random
from typing import List, Optional, Tuple

from ludo_app.constants import (
    ENTRY_ROLL, FINISH_LINE, FINISHED, HOME, PIECES_PER_PLAYER, START
)
from ludo_app.errors import ErrorCode, GameError
from ludo_app.models import Color, Piece, Player, PiecePosition


def create_piece(player_id: str, color: Color, piece_index: int) -> Piece:
    return Piece(
        id=f"{player_id}-{Color(color).value}-{piece_index}",
        color=color,
        position=HOME,
        player_id=player_id,
    )


def create_player(id: str, name: str, color: Color) -> Player:
    """Create a player with all of its pieces at home."""
    return Player(
        id=id,
        name=name,
        color=color,
        pieces=[create_piece(id, color, i) for i in range(PIECES_PER_PLAYER)],
        is_active=False,
    )


def roll_dice() -> int:
    return random.randint(1, 6)


def is_valid_die(dice_value) -> bool:
    return isinstance(dice_value, int) and not isinstance(dice_value, bool) and 1 <= dice_value <= 6


def can_move(piece: Piece, dice_value: int) -> bool:
    """Checks whether a piece already in play can advance by ``dice_value``."""
    if not is_valid_die(dice_value):
        return False
    if piece.position in (HOME, FINISHED):
        return False
    if piece.position == START:
        return dice_value == ENTRY_ROLL
    return piece.position + dice_value <= FINISH_LINE


def can_enter(piece: Piece, dice_value: int) -> bool:
    """A piece leaves home for its start square only on a six."""
    return piece.position == HOME and dice_value == ENTRY_ROLL


def calculate_next_position(position: PiecePosition, dice_value: int) -> PiecePosition:
    if position == START:
        return 1
    new_position = position + dice_value
    if new_position >= FINISH_LINE:
        return FINISHED
    return new_position


def move_piece(piece: Piece, dice_value: int) -> Piece:
    """Return a copy of ``piece`` advanced by ``dice_value``."""
    if not can_move(piece, dice_value):
        raise GameError(
            ErrorCode.INVALID_MOVE,
            f"Piece {piece.id} cannot move from {piece.position!r} with a roll of {dice_value}.",
        )
    return piece.model_copy(update={"position": calculate_next_position(piece.position, dice_value)})


def enter_piece(piece: Piece, dice_value: int) -> Piece:
    if not can_enter(piece, dice_value):
        raise GameError(ErrorCode.INVALID_MOVE, f"Need {ENTRY_ROLL} to move piece {piece.id} out of home.")
    return piece.model_copy(update={"position": START})


def resolve_captures(players: List[Player], mover: Piece) -> List[Piece]:
    """
    Send every opposing piece sharing the mover's path square back home.

    All matching pieces are captured, not just the first one found. Home,
    start and finish are never contested, and pieces of the mover's own
    color are left alone.

    :return: The captured pieces, after being reset.
    """
    if not isinstance(mover.position, int):
        return []

    captured = []
    for player in players:
        if player.color == mover.color:
            continue
        for piece in player.pieces:
            if piece.position == mover.position:
                piece.position = HOME
                captured.append(piece)
    return captured


def movable_pieces(player: Player, dice_value: int) -> List[str]:
    """Ids of the pieces the player may move or bring out with this roll."""
    return [
        piece.id for piece in player.pieces
        if can_move(piece, dice_value) or can_enter(piece, dice_value)
    ]


def find_piece(players: List[Player], piece_id: str) -> Optional[Tuple[int, Piece]]:
    """Locate a piece, returning the owning player's index alongside it."""
    for index, player in enumerate(players):
        for piece in player.pieces:
            if piece.id == piece_id:
                return index, piece
    return None


def next_player_index(current_index: int, players: List[Player]) -> int:
    return (current_index + 1) % len(players)


def check_winner(players: List[Player]) -> Optional[Color]:
    """First player, in join order, with every piece finished."""
    for player in players:
        finished = sum(1 for piece in player.pieces if piece.position == FINISHED)
        if finished == PIECES_PER_PLAYER:
            return player.color
    return None
