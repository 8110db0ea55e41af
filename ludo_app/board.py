"""
Static board topology and the mapping from piece positions to grid cells.

The rules engine only ever sees abstract positions (home, start, a path index
or finish). Renderers use :func:`position_to_grid` to place a piece on the
15x15 cross-shaped grid built by :func:`create_board`.
"""
from typing import List, Tuple

from ludo_app.constants import (
    BOARD_SIZE, CENTER, FINISHED, HOME, HOME_QUADRANTS, LAST_PATH_INDEX, START, START_SQUARES
)
from ludo_app.models import BoardCell, CellType, Color, PiecePosition

Cell = Tuple[int, int]

# Corners of the shared route, walked clockwise from red's start square and
# finishing in the middle row towards the center.
TRACK_SEGMENTS = [
    ((1, 6), (5, 6)),
    ((6, 5), (6, 0)),
    ((7, 0), (8, 0)),
    ((8, 1), (8, 5)),
    ((9, 6), (14, 6)),
    ((14, 7), (14, 8)),
    ((13, 8), (9, 8)),
    ((8, 9), (8, 14)),
    ((7, 14), (6, 14)),
    ((6, 13), (6, 9)),
    ((5, 8), (0, 8)),
    ((0, 7), (0, 6)),
    ((1, 7), (3, 7)),
]


def _segment(start: Cell, end: Cell) -> List[Cell]:
    (x, y), (end_x, end_y) = start, end
    dx = (end_x > x) - (end_x < x)
    dy = (end_y > y) - (end_y < y)
    cells = [(x, y)]
    while (x, y) != (end_x, end_y):
        x, y = x + dx, y + dy
        cells.append((x, y))
    return cells


def build_track() -> List[Cell]:
    """Return the grid cell of every path index, in order (index 1 first)."""
    track = []
    for start, end in TRACK_SEGMENTS:
        track.extend(_segment(start, end))
    return track


TRACK = build_track()
assert len(TRACK) == LAST_PATH_INDEX


def cell_id(x: int, y: int) -> int:
    return y * BOARD_SIZE + x


def create_board() -> List[BoardCell]:
    """Build the 15x15 grid, tagging center, home and start cells."""
    board = [
        BoardCell(id=cell_id(x, y), x=x, y=y)
        for y in range(BOARD_SIZE)
        for x in range(BOARD_SIZE)
    ]

    center_x, center_y = CENTER
    for y in range(center_y - 1, center_y + 2):
        for x in range(center_x - 1, center_x + 2):
            board[cell_id(x, y)].type = CellType.CENTER

    # Only the interior of each quadrant is home; its outer ring stays path.
    for color, (start_x, start_y, end_x, end_y) in HOME_QUADRANTS.items():
        for y in range(start_y + 1, end_y):
            for x in range(start_x + 1, end_x):
                cell = board[cell_id(x, y)]
                cell.type = CellType.HOME
                cell.color = Color(color)

    for color, (x, y) in START_SQUARES.items():
        cell = board[cell_id(x, y)]
        cell.type = CellType.START
        cell.color = Color(color)

    return board


BOARD = create_board()


def home_slot(color: Color, piece_index: int) -> Cell:
    start_x, start_y, _, _ = HOME_QUADRANTS[Color(color).value]
    return start_x + 2 + piece_index % 2, start_y + 2 + piece_index // 2


def position_to_grid(color: Color, position: PiecePosition, piece_index: int = 0) -> Cell:
    """
    Convert a piece position into the (x, y) grid cell it is drawn on.

    :param color: Owner color, needed for home and start squares.
    :param position: ``"home"``, ``"start"``, ``"finish"`` or a path index.
    :param piece_index: Stable piece index, spreads home pieces over the yard.
    :return: ``(x, y)`` on the board grid.
    """
    if position == HOME:
        return home_slot(color, piece_index)
    if position == START:
        return START_SQUARES[Color(color).value]
    if position == FINISHED:
        return CENTER
    if isinstance(position, int) and 1 <= position <= LAST_PATH_INDEX:
        return TRACK[position - 1]
    raise ValueError(f"Unknown piece position: {position!r}")
