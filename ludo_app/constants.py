BOARD_SIZE = 15
PIECES_PER_PLAYER = 4
MAXIMUM_ALLOWED_PLAYERS = 4
MINIMUM_PLAYERS_TO_START = 2

# Reaching this index finishes a piece; the last stoppable path index is one less.
FINISH_LINE = 56
LAST_PATH_INDEX = FINISH_LINE - 1
ENTRY_ROLL = 6

# Symbolic piece positions. Anything else is an integer path index.
HOME = "home"
START = "start"
FINISHED = "finish"

# Home quadrants as (start_x, start_y, end_x, end_y), inclusive.
HOME_QUADRANTS = {
    'red': (0, 0, 5, 5),
    'green': (9, 0, 14, 5),
    'yellow': (0, 9, 5, 14),
    'blue': (9, 9, 14, 14),
}

START_SQUARES = {
    'red': (1, 6),
    'green': (8, 1),
    'blue': (13, 8),
    'yellow': (6, 13),
}

CENTER = (7, 7)
