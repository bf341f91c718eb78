import os


def _optional_int(name):
    value = os.environ.get(name)
    if value is None or value.strip() == '':
        return None
    return int(value)


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '0.0.0.0')
    PORT = int(os.environ.get('PORT', '3001'))
    # Allowed cross-origin source(s), comma separated. '*' allows all.
    CLIENT_URL = os.environ.get('CLIENT_URL', '*')
    # Board size bounds accepted on joinGame
    MIN_BOARD_SIZE = int(os.environ.get('MIN_BOARD_SIZE', '3'))
    MAX_BOARD_SIZE = int(os.environ.get('MAX_BOARD_SIZE', '10'))
    # Delay before winning cells are emptied again (ms). Unset keeps them.
    CLEAR_WINNING_CELLS_AFTER_MS = _optional_int('CLEAR_WINNING_CELLS_AFTER_MS')
    # Answer moves on a session that is not playing with moveResult{success: false}.
    # When false such moves are dropped without a response.
    REJECT_INACTIVE_MOVES = os.environ.get('REJECT_INACTIVE_MOVES', '1').lower() not in ('0', 'false', 'no')
