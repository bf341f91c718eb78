import uuid
from typing import Dict, List, Optional

SYMBOL_X = 'X'
SYMBOL_O = 'O'
SYMBOLS = (SYMBOL_X, SYMBOL_O)

STATUS_WAITING = 'waiting'
STATUS_PLAYING = 'playing'

MAX_PLAYERS = 2


def generate_session_id() -> str:
    return f"game_{uuid.uuid4().hex[:12]}"


class Participant:
    def __init__(self, id: str, name: str, symbol: str):
        self.id = id
        self.name = name
        self.symbol = symbol

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'symbol': self.symbol,
        }

    def __repr__(self):
        return f"<Participant {self.id} {self.symbol} {self.name!r}>"


class Session:
    """One two-player game on an N x N board.

    Cells hold None when empty, otherwise the symbol of the player who
    filled them. ``placed_at`` keeps the move number that filled each cell
    so delayed clears can tell whether a cell still holds the scored mark.
    """

    def __init__(self, board_size: int, id: Optional[str] = None):
        self.id = id or generate_session_id()
        self.board_size = board_size
        self.board: List[Optional[str]] = [None] * (board_size * board_size)
        self.placed_at: List[Optional[int]] = [None] * (board_size * board_size)
        self.players: List[Participant] = []
        self.current_turn: Optional[str] = None
        self.scores: Dict[str, int] = {}
        self.status = STATUS_WAITING
        self.move_count = 0
        self.pending_clears = []

    @property
    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def get_player(self, participant_id: str) -> Optional[Participant]:
        for p in self.players:
            if p.id == participant_id:
                return p
        return None

    def opponent_of(self, participant_id: str) -> Optional[Participant]:
        for p in self.players:
            if p.id != participant_id:
                return p
        return None

    def free_symbol(self) -> str:
        taken = {p.symbol for p in self.players}
        for symbol in SYMBOLS:
            if symbol not in taken:
                return symbol
        raise ValueError('Session already has two players')

    def public_state(self):
        """Shape shared by playerJoined and gameUpdate."""
        return {
            'players': [p.to_dict() for p in self.players],
            'currentPlayer': self.current_turn,
            'scores': dict(self.scores),
            'status': self.status,
        }

    def board_state(self):
        return {
            'board': list(self.board),
            'currentPlayer': self.current_turn,
            'status': self.status,
            'gridSize': self.board_size,
            'gameId': self.id,
        }

    def to_dict(self):
        return {
            'id': self.id,
            'gridSize': self.board_size,
            'status': self.status,
            'players': [p.to_dict() for p in self.players],
            'scores': dict(self.scores),
        }

    def __repr__(self):
        return f"<Session {self.id} {self.board_size}x{self.board_size} {self.status}>"
