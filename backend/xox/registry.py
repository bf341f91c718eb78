import threading
from typing import Dict, Iterator, Optional, Tuple

from xox.errors import InvalidPayload
from xox.models import Participant, Session, STATUS_PLAYING, STATUS_WAITING


class SessionRegistry:
    """All live sessions of this process, keyed by session id.

    Created once by the app factory and handed to the socket handlers.
    Sessions are kept in creation order, which is also the order
    matchmaking scans them in.
    """

    def __init__(self, min_board_size: int = 3, max_board_size: int = 10):
        self.min_board_size = min_board_size
        self.max_board_size = max_board_size
        self.lock = threading.RLock()
        self._sessions: Dict[str, Session] = {}
        self._participant_session: Dict[str, str] = {}

    def __len__(self):
        return len(self._sessions)

    def __iter__(self) -> Iterator[Session]:
        return iter(list(self._sessions.values()))

    def __contains__(self, session_id):
        return session_id in self._sessions

    def get(self, session_id: str) -> Optional[Session]:
        return self._sessions.get(session_id)

    def session_for(self, participant_id: str) -> Optional[Session]:
        session_id = self._participant_session.get(participant_id)
        return self._sessions.get(session_id) if session_id else None

    def validate_join(self, name, board_size) -> Tuple[str, int]:
        """Check a join request; returns the cleaned name and board size."""
        if not isinstance(name, str) or not name.strip():
            raise InvalidPayload('playerName is required')
        if isinstance(board_size, bool) or not isinstance(board_size, int):
            raise InvalidPayload('gridSize must be an integer')
        if not self.min_board_size <= board_size <= self.max_board_size:
            raise InvalidPayload(
                f'gridSize must be between {self.min_board_size} and {self.max_board_size}'
            )
        return name.strip(), board_size

    def _find_waiting(self, board_size: int) -> Optional[Session]:
        for session in self._sessions.values():
            if session.status == STATUS_WAITING and session.board_size == board_size and not session.is_full:
                return session
        return None

    def join_session(self, name: str, board_size: int, participant_id: str) -> Tuple[Session, Participant, str]:
        """Seat a player in the first compatible waiting session, or a new one.

        The first seated player gets X, the second O. When the second seat
        is filled the session starts with the first seated player to move.
        Callers move a seated participant out with leave_session first.
        """
        name, board_size = self.validate_join(name, board_size)

        session = self._find_waiting(board_size)
        if session is None:
            session = Session(board_size)
            self._sessions[session.id] = session

        participant = Participant(participant_id, name, session.free_symbol())
        session.players.append(participant)
        session.scores[participant_id] = 0
        self._participant_session[participant_id] = session.id

        if session.is_full:
            session.status = STATUS_PLAYING
            session.current_turn = session.players[0].id

        return session, participant, participant.symbol

    def leave_session(self, session_id: str, participant_id: str) -> Optional[Participant]:
        """Remove a player; returns whoever is left to be notified.

        An emptied session is destroyed along with its pending timers. A
        session left with one player goes back to waiting so the sole
        player cannot keep moving and a newcomer can take the free seat.
        """
        self._participant_session.pop(participant_id, None)
        session = self._sessions.get(session_id)
        if session is None:
            return None

        session.players = [p for p in session.players if p.id != participant_id]
        session.scores.pop(participant_id, None)

        if not session.players:
            self.destroy(session_id)
            return None

        session.status = STATUS_WAITING
        session.current_turn = None
        return session.players[0]

    def destroy(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        for timer in list(session.pending_clears):
            timer.cancel()
        session.pending_clears.clear()
        for p in session.players:
            self._participant_session.pop(p.id, None)

    def summaries(self):
        return [s.to_dict() for s in self]
