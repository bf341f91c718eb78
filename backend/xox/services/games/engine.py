from collections import namedtuple

from xox.errors import CellOccupied, CellOutOfRange, GameNotActive, NotInSession, NotYourTurn
from xox.models import Session, STATUS_PLAYING
from .scoring import find_winning_lines, winning_cells

MoveOutcome = namedtuple('MoveOutcome', [
    'session', 'player', 'index', 'move_number', 'lines', 'winning_indices', 'points',
])


def validate_move(session: Session, participant_id: str, cell_index: int):
    """Raise the first rule the move breaks; returns the mover otherwise."""
    if session.status != STATUS_PLAYING:
        raise GameNotActive()
    player = session.get_player(participant_id)
    if player is None:
        raise NotInSession()
    if session.current_turn != participant_id:
        raise NotYourTurn()
    if not 0 <= cell_index < len(session.board):
        raise CellOutOfRange()
    if session.board[cell_index] is not None:
        raise CellOccupied()
    return player


def apply_move(session: Session, participant_id: str, cell_index: int) -> MoveOutcome:
    """Place the mover's symbol, score every line it completes and pass the turn.

    The turn passes to the opponent whether or not the move scored. A
    rejected move raises a GameError and leaves the session untouched.
    """
    player = validate_move(session, participant_id, cell_index)

    session.move_count += 1
    session.board[cell_index] = player.symbol
    session.placed_at[cell_index] = session.move_count

    lines = find_winning_lines(session.board, session.board_size, player.symbol, cell_index)
    points = len(lines)
    if points:
        session.scores[participant_id] = session.scores.get(participant_id, 0) + points

    session.current_turn = session.opponent_of(participant_id).id

    return MoveOutcome(
        session=session,
        player=player,
        index=cell_index,
        move_number=session.move_count,
        lines=lines,
        winning_indices=winning_cells(lines),
        points=points,
    )
