"""Inbound event handling, independent of the Socket.IO transport.

Each handler takes the registry, the sender's sid and the raw payload,
mutates the registry and returns the notifications to deliver, in order.
``to`` is either a session id (the session's room) or a single sid.
"""

from collections import namedtuple
from typing import List, Optional, Tuple

from xox.errors import GameError, InvalidPayload, NotInSession, GameNotActive
from xox.models import Session, STATUS_PLAYING
from xox.registry import SessionRegistry
from xox.services.games.engine import MoveOutcome, apply_move
from xox.services.games.scheduler import ClearTimer, clear_winning_cells

Notification = namedtuple('Notification', ['event', 'payload', 'to'])


def _int_field(data, key: str) -> int:
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidPayload(f'{key} must be an integer')
    return value


def _move_rejected(sid: str, exc: GameError) -> Notification:
    return Notification('moveResult', {'success': False, 'message': exc.message}, sid)


def _require_dict(data, event: str):
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidPayload(f'{event} payload must be an object')
    return data


def handle_join_game(registry: SessionRegistry, sid: str, data) -> Tuple[Optional[Session], List[Notification]]:
    """Seat the sender; a sender already seated leaves its old game first."""
    notifications = []
    try:
        data = _require_dict(data, 'joinGame')
        name, grid_size = registry.validate_join(data.get('playerName'), data.get('gridSize'))
        if registry.session_for(sid) is not None:
            notifications.extend(handle_disconnect(registry, sid))
        session, participant, symbol = registry.join_session(name, grid_size, sid)
    except GameError as exc:
        return None, notifications + [Notification('error', {'message': exc.message}, sid)]

    notifications.extend([
        Notification('playerSymbol', symbol, sid),
        Notification('playerJoined', session.public_state(), session.id),
        Notification('gameState', session.board_state(), sid),
    ])
    return session, notifications


def handle_make_move(registry: SessionRegistry, sid: str, data,
                     reject_inactive: bool = True) -> Tuple[Optional[MoveOutcome], List[Notification]]:
    """Validate and apply a move from the sender.

    Rejections go to the sender only. Moves on a session that is not
    playing are answered only when ``reject_inactive`` is set.
    """
    session = registry.session_for(sid)
    if session is None or session.status != STATUS_PLAYING:
        if not reject_inactive:
            return None, []
        exc = NotInSession() if session is None else GameNotActive()
        return None, [_move_rejected(sid, exc)]

    try:
        data = _require_dict(data, 'makeMove')
        index = _int_field(data, 'index')
        player_id = data.get('playerId')
        if player_id is not None and player_id != sid:
            raise InvalidPayload('playerId does not match this connection')
        outcome = apply_move(session, sid, index)
    except GameError as exc:
        return None, [_move_rejected(sid, exc)]

    notifications = []
    if outcome.lines:
        notifications.append(Notification('scoreUpdate', {
            'scores': dict(session.scores),
            'playerId': sid,
            'lines': [line.type for line in outcome.lines],
            'winningIndices': list(outcome.winning_indices),
        }, session.id))

    result = {
        'success': True,
        'board': list(session.board),
        'currentPlayer': session.current_turn,
        'status': session.status,
        'scores': dict(session.scores),
    }
    if outcome.winning_indices:
        result['winningIndices'] = list(outcome.winning_indices)
    notifications.append(Notification('moveResult', result, session.id))
    notifications.append(Notification('gameUpdate', session.public_state(), session.id))
    return outcome, notifications


def handle_disconnect(registry: SessionRegistry, sid: str) -> List[Notification]:
    session = registry.session_for(sid)
    if session is None:
        return []
    remaining = registry.leave_session(session.id, sid)
    if remaining is None:
        return []
    return [
        Notification('playerLeft', {'playerId': sid}, remaining.id),
        Notification('gameUpdate', session.public_state(), remaining.id),
    ]


def handle_clear_timer(registry: SessionRegistry, timer: ClearTimer) -> List[Notification]:
    session = clear_winning_cells(registry, timer)
    if session is None:
        return []
    return [Notification('boardUpdate', {'board': list(session.board)}, session.id)]
