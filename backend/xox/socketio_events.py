from flask import request
from flask_socketio import join_room, leave_room

from xox import socketio, events
from xox.services.games.scheduler import schedule_clear

NAMESPACE = '/'


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def dispatch(notifications) -> None:
    """Emit notifications in the order they were produced."""
    for note in notifications:
        socketio.emit(note.event, note.payload, to=note.to, namespace=NAMESPACE)


def register_socketio_handlers(app, registry) -> None:
    """Register Socket.IO event handlers bound to this app's registry.

    Every handler holds ``registry.lock`` until its notifications are
    emitted, so one event is fully processed before the next begins.
    """

    def on_clear_fired(timer):
        with registry.lock:
            if timer.cancelled or registry.get(timer.session_id) is None:
                app.logger.info(f"[clear-abort] game={timer.session_id} move={timer.move_number}")
                return
            notifications = events.handle_clear_timer(registry, timer)
            app.logger.info(
                f"[clear-fire] game={timer.session_id} move={timer.move_number} changed={bool(notifications)}"
            )
            dispatch(notifications)

    def handle_connect(auth=None):
        app.logger.info(f"[connect] sid={_get_sid()}")

    def handle_disconnect(reason=None):
        sid = _get_sid()
        with registry.lock:
            session = registry.session_for(sid)
            notifications = events.handle_disconnect(registry, sid)
            if session is not None:
                remaining = 'destroyed' if session.id not in registry else f"remaining={len(session.players)}"
                app.logger.info(f"[leave] game={session.id} sid={sid} {remaining}")
            dispatch(notifications)

    def handle_join_game(data):
        sid = _get_sid()
        with registry.lock:
            previous = registry.session_for(sid)
            session, notifications = events.handle_join_game(registry, sid, data)
            if session is None:
                app.logger.info(f"[reject] event=joinGame sid={sid} message={notifications[-1].payload['message']!r}")
            else:
                if previous is not None and previous.id != session.id:
                    leave_room(previous.id)
                join_room(session.id)
                app.logger.info(
                    f"[join] game={session.id} sid={sid} size={session.board_size} "
                    f"players={len(session.players)} status={session.status}"
                )
            dispatch(notifications)

    def handle_make_move(data):
        sid = _get_sid()
        with registry.lock:
            outcome, notifications = events.handle_make_move(
                registry, sid, data,
                reject_inactive=app.config.get('REJECT_INACTIVE_MOVES', True),
            )
            if outcome is None:
                if notifications:
                    app.logger.info(
                        f"[reject] event=makeMove sid={sid} message={notifications[0].payload['message']!r}"
                    )
            else:
                session = outcome.session
                app.logger.info(
                    f"[move] game={session.id} sid={sid} symbol={outcome.player.symbol} index={outcome.index} "
                    f"next={session.current_turn}"
                )
                if outcome.lines:
                    app.logger.info(
                        f"[score] game={session.id} sid={sid} points={outcome.points} "
                        f"lines={[line.type for line in outcome.lines]} cells={outcome.winning_indices} "
                        f"scores={session.scores}"
                    )
                    delay_ms = app.config.get('CLEAR_WINNING_CELLS_AFTER_MS')
                    if delay_ms is not None:
                        schedule_clear(app, session, outcome.winning_indices, outcome.move_number,
                                       int(delay_ms), on_clear_fired)
            dispatch(notifications)

    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('joinGame', handle_join_game, namespace=NAMESPACE)
    socketio.on_event('makeMove', handle_make_move, namespace=NAMESPACE)
