from typing import Callable, List, Optional

from xox import socketio
from xox.models import Session


class ClearTimer:
    """A pending clear of one move's winning cells, owned by its session."""

    def __init__(self, session_id: str, cells: List[int], move_number: int, delay_ms: int):
        self.session_id = session_id
        self.cells = list(cells)
        self.move_number = move_number
        self.delay_ms = delay_ms
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    def __repr__(self):
        return f"<ClearTimer {self.session_id} move={self.move_number} cells={self.cells}>"


def clear_winning_cells(registry, timer: ClearTimer) -> Optional[Session]:
    """Empty the timer's cells; returns the session when the board changed.

    A cell is only emptied while it still holds a mark placed at or before
    the scoring move. Cancelled timers and destroyed sessions are ignored.
    """
    if timer.cancelled or timer.fired:
        return None
    timer.fired = True
    session = registry.get(timer.session_id)
    if session is None:
        return None
    if timer in session.pending_clears:
        session.pending_clears.remove(timer)

    changed = False
    for idx in timer.cells:
        placed = session.placed_at[idx]
        if placed is not None and placed <= timer.move_number:
            session.board[idx] = None
            session.placed_at[idx] = None
            changed = True
    return session if changed else None


def schedule_clear(app, session: Session, cells: List[int], move_number: int, delay_ms: int,
                   on_fire: Callable[[ClearTimer], None]) -> ClearTimer:
    """Run `on_fire(timer)` in a background task after `delay_ms`.

    The timer is registered on the session so destroying the session
    cancels it.
    """
    timer = ClearTimer(session.id, cells, move_number, delay_ms)
    session.pending_clears.append(timer)
    app.logger.info(
        f"[clear-set] game={session.id} move={move_number} cells={timer.cells} delay={delay_ms}ms"
    )

    def _worker(t: ClearTimer):
        socketio.sleep(max(0, t.delay_ms) / 1000.0)
        on_fire(t)

    socketio.start_background_task(_worker, timer)
    return timer
