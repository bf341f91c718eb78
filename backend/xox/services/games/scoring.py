from collections import namedtuple
from typing import List, Optional, Sequence

RUN_LENGTH = 3

LINE_HORIZONTAL = 'horizontal'
LINE_VERTICAL = 'vertical'
LINE_DIAGONAL_MAIN = 'diagonal-main'
LINE_DIAGONAL_ANTI = 'diagonal-anti'

WinningLine = namedtuple('WinningLine', ['type', 'indices'])


def line_indices(size: int, start: int, step: int) -> List[int]:
    return [start + step * i for i in range(size)]


def first_run(board: Sequence[Optional[str]], indices: Sequence[int], symbol: str,
              length: int = RUN_LENGTH) -> List[int]:
    """Return the first `length` consecutive cells of `symbol` along `indices`.

    Walks `indices` in order keeping a streak of matching cells; any other
    cell resets it. Stops as soon as the streak is `length` long. Returns []
    when the line holds no such run.
    """
    if len(indices) < length:
        return []
    streak: List[int] = []
    for idx in indices:
        if 0 <= idx < len(board) and board[idx] == symbol:
            streak.append(idx)
            if len(streak) == length:
                return streak
        else:
            streak = []
    return []


def directions_through(size: int, pivot: int):
    """(type, start, step) of every line that passes through `pivot`."""
    row, col = divmod(pivot, size)
    directions = [
        (LINE_HORIZONTAL, row * size, 1),
        (LINE_VERTICAL, col, size),
    ]
    if row == col:
        directions.append((LINE_DIAGONAL_MAIN, 0, size + 1))
    if row + col == size - 1:
        directions.append((LINE_DIAGONAL_ANTI, size - 1, size - 1))
    return directions


def find_winning_lines(board: Sequence[Optional[str]], size: int, symbol: str, pivot: int) -> List[WinningLine]:
    """Scan the row, column and diagonals through `pivot` for runs of three.

    Each direction contributes at most one line: the first run of
    RUN_LENGTH matching cells in index order. The pivot only decides
    which diagonals are scanned.
    """
    lines = []
    for line_type, start, step in directions_through(size, pivot):
        indices = first_run(board, line_indices(size, start, step), symbol)
        if indices:
            lines.append(WinningLine(line_type, indices))
    return lines


def winning_cells(lines: Sequence[WinningLine]) -> List[int]:
    """Union of the lines' cells, first-seen order, no duplicates."""
    seen = set()
    cells = []
    for line in lines:
        for idx in line.indices:
            if idx not in seen:
                seen.add(idx)
                cells.append(idx)
    return cells
