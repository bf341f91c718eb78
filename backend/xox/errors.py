class GameError(Exception):
    """Base for rejections that are reported back to the requesting player."""

    message = 'Invalid request'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class InvalidPayload(GameError):
    message = 'Malformed request'


class GameNotActive(GameError):
    message = 'Game is not in progress'


class NotInSession(GameError):
    message = 'You are not part of this game'


class NotYourTurn(GameError):
    message = 'Not your turn'


class CellOutOfRange(GameError):
    message = 'Cell is outside the board'


class CellOccupied(GameError):
    message = 'Cell already taken'
