"""Errors raised at the store / handler boundary."""


class GameServiceError(Exception):
    message = "Game service error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)


class GameNotFound(GameServiceError):
    message = "Game not found"


class GameConflict(GameServiceError):
    message = "Game was modified concurrently, reload and retry"


class PersistenceFailure(GameServiceError):
    message = "Database operation failed"
