# -*- coding: utf-8 -*-
"""
Exceptions raised by the 2048 engine.

Soft no-op conditions (a move that slides nothing, an undo without history, continuing a game
that is not won) are not errors and never raise.
"""

from enum import Enum


class GameError(Exception):
    """Base class for every error raised by the engine."""


class ConfigurationError(GameError, ValueError):
    """
    Raised when a game configuration fails validation.

    Attributes
    ----------
    errors : list[str]
        Every violated constraint, in validation order.
    """

    def __init__(self, errors: list[str], prefix: str = 'Invalid game configuration'):
        self.errors = list(errors)
        super().__init__(f"{prefix}: {', '.join(self.errors)}")


class DeserializationError(GameError, ValueError):
    """Raised when a persisted game state is malformed or structurally invalid."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f'Failed to deserialize game state: {reason}')


class StorageErrorType(str, Enum):
    """Kinds of persistence failures."""

    NOT_AVAILABLE = 'NOT_AVAILABLE'
    PARSE_ERROR = 'PARSE_ERROR'
    UNKNOWN = 'UNKNOWN'


class StorageError(GameError):
    """Raised by the persistence layer when a blob cannot be written or read."""

    def __init__(self, error_type: StorageErrorType, message: str):
        self.type = error_type
        super().__init__(message)
