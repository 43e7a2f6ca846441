"""
Pawns Board Error Hierarchy

Every rule violation raised by the engine is a ``GameRuleError`` tagged with
an ``ErrorKind``. Callers branch on the tag rather than on subclasses.

Usage:
    from pawnsboard.errors import ErrorKind, GameRuleError

    try:
        engine.place_card(0, 1, 0)
    except GameRuleError as e:
        if e.kind is ErrorKind.INSUFFICIENT_PAWNS:
            logger.warning(f"Not enough pawns: {e.message}")
"""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = [
    "ConfigurationError",
    "ErrorKind",
    "GameRuleError",
    "PawnsBoardError",
]


class PawnsBoardError(Exception):
    """Base exception for all Pawns Board errors.

    Attributes:
        code: Machine-readable error code for categorization
        message: Human-readable error description
        context: Additional context for debugging
    """
    code: str = "PAWNSBOARD_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"[{self.code}] {self.message} ({ctx})"
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# =============================================================================
# Game Rules Errors
# =============================================================================


class ErrorKind(str, Enum):
    """Tag identifying which rule a ``GameRuleError`` reports."""
    INVALID_DIMENSIONS = "INVALID_DIMENSIONS"
    INVALID_DECK_CONFIGURATION = "INVALID_DECK_CONFIGURATION"
    GAME_NOT_STARTED = "GAME_NOT_STARTED"
    GAME_NOT_IN_PROGRESS = "GAME_NOT_IN_PROGRESS"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    INVALID_CARD_INDEX = "INVALID_CARD_INDEX"
    NOT_PAWNS = "NOT_PAWNS"
    WRONG_OWNER = "WRONG_OWNER"
    INSUFFICIENT_PAWNS = "INSUFFICIENT_PAWNS"
    INVALID_CONTENT = "INVALID_CONTENT"
    GAME_NOT_OVER = "GAME_NOT_OVER"


class GameRuleError(PawnsBoardError):
    """A request the rules refuse.

    The engine state is unchanged whenever this is raised from a mutating
    call.

    Attributes:
        kind: Which rule was violated
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=kind.value, context=context)
        self.kind = kind


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(PawnsBoardError):
    """Invalid or unreadable game configuration.

    Attributes:
        config_key: The configuration key that is invalid, when known
    """
    code: str = "CONFIGURATION_ERROR"

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.config_key = config_key
        if config_key:
            self.context["config_key"] = config_key
