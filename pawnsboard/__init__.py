"""Pawns Board rules engine."""

from .board import Board, BoardFactory, RectangularBoardFactory
from .errors import ConfigurationError, ErrorKind, GameRuleError, PawnsBoardError
from .game_engine import GameEngine
from .influence import EffectKind, InfluenceEffect, apply_influence, resolve_influence
from .models import Card, Cell, CellContent, Player
from .scoring import ScoringEngine

__all__ = [
    "Board",
    "BoardFactory",
    "Card",
    "Cell",
    "CellContent",
    "ConfigurationError",
    "EffectKind",
    "ErrorKind",
    "GameEngine",
    "GameRuleError",
    "InfluenceEffect",
    "PawnsBoardError",
    "Player",
    "RectangularBoardFactory",
    "ScoringEngine",
    "apply_influence",
    "resolve_influence",
]
