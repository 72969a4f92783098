"""
Tango Puzzle Engine - Core Package
Grid state, rule validation, seeded generation, and game sessions.
"""
from .types import CellValue, ConstraintKind, GameState, RuleCategory, Cell, Constraint, MoveRecord
from .grid_store import GridStore
from .rule_validator import RuleValidator
from .seeded_random import SeededRandom
from .history import MoveHistory
from .timer import GameTimer, format_time
from .session import GameSession

__all__ = [
    'CellValue', 'ConstraintKind', 'GameState', 'RuleCategory', 'Cell', 'Constraint', 'MoveRecord',
    'GridStore', 'RuleValidator', 'SeededRandom', 'MoveHistory', 'GameTimer', 'format_time', 'GameSession',
]
