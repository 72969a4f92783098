"""
Result records returned by GameSession operations.

Fallible operations never raise for expected failures; they return one of
these with success=False and a human-readable reason.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from tango_core.types import CellValue, ErrorCell, GameState, MoveRecord, ValidationReport

GAME_NOT_ACTIVE = "Game not active"
INVALID_MOVE = "Invalid move"
NO_MOVES_TO_UNDO = "No moves to undo"
NO_MOVES_TO_REDO = "No moves to redo"
NO_HINTS = "No obvious hints available"
HINT_REASON = "Based on current constraints"


@dataclass(frozen=True)
class MoveResult:
    success: bool
    reason: Optional[str] = None
    game_state: Optional[GameState] = None
    is_valid: Optional[bool] = None
    errors: List[ErrorCell] = field(default_factory=list)
    validation: Optional[ValidationReport] = None

    @classmethod
    def failure(cls, reason: str) -> 'MoveResult':
        return cls(success=False, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "reason": self.reason}
        return {
            "success": True,
            "gameState": self.game_state.value,
            "isValid": self.is_valid,
            "errors": [e.to_dict() for e in self.errors],
            "validation": self.validation.to_dict(),
        }


@dataclass(frozen=True)
class HistoryResult:
    """Outcome of undo() or redo()."""
    success: bool
    reason: Optional[str] = None
    move: Optional[MoveRecord] = None
    can_undo: bool = False
    can_redo: bool = False

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "reason": self.reason}
        return {
            "success": True,
            "move": self.move.to_dict(),
            "canUndo": self.can_undo,
            "canRedo": self.can_redo,
        }


@dataclass(frozen=True)
class HintResult:
    success: bool
    reason: str
    row: Optional[int] = None
    col: Optional[int] = None
    suggested_value: Optional[CellValue] = None

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {"success": False, "reason": self.reason}
        return {
            "success": True,
            "row": self.row,
            "col": self.col,
            "suggestedValue": self.suggested_value.value,
            "reason": self.reason,
        }


@dataclass(frozen=True)
class CompletionSummary:
    time: int
    formatted_time: str
    move_count: int
    difficulty: str
    size: int
    seed: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completed": True,
            "time": self.time,
            "formattedTime": self.formatted_time,
            "moveCount": self.move_count,
            "difficulty": self.difficulty,
            "size": self.size,
            "seed": self.seed,
        }
