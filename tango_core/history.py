"""
Linear undo/redo history of player moves.

The history is a list of MoveRecords plus a cursor pointing at the last
applied move (-1 when nothing is applied). Recording a move while the cursor
is rewound drops every move after it.
"""
from typing import Any, Dict, List, Optional

from tango_core.types import MoveRecord


class MoveHistory:
    """Manages move history for undo/redo operations."""

    def __init__(self, max_history: Optional[int] = None):
        self.max_history = max_history
        self.moves: List[MoveRecord] = []
        self.current_index = -1  # Points to last applied move

    def __len__(self) -> int:
        return len(self.moves)

    def record(self, move: MoveRecord) -> None:
        """Append an already-applied move, discarding the redo tail."""
        if self.current_index < len(self.moves) - 1:
            self.moves = self.moves[:self.current_index + 1]

        self.moves.append(move)
        self.current_index += 1

        self._trim()

    def _trim(self) -> None:
        """Drop the oldest moves beyond max_history, shifting the cursor with them."""
        if self.max_history is None or len(self.moves) <= self.max_history:
            return
        excess = len(self.moves) - self.max_history
        self.moves = self.moves[excess:]
        self.current_index = max(self.current_index - excess, -1)

    def can_undo(self) -> bool:
        return self.current_index >= 0

    def can_redo(self) -> bool:
        return self.current_index < len(self.moves) - 1

    def undo(self, grid) -> Optional[MoveRecord]:
        """
        Revert the move at the cursor.

        Returns:
            The reverted move, or None when there is nothing to undo or the
            grid refused the write
        """
        if not self.can_undo():
            return None

        move = self.moves[self.current_index]
        if not move.undo(grid):
            return None

        self.current_index -= 1
        return move

    def redo(self, grid) -> Optional[MoveRecord]:
        """Re-apply the move after the cursor. Returns it, or None."""
        if not self.can_redo():
            return None

        self.current_index += 1
        move = self.moves[self.current_index]
        if not move.execute(grid):
            self.current_index -= 1
            return None

        return move

    def get_undo_description(self) -> Optional[str]:
        if not self.can_undo():
            return None
        return self.moves[self.current_index].get_description()

    def get_redo_description(self) -> Optional[str]:
        if not self.can_redo():
            return None
        return self.moves[self.current_index + 1].get_description()

    def clear(self) -> None:
        self.moves.clear()
        self.current_index = -1

    def restore(self, moves: List[MoveRecord], current_index: int) -> None:
        """Load moves and cursor (deserialization), then apply max_history."""
        self.moves = list(moves)
        self.current_index = current_index
        self._trim()

    def get_history_info(self) -> Dict[str, Any]:
        """Get information about current history state."""
        return {
            "total_moves": len(self.moves),
            "current_index": self.current_index,
            "can_undo": self.can_undo(),
            "can_redo": self.can_redo(),
            "undo_description": self.get_undo_description(),
            "redo_description": self.get_redo_description(),
        }
