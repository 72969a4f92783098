"""
GameSession - single entry point for playing one Tango puzzle.

A session owns one GridStore and the RuleValidator bound to it, the move
history, and the timer. It generates the puzzle from a seed, applies player
moves, detects completion, and suggests hints.

Lifecycle:
    READY --start--> PLAYING --pause--> PAUSED --start--> PLAYING
    PLAYING --(grid full and valid)--> COMPLETED
    any --reset--> READY (same puzzle)      any --new_game--> READY (new puzzle)
"""
import logging
from typing import Any, Dict, Optional

from tango_core.generator import (
    DEFAULT_DIFFICULTY,
    generate_puzzle,
    generate_seed,
    is_known_difficulty,
    normalize_seed,
)
from tango_core.grid_store import GridStore
from tango_core.history import MoveHistory
from tango_core.results import (
    GAME_NOT_ACTIVE,
    HINT_REASON,
    INVALID_MOVE,
    NO_HINTS,
    NO_MOVES_TO_REDO,
    NO_MOVES_TO_UNDO,
    CompletionSummary,
    HintResult,
    HistoryResult,
    MoveResult,
)
from tango_core.rule_validator import RuleValidator
from tango_core.seeded_random import SeededRandom
from tango_core.timer import Clock, GameTimer, format_time, wall_clock_ms
from tango_core.types import (
    Cell,
    CellValue,
    ConstraintKind,
    GameState,
    InitialPuzzleState,
    MoveRecord,
    coerce_value,
)

logger = logging.getLogger(__name__)


class GameSession:
    """
    Puzzle session controller.

    Attributes:
        grid: Current GridStore (replaced by new_game and deserialize)
        validator: RuleValidator bound to grid
        game_state: Current lifecycle state
        difficulty: Difficulty name used for generation
        seed: Seed the puzzle was generated from
        timer: Session stopwatch
        history: Undo/redo move history
        initial_state: Snapshot restored by reset_game
        completion_summary: Set when the puzzle is completed
    """

    def __init__(
        self,
        size: int = 6,
        difficulty: str = DEFAULT_DIFFICULTY,
        seed: Optional[str] = None,
        clock: Optional[Clock] = None,
        strict_difficulty: bool = False,
        max_history: Optional[int] = None,
    ):
        self.strict_difficulty = strict_difficulty
        self._check_difficulty(difficulty)

        self.clock: Clock = clock or wall_clock_ms
        self.grid: GridStore = GridStore(size)
        self.validator: RuleValidator = RuleValidator(self.grid)
        self.game_state: GameState = GameState.READY
        self.difficulty: str = difficulty
        self.seed: str = normalize_seed(seed) or generate_seed()
        self.timer: GameTimer = GameTimer(self.clock)
        self.history: MoveHistory = MoveHistory(max_history)
        self.initial_state: Optional[InitialPuzzleState] = None
        self.completion_summary: Optional[CompletionSummary] = None

        self._initialize_puzzle()

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], seed: Optional[str] = None,
                      clock: Optional[Clock] = None) -> 'GameSession':
        """Build a session from a settings dict (see tango_core.settings)."""
        return cls(
            size=int(settings["size"]),
            difficulty=settings["difficulty"],
            seed=seed,
            clock=clock,
            strict_difficulty=bool(settings.get("strict_difficulty", False)),
            max_history=settings.get("max_history"),
        )

    @property
    def size(self) -> int:
        return self.grid.size

    def _check_difficulty(self, difficulty: str) -> None:
        if self.strict_difficulty and not is_known_difficulty(difficulty):
            raise ValueError(f"Unknown difficulty: {difficulty!r}")

    def _initialize_puzzle(self) -> None:
        rng = SeededRandom(self.seed)
        self.initial_state = generate_puzzle(self.grid, rng, self.difficulty)

    # =============================================================================
    # LIFECYCLE
    # =============================================================================

    def start_game(self) -> bool:
        """Start from READY or resume from PAUSED."""
        if self.game_state not in (GameState.READY, GameState.PAUSED):
            return False
        self.game_state = GameState.PLAYING
        self.timer.start()
        logger.debug(f"Game {self.seed} playing")
        return True

    def pause_game(self) -> bool:
        if self.game_state is not GameState.PLAYING:
            return False
        self.game_state = GameState.PAUSED
        self.timer.pause()
        logger.debug(f"Game {self.seed} paused at {self.format_time()}")
        return True

    def reset_game(self) -> None:
        """Back to the generated puzzle: no moves, timer at zero."""
        self.game_state = GameState.READY
        self.timer.reset()
        self.history.clear()
        self.completion_summary = None
        self.grid.restore(self.initial_state)
        logger.info(f"Game {self.seed} reset")

    def new_game(self, size: Optional[int] = None, difficulty: Optional[str] = None,
                 seed: Optional[str] = None) -> None:
        """
        Discard the current puzzle and generate a new one.

        Args:
            size: New grid size (keeps the current one if None)
            difficulty: New difficulty (keeps the current one if None)
            seed: Custom seed; blank or None picks a random seed
        """
        difficulty = difficulty or self.difficulty
        self._check_difficulty(difficulty)

        self.grid = GridStore(size or self.size)
        self.validator = RuleValidator(self.grid)
        self.difficulty = difficulty
        self.seed = normalize_seed(seed) or generate_seed()

        self.game_state = GameState.READY
        self.timer.reset()
        self.history.clear()
        self.completion_summary = None
        self._initialize_puzzle()
        logger.info(f"New {self.size}x{self.size} {self.difficulty} game, seed {self.seed}")

    # =============================================================================
    # MOVES
    # =============================================================================

    def make_move(self, row: int, col: int, value: Any) -> MoveResult:
        """
        Place a value (or CellValue.EMPTY / None to clear) in a cell.

        A move made while READY starts the game.
        """
        if self.game_state not in (GameState.READY, GameState.PLAYING):
            return MoveResult.failure(GAME_NOT_ACTIVE)

        if self.game_state is GameState.READY:
            self.start_game()

        new_value = coerce_value(value)
        previous_value = self.grid.get_value(row, col)
        if new_value is None or not self.grid.set_cell(row, col, new_value):
            logger.debug(f"Rejected move {value!r} at ({row}, {col})")
            return MoveResult.failure(INVALID_MOVE)

        self.history.record(MoveRecord(row, col, previous_value, new_value, self.clock()))
        logger.debug(f"Move ({row}, {col}) {previous_value.value} -> {new_value.value}")

        if self.is_game_completed():
            self.complete_game()

        report = self.validator.validate_all()
        return MoveResult(
            success=True,
            game_state=self.game_state,
            is_valid=report.is_valid,
            errors=self.validator.get_error_cells(),
            validation=report,
        )

    # =============================================================================
    # UNDO/REDO OPERATIONS
    # =============================================================================

    def undo(self) -> HistoryResult:
        if self.game_state is GameState.COMPLETED:
            return HistoryResult(success=False, reason=GAME_NOT_ACTIVE)

        move = self.history.undo(self.grid)
        if move is None:
            return HistoryResult(success=False, reason=NO_MOVES_TO_UNDO)

        logger.debug(f"Undo: {move.get_description()}")
        return self._history_result(move)

    def redo(self) -> HistoryResult:
        if self.game_state is GameState.COMPLETED:
            return HistoryResult(success=False, reason=GAME_NOT_ACTIVE)

        move = self.history.redo(self.grid)
        if move is None:
            return HistoryResult(success=False, reason=NO_MOVES_TO_REDO)

        logger.debug(f"Redo: {move.get_description()}")
        return self._history_result(move)

    def _history_result(self, move: MoveRecord) -> HistoryResult:
        return HistoryResult(
            success=True,
            move=move,
            can_undo=self.history.can_undo(),
            can_redo=self.history.can_redo(),
        )

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    # =============================================================================
    # TIMER
    # =============================================================================

    def get_elapsed_time(self) -> int:
        return self.timer.elapsed()

    def format_time(self, milliseconds: Optional[int] = None) -> str:
        return self.timer.format(milliseconds)

    # =============================================================================
    # COMPLETION
    # =============================================================================

    def is_game_completed(self) -> bool:
        """True only when every cell is filled and no rule is broken."""
        if not self.grid.is_full():
            return False
        return self.validator.is_valid()

    def complete_game(self) -> CompletionSummary:
        self.game_state = GameState.COMPLETED
        self.timer.pause()
        elapsed = self.get_elapsed_time()
        self.completion_summary = CompletionSummary(
            time=elapsed,
            formatted_time=format_time(elapsed),
            move_count=len(self.history),
            difficulty=self.difficulty,
            size=self.size,
            seed=self.seed,
        )
        logger.info(
            f"Game {self.seed} completed in {self.completion_summary.formatted_time} "
            f"({self.completion_summary.move_count} moves)"
        )
        return self.completion_summary

    # =============================================================================
    # HINTS
    # =============================================================================

    def get_hint(self) -> HintResult:
        """
        Suggest a value for the first empty cell (row-major) that shares a
        constraint with a filled cell.
        """
        if self.game_state is not GameState.PLAYING:
            return HintResult(success=False, reason=GAME_NOT_ACTIVE)

        for row, col in self.grid.positions():
            cell = self.grid.get_cell(row, col)
            if not cell.is_empty or cell.immutable:
                continue
            suggestion = self._calculate_hint(row, col)
            if suggestion is not None:
                return HintResult(
                    success=True,
                    reason=HINT_REASON,
                    row=row,
                    col=col,
                    suggested_value=suggestion,
                )

        return HintResult(success=False, reason=NO_HINTS)

    def _calculate_hint(self, row: int, col: int) -> Optional[CellValue]:
        for constraint in self.grid.constraints_for(row, col):
            other_value = self.grid.get_value(*constraint.other_end(row, col))
            if other_value is None or not other_value.is_filled:
                continue
            if constraint.kind is ConstraintKind.EQUAL:
                return other_value
            return other_value.opposite()
        return None

    # =============================================================================
    # STATISTICS
    # =============================================================================

    def get_statistics(self) -> Dict[str, Any]:
        stats: Dict[str, Any] = self.grid.get_statistics()
        report = self.validator.validate_all()
        stats.update({
            "game_state": self.game_state.value,
            "is_valid": report.is_valid,
            "errors": len(report.violations()),
            "elapsed_time": self.get_elapsed_time(),
        })

        history_info = self.history.get_history_info()
        stats.update({
            "can_undo": history_info["can_undo"],
            "can_redo": history_info["can_redo"],
            "total_moves": history_info["total_moves"],
        })
        return stats

    # =============================================================================
    # JSON IMPORT/EXPORT
    # =============================================================================

    def serialize(self) -> Dict[str, Any]:
        """Full session state as a JSON-safe dict."""
        data = self.grid.serialize()
        data.update({
            "gameState": self.game_state.value,
            "difficulty": self.difficulty,
            "seed": self.seed,
            "timer": self.timer.to_dict(),
            "moveHistory": [move.to_dict() for move in self.history.moves],
            "currentMoveIndex": self.history.current_index,
        })
        return data

    def deserialize(self, data: Dict[str, Any]) -> None:
        """
        Replace this session's state with serialize() output.

        The grid store and validator are rebuilt. The reset snapshot is
        derived from the loaded grid: pinned cells keep their values,
        everything else starts empty, constraints are kept.
        """
        self.grid = GridStore.deserialize(data)
        self.validator = RuleValidator(self.grid)
        self.game_state = GameState(data["gameState"])
        self.difficulty = data["difficulty"]
        self.seed = data["seed"]
        self.timer.load_dict(data["timer"])
        self.history.restore(
            [MoveRecord.from_dict(m) for m in data["moveHistory"]],
            int(data["currentMoveIndex"]),
        )
        self.completion_summary = None
        self.initial_state = self._initial_state_from_grid()
        logger.debug(f"Loaded game {self.seed} in state {self.game_state.value}")

    def _initial_state_from_grid(self) -> InitialPuzzleState:
        return InitialPuzzleState(
            cells=tuple(
                tuple(cell if cell.immutable else Cell() for cell in row)
                for row in self.grid.grid
            ),
            constraints=tuple(self.grid.get_constraints()),
        )
