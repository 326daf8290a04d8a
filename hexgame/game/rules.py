"""
rules.py - Game control and Gymnasium environment for Hex

This module provides:
1. HexGame, which runs the turn loop between two HexPlayer objects
2. HexEnv, a gymnasium-compatible environment over the same board and
   win detection, for agents that act one action at a time
"""

import threading
from dataclasses import dataclass
from numbers import Integral
from typing import Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from hexgame.debug import debug
from hexgame.exceptions import (AlreadyClaimedError, AlreadyStartedError,
                                GameNotRunningError, InvalidCoordinateError,
                                InvalidDimensionError, MoveNotCompletedError,
                                NotYetCompletedError, TurnInProgressError)
from hexgame.game.board import Board, BoardView
from hexgame.game.move import Move
from hexgame.game.player import HexPlayer
from hexgame.game.watcher import BoardWatcher
from hexgame.utils import (DEFAULT_BOARD_DIMENSION, MAXIMUM_BOARD_DIMENSION,
                           MINIMUM_BOARD_DIMENSION, GameState, Orientation,
                           Side, is_valid_dimension, render_board_ascii)

# Move errors the turn loop recovers from by asking the same player again
RECOVERABLE_MOVE_ERRORS = (AlreadyClaimedError, InvalidCoordinateError,
                           MoveNotCompletedError)


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable picture of the game after a fully applied turn."""
    grid: np.ndarray
    state: GameState
    winner: Optional[Side]
    current_side: Side
    move_count: int


class HexGame:
    """
    Plays a game of Hex between two players.

    The thread that calls start() or step() is the only writer. Any other
    thread may poll is_game_over(), get_snapshot(), get_state() or
    render(); those read a snapshot that is replaced atomically after each
    completed turn, so observers never see a half-applied move.
    """

    def __init__(self, player1: HexPlayer, player2: HexPlayer,
                 width: int = DEFAULT_BOARD_DIMENSION,
                 height: int = DEFAULT_BOARD_DIMENSION,
                 max_retries: Optional[int] = None):
        """
        Set up a game. Player 1 moves first and connects top to bottom,
        player 2 connects left to right.

        Args:
            player1: Player moving first
            player2: Player moving second
            width: Board width
            height: Board height, must equal width
            max_retries: How many unusable moves in a row a player may
                make before the turn fails (None for no limit)

        Raises:
            InvalidDimensionError: if width != height or out of range
            ValueError: if both players claim as the same side
        """
        if width != height or not is_valid_dimension(width):
            raise InvalidDimensionError(width, height, MINIMUM_BOARD_DIMENSION,
                                        MAXIMUM_BOARD_DIMENSION)
        if player1.claims_as() == player2.claims_as():
            raise ValueError(f"both players claim as {player1.claims_as().name}")

        debug.debug(f"Initializing {width}x{height} HexGame", "game")
        self.board = Board(width)
        self.watcher = BoardWatcher(self.board, {
            player1.claims_as(): Orientation.TOP_BOTTOM,
            player2.claims_as(): Orientation.LEFT_RIGHT,
        })
        self.player1 = player1
        self.player2 = player2
        self.max_retries = max_retries

        self.history: List[Move] = []
        self._view = BoardView(self.board)
        self._state = GameState.NOT_STARTED
        self._current = player1
        self._winner: Optional[HexPlayer] = None

        # Set when the background turn loop stops on an exception
        self.error: Optional[BaseException] = None

        self._lock = threading.Lock()
        self._turn_lock = threading.Lock()
        self._worker: Optional[threading.Thread] = None
        self._snapshot: BoardSnapshot = None
        self._publish()

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def started(self) -> bool:
        return self._state != GameState.NOT_STARTED

    @property
    def ended(self) -> bool:
        return self._state == GameState.ENDED

    def _publish(self) -> None:
        grid = self.board.get_state()
        grid.flags.writeable = False
        snapshot = BoardSnapshot(
            grid=grid,
            state=self._state,
            winner=self._winner.claims_as() if self._winner else None,
            current_side=self._current.claims_as(),
            move_count=len(self.history),
        )
        with self._lock:
            self._snapshot = snapshot

    def start(self, blocking: bool = True) -> None:
        """
        Start the game with player 1 to move.

        Args:
            blocking: Run the turn loop until the game ends. With False the
                game only enters RUNNING and turns are driven with step().

        Raises:
            AlreadyStartedError: if the game was started before and has
                not been reset
        """
        with self._lock:
            if self._state != GameState.NOT_STARTED:
                raise AlreadyStartedError(
                    "The HexGame cannot be started because it has already been "
                    "started in the past. Try to reset the game first")
            self._state = GameState.RUNNING
        self._current = self.player1
        self._publish()
        debug.info(f"Game started: {self.player1.name} vs {self.player2.name} "
                   f"on {self.size}x{self.size}", "game")

        if blocking:
            self._run_loop()

    def start_in_background(self) -> threading.Thread:
        """
        Start the game and run the turn loop on a daemon thread.

        While that thread is alive it is the only one allowed to play
        turns. If the loop stops on an exception, the exception is kept in
        `error` and re-raised by wait(); the game stays RUNNING and the
        host may carry on with step().
        """
        self.start(blocking=False)
        self.error = None
        self._worker = threading.Thread(target=self._run_in_background,
                                        name="hexgame-turns", daemon=True)
        self._worker.start()
        return self._worker

    def _run_in_background(self) -> None:
        try:
            self._run_loop()
        except BaseException as e:
            self.error = e
            debug.error(f"Turn loop stopped: {e!r}", "game")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the background turn loop to finish.

        Returns:
            True if the loop has finished, False if the timeout expired

        Raises:
            The exception that stopped the loop, if any
        """
        if self._worker is not None:
            self._worker.join(timeout)
            if self._worker.is_alive():
                return False
        if self.error is not None:
            raise self.error
        return True

    def _run_loop(self) -> None:
        while self._state == GameState.RUNNING:
            self.step()

    def _apply(self, move, side: Side) -> None:
        """Validate the shape of a move and claim it on the board."""
        if not isinstance(move, Move):
            raise MoveNotCompletedError(f"expected a Move, got {move!r}")
        if move.side != side:
            raise MoveNotCompletedError(
                f"move for {move.side!r} handed in by a {side.name} player")
        for value in (move.row, move.column):
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise MoveNotCompletedError(f"move coordinates must be integers: {move!r}")

        self.board.claim(int(move.row), int(move.column), side)

    def step(self) -> Move:
        """
        Play one turn: ask the current player until one of its moves is
        applied, then check for a win and pass the turn.

        Returns:
            The move that was applied

        Raises:
            GameNotRunningError: if the game is not running
            TurnInProgressError: if another caller is playing a turn, or
                the background loop owns the game
            MoveNotCompletedError: if the player exceeds max_retries
        """
        worker = self._worker
        if (worker is not None and worker.is_alive()
                and threading.current_thread() is not worker):
            raise TurnInProgressError("turns are being played by the background loop")

        if not self._turn_lock.acquire(blocking=False):
            raise TurnInProgressError("a turn is already in progress")
        try:
            return self._play_turn()
        finally:
            self._turn_lock.release()

    def _play_turn(self) -> Move:
        if self._state != GameState.RUNNING:
            raise GameNotRunningError(f"cannot play a turn while {self._state.name}")

        player = self._current
        side = player.claims_as()
        failures = 0

        while True:
            try:
                move = player.request_move(self._view)
                self._apply(move, side)
                break
            except RECOVERABLE_MOVE_ERRORS as e:
                failures += 1
                debug.warning(f"{player.name} move rejected: {e}", "game")
                if self.max_retries is not None and failures > self.max_retries:
                    raise MoveNotCompletedError(
                        f"{player.name} produced no legal move in {failures} attempts") from e

        self.history.append(move)
        debug.debug(f"{player.name} claimed ({move.row}, {move.column})", "game")

        debug.start_timer("win_check")
        won = self.watcher.has_won(side)
        debug.end_timer("win_check", "game")

        if won:
            self._winner = player
            self._state = GameState.ENDED
            debug.info(f"{player.name} ({side.name}) wins after {len(self.history)} moves", "game")
        else:
            self._current = self.player2 if player is self.player1 else self.player1

        self._publish()
        return move

    def reset(self) -> None:
        """
        Clear the board so the same players can play again.

        Raises:
            NotYetCompletedError: if the game has not ended
        """
        with self._lock:
            if self._state != GameState.ENDED:
                raise NotYetCompletedError(
                    "The HexGame cannot be reset because it has not yet been completed")
            self._state = GameState.NOT_STARTED

        debug.debug("Resetting game", "game")
        self.board.reset_tiles()
        self._winner = None
        self._current = self.player1
        self.history = []
        self.error = None
        self._worker = None
        self._publish()

    def get_snapshot(self) -> BoardSnapshot:
        with self._lock:
            return self._snapshot

    def is_game_over(self) -> bool:
        return self.get_snapshot().state == GameState.ENDED

    def get_state(self) -> np.ndarray:
        """Get a writable copy of the last published board."""
        return self.get_snapshot().grid.copy()

    def get_winner(self) -> Optional[Side]:
        return self.get_snapshot().winner

    def get_winning_player(self) -> Optional[HexPlayer]:
        return self._winner

    def get_current_side(self) -> Side:
        return self.get_snapshot().current_side

    def get_current_player(self) -> HexPlayer:
        return self._current

    def get_winning_path(self) -> List[Tuple[int, int]]:
        if self._winner is None:
            return []
        return self.watcher.winning_path(self._winner.claims_as())

    def render(self) -> str:
        return render_board_ascii(self.get_snapshot().grid)


class HexEnv(gym.Env):
    """
    Hex environment following the Gymnasium interface.

    An action is a row-major cell index. Both sides act through the same
    env, alternating, starting with Side.ONE (top to bottom).
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, size: int = DEFAULT_BOARD_DIMENSION, render_mode: Optional[str] = None):
        """
        Initialize the Hex environment.

        Args:
            size: Board dimension (9-19)
            render_mode: Mode for rendering the environment
        """
        debug.debug("Initializing HexEnv", "env")

        self.board = Board(size)
        self.watcher = BoardWatcher(self.board)
        self.size = size
        self.render_mode = render_mode

        self.action_space = spaces.Discrete(size * size)
        self.observation_space = spaces.Box(low=0, high=2, shape=(size, size), dtype=np.int8)

        self.current_side = Side.ONE
        self.winner: Optional[Side] = None
        self.last_move: Optional[Move] = None

        self.reward_win = 1.0
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # small push towards shorter games

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to an empty board.

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.board.reset_tiles()
        self.current_side = Side.ONE
        self.winner = None
        self.last_move = None

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def is_valid_action(self, action: int) -> bool:
        if self.winner is not None:
            return False
        if not 0 <= action < self.size * self.size:
            return False
        return self.board.is_empty(action // self.size, action % self.size)

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Claim the cell at the action index for the side to move.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        debug.debug(f"Environment step with action {action}", "env")

        if not self.is_valid_action(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        move = Move.from_index(action, self.size, self.current_side)
        self.board.claim(move.row, move.column, move.side)
        self.last_move = move

        reward = self.reward_step
        terminated = False
        if self.watcher.has_won(move.side):
            self.winner = move.side
            reward = self.reward_win
            terminated = True
            debug.info(f"Game over: {move.side.name} wins", "env")
        else:
            self.current_side = self.current_side.other()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        if self.render_mode is None:
            return None

        if self.render_mode == "ascii":
            return self.board.render()

        print(self.board.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.board.get_state()

    def _get_info(self) -> Dict:
        valid_moves = [] if self.winner is not None else [
            row * self.size + col for row, col in self.board.get_empty_cells()]

        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.current_side.value,
            'winner': self.winner.name if self.winner else None,
            'moves_made': self.board.claimed_count,
            'winning_path': self.watcher.winning_path(self.winner) if self.winner else [],
            'last_move': (self.last_move.row, self.last_move.column) if self.last_move else None,
        }
