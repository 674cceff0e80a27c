"""Falling-block puzzle engine with a timer-driven state machine."""

from .board import Board, clear_full_rows, lock
from .config import EngineConfig
from .engine import Command, Engine
from .game_state import GameState, Snapshot, Status
from .input import InputDispatcher, InputEvent
from .scheduler import AsyncioTimer, ManualTimer, TickScheduler
from .tetromino import Tetromino, TetrominoType, rotate_clockwise, spawn
from .utils import drop_distance, is_valid_placement, render_grid

__all__ = [
    "Board",
    "Tetromino",
    "TetrominoType",
    "GameState",
    "Snapshot",
    "Status",
    "Engine",
    "EngineConfig",
    "Command",
    "InputDispatcher",
    "InputEvent",
    "TickScheduler",
    "ManualTimer",
    "AsyncioTimer",
    "clear_full_rows",
    "drop_distance",
    "is_valid_placement",
    "lock",
    "render_grid",
    "rotate_clockwise",
    "spawn",
]
