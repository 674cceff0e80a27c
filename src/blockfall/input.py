"""Map player input onto engine commands."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Optional

from .engine import Command, Engine
from .game_state import GameState


LOGGER = logging.getLogger(__name__)


class InputEvent(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    PAUSE_TOGGLE = "pause_toggle"


EVENT_COMMANDS: Dict[InputEvent, Command] = {
    InputEvent.LEFT: Command.MOVE_LEFT,
    InputEvent.RIGHT: Command.MOVE_RIGHT,
    InputEvent.DOWN: Command.SOFT_DROP,
    InputEvent.ROTATE: Command.ROTATE,
    InputEvent.HARD_DROP: Command.HARD_DROP,
    InputEvent.PAUSE_TOGGLE: Command.TOGGLE_PAUSE,
}

# Browser ``KeyboardEvent.key`` names.
KEY_BINDINGS: Dict[str, InputEvent] = {
    "ArrowLeft": InputEvent.LEFT,
    "ArrowRight": InputEvent.RIGHT,
    "ArrowDown": InputEvent.DOWN,
    "ArrowUp": InputEvent.ROTATE,
    " ": InputEvent.HARD_DROP,
    "p": InputEvent.PAUSE_TOGGLE,
    "P": InputEvent.PAUSE_TOGGLE,
}


class InputDispatcher:
    """Forward every input event to ``engine`` as exactly one command.

    There is no debouncing: ten rapid ``LEFT`` events queue ten moves.
    """

    def __init__(self, engine: Engine, bindings: Optional[Dict[str, InputEvent]] = None) -> None:
        self.engine = engine
        self.bindings = dict(KEY_BINDINGS if bindings is None else bindings)

    def handle(self, event: InputEvent) -> GameState:
        return self.engine.submit(EVENT_COMMANDS[event])

    def handle_key(self, key: str) -> Optional[GameState]:
        """Dispatch the event bound to ``key``; unbound keys are ignored."""

        event = self.bindings.get(key)
        if event is None:
            LOGGER.debug("Unbound key %r", key)
            return None
        return self.handle(event)
