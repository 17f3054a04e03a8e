from __future__ import annotations

import logging
from typing import Callable, Dict, Hashable, Mapping, Optional, Set

logger = logging.getLogger(__name__)

# chromatic rows like a tracker keyboard: Z row is C3, A row C4, Q row C5
KEY_TO_CELL: Dict[str, int] = {
    "z": 0, "x": 1, "c": 2, "v": 3, "b": 4, "n": 5, "m": 6, ",": 7, ".": 8, "/": 9, "\\": 10, "`": 11,
    "a": 12, "s": 13, "d": 14, "f": 15, "g": 16, "h": 17, "j": 18, "k": 19, "l": 20, ";": 21, "'": 22, "1": 23,
    "q": 24, "w": 25, "e": 26, "r": 27, "t": 28, "y": 29, "u": 30, "i": 31, "o": 32, "p": 33, "[": 34, "]": 35,
}

# US layout: the same physical key reports these while Shift is down
SHIFTED_KEYS: Dict[str, str] = {
    "<": ",", ">": ".", "?": "/", "|": "\\", "~": "`",
    ":": ";", '"': "'", "!": "1", "{": "[", "}": "]",
}


class GestureTracker:
    """Turns raw pointer, touch and key events into cell triggers.

    A drag fires once per cell it enters, never twice in a row for the same
    cell. A held key fires once until it is released.
    """

    def __init__(self, on_trigger: Callable[[int], None], keymap: Mapping[str, int] = KEY_TO_CELL):
        self.on_trigger = on_trigger
        self.keymap = keymap
        self.pointer_down = False
        self.last_cell = -1
        self._held: Set[Hashable] = set()

    def _fire(self, cell: int) -> None:
        self.last_cell = cell
        self.on_trigger(cell)

    def press(self, cell: Optional[int]) -> None:
        self.pointer_down = True
        if cell is not None:
            self._fire(cell)

    def move(self, cell: Optional[int]) -> None:
        if not self.pointer_down or cell is None or cell == self.last_cell:
            return
        self._fire(cell)

    def release(self) -> None:
        self.pointer_down = False
        self.last_cell = -1

    def key_down(self, key: str, auto_repeat: bool = False, code: Optional[int] = None) -> bool:
        """Fire the cell mapped to ``key`` unless that key is already held.

        ``code`` identifies the physical key (e.g. a Qt key code or scan
        code); when given, it is what marks the key as held, so a release
        reporting different text still clears it.
        """
        if auto_repeat or not key:
            return False
        key = self._normalize(key)
        cell = self.keymap.get(key)
        held = code if code else key
        if cell is None or held in self._held:
            return False
        self._held.add(held)
        logger.debug("Key %r -> cell %d", key, cell)
        self._fire(cell)
        return True

    def key_up(self, key: str, code: Optional[int] = None) -> None:
        if code:
            self._held.discard(code)
        elif key:
            self._held.discard(self._normalize(key))

    def reset(self) -> None:
        """Forget every held key and end any drag, e.g. when focus is lost."""
        self._held.clear()
        self.release()

    @staticmethod
    def _normalize(key: str) -> str:
        return SHIFTED_KEYS.get(key, key.lower())
