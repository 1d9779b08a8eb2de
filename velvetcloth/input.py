"""Keyboard and mouse state with per-frame press and release detection."""

from __future__ import annotations

import enum

import numpy as np

KEY_LAST = 348


class Key(enum.IntEnum):
    """Key codes used by the application."""

    SPACE = 32
    KEY_1 = 49
    KEY_2 = 50
    KEY_3 = 51
    KEY_4 = 52
    KEY_5 = 53
    KEY_6 = 54
    KEY_7 = 55
    KEY_8 = 56
    KEY_9 = 57
    A = 65
    D = 68
    E = 69
    H = 72
    K = 75
    L = 76
    O = 79  # noqa: E741
    P = 80
    Q = 81
    R = 82
    S = 83
    W = 87
    X = 88
    ESCAPE = 256


class MouseButton(enum.IntEnum):
    LEFT = 0
    RIGHT = 1
    MIDDLE = 2


def _check_code(code: int) -> int:
    code = int(code)
    if not 0 <= code <= KEY_LAST:
        raise ValueError(f"key or button code {code} out of range")
    return code


class Input:
    """Current device state plus the state seen at the previous frame.

    The host feeds device events through ``set_key``, ``set_mouse_button``
    and ``set_mouse_pos``; ``on_update`` is called once per frame.
    """

    def __init__(self) -> None:
        self._pressed_keys: set[int] = set()
        self._pressed_buttons: set[int] = set()
        self._cursor = (0.0, 0.0)
        self._key_once = [False] * (KEY_LAST + 1)
        self._key_now = [False] * (KEY_LAST + 1)

    def set_key(self, key: int, pressed: bool) -> None:
        key = _check_code(key)
        if pressed:
            self._pressed_keys.add(key)
        else:
            self._pressed_keys.discard(key)

    def set_mouse_button(self, button: int, pressed: bool) -> None:
        button = _check_code(button)
        if pressed:
            self._pressed_buttons.add(button)
        else:
            self._pressed_buttons.discard(button)

    def set_mouse_pos(self, x: float, y: float) -> None:
        self._cursor = (float(x), float(y))

    def on_update(self) -> None:
        self._key_once, self._key_now = self._key_now, self._key_once

    def get_key(self, key: int) -> bool:
        """True while the key is held down."""
        return _check_code(key) in self._pressed_keys

    def get_key_down(self, key: int) -> bool:
        """True during the frame the key starts being pressed."""
        key = _check_code(key)
        self._key_now[key] = self.get_key(key)
        return not self._key_once[key] and self._key_now[key]

    def get_key_up(self, key: int) -> bool:
        """True during the frame the key is released."""
        key = _check_code(key)
        self._key_now[key] = self.get_key(key)
        return self._key_once[key] and not self._key_now[key]

    def toggle_on_key_down(self, key: int, value: bool) -> bool:
        """Return ``value`` flipped if the key went down this frame."""
        return not value if self.get_key_down(key) else value

    def get_mouse(self, button: int) -> bool:
        return _check_code(button) in self._pressed_buttons

    def get_mouse_down(self, button: int) -> bool:
        button = _check_code(button)
        self._key_now[button] = self.get_mouse(button)
        return not self._key_once[button] and self._key_now[button]

    def get_mouse_up(self, button: int) -> bool:
        button = _check_code(button)
        self._key_now[button] = self.get_mouse(button)
        return self._key_once[button] and not self._key_now[button]

    def mouse_pos(self) -> np.ndarray:
        return np.array(self._cursor)