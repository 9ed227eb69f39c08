"""Reusable key-binding tables for the mode-specific key handlers."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

H = TypeVar("H", bound=Callable)

ENTER = "ENTER"
ESC = "ESC"
BACKSPACE = "BACKSPACE"
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
CTRL_C = "CTRL_C"


def is_printable_key(key: str) -> bool:
    """Return whether ``key`` is a single printable character token."""
    return len(key) == 1 and key.isprintable()


@dataclass(frozen=True)
class KeyBinding(Generic[H]):
    """Mapping from one or more key tokens to a single handler."""

    combos: tuple[str, ...]
    handler: H


class KeyTable(Generic[H]):
    """Small key-dispatch table with an optional fallback handler."""

    def __init__(self, fallback: H | None = None) -> None:
        self._handlers: dict[str, H] = {}
        self._fallback = fallback

    def register_binding(self, binding: KeyBinding[H]) -> KeyTable[H]:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyBinding[H]) -> KeyTable[H]:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def lookup(self, key: str) -> H | None:
        """Return the handler bound to ``key``, else the fallback (may be ``None``)."""
        return self._handlers.get(key, self._fallback)


__all__ = [
    "ENTER",
    "ESC",
    "BACKSPACE",
    "UP",
    "DOWN",
    "LEFT",
    "RIGHT",
    "CTRL_C",
    "is_printable_key",
    "KeyBinding",
    "KeyTable",
]
