"""Reusable key-binding table primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .state import Effect


@dataclass(frozen=True)
class KeyBinding:
    """Mapping from one or more key tokens to a single action callback."""

    keys: tuple[str, ...]
    handler: Callable[[], Effect]


class KeyRegistry:
    """Small key-dispatch table; unbound keys dispatch to ``None``."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], Effect]] = {}

    def register_binding(self, binding: KeyBinding) -> KeyRegistry:
        """Register one binding, overwriting existing handlers for the same keys."""
        for key in binding.keys:
            self._handlers[key] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyBinding) -> KeyRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> Effect | None:
        """Invoke the handler bound to ``key`` and return its effect."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()
