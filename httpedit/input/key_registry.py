"""Reusable key-combo registry primitives."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

ContextT = TypeVar("ContextT")


@dataclass(frozen=True)
class KeyComboBinding(Generic[ContextT]):
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[ContextT], bool | None]


class KeyComboRegistry(Generic[ContextT]):
    """Key-dispatch table whose actions receive the per-key context."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[ContextT], bool | None]] = {}

    def register_binding(self, binding: KeyComboBinding[ContextT]) -> KeyComboRegistry[ContextT]:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding[ContextT]) -> KeyComboRegistry[ContextT]:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str, context: ContextT) -> bool | None:
        """Invoke the bound handler for ``key``; ``None`` means unbound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler(context)
