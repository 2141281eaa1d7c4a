"""Tooltip interaction state."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class InteractionState:
    """Per chart instance tooltip lock state."""

    locked: bool = False
    locked_index: int | None = None

    @classmethod
    def unlocked(cls) -> "InteractionState":
        return cls()

    @classmethod
    def locked_at(cls, index: int) -> "InteractionState":
        return cls(locked=True, locked_index=index)
