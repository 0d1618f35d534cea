"""Selection state shared by the map, the scatterplots and the detail panel."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, FrozenSet, Iterable, List, Optional

logger = logging.getLogger(__name__)


class SelectionMode(str, Enum):
    INDIVIDUAL = "individual"
    CLUSTER = "cluster"


class SelectionKind(str, Enum):
    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


@dataclass(frozen=True)
class SelectionState:
    kind: SelectionKind = SelectionKind.NONE
    key: Optional[str] = None
    keys: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def none(cls) -> "SelectionState":
        return cls()

    @classmethod
    def single(cls, key: str) -> "SelectionState":
        return cls(SelectionKind.SINGLE, key=key)

    @classmethod
    def multiple(cls, keys: Iterable[str]) -> "SelectionState":
        return cls(SelectionKind.MULTIPLE, keys=frozenset(keys))

    def selected_keys(self) -> FrozenSet[str]:
        """Keys to emphasize, whatever the selection kind."""
        if self.kind is SelectionKind.SINGLE:
            return frozenset([self.key])
        return self.keys

    def contains(self, key: Optional[str]) -> bool:
        return bool(key) and key in self.selected_keys()


Subscriber = Callable[[SelectionState, "SelectionStore"], None]


class SelectionStore:
    """
    Single source of truth for the current selection and selection mode.

    Every setter notifies subscribers before returning, so views never
    observe a stale state once an interaction has been handled.
    """

    def __init__(self, mode: SelectionMode = SelectionMode.INDIVIDUAL):
        self._subscribers: List[Subscriber] = []
        self._initial_mode = SelectionMode(mode)
        self.mode = self._initial_mode
        self._state = SelectionState.none()

    @property
    def brush_enabled(self) -> bool:
        return self.mode is SelectionMode.CLUSTER

    def current(self) -> SelectionState:
        return self._state

    def subscribe(self, fn: Subscriber) -> Callable[[], None]:
        """Register ``fn``; returns a callable that unsubscribes it."""
        self._subscribers.append(fn)

        def unsubscribe():
            if fn in self._subscribers:
                self._subscribers.remove(fn)
        return unsubscribe

    def set_mode(self, mode) -> None:
        self.mode = SelectionMode(mode)
        logger.debug("Selection mode -> %s", self.mode.value)
        self._set(SelectionState.none())

    def select_single(self, key: Optional[str]) -> None:
        if not key:
            self.clear()
            return
        self._set(SelectionState.single(key))

    def select_multiple(self, keys: Iterable[str]) -> None:
        # Replaces, never merges; an empty set is no selection at all
        keys = frozenset(keys)
        self._set(SelectionState.multiple(keys) if keys else SelectionState.none())

    def clear(self) -> None:
        self._set(SelectionState.none())

    def reset(self) -> None:
        """Back to the initial mode with nothing selected."""
        self.mode = self._initial_mode
        self._set(SelectionState.none())

    def _set(self, state: SelectionState) -> None:
        self._state = state
        for fn in list(self._subscribers):
            fn(state, self)
