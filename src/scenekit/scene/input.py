"""Logical input actions and per-frame input snapshots."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Protocol, runtime_checkable


class Action(Enum):
    """Logical camera actions, decoupled from the keys that trigger them."""

    MOVE_FORWARD = "MoveForward"
    MOVE_BACKWARD = "MoveBackward"
    MOVE_LEFT = "MoveLeft"
    MOVE_RIGHT = "MoveRight"
    MOVE_UP = "MoveUp"
    MOVE_DOWN = "MoveDown"
    ROTATE_LEFT = "RotateLeft"
    ROTATE_RIGHT = "RotateRight"
    ROTATE_UP = "RotateUp"
    ROTATE_DOWN = "RotateDown"


# Key names follow the browser KeyboardEvent.key values
DEFAULT_KEY_BINDINGS: dict[Action, str] = {
    Action.MOVE_LEFT: "a",
    Action.MOVE_RIGHT: "d",
    Action.MOVE_UP: " ",
    Action.MOVE_DOWN: "Control",
    Action.MOVE_FORWARD: "w",
    Action.MOVE_BACKWARD: "s",
    Action.ROTATE_LEFT: "ArrowLeft",
    Action.ROTATE_RIGHT: "ArrowRight",
    Action.ROTATE_UP: "ArrowUp",
    Action.ROTATE_DOWN: "ArrowDown",
}


@runtime_checkable
class InputSource(Protocol):
    """Anything that can answer whether a logical action is active this tick."""

    def is_action_active(self, action: Action) -> bool:
        ...


@dataclass(frozen=True)
class InputSnapshot:
    """Read-only set of actions that are active for one tick.

    Built once per frame by whatever captures keyboard or gamepad state and
    handed to Scene.update().
    """

    active: frozenset[Action] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "active", frozenset(self.active))

    def is_action_active(self, action: Action) -> bool:
        return action in self.active

    @classmethod
    def empty(cls) -> InputSnapshot:
        """Snapshot with every action inactive."""
        return cls()

    @classmethod
    def of(cls, *actions: Action) -> InputSnapshot:
        return cls(frozenset(actions))

    @classmethod
    def from_keys(
        cls,
        pressed_keys: Iterable[str],
        bindings: Mapping[Action, str] | None = None,
    ) -> InputSnapshot:
        """Map a set of pressed physical keys to active actions.

        Args:
            pressed_keys: Key names currently held down
            bindings: Action to key mapping. Defaults to DEFAULT_KEY_BINDINGS.

        Returns:
            Snapshot with every bound action whose key is pressed
        """
        if bindings is None:
            bindings = DEFAULT_KEY_BINDINGS
        pressed = set(pressed_keys)
        return cls(frozenset(action for action, key in bindings.items() if key in pressed))


def parse_action(name: str) -> Action:
    """Look up an action by its logical name ("MoveForward") or enum name."""
    try:
        return Action(name)
    except ValueError:
        pass
    try:
        return Action[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown action: {name}") from None
