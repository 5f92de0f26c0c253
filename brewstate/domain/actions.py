"""
Machine states, operator actions and the label tables that connect them.

Actions are enum variants; the text shown to (and typed by) an operator is
kept in an explicit table instead of being derived from member names.
"""
from __future__ import annotations

from enum import Enum
from typing import Union


class MachineState(str, Enum):
    """Derived readiness of the machine."""
    READY = "Ready"
    ACTION_REQUIRED = "ActionRequired"


class BrewAction(Enum):
    ESPRESSO = "espresso"
    AMERICAN = "american"
    HOT_WATER = "hot_water"


class MaintenanceAction(Enum):
    FILL_WATER = "fill_water"
    FILL_COFFEE = "fill_coffee"
    EMPTY_DUMP = "empty_dump"


Action = Union[BrewAction, MaintenanceAction]


class InvalidActionError(ValueError):
    """Raised when a label is not a valid action for the current state."""

    def __init__(self, label: str, state: MachineState, valid: list[str]) -> None:
        self.label = label
        self.state = state
        self.valid = valid
        super().__init__(
            f"'{label}' is not a valid action while {state.value}. Valid: {valid}"
        )


ACTION_LABELS: dict[Action, str] = {
    BrewAction.ESPRESSO: "Espresso",
    BrewAction.AMERICAN: "American",
    BrewAction.HOT_WATER: "HotWater",
    MaintenanceAction.FILL_WATER: "FillWater",
    MaintenanceAction.FILL_COFFEE: "FillCoffee",
    MaintenanceAction.EMPTY_DUMP: "EmptyDump",
}

# Actions offered in each state, in menu order.
ACTIONS_BY_STATE: dict[MachineState, tuple[Action, ...]] = {
    MachineState.READY: (
        BrewAction.ESPRESSO,
        BrewAction.AMERICAN,
        BrewAction.HOT_WATER,
    ),
    MachineState.ACTION_REQUIRED: (
        MaintenanceAction.FILL_WATER,
        MaintenanceAction.FILL_COFFEE,
        MaintenanceAction.EMPTY_DUMP,
    ),
}


def label_for(action: Action) -> str:
    return ACTION_LABELS[action]


def labels_for(state: MachineState) -> list[str]:
    """Return the menu labels valid in ``state``, in fixed order."""
    return [ACTION_LABELS[a] for a in ACTIONS_BY_STATE[state]]


def parse_action(label: str, state: MachineState) -> Action:
    """
    Resolve an operator label against the actions valid in ``state``.

    Matching ignores surrounding whitespace and letter case.

    Args:
        label: The label to resolve (e.g. ``"Espresso"``).
        state: The state the machine is currently in.

    Returns:
        The matching action variant.

    Raises:
        InvalidActionError: If the label names no action valid in ``state``.
    """
    wanted = str(label).strip().lower()
    for action in ACTIONS_BY_STATE[state]:
        if ACTION_LABELS[action].lower() == wanted:
            return action
    raise InvalidActionError(str(label), state, labels_for(state))
