"""
Domain model of the simulated coffee machine: deposits, recipes, states and
the actions an operator can pick from.
"""
from brewstate.domain.actions import (
    ACTION_LABELS,
    Action,
    BrewAction,
    InvalidActionError,
    MachineState,
    MaintenanceAction,
    labels_for,
    parse_action,
)
from brewstate.domain.deposits import Deposit, ResourceIntegrityError
from brewstate.domain.recipes import RECIPES, BrewRecipe, max_required_coffee, max_required_water

__all__ = [
    "ACTION_LABELS",
    "Action",
    "BrewAction",
    "BrewRecipe",
    "Deposit",
    "InvalidActionError",
    "MachineState",
    "MaintenanceAction",
    "RECIPES",
    "ResourceIntegrityError",
    "labels_for",
    "max_required_coffee",
    "max_required_water",
    "parse_action",
]
