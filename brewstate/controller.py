"""
The coffee machine controller.

``MachineController`` owns the coffee, water and waste deposits together with
the fixed recipe table. It is the only thing allowed to change them: every
fill, empty or brew goes through it, and the machine state is recomputed from
the deposit loads after each one.
"""
from __future__ import annotations

import logging
from typing import Callable, Mapping, Optional

from brewstate.config import MachineSettings, get_settings
from brewstate.domain.actions import (
    Action,
    BrewAction,
    InvalidActionError,
    MachineState,
    MaintenanceAction,
    label_for,
    labels_for,
    parse_action,
)
from brewstate.domain.deposits import Deposit, ResourceIntegrityError
from brewstate.domain.recipes import RECIPES, BrewRecipe, max_required_coffee, max_required_water
from brewstate.logging import create_logger, ring_buffer
from brewstate.models import DepositStatus, MachineStatus

COFFEE_CAPACITY = 100
WATER_CAPACITY = 255
WASTE_CAPACITY = 50

LOGGER_NAME = "brewstate.machine"


class MachineController:
    """
    Single coffee machine with derived ``Ready`` / ``ActionRequired`` state.

    A fresh machine has empty deposits and therefore starts out requiring
    maintenance. The deposits are private; ``coffee``, ``water`` and
    ``waste`` return frozen snapshots of them.
    """

    def __init__(
        self,
        settings: Optional[MachineSettings] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.logger = logger or create_logger(LOGGER_NAME, self.settings.log_ring_size, self.settings.log_level)

        self._coffee = Deposit("Coffee", COFFEE_CAPACITY)
        self._water = Deposit("Water", WATER_CAPACITY)
        self._waste = Deposit("Waste", WASTE_CAPACITY)
        self._recipes: Mapping[BrewAction, BrewRecipe] = RECIPES

        self._state = MachineState.ACTION_REQUIRED
        self._operations: dict[Action, Callable[[], None]] = {
            BrewAction.ESPRESSO: lambda: self.brew(BrewAction.ESPRESSO),
            BrewAction.AMERICAN: lambda: self.brew(BrewAction.AMERICAN),
            BrewAction.HOT_WATER: lambda: self.brew(BrewAction.HOT_WATER),
            MaintenanceAction.FILL_WATER: self.fill_water,
            MaintenanceAction.FILL_COFFEE: self.fill_coffee,
            MaintenanceAction.EMPTY_DUMP: self.empty_waste,
        }
        self.derive_state()
        self.logger.info("machine_initialized", extra={"details": {"status": self.render_status()}})

    # ---- derived thresholds ----
    @property
    def recipes(self) -> Mapping[BrewAction, BrewRecipe]:
        return self._recipes

    @property
    def max_required_coffee(self) -> int:
        return max_required_coffee(self._recipes.values())

    @property
    def max_required_water(self) -> int:
        return max_required_water(self._recipes.values())

    def coffee_deposit_empty(self) -> bool:
        return self._coffee.current_load < self.max_required_coffee

    def water_deposit_empty(self) -> bool:
        return self._water.current_load < self.max_required_water

    def waste_dump_full(self) -> bool:
        # Keep room for the grounds of one more worst-case brew.
        return self._waste.current_load >= self._waste.max_load - self.max_required_coffee

    # ---- state ----
    @property
    def state(self) -> MachineState:
        return self._state

    def current_state(self) -> MachineState:
        return self._state

    def derive_state(self) -> MachineState:
        """Recompute the state from the deposit loads and return it."""
        if self.coffee_deposit_empty() or self.water_deposit_empty() or self.waste_dump_full():
            new_state = MachineState.ACTION_REQUIRED
        else:
            new_state = MachineState.READY
        if new_state is not self._state:
            self.logger.info(
                "state_changed",
                extra={"details": {"from": self._state.value, "to": new_state.value}},
            )
        self._state = new_state
        return new_state

    # ---- maintenance ----
    def fill_water(self) -> None:
        self._water.fill()
        self.logger.info("deposit_filled", extra={"details": {"deposit": self._water.name}})
        self.derive_state()

    def fill_coffee(self) -> None:
        self._coffee.fill()
        self.logger.info("deposit_filled", extra={"details": {"deposit": self._coffee.name}})
        self.derive_state()

    def empty_waste(self) -> None:
        self._waste.empty()
        self.logger.info("waste_emptied", extra={"details": {"deposit": self._waste.name}})
        self.derive_state()

    # ---- brewing ----
    def brew(self, action: BrewAction) -> None:
        """
        Brew one unit of the recipe registered for ``action``.

        All three deposits are checked before any of them is touched, so a
        refused brew leaves the machine exactly as it was.

        Raises:
            ResourceIntegrityError: If a deposit cannot supply or absorb the
                recipe's amounts.
        """
        recipe = self._recipes[action]
        if not (
            self._coffee.can_draw(recipe.coffee)
            and self._water.can_draw(recipe.water)
            and self._waste.can_receive(recipe.waste)
        ):
            self.logger.error(
                "brew_refused",
                extra={"details": {"action": label_for(action), "status": self.render_status()}},
            )
            raise ResourceIntegrityError(
                f"Cannot brew {label_for(action)}: "
                f"coffee {self._coffee.current_load}/{recipe.coffee}, "
                f"water {self._water.current_load}/{recipe.water}, "
                f"waste room {self._waste.room}/{recipe.waste}"
            )
        self._coffee.draw(recipe.coffee)
        self._water.draw(recipe.water)
        self._waste.receive(recipe.waste)
        self.logger.info(
            "brewed",
            extra={"details": {"action": label_for(action), "coffee": recipe.coffee, "water": recipe.water}},
        )
        self.derive_state()

    # ---- driver contract ----
    def available_actions(self, state: Optional[MachineState] = None) -> list[str]:
        """Return the action labels valid in ``state`` (default: current state)."""
        return labels_for(self._state if state is None else state)

    def submit(self, label: str) -> str:
        """
        Execute the action named by ``label`` and return the new status text.

        Raises:
            InvalidActionError: If ``label`` is not valid in the current state.
                Nothing is changed in that case.
        """
        try:
            action = parse_action(label, self._state)
        except InvalidActionError as exc:
            self.logger.warning(
                "action_rejected",
                extra={"details": {"label": exc.label, "state": exc.state.value}},
            )
            raise
        self.logger.info("action_submitted", extra={"details": {"action": label_for(action)}})
        self._operations[action]()
        return self.render_status()

    # ---- status ----
    @staticmethod
    def _snapshot(deposit: Deposit, warning: Optional[str]) -> DepositStatus:
        return DepositStatus(
            name=deposit.name,
            current_load=deposit.current_load,
            max_load=deposit.max_load,
            warning=warning,
        )

    @property
    def coffee(self) -> DepositStatus:
        return self._snapshot(self._coffee, "EMPTY" if self.coffee_deposit_empty() else None)

    @property
    def water(self) -> DepositStatus:
        return self._snapshot(self._water, "EMPTY" if self.water_deposit_empty() else None)

    @property
    def waste(self) -> DepositStatus:
        return self._snapshot(self._waste, "FULL" if self.waste_dump_full() else None)

    def status(self) -> MachineStatus:
        return MachineStatus(deposits=[self.coffee, self.water, self.waste], state=self._state)

    def render_status(self) -> str:
        return self.status().render()

    def history(self) -> list[dict]:
        """Recent machine events kept by the logger's ring buffer."""
        handler = ring_buffer(self.logger)
        return handler.get_events() if handler else []
