"""
Fixed brew recipes and the thresholds derived from them.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping

from brewstate.domain.actions import BrewAction


@dataclass(frozen=True)
class BrewRecipe:
    """
    Per-brew consumption amounts.

    Attributes:
        coffee: Grounds drawn from the coffee deposit. The same amount ends up
            in the waste dump.
        water: Water drawn from the water deposit.
    """
    coffee: int
    water: int

    @property
    def waste(self) -> int:
        return self.coffee


# Recipe table, in menu order. Read-only.
RECIPES: Mapping[BrewAction, BrewRecipe] = MappingProxyType({
    BrewAction.ESPRESSO: BrewRecipe(coffee=9, water=40),
    BrewAction.AMERICAN: BrewRecipe(coffee=7, water=60),
    BrewAction.HOT_WATER: BrewRecipe(coffee=0, water=75),
})


def max_required_coffee(recipes: Iterable[BrewRecipe]) -> int:
    """Largest coffee draw of any recipe, or 0 when there are none."""
    return max((r.coffee for r in recipes), default=0)


def max_required_water(recipes: Iterable[BrewRecipe]) -> int:
    """Largest water draw of any recipe, or 0 when there are none."""
    return max((r.water for r in recipes), default=0)
