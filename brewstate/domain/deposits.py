"""
Bounded deposits for the coffee, water and waste reservoirs.

A deposit is a counter that must stay within ``0..max_load``. Every mutation
goes through the methods below so that the bound is checked in one place.
"""
from __future__ import annotations

from dataclasses import dataclass


class ResourceIntegrityError(RuntimeError):
    """Raised when an operation would push a deposit outside its bounds."""
    pass


@dataclass
class Deposit:
    """
    A bounded reservoir.

    Attributes:
        name: Display name used in status reports.
        max_load: Capacity of the deposit.
        current_load: Amount currently held.
    """
    name: str
    max_load: int
    current_load: int = 0

    def __post_init__(self) -> None:
        if self.max_load < 0:
            raise ValueError(f"{self.name}: max_load must be non-negative")
        if not 0 <= self.current_load <= self.max_load:
            raise ValueError(
                f"{self.name}: current_load {self.current_load} outside 0..{self.max_load}"
            )

    @property
    def room(self) -> int:
        return self.max_load - self.current_load

    def can_draw(self, amount: int) -> bool:
        return 0 <= amount <= self.current_load

    def can_receive(self, amount: int) -> bool:
        return 0 <= amount <= self.room

    def draw(self, amount: int) -> None:
        """Remove ``amount`` from the deposit."""
        if not self.can_draw(amount):
            raise ResourceIntegrityError(
                f"{self.name}: cannot draw {amount} from {self.current_load}/{self.max_load}"
            )
        self.current_load -= amount

    def receive(self, amount: int) -> None:
        """Add ``amount`` to the deposit."""
        if not self.can_receive(amount):
            raise ResourceIntegrityError(
                f"{self.name}: cannot add {amount} to {self.current_load}/{self.max_load}"
            )
        self.current_load += amount

    def fill(self) -> None:
        self.current_load = self.max_load

    def empty(self) -> None:
        self.current_load = 0
