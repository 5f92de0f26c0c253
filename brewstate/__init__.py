from brewstate.config import MachineSettings
from brewstate.controller import MachineController
from brewstate.domain import (
    BrewAction,
    InvalidActionError,
    MachineState,
    MaintenanceAction,
    ResourceIntegrityError,
)
from brewstate.models import DepositStatus, MachineStatus
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "MachineController",
    "MachineSettings",
    "MachineState",
    "BrewAction",
    "MaintenanceAction",
    "InvalidActionError",
    "ResourceIntegrityError",
    "DepositStatus",
    "MachineStatus",
]

try:
    __version__ = version("brewstate")
except PackageNotFoundError:
    __version__ = "0.0.0"
