import itertools

import pytest

from brewstate.config import MachineSettings
from brewstate.controller import MachineController
from brewstate.logging import create_logger

_logger_ids = itertools.count()


@pytest.fixture
def settings():
    return MachineSettings(log_level="INFO", log_ring_size=50, prompt="> ", max_actions=None)


@pytest.fixture
def logger():
    # Fresh logger per test so ring buffers don't leak between tests.
    return create_logger(f"brewstate.test.{next(_logger_ids)}", ring_size=50)


@pytest.fixture
def machine(settings, logger):
    return MachineController(settings=settings, logger=logger)


@pytest.fixture
def ready_machine(machine):
    machine.fill_coffee()
    machine.fill_water()
    machine.empty_waste()
    return machine


@pytest.fixture
def set_loads():
    """Put a machine at given deposit loads, then let it re-derive its state."""

    def _set(machine, coffee=None, water=None, waste=None):
        for deposit, load in ((machine._coffee, coffee), (machine._water, water), (machine._waste, waste)):
            if load is not None:
                deposit.current_load = load
        machine.derive_state()
        return machine

    return _set
