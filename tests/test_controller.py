"""Tests for MachineController state derivation, maintenance and brewing."""
import pytest
from pydantic import ValidationError

from brewstate.domain.actions import BrewAction, InvalidActionError, MachineState
from brewstate.domain.deposits import ResourceIntegrityError
from brewstate.domain.recipes import BrewRecipe


def _loads(machine):
    return (machine.coffee.current_load, machine.water.current_load, machine.waste.current_load)


def test_fresh_machine(machine):
    assert machine.current_state() is MachineState.ACTION_REQUIRED
    assert _loads(machine) == (0, 0, 0)
    assert (machine.coffee.max_load, machine.water.max_load, machine.waste.max_load) == (100, 255, 50)


def test_fresh_machine_offers_maintenance(machine):
    assert machine.available_actions() == ["FillWater", "FillCoffee", "EmptyDump"]


def test_derived_maxima(machine):
    assert machine.max_required_coffee == 9
    assert machine.max_required_water == 75


@pytest.mark.parametrize("load, empty", [(0, True), (8, True), (9, False), (100, False)])
def test_coffee_deposit_empty_threshold(machine, set_loads, load, empty):
    set_loads(machine, coffee=load)
    assert machine.coffee_deposit_empty() is empty


@pytest.mark.parametrize("load, empty", [(0, True), (74, True), (75, False), (255, False)])
def test_water_deposit_empty_threshold(machine, set_loads, load, empty):
    set_loads(machine, water=load)
    assert machine.water_deposit_empty() is empty


@pytest.mark.parametrize("load, full", [(0, False), (40, False), (41, True), (50, True)])
def test_waste_dump_full_threshold(machine, set_loads, load, full):
    set_loads(machine, waste=load)
    assert machine.waste_dump_full() is full


def test_derive_state_is_idempotent(ready_machine):
    first = ready_machine.derive_state()
    second = ready_machine.derive_state()
    assert first is second is MachineState.READY


def test_boundary_fill_sequence(machine):
    machine.fill_coffee()
    assert machine.coffee.current_load == 100
    assert machine.current_state() is MachineState.ACTION_REQUIRED

    machine.fill_water()
    assert machine.water.current_load == 255

    machine.empty_waste()
    assert machine.waste.current_load == 0
    assert machine.current_state() is MachineState.READY


def test_maintenance_self_loop(ready_machine):
    ready_machine.fill_water()
    assert ready_machine.current_state() is MachineState.READY


def test_espresso_from_full(ready_machine):
    ready_machine.brew(BrewAction.ESPRESSO)
    assert _loads(ready_machine) == (91, 215, 9)
    assert ready_machine.current_state() is MachineState.READY


def test_hot_water_uses_no_coffee(ready_machine):
    ready_machine.brew(BrewAction.HOT_WATER)
    assert _loads(ready_machine) == (100, 180, 0)


def test_waste_triggers_maintenance(ready_machine, set_loads):
    set_loads(ready_machine, waste=40)
    assert ready_machine.current_state() is MachineState.READY

    ready_machine.brew(BrewAction.ESPRESSO)
    assert ready_machine.waste.current_load == 49
    assert ready_machine.current_state() is MachineState.ACTION_REQUIRED
    assert ready_machine.available_actions() == ["FillWater", "FillCoffee", "EmptyDump"]


def test_water_runs_out_after_repeated_americanos(ready_machine):
    # 255 water, 60 per cup: after three cups 75 remain, after four 15.
    for _ in range(3):
        ready_machine.submit("American")
    assert ready_machine.water.current_load == 75
    assert ready_machine.current_state() is MachineState.READY
    ready_machine.submit("American")
    assert ready_machine.water.current_load == 15
    assert ready_machine.water_deposit_empty()
    assert ready_machine.current_state() is MachineState.ACTION_REQUIRED


def test_brew_with_insufficient_coffee_raises(ready_machine, set_loads):
    set_loads(ready_machine, coffee=5)
    with pytest.raises(ResourceIntegrityError):
        ready_machine.brew(BrewAction.ESPRESSO)
    assert _loads(ready_machine) == (5, 255, 0)


def test_brew_with_no_waste_room_raises_and_changes_nothing(ready_machine, set_loads):
    set_loads(ready_machine, waste=45)
    with pytest.raises(ResourceIntegrityError):
        ready_machine.brew(BrewAction.ESPRESSO)
    assert _loads(ready_machine) == (100, 255, 45)


def test_available_actions_for_explicit_state(machine):
    assert machine.available_actions(MachineState.READY) == ["Espresso", "American", "HotWater"]


class TestReadOnlyView:
    def test_deposit_snapshot_is_frozen(self, ready_machine):
        with pytest.raises(ValidationError):
            ready_machine.coffee.current_load = 5
        assert ready_machine.coffee.current_load == 100

    def test_deposit_snapshot_has_no_mutators(self, ready_machine):
        assert not hasattr(ready_machine.coffee, "draw")
        assert not hasattr(ready_machine.waste, "fill")

    def test_deposit_attributes_cannot_be_replaced(self, ready_machine):
        with pytest.raises(AttributeError):
            ready_machine.coffee = None

    def test_recipe_table_is_read_only(self, machine):
        with pytest.raises(TypeError):
            machine.recipes[BrewAction.ESPRESSO] = BrewRecipe(coffee=60, water=1)
        assert machine.max_required_coffee == 9

    def test_state_tracks_loads_after_brews(self, ready_machine):
        # Draining through the controller keeps state and predicates in step.
        for _ in range(10):
            if ready_machine.current_state() is not MachineState.READY:
                break
            ready_machine.submit("Espresso")
        assert ready_machine.coffee_deposit_empty() or ready_machine.water_deposit_empty() or ready_machine.waste_dump_full()
        assert ready_machine.current_state() is MachineState.ACTION_REQUIRED


class TestSubmit:
    def test_submit_returns_rendered_status(self, machine):
        text = machine.submit("FillCoffee")
        assert text == machine.render_status()
        assert "Coffee: 100/100" in text

    def test_submit_accepts_any_case(self, machine):
        machine.submit("fillwater")
        assert machine.water.current_load == 255

    def test_invalid_dispatch_changes_nothing(self, ready_machine):
        before = _loads(ready_machine)
        with pytest.raises(InvalidActionError):
            ready_machine.submit("FillWater")
        assert _loads(ready_machine) == before
        assert ready_machine.current_state() is MachineState.READY

    def test_brew_rejected_while_action_required(self, machine):
        with pytest.raises(InvalidActionError):
            machine.submit("Espresso")
        assert _loads(machine) == (0, 0, 0)

    def test_garbage_label_rejected(self, ready_machine):
        with pytest.raises(InvalidActionError):
            ready_machine.submit("")

    def test_fresh_waste_needs_no_emptying(self, machine):
        # Waste starts at 0, so two fills are enough and EmptyDump is no longer offered.
        machine.submit("FillWater")
        machine.submit("FillCoffee")
        assert machine.current_state() is MachineState.READY
        with pytest.raises(InvalidActionError):
            machine.submit("EmptyDump")

    def test_full_cycle(self, machine):
        machine.submit("FillWater")
        machine.submit("FillCoffee")
        assert machine.current_state() is MachineState.READY
        machine.submit("Espresso")
        machine.submit("American")
        machine.submit("HotWater")
        assert _loads(machine) == (84, 80, 16)
        assert machine.current_state() is MachineState.READY
