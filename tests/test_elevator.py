import logging

import pytest

from dispatch import Direction
from simulation import Elevator, Status


@pytest.fixture
def elevator():
    return Elevator(elevator_id=0, max_floor=9)


def moving(floor, direction, targets, max_floor=9):
    return Elevator(
        elevator_id=0,
        max_floor=max_floor,
        current_floor=floor,
        direction=direction,
        status=Status.MOVING,
        target_floors=sorted(targets),
    )


def test_initial_state(elevator):
    assert elevator.current_floor == 0
    assert elevator.direction == Direction.IDLE
    assert elevator.status == Status.IDLE
    assert elevator.target_floors == []


class TestTargets:
    def test_targets_stay_sorted_and_distinct(self, elevator):
        for floor in (7, 2, 5, 2, 7):
            elevator.add_target(floor)
        assert elevator.target_floors == [2, 5, 7]

    def test_request_for_current_floor_while_idle_is_served_on_the_spot(self, elevator):
        assert elevator.add_target(0) is False
        assert elevator.target_floors == []

    def test_request_for_current_floor_while_moving_is_queued(self):
        car = moving(3, Direction.UP, [6])
        assert car.add_target(3) is True
        assert car.target_floors == [3, 6]

    def test_has_target(self, elevator):
        elevator.add_target(4)
        assert elevator.has_target(4)
        assert not elevator.has_target(5)


class TestNextTarget:
    def test_none_without_targets(self, elevator):
        assert elevator.next_target() is None

    def test_idle_picks_lowest(self):
        car = Elevator(elevator_id=0, max_floor=9, current_floor=5, target_floors=[2, 8])
        assert car.next_target() == 2

    def test_up_picks_ceiling(self):
        assert moving(4, Direction.UP, [1, 6, 8]).next_target() == 6

    def test_up_ceiling_includes_current_floor(self):
        assert moving(4, Direction.UP, [1, 4, 8]).next_target() == 4

    def test_up_falls_back_to_highest(self):
        assert moving(7, Direction.UP, [1, 3]).next_target() == 3

    def test_down_picks_floor(self):
        assert moving(6, Direction.DOWN, [1, 4, 8]).next_target() == 4

    def test_down_falls_back_to_lowest(self):
        assert moving(2, Direction.DOWN, [5, 8]).next_target() == 5


class TestStateMachine:
    def test_idle_with_target_starts_moving_without_moving(self, elevator):
        elevator.add_target(3)
        elevator.step()
        assert elevator.status == Status.MOVING
        assert elevator.direction == Direction.UP
        assert elevator.current_floor == 0

    def test_idle_without_targets_stays_idle(self, elevator):
        for _ in range(3):
            elevator.step()
        assert elevator.status == Status.IDLE
        assert elevator.direction == Direction.IDLE

    def test_moving_advances_one_floor(self):
        car = moving(2, Direction.UP, [5])
        car.step()
        assert car.current_floor == 3
        assert car.status == Status.MOVING

    def test_arrival_clears_exactly_one_target(self):
        car = moving(4, Direction.UP, [1, 4, 8])
        car.step()
        assert car.status == Status.DOORS_OPEN
        assert car.target_floors == [1, 8]
        assert car.current_floor == 4

    def test_doors_open_then_idle_when_no_targets(self):
        car = moving(4, Direction.UP, [4])
        car.step()
        car.step()
        assert car.status == Status.IDLE
        assert car.direction == Direction.IDLE

    def test_doors_open_is_logged(self, caplog):
        car = moving(4, Direction.UP, [4])
        car.step()
        with caplog.at_level(logging.DEBUG, logger="simulation.elevator"):
            car.step()
        assert "Elevator 0 doors are open. Deciding next move." in caplog.text

    def test_doors_open_moves_in_same_tick_with_targets_left(self):
        car = moving(4, Direction.UP, [4, 7])
        car.step()
        car.step()
        assert car.status == Status.MOVING
        assert car.direction == Direction.UP
        assert car.current_floor == 5

    def test_reverses_after_top_of_sweep(self):
        car = moving(6, Direction.UP, [2, 6])
        car.step()
        car.step()
        assert car.direction == Direction.DOWN
        assert car.current_floor == 5

    def test_no_premature_reversal(self):
        car = moving(3, Direction.UP, [5, 8])
        car.add_target(1)
        visited = []
        for _ in range(30):
            car.step()
            if car.status == Status.DOORS_OPEN:
                visited.append(car.current_floor)
        assert visited == [5, 8, 1]

    def test_clamps_at_ground_floor(self):
        car = moving(0, Direction.DOWN, [-3])
        for _ in range(3):
            car.step()
        assert car.current_floor == 0

    def test_clamps_at_top_floor(self):
        car = moving(9, Direction.UP, [12])
        for _ in range(3):
            car.step()
        assert car.current_floor == 9


def test_snapshot_is_a_copy():
    car = moving(2, Direction.UP, [5])
    state = car.snapshot()
    assert state == {
        "id": 0,
        "currentFloor": 2,
        "direction": "UP",
        "status": "MOVING",
        "targetFloors": [5],
    }
    state["targetFloors"].append(9)
    assert car.target_floors == [5]
