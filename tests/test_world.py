import numpy as np
import pytest

from world import World, Food, wrap_unit


@pytest.mark.parametrize("value, expected", [
    (0.0, 0.0),
    (0.25, 0.25),
    (1.0, 0.0),
    (1.3, 0.3),
    (-0.2, 0.8),
    (-2.75, 0.25),
])
def test_wrap_unit(value, expected):
    assert wrap_unit(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", [-1e-18, -1e-300, 1.0 - 1e-17, 5.0, -7.5, 0.999999])
def test_wrap_unit_stays_below_one(value):
    wrapped = wrap_unit(value)
    assert 0.0 <= wrapped < 1.0


def test_random_world_sizes():
    world = World.random(np.random.default_rng(0))
    assert len(world.animals) == 40
    assert len(world.foods) == 60


def test_food_relocate_keeps_slot():
    rng = np.random.default_rng(1)
    world = World.random(rng, animals=2, foods=3)
    food = world.foods[1]
    old = food.position.copy()
    food.relocate(rng)
    assert world.foods[1] is food
    assert not np.array_equal(food.position, old)
    assert np.all((food.position >= 0) & (food.position < 1))


def test_snapshot_shapes():
    world = World.random(np.random.default_rng(2), animals=4, foods=6)
    positions, rotations, foods = world.snapshot()
    assert positions.shape == (4, 2)
    assert rotations.shape == (4,)
    assert foods.shape == (6, 2)


def test_empty_world_snapshot():
    positions, rotations, foods = World([], []).snapshot()
    assert positions.shape == (0, 2)
    assert foods.shape == (0, 2)


def test_as_dict():
    world = World([], [Food((0.25, 0.5))])
    assert world.as_dict() == {"animals": [], "foods": [{"x": 0.25, "y": 0.5}]}
