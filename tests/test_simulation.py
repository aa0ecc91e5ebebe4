import math

import numpy as np
import pytest

from animal import Animal
from brain import Brain
from eye import Eye
from genetic_algorithm import GeneticAlgorithm, Statistics
from neural_network import Network
from simulation import Simulation
from world import World, Food
from config import (SPEED_MIN, SPEED_MAX, ROTATION_ACCEL, START_SPEED,
                    GENERATION_LENGTH)


def _brain(speed_bias=0.0, rotation_bias=0.0):
    """Brain that ignores its eye and always answers (speed_bias, rotation_bias)."""
    eye = Eye.default()
    genes = np.zeros(Network.parameter_count(Brain.topology(eye)))
    hidden = 2 * eye.cells
    out_offset = (eye.cells + 1) * hidden
    genes[out_offset] = speed_bias
    genes[out_offset + hidden + 1] = rotation_bias
    return Brain.from_chromosome(genes, eye)


def _animal(position, rotation=0.0, speed=START_SPEED, **brain_kwargs):
    return Animal(position, rotation, speed, Eye.default(), _brain(**brain_kwargs))


def _simulation(animals, foods, generation_length=GENERATION_LENGTH):
    return Simulation(World(animals, foods), GeneticAlgorithm(), generation_length)


@pytest.fixture
def rng():
    return np.random.default_rng(123)


def test_random_simulation(rng):
    sim = Simulation.random(rng)
    assert len(sim.world.animals) == 40
    assert len(sim.world.foods) == 60
    assert sim.age == 0
    assert sim.generation_length == GENERATION_LENGTH == 2500


def test_two_foods_in_reach_are_both_eaten(rng):
    animal = _animal((0.5, 0.5))
    near_a = Food((0.505, 0.5))
    near_b = Food((0.5, 0.495))
    far    = Food((0.9, 0.9))
    sim = _simulation([animal], [near_a, near_b, far])

    assert sim.step(rng) is None
    assert animal.satiation == 2
    assert not np.allclose(near_a.position, (0.505, 0.5))
    assert not np.allclose(near_b.position, (0.5, 0.495))
    assert np.array_equal(far.position, (0.9, 0.9))


def test_food_just_inside_reach_is_eaten(rng):
    animal = _animal((0.5, 0.5))
    sim = _simulation([animal], [Food((0.5, 0.5 + 0.0099))])
    sim.step(rng)
    assert animal.satiation == 1


def test_movement_wraps_around(rng):
    animal = _animal((0.5, 0.9995))
    sim = _simulation([animal], [])
    sim.step(rng)
    assert animal.position[0] == pytest.approx(0.5)
    assert animal.position[1] == pytest.approx(0.0015)
    assert animal.speed == pytest.approx(START_SPEED)


def test_movement_follows_heading(rng):
    animal = _animal((0.5, 0.5), rotation=math.pi / 2)
    sim = _simulation([animal], [])
    sim.step(rng)
    assert animal.position == pytest.approx([0.5 - START_SPEED, 0.5])


def test_brain_response_is_clamped(rng):
    fast = _animal((0.2, 0.2), speed_bias=5.0, rotation_bias=10.0)
    sim = _simulation([fast], [])
    sim.step(rng)
    assert fast.speed == SPEED_MAX
    assert fast.rotation == pytest.approx(ROTATION_ACCEL)


def test_speed_never_drops_below_minimum(rng):
    animal = _animal((0.2, 0.2), speed=SPEED_MIN)
    sim = _simulation([animal], [])
    sim.step(rng)
    assert animal.speed == SPEED_MIN


def test_random_brains_respect_kinematic_bounds(rng):
    sim = Simulation.random(rng)
    for _ in range(20):
        before = [a.rotation for a in sim.world.animals]
        sim.step(rng)
        for animal, rot in zip(sim.world.animals, before):
            assert SPEED_MIN <= animal.speed <= SPEED_MAX
            assert abs(animal.rotation - rot) <= ROTATION_ACCEL + 1e-12
            assert np.all((animal.position >= 0) & (animal.position < 1))


def test_step_evolves_on_generation_boundary(rng):
    sim = Simulation.random(rng, animals=5, foods=8, generation_length=10)
    for _ in range(10):
        assert sim.step(rng) is None
    stats = sim.step(rng)
    assert isinstance(stats, Statistics)
    assert sim.age == 0
    assert sim.generation == 1
    assert sim.history == [stats]


def test_train_runs_one_generation(rng):
    sim = Simulation.random(rng, animals=4, foods=6, generation_length=5)
    first = sim.train(rng)
    second = sim.train(rng)
    assert isinstance(first, Statistics) and isinstance(second, Statistics)
    assert sim.generation == 2
    assert sim.age == 0


def test_evolve_rebuilds_population(rng):
    sim = Simulation.random(rng, animals=6, foods=6)
    old_animals = list(sim.world.animals)
    for i, animal in enumerate(old_animals):
        animal.satiation = i
    old_foods = [f.position.copy() for f in sim.world.foods]
    sim.age = 17

    stats = sim.evolve(rng)

    assert len(sim.world.animals) == len(old_animals)
    assert not any(a in old_animals for a in sim.world.animals)
    assert all(a.satiation == 0 for a in sim.world.animals)
    assert all(a.speed == START_SPEED for a in sim.world.animals)
    assert len(sim.world.foods) == 6
    assert all(not np.array_equal(f.position, old)
               for f, old in zip(sim.world.foods, old_foods))
    assert sim.age == 0
    assert stats.max_fitness == 5.0
    assert stats.avg_fitness == pytest.approx(2.5)


def _world_state(sim):
    return (
        [(a.position.tolist(), a.rotation, a.speed, a.satiation,
          a.as_chromosome().tolist()) for a in sim.world.animals],
        [f.position.tolist() for f in sim.world.foods],
    )


def test_same_seed_same_world():
    a_rng, b_rng = np.random.default_rng(7), np.random.default_rng(7)
    a = Simulation.random(a_rng)
    b = Simulation.random(b_rng)
    a.step(a_rng)
    b.step(b_rng)
    assert _world_state(a) == _world_state(b)


def test_same_seed_same_evolution():
    a_rng, b_rng = np.random.default_rng(9), np.random.default_rng(9)
    a = Simulation.random(a_rng, animals=5, foods=10, generation_length=3)
    b = Simulation.random(b_rng, animals=5, foods=10, generation_length=3)
    assert str(a.train(a_rng)) == str(b.train(b_rng))
    assert _world_state(a) == _world_state(b)
