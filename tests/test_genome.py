import numpy as np
import pytest

from genome import (RouletteWheelSelection, UniformCrossover,
                    GaussianMutation, chromosome_diversity)


class Dummy:
    def __init__(self, fitness, chromosome=()):
        self.fitness    = fitness
        self.chromosome = np.asarray(chromosome, dtype=float)


def test_roulette_prefers_fitter_individuals():
    rng = np.random.default_rng(0)
    population = [Dummy(2.0), Dummy(1.0), Dummy(4.0), Dummy(3.0)]
    selection = RouletteWheelSelection()

    counts = {f: 0 for f in (1.0, 2.0, 3.0, 4.0)}
    for _ in range(2000):
        counts[selection.select(rng, population).fitness] += 1

    assert counts[1.0] < counts[2.0] < counts[3.0] < counts[4.0]


def test_roulette_never_picks_zero_fitness_when_others_score():
    rng = np.random.default_rng(1)
    population = [Dummy(0.0), Dummy(5.0), Dummy(0.0)]
    selection = RouletteWheelSelection()
    for _ in range(200):
        assert selection.select(rng, population) is population[1]


def test_roulette_all_zero_fitness_picks_uniformly():
    rng = np.random.default_rng(2)
    population = [Dummy(0.0) for _ in range(4)]
    selection = RouletteWheelSelection()
    picked = {id(selection.select(rng, population)) for _ in range(200)}
    assert picked == {id(d) for d in population}


def test_uniform_crossover_mixes_parents():
    rng = np.random.default_rng(3)
    a = np.zeros(100)
    b = np.ones(100)
    child = UniformCrossover().crossover(rng, a, b)
    assert child.shape == (100,)
    assert set(np.unique(child)) == {0.0, 1.0}
    assert 30 < child.sum() < 70


def test_uniform_crossover_length_mismatch():
    with pytest.raises(ValueError):
        UniformCrossover().crossover(np.random.default_rng(0),
                                     np.zeros(3), np.zeros(4))


def test_gaussian_mutation_zero_chance_is_identity():
    rng = np.random.default_rng(4)
    genes = np.linspace(-1, 1, 50)
    assert np.array_equal(GaussianMutation(0.0, 0.5).mutate(rng, genes), genes)


def test_gaussian_mutation_full_chance_changes_every_gene():
    rng = np.random.default_rng(5)
    genes = np.zeros(50)
    mutated = GaussianMutation(1.0, 0.5).mutate(rng, genes)
    assert not np.array_equal(mutated, genes)
    assert np.all(np.abs(mutated) <= 0.5)
    # input is not modified in place
    assert not genes.any()


def test_gaussian_mutation_rejects_bad_chance():
    with pytest.raises(ValueError):
        GaussianMutation(1.5, 0.1)


def test_chromosome_diversity():
    assert chromosome_diversity([np.zeros(3)]) == 0.0
    assert chromosome_diversity([np.zeros(3), np.zeros(3)]) == 0.0
    assert chromosome_diversity([np.zeros(2), np.array([3.0, 4.0])]) == pytest.approx(5.0)
