"""
Genetic operators for ForageSim.

A chromosome is a flat float64 numpy array: the brain weights of one
animal, in the neural network's own parameter order.

Each operator family is a small class with one method, so the genetic
algorithm can be composed from interchangeable strategies:

  SelectionMethod.select(rng, population)             → individual
  CrossoverMethod.crossover(rng, parent_a, parent_b)  → chromosome
  MutationMethod.mutate(rng, chromosome)              → chromosome
"""

import numpy as np
from config import MUTATION_CHANCE, MUTATION_COEFF

# ──────────────────────────────────────────────────────────────────────────────
# Selection
# ──────────────────────────────────────────────────────────────────────────────

class SelectionMethod:
    def select(self, rng, population: list):
        raise NotImplementedError


class RouletteWheelSelection(SelectionMethod):
    """
    Fitness-proportionate selection: an individual with twice the fitness
    is twice as likely to become a parent.
    If nobody has any fitness, every individual is equally likely.
    """

    def select(self, rng, population: list):
        fitness = np.array([ind.fitness for ind in population], dtype=np.float64)
        total   = fitness.sum()
        if total <= 0.0:
            return population[int(rng.integers(0, len(population)))]
        threshold = rng.random() * total
        idx = int(np.searchsorted(np.cumsum(fitness), threshold, side="right"))
        return population[min(idx, len(population) - 1)]


# ──────────────────────────────────────────────────────────────────────────────
# Crossover
# ──────────────────────────────────────────────────────────────────────────────

class CrossoverMethod:
    def crossover(self, rng, parent_a: np.ndarray, parent_b: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class UniformCrossover(CrossoverMethod):
    """Every gene comes from parent A or parent B with equal probability."""

    def crossover(self, rng, parent_a, parent_b):
        parent_a = np.asarray(parent_a, dtype=np.float64)
        parent_b = np.asarray(parent_b, dtype=np.float64)
        if parent_a.shape != parent_b.shape:
            raise ValueError(
                f"parents differ in length: {parent_a.size} vs {parent_b.size}")
        take_a = rng.random(parent_a.size) < 0.5
        return np.where(take_a, parent_a, parent_b)


# ──────────────────────────────────────────────────────────────────────────────
# Mutation
# ──────────────────────────────────────────────────────────────────────────────

class MutationMethod:
    def mutate(self, rng, chromosome: np.ndarray) -> np.ndarray:
        raise NotImplementedError


class GaussianMutation(MutationMethod):
    """
    With probability `chance` per gene, shift the gene by
    ±coeff * U[0,1).  chance=0 leaves chromosomes untouched.
    """

    def __init__(self, chance: float = MUTATION_CHANCE,
                 coeff: float = MUTATION_COEFF):
        if not 0.0 <= chance <= 1.0:
            raise ValueError(f"mutation chance must be in [0, 1], got {chance}")
        self.chance = chance
        self.coeff  = coeff

    def mutate(self, rng, chromosome):
        genes = np.array(chromosome, dtype=np.float64)
        n     = genes.size
        sign  = np.where(rng.random(n) < 0.5, -1.0, 1.0)
        hit   = rng.random(n) < self.chance
        shift = self.coeff * rng.random(n)
        genes[hit] += (sign * shift)[hit]
        return genes


# ──────────────────────────────────────────────────────────────────────────────
# Population-level helpers
# ──────────────────────────────────────────────────────────────────────────────

def chromosome_diversity(chromosomes: list) -> float:
    """
    Mean pairwise euclidean distance between chromosomes (0 = clones).
    Used for reporting only; draws nothing from the random source.
    """
    if len(chromosomes) < 2:
        return 0.0
    m     = np.stack([np.asarray(c, dtype=np.float64) for c in chromosomes])
    diffs = m[:, None, :] - m[None, :, :]
    dists = np.sqrt((diffs ** 2).sum(axis=-1))
    n     = len(m)
    return float(dists.sum() / (n * (n - 1)))
