"""
Genetic Algorithm for ForageSim.

Evolves a population of individuals. An individual is anything that offers:
  - classmethod create(chromosome) → individual
  - attribute   chromosome         (flat float array)
  - attribute   fitness            (non-negative scalar)

One call to evolve() produces a same-size population:
  for each slot:
    1. select two parents   (selection method)
    2. mix their genes      (crossover method)
    3. perturb the child    (mutation method)
"""

import numpy as np
from genome import (RouletteWheelSelection, UniformCrossover,
                    GaussianMutation)


class Statistics:
    """Fitness summary of the population that was evolved."""

    def __init__(self, min_fitness: float, max_fitness: float,
                 avg_fitness: float, population: int):
        self.min_fitness = min_fitness
        self.max_fitness = max_fitness
        self.avg_fitness = avg_fitness
        self.population  = population

    @classmethod
    def from_population(cls, population: list) -> "Statistics":
        fitness = np.array([ind.fitness for ind in population], dtype=np.float64)
        return cls(
            min_fitness = float(fitness.min()),
            max_fitness = float(fitness.max()),
            avg_fitness = float(fitness.mean()),
            population  = len(population),
        )

    def as_dict(self) -> dict:
        return {
            "min_fitness": self.min_fitness,
            "max_fitness": self.max_fitness,
            "avg_fitness": self.avg_fitness,
            "population":  self.population,
        }

    def __str__(self):
        return (f"min={self.min_fitness:.2f}, "
                f"max={self.max_fitness:.2f}, "
                f"avg={self.avg_fitness:.2f}")

    def __repr__(self):
        return f"Statistics({self})"


class GeneticAlgorithm:
    """
    Composition of one selection, one crossover and one mutation strategy.
    """

    def __init__(self, selection_method=None, crossover_method=None,
                 mutation_method=None):
        self.selection_method = selection_method or RouletteWheelSelection()
        self.crossover_method = crossover_method or UniformCrossover()
        self.mutation_method  = mutation_method  or GaussianMutation()

    def evolve(self, rng, population: list):
        """
        Returns (new_population, Statistics).  Statistics describe the
        population passed in, i.e. the generation that just finished.
        """
        if not population:
            raise ValueError("cannot evolve an empty population")

        create = type(population[0]).create
        new_population = []
        for _ in range(len(population)):
            parent_a = self.selection_method.select(rng, population).chromosome
            parent_b = self.selection_method.select(rng, population).chromosome
            child    = self.crossover_method.crossover(rng, parent_a, parent_b)
            child    = self.mutation_method.mutate(rng, child)
            new_population.append(create(child))

        return new_population, Statistics.from_population(population)
