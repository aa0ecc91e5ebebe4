"""
Simulation Engine for ForageSim.

Advances the world one step at a time:
  1. Collisions  – animals eat food within EAT_DISTANCE, food respawns
  2. Brains      – eye → brain → speed/heading change
  3. Movements   – animals move along their heading, world wraps around
  4. Age         – once age exceeds generation_length, the population evolves

Evolution:
  animals → AnimalIndividual → GeneticAlgorithm → new animals (fresh bodies)

All randomness comes from the `rng` passed into step/train/evolve, so a
seeded numpy Generator replays the same run exactly.
"""

import math
import numpy as np
from world import World, wrap_unit
from animal import AnimalIndividual
from genetic_algorithm import GeneticAlgorithm
from genome import RouletteWheelSelection, UniformCrossover, GaussianMutation
from config import (
    ANIMAL_COUNT, FOOD_COUNT, GENERATION_LENGTH,
    SPEED_MIN, SPEED_MAX, SPEED_ACCEL, ROTATION_ACCEL,
    EAT_DISTANCE, MUTATION_CHANCE, MUTATION_COEFF,
)


class Simulation:
    """
    Main simulation controller.
    """

    def __init__(self, world: World, ga: GeneticAlgorithm,
                 generation_length: int = GENERATION_LENGTH):
        self.world             = world
        self.ga                = ga
        self.generation_length = generation_length
        self.age               = 0     # steps into the current generation

        # History
        self.generation = 0            # number of completed evolutions
        self.history    = []           # Statistics, one per generation

    @classmethod
    def random(
        cls,
        rng,
        animals:           int   = ANIMAL_COUNT,
        foods:             int   = FOOD_COUNT,
        generation_length: int   = GENERATION_LENGTH,
        mutation_chance:   float = MUTATION_CHANCE,
        mutation_coeff:    float = MUTATION_COEFF,
    ) -> "Simulation":
        world = World.random(rng, animals, foods)
        ga = GeneticAlgorithm(
            RouletteWheelSelection(),
            UniformCrossover(),
            GaussianMutation(mutation_chance, mutation_coeff),
        )
        return cls(world, ga, generation_length)

    # ──────────────────────────────────────────────────────────────────────────
    # Public API
    # ──────────────────────────────────────────────────────────────────────────

    def step(self, rng):
        """
        Advance the world by one step.
        Returns the evolution Statistics on the step that ends a
        generation, None otherwise.
        """
        self._process_collisions(rng)
        self._process_brains()
        self._process_movements()
        self.age += 1

        if self.age > self.generation_length:
            return self.evolve(rng)
        return None

    def train(self, rng):
        """Fast-forward to the end of the current generation."""
        while True:
            stats = self.step(rng)
            if stats is not None:
                return stats

    def evolve(self, rng):
        self.age = 0

        # Animals → individuals the genetic algorithm understands
        current_population = [AnimalIndividual.from_animal(a)
                              for a in self.world.animals]

        evolved_population, stats = self.ga.evolve(rng, current_population)

        # Individuals → newborn animals
        self.world.animals = [individual.into_animal(rng)
                              for individual in evolved_population]

        # Fresh food layout for the new generation (cosmetic)
        for food in self.world.foods:
            food.relocate(rng)

        self.generation += 1
        self.history.append(stats)
        return stats

    # ──────────────────────────────────────────────────────────────────────────
    # Step phases
    # ──────────────────────────────────────────────────────────────────────────

    def _process_collisions(self, rng):
        foods = self.world.foods
        if not foods:
            return
        food_pos = self.world.food_positions()

        for animal in self.world.animals:
            dist = np.hypot(food_pos[:, 0] - animal.position[0],
                            food_pos[:, 1] - animal.position[1])
            # every food in reach counts, not just the first one
            for idx in np.flatnonzero(dist <= EAT_DISTANCE):
                animal.satiation += 1
                foods[idx].relocate(rng)
                food_pos[idx] = foods[idx].position

    def _process_brains(self):
        foods = self.world.foods
        for animal in self.world.animals:
            vision   = animal.eye.process_vision(animal.position,
                                                 animal.rotation, foods)
            response = animal.brain.propagate(vision)

            speed    = _clamp(response[0], -SPEED_ACCEL, SPEED_ACCEL)
            rotation = _clamp(response[1], -ROTATION_ACCEL, ROTATION_ACCEL)

            animal.speed    = _clamp(animal.speed + speed, SPEED_MIN, SPEED_MAX)
            animal.rotation = animal.rotation + rotation

    def _process_movements(self):
        for animal in self.world.animals:
            x = animal.position[0] - animal.speed * math.sin(animal.rotation)
            y = animal.position[1] + animal.speed * math.cos(animal.rotation)
            animal.position = np.array([wrap_unit(x), wrap_unit(y)])


def _clamp(value, lo: float, hi: float) -> float:
    return max(lo, min(hi, float(value)))
