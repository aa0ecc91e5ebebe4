"""
Animal class for ForageSim.

Each animal has:
  - position on the unit torus and a heading angle
  - a speed within [SPEED_MIN, SPEED_MAX]
  - an Eye and a Brain sized to that eye
  - satiation: food eaten this generation (its fitness)

Animals are never reused across generations: the next generation is built
from chromosomes with Animal.from_chromosome(), which gives every newborn a
fresh random position, heading and START_SPEED.
"""

import math
import numpy as np
from eye import Eye
from brain import Brain
from config import START_SPEED


class Animal:
    """
    A single forager.
    """
    __slots__ = ("position", "rotation", "speed", "eye", "brain", "satiation")

    def __init__(self, position, rotation: float, speed: float,
                 eye: Eye, brain: Brain):
        self.position  = np.asarray(position, dtype=np.float64)
        self.rotation  = float(rotation)
        self.speed     = float(speed)
        self.eye       = eye
        self.brain     = brain
        self.satiation = 0

    # ──────────────────────────────────────────────────────────────────────────
    # Construction
    # ──────────────────────────────────────────────────────────────────────────

    @classmethod
    def random(cls, rng) -> "Animal":
        eye   = Eye.default()
        brain = Brain.random(rng, eye)
        return cls._born(eye, brain, rng)

    @classmethod
    def from_chromosome(cls, chromosome, rng) -> "Animal":
        """Rebirth: same kind of eye, evolved brain, fresh body."""
        eye   = Eye.default()
        brain = Brain.from_chromosome(chromosome, eye)
        return cls._born(eye, brain, rng)

    @classmethod
    def _born(cls, eye: Eye, brain: Brain, rng) -> "Animal":
        position = rng.random(2)
        rotation = rng.random() * 2 * math.pi
        return cls(position, rotation, START_SPEED, eye, brain)

    # ──────────────────────────────────────────────────────────────────────────

    def as_chromosome(self) -> np.ndarray:
        # Only the brain evolves; body traits would be appended here.
        return self.brain.as_chromosome()

    @property
    def direction(self) -> np.ndarray:
        """Unit vector the animal is facing."""
        return np.array([-math.sin(self.rotation), math.cos(self.rotation)])

    def __repr__(self):
        x, y = self.position
        return (f"Animal(x={x:.3f}, y={y:.3f}, rotation={self.rotation:.3f}, "
                f"speed={self.speed:.4f}, satiation={self.satiation})")


class AnimalIndividual:
    """
    What the genetic algorithm sees of an animal: its chromosome and its
    fitness (= satiation).  Lives only for the duration of one evolve().
    """
    __slots__ = ("fitness", "chromosome")

    def __init__(self, fitness: float, chromosome):
        self.fitness    = float(fitness)
        self.chromosome = chromosome

    @classmethod
    def create(cls, chromosome) -> "AnimalIndividual":
        return cls(0.0, chromosome)

    @classmethod
    def from_animal(cls, animal: Animal) -> "AnimalIndividual":
        return cls(animal.satiation, animal.as_chromosome())

    def into_animal(self, rng) -> Animal:
        return Animal.from_chromosome(self.chromosome, rng)
