"""
World for ForageSim.

The world is the unit torus [0,1) x [0,1) holding a fixed number of
animals and a fixed number of food items.  Sizes never change: animals are
replaced wholesale each generation, foods are relocated in their slot.
"""

import numpy as np
from animal import Animal
from config import ANIMAL_COUNT, FOOD_COUNT


def wrap_unit(value: float) -> float:
    """Wrap a coordinate into [0, 1)."""
    value = value % 1.0
    # tiny negatives round up to exactly 1.0
    return 0.0 if value >= 1.0 else value


class Food:
    __slots__ = ("position",)

    def __init__(self, position):
        self.position = np.asarray(position, dtype=np.float64)

    @classmethod
    def random(cls, rng) -> "Food":
        return cls(rng.random(2))

    def relocate(self, rng):
        """Respawn this food item at a random spot (same slot)."""
        self.position = rng.random(2)

    def __repr__(self):
        return f"Food(x={self.position[0]:.3f}, y={self.position[1]:.3f})"


class World:
    """
    Container of animals and foods.
    """

    def __init__(self, animals: list, foods: list):
        self.animals = animals
        self.foods   = foods

    @classmethod
    def random(cls, rng, animals: int = ANIMAL_COUNT,
               foods: int = FOOD_COUNT) -> "World":
        return cls(
            [Animal.random(rng) for _ in range(animals)],
            [Food.random(rng) for _ in range(foods)],
        )

    # ──────────────────────────────────────────────────────────────────────────
    # Snapshot helpers (visualisation / server)
    # ──────────────────────────────────────────────────────────────────────────

    def food_positions(self) -> np.ndarray:
        """(n_foods, 2) array of food positions."""
        return np.array([f.position for f in self.foods],
                        dtype=np.float64).reshape(-1, 2)

    def snapshot(self):
        """
        Returns three arrays for visualisation:
          animal_positions: (n_animals, 2)
          rotations:        (n_animals,)
          food_positions:   (n_foods, 2)
        """
        positions = np.array([a.position for a in self.animals],
                             dtype=np.float64).reshape(-1, 2)
        rotations = np.array([a.rotation for a in self.animals],
                             dtype=np.float64)
        return positions, rotations, self.food_positions()

    def as_dict(self) -> dict:
        """JSON-friendly view of the world."""
        return {
            "animals": [
                {"x": float(a.position[0]), "y": float(a.position[1]),
                 "rotation": a.rotation}
                for a in self.animals
            ],
            "foods": [
                {"x": float(f.position[0]), "y": float(f.position[1])}
                for f in self.foods
            ],
        }
