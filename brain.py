"""
Brain for ForageSim.

Wraps a Network whose shape is derived from the animal's eye:
  eye.cells inputs → 2 * eye.cells hidden → 2 outputs (speed Δ, rotation Δ)
"""

import numpy as np
from neural_network import Network, LayerTopology


class Brain:
    __slots__ = ("nn",)

    def __init__(self, nn: Network):
        self.nn = nn

    @staticmethod
    def topology(eye) -> list:
        return [
            LayerTopology(eye.cells),
            LayerTopology(2 * eye.cells),
            LayerTopology(2),
        ]

    @classmethod
    def random(cls, rng, eye) -> "Brain":
        """Fresh brain with random weights (generation 0 only)."""
        return cls(Network.random(cls.topology(eye), rng))

    @classmethod
    def from_chromosome(cls, chromosome, eye) -> "Brain":
        # length mismatches surface as ValueError from Network.from_weights
        return cls(Network.from_weights(cls.topology(eye), chromosome))

    def as_chromosome(self) -> np.ndarray:
        return np.fromiter(self.nn.weights(), dtype=np.float64)

    def propagate(self, vision) -> np.ndarray:
        return self.nn.propagate(vision)
