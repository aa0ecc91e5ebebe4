"""
Eye sensor for ForageSim.

The eye splits its field of view into `cells` equal angular sectors and
reports, per sector, how much food it sees there:

      fov_angle
   \  |  |  |  /
    \ |  |  | /      each food in range adds
     \|  |  |/         (fov_range - distance) / fov_range
      animal           to the sector it falls in

Angles are measured from the +y axis, so an animal with heading θ faces
(-sin θ, cos θ).
"""

import math
import numpy as np
from config import FOV_RANGE, FOV_ANGLE, CELLS


def wrap_angle(angle):
    """Wrap an angle (or array of angles) into (−π, π]."""
    return math.pi - np.mod(math.pi - angle, 2 * math.pi)


class Eye:
    __slots__ = ("fov_range", "fov_angle", "cells")

    def __init__(self, fov_range: float = FOV_RANGE,
                 fov_angle: float = FOV_ANGLE, cells: int = CELLS):
        if not fov_range > 0:
            raise ValueError(f"fov_range must be positive, got {fov_range}")
        if not fov_angle > 0:
            raise ValueError(f"fov_angle must be positive, got {fov_angle}")
        if not cells > 0:
            raise ValueError(f"cells must be positive, got {cells}")
        self.fov_range = float(fov_range)
        self.fov_angle = float(fov_angle)
        self.cells     = int(cells)

    @classmethod
    def default(cls) -> "Eye":
        return cls(FOV_RANGE, FOV_ANGLE, CELLS)

    def __repr__(self):
        return (f"Eye(fov_range={self.fov_range}, "
                f"fov_angle={self.fov_angle:.4f}, cells={self.cells})")

    # ──────────────────────────────────────────────────────────────────────────

    def process_vision(self, position, rotation: float, foods) -> np.ndarray:
        """
        Args:
            position: (x, y) of the animal
            rotation: heading angle in radians (any range)
            foods:    sequence of Food

        Returns:
            float64 array of shape (cells,), all zeros if nothing is in view
        """
        vision = np.zeros(self.cells, dtype=np.float64)
        if not len(foods):
            return vision

        points = np.array([food.position for food in foods], dtype=np.float64)
        vec    = points - np.asarray(position, dtype=np.float64)
        dist   = np.hypot(vec[:, 0], vec[:, 1])

        angle = wrap_angle(np.arctan2(-vec[:, 0], vec[:, 1]) - rotation)

        half    = self.fov_angle / 2.0
        visible = (dist <= self.fov_range) & (angle >= -half) & (angle <= half)
        if not visible.any():
            return vision

        cell = ((angle[visible] + half) / self.fov_angle * self.cells).astype(int)
        # angle == +half would land one past the last sector
        cell = np.minimum(cell, self.cells - 1)

        intensity = (self.fov_range - dist[visible]) / self.fov_range
        np.add.at(vision, cell, intensity)
        return vision
