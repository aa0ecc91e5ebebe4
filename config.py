"""
ForageSim Configuration
All tunable parameters for the foraging / neuro-evolution simulation.
"""

import math

# ─── World ────────────────────────────────────────────────────────────────────
# The world is the unit torus [0,1) x [0,1); coordinates wrap at the edges.
ANIMAL_COUNT = 40     # animals per world (constant for the world's lifetime)
FOOD_COUNT   = 60     # food items per world (constant for the world's lifetime)

# ─── Eye ──────────────────────────────────────────────────────────────────────
FOV_RANGE = 0.25                      # sensing radius
FOV_ANGLE = math.pi + math.pi / 4     # angular sensing window (radians)
CELLS     = 9                         # eye resolution = brain input size

# ─── Kinematics ───────────────────────────────────────────────────────────────
SPEED_MIN      = 0.001
SPEED_MAX      = 0.005
SPEED_ACCEL    = 0.2           # max |speed change| per step
ROTATION_ACCEL = math.pi / 2   # max |heading change| per step
START_SPEED    = 0.002         # speed at (re)birth

# ─── Feeding ──────────────────────────────────────────────────────────────────
EAT_DISTANCE = 0.01            # animal eats food within this distance

# ─── Generations ──────────────────────────────────────────────────────────────
GENERATION_LENGTH = 2500       # steps before the population evolves

# ─── Genetic Algorithm ────────────────────────────────────────────────────────
MUTATION_CHANCE = 0.01         # probability a single gene is mutated
MUTATION_COEFF  = 0.3          # magnitude of a gene mutation

# ─── Neural Network ───────────────────────────────────────────────────────────
WEIGHT_RANGE = 1.0             # random weights/biases drawn from [-R, R]

# ─── Output / Logging ─────────────────────────────────────────────────────────
SAVE_DIR          = "output"   # directory for saved images and charts
SNAPSHOT_INTERVAL = 10         # save a world snapshot every N generations
SAVE_BRAIN_SAMPLE = True       # save brain diagram of the best animal
LOG_CSV           = True       # write per-generation CSV log
