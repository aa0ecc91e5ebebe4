"""
ForageSim – Main Entry Point
============================

Headless training: every generation is fast-forwarded with
Simulation.train(), its fitness statistics are printed and logged.

Usage examples:
  python main.py                          # 100 generations, random seed
  python main.py --gens 300 --seed 42     # reproducible run
  python main.py --steps 1000             # shorter generations
  python main.py --mutation_chance 0.05   # more aggressive mutation
  python main.py --animals 80 --foods 120 # bigger world population
"""

import argparse
import time

import numpy as np

from simulation import Simulation
from genome import chromosome_diversity
from visualizer import (ensure_dirs, save_world_snapshot,
                        save_fitness_chart, save_brain_diagram,
                        append_csv)
from config import (SAVE_DIR, SNAPSHOT_INTERVAL, SAVE_BRAIN_SAMPLE,
                    ANIMAL_COUNT, FOOD_COUNT, GENERATION_LENGTH,
                    MUTATION_CHANCE, MUTATION_COEFF)


# ──────────────────────────────────────────────────────────────────────────────
# CLI
# ──────────────────────────────────────────────────────────────────────────────

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="ForageSim – neuro-evolution of foraging animals")
    p.add_argument("--gens",     type=int,   default=100,
                   help="Number of generations to train")
    p.add_argument("--steps",    type=int,   default=GENERATION_LENGTH,
                   help="Simulation steps per generation")
    p.add_argument("--animals",  type=int,   default=ANIMAL_COUNT,
                   help="Number of animals")
    p.add_argument("--foods",    type=int,   default=FOOD_COUNT,
                   help="Number of food items")
    p.add_argument("--mutation_chance", type=float, default=MUTATION_CHANCE,
                   help="Probability a gene is mutated")
    p.add_argument("--mutation_coeff",  type=float, default=MUTATION_COEFF,
                   help="Magnitude of a gene mutation")
    p.add_argument("--seed",     type=int,   default=None,
                   help="Random seed for reproducibility")
    p.add_argument("--outdir",   default=SAVE_DIR,
                   help="Output directory")
    p.add_argument("--snapshot_interval", type=int, default=SNAPSHOT_INTERVAL,
                   help="Save a world snapshot every N generations")
    return p.parse_args(argv)


# ──────────────────────────────────────────────────────────────────────────────
# One generation
# ──────────────────────────────────────────────────────────────────────────────

def run_generation(sim: Simulation, rng, outdir: str, snapshot: bool):
    """
    Train one generation.  When a snapshot is due, stop one step short of
    evolution so the world and the best brain of this generation can be
    saved before they are replaced.
    """
    if not snapshot:
        return sim.train(rng)

    while sim.age < sim.generation_length:
        sim.step(rng)

    gen_idx = sim.generation
    path = save_world_snapshot(sim.world, gen_idx, outdir, age=sim.age)
    print(f"  → Snapshot: {path}")

    if SAVE_BRAIN_SAMPLE and sim.world.animals:
        best  = max(sim.world.animals, key=lambda a: a.satiation)
        bpath = save_brain_diagram(best, gen_idx, "best", outdir)
        print(f"  → Brain diagram: {bpath}")

    return sim.train(rng)


def print_stats(gen_idx: int, stats, diversity: float, elapsed: float):
    print(
        f"Gen {gen_idx:>5}  |  "
        f"{stats}  |  "
        f"diversity {diversity:.3f}  |  "
        f"{elapsed:.2f}s"
    )


# ──────────────────────────────────────────────────────────────────────────────
# Main
# ──────────────────────────────────────────────────────────────────────────────

def main(argv=None):
    args = parse_args(argv)
    ensure_dirs(args.outdir)

    print("=" * 60)
    print("  ForageSim – Neuro-evolution of Foraging Animals")
    print("=" * 60)
    print(f"  Animals    : {args.animals}")
    print(f"  Foods      : {args.foods}")
    print(f"  Generations: {args.gens}")
    print(f"  Steps/gen  : {args.steps}")
    print(f"  Mutation   : chance {args.mutation_chance}, coeff {args.mutation_coeff}")
    print(f"  Seed       : {args.seed}")
    print(f"  Output dir : {args.outdir}")
    print("=" * 60)

    rng = np.random.default_rng(args.seed)
    sim = Simulation.random(
        rng,
        animals           = args.animals,
        foods             = args.foods,
        generation_length = args.steps,
        mutation_chance   = args.mutation_chance,
        mutation_coeff    = args.mutation_coeff,
    )

    for gen_idx in range(args.gens):
        t0 = time.time()
        snapshot = args.snapshot_interval > 0 and gen_idx % args.snapshot_interval == 0
        stats = run_generation(sim, rng, args.outdir, snapshot)
        elapsed = time.time() - t0

        diversity = chromosome_diversity(
            [a.as_chromosome() for a in sim.world.animals])

        row = {"generation": gen_idx, **stats.as_dict(),
               "diversity": round(diversity, 4),
               "elapsed_s": round(elapsed, 3)}
        append_csv(row, args.outdir)
        print_stats(gen_idx, stats, diversity, elapsed)

        if gen_idx % 100 == 0 and gen_idx > 0:
            save_fitness_chart(sim.history, args.outdir)

    print("\nSaving final fitness chart …")
    chart_path = save_fitness_chart(sim.history, args.outdir, "fitness_final.png")
    print(f"  → {chart_path}")

    print("\nDone! All outputs saved to:", args.outdir)
    return sim


if __name__ == "__main__":
    main()
