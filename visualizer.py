"""
Visualizer for ForageSim.

Produces:
  1. World snapshots  – food dots and heading triangles for every animal
  2. Fitness chart    – min / avg / max satiation over generations
  3. Brain diagrams   – layered weights of a sampled animal's network
  4. CSV log          – per-generation stats
"""

import os
import csv
import math
import numpy as np
import matplotlib
matplotlib.use("Agg")          # non-interactive backend (no display needed)
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from config import SAVE_DIR, LOG_CSV, EAT_DISTANCE


# ──────────────────────────────────────────────────────────────────────────────
# Directory setup
# ──────────────────────────────────────────────────────────────────────────────

def ensure_dirs(base: str = SAVE_DIR):
    for sub in ("snapshots", "charts", "brains"):
        os.makedirs(os.path.join(base, sub), exist_ok=True)


# ──────────────────────────────────────────────────────────────────────────────
# World snapshot
# ──────────────────────────────────────────────────────────────────────────────

def _triangle(x: float, y: float, size: float, rotation: float) -> list:
    """Corners of an animal marker pointing along its heading."""
    pts = []
    for k, scale in ((0, 1.5), (1, 1.0), (2, 1.0)):
        a = rotation + k * 2.0 * math.pi / 3.0
        pts.append((x - math.sin(a) * size * scale,
                    y + math.cos(a) * size * scale))
    return pts


def save_world_snapshot(world, generation: int, base: str = SAVE_DIR,
                        age: int = None):
    """
    Render the current world: foods as dots, animals as triangles.
    """
    fig, ax = plt.subplots(figsize=(6, 6), dpi=100)
    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_aspect("equal")
    ax.set_facecolor("#111111")
    fig.patch.set_facecolor("#111111")
    title = f"Generation {generation}"
    if age is not None:
        title += f"  (step {age})"
    ax.set_title(title, color="white", fontsize=10)
    ax.tick_params(colors="white")
    for spine in ax.spines.values():
        spine.set_edgecolor("#444444")

    positions, rotations, foods = world.snapshot()
    if len(foods):
        ax.scatter(foods[:, 0], foods[:, 1], color="#44FF44",
                   s=12, linewidths=0)

    size = EAT_DISTANCE
    for (x, y), rot in zip(positions, rotations):
        ax.add_patch(mpatches.Polygon(
            _triangle(x, y, size, rot), closed=True,
            fill=False, edgecolor="white", linewidth=0.8))

    path = os.path.join(base, "snapshots", f"gen_{generation:06d}.png")
    plt.savefig(path, dpi=100, bbox_inches="tight", facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


# ──────────────────────────────────────────────────────────────────────────────
# Fitness chart
# ──────────────────────────────────────────────────────────────────────────────

def save_fitness_chart(history: list, base: str = SAVE_DIR,
                       filename: str = "fitness.png"):
    """
    Plot min / avg / max satiation for every finished generation.
    `history` is a list of Statistics (or their as_dict() form).
    """
    if not history:
        return
    rows = [s if isinstance(s, dict) else s.as_dict() for s in history]
    gens = list(range(1, len(rows) + 1))
    mins = [r["min_fitness"] for r in rows]
    avgs = [r["avg_fitness"] for r in rows]
    maxs = [r["max_fitness"] for r in rows]

    fig, ax = plt.subplots(figsize=(12, 5), dpi=100)
    fig.patch.set_facecolor("#111111")
    ax.set_facecolor("#111111")

    ax.fill_between(gens, mins, maxs, color="#44FF44", alpha=0.12, zorder=1)
    ax.plot(gens, maxs, color="#44FF44", linewidth=1.0, label="Max", zorder=3)
    ax.plot(gens, avgs, color="#CC44FF", linewidth=1.4, label="Average", zorder=3)
    ax.plot(gens, mins, color="#FF8800", linewidth=1.0, alpha=0.8,
            label="Min", zorder=2)

    ax.set_xlabel("Generation", color="white")
    ax.set_ylabel("Satiation (food eaten)", color="white")
    ax.set_ylim(0, max(maxs) * 1.05 if max(maxs) > 0 else 1)
    ax.tick_params(axis="both", colors="white")
    for spine in ax.spines.values():
        spine.set_edgecolor("#444444")

    ax.legend(facecolor="#222222", labelcolor="white",
              loc="upper left", fontsize=8)
    ax.set_title("Evolutionary Progress", color="white", fontsize=12)
    plt.tight_layout()
    path = os.path.join(base, "charts", filename)
    plt.savefig(path, dpi=100, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


# ──────────────────────────────────────────────────────────────────────────────
# Brain diagram
# ──────────────────────────────────────────────────────────────────────────────

def save_brain_diagram(animal, generation: int, label: str = "",
                       base: str = SAVE_DIR):
    """
    Draw the animal's network as a layered graph.
    Eye cells (blue) → hidden (grey) → outputs (pink).
    Green edges = positive weights, red edges = negative.
    """
    layers = animal.brain.nn.layers
    sizes  = [layers[0].inputs] + [l.outputs for l in layers]
    xs     = np.linspace(0.0, 1.0, len(sizes))

    def _column(n):
        return [(i + 1) / (n + 1) for i in range(n)]

    node_pos = [[(x, y) for y in _column(n)] for x, n in zip(xs, sizes)]

    fig, ax = plt.subplots(figsize=(10, 6), dpi=100)
    fig.patch.set_facecolor("#111111")
    ax.set_facecolor("#111111")
    ax.axis("off")
    ax.set_xlim(-0.15, 1.15)
    ax.set_ylim(-0.05, 1.05)

    # Draw edges
    for li, layer in enumerate(layers):
        scale = np.abs(layer.weights).max() or 1.0
        for out_idx, row in enumerate(layer.weights):
            x2, y2 = node_pos[li + 1][out_idx]
            for in_idx, w in enumerate(row):
                x1, y1 = node_pos[li][in_idx]
                color = "#44FF44" if w >= 0 else "#FF4444"
                ax.plot([x1, x2], [y1, y2], color=color,
                        lw=0.2 + 1.5 * abs(w) / scale,
                        alpha=0.25 + 0.5 * abs(w) / scale, zorder=1)

    # Draw nodes
    colors = ["#4499FF"] + ["#AAAAAA"] * (len(sizes) - 2) + ["#FF88AA"]
    for col, color in zip(node_pos, colors):
        for (x, y) in col:
            ax.add_patch(plt.Circle((x, y), 0.015, color=color, zorder=3))

    out_x = node_pos[-1][0][0]
    for (x, y), name in zip(node_pos[-1], ("speed Δ", "rotation Δ")):
        ax.text(out_x + 0.03, y, name, color="white", fontsize=7,
                ha="left", va="center", zorder=4)

    # Column headers
    titles = ["Eye"] + ["Hidden"] * (len(sizes) - 2) + ["Output"]
    for tx, title in zip(xs, titles):
        ax.text(tx, 1.03, title, color="#CCCCCC", ha="center",
                fontsize=9, fontweight="bold")

    ax.set_title(
        f"Gen {generation} — Brain of {label}  "
        f"(satiation {animal.satiation})",
        color="white", fontsize=10, pad=4)

    path = os.path.join(base, "brains", f"gen_{generation:06d}_{label}.png")
    plt.savefig(path, dpi=100, bbox_inches="tight",
                facecolor=fig.get_facecolor())
    plt.close(fig)
    return path


# ──────────────────────────────────────────────────────────────────────────────
# CSV log
# ──────────────────────────────────────────────────────────────────────────────

def append_csv(stats: dict, base: str = SAVE_DIR):
    """Append one generation's stats to a CSV file."""
    if not LOG_CSV:
        return
    path = os.path.join(base, "evolution_log.csv")
    file_exists = os.path.isfile(path)
    with open(path, "a", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=list(stats.keys()))
        if not file_exists:
            writer.writeheader()
        writer.writerow(stats)
