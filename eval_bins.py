"""
Landing distribution for every variant.

Metrics:
  1. Counts and frequencies per bin
  2. Expected label value per landed ball
  3. Centre bias (mean distance from the middle bin)
  4. Example drop path per variant
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import os
import plinko as P
from plinko.config import VARIANTS
from plinko.engine import drop_trajectory, simulate_drops
from plinko.metrics import bin_frequencies, center_bias, expected_label_value


def evaluate(n_balls=P.N_DROPS, seed=P.SEED):
    results = {}
    for name, variant in VARIANTS.items():
        print(f"Simulating {n_balls} drops: {name}")
        res = simulate_drops(n_balls, layout=variant.layout, physics=variant.physics, seed=seed)
        traj = drop_trajectory(layout=variant.layout, physics=variant.physics, seed=seed)
        results[name] = (res, traj)

        freqs = bin_frequencies(res['counts'])
        print(f"  counts:     {res['counts'].tolist()}")
        print(f"  freqs:      {np.round(freqs, 3).tolist()}")
        print(f"  E[label]:   {expected_label_value(res['counts'], res['labels']):.2f}")
        print(f"  centre bias: {center_bias(res['counts']):.3f} bins")
        print(f"  missed: {res['missed']}, unsettled: {res['unsettled']}, ticks: {res['steps']}")

    os.makedirs('results/plots', exist_ok=True)

    # ── Histograms ──
    fig, axes = plt.subplots(1, len(results), figsize=(4.5 * len(results), 4), sharey=True)
    axes = np.atleast_1d(axes)
    for ax, (name, (res, _)) in zip(axes, results.items()):
        x = np.arange(len(res['labels']))
        ax.bar(x, bin_frequencies(res['counts']), color='#FFB450')
        ax.set_xticks(x)
        ax.set_xticklabels(res['labels'])
        ax.set_title(name)
        ax.set_xlabel('Bin')
        ax.grid(True, axis='y', alpha=0.3)
    axes[0].set_ylabel('Frequency')
    plt.suptitle(f'Landing distribution ({n_balls} drops, seed={seed})')
    plt.tight_layout()
    plt.savefig('results/plots/bins_by_variant.png', dpi=150)
    plt.close()

    # ── Example paths ──
    fig, axes = plt.subplots(1, len(results), figsize=(3 * len(results), 5))
    axes = np.atleast_1d(axes)
    for ax, (name, (_, traj)) in zip(axes, results.items()):
        geo = traj['geometry']
        ax.scatter(geo.pegs[:, 0], geo.pegs[:, 1], s=4, color='gray')
        for seg in geo.walls:
            ax.plot([seg.x1, seg.x2], [seg.y1, seg.y2], color='#66AAFF')
        for d in geo.dividers:
            ax.plot([d, d], [geo.slot_y, geo.slot_y + geo.slot_height], color='#AAAAFF')
        states = traj['states']
        ax.plot(states[:, 0], states[:, 1], color='#FF7F0E', linewidth=1.2)
        ax.set_xlim(0, geo.width)
        ax.set_ylim(geo.height, 0)
        ax.set_aspect('equal')
        ax.set_title(f"{name} → {traj['label']}")
    plt.tight_layout()
    plt.savefig('results/plots/paths_by_variant.png', dpi=150)
    plt.close()

    print(f"\nPlots saved:")
    print(f"  results/plots/bins_by_variant.png")
    print(f"  results/plots/paths_by_variant.png")
    return results


if __name__ == "__main__":
    evaluate()
