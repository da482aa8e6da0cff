"""
Demo of school bus stop placement.

This example shows how to:
1. Generate synthetic student homes around a few neighbourhoods
2. Explore them (closest pair, average-linkage clustering tree)
3. Place stops with K-means and compare coverage for several K
"""

import torch
import matplotlib.pyplot as plt

# Add parent directory to path for imports
import sys
sys.path.append('..')

from stopplacer import (
    Point, InsufficientData, find_closest_pair, HierarchicalClusterer,
    KMeansPlacer, evaluate_placement, plot_points_2d, plot_placement,
    plot_dendrogram, stops_table
)


def generate_homes(n_per_neighbourhood=6, spread=1.5):
    """Scatter homes around three neighbourhood centres."""
    torch.manual_seed(42)

    centres = torch.tensor([[2.0, 3.0], [9.0, 8.0], [12.0, 1.0]], dtype=torch.float64)
    homes = []
    for c, centre in enumerate(centres):
        offsets = torch.randn(n_per_neighbourhood, 2, dtype=torch.float64) * spread
        for i, (x, y) in enumerate((centre + offsets).tolist()):
            homes.append(Point(f"H{c + 1}.{i + 1}", round(x, 2), round(y, 2)))
    return homes


def explore(homes):
    """Closest pair and clustering tree."""
    result = find_closest_pair(homes)
    if isinstance(result, InsufficientData):
        print(result)
    else:
        print(f"Closest pair: {result.first.id} ({result.first.x}, {result.first.y}) and "
              f"{result.second.id} ({result.second.x}, {result.second.y})")
        print(f"Distance: {result.distance:.3f} units")

    clusterer = HierarchicalClusterer(verbose=1).fit(homes)
    print(f"Merge steps: {len(clusterer.merge_steps_)}")
    print(f"Final root cluster: {clusterer.root_.id}, covering {clusterer.root_.size} points")
    print("Clustering tree (top = final merged cluster)\n")
    print(clusterer.format_tree())
    return clusterer


def compare_k(homes, ks=(1, 2, 3, 4, 5), max_walk=2.0):
    """Coverage and walking distance as the number of stops grows."""
    print(f"{'K':>3} {'avg walk':>9} {'max walk':>9} {'coverage':>9}")
    results = []
    for k in ks:
        placer = KMeansPlacer(k).fit(homes)
        metrics = evaluate_placement(homes, placer.clusters_, max_walk)
        results.append((placer, metrics))
        print(f"{metrics.stop_count:>3} {metrics.avg_distance:>9.2f} "
              f"{metrics.max_distance:>9.2f} {metrics.coverage_percent:>8.1f}%")
    return results


def main():
    homes = generate_homes()
    print(f"Loaded {len(homes)} homes\n")

    clusterer = explore(homes)
    results = compare_k(homes)

    placer, metrics = results[2]
    print("\nStops for K=3")
    for stop, size, x, y in stops_table(placer.clusters_):
        print(f"  Stop {stop}: {size} homes at ({x:.2f}, {y:.2f})")

    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    plot_points_2d(homes, ax=axes[0], title='Student homes')
    plot_dendrogram(clusterer.root_, homes, ax=axes[1], title='Average-linkage tree')
    plot_placement(homes, placer.clusters_, ax=axes[2],
                   title=f'K=3, coverage {metrics.coverage_percent:.1f}%')
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
