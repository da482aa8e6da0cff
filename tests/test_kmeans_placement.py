# tests/test_kmeans_placement.py
"""
K-means stop placement: worked example, clamping, empty clusters, warm start.
"""

from __future__ import annotations

import math

import numpy as np
import pytest
import torch

from stopplacer import Point, Centroid, KMeansPlacer, place_by_kmeans
from stopplacer.algorithms.kmeans import KMeansObjective
from stopplacer.representations import CentroidRepresentation
from stopplacer.assignments import HardAssignment
from data_gen import make_neighbourhoods, make_uniform, make_coincident
from utils import sum_squared_to_centroids


def _members(clusters):
    return [c.members for c in clusters]


def test_example_two_stops(abcd_points):
    placer = KMeansPlacer(2).fit(abcd_points)

    assert _members(placer.clusters_) == [[0, 1, 2], [3]]
    assert placer.clusters_[0].centroid.x == pytest.approx(1 / 3)
    assert placer.clusters_[0].centroid.y == pytest.approx(1 / 3)
    assert placer.clusters_[1].centroid == Centroid(10.0, 10.0)

    assert placer.n_iter_ == 3
    assert placer.converged_
    assert placer.inertia_ == pytest.approx(4 / 3)
    assert placer.labels_.tolist() == [0, 0, 0, 1]


def test_history_tracks_moved_points(abcd_points):
    placer = KMeansPlacer(2).fit(abcd_points)
    assert [s.n_changed for s in placer.history_] == [2, 1, 0]
    assert [s.converged for s in placer.history_] == [False, False, True]
    assert placer.history_[0].objective_value == pytest.approx(91.0)
    assert placer.history_[1].cluster_state.means[1].tolist() == [10.0, 10.0]


@pytest.mark.parametrize("k", [0, -1])
def test_non_positive_k_places_nothing(k, abcd_points):
    assert place_by_kmeans(abcd_points, k) == []


def test_empty_snapshot_places_nothing():
    placer = KMeansPlacer(3).fit([])
    assert placer.clusters_ == []
    assert placer.effective_k_ == 0
    assert placer.cluster_centers_.shape == (0, 2)
    with pytest.raises(ValueError):
        placer.predict([(1.0, 1.0)])


def test_k_larger_than_points_is_clamped():
    pts = [Point("a", 0.0, 0.0), Point("b", 4.0, 0.0), Point("c", 0.0, 4.0)]
    with pytest.warns(UserWarning, match="only 3 points"):
        placer = KMeansPlacer(5).fit(pts)
    assert placer.effective_k_ == 3
    assert _members(placer.clusters_) == [[0], [1], [2]]
    assert [(c.centroid.x, c.centroid.y) for c in placer.clusters_] == \
        [(0.0, 0.0), (4.0, 0.0), (0.0, 4.0)]
    assert placer.n_iter_ == 2


def test_duplicates_leave_empty_cluster_in_place():
    pts = [Point("a", 0.0, 0.0), Point("b", 0.0, 0.0), Point("c", 5.0, 5.0)]
    clusters = place_by_kmeans(pts, 2)

    assert len(clusters) == 2
    assert clusters[0].members == [0, 1, 2]
    assert clusters[0].centroid.x == pytest.approx(5 / 3)
    assert clusters[0].centroid.y == pytest.approx(5 / 3)
    # Nothing ever joined the second stop, so it never moved
    assert clusters[1].members == []
    assert clusters[1].centroid == Centroid(0.0, 0.0)


def test_coincident_points_all_join_first_stop():
    clusters = place_by_kmeans(make_coincident(5), 3)
    assert _members(clusters) == [[0, 1, 2, 3, 4], [], []]
    assert all(c.centroid == Centroid(3.0, 4.0) for c in clusters)


def test_max_iter_zero_keeps_seed_locations(abcd_points):
    placer = KMeansPlacer(2, max_iter=0).fit(abcd_points)
    assert placer.n_iter_ == 0
    assert not placer.converged_
    assert _members(placer.clusters_) == [[0, 1, 2, 3], []]
    assert placer.clusters_[0].centroid == Centroid(0.0, 0.0)
    assert placer.clusters_[1].centroid == Centroid(1.0, 0.0)


def test_iteration_cap_warns_when_verbose():
    pts = make_uniform(40, seed=5)
    with pytest.warns(UserWarning, match="Failed to converge"):
        placer = KMeansPlacer(6, max_iter=1, verbose=1).fit(pts)
    assert placer.n_iter_ == 1
    assert not placer.converged_


@pytest.mark.parametrize("k", [1, 2, 3, 4, 7])
def test_partition_and_centroid_invariants(k):
    pts = make_neighbourhoods(n_per=8, seed=k)
    clusters = place_by_kmeans(pts, k)

    assert len(clusters) == k
    flat = sorted(i for c in clusters for i in c.members)
    assert flat == list(range(len(pts)))
    for c in clusters:
        assert c.members == sorted(c.members)
        if c.members:
            xs = [pts[i].x for i in c.members]
            ys = [pts[i].y for i in c.members]
            assert c.centroid.x == pytest.approx(sum(xs) / len(xs))
            assert c.centroid.y == pytest.approx(sum(ys) / len(ys))


def test_converged_placement_is_a_fixed_point():
    pts = make_neighbourhoods(n_per=10, seed=2)
    placer = KMeansPlacer(3).fit(pts)
    assert placer.converged_

    centres = [(c.centroid.x, c.centroid.y) for c in placer.clusters_]
    for cluster_idx, cluster in enumerate(placer.clusters_):
        for i in cluster.members:
            d = [math.hypot(pts[i].x - cx, pts[i].y - cy) for cx, cy in centres]
            assert d[cluster_idx] <= min(d) + 1e-12


def test_single_stop_is_global_mean():
    pts = make_uniform(12, seed=9)
    (cluster,) = place_by_kmeans(pts, 1)
    assert cluster.members == list(range(12))
    assert cluster.centroid.x == pytest.approx(np.mean([p.x for p in pts]))
    assert cluster.centroid.y == pytest.approx(np.mean([p.y for p in pts]))


def test_well_separated_neighbourhoods_are_recovered():
    pts = make_neighbourhoods(n_per=15, spread=0.5, seed=0)
    # Seed one stop in each neighbourhood
    init = [(pts[0].x, pts[0].y), (pts[15].x, pts[15].y), (pts[30].x, pts[30].y)]
    placer = KMeansPlacer(3, init=init).fit(pts)
    assert _members(placer.clusters_) == [list(range(0, 15)),
                                          list(range(15, 30)),
                                          list(range(30, 45))]


def test_warm_start_from_previous_stops(abcd_points):
    placer = KMeansPlacer(2, init=[(0.0, 0.0), Centroid(10.0, 10.0)]).fit(abcd_points)
    assert placer.labels_.tolist() == [0, 0, 0, 1]
    assert placer.n_iter_ == 2

    again = KMeansPlacer(2, init=placer.cluster_centers_).fit(abcd_points)
    assert again.n_iter_ == 2
    assert torch.allclose(again.cluster_centers_, placer.cluster_centers_)


def test_bad_init_rejected(abcd_points):
    with pytest.raises(ValueError, match="Unknown init"):
        KMeansPlacer(2, init="random").fit(abcd_points)
    with pytest.raises(ValueError):
        KMeansPlacer(2, init=[(0.0, 0.0)]).fit(abcd_points)


def test_predict_uses_placed_stops(abcd_points):
    placer = KMeansPlacer(2)
    with pytest.raises(RuntimeError):
        placer.predict([(0.0, 0.0)])
    placer.fit(abcd_points)
    assert placer.predict([(9.0, 9.0), (0.2, 0.1)]).tolist() == [1, 0]


def test_fit_predict_and_array_input(abcd_points):
    arr = np.array([[p.x, p.y] for p in abcd_points])
    labels = KMeansPlacer(2).fit_predict(arr)
    assert labels.tolist() == [0, 0, 0, 1]
    assert KMeansPlacer(2).place(torch.from_numpy(arr))[1].members == [3]


def test_objective_matches_brute_force():
    pts = make_uniform(20, seed=4)
    placer = KMeansPlacer(4).fit(pts)
    X = np.array([[p.x, p.y] for p in pts])
    expected = sum_squared_to_centroids(pts, placer.clusters_)
    assert placer.inertia_ == pytest.approx(expected)

    objective = KMeansObjective()
    assert objective.minimize
    value = objective.compute(torch.from_numpy(X), placer.representations, placer.labels_)
    assert value.item() == pytest.approx(expected)


def test_centroid_representation_keeps_location_for_empty_update():
    rep = CentroidRepresentation(2)
    rep.mean = torch.tensor([2.0, 3.0], dtype=torch.float64)
    rep.update_from_points(torch.zeros((0, 2), dtype=torch.float64))
    assert rep.as_centroid() == Centroid(2.0, 3.0)


def test_params_round_trip():
    placer = KMeansPlacer(3, max_iter=20)
    params = placer.get_params()
    assert params["n_clusters"] == 3
    assert params["max_iter"] == 20
    assert params["init"] == "first-points"
    placer.set_params(n_clusters=2)
    assert placer.n_clusters == 2


def test_objective_never_increases():
    pts = make_uniform(50, seed=17)
    placer = KMeansPlacer(5).fit(pts)
    values = [s.objective_value for s in placer.history_]
    assert len(values) == placer.n_iter_
    for before, after in zip(values, values[1:]):
        assert after <= before + 1e-9


def test_nan_home_does_not_capture_other_homes():
    pts = [Point("A", 0.0, 0.0), Point("B", 10.0, 0.0), Point("C", 0.5, 0.0),
           Point("N", float("nan"), 0.0), Point("E", 10.5, 0.0)]
    clusters = place_by_kmeans(pts, 2)

    # The NaN home ends alone on the stop it poisoned; everyone else moves on
    assert _members(clusters) == [[3], [0, 1, 2, 4]]
    assert math.isnan(clusters[0].centroid.x)
    assert clusters[1].centroid == Centroid(5.25, 0.0)


def test_hard_assignment_skips_nan_distances():
    reps = []
    for loc in ([float("nan"), 0.0], [4.0, 0.0], [1.0, 0.0]):
        rep = CentroidRepresentation(2)
        rep.mean = torch.tensor(loc, dtype=torch.float64)
        reps.append(rep)
    points = torch.tensor([[0.0, 0.0], [3.0, 0.0], [float("nan"), 1.0]], dtype=torch.float64)
    assert HardAssignment().compute_assignments(points, reps).tolist() == [2, 1, 0]
