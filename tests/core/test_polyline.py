from __future__ import annotations

import math

import numpy as np
import pytest

from engine.core.polyline import (
    as_polyline,
    nearest_on_polyline,
    nearest_on_segment,
    polyline_length,
    segment_length,
)


def test_segment_length_is_euclidean() -> None:
    assert segment_length((0.0, 0.0), (3.0, 4.0)) == pytest.approx(5.0)
    assert segment_length((1.0, 1.0), (1.0, 1.0)) == 0.0


def test_polyline_length_sums_segments(square_path: np.ndarray, l_path: np.ndarray) -> None:
    assert polyline_length(square_path) == pytest.approx(400.0)
    assert polyline_length(l_path) == pytest.approx(20.0)


def test_polyline_length_degenerate_inputs_are_zero() -> None:
    assert polyline_length(np.empty((0, 2))) == 0.0
    assert polyline_length([[5.0, 5.0]]) == 0.0
    assert polyline_length([[1.0, 2.0], [1.0, 2.0]]) == 0.0


def test_as_polyline_rejects_bad_shape() -> None:
    with pytest.raises(ValueError):
        as_polyline([[0.0, 0.0, 0.0]])
    with pytest.raises(ValueError):
        as_polyline([0.0, 1.0])


def test_nearest_on_segment_projects_and_clamps() -> None:
    q, t, d = nearest_on_segment((5.0, 3.0), (0.0, 0.0), (10.0, 0.0))
    assert q == pytest.approx((5.0, 0.0))
    assert t == pytest.approx(0.5)
    assert d == pytest.approx(3.0)

    # 端点の外側は端点にクランプ
    q, t, d = nearest_on_segment((-4.0, 3.0), (0.0, 0.0), (10.0, 0.0))
    assert q == pytest.approx((0.0, 0.0))
    assert t == 0.0
    assert d == pytest.approx(5.0)

    q, t, _ = nearest_on_segment((20.0, 0.0), (0.0, 0.0), (10.0, 0.0))
    assert q == pytest.approx((10.0, 0.0))
    assert t == 1.0


def test_nearest_on_segment_zero_length_resolves_to_start() -> None:
    q, t, d = nearest_on_segment((3.0, 4.0), (0.0, 0.0), (0.0, 0.0))
    assert q == (0.0, 0.0)
    assert t == 0.0
    assert d == pytest.approx(5.0)


def test_nearest_on_polyline_reports_arc_length(l_path: np.ndarray) -> None:
    near = nearest_on_polyline((12.0, 4.0), l_path)
    assert near.segment_index == 1
    assert near.point == pytest.approx((10.0, 4.0))
    assert near.distance == pytest.approx(2.0)
    assert near.t == pytest.approx(0.4)
    assert near.arc_length == pytest.approx(14.0)


def test_nearest_on_polyline_vertices_have_zero_distance(square_path: np.ndarray) -> None:
    for i, v in enumerate(square_path[:-1]):
        near = nearest_on_polyline((float(v[0]), float(v[1])), square_path)
        assert near.distance == pytest.approx(0.0, abs=1e-12)
        assert near.arc_length == pytest.approx(100.0 * i)


def test_nearest_on_polyline_ties_keep_first_segment(square_path: np.ndarray) -> None:
    # 先頭＝末尾の点では線分 0 の t=0（弧長 0）を採用する
    near = nearest_on_polyline((0.0, 0.0), square_path)
    assert near.segment_index == 0
    assert near.arc_length == 0.0


def test_nearest_on_polyline_is_idempotent(square_path: np.ndarray) -> None:
    first = nearest_on_polyline((37.0, -12.0), square_path)
    second = nearest_on_polyline(first.point, square_path)
    assert second.distance == pytest.approx(0.0, abs=1e-9)
    assert second.point == pytest.approx(first.point)
    assert second.arc_length == pytest.approx(first.arc_length)


def test_nearest_on_polyline_single_point() -> None:
    near = nearest_on_polyline((3.0, 4.0), [[0.0, 0.0]])
    assert near.distance == pytest.approx(5.0)
    assert near.point == (0.0, 0.0)
    assert near.arc_length == 0.0


def test_nearest_on_polyline_empty_raises() -> None:
    with pytest.raises(ValueError):
        nearest_on_polyline((0.0, 0.0), np.empty((0, 2)))


def test_nearest_on_polyline_circle_distance_matches_radius() -> None:
    n = 400
    t = np.linspace(0.0, 2.0 * math.pi, n + 1)
    circle = np.stack([np.cos(t) * 100.0, np.sin(t) * 100.0], axis=1)
    near = nearest_on_polyline((0.0, 130.0), circle)
    # 弦近似の誤差は小さい
    assert near.distance == pytest.approx(30.0, abs=0.1)
