from __future__ import annotations

import numpy as np
import pytest

from shapes.densify import densify


def test_densify_counts_and_endpoints() -> None:
    v = np.array([[0.0, 0.0], [4.0, 0.0], [4.0, 4.0]])
    out = densify(v, 4)
    assert out.shape == ((3 - 1) * 4 + 1, 2)
    np.testing.assert_allclose(out[0], v[0])
    np.testing.assert_allclose(out[-1], v[-1])
    # 辺の始点は含み、終点は次の辺の始点として 1 度だけ現れる
    np.testing.assert_allclose(out[:5, 0], [0.0, 1.0, 2.0, 3.0, 4.0])
    np.testing.assert_allclose(out[4:, 1], [0.0, 1.0, 2.0, 3.0, 4.0])


def test_densify_segs_per_one_is_identity() -> None:
    v = np.array([[0.0, 0.0], [1.0, 2.0], [3.0, 1.0]])
    np.testing.assert_allclose(densify(v, 1), v)


def test_densify_short_input_is_copied() -> None:
    v = np.array([[1.0, 1.0]])
    out = densify(v, 5)
    np.testing.assert_allclose(out, v)
    assert out is not v


def test_densify_rejects_zero_segments() -> None:
    with pytest.raises(ValueError):
        densify([[0.0, 0.0], [1.0, 0.0]], 0)
