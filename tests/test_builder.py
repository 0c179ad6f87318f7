"""Tests for random projection matrix generation and Gram-Schmidt orthonormalization."""

from __future__ import annotations

import logging

import numpy as np
import pytest
from scipy import stats

from randproj import config
from randproj.projection import ProjectionMatrix, blas_dot, build, build_projection_matrix


def _pairwise_dots(rows: np.ndarray) -> list[float]:
    R = rows.astype(np.float64)
    return [float(R[i] @ R[j]) for i in range(len(R)) for j in range(i + 1, len(R))]


def test_five_to_three_orthonormal_scenario():
    matrix = build(5, 3, True, dtype=np.float64)

    assert isinstance(matrix, ProjectionMatrix)
    assert matrix.rows.shape == (3, 5)
    for row in matrix.rows:
        assert abs(np.linalg.norm(row) - 1.0) < 1e-6
    for value in _pairwise_dots(matrix.rows):
        assert abs(value) < 1e-6


@pytest.mark.parametrize("n_src_dim,n_dst_dim", [(8, 8), (64, 16), (300, 40)])
def test_orthonormal_rows_float32(n_src_dim, n_dst_dim):
    matrix = build_projection_matrix(n_src_dim, n_dst_dim, True, rng=7, dtype=np.float32)

    assert matrix.dtype == np.float32
    assert matrix.orthogonalized
    assert matrix.is_orthonormal(atol=1e-5)


def test_orthonormal_rows_with_blas_kernel():
    matrix = build_projection_matrix(64, 16, True, rng=1, dtype=np.float64, dot=blas_dot)
    assert matrix.is_orthonormal(atol=1e-10)


def test_orthonormalized_rows_span_the_raw_rows():
    raw = build_projection_matrix(20, 4, False, rng=3, dtype=np.float64)
    ortho = build_projection_matrix(20, 4, True, rng=3, dtype=np.float64)

    # Every raw row is a combination of the orthonormal basis.
    coefficients = raw.rows @ ortho.rows.T
    np.testing.assert_allclose(coefficients @ ortho.rows, raw.rows, atol=1e-10)
    # First row is only rescaled.
    np.testing.assert_allclose(
        ortho.rows[0], raw.rows[0] / np.linalg.norm(raw.rows[0]), atol=1e-12
    )


def test_raw_rows_are_standard_normal():
    matrix = build_projection_matrix(500, 200, False, rng=2024, dtype=np.float64)
    entries = matrix.rows.ravel()

    assert not matrix.orthogonalized
    assert abs(entries.mean()) < 0.02
    assert abs(entries.var() - 1.0) < 0.02
    assert stats.kstest(entries[:5000], "norm").pvalue > 1e-3


def test_raw_rows_are_not_normalized():
    matrix = build_projection_matrix(50, 10, False, rng=5)
    norms = np.linalg.norm(matrix.rows.astype(np.float64), axis=1)

    assert not np.allclose(norms, 1.0, atol=1e-3)
    assert not matrix.is_orthonormal()


def test_successive_builds_draw_from_shared_stream(monkeypatch):
    monkeypatch.setattr(config, "PROJECTION_RANDOM_SEED", None)

    first = build(16, 4, True)
    second = build(16, 4, True)

    assert not np.array_equal(first.rows, second.rows)


def test_seeded_builds_are_reproducible():
    first = build_projection_matrix(32, 6, True, rng=42)
    second = build_projection_matrix(32, 6, True, rng=42)
    third = build_projection_matrix(32, 6, True, rng=43)

    np.testing.assert_array_equal(first.rows, second.rows)
    assert not np.array_equal(first.rows, third.rows)


def test_config_seed_used_when_no_rng_given(monkeypatch):
    monkeypatch.setattr(config, "PROJECTION_RANDOM_SEED", 11)

    np.testing.assert_array_equal(build(10, 3, False).rows, build(10, 3, False).rows)


def test_owned_generator_continues_its_stream():
    rng = np.random.default_rng(0)
    first = build_projection_matrix(10, 3, False, rng=rng, dtype=np.float64)
    second = build_projection_matrix(10, 3, False, rng=rng, dtype=np.float64)

    expected = np.random.default_rng(0).standard_normal((6, 10))
    np.testing.assert_array_equal(np.vstack([first.rows, second.rows]), expected)


def test_default_dtype_follows_config(monkeypatch):
    monkeypatch.setattr(config, "PROJECTION_DTYPE", np.float64)
    assert build(4, 2, False, rng=0).dtype == np.float64


def test_built_matrix_is_read_only():
    matrix = build(6, 2, True, rng=0)
    with pytest.raises(ValueError):
        matrix.rows[0, 0] = 1.0


def test_injected_dot_used_for_every_inner_product():
    calls = []

    def counting_dot(a, b):
        calls.append(1)
        return float(np.dot(a.astype(np.float64), b.astype(np.float64)))

    build_projection_matrix(10, 4, True, rng=0, dot=counting_dot)
    # 4 norms + 3 + 2 + 1 projection coefficients
    assert len(calls) == 10

    calls.clear()
    build_projection_matrix(10, 4, False, rng=0, dot=counting_dot)
    assert calls == []


def test_overcomplete_orthonormalization_degenerates_with_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="randproj.projection.builder"):
        with np.errstate(all="ignore"):
            matrix = build_projection_matrix(3, 5, True, rng=0, dtype=np.float64)

    assert matrix.rows.shape == (5, 3)
    assert "degenerate" in caplog.text
    head = ProjectionMatrix(rows=matrix.rows[:3].copy())
    assert head.is_orthonormal(atol=1e-10)
    assert not matrix.is_orthonormal()


def test_overcomplete_orthonormalization_can_be_rejected(monkeypatch):
    with pytest.raises(ValueError, match="Cannot orthonormalize 5 rows"):
        build_projection_matrix(3, 5, True, rng=0, reject_overcomplete=True)

    monkeypatch.setattr(config, "REJECT_OVERCOMPLETE_ORTHONORMALIZATION", True)
    with pytest.raises(ValueError):
        build_projection_matrix(3, 5, True, rng=0)
    # Raw projections are never overcomplete-checked.
    assert build_projection_matrix(3, 5, False, rng=0).rows.shape == (5, 3)
