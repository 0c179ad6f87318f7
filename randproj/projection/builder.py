"""Random projection matrix generation.

Draws a dense Gaussian matrix and optionally orthonormalizes its rows with
the modified Gram-Schmidt process.

Unorthogonalized rows are raw N(0, 1) samples: neither unit length nor
mutually orthogonal (a plain Johnson-Lindenstrauss projection).
Orthonormalized rows form an orthonormal basis of a random
``n_dst_dim``-dimensional subspace whenever ``n_dst_dim <= n_src_dim``.

References
----------
Johnson, W. B., & Lindenstrauss, J. (1984). Extensions of Lipschitz
    mappings into a Hilbert space. Contemporary Mathematics, 26, 189-206.
Björck, Å. (1967). Solving linear least squares problems by Gram-Schmidt
    orthogonalization. BIT Numerical Mathematics, 7(1), 1-21.
"""

from __future__ import annotations

import logging

import numpy as np

from randproj import config

from .dot_product import DotProduct, get_dot_product
from .matrix import ProjectionMatrix
from .random_source import resolve_rng

logger = logging.getLogger(__name__)


def _draw_gaussian_rows(
    n_src_dim: int,
    n_dst_dim: int,
    rng: np.random.Generator,
    dtype: type,
) -> np.ndarray:
    """Fill an ``n_dst_dim × n_src_dim`` array with independent N(0, 1) draws."""
    # Generator.standard_normal only produces float32/float64 directly.
    if np.dtype(dtype) in (np.dtype(np.float32), np.dtype(np.float64)):
        return rng.standard_normal((n_dst_dim, n_src_dim), dtype=dtype)
    return rng.standard_normal((n_dst_dim, n_src_dim)).astype(dtype)


def _modified_gram_schmidt(rows: np.ndarray, dot: DotProduct) -> None:
    """Orthonormalize *rows* in place, in row order.

    Each row is normalized as soon as all earlier rows have been subtracted
    from it, then immediately used to deflate every later row. Since row
    ``i`` already has unit length, the projection coefficient is a plain dot
    product.
    """
    n_rows = rows.shape[0]
    for i in range(n_rows):
        basis = rows[i]
        norm = np.sqrt(dot(basis, basis))
        basis /= norm

        for k in range(i + 1, n_rows):
            coeff = dot(basis, rows[k])
            rows[k] -= coeff * basis


def build_projection_matrix(
    n_src_dim: int,
    n_dst_dim: int,
    orthogonalize: bool,
    *,
    rng: np.random.Generator | int | None = None,
    dtype: type | None = None,
    dot: DotProduct | None = None,
    reject_overcomplete: bool | None = None,
) -> ProjectionMatrix:
    """Generate a random projection from ``n_src_dim`` to ``n_dst_dim`` dimensions.

    Parameters
    ----------
    n_src_dim : int
        Source dimension (length of every row). Not validated beyond what
        array allocation enforces.
    n_dst_dim : int
        Target dimension (number of rows).
    orthogonalize : bool
        Orthonormalize the rows with modified Gram-Schmidt.
    rng : numpy.random.Generator, int or None
        Random source. None uses ``config.PROJECTION_RANDOM_SEED`` or, if
        that is None too, the shared process-wide source.
    dtype : type, optional
        Storage precision. Defaults to ``config.PROJECTION_DTYPE``.
    dot : DotProduct, optional
        Inner product kernel. Defaults to ``config.DOT_PRODUCT_KERNEL``.
    reject_overcomplete : bool, optional
        Raise instead of orthonormalizing more rows than source dimensions.
        Defaults to ``config.REJECT_OVERCOMPLETE_ORTHONORMALIZATION``.

    Returns
    -------
    ProjectionMatrix
        Read-only matrix of shape ``(n_dst_dim, n_src_dim)``.

    Raises
    ------
    ValueError
        If orthonormalization of an overcomplete basis is rejected.
    """
    if dtype is None:
        dtype = config.PROJECTION_DTYPE
    if dot is None:
        dot = get_dot_product()
    if reject_overcomplete is None:
        reject_overcomplete = config.REJECT_OVERCOMPLETE_ORTHONORMALIZATION

    if orthogonalize and n_dst_dim > n_src_dim:
        if reject_overcomplete:
            raise ValueError(
                f"Cannot orthonormalize {n_dst_dim} rows in a {n_src_dim}-dimensional space"
            )
        logger.warning(
            "Orthonormalizing %d rows in a %d-dimensional space: "
            "rows beyond index %d will be degenerate.",
            n_dst_dim,
            n_src_dim,
            n_src_dim - 1,
        )

    source = resolve_rng(rng)
    rows = _draw_gaussian_rows(n_src_dim, n_dst_dim, source, dtype)

    if orthogonalize:
        _modified_gram_schmidt(rows, dot)

    logger.debug(
        "Built projection matrix: %d -> %d (dtype=%s, orthogonalize=%s)",
        n_src_dim,
        n_dst_dim,
        np.dtype(dtype).name,
        orthogonalize,
    )
    return ProjectionMatrix._take_ownership(rows, orthogonalize)


build = build_projection_matrix


__all__ = [
    "build",
    "build_projection_matrix",
]
