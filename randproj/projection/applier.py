"""Projecting source vectors through a built projection matrix.

``apply_projection`` is the per-vector hot path: one dot product per target
dimension. Dimension mismatches between the matrix and the vectors are
contract violations; they are logged at CRITICAL and raised as
``ProjectionContractError``.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from .dot_product import DotProduct, get_dot_product
from .errors import ProjectionContractError
from .matrix import ProjectionMatrix

logger = logging.getLogger(__name__)


def _contract_violation(message: str) -> ProjectionContractError:
    logger.critical("%s", message)
    return ProjectionContractError(message)


def _check_dimensions(
    matrix: ProjectionMatrix | Sequence[np.ndarray],
    n_src_dim: int,
    n_dst_dim: int,
) -> None:
    if len(matrix) == 0:
        raise _contract_violation("Bug: empty projection matrix")
    if len(matrix) != n_dst_dim:
        raise _contract_violation(
            f"Bug: the # of rows in the projection matrix ({len(matrix)}) "
            f"isn't equal to the number of vector elements in the target space ({n_dst_dim})"
        )
    if isinstance(matrix, ProjectionMatrix):
        if matrix.n_src_dim != n_src_dim:
            raise _contract_violation(
                f"Bug: row index 0 the number of columns ({matrix.n_src_dim}) "
                f"isn't equal to the number of vector elements in the source space ({n_src_dim})"
            )
        return
    for i, row in enumerate(matrix):
        if len(row) != n_src_dim:
            raise _contract_violation(
                f"Bug: row index {i} the number of columns ({len(row)}) "
                f"isn't equal to the number of vector elements in the source space ({n_src_dim})"
            )


def apply_projection(
    matrix: ProjectionMatrix | Sequence[np.ndarray],
    source: np.ndarray,
    dest: np.ndarray | None = None,
    *,
    dot: DotProduct | None = None,
) -> np.ndarray:
    """Project *source* into the target space.

    Parameters
    ----------
    matrix
        Built projection matrix, or any sequence of rows.
    source
        Vector of ``n_src_dim`` elements.
    dest
        Optional output buffer of ``n_dst_dim`` elements, written in place.
        When omitted a new array of the matrix precision is returned.
    dot
        Inner product kernel. Defaults to ``config.DOT_PRODUCT_KERNEL``.

    Returns
    -------
    np.ndarray
        ``dest`` with ``dest[i] = <matrix[i], source>``.

    Raises
    ------
    ProjectionContractError
        If the matrix is empty, its row count differs from ``len(dest)``, or
        a row length differs from ``len(source)``.
    """
    if dot is None:
        dot = get_dot_product()
    source = np.asarray(source)
    n_dst_dim = len(matrix) if dest is None else len(dest)

    _check_dimensions(matrix, len(source), n_dst_dim)

    if dest is None:
        if isinstance(matrix, ProjectionMatrix):
            dtype = matrix.dtype
        else:
            dtype = np.result_type(np.asarray(matrix[0]), source, np.float32)
        dest = np.empty(n_dst_dim, dtype=dtype)

    for i in range(n_dst_dim):
        dest[i] = dot(matrix[i], source)
    return dest


apply = apply_projection


def project_batch(
    matrix: ProjectionMatrix,
    vectors: np.ndarray | pd.DataFrame,
    *,
    dot: DotProduct | None = None,
) -> np.ndarray | pd.DataFrame:
    """Project every row of *vectors*.

    Parameters
    ----------
    matrix
        Built projection matrix.
    vectors
        Array of shape ``(n, n_src_dim)`` or a DataFrame with ``n_src_dim``
        columns.

    Returns
    -------
    np.ndarray or pd.DataFrame
        Shape ``(n, n_dst_dim)``. DataFrames keep their index and get
        columns ``p0 … p{n_dst_dim-1}``.
    """
    is_frame = isinstance(vectors, pd.DataFrame)
    X = vectors.to_numpy() if is_frame else np.asarray(vectors)
    if X.ndim != 2:
        raise ValueError(f"vectors must be 2-D, got shape {X.shape}")

    out = np.empty((X.shape[0], matrix.n_dst_dim), dtype=matrix.dtype)
    for j in range(X.shape[0]):
        apply_projection(matrix, X[j], out[j], dot=dot)

    if is_frame:
        columns = [f"p{i}" for i in range(matrix.n_dst_dim)]
        return pd.DataFrame(out, index=vectors.index, columns=columns)
    return out


__all__ = [
    "apply",
    "apply_projection",
    "project_batch",
]
