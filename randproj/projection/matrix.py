"""Projection matrix container.

A ``ProjectionMatrix`` holds ``n_dst_dim`` basis rows of length
``n_src_dim`` in a single read-only 2-D array. It is created once by the
builder and never mutated afterwards, so any number of threads may apply it
concurrently.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from randproj import config


@dataclass(frozen=True, eq=False)
class ProjectionMatrix:
    """Immutable set of projection basis rows.

    Attributes
    ----------
    rows
        Array of shape ``(n_dst_dim, n_src_dim)``; marked read-only.
    orthogonalized
        True when the rows went through Gram-Schmidt orthonormalization.
    """

    rows: np.ndarray
    orthogonalized: bool = False

    def __post_init__(self) -> None:
        # Private copy: the caller's array stays writeable and never aliases ours.
        rows = np.array(self.rows, copy=True)
        if rows.ndim != 2:
            raise ValueError(f"Projection rows must be a 2-D array, got shape {rows.shape}")
        rows.flags.writeable = False
        object.__setattr__(self, "rows", rows)

    @classmethod
    def _take_ownership(cls, rows: np.ndarray, orthogonalized: bool = False) -> "ProjectionMatrix":
        """Freeze *rows* in place without copying; the caller must drop its reference."""
        matrix = cls.__new__(cls)
        rows.flags.writeable = False
        object.__setattr__(matrix, "rows", rows)
        object.__setattr__(matrix, "orthogonalized", orthogonalized)
        return matrix

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[float]] | np.ndarray,
        *,
        dtype: type | None = None,
        orthogonalized: bool = False,
    ) -> "ProjectionMatrix":
        """Copy *rows* into a new matrix.

        Raises
        ------
        ValueError
            If the rows do not all have the same length.
        """
        lengths = {len(row) for row in rows}
        if len(lengths) > 1:
            raise ValueError(f"All projection rows must have the same length, got {sorted(lengths)}")
        data = np.array(rows, dtype=dtype if dtype is not None else config.PROJECTION_DTYPE)
        if data.ndim == 1:
            # Zero rows come back one-dimensional.
            data = data.reshape(0, 0)
        if data.ndim != 2:
            raise ValueError(f"Projection rows must be a 2-D array, got shape {data.shape}")
        return cls._take_ownership(data, orthogonalized)

    @property
    def n_dst_dim(self) -> int:
        return int(self.rows.shape[0])

    @property
    def n_src_dim(self) -> int:
        return int(self.rows.shape[1])

    @property
    def dtype(self) -> np.dtype:
        return self.rows.dtype

    def __len__(self) -> int:
        return self.n_dst_dim

    def __getitem__(self, index: int) -> np.ndarray:
        return self.rows[index]

    def is_orthonormal(self, atol: float | None = None) -> bool:
        """Check that rows have unit norm and are mutually orthogonal.

        Parameters
        ----------
        atol
            Absolute tolerance on every entry of ``R Rᵀ - I``.
            Defaults to ``config.ORTHONORMALITY_ATOL``.
        """
        if atol is None:
            atol = config.ORTHONORMALITY_ATOL
        R = self.rows.astype(np.float64)
        gram = R @ R.T
        return bool(np.allclose(gram, np.eye(self.n_dst_dim), rtol=0.0, atol=atol))


__all__ = ["ProjectionMatrix"]
