"""Inner product kernels used by the projection builder and applier.

Every inner product in this package goes through a ``DotProduct`` callable so
the orthonormalization and projection loops stay independent of how the
reduction is accelerated.

Functions
---------
widened_dot
    NumPy dot product accumulated at ``config.ACCUMULATE_DTYPE``.
blas_dot
    SciPy BLAS ``sdot``/``ddot`` at the native precision of the inputs.
get_dot_product
    Resolve a kernel by name (defaults to ``config.DOT_PRODUCT_KERNEL``).
"""

from __future__ import annotations

from typing import Callable, Dict, Protocol

import numpy as np
from scipy.linalg.blas import get_blas_funcs

from randproj import config


class DotProduct(Protocol):
    """Single-pass O(n) reduction over two equal-length 1-D arrays."""

    def __call__(self, a: np.ndarray, b: np.ndarray) -> float: ...


def widened_dot(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product accumulated at the wider of the input and accumulator precisions.

    Parameters
    ----------
    a, b
        Equal-length 1-D arrays.

    Returns
    -------
    float
        Σ aᵢ bᵢ computed at ``config.ACCUMULATE_DTYPE`` or wider.
    """
    a = np.asarray(a)
    b = np.asarray(b)
    acc = np.result_type(a, b, config.ACCUMULATE_DTYPE)
    # einsum casts through small buffers, so no widened copies of a and b.
    return float(np.einsum("i,i->", a, b, dtype=acc))


def blas_dot(a: np.ndarray, b: np.ndarray) -> float:
    """Dot product via the level-1 BLAS kernel matching the input precision."""
    a = np.asarray(a)
    b = np.asarray(b)
    fn = get_blas_funcs("dot", (a, b))
    return float(fn(a, b))


_KERNELS: Dict[str, Callable[[np.ndarray, np.ndarray], float]] = {
    "widened": widened_dot,
    "blas": blas_dot,
}


def get_dot_product(name: str | None = None) -> DotProduct:
    """Look up a dot-product kernel by name.

    Raises
    ------
    ValueError
        If *name* is not a registered kernel.
    """
    if name is None:
        name = config.DOT_PRODUCT_KERNEL
    try:
        return _KERNELS[name]
    except KeyError:
        raise ValueError(
            f"Unknown dot product kernel {name!r}; expected one of {sorted(_KERNELS)}"
        ) from None


__all__ = [
    "DotProduct",
    "blas_dot",
    "get_dot_product",
    "widened_dot",
]
