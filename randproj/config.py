"""
Central configuration for the randproj random projection library.
"""

import numpy as np

# --- Numeric Precision ---

# Storage precision of generated projection matrices.
# Options: np.float32, np.float64
PROJECTION_DTYPE: type = np.float32

# Precision used to accumulate dot products when the inputs are narrower.
# Limits cancellation error for large source dimensions.
ACCUMULATE_DTYPE: type = np.float64

# --- Dot Product Kernel ---

# Default inner product kernel used by the builder and applier.
# Options:
#   "widened": numpy dot accumulated at ACCUMULATE_DTYPE
#   "blas":    scipy BLAS sdot/ddot at the native precision
DOT_PRODUCT_KERNEL: str = "widened"

# --- Random Projection Parameters ---

# Random seed for projection reproducibility.
# None draws from the process-wide, entropy-seeded shared source.
PROJECTION_RANDOM_SEED: int | None = None

# Absolute tolerance used when checking that rows are orthonormal.
ORTHONORMALITY_ATOL: float = 1e-5

# Orthonormalizing more rows than source dimensions leaves the trailing rows
# degenerate. False keeps them (and logs a warning), True raises ValueError.
REJECT_OVERCOMPLETE_ORTHONORMALIZATION: bool = False

