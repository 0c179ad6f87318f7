"""Random projection core.

Builds Gaussian projection matrices (optionally orthonormalized with
modified Gram-Schmidt) and projects vectors through them.

Submodules
----------
dot_product
    Injectable inner product kernels.
random_source
    Shared lazily-seeded source and reproducible generators.
matrix
    Immutable ``ProjectionMatrix`` container.
builder
    Matrix generation and orthonormalization.
applier
    Per-vector and batch projection with dimension contract checks.
"""

from .applier import apply, apply_projection, project_batch
from .builder import build, build_projection_matrix
from .dot_product import DotProduct, blas_dot, get_dot_product, widened_dot
from .errors import ProjectionContractError
from .matrix import ProjectionMatrix
from .random_source import get_shared_source, resolve_rng

__all__ = [
    # builder
    "build",
    "build_projection_matrix",
    # applier
    "apply",
    "apply_projection",
    "project_batch",
    # data model
    "ProjectionMatrix",
    "ProjectionContractError",
    # kernels
    "DotProduct",
    "blas_dot",
    "get_dot_product",
    "widened_dot",
    # random sources
    "get_shared_source",
    "resolve_rng",
]
