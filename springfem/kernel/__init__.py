# springfem/kernel - Numeric core
"""
KERNEL: THE NUMERIC FOUNDATION
==============================

Everything the spring model needs from linear algebra, and nothing
spring-specific:

- Dense containers (Matrix, Vector) with bounds and shape checks
- PartialVector for mixed prescribed/unknown displacements
- DOF indexing (DOFManager)
- Scatter-add assembly of element contributions
- Boundary-condition partitioning and Gaussian elimination

The element (Spring) and the model bookkeeping live outside the kernel.
"""

from .errors import (
    SpringFEMError,
    ValidationError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    SingularSystemError,
)
from .containers import Matrix, Vector, euclidean_distance
from .partial import PartialVector
from .dof import DOFManager, DOF_1D_SPRING
from .assemble import assemble_global_K, assemble_global_F, assemble_global_U
from .solve import gaussian_elimination, apply_boundary_conditions, solve_linear

__all__ = [
    'SpringFEMError', 'ValidationError', 'DimensionMismatchError',
    'IndexOutOfRangeError', 'SingularSystemError',
    'Matrix', 'Vector', 'euclidean_distance', 'PartialVector',
    'DOFManager', 'DOF_1D_SPRING',
    'assemble_global_K', 'assemble_global_F', 'assemble_global_U',
    'gaussian_elimination', 'apply_boundary_conditions', 'solve_linear',
]
