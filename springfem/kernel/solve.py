# springfem/kernel/solve.py
"""Gaussian elimination, boundary-condition partitioning and the full linear solve."""

import logging
from typing import Tuple

import numpy as np

from ..config import CONFIG
from .containers import Matrix, Vector
from .errors import DimensionMismatchError, SingularSystemError
from .partial import PartialVector

logger = logging.getLogger(__name__)


def gaussian_elimination(
    A: Matrix,
    b: Vector,
    pivot_tolerance: float = None
) -> Vector:
    """
    Solve A·u = b by Gaussian elimination with partial pivoting.

    Works on private copies; A and b are not modified.

    ALGORITHM:
    ----------
    for i in 0 .. n-2:
        pivot row = row r >= i with the largest |A[r, i]| (first one wins)
        if that largest value is zero: singular
        swap rows i and pivot in A, and entries i and pivot in b
        for r > i:
            m = -A[r, i] / A[i, i]
            A[r, i] = 0
            A[r, c] += m * A[i, c]   for c > i
            b[r] += m * b[i]
    for i in n-1 .. 0:
        u[i] = (b[i] - sum_{j>i} A[i, j] * u[j]) / A[i, i]

    Args:
        A: Square coefficient matrix (n x n)
        b: Right-hand side (n,)
        pivot_tolerance: A column whose largest |value| is <= this is treated
            as singular. Defaults to CONFIG.pivot_tolerance (0.0, an exact
            zero test).

    Returns:
        u: Solution vector (n,)

    Raises:
        DimensionMismatchError: If A is not square or b does not match
        SingularSystemError: If no nonzero pivot exists at some step
    """
    if pivot_tolerance is None:
        pivot_tolerance = CONFIG.pivot_tolerance

    if A.rows != A.cols:
        raise DimensionMismatchError(
            f"Gaussian elimination needs a square matrix, got {A.rows}x{A.cols}"
        )
    n = A.rows
    if b.size != n:
        raise DimensionMismatchError(f"Right-hand side has size {b.size}, expected {n}")

    a = A.to_numpy()
    rhs = b.to_numpy()

    for i in range(n - 1):
        # Pivoting
        row = i + int(np.argmax(np.abs(a[i:, i])))
        largest = abs(a[row, i])
        if largest <= pivot_tolerance:
            raise SingularSystemError(pivot=i)

        if row != i:
            a[[i, row]] = a[[row, i]]
            rhs[i], rhs[row] = rhs[row], rhs[i]

        # Elimination
        for r in range(i + 1, n):
            m = -a[r, i] / a[i, i]
            a[r, i] = 0.0
            a[r, i + 1:] += m * a[i, i + 1:]
            rhs[r] += m * rhs[i]

    # The last diagonal entry is never a pivot candidate above
    if n > 0 and abs(a[n - 1, n - 1]) <= pivot_tolerance:
        raise SingularSystemError(pivot=n - 1)

    # Back substitution
    u = np.zeros(n, dtype=float)
    for i in range(n - 1, -1, -1):
        s = rhs[i]
        for j in range(i + 1, n):
            s -= a[i, j] * u[j]
        u[i] = s / a[i, i]

    return Vector.from_values(u)


def apply_boundary_conditions(
    F: Vector,
    K: Matrix,
    U: PartialVector
) -> Tuple[Matrix, Vector]:
    """
    Reduce K·u = F to the unconstrained DOFs.

    For every DOF i without a prescribed displacement, the known
    displacements are moved to the load side:

        F[i] -= sum_{j prescribed} K[i, j] * U[j]

    Then every row/column of K and every entry of F whose DOF is
    prescribed is removed. Both deletions use the same predicate, so the
    surviving DOFs keep their original relative order, which is the order
    PartialVector.merge_undefined() fills them back in.

    Args:
        F: Global force vector (ndof,)
        K: Global stiffness matrix (ndof x ndof)
        U: Global displacement vector, prescribed slots defined

    Returns:
        K_reduced: Stiffness matrix of the free DOFs
        F_reduced: Effective load vector of the free DOFs

    Raises:
        DimensionMismatchError: If the three sizes disagree
    """
    n = U.size
    if K.shape != (n, n) or F.size != n:
        raise DimensionMismatchError(
            f"Boundary conditions need K {n}x{n} and F ({n},), "
            f"got K {K.rows}x{K.cols} and F ({F.size},)"
        )

    defined = U.defined_mask()

    def displacement_defined(i: int) -> bool:
        return bool(defined[i])

    F = F.copy()
    for i in range(n):
        if displacement_defined(i):
            continue
        f = F[i]
        for j in range(n):
            if displacement_defined(j):
                f -= K[i, j] * U[j]
        F[i] = f

    K_reduced = K.delete_rows_and_columns(displacement_defined)
    F_reduced = F.delete_elements(displacement_defined)
    return K_reduced, F_reduced


def solve_linear(
    K: Matrix,
    F: Vector,
    U: PartialVector,
    pivot_tolerance: float = None
) -> Tuple[Vector, Vector]:
    """
    Solve K·u = F where some displacements are prescribed.

    Args:
        K: Global stiffness matrix (ndof x ndof)
        F: Global load vector (ndof,); entries at prescribed DOFs are ignored
        U: Global displacement vector with the prescribed DOFs defined
        pivot_tolerance: Passed on to gaussian_elimination

    Returns:
        u: Full displacement vector (ndof,)
        f: Full force vector K·u (ndof,). At free DOFs this reproduces the
           applied loads, at prescribed DOFs it holds the support reactions.

    Raises:
        SingularSystemError: If the structure is not sufficiently supported
    """
    K_reduced, F_reduced = apply_boundary_conditions(F, K, U)
    logger.debug(
        "Reduced system: %d free of %d DOF (%d prescribed)",
        K_reduced.rows, K.rows, U.number_of_defined_elements()
    )

    unconstrained = gaussian_elimination(K_reduced, F_reduced, pivot_tolerance)

    u = U.merge_undefined(unconstrained)
    f = K @ u
    return u, f
