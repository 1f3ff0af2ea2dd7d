# springfem/kernel/assemble.py
"""
ASSEMBLY: Global Matrix Assembly
================================

PURPOSE:
--------
Scatter-add element contributions into the global stiffness matrix and
gather nodal data into the global force and displacement vectors.

Assembly does not care what the element is. It only needs, per element,
a DOF map and a local matrix:

    K = zeros(ndof × ndof)
    for each element:
        for each (a, b) in ke:
            K[dof_map[a], dof_map[b]] += ke[a, b]

The += is the whole point: two springs sharing a node both add their
stiffness to that node's diagonal entry.

USAGE:
------
    contributions = []
    for spring in springs:
        dof_map = spring_dof_map(spring, dof)
        ke = spring_local_stiffness(spring.spring_constant)
        contributions.append((dof_map, ke))

    K = assemble_global_K(ndof, contributions)
"""

from typing import Dict, List, Tuple

from .containers import Matrix, Vector
from .errors import DimensionMismatchError
from .partial import PartialVector


def assemble_global_K(
    ndof: int,
    contributions: List[Tuple[List[int], Matrix]]
) -> Matrix:
    """
    Assemble the global stiffness matrix from element contributions.

    Parameters:
    -----------
    ndof : int
        Total number of DOFs in the system

    contributions : List[Tuple[List[int], Matrix]]
        One (dof_map, ke) pair per element:
        - dof_map: global DOF index of each local row/column of ke
        - ke: element stiffness matrix, shape (len(dof_map), len(dof_map))

    Returns:
    --------
    Matrix
        Global stiffness matrix K, shape (ndof, ndof).
        Symmetric positive semi-definite for positive spring constants.

    Raises:
    -------
    DimensionMismatchError
        If an element matrix does not match its DOF map.
    """
    K = Matrix(ndof, ndof)

    for dof_map, ke in contributions:
        n_element_dofs = len(dof_map)
        if ke.shape != (n_element_dofs, n_element_dofs):
            raise DimensionMismatchError(
                f"Element ke shape {ke.shape} doesn't match dof_map length {n_element_dofs}"
            )

        for a in range(n_element_dofs):
            ia = dof_map[a]
            for b in range(n_element_dofs):
                ib = dof_map[b]
                K[ia, ib] += ke[a, b]

    return K


def assemble_global_F(
    ndof: int,
    contributions: List[Tuple[List[int], Vector]]
) -> Vector:
    """
    Assemble the global load vector; same scatter-add as assemble_global_K.

    Nodal point loads are passed as single-DOF contributions ([dof], [f]).
    """
    F = Vector(ndof)

    for dof_map, fe in contributions:
        n_element_dofs = len(dof_map)
        if fe.size != n_element_dofs:
            raise DimensionMismatchError(
                f"Element fe size {fe.size} doesn't match dof_map length {n_element_dofs}"
            )

        for a in range(n_element_dofs):
            F[dof_map[a]] += fe[a]

    return F


def assemble_global_U(ndof: int, prescribed: Dict[int, float]) -> PartialVector:
    """
    Build the global displacement vector from prescribed DOF values.

    DOFs missing from prescribed stay undefined and become the unknowns
    of the reduced system.
    """
    U = PartialVector(ndof)
    for dof, value in prescribed.items():
        U.set_element(dof, value)
    return U
