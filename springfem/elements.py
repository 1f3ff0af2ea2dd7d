# Spring element stiffness + DOF map

from typing import List

from .kernel.containers import Matrix
from .kernel.dof import DOFManager, DOF_1D_SPRING
from .model import Spring


def spring_local_stiffness(k: float) -> Matrix:
    """
    Local stiffness matrix of a spring with constant k.
    DOF order: [u1, u2]

        [ k  -k ]
        [-k   k ]
    """
    return Matrix.from_rows([
        [ k, -k],
        [-k,  k],
    ])


def spring_dof_map(spring: Spring, dof: DOFManager = DOF_1D_SPRING) -> List[int]:
    """Global DOF indices of the spring's end nodes, node1 first."""
    return dof.element_dof_map([spring.node1, spring.node2])
