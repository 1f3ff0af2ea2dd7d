# springfem/kernel/dof.py
"""
DOF MANAGER: Degree of Freedom Indexing
=======================================

PURPOSE:
--------
Maps (node index, local dof) to a row/column of the global matrices.

A spring assemblage on a line has one DOF per node (the axial
displacement u), so the map is the identity on node indices:

    node index:   0   1   2   3
    global DOF:   0   1   2   3

Keeping the mapping in one place means the assembly and boundary-condition
code never hard-codes that factor of one.

USAGE:
------
    >>> dof = DOFManager(dof_per_node=1)
    >>> dof.ndof(4)
    4
    >>> dof.element_dof_map([2, 0])
    [2, 0]
"""

from dataclasses import dataclass
from typing import List

from ..config import CONFIG


@dataclass(frozen=True)
class DOFManager:
    """
    Degree-of-freedom indexing for a model with a fixed number of DOF per node.

    Attributes:
    -----------
    dof_per_node : int
        Number of DOFs per node (1 for the spring assemblage).
    """
    dof_per_node: int

    def idx(self, node_index: int, local_dof: int = 0) -> int:
        """
        Global DOF index of a node's local DOF.

        Parameters:
        -----------
        node_index : int
            Dense node index (creation order), not the external node id
        local_dof : int
            Local DOF within the node, 0 to dof_per_node-1
        """
        return self.dof_per_node * node_index + local_dof

    def ndof(self, n_nodes: int) -> int:
        """Total DOFs for n_nodes nodes, i.e. the size of the global K."""
        return self.dof_per_node * n_nodes

    def node_dofs(self, node_index: int) -> List[int]:
        base = self.dof_per_node * node_index
        return list(range(base, base + self.dof_per_node))

    def element_dof_map(self, node_indices: List[int]) -> List[int]:
        """
        Flattened global DOF indices of an element's nodes, in element order.

        Used to scatter element matrices into, and gather element
        displacements from, the global system.
        """
        result = []
        for node_index in node_indices:
            result.extend(self.node_dofs(node_index))
        return result


DOF_1D_SPRING = DOFManager(dof_per_node=CONFIG.dimension)
