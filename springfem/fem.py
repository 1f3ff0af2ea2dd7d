# springfem/fem.py
"""
SPRING MODEL: Assembly and Solve Orchestration
==============================================

PURPOSE:
--------
SpringModel owns the nodes and springs of a 1-D spring assemblage and
turns them into a solved system:

    nodes/springs
        -> global K (scatter-add of every spring's [[k,-k],[-k,k]])
        -> global F (external nodal forces, default 0)
        -> global U (prescribed displacements, rest undefined)
        -> boundary conditions: move known u to the load side, drop
           prescribed rows/columns                          -> K', F'
        -> Gaussian elimination on K' u' = F'               -> u'
        -> merge u' into U                                  -> u (full)
        -> f = K u   (applied loads at free DOFs, reactions at supports)

Nodes and springs are addressed by caller-chosen ids. Internally each gets
a dense index in creation order; the index is the row/column in K.

LIFECYCLE:
----------
    EMPTY -> ASSEMBLING (add_node / add_spring / add_force / ...)
          -> SOLVED     (solve() ran to completion)

Changing the model after solve() drops the cached results and puts it back
into ASSEMBLING; solve() again to rebuild.

USAGE:
------
    model = SpringModel()
    model.add_node(1)
    model.add_node(2)
    model.add_displacement(1, 0.0)
    model.add_force(2, 1000.0)
    model.add_spring(1, 1, 2, 500.0)
    model.solve()

    model.get_global_displacement(2)   # 2.0
    model.get_global_force(1)          # -1000.0 (reaction)
    model.get_local_forces(1)          # Vector([-1000.0, 1000.0])
"""

import enum
import logging
from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from .config import CONFIG
from .elements import spring_dof_map, spring_local_stiffness
from .kernel.assemble import assemble_global_F, assemble_global_K, assemble_global_U
from .kernel.containers import Matrix, Vector
from .kernel.dof import DOFManager, DOF_1D_SPRING
from .kernel.errors import ValidationError
from .kernel.partial import PartialVector
from .kernel import solve as kernel_solve
from .model import Node, Spring

logger = logging.getLogger(__name__)


class ModelState(enum.Enum):
    EMPTY = "empty"
    ASSEMBLING = "assembling"
    SOLVED = "solved"


class SpringModel:
    """
    A 1-D assemblage of springs connecting point nodes.

    Parameters:
    -----------
    dof : DOFManager
        DOF indexing; one DOF per node for the spring assemblage.
    """

    def __init__(self, dof: DOFManager = DOF_1D_SPRING):
        self.dof = dof

        self._nodes: List[Node] = []
        self._springs: List[Spring] = []
        self._node_index: Dict[int, int] = {}
        self._spring_index: Dict[int, int] = {}

        self._stiffness_matrix: Optional[Matrix] = None
        self._displacement_vector: Optional[Vector] = None
        self._force_vector: Optional[Vector] = None

    # ------------------------------------------------------------------
    # Model definition
    # ------------------------------------------------------------------

    @property
    def state(self) -> ModelState:
        if self._displacement_vector is not None:
            return ModelState.SOLVED
        if self._nodes:
            return ModelState.ASSEMBLING
        return ModelState.EMPTY

    def _invalidate(self) -> None:
        self._stiffness_matrix = None
        self._displacement_vector = None
        self._force_vector = None

    def add_node(self, id: int) -> Node:
        """
        Add a node.

        Raises:
            ValidationError: If a node with this id exists already
        """
        if id in self._node_index:
            raise ValidationError(f"A node with id {id} has been defined already!")

        index = len(self._nodes)
        node = Node(id=id, index=index)
        self._node_index[id] = index
        self._nodes.append(node)
        self._invalidate()
        return node

    def add_displacement(self, node_id: int, displacement: float) -> None:
        """Prescribe the displacement of a node (turns it into a support)."""
        node = self.get_node_by_id(node_id)
        self._replace_node(replace(node, displacement=float(displacement)))

    def add_force(self, node_id: int, force: float) -> None:
        """Set the external force acting on a node."""
        node = self.get_node_by_id(node_id)
        self._replace_node(replace(node, force=float(force)))

    def _replace_node(self, node: Node) -> None:
        # Nodes are frozen; every change goes through here
        self._nodes[node.index] = node
        self._invalidate()

    def add_spring(self, id: int, node1: int, node2: int, spring_constant: float) -> Spring:
        """
        Add a spring between the nodes with ids node1 and node2.

        Raises:
            ValidationError: If the spring id exists already or a node id is unknown
        """
        if id in self._spring_index:
            raise ValidationError(f"A spring with id {id} has been defined already!")

        n1 = self.get_node_by_id(node1)
        n2 = self.get_node_by_id(node2)
        if spring_constant <= 0.0:
            logger.warning("Spring %s has non-positive spring constant %g", id, spring_constant)

        index = len(self._springs)
        spring = Spring(
            id=id, index=index,
            node1=n1.index, node2=n2.index,
            spring_constant=float(spring_constant),
        )
        self._spring_index[id] = index
        self._springs.append(spring)
        self._invalidate()
        return spring

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def nodes(self) -> Tuple[Node, ...]:
        return tuple(self._nodes)

    @property
    def springs(self) -> Tuple[Spring, ...]:
        return tuple(self._springs)

    @property
    def number_of_nodes(self) -> int:
        return len(self._nodes)

    @property
    def number_of_springs(self) -> int:
        return len(self._springs)

    def get_node_by_index(self, index: int) -> Node:
        if not 0 <= index < len(self._nodes):
            raise ValidationError(f"A node with index {index} does not exist!")
        return self._nodes[index]

    def get_node_by_id(self, id: int) -> Node:
        try:
            index = self._node_index[id]
        except KeyError:
            raise ValidationError(f"A node with id {id} does not exist!") from None
        return self._nodes[index]

    def get_spring_by_index(self, index: int) -> Spring:
        if not 0 <= index < len(self._springs):
            raise ValidationError(f"A spring with index {index} does not exist!")
        return self._springs[index]

    def get_spring_by_id(self, id: int) -> Spring:
        try:
            index = self._spring_index[id]
        except KeyError:
            raise ValidationError(f"A spring with id {id} does not exist!") from None
        return self._springs[index]

    def degrees_of_freedom(self) -> int:
        """Size of the global system: DOF per node × number of nodes."""
        return self.dof.ndof(self.number_of_nodes)

    # ------------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------------

    def assemble_global_stiffness_matrix(self) -> Matrix:
        contributions = [
            (spring_dof_map(s, self.dof), spring_local_stiffness(s.spring_constant))
            for s in self._springs
        ]
        return assemble_global_K(self.degrees_of_freedom(), contributions)

    def assemble_global_force_vector(self) -> Vector:
        contributions = [
            (self.dof.node_dofs(n.index), Vector.from_values([n.force]))
            for n in self._nodes
        ]
        return assemble_global_F(self.degrees_of_freedom(), contributions)

    def assemble_global_displacement_vector(self) -> PartialVector:
        prescribed = {
            self.dof.idx(n.index): n.displacement
            for n in self._nodes
            if n.is_constrained
        }
        return assemble_global_U(self.degrees_of_freedom(), prescribed)

    def apply_boundary_conditions(
        self,
        F: Vector,
        K: Matrix,
        U: PartialVector
    ) -> Tuple[Matrix, Vector]:
        """Reduce (K, F) to the DOFs without a prescribed displacement."""
        return kernel_solve.apply_boundary_conditions(F, K, U)

    # ------------------------------------------------------------------
    # Solve
    # ------------------------------------------------------------------

    def solve(self) -> None:
        """
        Assemble and solve the model.

        Raises:
            SingularSystemError: If the structure is under-constrained
                (e.g. no support at all, or a node without springs)
        """
        self._invalidate()

        F = self.assemble_global_force_vector()
        K = self.assemble_global_stiffness_matrix()
        U = self.assemble_global_displacement_vector()
        logger.debug(
            "Assembled %d nodes, %d springs: K is %dx%d",
            self.number_of_nodes, self.number_of_springs, K.rows, K.cols
        )

        u, f = kernel_solve.solve_linear(K, F, U)

        self._stiffness_matrix = K
        self._displacement_vector = u
        self._force_vector = f
        logger.info(
            "Solved spring model: %d DOF, %d prescribed",
            K.rows, U.number_of_defined_elements()
        )

    def _require_solved(self) -> None:
        if self._displacement_vector is None:
            raise ValidationError("The model has not been solved yet; call solve() first")

    def get_global_stiffness_matrix(self) -> Matrix:
        self._require_solved()
        return self._stiffness_matrix.copy()

    def get_global_displacement_vector(self) -> Vector:
        self._require_solved()
        return self._displacement_vector.copy()

    def get_global_displacement(self, node_id: int) -> float:
        self._require_solved()
        node = self.get_node_by_id(node_id)
        return self._displacement_vector[self.dof.idx(node.index)]

    def get_global_force_vector(self) -> Vector:
        self._require_solved()
        return self._force_vector.copy()

    def get_global_force(self, node_id: int) -> float:
        """Nodal force after solving; the support reaction at prescribed nodes."""
        self._require_solved()
        node = self.get_node_by_id(node_id)
        return self._force_vector[self.dof.idx(node.index)]

    def get_local_forces(self, spring_id: int) -> Vector:
        """
        End forces of a spring: local stiffness × [u(node1), u(node2)].

        Returns:
            Vector (2,): force at node1, force at node2. For a spring in
            tension the first is negative and the second positive.
        """
        self._require_solved()
        spring = self.get_spring_by_id(spring_id)
        u = self._displacement_vector
        displacements = Vector.from_values([u[i] for i in spring_dof_map(spring, self.dof)])
        return spring_local_stiffness(spring.spring_constant) @ displacements

    def __str__(self) -> str:
        lines = ["// Nodes"]
        lines.extend(str(n) for n in self._nodes)
        lines.append("")
        lines.append("// Springs")
        for s in self._springs:
            lines.append(
                f"spring {s.id} {self._nodes[s.node1].id} {self._nodes[s.node2].id} "
                f"{CONFIG.float_format.format(s.spring_constant)}"
            )
        lines.append("")
        return "\n".join(lines)
