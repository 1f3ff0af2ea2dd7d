import numpy as np
import pytest

from springfem import SpringModel
from springfem.post import equilibrium_residual


def make_chain(spring_constants, supports, loads):
    """
    Springs in series: node i -- spring i -- node i+1.

    supports: {node_id: displacement}, loads: {node_id: force}
    """
    model = SpringModel()
    for node_id in range(len(spring_constants) + 1):
        model.add_node(node_id)
    for node_id, d in supports.items():
        model.add_displacement(node_id, d)
    for node_id, f in loads.items():
        model.add_force(node_id, f)
    for i, k in enumerate(spring_constants):
        model.add_spring(i, i, i + 1, k)
    return model


def test_stiffness_matrix_symmetry():
    """
    WHAT IS THIS TEST?
    ==================
    We check that the stiffness matrix is symmetric.

    WHY DOES THIS MATTER?
    ====================
    "If I push at node A and node B moves, pushing at node B must move
    node A by the same amount" (Maxwell's reciprocal theorem).

    Mathematically: K[i,j] = K[j,i] for all i, j
    """
    model = make_chain([100.0, 250.0, 75.0, 300.0], {0: 0.0}, {4: 10.0})
    model.solve()

    K = model.get_global_stiffness_matrix().to_numpy()
    np.testing.assert_array_equal(K, K.T, err_msg="Stiffness matrix is not symmetric!")
    print("✓ Stiffness matrix is symmetric")


def test_stiffness_matrix_positive_semidefinite():
    """
    WHAT IS THIS TEST?
    ==================
    Every eigenvalue of the unconstrained K is >= 0, and exactly one is 0
    for a connected chain: the rigid-body translation u = (1, 1, ..., 1)
    stores no energy.
    """
    model = make_chain([100.0, 250.0, 75.0, 300.0], {0: 0.0}, {})
    K = model.assemble_global_stiffness_matrix().to_numpy()

    eigenvalues = np.linalg.eigvalsh(K)
    assert np.all(eigenvalues > -1e-9)
    assert np.sum(np.abs(eigenvalues) < 1e-9) == 1

    ones = np.ones(K.shape[0])
    np.testing.assert_allclose(K @ ones, 0.0, atol=1e-12)


@pytest.mark.parametrize("supports,loads", [
    ({0: 0.0}, {4: 10.0}),
    ({0: 0.0, 4: 0.0}, {2: -35.0}),
    ({0: 0.0, 4: 0.01}, {}),
    ({2: 0.0}, {0: 5.0, 4: 7.0}),
])
def test_equilibrium(supports, loads):
    """
    WHAT IS THIS TEST?
    ==================
    We check that forces balance: Σ(applied loads) + Σ(reactions) = 0

    Each spring pushes on its two nodes with equal and opposite forces,
    so the nodal forces K·u always sum to zero.
    """
    model = make_chain([100.0, 250.0, 75.0, 300.0], supports, loads)
    model.solve()

    residual = equilibrium_residual(model)
    assert np.isclose(residual, 0.0, atol=1e-9), \
        f"Force equilibrium violated: ΣF = {residual:.2e}"

    # Free DOFs reproduce the applied loads
    for node in model.nodes:
        if not node.is_constrained:
            assert np.isclose(model.get_global_force(node.id), node.force, atol=1e-9)


def test_dof_count_partition():
    """Prescribed DOFs + solver unknowns = total DOFs."""
    model = make_chain([1.0, 2.0, 3.0], {0: 0.0, 3: 0.0}, {1: 1.0})
    F = model.assemble_global_force_vector()
    K = model.assemble_global_stiffness_matrix()
    U = model.assemble_global_displacement_vector()

    K_red, F_red = model.apply_boundary_conditions(F, K, U)

    assert K.rows == K.cols == F.size == U.size == model.degrees_of_freedom()
    assert U.number_of_defined_elements() + K_red.rows == model.degrees_of_freedom()
    assert K_red.rows == K_red.cols == F_red.size


def test_series_springs_equivalent_stiffness():
    """Springs in series: 1/k_eq = Σ 1/k_i, tip displacement = P / k_eq."""
    ks = [100.0, 250.0, 75.0, 300.0]
    P = 10.0
    model = make_chain(ks, {0: 0.0}, {4: P})
    model.solve()

    k_eq = 1.0 / sum(1.0 / k for k in ks)
    assert np.isclose(model.get_global_displacement(4), P / k_eq, rtol=1e-12)
    # Every spring carries the full load in tension
    for i in range(len(ks)):
        np.testing.assert_allclose(model.get_local_forces(i).to_numpy(), [-P, P], rtol=1e-12)
