# nodal results, spring end forces, equilibrium

import numpy as np
import pandas as pd

from .fem import SpringModel


def nodal_results(model: SpringModel) -> pd.DataFrame:
    """
    Per-node results of a solved model.

    Parameters:
    -----------
    model : SpringModel
        A model on which solve() has been called

    Returns:
    --------
    pd.DataFrame
        Indexed by node id, in node creation order. Columns:
        - displacement: solved (or prescribed) displacement
        - force: nodal force K·u
        - applied_force: external force given in the model
        - reaction: force - applied_force at supports, 0 elsewhere
        - constrained: True where the displacement was prescribed
    """
    u = model.get_global_displacement_vector()
    f = model.get_global_force_vector()

    rows = []
    for node in model.nodes:
        i = model.dof.idx(node.index)
        reaction = f[i] - node.force if node.is_constrained else 0.0
        rows.append({
            'node': node.id,
            'displacement': u[i],
            'force': f[i],
            'applied_force': node.force,
            'reaction': reaction,
            'constrained': node.is_constrained,
        })

    df = pd.DataFrame(rows, columns=[
        'node', 'displacement', 'force', 'applied_force', 'reaction', 'constrained',
    ])
    return df.set_index('node')


def spring_results(model: SpringModel) -> pd.DataFrame:
    """
    Per-spring end forces of a solved model, indexed by spring id.

    axial_force is the force at the second end, so tension is positive.
    """
    rows = []
    for spring in model.springs:
        forces = model.get_local_forces(spring.id)
        rows.append({
            'spring': spring.id,
            'node1': model.get_node_by_index(spring.node1).id,
            'node2': model.get_node_by_index(spring.node2).id,
            'spring_constant': spring.spring_constant,
            'force_node1': forces[0],
            'force_node2': forces[1],
            'axial_force': forces[1],
        })

    df = pd.DataFrame(rows, columns=[
        'spring', 'node1', 'node2', 'spring_constant',
        'force_node1', 'force_node2', 'axial_force',
    ])
    return df.set_index('spring')


def equilibrium_residual(model: SpringModel) -> float:
    """
    Sum of all nodal forces (applied loads and reactions).

    Every spring contributes equal and opposite end forces, so for a solved
    model this is zero up to round-off.
    """
    return float(np.sum(model.get_global_force_vector().to_numpy()))
