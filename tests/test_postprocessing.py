"""
TEST: Result Tables
===================

nodal_results / spring_results turn a solved model into pandas
DataFrames keyed by the external node/spring ids.
"""

import numpy as np
import pandas as pd
import pytest

from springfem import SpringModel
from springfem.kernel.errors import ValidationError
from springfem.post import equilibrium_residual, nodal_results, spring_results


def make_example_a():
    """Logan Example 2.1"""
    model = SpringModel()
    for node_id in (1, 2, 3, 4):
        model.add_node(node_id)
    model.add_displacement(1, 0.0)
    model.add_displacement(2, 0.0)
    model.add_force(4, 5000.0)
    model.add_spring(1, 1, 3, 1000.0)
    model.add_spring(2, 3, 4, 2000.0)
    model.add_spring(3, 4, 2, 3000.0)
    return model


def test_nodal_results():
    model = make_example_a()
    model.solve()
    df = nodal_results(model)

    assert isinstance(df, pd.DataFrame)
    assert list(df.index) == [1, 2, 3, 4]
    assert list(df.columns) == [
        'displacement', 'force', 'applied_force', 'reaction', 'constrained',
    ]
    assert list(df['constrained']) == [True, True, False, False]

    np.testing.assert_allclose(df['displacement'], [0, 0, 10 / 11, 15 / 11], rtol=1e-12)
    np.testing.assert_allclose(
        df['reaction'], [-10000 / 11, -45000 / 11, 0, 0], rtol=1e-12, atol=1e-9
    )
    assert df.loc[4, 'applied_force'] == 5000.0


def test_spring_results():
    model = make_example_a()
    model.solve()
    df = spring_results(model)

    assert list(df.index) == [1, 2, 3]
    assert df.loc[3, 'node1'] == 4 and df.loc[3, 'node2'] == 2
    np.testing.assert_allclose(df['axial_force'], [10000 / 11, 10000 / 11, -45000 / 11], rtol=1e-12)
    np.testing.assert_allclose(df['force_node1'], -df['force_node2'], rtol=1e-12)


def test_equilibrium_residual():
    model = make_example_a()
    model.solve()
    assert abs(equilibrium_residual(model)) < 1e-9


def test_tables_require_solved_model():
    model = make_example_a()
    with pytest.raises(ValidationError):
        nodal_results(model)
    with pytest.raises(ValidationError):
        spring_results(model)
