"""
TEST: Model-Definition Reader
=============================
"""

from pathlib import Path

import numpy as np
import pytest

from springfem.kernel.errors import ValidationError
from springfem.post import equilibrium_residual
from springfem.reader import ModelDefinitionError, parse_model_text, read_model, tokenize


EXAMPLE_A = """
// Logan, Example 2.1, page 40

/* Nodes:
   node id [d <displacement>] [f <force>] */
node 1 d 0
node 2 d 0
node 3
node 4 f 5000

// Springs: spring id node1 node2 spring constant
spring 1  1 3  1000
spring 2  3 4  2000
spring 3  4 2  3000
"""


def test_parse_example_a():
    model = parse_model_text(EXAMPLE_A)

    assert model.number_of_nodes == 4
    assert model.number_of_springs == 3
    assert model.get_node_by_id(1).displacement == 0.0
    assert model.get_node_by_id(3).displacement is None
    assert model.get_node_by_id(4).force == 5000.0
    assert model.get_spring_by_id(3).spring_constant == 3000.0

    model.solve()
    assert np.isclose(model.get_global_displacement(4), 15.0 / 11.0)


def test_tokenize_strips_comments_and_keeps_lines():
    tokens = tokenize("node 1 // comment\n/* a\nb */ node 2\nnode 3/*x*/")
    assert tokens == [
        ("node", 1), ("1", 1),
        ("node", 3), ("2", 3),
        ("node", 4), ("3", 4),
    ]


def test_node_clauses_in_any_order():
    model = parse_model_text("node 7 f 2.5 d 0.1\nnode 8")
    node = model.get_node_by_id(7)
    assert node.force == 2.5
    assert node.displacement == 0.1


def test_unterminated_block_comment_runs_to_end():
    model = parse_model_text("node 1 /* node 2")
    assert model.number_of_nodes == 1


def test_unexpected_token():
    with pytest.raises(ModelDefinitionError) as excinfo:
        parse_model_text("node 1\nbeam 1 1 2 3", source="bad.fem")
    assert excinfo.value.line == 2
    assert "bad.fem:2" in str(excinfo.value)
    assert "beam" in str(excinfo.value)


def test_integer_expected():
    with pytest.raises(ModelDefinitionError, match="Expected an integer"):
        parse_model_text("node one")


def test_number_expected():
    with pytest.raises(ModelDefinitionError, match="Expected a number"):
        parse_model_text("node 1 d zero")


def test_truncated_spring():
    with pytest.raises(ModelDefinitionError, match="end of input"):
        parse_model_text("node 1\nnode 2\nspring 1 1 2")


def test_model_errors_carry_location():
    with pytest.raises(ModelDefinitionError) as excinfo:
        parse_model_text("node 1\nnode 1")
    assert excinfo.value.line == 2
    assert isinstance(excinfo.value, ValidationError)

    with pytest.raises(ValidationError, match="does not exist"):
        parse_model_text("node 1\nspring 1 1 2 10")


def test_read_multiple_files(tmp_path):
    nodes = tmp_path / "nodes.fem"
    springs = tmp_path / "springs.fem"
    nodes.write_text("node 1 d 0\nnode 2 f 1000\n", encoding="utf-8")
    springs.write_text("spring 1 1 2 500\n", encoding="utf-8")

    model = read_model([nodes, springs])
    model.solve()

    assert model.get_global_displacement(2) == 2.0
    assert model.get_global_force(1) == -1000.0


def test_read_single_path(tmp_path):
    path = tmp_path / "model.fem"
    path.write_text(EXAMPLE_A, encoding="utf-8")
    model = read_model(str(path))
    assert model.number_of_springs == 3


def test_read_error_names_file(tmp_path):
    path = tmp_path / "broken.fem"
    path.write_text("node 1\nnode x\n", encoding="utf-8")
    with pytest.raises(ModelDefinitionError) as excinfo:
        read_model(path)
    assert excinfo.value.source == str(path)
    assert excinfo.value.line == 2


def test_non_utf8_file_is_a_definition_error(tmp_path):
    path = tmp_path / "latin1.fem"
    path.write_bytes(b"node 1 d 0\n// caf\xe9\n")
    with pytest.raises(ModelDefinitionError) as excinfo:
        read_model(path)
    assert excinfo.value.source == str(path)
    assert excinfo.value.line is None
    assert "Not a UTF-8 text file" in str(excinfo.value)


DEMO_MODELS = sorted((Path(__file__).parent.parent / "demos" / "models").glob("*.fem"))


@pytest.mark.parametrize("path", DEMO_MODELS, ids=lambda p: p.stem)
def test_demo_models_solve(path):
    model = read_model(path)
    model.solve()
    assert abs(equilibrium_residual(model)) < 1e-9
