# springfem - Static analysis of 1-D spring assemblages
"""
SPRINGFEM: A 1-D Spring Assemblage Finite Element Solver
========================================================

This package provides:
- Dense Matrix/Vector containers and a partially-defined vector
- Gaussian elimination with partial pivoting
- Global assembly, boundary-condition partitioning and reaction recovery
- A reader for the plain-text model-definition format and a CLI

ARCHITECTURE:
-------------
    kernel/         Numeric core (containers, DOF indexing, assembly, solve)
    model.py        Node and Spring records
    elements.py     Spring local stiffness and DOF map
    fem.py          SpringModel: assembly & solve orchestration
    post.py         Result tables (pandas) and equilibrium check
    reader.py       Model-definition reader
    cli.py          Command-line driver (python -m springfem)
    config.py       Solver defaults
"""

from .kernel import (
    Matrix,
    Vector,
    PartialVector,
    euclidean_distance,
    gaussian_elimination,
    SpringFEMError,
    ValidationError,
    DimensionMismatchError,
    IndexOutOfRangeError,
    SingularSystemError,
)
from .model import Node, Spring
from .fem import SpringModel, ModelState

__version__ = "0.1.0"
