# Node and Spring records (dataclasses)

from dataclasses import dataclass
from typing import Optional

from .config import CONFIG


def _fmt(value: float) -> str:
    return CONFIG.float_format.format(value)


@dataclass(frozen=True)
class Node:
    """
    A point node on the line. One DOF: the axial displacement u.

    id is chosen by the caller; index is the dense position assigned by the
    model in creation order and is what the global matrices are indexed by.
    displacement=None means the DOF is free (unknown).
    """
    id: int
    index: int
    displacement: Optional[float] = None
    force: float = 0.0

    @property
    def is_constrained(self) -> bool:
        return self.displacement is not None

    def __str__(self) -> str:
        s = f"node {self.id}"
        if self.displacement is not None:
            s += f" d {_fmt(self.displacement)}"
        if self.force != 0.0:
            s += f" f {_fmt(self.force)}"
        return s


@dataclass(frozen=True)
class Spring:
    """
    Ideal axial spring between two nodes.

    node1/node2 are node INDICES into the model's node list, not node ids.
    """
    id: int
    index: int
    node1: int
    node2: int
    spring_constant: float
