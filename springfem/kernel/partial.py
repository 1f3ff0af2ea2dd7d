# springfem/kernel/partial.py
"""
PARTIAL VECTOR: Vector of Optionally-Defined Values
===================================================

PURPOSE:
--------
The global displacement vector is only partly known before solving:
supports have a prescribed displacement, every other DOF is an unknown.

    slot:      0     1     2     3
    value:     5     -     7     -        (- = undefined)

A PartialVector stores this as a numpy masked array (masked = undefined).
After the reduced system has been solved, merge_undefined() drops the
solved values into the undefined slots in index order and returns a plain
dense Vector:

    merge_undefined([1, 2])  ->  [5, 1, 7, 2]

The order coupling matters: the reduced system keeps the unconstrained
DOFs in their original relative order, so the i-th solved value belongs
to the i-th undefined slot.
"""

from typing import Iterable, List, Optional

import numpy as np

from ..config import CONFIG
from .containers import Vector, _check_index
from .errors import DimensionMismatchError


class PartialVector:
    """
    Fixed-length vector whose slots are either defined (a float) or undefined.

    Parameters:
    -----------
    size : int
        Number of slots, all initially undefined.

    Examples:
    ---------
    >>> p = PartialVector.from_values([5, None, 7, None])
    >>> p.number_of_defined_elements()
    2
    >>> print(p.merge_undefined(Vector.from_values([1, 2])))
    5 1 7 2
    """

    __hash__ = None

    def __init__(self, size: int = 0):
        if size < 0:
            raise DimensionMismatchError(f"Invalid vector size {size}")
        self._m = np.ma.masked_all(size, dtype=float)

    @classmethod
    def from_values(cls, values: Iterable[Optional[float]]) -> "PartialVector":
        values = list(values)
        p = cls(len(values))
        for i, value in enumerate(values):
            if value is not None:
                p.set_element(i, value)
        return p

    def copy(self) -> "PartialVector":
        p = PartialVector.__new__(PartialVector)
        p._m = self._m.copy()
        return p

    @property
    def size(self) -> int:
        return self._m.size

    def __len__(self) -> int:
        return self._m.size

    def defined_mask(self) -> np.ndarray:
        """Boolean array, True where a value is defined."""
        return ~np.ma.getmaskarray(self._m)

    def number_of_defined_elements(self) -> int:
        return int(np.count_nonzero(self.defined_mask()))

    def number_of_undefined_elements(self) -> int:
        return self.size - self.number_of_defined_elements()

    def is_defined(self, i: int) -> bool:
        return bool(self.defined_mask()[_check_index(i, self.size, "Vector")])

    def set_element(self, i: int, value: float) -> None:
        # Assigning through a masked array clears the mask for that slot
        self._m[_check_index(i, self.size, "Vector")] = float(value)

    def unset_element(self, i: int) -> None:
        self._m[_check_index(i, self.size, "Vector")] = np.ma.masked

    def __getitem__(self, i: int) -> Optional[float]:
        i = _check_index(i, self.size, "Vector")
        if np.ma.getmaskarray(self._m)[i]:
            return None
        return float(self._m[i])

    def __setitem__(self, i: int, value: Optional[float]) -> None:
        if value is None:
            self.unset_element(i)
        else:
            self.set_element(i, value)

    def values(self) -> List[Optional[float]]:
        return [self[i] for i in range(self.size)]

    def merge_undefined(self, resolved: Vector) -> Vector:
        """
        Fill the undefined slots from resolved and return a dense vector.

        Parameters:
        -----------
        resolved : Vector
            One value per undefined slot, in index order.

        Returns:
        --------
        Vector
            Same length as this partial vector. Defined slots keep their value.

        Raises:
        -------
        DimensionMismatchError
            If len(resolved) differs from the number of undefined slots.
        """
        undefined = np.ma.getmaskarray(self._m)
        n_undefined = int(np.count_nonzero(undefined))
        if len(resolved) != n_undefined:
            raise DimensionMismatchError(
                f"Expected {n_undefined} resolved values, got {len(resolved)}"
            )
        full = self._m.filled(0.0).astype(float)
        full[undefined] = resolved.to_numpy()
        return Vector.from_values(full)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PartialVector):
            return NotImplemented
        return self.values() == other.values()

    def __str__(self) -> str:
        return " ".join(
            "-" if value is None else CONFIG.float_format.format(value)
            for value in self.values()
        )

    def __repr__(self) -> str:
        return f"PartialVector({self.values()!r})"
