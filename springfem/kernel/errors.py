# springfem/kernel/errors.py
"""Error taxonomy for model validation, container shape checks and the solver."""


class SpringFEMError(Exception):
    """Base class for every error raised by springfem."""
    pass


class ValidationError(SpringFEMError, ValueError):
    """Raised for duplicate ids, unknown ids and results queried before solve()."""
    pass


class DimensionMismatchError(SpringFEMError, ValueError):
    """Raised when matrix/vector shapes do not fit the requested operation."""
    pass


class IndexOutOfRangeError(SpringFEMError, IndexError):
    """Raised when a container coordinate lies outside its shape."""
    pass


class SingularSystemError(SpringFEMError, ArithmeticError):
    """
    Raised when Gaussian elimination finds no usable pivot.

    In a spring model this means the structure is under-constrained
    (rigid-body motion left over) or a node is not connected to anything.

    Attributes:
        pivot: Elimination step at which A[pivot, pivot] could not be made nonzero
    """

    def __init__(self, pivot: int, message: str = None):
        self.pivot = pivot
        if message is None:
            message = (
                f"The matrix is not solvable: A({pivot}, {pivot}) == 0. "
                "Check that the structure is sufficiently supported."
            )
        super().__init__(message)
