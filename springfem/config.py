# springfem/config.py
"""
Solver configuration and defaults.
"""

from dataclasses import dataclass


@dataclass
class SolverConfig:
    """Global solver configuration."""

    # Model
    dimension: int = 1  # DOF per node; a 1-D spring assemblage has exactly one

    # Gaussian elimination: a column whose largest |value| is <= this is singular.
    # 0.0 reproduces the exact-zero pivot test.
    pivot_tolerance: float = 0.0

    # Output
    log_level: str = "INFO"
    float_format: str = "{:g}"


# Global config instance
CONFIG = SolverConfig()
