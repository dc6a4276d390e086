"""
Solvers for hexagonal loop puzzles.
"""

from .base_solver import BaseSolver, SolverConfig, SolverResult
from .brute_force import BruteForceEnumerator, BruteForceSolver, EnumerationResult

__all__ = [
    # Base classes
    'BaseSolver',
    'SolverConfig',
    'SolverResult',

    # Exhaustive enumeration
    'BruteForceEnumerator',
    'BruteForceSolver',
    'EnumerationResult',
]


# Solver registry for easy access
SOLVER_REGISTRY = {
    'brute_force': BruteForceSolver,
}


def get_solver(name: str, config: SolverConfig = None) -> BaseSolver:
    """
    Get a solver by name.

    Args:
        name: Solver name (brute_force)
        config: Optional solver configuration

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name is not recognized
    """
    solver_class = SOLVER_REGISTRY.get(name.lower())
    if not solver_class:
        raise ValueError(f"Unknown solver: {name}. Available: {list(SOLVER_REGISTRY.keys())}")

    return solver_class(config or SolverConfig())
