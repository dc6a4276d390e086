"""
hexloop: board topology, loop validation and generation for hexagonal
Slitherlink puzzles.
"""

__version__ = "0.1.0"
