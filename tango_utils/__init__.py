"""
Tango Puzzle Engine - Utilities Package
Coordinate and constraint-key helpers shared by the core modules.
"""
from .coords import Position, coordinate_to_string, constraint_key

__all__ = ['Position', 'coordinate_to_string', 'constraint_key']
