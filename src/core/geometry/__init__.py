"""
Geometry — 2D векторы поверх подключаемых operator systems.
"""

from src.core.geometry.vector import ZERO, Vector, VectorConfig, VectorOperand

__all__ = [
    "Vector",
    "VectorConfig",
    "VectorOperand",
    "ZERO",
]
