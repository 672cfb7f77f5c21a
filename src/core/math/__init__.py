"""
Core math modules

Конверсия угловых единиц для векторных операций.
"""

# Angles
from src.core.math.angles import (
    DEGREES_PER_RADIAN,
    degree_to_radian,
    radian_to_degree,
)

__all__ = [
    "DEGREES_PER_RADIAN",
    "degree_to_radian",
    "radian_to_degree",
]
