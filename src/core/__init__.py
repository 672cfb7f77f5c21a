"""
Core: operator systems, 2D vectors, contracts and math helpers.

Vector logic is independent of the numeric representation: every arithmetic
primitive comes from the operator system the vector was configured with.
"""
