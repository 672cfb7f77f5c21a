"""
Test suite for vector-operators

Contains:
- tests/unit/          : Unit tests for operator systems, vectors and contracts
"""
