"""
Core domain models, mathematical primitives, and invariants.

Independent of any presentation layer: inputs and outputs are plain
numbers, strings, sequences and mappings.
"""
