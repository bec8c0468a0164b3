"""Core business logic layer.

Subpackages:
- shopping: quantity parsing, unit conversion, name canonicalization,
  aggregation and the shopping-list builder
- pantry: pantry deduction and stock analysis
"""
__all__ = ["shopping", "pantry"]
