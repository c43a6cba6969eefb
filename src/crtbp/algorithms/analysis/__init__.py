"""
Field analysis tools for the CR3BP.
"""

from .field import FieldSampler, ScalarField, grid_axes

__all__ = [
    'FieldSampler',
    'ScalarField',
    'grid_axes',
]
