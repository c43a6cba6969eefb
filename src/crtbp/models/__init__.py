# Import models
from .body import Body, create_bodies
from .lagrange_point import (
    LagrangePoint,
    CollinearPoint,
    TriangularPoint,
    L1Point,
    L2Point,
    L3Point,
    L4Point,
    L5Point,
    create_lagrange_point,
    lagrange_points,
)

# Export all model classes
__all__ = [
    'Body',
    'create_bodies',
    'LagrangePoint',
    'CollinearPoint',
    'TriangularPoint',
    'L1Point',
    'L2Point',
    'L3Point',
    'L4Point',
    'L5Point',
    'create_lagrange_point',
    'lagrange_points',
]
