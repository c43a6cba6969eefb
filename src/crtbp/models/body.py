"""
Massive body model for the CR3BP.

This module defines the Body class, which represents one of the two massive
bodies (primary and secondary) of the Circular Restricted Three-Body Problem.
In the normalized rotating frame both bodies are at rest on the x-axis: the
primary at (-mu, 0) with mass fraction 1 - mu, and the secondary at (1 - mu, 0)
with mass fraction mu. The implementation uses Numba's jitclass so that bodies
can be handed to compiled code.
"""

import numpy as np
from numba import types
from numba.experimental import jitclass


spec = [
    ('name', types.unicode_type),
    ('position', types.float64[:]),
    ('mass', types.float64),
]


@jitclass(spec)
class Body:
    """
    Massive body at rest in the rotating frame.

    Parameters
    ----------
    name : str
        Name of the body
    position : ndarray
        2D position [x, y] in the rotating frame
    mass : float
        Mass fraction of the body (1 - mu for the primary, mu for the secondary)
    """
    def __init__(self, name, position, mass):
        self.name = name
        self.position = position
        self.mass = mass

    def distance(self, x, y):
        """Distance from the point (x, y) to the body."""
        dx = x - self.position[0]
        dy = y - self.position[1]
        return np.sqrt(dx * dx + dy * dy)


def create_bodies(mu, primary_name="Sun", secondary_name="Earth"):
    """
    Create the primary and secondary bodies for a mass ratio.

    Parameters
    ----------
    mu : float
        Mass parameter of the CR3BP system (ratio of smaller to total mass)
    primary_name, secondary_name : str, optional
        Names of the two bodies

    Returns
    -------
    tuple
        (primary, secondary) Body instances
    """
    primary = Body(primary_name, np.array([-mu, 0.0], dtype=np.float64), 1.0 - mu)
    secondary = Body(secondary_name, np.array([1.0 - mu, 0.0], dtype=np.float64), mu)
    return primary, secondary
