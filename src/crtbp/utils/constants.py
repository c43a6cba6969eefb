"""
Physical constants and reference mass ratios.

Masses are in SI units and stored as numpy float64 values. The mass ratios are
the conventional CR3BP parameters mu = m2 / (m1 + m2) of a few systems, plus the
artificial ratio used by default, which exaggerates the secondary so that
all five Lagrange points are well separated in plots.

References
----------
- IAU 2015 Resolution B3 (https://www.iau.org/static/resolutions/IAU2015_English.pdf)
- NASA JPL Solar System Dynamics (https://ssd.jpl.nasa.gov/)
"""

import numpy as np

#: float: Mass of Sun (kg)
M_sun = np.float64(1.989e30)

#: float: Mass of Earth (kg)
M_earth = np.float64(5.972e24)

#: float: Mass of Moon (kg)
M_moon = np.float64(7.348e22)


def mass_parameter(primary_mass, secondary_mass):
    """
    Calculate the mass parameter mu for the CR3BP.

    The mass parameter is the ratio of the secondary mass to the total
    system mass: mu = m2 / (m1 + m2).

    Parameters
    ----------
    primary_mass : float
        Mass of the primary body (m1) in kilograms
    secondary_mass : float
        Mass of the secondary body (m2) in kilograms

    Returns
    -------
    float
        Mass parameter mu (dimensionless)
    """
    if primary_mass <= 0 or secondary_mass <= 0:
        raise ValueError("Body masses must be positive.")
    if secondary_mass > primary_mass:
        raise ValueError("The secondary must not be heavier than the primary.")
    return float(secondary_mass / (primary_mass + secondary_mass))


#: float: Sun-Earth mass ratio
MU_SUN_EARTH = 0.00000304042338912411

#: float: Earth-Moon mass ratio
MU_EARTH_MOON = 0.012150585609624

#: float: Artificial mass ratio of the default system
MU_ARTIFICIAL = 0.02
