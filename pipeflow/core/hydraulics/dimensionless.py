# pipeflow/core/hydraulics/dimensionless.py
"""
Nondimensionalise and redimensionalise pipe flow quantities.

Physical arguments are pint quantities or plain floats in SI units; physical
results are pint quantities in SI units. Re and Be are plain floats.

    Re = rho * V * D_h / mu = (m_dot / A) * D_h / mu
    Be = dp * D_h^2 * rho / mu^2 = (dp/rho) * D_h^2 / nu^2
"""
from __future__ import annotations

from typing import Optional

import pint

from pipeflow.core.errors import require_positive
from pipeflow.core.units import Quantity, QuantityLike, as_mass_flow, as_pressure, magnitude


# ============================================================
# Reynolds number <-> velocity / mass flow
# ============================================================

def reynolds_from_velocity(
    density: QuantityLike,
    velocity: QuantityLike,
    hydraulic_diameter: QuantityLike,
    viscosity: QuantityLike,
) -> float:
    rho = magnitude(density, "kg/m**3")
    mu = magnitude(viscosity, "Pa*s")
    d_h = magnitude(hydraulic_diameter, "m")
    require_positive(rho, "density")
    require_positive(mu, "fluid viscosity")
    require_positive(d_h, "hydraulic diameter")

    return rho * magnitude(velocity, "m/s") * d_h / mu


def velocity_from_reynolds(
    density: QuantityLike,
    re: float,
    hydraulic_diameter: QuantityLike,
    viscosity: QuantityLike,
) -> pint.Quantity:
    rho = magnitude(density, "kg/m**3")
    mu = magnitude(viscosity, "Pa*s")
    d_h = magnitude(hydraulic_diameter, "m")
    require_positive(rho, "density")
    require_positive(mu, "fluid viscosity")
    require_positive(d_h, "hydraulic diameter")

    return Quantity(mu / rho / d_h * re, "m/s")


def reynolds_from_mass_flow(
    mass_flow: QuantityLike,
    area: QuantityLike,
    hydraulic_diameter: QuantityLike,
    viscosity: QuantityLike,
) -> float:
    mu = magnitude(viscosity, "Pa*s")
    d_h = magnitude(hydraulic_diameter, "m")
    a = magnitude(area, "m**2")
    require_positive(mu, "fluid viscosity")
    require_positive(d_h, "hydraulic diameter")
    require_positive(a, "pipe area")

    return magnitude(mass_flow, "kg/s") / a * d_h / mu


def mass_flow_from_reynolds(
    area: QuantityLike,
    re: float,
    hydraulic_diameter: QuantityLike,
    viscosity: QuantityLike,
) -> pint.Quantity:
    mu = magnitude(viscosity, "Pa*s")
    d_h = magnitude(hydraulic_diameter, "m")
    a = magnitude(area, "m**2")
    require_positive(mu, "fluid viscosity")
    require_positive(d_h, "hydraulic diameter")
    require_positive(a, "pipe area")

    return as_mass_flow(mu * a / d_h * re)


# ============================================================
# Bejan number <-> pressure
# ============================================================

def _kinematic_viscosity(
    density: float,
    viscosity: Optional[QuantityLike],
    kinematic_viscosity: Optional[QuantityLike],
) -> float:
    if (viscosity is None) == (kinematic_viscosity is None):
        raise TypeError("pass exactly one of viscosity (dynamic) or kinematic_viscosity")
    if kinematic_viscosity is not None:
        return magnitude(kinematic_viscosity, "m**2/s")
    mu = magnitude(viscosity, "Pa*s")
    require_positive(mu, "fluid viscosity")
    return mu / density


def bejan_from_kinematic_pressure(
    kinematic_pressure: QuantityLike,
    hydraulic_diameter: QuantityLike,
    kinematic_viscosity: QuantityLike,
) -> float:
    nu = magnitude(kinematic_viscosity, "m**2/s")
    d_h = magnitude(hydraulic_diameter, "m")
    require_positive(nu, "fluid kinematic viscosity")
    require_positive(d_h, "hydraulic diameter")

    return magnitude(kinematic_pressure, "m**2/s**2") * d_h ** 2 / nu ** 2


def bejan_from_pressure(
    pressure: QuantityLike,
    hydraulic_diameter: QuantityLike,
    density: QuantityLike,
    viscosity: Optional[QuantityLike] = None,
    *,
    kinematic_viscosity: Optional[QuantityLike] = None,
) -> float:
    """
    Be_D from a (signed) pressure, with either the dynamic viscosity or the
    kinematic viscosity of the fluid.
    """
    rho = magnitude(density, "kg/m**3")
    require_positive(rho, "density")
    nu = _kinematic_viscosity(rho, viscosity, kinematic_viscosity)

    kinematic_pressure = magnitude(pressure, "Pa") / rho
    return bejan_from_kinematic_pressure(kinematic_pressure, hydraulic_diameter, nu)


def kinematic_pressure_from_bejan(
    be_d: float,
    hydraulic_diameter: QuantityLike,
    kinematic_viscosity: QuantityLike,
) -> pint.Quantity:
    nu = magnitude(kinematic_viscosity, "m**2/s")
    d_h = magnitude(hydraulic_diameter, "m")
    require_positive(nu, "fluid kinematic viscosity")
    require_positive(d_h, "hydraulic diameter")

    return Quantity(nu ** 2 / d_h ** 2 * be_d, "m**2/s**2")


def pressure_from_bejan(
    be_d: float,
    hydraulic_diameter: QuantityLike,
    density: QuantityLike,
    viscosity: Optional[QuantityLike] = None,
    *,
    kinematic_viscosity: Optional[QuantityLike] = None,
) -> pint.Quantity:
    rho = magnitude(density, "kg/m**3")
    require_positive(rho, "density")
    nu = _kinematic_viscosity(rho, viscosity, kinematic_viscosity)

    kinematic_pressure = kinematic_pressure_from_bejan(be_d, hydraulic_diameter, nu)
    return as_pressure(kinematic_pressure.magnitude * rho)
