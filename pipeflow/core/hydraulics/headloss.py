# pipeflow/core/hydraulics/headloss.py
from __future__ import annotations

import math

import pint

from pipeflow.core.errors import require_positive
from pipeflow.core.units import Quantity, QuantityLike, angle_radians, as_pressure, magnitude

G_M_S2 = 9.81


def height_change(length: QuantityLike, incline_angle: QuantityLike) -> pint.Quantity:
    """dz = L * sin(angle); positive when the pipe rises along the flow direction."""
    return Quantity(magnitude(length, "m") * math.sin(angle_radians(incline_angle)), "m")


def hydrostatic_pressure(
    density: QuantityLike,
    length: QuantityLike,
    incline_angle: QuantityLike,
    *,
    g_m_s2: float = G_M_S2,
) -> pint.Quantity:
    """rho * g * dz"""
    rho = magnitude(density, "kg/m**3")
    require_positive(rho, "density")
    dz = height_change(length, incline_angle).magnitude
    return as_pressure(rho * g_m_s2 * dz)


def pressure_from_head(head: QuantityLike, density: QuantityLike, *, g_m_s2: float = G_M_S2) -> pint.Quantity:
    """p = h * g * rho"""
    return as_pressure(magnitude(head, "m") * g_m_s2 * magnitude(density, "kg/m**3"))


def head_from_pressure(pressure: QuantityLike, density: QuantityLike, *, g_m_s2: float = G_M_S2) -> pint.Quantity:
    rho = magnitude(density, "kg/m**3")
    require_positive(rho, "density")
    return Quantity(magnitude(pressure, "Pa") / (g_m_s2 * rho), "m")
