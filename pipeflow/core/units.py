# pipeflow/core/units.py
from __future__ import annotations

from typing import Union

import pint

ureg = pint.UnitRegistry()
Quantity = ureg.Quantity

# Physical arguments are either pint quantities or plain floats in SI units.
QuantityLike = Union[float, int, pint.Quantity]


def is_quantity(value: object) -> bool:
    return isinstance(value, pint.Quantity)


def magnitude(value: QuantityLike, unit: str) -> float:
    """
    Magnitude of ``value`` expressed in ``unit``.

    Quantities are converted (raising ``pint.DimensionalityError`` on a unit
    mismatch); plain numbers are taken as already being in ``unit``.
    """
    if is_quantity(value):
        return float(value.to(unit).magnitude)
    return float(value)


def angle_radians(value: QuantityLike) -> float:
    """Angles: quantities in any angle unit, plain floats in radians."""
    return magnitude(value, "radian")


def as_pressure(value_pa: float) -> pint.Quantity:
    return Quantity(value_pa, "Pa")


def as_mass_flow(value_kg_s: float) -> pint.Quantity:
    return Quantity(value_kg_s, "kg/s")
