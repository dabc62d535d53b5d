from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

import pint

from pipeflow.core.units import QuantityLike, is_quantity, magnitude

SourceKind = Literal["pressure", "kinematic_pressure", "head"]


@dataclass(frozen=True, slots=True)
class PressureSource:
    """Internal source (pump) given as a pressure gain [Pa]."""
    pressure: float

    kind: SourceKind = "pressure"

    def to_pressure(self, *, density: float, g_m_s2: float) -> float:
        return self.pressure


@dataclass(frozen=True, slots=True)
class KinematicPressureSource:
    """Internal source given as kinematic pressure [m2/s2 = J/kg]."""
    kinematic_pressure: float

    kind: SourceKind = "kinematic_pressure"

    def to_pressure(self, *, density: float, g_m_s2: float) -> float:
        return self.kinematic_pressure * density


@dataclass(frozen=True, slots=True)
class HeadSource:
    """Internal source given as a head gain [m of fluid column]."""
    head: float

    kind: SourceKind = "head"

    def to_pressure(self, *, density: float, g_m_s2: float) -> float:
        return self.head * g_m_s2 * density


InternalSource = Union[PressureSource, KinematicPressureSource, HeadSource]


def make_source(kind: str, value: float) -> InternalSource:
    """Build a source from a tag and an SI value (used by tabular inputs)."""
    kind = str(kind).strip().lower()
    if kind == "pressure":
        return PressureSource(float(value))
    if kind == "kinematic_pressure":
        return KinematicPressureSource(float(value))
    if kind == "head":
        return HeadSource(float(value))
    raise ValueError(f"Unknown source kind: {kind!r}. Allowed: pressure, kinematic_pressure, head")


def as_source(value: Union[InternalSource, QuantityLike]) -> InternalSource:
    """
    Normalise a source argument.

    - an InternalSource is returned unchanged
    - a pint quantity is dispatched on its dimensionality
      (pressure, specific energy or length)
    - a plain number is a pressure in pascal
    """
    if isinstance(value, (PressureSource, KinematicPressureSource, HeadSource)):
        return value

    if is_quantity(value):
        if value.check("[mass] / [length] / [time] ** 2"):
            return PressureSource(magnitude(value, "Pa"))
        if value.check("[length] ** 2 / [time] ** 2"):
            return KinematicPressureSource(magnitude(value, "m**2/s**2"))
        if value.check("[length]"):
            return HeadSource(magnitude(value, "m"))
        raise pint.DimensionalityError(value.units, "pressure | kinematic pressure | head")

    return PressureSource(float(value))
