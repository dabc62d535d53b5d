from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Optional

from pipeflow.core.errors import require_positive


@dataclass(frozen=True, slots=True)
class PipeSegment:
    """
    Uniform-temperature pipe segment (core model).

    Notes:
    - hydraulic_diameter is the characteristic length of the section, it also
      works for non-circular ducts when area is given explicitly
    - area defaults to the circular section pi*D^2/4
    - roughness_ratio is eps/D (dimensionless), form_loss_k the sum of minor losses
    - incline_angle_deg > 0 means the outlet sits above the inlet
    """
    uid: str
    name: str

    hydraulic_diameter: float   # [m]
    length: float               # [m]

    area: Optional[float] = None    # [m2] (if None, circular)
    roughness_ratio: float = 0.0    # eps/D [-]
    form_loss_k: float = 0.0        # K [-]
    incline_angle_deg: float = 0.0  # [deg]

    external_id: Optional[str] = None
    metadata: Dict[str, object] = field(default_factory=dict)

    @classmethod
    def from_area(cls, uid: str, name: str, *, area: float, length: float, **kwargs) -> "PipeSegment":
        """Circular pipe given its flow area: D = 2*sqrt(A/pi)."""
        require_positive(area, "pipe area")
        diameter = 2.0 * math.sqrt(area / math.pi)
        return cls(uid=uid, name=name, hydraulic_diameter=diameter, length=length, area=area, **kwargs)

    @property
    def flow_area(self) -> float:
        if self.area is not None:
            return self.area
        return math.pi * (self.hydraulic_diameter ** 2) / 4.0

    @property
    def length_to_diameter(self) -> float:
        return self.length / self.hydraulic_diameter

    @property
    def height_change(self) -> float:
        return self.length * math.sin(math.radians(self.incline_angle_deg))
