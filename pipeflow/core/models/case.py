from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

from pipeflow.core.models.source import InternalSource

GivenQuantity = Literal["mass_flow_kg_s", "pressure_change_pa"]


@dataclass(frozen=True, slots=True)
class FlowCase:
    """
    One operating point to resolve on a pipe segment.

    Notes:
    - given = "mass_flow_kg_s": value is the mass flow, the pressure change is solved
    - given = "pressure_change_pa": value is the pressure change, the mass flow is solved
    - source is an optional internal source (pump) inside the segment
    """
    uid: str
    pipe_uid: str
    given: GivenQuantity
    value: float

    source: Optional[InternalSource] = None

    external_id: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
