# conftest.py

import math

import matplotlib

matplotlib.use("Agg")

import pytest

from pipeflow.core.models.fluid import Fluid
from pipeflow.core.models.pipe import PipeSegment


@pytest.fixture
def scenario():
    """Water through a short rough pipe with fittings (SI units)."""
    area = 2.88e-4
    return {
        "area": area,
        "hydraulic_diameter": math.sqrt(area) * 2.0 / math.sqrt(math.pi),
        "viscosity": 1.05e-3,
        "density": 1000.0,
        "length": 0.5,
        "roughness_ratio": 0.005,
        "form_loss_k": 5.55,
    }


@pytest.fixture
def water():
    return Fluid(name="water", rho=1000.0, mu=1.05e-3)


@pytest.fixture
def pipe():
    return PipeSegment.from_area(
        "p1",
        "test pipe",
        area=2.88e-4,
        length=0.5,
        roughness_ratio=0.005,
        form_loss_k=5.55,
        incline_angle_deg=20.0,
        external_id="P1",
    )
