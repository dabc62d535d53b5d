import math

import pytest

from pipeflow.core.build.config import HydrostaticConfig, PipeFlowConfig
from pipeflow.core.errors import DomainError
from pipeflow.core.hydraulics.bejan import bejan_from_reynolds
from pipeflow.core.hydraulics.dimensionless import pressure_from_bejan, reynolds_from_mass_flow
from pipeflow.core.hydraulics.headloss import (
    head_from_pressure,
    height_change,
    hydrostatic_pressure,
    pressure_from_head,
)
from pipeflow.core.models.source import HeadSource, KinematicPressureSource, PressureSource
from pipeflow.core.solver.pipe_flow import (
    mass_flow_from_pressure_change,
    mass_flow_from_pressure_loss,
    pressure_change,
    pressure_loss,
    segment_mass_flow,
    segment_pressure_change,
)
from pipeflow.core.units import Quantity


def _straight(scenario):
    return dict(
        area=scenario["area"],
        hydraulic_diameter=scenario["hydraulic_diameter"],
        viscosity=scenario["viscosity"],
        density=scenario["density"],
        length=scenario["length"],
        roughness_ratio=scenario["roughness_ratio"],
        form_loss_k=scenario["form_loss_k"],
    )


# ============================================================
# Straight pipe
# ============================================================

def test_pressure_loss_equals_manual_chain(scenario):
    s = scenario
    re = reynolds_from_mass_flow(0.15, s["area"], s["hydraulic_diameter"], s["viscosity"])
    be_d = bejan_from_reynolds(
        re, s["roughness_ratio"], s["length"] / s["hydraulic_diameter"], s["form_loss_k"]
    )
    expected = pressure_from_bejan(be_d, s["hydraulic_diameter"], s["density"], s["viscosity"])

    loss = pressure_loss(0.15, **_straight(s))
    assert loss.magnitude == pytest.approx(expected.magnitude, rel=1e-12)
    assert loss.units == Quantity(1.0, "Pa").units
    assert loss.magnitude > 0


def test_pressure_loss_reverse_flow_is_negated(scenario):
    forward = pressure_loss(0.15, **_straight(scenario))
    reverse = pressure_loss(-0.15, **_straight(scenario))
    assert reverse.magnitude == -forward.magnitude


def test_pressure_loss_zero_flow(scenario):
    assert pressure_loss(0.0, **_straight(scenario)).magnitude == 0.0


@pytest.mark.parametrize("m_dot", [1e-5, 0.01, 0.15, -0.15, 3.0])
def test_mass_flow_from_pressure_loss_round_trip(scenario, m_dot):
    loss = pressure_loss(m_dot, **_straight(scenario))
    m = mass_flow_from_pressure_loss(loss, **_straight(scenario))
    assert m.to("kg/s").magnitude == pytest.approx(m_dot, rel=1e-6)


def test_round_trip_without_form_losses(scenario):
    kwargs = _straight(scenario)
    kwargs["form_loss_k"] = 0.0
    loss = pressure_loss(0.15, **kwargs)
    assert mass_flow_from_pressure_loss(loss, **kwargs).magnitude == pytest.approx(0.15, rel=1e-6)


def test_straight_pipe_accepts_quantities(scenario):
    s = scenario
    loss_si = pressure_loss(0.15, **_straight(s))
    loss_q = pressure_loss(
        Quantity(9.0, "kg/min"),
        area=Quantity(s["area"], "m**2"),
        hydraulic_diameter=Quantity(s["hydraulic_diameter"] * 1e3, "mm"),
        viscosity=Quantity(1.05, "mPa*s"),
        density=Quantity(1.0, "kg/L"),
        length=Quantity(50.0, "cm"),
        roughness_ratio=s["roughness_ratio"],
        form_loss_k=s["form_loss_k"],
    )
    assert loss_q.to("Pa").magnitude == pytest.approx(loss_si.magnitude, rel=1e-9)


@pytest.mark.parametrize(
    "override",
    [
        {"length": 0.0},
        {"hydraulic_diameter": -0.01},
        {"roughness_ratio": -0.1},
        {"form_loss_k": -1.0},
        {"density": 0.0},
        {"viscosity": 0.0},
        {"area": 0.0},
    ],
)
def test_straight_pipe_rejects_nonphysical_inputs(scenario, override):
    kwargs = {**_straight(scenario), **override}
    with pytest.raises(DomainError):
        pressure_loss(0.15, **kwargs)
    with pytest.raises(DomainError):
        mass_flow_from_pressure_loss(1000.0, **kwargs)


# ============================================================
# Tilted pipe, internal source
# ============================================================

def test_vertical_pipe_height_and_hydrostatic():
    dz = height_change(0.5, Quantity(90.0, "degree"))
    assert dz.to("m").magnitude == 0.5
    assert hydrostatic_pressure(1000.0, 0.5, Quantity(90.0, "degree")).magnitude == pytest.approx(4905.0)


def test_angles_as_floats_are_radians():
    assert height_change(2.0, math.pi / 6).magnitude == pytest.approx(1.0)
    assert height_change(2.0, -math.pi / 6).magnitude == pytest.approx(-1.0)
    assert height_change(2.0, 0.0).magnitude == 0.0


def test_head_pressure_conversion():
    p = pressure_from_head(Quantity(1.0, "m"), 1000.0)
    assert p.magnitude == pytest.approx(9810.0)
    assert head_from_pressure(p, 1000.0).magnitude == pytest.approx(1.0)


def test_pressure_change_decomposition(scenario):
    angle = Quantity(20.0, "degree")
    change = pressure_change(0.15, incline_angle=angle, source=1500.0, **_straight(scenario))

    hydro = hydrostatic_pressure(scenario["density"], scenario["length"], angle)
    loss = pressure_loss(0.15, **_straight(scenario))
    assert change.magnitude == pytest.approx(hydro.magnitude - loss.magnitude + 1500.0, rel=1e-12)


def test_horizontal_pipe_without_source_is_negated_loss(scenario):
    change = pressure_change(0.15, incline_angle=0.0, **_straight(scenario))
    loss = pressure_loss(0.15, **_straight(scenario))
    assert change.magnitude == pytest.approx(-loss.magnitude, rel=1e-12)


def test_source_forms_are_equivalent(scenario):
    head = 2.5
    g = 9.81
    angle = Quantity(-10.0, "degree")
    forms = [
        HeadSource(head),
        KinematicPressureSource(head * g),
        PressureSource(head * g * scenario["density"]),
        Quantity(head, "m"),
        Quantity(head * g, "J/kg"),
        Quantity(head * g * scenario["density"] / 1e3, "kPa"),
        head * g * scenario["density"],
    ]
    changes = [
        pressure_change(0.15, incline_angle=angle, source=src, **_straight(scenario)).magnitude
        for src in forms
    ]
    for c in changes[1:]:
        assert c == pytest.approx(changes[0], rel=1e-12)


def test_head_source_uses_configured_gravity(scenario):
    cfg = PipeFlowConfig(hydrostatic=HydrostaticConfig(g_m_s2=9.80665))
    base = pressure_change(0.15, incline_angle=0.0, **_straight(scenario), config=cfg)
    with_head = pressure_change(0.15, incline_angle=0.0, source=HeadSource(1.0), **_straight(scenario), config=cfg)
    assert with_head.magnitude - base.magnitude == pytest.approx(9.80665 * 1000.0, rel=1e-9)


@pytest.mark.parametrize("m_dot", [0.01, 0.15, -0.15])
@pytest.mark.parametrize("angle_deg", [-30.0, 0.0, 20.0, 90.0])
@pytest.mark.parametrize("source", [None, HeadSource(-1.0), PressureSource(2.0e4)])
def test_mass_flow_from_pressure_change_round_trip(scenario, m_dot, angle_deg, source):
    angle = Quantity(angle_deg, "degree")
    change = pressure_change(m_dot, incline_angle=angle, source=source, **_straight(scenario))
    m = mass_flow_from_pressure_change(change, incline_angle=angle, source=source, **_straight(scenario))
    assert m.magnitude == pytest.approx(m_dot, rel=1e-6)


def test_pressure_change_above_hydrostatic_reverses_flow(scenario):
    m = mass_flow_from_pressure_change(1000.0, incline_angle=0.0, **_straight(scenario))
    assert m.magnitude < 0


def test_hydrostatic_pressure_change_means_no_flow(scenario):
    angle = Quantity(45.0, "degree")
    hydro = hydrostatic_pressure(scenario["density"], scenario["length"], angle)
    m = mass_flow_from_pressure_change(hydro, incline_angle=angle, **_straight(scenario))
    assert m.magnitude == pytest.approx(0.0, abs=1e-12)


# ============================================================
# PipeSegment / Fluid helpers
# ============================================================

def test_segment_helpers_match_explicit_arguments(pipe, water):
    explicit = pressure_change(
        0.15,
        area=pipe.flow_area,
        hydraulic_diameter=pipe.hydraulic_diameter,
        viscosity=water.mu,
        density=water.rho,
        length=pipe.length,
        incline_angle=Quantity(pipe.incline_angle_deg, "degree"),
        source=HeadSource(3.0),
        roughness_ratio=pipe.roughness_ratio,
        form_loss_k=pipe.form_loss_k,
    )
    via_segment = segment_pressure_change(pipe, water, 0.15, source=HeadSource(3.0))
    assert via_segment.magnitude == explicit.magnitude

    m = segment_mass_flow(pipe, water, via_segment, source=HeadSource(3.0))
    assert m.magnitude == pytest.approx(0.15, rel=1e-6)
