import pint
import pytest

from pipeflow.core.errors import DomainError
from pipeflow.core.hydraulics.dimensionless import (
    bejan_from_kinematic_pressure,
    bejan_from_pressure,
    kinematic_pressure_from_bejan,
    mass_flow_from_reynolds,
    pressure_from_bejan,
    reynolds_from_mass_flow,
    reynolds_from_velocity,
    velocity_from_reynolds,
)
from pipeflow.core.units import Quantity


def test_reynolds_from_velocity_si_floats():
    assert reynolds_from_velocity(1000.0, 2.0, 0.05, 1e-3) == pytest.approx(1e5)


def test_reynolds_from_velocity_accepts_quantities():
    re = reynolds_from_velocity(
        Quantity(1.0, "g/cm**3"),
        Quantity(200.0, "cm/s"),
        Quantity(50.0, "mm"),
        Quantity(1.0, "mPa*s"),
    )
    assert re == pytest.approx(1e5)


def test_velocity_from_reynolds_is_inverse():
    v = velocity_from_reynolds(1000.0, 1e5, 0.05, 1e-3)
    assert v.units == Quantity(1.0, "m/s").units
    assert v.magnitude == pytest.approx(2.0)


def test_mass_flow_round_trip(scenario):
    s = scenario
    re = reynolds_from_mass_flow(0.15, s["area"], s["hydraulic_diameter"], s["viscosity"])
    m = mass_flow_from_reynolds(s["area"], re, s["hydraulic_diameter"], s["viscosity"])
    assert m.to("kg/s").magnitude == pytest.approx(0.15, rel=1e-12)


def test_mass_flow_sign_carries_to_reynolds(scenario):
    s = scenario
    re = reynolds_from_mass_flow(-0.15, s["area"], s["hydraulic_diameter"], s["viscosity"])
    assert re < 0
    assert mass_flow_from_reynolds(s["area"], re, s["hydraulic_diameter"], s["viscosity"]).magnitude < 0


def test_mass_flow_quantity_in_other_units(scenario):
    s = scenario
    re_si = reynolds_from_mass_flow(0.15, s["area"], s["hydraulic_diameter"], s["viscosity"])
    re_q = reynolds_from_mass_flow(
        Quantity(540.0, "kg/hour"),
        Quantity(s["area"] * 1e4, "cm**2"),
        Quantity(s["hydraulic_diameter"], "m"),
        s["viscosity"],
    )
    assert re_q == pytest.approx(re_si, rel=1e-12)


def test_dynamic_and_kinematic_viscosity_agree():
    d_h, rho, mu = 0.02, 998.0, 1.0e-3
    be_mu = bejan_from_pressure(5000.0, d_h, rho, mu)
    be_nu = bejan_from_pressure(5000.0, d_h, rho, kinematic_viscosity=mu / rho)
    assert be_mu == pytest.approx(be_nu, rel=1e-12)

    p_mu = pressure_from_bejan(be_mu, d_h, rho, mu)
    p_nu = pressure_from_bejan(be_mu, d_h, rho, kinematic_viscosity=mu / rho)
    assert p_mu.magnitude == pytest.approx(5000.0, rel=1e-12)
    assert p_nu.magnitude == pytest.approx(5000.0, rel=1e-12)


def test_bejan_definition():
    # Be = dp * D^2 * rho / mu^2
    assert bejan_from_pressure(100.0, 0.01, 1000.0, 1e-3) == pytest.approx(100.0 * 1e-4 * 1000.0 / 1e-6)
    assert bejan_from_kinematic_pressure(0.1, 0.01, 1e-6) == pytest.approx(0.1 * 1e-4 / 1e-12)
    kp = kinematic_pressure_from_bejan(1e7, 0.01, 1e-6)
    assert kp.to("J/kg").magnitude == pytest.approx(0.1)


def test_pressure_quantity_is_converted():
    be_pa = bejan_from_pressure(1e5, 0.02, 1000.0, 1e-3)
    be_bar = bejan_from_pressure(Quantity(1.0, "bar"), 0.02, 1000.0, 1e-3)
    assert be_bar == pytest.approx(be_pa, rel=1e-12)


def test_negative_pressure_gives_negative_bejan():
    assert bejan_from_pressure(-10.0, 0.02, 1000.0, 1e-3) < 0


def test_exactly_one_viscosity_form():
    with pytest.raises(TypeError):
        bejan_from_pressure(100.0, 0.02, 1000.0)
    with pytest.raises(TypeError):
        pressure_from_bejan(1e6, 0.02, 1000.0, 1e-3, kinematic_viscosity=1e-6)


def test_wrong_dimension_raises():
    with pytest.raises(pint.DimensionalityError):
        reynolds_from_velocity(1000.0, Quantity(1.0, "m"), 0.05, 1e-3)


@pytest.mark.parametrize(
    "call",
    [
        lambda: reynolds_from_velocity(0.0, 1.0, 0.05, 1e-3),
        lambda: reynolds_from_velocity(1000.0, 1.0, 0.0, 1e-3),
        lambda: reynolds_from_velocity(1000.0, 1.0, 0.05, -1e-3),
        lambda: velocity_from_reynolds(1000.0, 1e4, 0.05, 0.0),
        lambda: reynolds_from_mass_flow(0.1, 0.0, 0.05, 1e-3),
        lambda: mass_flow_from_reynolds(1e-3, 1e4, -0.05, 1e-3),
        lambda: bejan_from_pressure(10.0, 0.05, 0.0, 1e-3),
        lambda: bejan_from_pressure(10.0, 0.05, 1000.0, 0.0),
        lambda: bejan_from_kinematic_pressure(1.0, 0.05, 0.0),
        lambda: kinematic_pressure_from_bejan(1e5, 0.0, 1e-6),
        lambda: pressure_from_bejan(1e5, 0.05, -1.0, 1e-3),
    ],
)
def test_nonphysical_inputs_raise_domain_error(call):
    with pytest.raises(DomainError):
        call()
