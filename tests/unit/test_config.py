import math

import pytest

from orrery.core.config import (
    BodyParameters,
    ConfigurationError,
    MoonParameters,
    OrbitalElements,
    SimulationConfig,
    create_default_config,
    create_inner_system_config,
    default_bodies,
)


def _elements(**overrides):
    values = dict(semi_major_axis=300.0, eccentricity=0.0167, inclination_deg=0.0,
                  ascending_node_deg=-11.26, arg_periapsis_deg=102.95,
                  mean_anomaly_deg=357.52, mean_motion_deg_per_day=360.0 / 365.256)
    values.update(overrides)
    return OrbitalElements(**values)


def test_default_config_has_sun_planets_and_moon():
    config = create_default_config()

    assert list(config.bodies) == ["sun", "mercury", "venus", "earth", "mars",
                                   "jupiter", "saturn", "uranus", "neptune"]
    assert config.bodies["sun"].elements is None
    assert config.moon.primary == "earth"
    assert config.bodies["earth"].elements.period_days == pytest.approx(365.256)


def test_inner_system_config():
    config = create_inner_system_config()

    assert set(config.bodies) == {"sun", "earth", "mars"}
    assert config.bodies["mars"].elements.semi_major_axis == pytest.approx(390.0)


@pytest.mark.parametrize("overrides", [
    dict(eccentricity=1.0),
    dict(eccentricity=1.5),
    dict(eccentricity=-0.1),
    dict(semi_major_axis=0.0),
    dict(semi_major_axis=-10.0),
    dict(mean_motion_deg_per_day=0.0),
    dict(inclination_deg=math.nan),
])
def test_invalid_elements_rejected(overrides):
    with pytest.raises(ConfigurationError):
        _elements(**overrides).validate()


def test_valid_elements_pass():
    _elements().validate()
    _elements(eccentricity=0.0).validate()


def test_configuration_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_bad_body_elements_rejected_at_startup():
    bodies = default_bodies()
    bodies["mars"].elements = _elements(eccentricity=1.2)

    with pytest.raises(ConfigurationError):
        SimulationConfig(bodies=bodies)


def test_retrograde_encoded_by_obliquity():
    bodies = default_bodies()

    assert bodies["venus"].retrograde
    assert bodies["uranus"].retrograde
    assert not bodies["earth"].retrograde
    assert all(b.rotation_speed_deg_s > 0 for b in bodies.values())


def test_negative_rate_alone_is_retrograde():
    body = BodyParameters(name="Test", scale=1.0, rotation_speed_deg_s=-5.0)

    assert body.retrograde


def test_ambiguous_retrograde_encoding_rejected():
    body = BodyParameters(name="Test", scale=1.0, rotation_speed_deg_s=-5.0,
                          obliquity_deg=177.0, elements=_elements())

    with pytest.raises(ConfigurationError, match="ambiguous"):
        body.validate()


def test_central_body_must_not_orbit():
    bodies = default_bodies()
    bodies["sun"].elements = _elements()

    with pytest.raises(ConfigurationError):
        SimulationConfig(bodies=bodies)


def test_planet_without_elements_rejected():
    bodies = default_bodies()
    bodies["mars"].elements = None

    with pytest.raises(ConfigurationError):
        SimulationConfig(bodies=bodies)


def test_moon_primary_must_exist():
    with pytest.raises(ConfigurationError):
        SimulationConfig(moon=MoonParameters(primary="pluto"))


def test_moon_period_must_be_positive():
    with pytest.raises(ConfigurationError):
        SimulationConfig(moon=MoonParameters(period_days=0.0))


def test_config_without_moon():
    config = SimulationConfig(moon=None)

    assert config.moon is None


def test_kepler_iterations_must_be_positive():
    with pytest.raises(ConfigurationError):
        SimulationConfig(kepler_iterations=0)


def test_planet_primary_must_be_central_body():
    bodies = default_bodies()
    bodies["mars"].primary = "earth"

    with pytest.raises(ConfigurationError, match="primary"):
        SimulationConfig(bodies=bodies)


def test_central_body_cannot_have_primary():
    bodies = default_bodies()
    bodies["sun"].primary = "earth"

    with pytest.raises(ConfigurationError):
        SimulationConfig(bodies=bodies)
