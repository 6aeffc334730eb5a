import math
import pytest
from astrogen.physics.orbits import (
	orbital_period_years, radius_from_mass_density, lunar_roche_limit, moon_orbital_period_days,
	hill_sphere_radius, binary_orbital_period_years, orbital_velocity_kms,
)
from astrogen.physics.thermal import planetary_temperature, combine_temperatures, flux_temperature, greenhouse_factor
from astrogen.gen.zones import calculate_orbital_zones, adjust_zones_for_binary_interference
from astrogen.model.entities import Star
from astrogen.model.enums import ZoneType


def test_earth_year():
	assert math.isclose(orbital_period_years(1.0, 1.0), 1.0, rel_tol=1e-5)


def test_radius_from_mass_density():
	assert math.isclose(radius_from_mass_density(8.0, 1.0), 2.0)
	with pytest.raises(ValueError):
		radius_from_mass_density(0.0, 1.0)
	with pytest.raises(ValueError):
		radius_from_mass_density(1.0, -1.0)


def test_moon_period_of_the_moon():
	# Moon at ~60.3 Earth radii
	period = moon_orbital_period_days(60.3, 1.0, 0.0123, 1.0)
	assert 25.0 < period < 30.0


def test_roche_and_hill():
	assert lunar_roche_limit(1.0, 1.0) < 2.44
	assert hill_sphere_radius(0.0, 1.0, 1.0) == 0.0
	assert binary_orbital_period_years(1.0, 0.0) == 0.0


def test_temperature_falls_with_distance():
	assert planetary_temperature(1.0, 0.5, 0.3) > planetary_temperature(1.0, 1.0, 0.3) > planetary_temperature(1.0, 5.0, 0.3)


def test_combine_temperatures():
	assert math.isclose(combine_temperatures(300.0), 300.0, rel_tol=1e-9)
	assert combine_temperatures(300.0, 100.0) > 300.0
	assert flux_temperature(0.0) == 0.0


def sun():
	return Star(id="S", mass=1.0, luminosity=1.0, radius=1.0, temperature=5778.0)


def test_sun_zones():
	zones = calculate_orbital_zones(sun())
	assert zones.has_habitable_zone
	assert zones.zone_for(1.0) is ZoneType.Habitable
	assert zones.zone_for(0.5) is ZoneType.Inner
	assert zones.zone_for(3.0) is ZoneType.Outer
	assert zones.zone_for(10.0) is ZoneType.FarOuter
	assert zones.zone_for(1000.0) is ZoneType.Beyond
	assert math.isclose(zones.system_limit, 50.0)


def test_binary_interference_removes_habitable_zone():
	zones = calculate_orbital_zones(sun())
	adjust_zones_for_binary_interference(zones, 2.0)
	assert not zones.has_habitable_zone
	assert zones.habitable_inner == -1.0 and zones.habitable_outer == -1.0
	assert math.isclose(zones.system_limit, 0.6)
	# without a habitable band everything inside the frost line is inner
	assert zones.zone_for(0.5) is ZoneType.Inner


def test_binary_interference_truncates_outer_edge():
	zones = calculate_orbital_zones(sun())
	adjust_zones_for_binary_interference(zones, 4.0)
	assert zones.has_habitable_zone
	assert math.isclose(zones.habitable_outer, 1.2)


def test_earth_orbital_velocity():
	assert 29.0 < orbital_velocity_kms(1.0, 1.0) < 30.5
	assert orbital_velocity_kms(0.0, 1.0) == 0.0


def test_greenhouse_factor():
	assert greenhouse_factor(0.0, 0.0, 0.0) == 0.0
	assert math.isclose(greenhouse_factor(0.0, 0.0, 1.0), 1.0)
	assert greenhouse_factor(0.1, 0.0, 1.0) > greenhouse_factor(0.0, 0.0, 1.0)
	assert planetary_temperature(1.0, 1.0, 0.306, greenhouse_factor(0.0, 0.0, 1.0)) > planetary_temperature(1.0, 1.0, 0.306, 0.0)
