from __future__ import annotations
import math
from typing import List, Optional, Sequence, Tuple
from ..model.entities import Moon, Planet, Star
from ..model.enums import BodyKind, ZoneType, NO_TECTONICS_TYPES
from ..physics.constants import G, EARTH_MASS_KG, EARTH_RADIUS_M, EARTH_RADIUS_KM, SIGMA_SB
from ..physics.orbits import moon_orbital_period_days
from ..physics.thermal import combine_temperatures
from ..util import clamp, clamp01
from .body import (
	GenerationContext, generate_basic_properties, finalize_celestial_body, calculate_rotation,
	lookup_parent_star, DEFAULT_AGE_GYR, FALLBACK_DISTANCE_AU,
)
from .moon_system import MoonSlot
from ..logger_setup import get_logger

log = get_logger(__name__)

LOVE_NUMBER = 0.3
DISSIPATION_FACTOR = 100.0
HEATING_COEFFICIENT = 21.0
MIN_HEATING_ECCENTRICITY = 0.001
PLANETARY_HEATING_FACTOR = 0.5
CRITICAL_TIDAL_HEATING = 0.5  # W/m^2
EXTREME_TIDAL_HEATING = 2.0
BASE_TILT = 7.5
LOCKED_TILT = 0.5
SIMPLE_RATIOS: Tuple[float, ...] = (2.0, 1.5, 4.0 / 3.0, 5.0 / 3.0)


def tidal_heating(planet_mass: float, moon_mass: float, moon_radius: float, distance_radii: float,
		planet_radius: float, eccentricity: float) -> float:
	"""Surface heat flux in W/m^2 from eccentricity tides."""
	if eccentricity < MIN_HEATING_ECCENTRICITY:
		return 0.0
	m = moon_mass * EARTH_MASS_KG
	r = moon_radius * EARTH_RADIUS_M
	mp = planet_mass * EARTH_MASS_KG
	d = distance_radii * planet_radius * EARTH_RADIUS_M
	if m <= 0 or r <= 0 or d <= 0:
		return 0.0
	heating = HEATING_COEFFICIENT * G * mp * mp * r ** 3 * eccentricity ** 2 * LOVE_NUMBER
	heating /= 2.0 * DISSIPATION_FACTOR * m * d ** 6
	return heating / (4.0 * math.pi * r * r)


def planetary_heating(moon: Moon, planet: Planet) -> float:
	"""Temperature contribution of the parent planet's thermal glow."""
	planet_km = planet.radius * EARTH_RADIUS_KM
	distance_km = moon.orbital_distance * planet.radius * EARTH_RADIUS_KM
	if distance_km <= 0:
		return 0.0
	apparent = 2.0 * math.atan2(planet_km, distance_km)
	emission = SIGMA_SB * planet.surface_temperature ** 4 * (1.0 - planet.albedo)
	solid_angle = 2.0 * math.pi * (1.0 - math.cos(apparent / 2.0))
	flux = emission * solid_angle / (4.0 * math.pi)
	return (flux / SIGMA_SB) ** 0.25 * PLANETARY_HEATING_FACTOR


def moon_day_night(moon: Moon) -> Tuple[float, float]:
	mean = moon.surface_temperature
	if moon.tidally_locked:
		spread = mean * 0.8
	elif moon.rotation_period < 1.0:
		spread = mean * 0.1
	else:
		spread = mean * min(0.5, moon.rotation_period / 10.0)
	if moon.has_atmosphere:
		spread *= 1.0 - min(1.0, moon.atmospheric_pressure / 0.1) * 0.9
	return mean + spread / 2.0, max(3.0, mean - spread / 2.0)


def apply_tidal_geology(ctx: GenerationContext, moon: Moon) -> None:
	if moon.tidal_heating <= 0 or moon.planet_type in NO_TECTONICS_TYPES:
		return
	factor = moon.tidal_heating / CRITICAL_TIDAL_HEATING
	moon.tectonic_activity = min(1.0, moon.tectonic_activity + factor * 0.3)
	moon.volcanic_activity = min(1.0, moon.volcanic_activity + factor * 0.4)
	if moon.tidal_heating > EXTREME_TIDAL_HEATING:
		moon.add_resource("Geothermal Energy", clamp01(ctx.roll.vary(0.7, 0.2)))


def adjust_moon_temperature(ctx: GenerationContext, moon: Moon, planet: Planet) -> None:
	moon.surface_temperature = combine_temperatures(
		moon.surface_temperature,
		planetary_heating(moon, planet),
		math.sqrt(moon.tidal_heating),
	)
	moon.daytime_temperature, moon.nighttime_temperature = moon_day_night(moon)
	apply_tidal_geology(ctx, moon)


def generate_moon(ctx: GenerationContext, slot: MoonSlot, planet: Planet, zone: ZoneType,
		moon_id: str, host: Optional[Star] = None) -> Moon:
	"""One moon of ``planet``; classification and irradiance use the planet's distance from its star.

	Without a registered parent star the moon is lit by a Sun-like star at 1 AU.
	"""
	if host is None:
		host = ctx.registry.get_star(planet.parent_star_id)
	if host is not None:
		luminosity, age = host.luminosity, host.age
		stellar_distance = planet.semi_major_axis
	else:
		luminosity, _ = lookup_parent_star(ctx, planet.parent_star_id)
		age = DEFAULT_AGE_GYR
		stellar_distance = FALLBACK_DISTANCE_AU
	moon = generate_basic_properties(
		ctx, BodyKind.Moon,
		body_id=moon_id,
		mass=slot.mass,
		orbital_distance=slot.orbital_distance,
		stellar_distance=stellar_distance,
		zone=zone,
		eccentricity=slot.eccentricity,
		luminosity=luminosity,
		system_id=planet.parent_system_id,
	)
	moon.parent_planet_id = planet.id
	moon.orbital_distance = slot.orbital_distance
	moon.orbital_period = moon_orbital_period_days(slot.orbital_distance, planet.mass, moon.mass, planet.radius)
	moon.rotation_period, moon.tidally_locked = calculate_rotation(
		ctx, BodyKind.Moon, moon, slot.orbital_distance, planet.mass, planet.radius, DEFAULT_AGE_GYR,
	)
	if moon.tidally_locked:
		moon.axial_tilt = LOCKED_TILT
	else:
		moon.axial_tilt = clamp(ctx.roll.vary(BASE_TILT, 0.5), 0.0, 15.0)
	moon.tidal_heating = tidal_heating(planet.mass, moon.mass, moon.radius, slot.orbital_distance,
		planet.radius, slot.eccentricity)

	finalize_celestial_body(ctx, BodyKind.Moon, moon, luminosity, stellar_distance, age)
	adjust_moon_temperature(ctx, moon, planet)
	ctx.registry.register_moon(moon)
	log.debug("moon %s: %s m=%.4g d=%.2f Rp", moon.id, moon.planet_type.value, moon.mass, moon.orbital_distance)
	return moon


def nearest_simple_ratio(ratio: float) -> float:
	return min(SIMPLE_RATIOS, key=lambda r: abs(r - ratio))


def assign_orbital_resonances(ctx: GenerationContext, moons: Sequence[Moon], probability: float) -> List[Moon]:
	"""Lock period ratios of neighbouring moons to the nearest simple ratio."""
	for inner, outer in zip(moons, moons[1:]):
		if inner.orbital_period <= 0:
			continue
		if ctx.roll.chance(probability):
			outer.orbital_resonance = nearest_simple_ratio(outer.orbital_period / inner.orbital_period)
	return list(moons)
