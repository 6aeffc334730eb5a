from __future__ import annotations
from dataclasses import dataclass
from typing import List
from ..sampling.roll import Roll
from ..tables.schema import MoonTables, MoonFormation
from ..model.enums import ZoneType
from ..physics.orbits import lunar_roche_limit, planetary_hill_sphere_au
from ..physics.constants import AU_KM, EARTH_RADIUS_KM
from ..util import clamp, lerp

MIN_MASS_RATIO = 0.001
MAX_MASS_RATIO = 0.1
REFERENCE_PLANET_MASS = 100.0
RATIO_FLOOR = 0.1
RATIO_VARIATION = 0.8
ALLOCATION_CENTER = 0.4
ALLOCATION_VARIATION = 0.6
BASE_ECCENTRICITY = 0.05
ECCENTRICITY_VARIATION = 0.8
ROCHE_MARGIN = 1.5


@dataclass
class MoonSlot:
	mass: float  # Earth masses
	orbital_distance: float  # planet radii
	eccentricity: float


def potential_moon_system_mass(roll: Roll, tables: MoonTables, planet_mass: float, zone: ZoneType) -> float:
	"""Mass available for satellites; larger planets give up a smaller fraction."""
	max_ratio = lerp(MAX_MASS_RATIO, MIN_MASS_RATIO, planet_mass / REFERENCE_PLANET_MASS)
	ratio = roll.vary(max_ratio * 0.5, RATIO_VARIATION)
	ratio = clamp(ratio, RATIO_FLOOR * max_ratio, max_ratio)
	available = planet_mass * ratio
	if available < tables.minimum_moon_mass(zone):
		return 0.0
	return available


def hill_sphere_planet_radii(planet_mass: float, planet_radius: float, star_mass: float, semi_major_axis: float) -> float:
	if planet_radius <= 0:
		return 0.0
	hill_au = planetary_hill_sphere_au(planet_mass, star_mass, semi_major_axis)
	return hill_au * AU_KM / (planet_radius * EARTH_RADIUS_KM)


def moon_roche_limit(planet_mass: float, moon_mass: float) -> float:
	"""Roche limit in planet radii."""
	return lunar_roche_limit(planet_mass, 1.0, moon_mass)


def determine_moon_orbits(roll: Roll, tables: MoonTables, formation: MoonFormation, total_moon_mass: float,
		planet_mass: float, planet_radius: float, semi_major_axis: float, star_mass: float,
		zone: ZoneType) -> List[MoonSlot]:
	"""Allocate the moon-mass budget outward from the Roche limit.

	Each orbit is a fixed multiple of the previous one, so distances strictly increase.
	"""
	min_mass = tables.minimum_moon_mass(zone)
	max_orbit = hill_sphere_planet_radii(planet_mass, planet_radius, star_mass, semi_major_axis) \
		* formation.hill_sphere_modifier
	distance = moon_roche_limit(planet_mass, min_mass) * ROCHE_MARGIN
	separation = tables.constants.min_separation_factor

	slots: List[MoonSlot] = []
	remaining = total_moon_mass
	while remaining >= min_mass and len(slots) < formation.max_moons and distance < max_orbit:
		fraction = clamp(roll.vary(ALLOCATION_CENTER, ALLOCATION_VARIATION), 0.1, 1.0)
		mass = max(remaining * fraction, min_mass)
		eccentricity = clamp(roll.vary(BASE_ECCENTRICITY, ECCENTRICITY_VARIATION), 0.001, 0.1)
		slots.append(MoonSlot(mass, distance, eccentricity))
		remaining -= mass
		distance *= separation
	return slots
