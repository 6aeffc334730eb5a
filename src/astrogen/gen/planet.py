from __future__ import annotations
from typing import Optional
from ..model.entities import Orbit, Planet, Star
from ..model.enums import BodyKind
from ..physics.orbits import orbital_period_years
from ..util import clamp
from .body import GenerationContext, generate_basic_properties, finalize_celestial_body, calculate_rotation
from .rings import generate_rings
from .moon_system import potential_moon_system_mass, determine_moon_orbits
from .moon import generate_moon, assign_orbital_resonances
from ..logger_setup import get_logger

log = get_logger(__name__)

BASE_TILT = 23.5
TIDAL_AGE_GYR = 5.0


def generate_planet(ctx: GenerationContext, orbit: Orbit, host: Star, planet_id: str,
		pair_id: Optional[str] = None) -> Planet:
	"""Planet for a planned orbit around ``host``, with its rings and moons.

	For circumbinary slots ``host`` is the pair's combined stand-in star, whose id
	is the primary's.
	"""
	planet = generate_basic_properties(
		ctx, BodyKind.Planet,
		body_id=planet_id,
		mass=orbit.mass,
		orbital_distance=orbit.distance,
		zone=orbit.zone,
		eccentricity=orbit.eccentricity,
		luminosity=host.luminosity,
		system_id=host.parent_system_id,
	)
	planet.parent_star_id = host.id
	planet.parent_pair_id = pair_id
	planet.zone = orbit.zone
	planet.semi_major_axis = orbit.distance
	planet.inclination = orbit.inclination

	planet.rotation_period, planet.tidally_locked = calculate_rotation(
		ctx, BodyKind.Planet, planet, orbit.distance, host.mass, host.radius, TIDAL_AGE_GYR,
	)
	planet.orbital_period = orbital_period_years(orbit.distance, host.mass, planet.mass)
	if planet.tidally_locked:
		planet.axial_tilt = 0.0
	else:
		planet.axial_tilt = clamp(ctx.roll.vary(BASE_TILT, 0.5), 0.0, 45.0)

	finalize_celestial_body(ctx, BodyKind.Planet, planet, host.luminosity, orbit.distance, host.age)
	add_rings_and_moons(ctx, planet, host, orbit.has_moons)
	log.debug("planet %s: %s m=%.3g a=%.3f AU zone=%s moons=%d", planet.id, planet.planet_type.value,
		planet.mass, planet.semi_major_axis, planet.zone.value, len(planet.moons))
	return planet


def add_rings_and_moons(ctx: GenerationContext, planet: Planet, host: Star, may_have_moons: bool = True) -> None:
	roll = ctx.roll
	tables = ctx.tables
	planet.rings = generate_rings(roll, tables.rings, planet)
	planet.has_rings = planet.rings is not None
	if not may_have_moons:
		return

	budget = planet.mass - (planet.rings.total_mass if planet.rings is not None else 0.0)
	available = potential_moon_system_mass(roll, tables.moons, budget, planet.zone)
	if available <= 0:
		return
	formation = ctx.tables.moon_formation(planet.planet_type)
	slots = determine_moon_orbits(
		roll, tables.moons, formation, available, planet.mass, planet.radius,
		planet.semi_major_axis, host.mass, planet.zone,
	)
	for n, slot in enumerate(slots, 1):
		planet.add_moon(generate_moon(ctx, slot, planet, planet.zone, f"{planet.id}-M{n}", host))
	assign_orbital_resonances(ctx, planet.moons, formation.resonance_probability)
