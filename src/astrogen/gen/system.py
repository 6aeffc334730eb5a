from __future__ import annotations
import math
from typing import Dict, List, Optional, Sequence, Tuple
from ..sampling.roll import Roll
from ..model.entities import AsteroidBelt, BinaryPair, Orbit, OrbitalZones, Planet, Star, StarSystem
from ..model.enums import ComponentKind, PlanetType
from ..physics.orbits import binary_orbital_period_years
from ..physics.constants import AU_TO_SOLAR_RADIUS
from .body import GenerationContext
from .star import generate_star, set_stellar_distances
from .zones import (
	calculate_orbital_zones, calculate_circumbinary_zones, hierarchy_zones,
	adjust_zones_for_binary_interference,
)
from .orbits import generate_circumstellar_orbits, generate_circumbinary_orbits
from .planet import generate_planet
from .asteroid_belt import generate_asteroid_belt
from ..logger_setup import get_logger

log = get_logger(__name__)

CLOSE_BINARY_AU = 10.0
LOW_MASS_RATIO = 0.2
BELT_INNER = 0.9
BELT_OUTER = 1.1
# distribution() ceiling -> (min, max) separation in AU before the mass factor; None = contact limit
SEPARATION_CLASSES: List[Tuple[float, Optional[float], float]] = [
	(2000, None, 1.0),
	(6000, 1.0, 50.0),
	(9000, 50.0, 1000.0),
	(math.inf, 1000.0, 20000.0),
]


# -- components

def component_stars(system: StarSystem, component_id: str, kind: ComponentKind) -> List[Star]:
	"""Every star under a hierarchy component."""
	if kind is ComponentKind.Star:
		star = system.find_star(component_id)
		return [star] if star is not None else []
	pair = system.find_pair(component_id)
	if pair is None:
		return []
	return component_stars(system, pair.primary_id, pair.primary_kind) + \
		component_stars(system, pair.secondary_id, pair.secondary_kind)


def combined_star(stars: Sequence[Star], star_id: str = "", system_id: str = "") -> Star:
	"""Stand-in star with summed mass and luminosity, the largest radius and a luminosity-weighted temperature."""
	luminosity = sum(s.luminosity for s in stars)
	if luminosity > 0:
		temperature = sum(s.temperature * s.luminosity for s in stars) / luminosity
	else:
		temperature = max((s.temperature for s in stars), default=0.0)
	return Star(
		id=star_id,
		parent_system_id=system_id,
		mass=sum(s.mass for s in stars),
		luminosity=luminosity,
		radius=max((s.radius for s in stars), default=0.0),
		temperature=temperature,
		age=max((s.age for s in stars), default=0.0),
	)


def pair_members(system: StarSystem, pair: BinaryPair) -> Tuple[List[Star], List[Star]]:
	return (
		component_stars(system, pair.primary_id, pair.primary_kind),
		component_stars(system, pair.secondary_id, pair.secondary_kind),
	)


# -- hierarchy

def minimum_separation(primary: Sequence[Star], secondary: Sequence[Star]) -> float:
	r1 = max((s.radius for s in primary), default=0.0)
	r2 = max((s.radius for s in secondary), default=0.0)
	return (r1 + r2) * 2.5 / AU_TO_SOLAR_RADIUS


def sample_separation(roll: Roll, primary: Sequence[Star], secondary: Sequence[Star]) -> float:
	m1 = sum(s.mass for s in primary)
	m2 = sum(s.mass for s in secondary)
	heavier = max(m1, m2)
	ratio = min(m1, m2) / heavier if heavier > 0 else 1.0
	factor = max(0.0, m1 + m2) ** (1.0 / 3.0)
	key = roll.distribution()
	for ceiling, lo, hi in SEPARATION_CLASSES:
		if key < ceiling:
			break
	low = max(0.1, minimum_separation(primary, secondary)) if lo is None else lo * factor
	high = hi * factor
	if ratio < LOW_MASS_RATIO:
		low *= 2.0
		high *= 2.0
	return roll.find_range(low, high)


def _build_pair(roll: Roll, system: StarSystem, stars: List[Star]) -> str:
	pair = BinaryPair(id=f"{system.id}-BP{len(system.binary_pairs) + 1}")
	system.binary_pairs.append(pair)
	pair.primary_id = stars[0].id
	pair.primary_kind = ComponentKind.Star
	if len(stars) == 2:
		pair.secondary_id = stars[1].id
		pair.secondary_kind = ComponentKind.Star
	else:
		pair.secondary_id = _build_pair(roll, system, stars[1:])
		pair.secondary_kind = ComponentKind.BinaryPair

	primary, secondary = pair_members(system, pair)
	m1 = sum(s.mass for s in primary)
	m2 = sum(s.mass for s in secondary)
	pair.separation = sample_separation(roll, primary, secondary)
	pair.total_mass = m1 + m2
	pair.mass_ratio = min(m1, m2) / max(m1, m2) if max(m1, m2) > 0 else 1.0
	pair.orbital_period = binary_orbital_period_years(pair.separation, pair.total_mass)
	share = m1 / pair.total_mass if pair.total_mass > 0 else 0.5
	pair.primary_orbit_radius = pair.separation * (1.0 - share)
	pair.secondary_orbit_radius = pair.separation * share

	# Hill spheres and Roche limits relative to the other side of the pair
	for members, others in ((primary, secondary), (secondary, primary)):
		if len(members) == 1:
			set_stellar_distances(members[0], combined_star(others), pair.separation)
	return pair.id


def organize_star_hierarchy(roll: Roll, system: StarSystem) -> Optional[str]:
	"""Nest the stars into binary pairs, heaviest first; returns the root pair id."""
	if len(system.stars) < 2:
		return None
	ordered = sorted(system.stars, key=lambda s: s.mass, reverse=True)
	return _build_pair(roll, system, ordered)


# -- zones

def calculate_binary_zones(system: StarSystem, pair: BinaryPair) -> OrbitalZones:
	primary, secondary = pair_members(system, pair)
	star_pair = pair.primary_kind is ComponentKind.Star and pair.secondary_kind is ComponentKind.Star
	if star_pair and pair.separation < CLOSE_BINARY_AU:
		zones = calculate_orbital_zones(combined_star(primary + secondary))
	elif star_pair:
		everything = primary + secondary
		zones = calculate_circumbinary_zones(
			sum(s.luminosity for s in everything), sum(s.mass for s in everything), pair.separation,
		)
	else:
		zones = hierarchy_zones(pair.separation)
	for members in (primary, secondary):
		if len(members) == 1 and members[0].zones is not None:
			adjust_zones_for_binary_interference(members[0].zones, pair.separation)
	return zones


def calculate_system_zones(system: StarSystem) -> None:
	for star in system.stars:
		star.zones = calculate_orbital_zones(star)
	for pair in system.binary_pairs:
		pair.zones = calculate_binary_zones(system, pair)


# -- bodies

def _is_belt(orbit: Orbit) -> bool:
	return orbit.is_asteroid_belt or orbit.planet_type is PlanetType.Asterian


def populate_orbits(ctx: GenerationContext, orbits: Sequence[Orbit], host: Star, owner_id: str,
		planets: List[Planet], belts: List[AsteroidBelt], pair_id: Optional[str] = None) -> None:
	"""Turn planned slots into planets and belts around ``host``."""
	belt_prefix = f"{owner_id}-CB-ABelt" if pair_id else f"{owner_id}-ABelt"
	for orbit in orbits:
		if _is_belt(orbit):
			belt = generate_asteroid_belt(
				ctx.roll, ctx.tables.asteroids, f"{belt_prefix}-{len(belts) + 1}",
				orbit.distance * BELT_INNER, orbit.distance * BELT_OUTER, orbit.zone,
				parent_star_id=host.id, system_id=host.parent_system_id,
			)
			ctx.registry.register_belt(belt)
			belts.append(belt)
		else:
			planets.append(generate_planet(ctx, orbit, host, f"{owner_id}-P{len(planets) + 1}", pair_id))


def companion_of(system: StarSystem, star: Star) -> Tuple[float, float]:
	"""(companion mass, separation) for a star inside a pair, or (0, inf)."""
	for pair in system.binary_pairs:
		if pair.primary_kind is ComponentKind.Star and pair.primary_id == star.id:
			_, others = pair_members(system, pair)
		elif pair.secondary_kind is ComponentKind.Star and pair.secondary_id == star.id:
			others, _ = pair_members(system, pair)
		else:
			continue
		return sum(s.mass for s in others), pair.separation
	return 0.0, math.inf


def generate_system_bodies(ctx: GenerationContext, system: StarSystem) -> None:
	for star in system.stars:
		companion_mass, separation = companion_of(system, star)
		star.orbits = generate_circumstellar_orbits(ctx.roll, star, companion_mass, separation)
		populate_orbits(ctx, star.orbits, star, star.id, star.planets, star.belts)

	for pair in system.binary_pairs:
		if pair.zones is None:
			continue
		if pair.primary_kind is not ComponentKind.Star or pair.secondary_kind is not ComponentKind.Star:
			continue
		primary, secondary = pair_members(system, pair)
		a, b = primary[0], secondary[0]
		host = combined_star(primary + secondary, star_id=a.id, system_id=system.id)
		pair.orbits = generate_circumbinary_orbits(
			ctx.roll, pair.zones, a.mass, b.mass, pair.separation, a.radius, b.radius, host.luminosity,
		)
		populate_orbits(ctx, pair.orbits, host, pair.id, pair.planets, pair.belts, pair_id=pair.id)


def generate_system(ctx: GenerationContext, system: StarSystem, distribution: str = "realistic") -> StarSystem:
	"""Stars, hierarchy, zones, then every planet, moon and belt of one system."""
	count = int(ctx.roll.seek(ctx.tables.systems.star_count))
	for n in range(1, count + 1):
		star = generate_star(
			ctx.roll, ctx.tables, ctx.registry,
			star_id=f"{system.id}-S{n}", system_id=system.id, distribution=distribution,
		)
		system.stars.append(star)
	system.root_pair_id = organize_star_hierarchy(ctx.roll, system)
	ctx.registry.register_system(system)

	calculate_system_zones(system)
	generate_system_bodies(ctx, system)
	log.debug("system %s: %d stars, %d pairs, %d planets", system.id, len(system.stars),
		len(system.binary_pairs), sum(1 for _ in system.all_planets()))
	return system


def system_summary(system: StarSystem) -> Dict[str, int]:
	return {
		"stars": len(system.stars),
		"pairs": len(system.binary_pairs),
		"planets": sum(1 for _ in system.all_planets()),
		"moons": sum(1 for _ in system.all_moons()),
		"belts": sum(1 for _ in system.all_belts()),
	}
