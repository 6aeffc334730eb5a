from __future__ import annotations
import math
from ..model.entities import OrbitalZones, Star
from ..physics.orbits import stellar_roche_limit
from ..physics.constants import SOLAR_RADIUS_TO_AU, SUN_TEMPERATURE_K

NO_ZONE = -1.0


def habitable_band(luminosity: float):
	root_l = math.sqrt(max(0.0, luminosity))
	return 0.95 * root_l, 1.37 * root_l, 4.85 * root_l


def system_limit(mass: float, temperature: float) -> float:
	# hotter stars push the limit outward
	return 50.0 * max(0.0, mass) ** (1.0 / 3.0) * math.sqrt(max(0.0, temperature) / SUN_TEMPERATURE_K)


def calculate_orbital_zones(star: Star) -> OrbitalZones:
	"""Zone boundaries around a single star, in AU."""
	roche = stellar_roche_limit(star.mass, 0.0, star.radius) * SOLAR_RADIUS_TO_AU
	hz_inner, hz_outer, frost = habitable_band(star.luminosity)
	surface = star.radius * SOLAR_RADIUS_TO_AU
	return OrbitalZones(
		epistellar_inner=max(roche, 0.01 * math.sqrt(max(0.0, star.luminosity))),
		epistellar_outer=surface,
		inner_start=surface,
		habitable_inner=hz_inner,
		habitable_outer=hz_outer,
		frost_line=frost,
		system_limit=system_limit(star.mass, star.temperature),
	)


def calculate_circumbinary_zones(total_luminosity: float, total_mass: float, separation: float) -> OrbitalZones:
	"""Zones around both members of a wide pair; planets must clear the pair by several separations."""
	hz_inner, hz_outer, frost = habitable_band(total_luminosity)
	inner_start = separation * 4.0
	return OrbitalZones(
		epistellar_inner=separation * 3.0,
		epistellar_outer=inner_start,
		inner_start=inner_start,
		habitable_inner=max(hz_inner, inner_start),
		habitable_outer=hz_outer,
		frost_line=frost,
		system_limit=separation * 0.2 * min(100.0, max(0.0, total_mass) ** (1.0 / 3.0)),
	)


def hierarchy_zones(separation: float) -> OrbitalZones:
	# pairs containing a sub-pair only get a rough outer limit
	return OrbitalZones(
		habitable_inner=NO_ZONE,
		habitable_outer=NO_ZONE,
		system_limit=separation * 5.0,
	)


def adjust_zones_for_binary_interference(zones: OrbitalZones, separation: float) -> None:
	"""Truncate a member's zones at 0.3 of the companion separation."""
	limit = separation * 0.3
	zones.system_limit = min(zones.system_limit, limit)
	zones.frost_line = min(zones.frost_line, limit)
	if limit < zones.habitable_inner:
		zones.habitable_inner = NO_ZONE
		zones.habitable_outer = NO_ZONE
	elif limit < zones.habitable_outer:
		zones.habitable_outer = limit
