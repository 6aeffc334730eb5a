from __future__ import annotations
import math
from typing import Dict, List, Optional, Sequence, Tuple
from ..sampling.roll import Roll
from ..model.entities import Orbit, OrbitalZones, Star
from ..model.enums import PlanetType, ZoneType
from ..physics.thermal import blackbody_temperature
from ..physics.orbits import stellar_hill_sphere, stellar_roche_limit
from ..physics.constants import SOLAR_RADIUS_TO_AU, SOLAR_MASS_TO_EARTH_MASS

TITIUS_BODE_A = 0.4
TITIUS_BODE_B = 0.3
CIRCUMBINARY_SCALE = 1.5
MAX_CANDIDATES = 15
MAX_DISTANCE_MULTI = 40.0
MUTUAL_HILL_RADII = 8.0
FORMATION_CHANCE = 0.7
CLASSIFICATION_ALBEDO = 0.3

BELT_PROBABILITY: Dict[ZoneType, float] = {
	ZoneType.Inner: 0.05,
	ZoneType.Habitable: 0.01,
	ZoneType.Outer: 0.15,
	ZoneType.FarOuter: 0.20,
}
DEFAULT_BELT_PROBABILITY = 0.10

# d100 ceiling -> (dice modifier, scale, offset); mass = vary(1d6 + modifier) * scale + offset
MassBand = Tuple[int, Tuple[int, float, float]]
ZONE_MASSES: Dict[ZoneType, List[MassBand]] = {
	ZoneType.Epistellar: [(50, (3, 0.2, 0.0)), (80, (0, 0.6, 0.0)), (100, (0, 3.0, 0.0))],
	ZoneType.Inner: [(70, (0, 0.3, 0.0)), (90, (0, 0.8, 0.0)), (100, (3, 1.0, 0.0))],
	ZoneType.Habitable: [(60, (0, 0.4, 0.4)), (85, (2, 0.6, 0.0)), (100, (5, 1.2, 0.0))],
	ZoneType.Outer: [(40, (10, 2.5, 0.0)), (70, (15, 8.0, 0.0)), (100, (20, 16.0, 0.0))],
	ZoneType.FarOuter: [(60, (0, 0.15, 0.05)), (80, (3, 0.8, 0.0)), (95, (5, 3.0, 0.0)), (100, (20, 5.0, 0.0))],
}
# the rare distant gas giants roll 2d6
TWO_DICE_BANDS = {(ZoneType.FarOuter, 100)}


def equilibrium_temperature(luminosity: float, distance: float) -> float:
	return blackbody_temperature(luminosity, distance, CLASSIFICATION_ALBEDO)


def mass_for_zone(roll: Roll, zone: ZoneType) -> float:
	bands = ZONE_MASSES.get(zone)
	if not bands:
		return roll.vary(1.0)
	d100 = roll.dice(1, 100)
	for ceiling, (modifier, scale, offset) in bands:
		if d100 <= ceiling:
			count = 2 if (zone, ceiling) in TWO_DICE_BANDS else 1
			return roll.vary(roll.dice(count, 6, modifier) * scale + offset)
	return roll.vary(1.0)


def estimate_planet_density(roll: Roll, mass: float, zone: ZoneType) -> float:
	if mass >= 10.0:
		density = 0.15 + mass * 0.005
	elif mass >= 2.0:
		density = 0.6 + mass * 0.1
	else:
		density = 0.8 + mass * 0.2
	if zone is ZoneType.Epistellar:
		density *= 0.95
	elif zone is ZoneType.FarOuter:
		density *= 1.1
	return roll.vary(density, 0.15)


def estimate_water_content(roll: Roll, zone: ZoneType, temperature: float) -> float:
	if zone is ZoneType.Inner:
		return 0.05 if temperature > 600.0 else roll.find_range(0.1, 0.4)
	if zone is ZoneType.Habitable:
		return roll.find_range(0.0, 1.0)
	if zone is ZoneType.Outer:
		return roll.find_range(0.5, 0.9)
	if zone is ZoneType.FarOuter:
		return roll.find_range(0.7, 0.95)
	return 0.0


def determine_planet_type(roll: Roll, mass: float, density: float, zone: ZoneType, luminosity: float,
		distance: float, water_content: Optional[float] = None) -> PlanetType:
	"""Rule cascade from mass, density, zone and equilibrium temperature to a planet type."""
	temperature = equilibrium_temperature(luminosity, distance)
	if water_content is None:
		water_content = estimate_water_content(roll, zone, temperature)

	if mass < 0.01:
		return PlanetType.Asterian
	if mass < 0.1:
		return PlanetType.Metian

	inside_frost = zone in (ZoneType.Epistellar, ZoneType.Inner, ZoneType.Habitable)
	hot = temperature > 700.0
	extreme = temperature > 1200.0 or (zone is ZoneType.Epistellar and mass > 0.3)

	if extreme and mass < 2.0:
		return PlanetType.Vulcanian
	if hot and mass > 5.0 and density > 0.8 * mass:
		return PlanetType.Cronusian
	if density > 1.1 and zone is not ZoneType.FarOuter and mass < 10.0:
		return PlanetType.Lelantian

	if mass >= 50.0:
		if zone in (ZoneType.Epistellar, ZoneType.Inner):
			return PlanetType.Hyperion
		return PlanetType.Atlantean
	if mass >= 30.0:
		return PlanetType.Hyperion if inside_frost else PlanetType.Atlantean
	if mass >= 20.0:
		if inside_frost:
			return PlanetType.Hyperion
		return PlanetType.Helian if density < 0.2 else PlanetType.Iapetian
	if mass >= 10.0:
		return PlanetType.Criusian if inside_frost else PlanetType.Iapetian
	if mass >= 2.0:
		if inside_frost:
			return PlanetType.Oceanian if water_content > 0.9 else PlanetType.Rhean
		return PlanetType.Theian if temperature > 200.0 else PlanetType.Dionean

	if not inside_frost:
		return PlanetType.Phoeboan
	if water_content > 0.9:
		return PlanetType.Oceanian
	if water_content > 0.5:
		return PlanetType.Gaian
	if water_content > 0.25:
		return PlanetType.Tethysian
	if water_content > 0.01:
		return PlanetType.Promethean
	return PlanetType.Menoetian


def determine_has_moons(roll: Roll, planet_mass: float, stellar_mass: float) -> bool:
	if planet_mass >= 100.0:
		chance = 0.95
	elif planet_mass >= 10.0:
		chance = 0.8
	elif planet_mass >= 2.0:
		chance = 0.6
	elif planet_mass >= 0.5:
		chance = 0.4
	elif planet_mass >= 0.1:
		chance = 0.2
	else:
		chance = 0.05
	# massive stars disrupt moon formation
	chance *= max(0.5, 2.0 - stellar_mass * 0.5)
	return roll.random() <= chance


def generate_eccentricity(roll: Roll, is_belt: bool = False) -> float:
	if is_belt:
		return roll.find_range(0.1, 0.3)
	if roll.random() <= 0.1:
		return roll.find_range(0.1, 0.5)
	return roll.find_range(0.01, 0.1)


def generate_inclination(roll: Roll) -> float:
	if roll.random() <= 0.05:
		return roll.find_range(10.0, 30.0)
	return roll.find_range(0.0, 10.0)


def titius_bode_distances(min_distance: float, max_distance: float, circumbinary: bool = False) -> List[float]:
	a, b = TITIUS_BODE_A, TITIUS_BODE_B
	if circumbinary:
		a *= CIRCUMBINARY_SCALE
		b *= CIRCUMBINARY_SCALE
	n = math.ceil(math.log2(max(0.01, min_distance - a)) - math.log2(b))
	out: List[float] = []
	while len(out) < MAX_CANDIDATES:
		distance = a + b * 2.0 ** n
		if distance > max_distance:
			break
		if distance >= min_distance:
			out.append(distance)
		n += 1
	return out


def is_orbit_viable(roll: Roll, distance: float, existing: Sequence[Orbit], stellar_radius: float,
		circumbinary: bool = False) -> bool:
	if distance <= stellar_radius * SOLAR_RADIUS_TO_AU * 1.1:
		return False
	for previous in existing[-2:]:
		hill = distance * (previous.mass / SOLAR_MASS_TO_EARTH_MASS) ** (1.0 / 3.0)
		if abs(distance - previous.distance) < hill * MUTUAL_HILL_RADII:
			return False
	chance = FORMATION_CHANCE
	if circumbinary:
		chance *= 0.6
	if distance > 50.0 * stellar_radius:
		chance *= 0.8
	elif distance < 0.5 * stellar_radius:
		chance *= 0.9
	return roll.random() <= chance


def plan_orbit(roll: Roll, distance: float, zones: OrbitalZones, stellar_mass: float, luminosity: float) -> Orbit:
	zone = zones.zone_for(distance)
	is_belt = roll.random() < BELT_PROBABILITY.get(zone, DEFAULT_BELT_PROBABILITY)
	if is_belt:
		mass = roll.find_range(0.001, 0.1)
		planet_type = PlanetType.Asterian
	else:
		mass = roll.vary(mass_for_zone(roll, zone))
		density = estimate_planet_density(roll, mass, zone)
		planet_type = determine_planet_type(roll, mass, density, zone, luminosity, distance)
	return Orbit(
		distance=distance,
		zone=zone,
		mass=mass,
		eccentricity=generate_eccentricity(roll, is_belt),
		inclination=generate_inclination(roll),
		is_asteroid_belt=is_belt,
		has_moons=determine_has_moons(roll, mass, stellar_mass),
		planet_type=planet_type,
	)


def generate_orbit_set(roll: Roll, min_distance: float, max_distance: float, zones: OrbitalZones,
		stellar_mass: float, stellar_radius: float, luminosity: float, circumbinary: bool = False) -> List[Orbit]:
	orbits: List[Orbit] = []
	for distance in titius_bode_distances(min_distance, max_distance, circumbinary):
		if not is_orbit_viable(roll, distance, orbits, stellar_radius, circumbinary):
			continue
		orbit = plan_orbit(roll, distance, zones, stellar_mass, luminosity)
		if circumbinary:
			orbit.eccentricity *= 0.6
			orbit.circumbinary = True
		orbits.append(orbit)
	return orbits


def star_hill_radius(mass: float, companion_mass: float, separation: float) -> float:
	if companion_mass < 0.001 or not math.isfinite(separation):
		return math.sqrt(max(0.0, mass)) * MAX_DISTANCE_MULTI
	return stellar_hill_sphere(mass, companion_mass, separation)


def generate_circumstellar_orbits(roll: Roll, star: Star, companion_mass: float = 0.0,
		separation: float = math.inf) -> List[Orbit]:
	if star.zones is None:
		raise ValueError(f"star {star.id} has no orbital zones")
	hill = star_hill_radius(star.mass, companion_mass, separation)
	min_distance = max(star.roche_limit, star.zones.epistellar_inner)
	max_distance = hill * (0.3 if companion_mass > 0.001 else 0.9)
	return generate_orbit_set(roll, min_distance, max_distance, star.zones, star.mass, star.radius, star.luminosity)


def generate_circumbinary_orbits(roll: Roll, zones: OrbitalZones, mass_a: float, mass_b: float, separation: float,
		radius_a: float, radius_b: float, total_luminosity: float) -> List[Orbit]:
	if mass_a <= 0 or mass_b <= 0 or separation <= 0:
		return []
	hill_a = star_hill_radius(mass_a, mass_b, separation)
	hill_b = star_hill_radius(mass_b, mass_a, separation)
	if hill_a + hill_b <= separation:
		return []
	roche = max(
		stellar_roche_limit(mass_a, mass_b, radius_a),
		stellar_roche_limit(mass_b, mass_a, radius_b),
	) * SOLAR_RADIUS_TO_AU
	min_distance = max(separation * 2.5, roche, zones.epistellar_inner)
	# close pairs reach out to the combined system limit
	max_distance = max(min(hill_a, hill_b) * 0.2, zones.system_limit)
	if min_distance >= max_distance:
		return []
	return generate_orbit_set(roll, min_distance, max_distance, zones, mass_a + mass_b,
		max(radius_a, radius_b), total_luminosity, circumbinary=True)
