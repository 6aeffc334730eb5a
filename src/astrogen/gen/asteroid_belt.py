from __future__ import annotations
import math
from typing import Dict, List
from ..sampling.roll import Roll
from ..tables.schema import AsteroidTables
from ..model.entities import AsteroidBelt, NotableObject
from ..model.enums import AsteroidComposition, ResourceType, ZoneType
from ..physics.constants import EARTH_MASS_KG
from ..util import clamp, normalize
from ..logger_setup import get_logger

log = get_logger(__name__)

NOTABLE_SIZE_FACTOR = (1.5, 15.0)
NOTABLE_SHARE = (0.3, 0.9)


def belt_volume(inner: float, outer: float, thickness: float) -> float:
	"""Annulus volume in AU^3."""
	return math.pi * (outer ** 2 - inner ** 2) * thickness


def belt_mass(density: float, volume: float, object_size_km: float, object_density_g_cm3: float) -> float:
	"""Total mass in Earth masses: object count times the mass of one average rock."""
	count = density * volume
	radius_m = object_size_km * 500.0
	rock = 4.0 / 3.0 * math.pi * radius_m ** 3 * object_density_g_cm3 * 1000.0
	return count * rock / EARTH_MASS_KG


def belt_composition(roll: Roll, tables: AsteroidTables, zone: ZoneType) -> Dict[AsteroidComposition, float]:
	mix = tables.zone_compositions.get(zone)
	if mix:
		return dict(mix)
	# no zone mixture: a single dominant type from the global distribution
	return {roll.seek(tables.composition_distribution): 1.0}


def resource_concentration(tables: AsteroidTables, composition: Dict[AsteroidComposition, float]) -> Dict[str, float]:
	resources: Dict[str, float] = {}
	for kind, fraction in composition.items():
		for resource, probability in tables.compositions[kind].resources.items():
			resources[resource.value] = resources.get(resource.value, 0.0) + probability * fraction
	return resources


def notable_object_count(roll: Roll, tables: AsteroidTables, total_mass: float) -> int:
	# capped by a 3d6 roll regardless of mass
	base = total_mass * tables.belt.notables_per_earth_mass
	return int(clamp(base * roll.find_range(0.5, 1.5), 0, roll.dice()))


def generate_notable_objects(roll: Roll, belt: AsteroidBelt, count: int,
		composition: Dict[AsteroidComposition, float]) -> List[NotableObject]:
	objects: List[NotableObject] = []
	for _ in range(count):
		mix: Dict[str, float] = {}
		for kind, fraction in composition.items():
			if roll.dice(1, 100) <= fraction * 100:
				mix[kind.value] = roll.find_range(*NOTABLE_SHARE)
		objects.append(NotableObject(
			radius=belt.average_object_size * roll.find_range(*NOTABLE_SIZE_FACTOR),
			orbital_distance=roll.find_range(belt.inner_radius, belt.outer_radius),
			orbital_angle=roll.find_range(0.0, 2.0 * math.pi),
			composition=normalize(mix),
		))
	# largest first, numbered after sorting
	objects.sort(key=lambda o: o.radius, reverse=True)
	for n, obj in enumerate(objects, 1):
		obj.id = f"{belt.id}-NO{n}"
	return objects


def economic_value(tables: AsteroidTables, resources: Dict[str, float], total_mass: float) -> float:
	value = sum(
		amount * tables.resource_values.get(ResourceType(name), 1.0)
		for name, amount in resources.items()
	)
	return value * total_mass


def is_navigation_hazard(tables: AsteroidTables, average_density: float) -> bool:
	return average_density > tables.belt.hazard_density


def generate_asteroid_belt(roll: Roll, tables: AsteroidTables, belt_id: str, inner: float, outer: float,
		zone: ZoneType, parent_star_id: str = "", system_id: str = "") -> AsteroidBelt:
	p = tables.belt
	belt = AsteroidBelt(
		id=belt_id,
		parent_star_id=parent_star_id,
		parent_system_id=system_id,
		zone=zone,
		inner_radius=inner,
		outer_radius=outer,
		thickness=roll.find_range(*p.thickness),
		average_density=roll.find_range(*p.density),
		average_object_size=roll.find_range(*p.object_size),
	)
	volume = belt_volume(inner, outer, belt.thickness)
	belt.total_mass = belt_mass(belt.average_density, volume, belt.average_object_size, p.object_density_g_cm3)

	composition = belt_composition(roll, tables, zone)
	belt.composition = normalize({k.value: v for k, v in composition.items()})
	belt.resources = resource_concentration(tables, composition)

	count = notable_object_count(roll, tables, belt.total_mass)
	belt.has_dwarf_planets = count > 0
	belt.notable_objects = generate_notable_objects(roll, belt, count, composition)

	belt.economic_value = economic_value(tables, belt.resources, belt.total_mass)
	belt.navigation_hazard = is_navigation_hazard(tables, belt.average_density)
	log.debug("belt %s: %.3g-%.3g AU mass=%.3g notables=%d", belt.id, inner, outer, belt.total_mass, count)
	return belt
