from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple
from ..sampling.roll import Roll
from ..tables.schema import DomainTables
from ..registry import EntityRegistry
from ..model.entities import OrbitalBody, Planet, Moon
from ..model.enums import BodyKind, ZoneType, is_gas_giant
from ..physics.orbits import (
	radius_from_mass_density, initial_rotation_days, tidal_rotation_effect,
	moon_rotation_period, moon_orbital_period_days,
)
from ..physics.thermal import planetary_temperature, day_night_temperatures
from ..util import clamp01
from .orbits import determine_planet_type
from .helpers.atmosphere import generate_atmosphere
from .helpers.hydrology import calculate_water_coverage
from .helpers.geography import determine_biomes
from .helpers.geology import generate_geology
from .helpers.resources import generate_resources, resource_value
from .helpers.habitability import habitability_index
from .helpers.biology import generate_biology
from .helpers.terraform import evaluate_terraformability
from ..logger_setup import get_logger

log = get_logger(__name__)

GAS_GIANT_TEMPERATURE_MULTIPLIER = 1.5
HABITABLE_THRESHOLD = 0.5
LIFE_THRESHOLD = 0.1
DEFAULT_AGE_GYR = 5.0
FALLBACK_DISTANCE_AU = 1.0
LOCKED_FAST = 0.01
LOCKED_SLOW = 999.0


@dataclass
class GenerationContext:
	"""Everything a generator call needs: the task's random stream, the tables and the registry."""
	roll: Roll
	tables: DomainTables
	registry: EntityRegistry


# (body, initial period, parent mass, distance, parent radius, age) -> evolved period
RotationFn = Callable[[OrbitalBody, float, float, float, float, float], float]


@dataclass(frozen=True)
class BodyStrategy:
	kind: BodyKind
	factory: Callable[..., OrbitalBody]
	register: Callable[[EntityRegistry, OrbitalBody], None]
	rotation: RotationFn


def _planet_rotation(body: OrbitalBody, initial: float, star_mass: float, distance_AU: float,
		star_radius: float, age: float) -> float:
	return tidal_rotation_effect(initial, body.mass, body.radius, distance_AU, star_mass, age)


def _moon_rotation(body: OrbitalBody, initial: float, planet_mass: float, distance_radii: float,
		planet_radius: float, age: float) -> float:
	period = moon_orbital_period_days(distance_radii, planet_mass, body.mass, planet_radius)
	return moon_rotation_period(initial, body.mass, body.radius, period, planet_mass,
		distance_radii, planet_radius, age)


STRATEGIES: Dict[BodyKind, BodyStrategy] = {
	BodyKind.Planet: BodyStrategy(BodyKind.Planet, Planet, EntityRegistry.register_planet, _planet_rotation),
	BodyKind.Moon: BodyStrategy(BodyKind.Moon, Moon, EntityRegistry.register_moon, _moon_rotation),
}


def strategy_for(kind: BodyKind) -> BodyStrategy:
	return STRATEGIES[kind]


def sample_around_range(roll: Roll, lo: float, hi: float) -> float:
	"""vary() centred on the midpoint with half the relative span as the factor."""
	average = (lo + hi) / 2.0
	if average <= 0:
		return lo
	return roll.vary(average, (hi - lo) / average / 2.0)


def is_tidally_locked(rotation_period: float) -> bool:
	return rotation_period <= LOCKED_FAST or rotation_period >= LOCKED_SLOW


def calculate_rotation(ctx: GenerationContext, kind: BodyKind, body: OrbitalBody, distance: float,
		parent_mass: float, parent_radius: float = 1.0, age: float = DEFAULT_AGE_GYR) -> Tuple[float, bool]:
	"""Initial spin from formation, then tidal evolution against the parent."""
	initial = initial_rotation_days(body.mass, body.radius, distance, ctx.roll.find_range(0.0, 0.4))
	period = strategy_for(kind).rotation(body, initial, parent_mass, distance, parent_radius, age)
	return period, is_tidally_locked(period)


def generate_basic_properties(ctx: GenerationContext, kind: BodyKind, *, body_id: str, mass: float,
		orbital_distance: float, zone: ZoneType, eccentricity: float, luminosity: float,
		stellar_distance: Optional[float] = None, system_id: str = "") -> OrbitalBody:
	"""Type, bulk properties and initial geology; registers the body.

	``stellar_distance`` is the body's distance from its star in AU. For planets
	it equals ``orbital_distance``; moons pass their planet's semi-major axis.
	"""
	roll = ctx.roll
	if stellar_distance is None:
		stellar_distance = orbital_distance
	planet_type = determine_planet_type(roll, mass, 0.0, zone, luminosity, stellar_distance)
	data = ctx.tables.planet(planet_type)

	density = sample_around_range(roll, *data.density)
	radius = radius_from_mass_density(mass, density)
	albedo = clamp01(sample_around_range(roll, *data.albedo))
	initial = initial_rotation_days(mass, radius, orbital_distance, roll.find_range(0.0, 0.4))
	geology = generate_geology(
		roll, data, planet_type, mass, radius,
		planetary_temperature(luminosity, stellar_distance, albedo),
		initial,
	)

	strategy = strategy_for(kind)
	body = strategy.factory(
		id=body_id,
		parent_system_id=system_id,
		planet_type=planet_type,
		mass=mass,
		radius=radius,
		density=density,
		surface_gravity=mass / radius ** 2,
		rotation_period=initial,
		eccentricity=eccentricity,
		albedo=albedo,
		tectonic_activity=geology.tectonic_activity,
		volcanic_activity=geology.volcanic_activity,
		magnetic_field=geology.magnetic_field,
	)
	strategy.register(ctx.registry, body)
	return body


def finalize_celestial_body(ctx: GenerationContext, kind: BodyKind, body: OrbitalBody,
		luminosity: float, distance: float, age: Optional[float] = None) -> OrbitalBody:
	"""Surface conditions, habitability, life and terraformability once the star is known."""
	roll = ctx.roll
	tables = ctx.tables
	data = tables.planet(body.planet_type)

	temperature = planetary_temperature(luminosity, distance, body.albedo)
	if is_gas_giant(body.planet_type):
		# compressional heating
		temperature *= GAS_GIANT_TEMPERATURE_MULTIPLIER
	body.surface_temperature = temperature

	has_atmosphere, pressure, composition = generate_atmosphere(
		roll, tables.planets, body.planet_type, body.mass, body.surface_gravity, temperature,
	)
	body.has_atmosphere = has_atmosphere
	body.atmospheric_pressure = pressure
	body.atmospheric_composition = composition

	body.daytime_temperature, body.nighttime_temperature = day_night_temperatures(
		temperature, body.rotation_period, has_atmosphere, pressure, body.tidally_locked,
	)

	body.water_coverage = clamp01(calculate_water_coverage(roll, data, temperature, pressure))
	body.biomes = determine_biomes(data, body.water_coverage, temperature, pressure)

	resources = generate_resources(roll, data, body.planet_type, body.mass,
		body.tectonic_activity, body.volcanic_activity)
	for name, amount in resources.items():
		body.add_resource(name, amount)
	body.resource_value = resource_value(body.resources, tables.planets.resource_values)

	body.habitability_index = clamp01(habitability_index(
		body.planet_type, temperature, pressure, composition, body.water_coverage, body.magnetic_field,
	))
	body.is_habitable = body.habitability_index > HABITABLE_THRESHOLD

	if body.habitability_index > LIFE_THRESHOLD and roll.chance(body.habitability_index):
		body.biosphere = generate_biology(
			roll, tables.biology, body.habitability_index, body.biomes,
			DEFAULT_AGE_GYR if age is None else age, body.magnetic_field,
		)
		if body.biosphere is not None:
			log.debug("%s %s carries life: %s", kind.value, body.id, body.biosphere.dominant_life_form.value)

	body.is_terraformable, body.terraforming_index, body.terraforming_challenges = \
		evaluate_terraformability(body)

	strategy_for(kind).register(ctx.registry, body)
	return body


def lookup_parent_star(ctx: GenerationContext, star_id: str) -> Tuple[float, float]:
	"""(luminosity, mass) of a registered star, or Sun-like fallbacks with a warning."""
	star = ctx.registry.get_star(star_id)
	if star is None:
		log.warning("parent star %r not registered, using L=1 M=1", star_id)
		return 1.0, 1.0
	return star.luminosity, star.mass