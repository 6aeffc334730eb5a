from __future__ import annotations
import math
from typing import Optional
from ..sampling.roll import Roll
from ..tables.schema import DomainTables, SpectralRange, StarTables
from ..model.entities import Star
from ..model.enums import StellarStage
from ..physics.orbits import stellar_roche_limit, stellar_hill_sphere
from ..physics.constants import SUN_TEMPERATURE_K, SOLAR_RADIUS_TO_AU
from ..registry import EntityRegistry
from ..util import clamp
from ..logger_setup import get_logger

log = get_logger(__name__)

# white dwarf, Wolf-Rayet, neutron star, black hole, carbon star, brown dwarfs
SPECIAL_TYPES = frozenset({"I", "W", "N", "S", "C", "L", "T", "Y"})
# sampled directly from their ranges rather than from mass/temperature formulas
DIRECT_TYPES = frozenset({"I", "N", "S"})
BROWN_DWARFS = frozenset({"L", "T", "Y"})

MAX_AGE_GYR = 13.8
MIN_AGE_GYR = 0.01
PULSAR_CHANCE = 0.02


def sample_spectral_type(roll: Roll, tables: StarTables, distribution: str = "realistic") -> str:
	try:
		table = tables.spectral_distributions[distribution]
	except KeyError:
		raise KeyError(f"unknown spectral distribution {distribution!r}") from None
	return roll.seek(table)


def sample_stage(roll: Roll, tables: StarTables, spectral_type: str, rng: SpectralRange) -> StellarStage:
	table = tables.luminosity_distributions.get(spectral_type)
	if not table:
		return rng.default_stage
	return roll.seek_percent(table)


def luminosity_from_mass(tables: StarTables, spectral_type: str, mass: float, stage: StellarStage) -> float:
	if spectral_type == "I":
		return 0.001 * mass
	if spectral_type == "W":
		return mass ** 3 * 1000.0
	if spectral_type == "C":
		lum = mass ** 3 * 10.0
	elif spectral_type == "N":
		return 0.001
	elif spectral_type == "S":
		return 0.0
	elif spectral_type in BROWN_DWARFS:
		lum = 0.01 * mass ** 2
	else:
		lum = mass ** tables.luminosity_exponents.get(spectral_type, 3.5)
	return lum * tables.stage_luminosity_boost.get(stage, 1.0)


def radius_from_luminosity(tables: StarTables, luminosity: float, temperature: float, stage: StellarStage) -> float:
	"""Stefan-Boltzmann radius in solar radii, capped per evolutionary stage."""
	if temperature <= 0 or luminosity <= 0:
		return 0.0
	radius = math.sqrt(luminosity / (temperature / SUN_TEMPERATURE_K) ** 4)
	cap = tables.stage_radius_caps.get(stage.value, tables.stage_radius_caps["default"])
	return min(radius, cap)


def sample_age(roll: Roll, rng: SpectralRange, stage: StellarStage) -> float:
	lo, hi = rng.age
	span = hi - lo
	if stage is StellarStage.VII:
		age = roll.find_range(0.8 * hi, hi)
	elif stage is StellarStage.VI:
		age = roll.find_range(lo, hi)
	elif stage is StellarStage.V:
		# main sequence skews young
		age = lo + span * roll.find_range(0.1, 0.7)
	elif stage is StellarStage.IV:
		age = roll.find_range(lo + 0.5 * span, 0.9 * hi)
	elif stage is StellarStage.III:
		age = roll.find_range(lo + 0.67 * span, 0.95 * hi)
	elif stage is StellarStage.II:
		age = roll.find_range(lo + 0.75 * span, 0.98 * hi)
	else:
		age = roll.find_range(0.9 * hi, hi)
	return clamp(age, MIN_AGE_GYR, MAX_AGE_GYR)


def sample_rotation(roll: Roll, tables: StarTables, spectral_type: str, rng: SpectralRange,
		stage: StellarStage, age: float) -> float:
	if spectral_type == "I":
		return roll.find_range(0.1, 1.0)
	if spectral_type == "N":
		return roll.find_range(0.0001, 0.01) / 24.0
	if spectral_type == "S":
		return 0.0
	if spectral_type == "W":
		return roll.find_range(0.5, 5.0)
	if stage is StellarStage.VII:
		return roll.find_range(0.1, 1.0)
	base = roll.find_range(*rng.rotation) * (1.0 + age) ** 0.4
	if stage is StellarStage.VI:
		return base * 0.5
	return base * tables.stage_rotation_factor.get(stage, 1.0)


def _variability_chance(tables: StarTables, kind: str, spectral_type: str) -> float:
	row = tables.variability[kind]
	return row.get(spectral_type, row["default"])


def apply_variability(roll: Roll, tables: StarTables, star: Star, rng: SpectralRange) -> None:
	t = star.spectral_type
	star.is_variable = roll.random() <= _variability_chance(tables, "variable", t)
	star.has_star_spots = roll.random() <= _variability_chance(tables, "spots", t)
	if rng.has_flares is not None:
		star.has_flares = rng.has_flares
	else:
		star.has_flares = roll.random() <= _variability_chance(tables, "flares", t)
	star.is_pulsar = rng.can_be_pulsar and roll.random() < PULSAR_CHANCE


def apply_natural_variation(roll: Roll, star: Star, rng: SpectralRange) -> None:
	lo, hi = rng.temperature
	star.temperature = clamp(roll.vary(star.temperature, 0.05), lo, hi)
	star.luminosity = roll.vary(star.luminosity, 0.1)
	star.radius = roll.vary(star.radius, 0.05)


def set_stellar_distances(star: Star, companion: Optional[Star] = None, separation: float = 0.0) -> None:
	"""Habitable zone, frost line, Roche limit and Hill sphere, all in AU."""
	root_l = math.sqrt(max(0.0, star.luminosity))
	star.habitable_zone_inner = 0.95 * root_l
	star.habitable_zone_outer = 1.37 * root_l
	star.frost_line = 4.85 * root_l
	companion_mass = companion.mass if companion is not None else 0.0
	star.roche_limit = stellar_roche_limit(star.mass, companion_mass, star.radius) * SOLAR_RADIUS_TO_AU
	if companion is not None and separation > 0:
		star.hill_sphere = stellar_hill_sphere(star.mass, companion.mass, separation)
	else:
		star.hill_sphere = math.sqrt(max(0.0, star.mass)) * 40.0


def _normal_star(roll: Roll, tables: StarTables, star: Star, rng: SpectralRange,
		subclass: Optional[str], stage: Optional[StellarStage]) -> None:
	t = star.spectral_type
	if subclass is None:
		subclass = roll.seek_percent(tables.subclass_distributions[t])
	digit = int(subclass) if str(subclass).isdigit() else 5
	star.spectral_class = f"{t}{digit}"
	position = digit / 9.0  # 0 hottest and most massive
	star.mass = rng.mass[1] - position * (rng.mass[1] - rng.mass[0])
	star.temperature = rng.temperature[1] - position * (rng.temperature[1] - rng.temperature[0])
	star.stage = stage or sample_stage(roll, tables, t, rng)
	star.luminosity = luminosity_from_mass(tables, t, star.mass, star.stage)
	star.radius = radius_from_luminosity(tables, star.luminosity, star.temperature, star.stage)
	star.age = sample_age(roll, rng, star.stage)


def _special_star(roll: Roll, tables: StarTables, star: Star, rng: SpectralRange,
		subclass: Optional[str], stage: Optional[StellarStage]) -> None:
	t = star.spectral_type
	if subclass is None and t in tables.subclass_distributions:
		subclass = roll.seek_percent(tables.subclass_distributions[t])
	elif subclass is None and t in BROWN_DWARFS:
		subclass = str(roll.dice(1, 10) - 1)
	if t == "I":
		star.spectral_class = subclass or "D"
	elif t in ("N", "S"):
		star.spectral_class = t
	else:
		star.spectral_class = f"{t}{subclass or ''}"

	if t == "I":
		star.mass = roll.seek(tables.white_dwarf_mass)
	else:
		star.mass = roll.find_range(*rng.mass)
	star.stage = stage or sample_stage(roll, tables, t, rng)

	if t in DIRECT_TYPES:
		star.temperature = roll.find_range(*rng.temperature)
		star.luminosity = roll.find_range(*rng.luminosity)
		r_lo, r_hi = rng.radius
		star.radius = r_lo if r_lo == r_hi else roll.find_range(r_lo, r_hi)
	else:
		star.temperature = sum(rng.temperature) / 2.0
		star.luminosity = luminosity_from_mass(tables, t, star.mass, star.stage)
		star.radius = radius_from_luminosity(tables, star.luminosity, star.temperature, star.stage)
	star.age = sample_age(roll, rng, star.stage)


def generate_star(roll: Roll, tables: DomainTables, registry: Optional[EntityRegistry] = None, *,
		spectral_type: Optional[str] = None, subclass: Optional[str] = None,
		stage: Optional[StellarStage] = None, star_id: Optional[str] = None,
		system_id: str = "", distribution: str = "realistic") -> Star:
	"""Sample one star. Type, subclass and stage may be forced."""
	st = tables.stars
	spectral = spectral_type or sample_spectral_type(roll, st, distribution)
	rng = tables.spectral_range(spectral)
	star = Star(id=star_id or roll.uid("STAR"), parent_system_id=system_id, spectral_type=spectral)

	if spectral in SPECIAL_TYPES:
		_special_star(roll, st, star, rng, subclass, stage)
	else:
		_normal_star(roll, st, star, rng, subclass, stage)
	apply_natural_variation(roll, star, rng)
	star.rotation_period = sample_rotation(roll, st, spectral, rng, star.stage, star.age)
	apply_variability(roll, st, star, rng)
	set_stellar_distances(star)

	log.debug("star %s: %s%s M=%.3f L=%.4g T=%.0f", star.id, star.spectral_class, star.stage.value,
		star.mass, star.luminosity, star.temperature)
	if registry is not None:
		registry.register_star(star)
	return star
