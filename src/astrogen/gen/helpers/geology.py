from __future__ import annotations
from dataclasses import dataclass
from ...sampling.roll import Roll
from ...tables.schema import PlanetTypeData
from ...model.enums import PlanetType, NO_TECTONICS_TYPES
from ...physics.thermal import magnetic_field_strength
from ...util import clamp01


@dataclass
class Geology:
	tectonic_activity: float = 0.0
	volcanic_activity: float = 0.0
	magnetic_field: float = 0.0


def tectonic_activity(roll: Roll, data: PlanetTypeData, planet_type: PlanetType, mass: float, temperature: float) -> float:
	if planet_type in NO_TECTONICS_TYPES:
		return 0.0
	base = roll.find_range(*data.tectonic)
	base = roll.vary(base * min(1.0, mass * 0.5), 0.1)
	if temperature > 600.0:
		base *= 1.5
	elif temperature < 200.0:
		base *= 0.5
	return clamp01(base)


def volcanic_activity(roll: Roll, data: PlanetTypeData, planet_type: PlanetType, tectonic: float, temperature: float) -> float:
	if planet_type in NO_TECTONICS_TYPES:
		return 0.0
	base = roll.find_range(*data.volcanic)
	base = roll.vary(base * (tectonic + 0.5), 0.1)
	if temperature > 700.0:
		base *= 2.0
	return clamp01(base)


def core_density(tectonic: float, volcanic: float) -> float:
	# active geology implies a differentiated core, 0.5..1.2
	return 0.5 + (tectonic + volcanic) / 2.0 * 0.7


def core_temperature(surface_temperature: float, mass: float, tectonic: float) -> float:
	return surface_temperature + mass ** 0.5 * 3000.0 * (1.0 + tectonic * 0.5)


def generate_geology(roll: Roll, data: PlanetTypeData, planet_type: PlanetType, mass: float,
		radius: float, temperature: float, rotation_period: float) -> Geology:
	tectonic = tectonic_activity(roll, data, planet_type, mass, temperature)
	volcanic = volcanic_activity(roll, data, planet_type, tectonic, temperature)
	dynamo = magnetic_field_strength(
		mass, radius, rotation_period,
		core_density(tectonic, volcanic),
		core_temperature(temperature, mass, tectonic),
	)
	return Geology(tectonic, volcanic, clamp01(dynamo * data.magnetic_modifier))
