from __future__ import annotations
from typing import Dict, Tuple
from ...sampling.roll import Roll
from ...tables.schema import PlanetTables, PlanetTypeData
from ...physics.thermal import can_retain_gas, atmospheric_pressure
from ...model.enums import PlanetType
from ...util import normalize

HOT_TEMPERATURE_K = 500.0


def molecular_weight(tables: PlanetTables, gas: str) -> float:
	return tables.molecular_weights.get(gas, tables.default_molecular_weight)


def atmosphere_chance(data: PlanetTypeData, mass: float, gravity: float, temperature: float) -> float:
	chance = data.atmosphere_probability
	chance *= min(1.0, mass * 0.5)
	chance *= min(1.0, gravity * 0.5)
	if temperature > HOT_TEMPERATURE_K:
		chance *= 0.5
	if mass > 0.1 and gravity > 0.2:
		# nitrogen and oxygen both lost
		if not can_retain_gas(gravity, temperature, 28.0) and not can_retain_gas(gravity, temperature, 32.0):
			chance *= 0.1
	return chance


def generate_composition(roll: Roll, tables: PlanetTables, data: PlanetTypeData,
		gravity: float, temperature: float) -> Dict[str, float]:
	"""Template gases the body can hold, jittered and renormalised to 100 percent."""
	chemistry = roll.pick(data.chemistry)
	template = tables.atmosphere_templates[chemistry]
	raw: Dict[str, float] = {}
	for gas, share in template.composition.items():
		if can_retain_gas(gravity, temperature, molecular_weight(tables, gas)):
			raw[gas] = share * roll.find_range(0.8, 1.2)
	return normalize(raw, 100.0)


def generate_atmosphere(roll: Roll, tables: PlanetTables, planet_type: PlanetType,
		mass: float, gravity: float, temperature: float) -> Tuple[bool, float, Dict[str, float]]:
	data = tables.types[planet_type]
	if roll.random() > atmosphere_chance(data, mass, gravity, temperature):
		return False, 0.0, {}
	pressure = atmospheric_pressure(mass, gravity, temperature, data.pressure_modifier)
	composition = generate_composition(roll, tables, data, gravity, temperature)
	if not composition:
		return False, 0.0, {}
	return True, pressure, composition
