from __future__ import annotations
from typing import Dict, Mapping
from ...sampling.roll import Roll
from ...tables.schema import PlanetTypeData
from ...model.enums import PlanetType, ResourceType, is_gas_giant
from ...util import clamp01

ORGANIC_RICH = (PlanetType.Gaian, PlanetType.Oceanian, PlanetType.Tethysian)
EXOTIC_WORLDS = (PlanetType.Vulcanian, PlanetType.Cronusian)
RESOURCE_NAMES = frozenset(r.value for r in ResourceType)


def resource_amount(roll: Roll, resource: ResourceType, data: PlanetTypeData, planet_type: PlanetType,
		mass: float, tectonic: float, volcanic: float) -> float:
	amount = roll.vary(0.5, 0.4)
	if resource is ResourceType.Water:
		if sum(data.water_content) / 2.0 > 0.5:
			amount *= 2.0
	elif resource is ResourceType.Metals:
		amount *= min(2.0, mass * 0.5)
	elif resource is ResourceType.RareMetals:
		amount *= max(0.1, volcanic * 1.5)
	elif resource is ResourceType.Radioactives:
		amount *= max(0.1, tectonic * 1.5)
	elif resource is ResourceType.Organics:
		if planet_type in ORGANIC_RICH:
			amount *= 3.0
	elif resource is ResourceType.Gases:
		if is_gas_giant(planet_type):
			amount *= 5.0
	elif resource is ResourceType.Crystals:
		amount *= max(0.1, volcanic * 2.0)
	elif resource is ResourceType.ExoticMatter:
		amount *= 0.1
		if planet_type in EXOTIC_WORLDS and roll.conditional_probability(0.1):
			amount *= 5.0
	return clamp01(roll.vary(amount, 0.1))


def generate_resources(roll: Roll, data: PlanetTypeData, planet_type: PlanetType,
		mass: float, tectonic: float, volcanic: float) -> Dict[str, float]:
	resources: Dict[str, float] = {}
	for resource in ResourceType:
		probability = data.resources.get(resource)
		if probability is None or not roll.conditional_probability(probability):
			continue
		resources[resource.value] = resource_amount(roll, resource, data, planet_type, mass, tectonic, volcanic)
	return resources


def resource_value(resources: Mapping[str, float], multipliers: Mapping[ResourceType, float]) -> float:
	"""Weighted sum over recognised resource names; anything else is ignored."""
	total = 0.0
	for name, amount in resources.items():
		if name in RESOURCE_NAMES:
			total += amount * multipliers.get(ResourceType(name), 0.0)
	return total
