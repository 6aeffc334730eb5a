from __future__ import annotations
from typing import FrozenSet, List
from ...model.enums import BiomeType as B
from ...tables.schema import PlanetTypeData

WET_BIOMES: FrozenSet[B] = frozenset({
	B.DenseForest, B.Rainforest, B.Wetlands, B.IceSheet, B.CoastalZone, B.CoralReef,
	B.PelagicZone, B.AbyssalPlain, B.HydrothermalFields, B.CryovolcanicFields,
})
WARM_BIOMES: FrozenSet[B] = frozenset({
	B.Rainforest, B.Desert, B.Grassland, B.Wetlands, B.FreshwaterLake, B.BrackishLake,
	B.SaltWaterRiver, B.FreshwaterRiver, B.LavaFields, B.VolcanicPlateau, B.AcidSpringFields,
})
COLD_BIOMES: FrozenSet[B] = frozenset({
	B.IceSheet, B.CryovolcanicFields, B.CoastalZone, B.CoralReef, B.PelagicZone, B.FreshwaterLake,
	B.Rainforest, B.DenseForest, B.Wetlands, B.Tundra, B.GlacialPlains,
})
THICK_AIR_BIOMES: FrozenSet[B] = frozenset({
	B.Rainforest, B.DenseForest, B.Wetlands, B.Grassland, B.Woodland,
})


def determine_biomes(data: PlanetTypeData, water_coverage: float, temperature: float, pressure: float) -> List[B]:
	"""Filter the type's candidate biomes by water, temperature band and air pressure."""
	removed = set()
	if water_coverage < 0.1:
		removed |= WET_BIOMES
	if temperature < 273.0:
		removed |= WARM_BIOMES
	elif temperature > 373.0:
		removed |= COLD_BIOMES
	if pressure < 0.1:
		removed |= THICK_AIR_BIOMES
	return [b for b in data.biomes if b not in removed]
