from __future__ import annotations
from pydantic import BaseModel, field_validator
from typing import Dict, List, Optional, Tuple
from ..model.enums import (
	PlanetType, ChemistryType, BiomeType, ResourceType, ZoneType, StellarStage,
	LifeForm, Civilization, RingComplexity, AsteroidComposition,
)

Range = Tuple[float, float]


def _ascending(table: list) -> list:
	return sorted(table, key=lambda entry: entry[0])


class FrozenModel(BaseModel):
	model_config = {"frozen": True}


class SpectralRange(FrozenModel):
	mass: Range
	temperature: Range
	luminosity: Range
	radius: Range
	age: Range  # Gyr
	rotation: Range  # days
	default_stage: StellarStage
	has_flares: Optional[bool] = None
	can_be_pulsar: bool = False


class StarTables(FrozenModel):
	spectral_distributions: Dict[str, List[Tuple[float, str]]]
	subclass_distributions: Dict[str, List[Tuple[float, str]]]
	luminosity_distributions: Dict[str, List[Tuple[float, StellarStage]]]
	white_dwarf_mass: List[Tuple[float, float]]
	spectral_ranges: Dict[str, SpectralRange]
	luminosity_exponents: Dict[str, float]
	stage_luminosity_boost: Dict[StellarStage, float]
	stage_rotation_factor: Dict[StellarStage, float]
	stage_radius_caps: Dict[str, float]
	variability: Dict[str, Dict[str, float]]

	@field_validator("spectral_distributions", "subclass_distributions", "luminosity_distributions")
	@classmethod
	def _sort_nested(cls, v):
		return {k: _ascending(t) for k, t in v.items()}

	@field_validator("white_dwarf_mass")
	@classmethod
	def _sort(cls, v):
		return _ascending(v)


class PlanetTypeData(FrozenModel):
	mass: Range
	density: Range
	albedo: Range
	water_content: Range
	temperature_modifier: float
	atmosphere_probability: float
	pressure_modifier: float
	chemistry: List[ChemistryType]
	biomes: List[BiomeType]
	tectonic: Range
	volcanic: Range
	magnetic_modifier: float
	ring_probability: float
	inside_frost_line: bool
	resources: Dict[ResourceType, float]


class AtmosphereTemplate(FrozenModel):
	composition: Dict[str, float]
	pressure: Range


class PlanetTables(FrozenModel):
	types: Dict[PlanetType, PlanetTypeData]
	atmosphere_templates: Dict[ChemistryType, AtmosphereTemplate]
	molecular_weights: Dict[str, float]
	default_molecular_weight: float
	resource_values: Dict[ResourceType, float]


class MoonFormation(FrozenModel):
	orbit_distance: Range  # planet radii
	mass: Range
	tidal_heating_factor: float
	resonance_probability: float
	prefers_tidal_locking: bool
	max_moons: int
	roche_limit: float
	hill_sphere_modifier: float


class MoonConstants(FrozenModel):
	min_separation_factor: float
	critical_tidal_force: float
	max_stable_inclination: float
	resonance_tolerance: float


class MoonTables(FrozenModel):
	formation: Dict[PlanetType, MoonFormation]
	constants: MoonConstants
	zone_minimum_mass: Dict[str, float]

	def minimum_moon_mass(self, zone: ZoneType) -> float:
		return self.zone_minimum_mass.get(zone.value, self.zone_minimum_mass["default"])


class RingTypeData(FrozenModel):
	mass_ratio: Range
	opacity: Range
	complexity_probability: float
	composition: Dict[str, Range]


class RingConstants(FrozenModel):
	base_ring_chance: float
	roche_multiplier: float
	min_gap_width: float
	max_gap_width: float
	min_gaps: int
	max_gaps: int
	default_mass_ratio: Range
	default_opacity: Range


class RingTables(FrozenModel):
	types: Dict[PlanetType, RingTypeData]
	no_rings: List[PlanetType]
	constants: RingConstants
	complexity_weights: Dict[RingComplexity, float]
	outer_multipliers: Dict[RingComplexity, Range]
	default_composition: Dict[str, float]


class AsteroidCompositionData(FrozenModel):
	density: Range
	albedo: Range
	resources: Dict[ResourceType, float]


class BeltParameters(FrozenModel):
	density: Range
	thickness: Range
	object_size: Range
	hazard_density: float
	object_density_g_cm3: float
	notables_per_earth_mass: float


class AsteroidTables(FrozenModel):
	compositions: Dict[AsteroidComposition, AsteroidCompositionData]
	composition_distribution: List[Tuple[float, AsteroidComposition]]
	zone_compositions: Dict[ZoneType, Dict[AsteroidComposition, float]]
	belt: BeltParameters
	resource_values: Dict[ResourceType, float]

	@field_validator("composition_distribution")
	@classmethod
	def _sort(cls, v):
		return _ascending(v)


class LifeFormData(FrozenModel):
	threshold: float
	complexity: float


class BiologyTables(FrozenModel):
	biodiversity_modifiers: Dict[BiomeType, float]
	life_forms: Dict[LifeForm, LifeFormData]
	special_adaptations: List[Tuple[float, List[str]]]
	civilization_thresholds: List[Tuple[float, Civilization]]
	civilization_capable: List[LifeForm]
	adaptation_chance: float

	@field_validator("special_adaptations", "civilization_thresholds")
	@classmethod
	def _sort(cls, v):
		return _ascending(v)


class SystemTables(FrozenModel):
	star_count: List[Tuple[float, int]]

	@field_validator("star_count")
	@classmethod
	def _sort(cls, v):
		return _ascending(v)


class DomainTables(FrozenModel):
	stars: StarTables
	planets: PlanetTables
	moons: MoonTables
	rings: RingTables
	asteroids: AsteroidTables
	biology: BiologyTables
	systems: SystemTables

	def planet(self, planet_type: PlanetType) -> PlanetTypeData:
		try:
			return self.planets.types[planet_type]
		except KeyError:
			raise KeyError(f"no planet data for type {planet_type!r}") from None

	def spectral_range(self, spectral_type: str) -> SpectralRange:
		try:
			return self.stars.spectral_ranges[spectral_type]
		except KeyError:
			raise KeyError(f"no spectral range for type {spectral_type!r}") from None

	def moon_formation(self, planet_type: PlanetType) -> MoonFormation:
		try:
			return self.moons.formation[planet_type]
		except KeyError:
			raise KeyError(f"no moon formation data for type {planet_type!r}") from None
