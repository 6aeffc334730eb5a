from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional
from .enums import (
	PlanetType, BiomeType, ZoneType, StellarStage, LifeForm, Civilization,
	RingComplexity, ComponentKind, BodyKind,
)


@dataclass
class Population:
	size: int = 0
	government: str = ""
	tech_level: float = 0.0


@dataclass
class Biosphere:
	biodiversity: float = 0.0
	life_forms: List[LifeForm] = field(default_factory=list)
	dominant_life_form: LifeForm = LifeForm.Microbial
	special_adaptations: List[str] = field(default_factory=list)
	civilization: Civilization = Civilization.None_
	tech_level: float = 0.0


@dataclass
class OrbitalBody:
	id: str = ""
	parent_system_id: str = ""
	planet_type: PlanetType = PlanetType.Metian
	mass: float = 0.0  # Earth masses
	radius: float = 0.0  # Earth radii
	density: float = 0.0  # relative to Earth
	surface_gravity: float = 0.0  # g
	rotation_period: float = 0.0  # days
	tidally_locked: bool = False
	axial_tilt: float = 0.0
	eccentricity: float = 0.0
	inclination: float = 0.0
	position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
	has_atmosphere: bool = False
	atmospheric_pressure: float = 0.0  # atm
	atmospheric_composition: Dict[str, float] = field(default_factory=dict)  # percent
	surface_temperature: float = 0.0
	daytime_temperature: float = 0.0
	nighttime_temperature: float = 0.0
	biomes: List[BiomeType] = field(default_factory=list)
	albedo: float = 0.0
	tectonic_activity: float = 0.0
	volcanic_activity: float = 0.0
	magnetic_field: float = 0.0
	water_coverage: float = 0.0
	is_habitable: bool = False
	habitability_index: float = 0.0
	is_terraformable: bool = False
	terraforming_index: float = 0.0
	terraforming_challenges: List[str] = field(default_factory=list)
	resources: Dict[str, float] = field(default_factory=dict)
	resource_value: float = 0.0
	biosphere: Optional[Biosphere] = None
	population: Optional[Population] = None

	kind = BodyKind.Planet

	def add_resource(self, name: str, amount: float) -> None:
		self.resources[name] = amount


@dataclass
class RingGap:
	name: str = ""
	inner_radius: float = 0.0  # Earth radii
	outer_radius: float = 0.0


@dataclass
class RingSystem:
	complexity: RingComplexity = RingComplexity.None_
	inner_radius: float = 0.0  # Earth radii
	outer_radius: float = 0.0
	total_mass: float = 0.0  # Earth masses
	opacity: float = 0.0
	composition: Dict[str, float] = field(default_factory=dict)  # fractions, sum 1
	gaps: List[RingGap] = field(default_factory=list)

	@property
	def width(self) -> float:
		return self.outer_radius - self.inner_radius


@dataclass
class Moon(OrbitalBody):
	parent_planet_id: str = ""
	orbital_distance: float = 0.0  # parent planet radii
	orbital_period: float = 0.0  # days
	tidal_heating: float = 0.0  # W/m^2
	orbital_resonance: Optional[float] = None

	kind = BodyKind.Moon

	@property
	def moon_type(self) -> PlanetType:
		return self.planet_type


@dataclass
class Planet(OrbitalBody):
	parent_star_id: str = ""
	parent_pair_id: Optional[str] = None
	zone: ZoneType = ZoneType.Inner
	semi_major_axis: float = 0.0  # AU
	orbital_period: float = 0.0  # years
	has_rings: bool = False
	rings: Optional[RingSystem] = None
	moons: List[Moon] = field(default_factory=list)

	def add_moon(self, moon: Moon) -> None:
		self.moons.append(moon)


@dataclass
class NotableObject:
	id: str = ""
	radius: float = 0.0  # km
	orbital_distance: float = 0.0  # AU
	orbital_angle: float = 0.0  # radians
	composition: Dict[str, float] = field(default_factory=dict)


@dataclass
class AsteroidBelt:
	id: str = ""
	parent_star_id: str = ""
	parent_system_id: str = ""
	zone: ZoneType = ZoneType.Outer
	inner_radius: float = 0.0  # AU
	outer_radius: float = 0.0
	thickness: float = 0.0
	average_density: float = 0.0  # objects per AU^3
	total_mass: float = 0.0  # Earth masses
	average_object_size: float = 0.0  # km
	composition: Dict[str, float] = field(default_factory=dict)  # fractions, sum 1
	resources: Dict[str, float] = field(default_factory=dict)
	economic_value: float = 0.0
	navigation_hazard: bool = False
	has_dwarf_planets: bool = False
	notable_objects: List[NotableObject] = field(default_factory=list)


@dataclass
class OrbitalZones:
	"""Zone boundaries in AU. A habitable zone of (-1, -1) means none is available."""
	epistellar_inner: float = 0.0
	epistellar_outer: float = 0.0
	inner_start: float = 0.0
	habitable_inner: float = 0.0
	habitable_outer: float = 0.0
	frost_line: float = 0.0
	system_limit: float = 0.0

	@property
	def has_habitable_zone(self) -> bool:
		return 0.0 <= self.habitable_inner < self.habitable_outer

	def zone_for(self, distance: float) -> ZoneType:
		if distance <= self.epistellar_outer:
			return ZoneType.Epistellar
		if self.has_habitable_zone:
			if distance <= self.habitable_inner:
				return ZoneType.Inner
			if distance <= self.habitable_outer:
				return ZoneType.Habitable
		elif distance <= self.frost_line:
			# no habitable band: everything inside the frost line is inner
			return ZoneType.Inner
		if distance <= self.frost_line:
			return ZoneType.Outer
		if distance <= self.system_limit:
			return ZoneType.FarOuter
		return ZoneType.Beyond


@dataclass
class Orbit:
	distance: float = 0.0  # AU
	zone: ZoneType = ZoneType.Inner
	mass: float = 0.0
	eccentricity: float = 0.0
	inclination: float = 0.0
	is_asteroid_belt: bool = False
	has_moons: bool = False
	planet_type: Optional[PlanetType] = None
	circumbinary: bool = False


@dataclass
class Star:
	id: str = ""
	parent_system_id: str = ""
	spectral_type: str = "G"
	spectral_class: str = "G2"
	stage: StellarStage = StellarStage.V
	mass: float = 0.0  # solar
	radius: float = 0.0
	luminosity: float = 0.0
	temperature: float = 0.0
	age: float = 0.0  # Gyr
	rotation_period: float = 0.0  # days
	is_pulsar: bool = False
	is_variable: bool = False
	has_star_spots: bool = False
	has_flares: bool = False
	habitable_zone_inner: float = 0.0
	habitable_zone_outer: float = 0.0
	frost_line: float = 0.0
	roche_limit: float = 0.0  # AU
	hill_sphere: float = 0.0  # AU
	zones: Optional[OrbitalZones] = None
	orbits: List[Orbit] = field(default_factory=list)
	planets: List[Planet] = field(default_factory=list)
	belts: List[AsteroidBelt] = field(default_factory=list)


@dataclass
class BinaryPair:
	id: str = ""
	primary_id: str = ""
	primary_kind: ComponentKind = ComponentKind.Star
	secondary_id: str = ""
	secondary_kind: ComponentKind = ComponentKind.Star
	separation: float = 0.0  # AU
	orbital_period: float = 0.0  # years
	primary_orbit_radius: float = 0.0
	secondary_orbit_radius: float = 0.0
	total_mass: float = 0.0
	mass_ratio: float = 0.0
	zones: Optional[OrbitalZones] = None
	orbits: List[Orbit] = field(default_factory=list)
	planets: List[Planet] = field(default_factory=list)
	belts: List[AsteroidBelt] = field(default_factory=list)


@dataclass
class StarSystem:
	id: str = ""
	sector_id: str = ""
	position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])  # light years
	stars: List[Star] = field(default_factory=list)
	binary_pairs: List[BinaryPair] = field(default_factory=list)
	root_pair_id: Optional[str] = None

	def find_star(self, star_id: str) -> Optional[Star]:
		return next((s for s in self.stars if s.id == star_id), None)

	def find_pair(self, pair_id: str) -> Optional[BinaryPair]:
		return next((p for p in self.binary_pairs if p.id == pair_id), None)

	def all_planets(self) -> Iterator[Planet]:
		for s in self.stars:
			yield from s.planets
		for p in self.binary_pairs:
			yield from p.planets

	def all_moons(self) -> Iterator[Moon]:
		for planet in self.all_planets():
			yield from planet.moons

	def all_belts(self) -> Iterator[AsteroidBelt]:
		for s in self.stars:
			yield from s.belts
		for p in self.binary_pairs:
			yield from p.belts


@dataclass
class Sector:
	id: str = ""
	coordinates: List[int] = field(default_factory=lambda: [0, 0, 0])
	center: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])  # parsecs from galactic centre
	systems: List[StarSystem] = field(default_factory=list)
	anomaly_count: int = 0
	distance_map: Dict[str, Dict[str, float]] = field(default_factory=dict)  # light years

	def calculate_distance_map(self) -> None:
		self.distance_map = {}
		for a in self.systems:
			row: Dict[str, float] = {}
			for b in self.systems:
				if a.id != b.id:
					row[b.id] = math.dist(a.position, b.position)
			self.distance_map[a.id] = row

	def system_distance(self, a: str, b: str) -> float:
		return self.distance_map.get(a, {}).get(b, -1.0)

	def find_system(self, system_id: str) -> Optional[StarSystem]:
		return next((s for s in self.systems if s.id == system_id), None)
