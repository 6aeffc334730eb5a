from __future__ import annotations
from enum import Enum
from typing import FrozenSet


class PlanetType(str, Enum):
	Metian = "Metian"
	Menoetian = "Menoetian"
	Promethean = "Promethean"
	Tethysian = "Tethysian"
	Gaian = "Gaian"
	Oceanian = "Oceanian"
	Phoeboan = "Phoeboan"
	Rhean = "Rhean"
	Dionean = "Dionean"
	Criusian = "Criusian"
	Theian = "Theian"
	Iapetian = "Iapetian"
	Helian = "Helian"
	Lelantian = "Lelantian"
	Hyperion = "Hyperion"
	Atlantean = "Atlantean"
	Vulcanian = "Vulcanian"
	Cronusian = "Cronusian"
	Asterian = "Asterian"


class ChemistryType(str, Enum):
	Silicate = "Silicate"
	Carbon = "Carbon"
	Iron = "Iron"
	Water = "Water"
	Hydrogen = "Hydrogen"
	Helium = "Helium"
	Ammonia = "Ammonia"
	Sulfur = "Sulfur"
	Methane = "Methane"


class BiomeType(str, Enum):
	RockyPlains = "RockyPlains"
	HighPlains = "HighPlains"
	LowMountains = "LowMountains"
	HighMountains = "HighMountains"
	Desert = "Desert"
	Grassland = "Grassland"
	Woodland = "Woodland"
	DenseForest = "DenseForest"
	Rainforest = "Rainforest"
	Wetlands = "Wetlands"
	Tundra = "Tundra"
	IceSheet = "IceSheet"
	GlacialPlains = "GlacialPlains"
	CoastalZone = "CoastalZone"
	CoralReef = "CoralReef"
	PelagicZone = "PelagicZone"
	AbyssalPlain = "AbyssalPlain"
	HydrothermalFields = "HydrothermalFields"
	FreshwaterLake = "FreshwaterLake"
	BrackishLake = "BrackishLake"
	FreshwaterRiver = "FreshwaterRiver"
	SaltWaterRiver = "SaltWaterRiver"
	LavaFields = "LavaFields"
	VolcanicPlateau = "VolcanicPlateau"
	AcidSpringFields = "AcidSpringFields"
	CryovolcanicFields = "CryovolcanicFields"
	CloudBands = "CloudBands"
	ExoticCloudDeck = "ExoticCloudDeck"
	MethaneLakeRegion = "MethaneLakeRegion"
	AmmoniaCloudLayer = "AmmoniaCloudLayer"
	RegolithPlains = "RegolithPlains"
	MetallicCrust = "MetallicCrust"
	CrystallineVeins = "CrystallineVeins"


class ResourceType(str, Enum):
	Water = "Water"
	Metals = "Metals"
	RareMetals = "RareMetals"
	Radioactives = "Radioactives"
	Organics = "Organics"
	Gases = "Gases"
	Crystals = "Crystals"
	ExoticMatter = "ExoticMatter"


class ZoneType(str, Enum):
	Epistellar = "Epistellar"
	Inner = "Inner"
	Habitable = "Habitable"
	Outer = "Outer"
	FarOuter = "FarOuter"
	Beyond = "Beyond"


class StellarStage(str, Enum):
	"""Yerkes luminosity classes plus the two remnant/substellar stages."""
	VII = "VII"  # white dwarf
	VI = "VI"  # brown dwarf
	V = "V"  # main sequence
	IV = "IV"  # subgiant
	III = "III"  # giant
	II = "II"  # bright giant
	I = "I"  # supergiant


class LifeForm(str, Enum):
	Microbial = "Microbial"
	Plant = "Plant"
	Aquatic = "Aquatic"
	Insectoid = "Insectoid"
	Reptilian = "Reptilian"
	Avian = "Avian"
	Mammalian = "Mammalian"
	Synthetic = "Synthetic"


class Civilization(str, Enum):
	None_ = "None"
	Primitive = "Primitive"
	Industrial = "Industrial"
	Spacefaring = "Spacefaring"
	PostSingularity = "PostSingularity"


class RingComplexity(str, Enum):
	None_ = "None"
	Simple = "Simple"
	Moderate = "Moderate"
	Complex = "Complex"


class AsteroidComposition(str, Enum):
	Carbonaceous = "Carbonaceous"
	Stony = "Stony"
	Metallic = "Metallic"
	Basaltic = "Basaltic"
	Icy = "Icy"
	Mixed = "Mixed"


class BodyKind(str, Enum):
	Planet = "Planet"
	Moon = "Moon"


class ComponentKind(str, Enum):
	Star = "Star"
	BinaryPair = "BinaryPair"


GAS_GIANT_TYPES: FrozenSet[PlanetType] = frozenset({
	PlanetType.Hyperion,
	PlanetType.Atlantean,
	PlanetType.Criusian,
	PlanetType.Theian,
	PlanetType.Iapetian,
	PlanetType.Helian,
})

UNINHABITABLE_TYPES: FrozenSet[PlanetType] = GAS_GIANT_TYPES | {
	PlanetType.Cronusian,
	PlanetType.Asterian,
	PlanetType.Vulcanian,
}

NO_TECTONICS_TYPES: FrozenSet[PlanetType] = GAS_GIANT_TYPES | {PlanetType.Asterian}

TERRAFORMABLE_TYPES: FrozenSet[PlanetType] = frozenset({
	PlanetType.Gaian,
	PlanetType.Oceanian,
	PlanetType.Tethysian,
	PlanetType.Promethean,
	PlanetType.Rhean,
	PlanetType.Dionean,
	PlanetType.Menoetian,
	PlanetType.Phoeboan,
})


def is_gas_giant(planet_type: PlanetType) -> bool:
	return planet_type in GAS_GIANT_TYPES
