from __future__ import annotations
from typing import List, Optional, Sequence, Tuple
from ...sampling.roll import Roll
from ...tables.schema import BiologyTables
from ...model.entities import Biosphere
from ...model.enums import BiomeType, Civilization, LifeForm
from ...util import clamp01

MIN_HABITABILITY = 0.1
CIVILIZATION_TIERS = list(Civilization)


def age_factor(age_gyr: float) -> float:
	if age_gyr < 0.5:
		return 0.2
	if age_gyr < 1.0:
		return 0.5
	if age_gyr < 3.0:
		return 1.0
	if age_gyr < 5.0:
		return 0.7
	return 0.4


def magnetic_factor(field: float) -> float:
	return 0.5 + 0.5 * clamp01(field)


def biome_factor(tables: BiologyTables, biomes: Sequence[BiomeType]) -> float:
	if not biomes:
		return 0.0
	return sum(tables.biodiversity_modifiers.get(b, 0.0) for b in biomes) / len(biomes)


def biodiversity(tables: BiologyTables, habitability: float, biomes: Sequence[BiomeType],
		age_gyr: float, magnetic_field: float) -> float:
	base = clamp01(habitability * biome_factor(tables, biomes))
	return clamp01(base * age_factor(age_gyr) * magnetic_factor(magnetic_field))


def present_life_forms(roll: Roll, tables: BiologyTables, diversity: float) -> List[LifeForm]:
	forms = sorted(tables.life_forms.items(), key=lambda kv: kv[1].threshold)
	return [
		form for form, data in forms
		if diversity > data.threshold and roll.conditional_probability(diversity)
	]


def dominant_life_form(roll: Roll, tables: BiologyTables, forms: Sequence[LifeForm], habitability: float) -> LifeForm:
	if not forms:
		return LifeForm.Microbial
	weights = [
		tables.life_forms[f].complexity * max(habitability, 1e-6) * roll.find_range(0.5, 1.5)
		for f in forms
	]
	return roll.choice(list(forms), weights)


def special_adaptations(roll: Roll, tables: BiologyTables, habitability: float) -> List[str]:
	picked: List[str] = []
	for threshold, pool in tables.special_adaptations:
		if habitability >= threshold and roll.conditional_probability(tables.adaptation_chance):
			adaptation = roll.pick(pool)
			if adaptation not in picked:
				picked.append(adaptation)
	return picked


def civilization(roll: Roll, tables: BiologyTables, dominant: LifeForm, habitability: float) -> Tuple[Civilization, float]:
	if dominant not in tables.civilization_capable:
		return Civilization.None_, 0.0
	potential = habitability * roll.find_range(0.5, 1.5)
	level = Civilization.None_
	for threshold, tier in reversed(tables.civilization_thresholds):
		if potential >= threshold:
			level = tier
			break
	return level, CIVILIZATION_TIERS.index(level) / (len(CIVILIZATION_TIERS) - 1)


def generate_biology(roll: Roll, tables: BiologyTables, habitability: float, biomes: Sequence[BiomeType],
		age_gyr: float, magnetic_field: float) -> Optional[Biosphere]:
	"""Biosphere for a world of the given habitability, or None when it is too hostile."""
	if habitability < MIN_HABITABILITY:
		return None
	diversity = biodiversity(tables, habitability, biomes, age_gyr, magnetic_field)
	forms = present_life_forms(roll, tables, diversity)
	dominant = dominant_life_form(roll, tables, forms, habitability)
	adaptations = special_adaptations(roll, tables, habitability)
	level, tech = civilization(roll, tables, dominant, habitability)
	return Biosphere(
		biodiversity=diversity,
		life_forms=forms,
		dominant_life_form=dominant,
		special_adaptations=adaptations,
		civilization=level,
		tech_level=tech,
	)
