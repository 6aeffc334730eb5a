from __future__ import annotations
from typing import Mapping
from ...model.enums import PlanetType, UNINHABITABLE_TYPES
from ...util import clamp01

WEIGHTS = {
	"temperature": 0.3,
	"pressure": 0.2,
	"composition": 0.2,
	"water": 0.2,
	"shielding": 0.1,
}


def band_score(value: float, lo: float, hi: float, falloff: float) -> float:
	"""1 inside [lo, hi], falling linearly to 0 over ``falloff`` on either side."""
	if value < lo:
		return max(0.0, 1.0 - (lo - value) / falloff)
	if value > hi:
		return max(0.0, 1.0 - (value - hi) / falloff)
	return 1.0


def temperature_score(temperature: float) -> float:
	return band_score(temperature, 273.0, 313.0, 50.0)


def pressure_score(pressure: float) -> float:
	if pressure < 0.5:
		return max(0.0, pressure / 0.5)
	return band_score(pressure, 0.5, 2.0, 3.0)


def composition_score(composition: Mapping[str, float]) -> float:
	score = 0.0
	oxygen = composition.get("Oxygen")
	if oxygen is not None:
		if 15.0 <= oxygen <= 30.0:
			score += 0.6
		elif oxygen > 0:
			score += 0.3
	co2 = composition.get("Carbon Dioxide")
	if co2 is not None and co2 < 1.0:
		score += 0.2
	nitrogen = composition.get("Nitrogen")
	if nitrogen is not None and nitrogen >= 70.0:
		score += 0.2
	return clamp01(score)


def water_score(coverage: float) -> float:
	if coverage < 0.3:
		return coverage / 0.3
	if coverage > 0.8:
		return 1.0 - (coverage - 0.8) / 0.2
	return 1.0


def shielding_score(magnetic_field: float, pressure: float) -> float:
	# either a field or a thick atmosphere is enough
	return max(magnetic_field, min(1.0, pressure / 0.5))


def habitability_index(planet_type: PlanetType, temperature: float, pressure: float,
		composition: Mapping[str, float], water_coverage: float, magnetic_field: float) -> float:
	if planet_type in UNINHABITABLE_TYPES:
		return 0.0
	scores = {
		"temperature": temperature_score(temperature),
		"pressure": pressure_score(pressure),
		"composition": composition_score(composition),
		"water": water_score(water_coverage),
		"shielding": shielding_score(magnetic_field, pressure),
	}
	return clamp01(sum(scores[k] * w for k, w in WEIGHTS.items()))
