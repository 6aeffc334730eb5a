from __future__ import annotations
from typing import List, Tuple
from ...model.entities import OrbitalBody
from ...model.enums import TERRAFORMABLE_TYPES

MASS_LIMITS = (0.1, 10.0)
GRAVITY_LIMITS = (0.4, 1.5)
TEMPERATURE_LIMITS = (150.0, 400.0)
RESOURCE_WEIGHTS = {"Water": 0.3, "Metals": 0.2, "Gases": 0.2}


def optimal_score(value: float, lo: float, hi: float) -> float:
	"""1 inside the optimal band, proportional falloff outside it."""
	if lo <= value <= hi:
		return 1.0
	if value < lo:
		return value / lo
	return hi / value


def evaluate_terraformability(body: OrbitalBody) -> Tuple[bool, float, List[str]]:
	if body.planet_type not in TERRAFORMABLE_TYPES:
		return False, 0.0, ["Planet type not suitable for terraforming"]
	challenges: List[str] = []
	score = 0.0

	if MASS_LIMITS[0] <= body.mass <= MASS_LIMITS[1]:
		score += optimal_score(body.mass, 0.5, 2.0)
	else:
		challenges.append("Mass outside acceptable range")

	if GRAVITY_LIMITS[0] <= body.surface_gravity <= GRAVITY_LIMITS[1]:
		score += optimal_score(body.surface_gravity, 0.8, 1.2)
	else:
		challenges.append("Surface gravity outside habitable range")

	if TEMPERATURE_LIMITS[0] <= body.surface_temperature <= TEMPERATURE_LIMITS[1]:
		score += optimal_score(body.surface_temperature, 250.0, 350.0)
	else:
		challenges.append("Temperature extreme")

	if body.magnetic_field < 0.2:
		challenges.append("Weak magnetic field")
	score += body.magnetic_field * 0.2

	if body.tidally_locked:
		challenges.append("Tidally locked")
		score *= 0.5
	elif body.rotation_period > 100.0:
		challenges.append("Very slow rotation")
		score *= 0.8

	score += sum(body.resources.get(k, 0.0) * w for k, w in RESOURCE_WEIGHTS.items())
	index = min(1.0, max(0.0, score / 5.0))
	return index > 0.3 and len(challenges) < 3, index, challenges
