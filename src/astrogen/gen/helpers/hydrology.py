from __future__ import annotations
from ...sampling.roll import Roll
from ...tables.schema import PlanetTypeData
from ...util import clamp01

FREEZING_K = 273.0
BOILING_K = 373.0
CRITICAL_K = 647.0
TRIPLE_POINT_ATM = 0.006
# atm of extra pressure needed per K above boiling
PRESSURE_PER_K = 1.0 / 30.0


def can_water_exist(temperature: float, pressure: float) -> bool:
	if temperature < FREEZING_K:
		return True  # as ice
	if temperature > CRITICAL_K:
		return False
	if temperature <= BOILING_K and pressure >= TRIPLE_POINT_ATM:
		return True
	return pressure >= TRIPLE_POINT_ATM + (temperature - BOILING_K) * PRESSURE_PER_K


def _base_coverage(roll: Roll, content: float, temperature: float) -> float:
	coverage = roll.vary(content, 0.15)
	if FREEZING_K < temperature < BOILING_K:
		coverage = roll.vary(coverage, 0.2)
		earthlike = 1.0 - abs(temperature - 288.0) / 100.0
		coverage *= max(1.0, 1.0 + 0.1 * earthlike)
	return coverage


def _temperature_modifier(temperature: float) -> float:
	if temperature < FREEZING_K:
		return 0.3
	if temperature > BOILING_K:
		return max(0.0, 1.0 - (temperature - BOILING_K) / 300.0)
	return 1.0


def _pressure_modifier(pressure: float) -> float:
	if pressure < TRIPLE_POINT_ATM:
		return 0.1
	if pressure > 100.0:
		return 0.5
	if 1.0 < pressure < 10.0:
		return min(1.2, 1.0 + (pressure - 1.0) / 20.0)
	return 1.0


def calculate_water_coverage(roll: Roll, data: PlanetTypeData, temperature: float, pressure: float) -> float:
	"""Fraction of the surface under water or ice, in [0, 1]."""
	if not can_water_exist(temperature, pressure):
		return 0.0
	lo, hi = data.water_content
	if hi <= 0.001:
		return 0.0
	# weighted toward the wet end of the type's range
	content = lo + (hi - lo) * roll.find_range(0.3, 1.0)
	coverage = _base_coverage(roll, content, temperature)
	coverage *= _temperature_modifier(temperature)
	coverage *= _pressure_modifier(pressure)
	return clamp01(coverage)
