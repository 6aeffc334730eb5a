from __future__ import annotations
import math
from typing import Tuple
from .constants import (
	GAS_CONSTANT, EARTH_GRAVITY, EARTH_RADIUS_KM, EARTH_ALBEDO, EARTH_GREENHOUSE_K,
	EARTH_EFFECTIVE_TEMP_K, SIGMA_SB,
)

GAS_RETENTION_THRESHOLD = 10.0


def can_retain_gas(gravity_g: float, temperature_K: float, molecular_weight: float) -> bool:
	if temperature_K <= 0:
		return gravity_g > 0
	escape = molecular_weight * gravity_g * EARTH_GRAVITY * EARTH_RADIUS_KM / (GAS_CONSTANT * temperature_K)
	return escape > GAS_RETENTION_THRESHOLD


def atmospheric_pressure(mass_earth: float, gravity_g: float, temperature_K: float, volatile_content: float) -> float:
	"""Surface pressure in atm."""
	return max(0.0, mass_earth * gravity_g * volatile_content * temperature_K / 288.0)


def greenhouse_factor(co2_fraction: float, h2o_fraction: float, pressure_atm: float) -> float:
	return (1.0 + co2_fraction * 2.0 + h2o_fraction * 1.5) * math.sqrt(max(0.0, pressure_atm))


def blackbody_temperature(luminosity: float, distance_AU: float, albedo: float) -> float:
	if distance_AU <= 0 or luminosity <= 0:
		return 0.0
	flux = luminosity / distance_AU ** 2
	albedo_term = max(0.0, 1.0 - albedo) / (1.0 - EARTH_ALBEDO)
	return EARTH_EFFECTIVE_TEMP_K * flux ** 0.25 * albedo_term ** 0.25


def planetary_temperature(luminosity: float, distance_AU: float, albedo: float, greenhouse: float = 1.0) -> float:
	bb = blackbody_temperature(luminosity, distance_AU, albedo)
	if bb <= 0:
		return 0.0
	return bb + EARTH_GREENHOUSE_K * greenhouse


def day_night_temperatures(mean_K: float, rotation_days: float, has_atmosphere: bool,
		atmosphere_density: float = 1.0, tidally_locked: bool = False) -> Tuple[float, float]:
	if tidally_locked:
		if has_atmosphere:
			m = min(1.0, atmosphere_density)
			return mean_K * (1.5 - 0.3 * m), mean_K * (0.3 + 0.4 * m)
		return mean_K * 1.5, mean_K * 0.3
	inertia = min(1.0, atmosphere_density) if has_atmosphere else 0.1
	swing = mean_K * 0.2 * math.sqrt(max(0.0, rotation_days)) / (1.0 + 10.0 * inertia)
	return mean_K + swing, max(10.0, mean_K - swing)


def magnetic_field_strength(mass_earth: float, radius_earth: float, rotation_days: float,
		core_density: float, core_temperature_K: float) -> float:
	"""Relative dynamo strength, Earth ~ 1. Callers clamp."""
	if radius_earth <= 0 or rotation_days <= 0:
		return 0.0
	core_ratio = 0.5 * (mass_earth / radius_earth) ** 0.25
	core_mass = mass_earth * core_ratio ** 3 * core_density
	rotation = min(2.0, 1.0 / rotation_days)
	temperature = min(1.0, max(0.0, (core_temperature_K - 1000.0) / 5000.0))
	return core_mass * rotation * temperature / radius_earth / 0.7


def flux_temperature(flux_w_m2: float) -> float:
	if flux_w_m2 <= 0:
		return 0.0
	return (flux_w_m2 / SIGMA_SB) ** 0.25


def combine_temperatures(*temperatures: float) -> float:
	"""Add radiative contributions as sigma*T^4 and convert back."""
	energy = sum(SIGMA_SB * t ** 4 for t in temperatures if t > 0)
	return flux_temperature(energy)
