from __future__ import annotations
import math
from .constants import (
	G, AU_M, AU_KM, EARTH_MASS_KG, EARTH_RADIUS_M, EARTH_RADIUS_KM, SOLAR_MASS_KG,
	SOLAR_MASS_TO_EARTH_MASS, SECONDS_PER_DAY, DAYS_PER_YEAR, ROCHE_FACTOR,
)


def orbital_period_years(a_AU: float, star_mass_solar: float, planet_mass_earth: float = 0.0) -> float:
	"""Kepler's third law in solar units."""
	total = star_mass_solar + planet_mass_earth / SOLAR_MASS_TO_EARTH_MASS
	if total <= 0:
		return 0.0
	return math.sqrt(a_AU ** 3 / total)


def orbital_velocity_kms(a_AU: float, star_mass_solar: float) -> float:
	if a_AU <= 0:
		return 0.0
	return math.sqrt(G * star_mass_solar * SOLAR_MASS_KG / (a_AU * AU_M)) / 1000.0


def hill_sphere_radius(primary_mass: float, orbiting_mass: float, a: float, e: float = 0.0) -> float:
	"""Masses in the same unit; result in the unit of ``a``."""
	if primary_mass <= 0:
		return 0.0
	return a * (1.0 - e) * (orbiting_mass / (3.0 * primary_mass)) ** (1.0 / 3.0)


def planetary_hill_sphere_au(planet_mass_earth: float, star_mass_solar: float, a_AU: float, e: float = 0.0) -> float:
	return hill_sphere_radius(star_mass_solar * SOLAR_MASS_TO_EARTH_MASS, planet_mass_earth, a_AU, e)


def stellar_hill_sphere(star_mass_solar: float, companion_mass_solar: float, separation_AU: float, e: float = 0.0) -> float:
	"""Hill sphere of ``star`` in the field of its companion."""
	return hill_sphere_radius(companion_mass_solar, star_mass_solar, separation_AU, e)


def roche_limit(primary_mass: float, secondary_mass: float, primary_radius: float) -> float:
	total = primary_mass + secondary_mass
	if total <= 0:
		return 0.0
	return primary_radius * ROCHE_FACTOR * (primary_mass / total) ** (1.0 / 3.0)


def lunar_roche_limit(planet_mass_earth: float, planet_radius_earth: float, moon_mass_earth: float = 0.0123) -> float:
	"""Roche limit in Earth radii."""
	return roche_limit(planet_mass_earth, moon_mass_earth, planet_radius_earth)


def stellar_roche_limit(star_mass: float, companion_mass: float, star_radius_solar: float) -> float:
	"""Roche limit in solar radii."""
	return roche_limit(star_mass, companion_mass, star_radius_solar)


def moon_orbital_period_days(distance_planet_radii: float, planet_mass_earth: float,
		moon_mass_earth: float = 0.0, planet_radius_earth: float = 1.0) -> float:
	d = distance_planet_radii * planet_radius_earth * EARTH_RADIUS_M
	m = (planet_mass_earth + moon_mass_earth) * EARTH_MASS_KG
	if d <= 0 or m <= 0:
		return 0.0
	return 2.0 * math.pi * math.sqrt(d ** 3 / (G * m)) / SECONDS_PER_DAY


def binary_orbital_period_years(separation_AU: float, total_mass_solar: float) -> float:
	if total_mass_solar <= 0:
		return 0.0
	return math.sqrt(separation_AU ** 3 / total_mass_solar)


def radius_from_mass_density(mass_earth: float, density_earth: float) -> float:
	"""Radius in Earth radii from mass and density relative to Earth."""
	if mass_earth <= 0 or density_earth <= 0:
		raise ValueError("mass and density must be > 0")
	return (mass_earth / density_earth) ** (1.0 / 3.0)


def initial_rotation_days(mass_earth: float, radius_earth: float, formation_distance: float, jitter: float) -> float:
	"""``jitter`` is a uniform draw in [0, 0.4] supplied by the caller."""
	if radius_earth <= 0:
		return 0.0
	base = math.sqrt(mass_earth / radius_earth ** 3)
	return base * math.sqrt(max(0.0, formation_distance)) * (0.8 + jitter)


def tidal_rotation_effect(initial_period: float, mass_earth: float, radius_earth: float,
		distance_AU: float, primary_mass_solar: float, age_gyr: float = 5.0) -> float:
	q = 100.0
	k2 = 0.3
	m = mass_earth * EARTH_MASS_KG
	r = radius_earth * EARTH_RADIUS_M
	d = distance_AU * AU_M
	mp = primary_mass_solar * SOLAR_MASS_KG
	if m <= 0 or r <= 0 or d <= 0:
		return initial_period
	torque = 3.0 * G * mp * m * r ** 3 * k2 / (2.0 * q * d ** 3)
	inertia = 0.4 * m * r * r
	t = age_gyr * 1e9 * SECONDS_PER_DAY * DAYS_PER_YEAR
	return initial_period * math.exp(-torque * t / inertia)


def moon_rotation_period(initial_period: float, moon_mass_earth: float, moon_radius_earth: float,
		orbital_period_days: float, planet_mass_earth: float, distance_planet_radii: float,
		planet_radius_earth: float, age_gyr: float = 5.0) -> float:
	"""Tidally evolved spin, never slower than the orbit."""
	distance_AU = distance_planet_radii * planet_radius_earth * EARTH_RADIUS_KM / AU_KM
	final = tidal_rotation_effect(
		initial_period, moon_mass_earth, moon_radius_earth, distance_AU,
		planet_mass_earth / SOLAR_MASS_TO_EARTH_MASS, age_gyr,
	)
	return min(final, orbital_period_days)
