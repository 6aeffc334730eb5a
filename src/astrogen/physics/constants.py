from __future__ import annotations

G = 6.674e-11  # m^3 kg^-1 s^-2
SIGMA_SB = 5.670374419e-8  # W m^-2 K^-4
GAS_CONSTANT = 8.314462618  # J mol^-1 K^-1
EARTH_GRAVITY = 9.81  # m/s^2

EARTH_MASS_KG = 5.972e24
EARTH_RADIUS_KM = 6371.0
EARTH_RADIUS_M = EARTH_RADIUS_KM * 1000.0
SOLAR_MASS_KG = 1.989e30
AU_M = 1.495978707e11
AU_KM = AU_M / 1000.0

SOLAR_MASS_TO_EARTH_MASS = 333000.0
AU_TO_EARTH_RADIUS = 23481.0
SOLAR_RADIUS_TO_AU = 0.00465
AU_TO_SOLAR_RADIUS = 215.032

EARTH_ALBEDO = 0.306
EARTH_GREENHOUSE_K = 33.0
EARTH_EFFECTIVE_TEMP_K = 255.0
SUN_TEMPERATURE_K = 5778.0

SECONDS_PER_DAY = 86400.0
DAYS_PER_YEAR = 365.25
LIGHT_YEARS_PER_PARSEC = 3.26

# Roche limit multiplier for a fluid satellite
ROCHE_FACTOR = 2.44
