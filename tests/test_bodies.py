import logging
import math
from astrogen.sampling.roll import Roll
from astrogen.tables.loaders import load_tables
from astrogen.registry import EntityRegistry
from astrogen.model.entities import Planet, Moon
from astrogen.model.enums import BodyKind, PlanetType, UNINHABITABLE_TYPES, ZoneType, is_gas_giant
from astrogen.physics.thermal import planetary_temperature
from astrogen.gen.body import GenerationContext, finalize_celestial_body, generate_basic_properties, lookup_parent_star
from astrogen.gen.helpers.geology import generate_geology
from astrogen.gen.helpers.habitability import habitability_index
from astrogen.gen.helpers.hydrology import calculate_water_coverage
from astrogen.gen.helpers.terraform import evaluate_terraformability
from astrogen.gen.moon import generate_moon, nearest_simple_ratio, tidal_heating
from astrogen.gen.moon_system import MoonSlot


def context(seed=1):
	return GenerationContext(roll=Roll.for_task(seed), tables=load_tables(), registry=EntityRegistry())


def hyperion():
	return Planet(
		id="SYS-S1-P1", parent_star_id="SYS-S1", planet_type=PlanetType.Hyperion,
		mass=300.0, radius=11.0, surface_gravity=300.0 / 121.0, albedo=0.4, rotation_period=0.4,
		semi_major_axis=0.05, zone=ZoneType.Epistellar,
	)


def test_hyperion_is_lifeless():
	tables = load_tables()
	for seed in range(30):
		ctx = context(seed)
		geology = generate_geology(ctx.roll, tables.planet(PlanetType.Hyperion), PlanetType.Hyperion,
			300.0, 11.0, 1200.0, 0.4)
		assert geology.tectonic_activity == 0.0
		assert geology.volcanic_activity == 0.0

		planet = hyperion()
		finalize_celestial_body(ctx, BodyKind.Planet, planet, 1.0, 0.05, 4.6)
		assert planet.habitability_index == 0.0
		assert not planet.is_habitable
		assert not planet.is_terraformable
		assert planet.biosphere is None
		assert planet.tectonic_activity == 0.0 and planet.volcanic_activity == 0.0


def test_gas_giant_compressional_heating():
	ctx = context()
	planet = hyperion()
	finalize_celestial_body(ctx, BodyKind.Planet, planet, 1.0, 0.05)
	assert is_gas_giant(planet.planet_type)
	assert math.isclose(planet.surface_temperature, planetary_temperature(1.0, 0.05, 0.4) * 1.5)


def test_uninhabitable_types_score_zero():
	for planet_type in UNINHABITABLE_TYPES:
		assert habitability_index(planet_type, 288.0, 1.0, {"Nitrogen": 78.0, "Oxygen": 21.0}, 0.7, 1.0) == 0.0


def test_hot_thin_world_holds_less_water():
	data = load_tables().planet(PlanetType.Gaian)
	for seed in range(20):
		roll = Roll.for_task(seed)
		hot = calculate_water_coverage(roll, data, 500.0, 0.5)
		temperate = calculate_water_coverage(roll, data, 288.0, 1.0)
		assert hot < temperate
		assert 0.0 <= temperate <= 1.0


def test_earthlike_world_is_terraformable():
	body = Planet(planet_type=PlanetType.Gaian, mass=1.0, surface_gravity=1.0, surface_temperature=288.0,
		magnetic_field=1.0, rotation_period=1.0)
	ok, index, challenges = evaluate_terraformability(body)
	assert ok and index > 0.3 and challenges == []


def test_unsuitable_type_is_not_terraformable():
	ok, index, challenges = evaluate_terraformability(Planet(planet_type=PlanetType.Vulcanian))
	assert not ok and index == 0.0 and challenges


def test_basic_properties_register_body():
	ctx = context(3)
	body = generate_basic_properties(ctx, BodyKind.Planet, body_id="P-1", mass=1.0, orbital_distance=1.0,
		zone=ZoneType.Habitable, eccentricity=0.02, luminosity=1.0, system_id="SYS")
	assert isinstance(body, Planet)
	assert ctx.registry.get_planet("P-1") is body
	assert body.radius > 0
	assert math.isclose(body.surface_gravity, body.mass / body.radius ** 2)
	assert 0.0 <= body.magnetic_field <= 1.0

	finalize_celestial_body(ctx, BodyKind.Planet, body, 1.0, 1.0)
	assert ctx.registry.counts()["planets"] == 1
	if body.has_atmosphere:
		assert math.isclose(sum(body.atmospheric_composition.values()), 100.0, rel_tol=1e-9)
	else:
		assert body.atmospheric_pressure == 0.0 and body.atmospheric_composition == {}


def test_missing_parent_star_falls_back(caplog):
	ctx = context(4)
	with caplog.at_level(logging.WARNING):
		assert lookup_parent_star(ctx, "nowhere") == (1.0, 1.0)
	assert "not registered" in caplog.text


def test_moon_without_registered_star():
	ctx = context(5)
	planet = hyperion()
	planet.parent_star_id = "missing"
	planet.semi_major_axis = 5.2
	moon = generate_moon(ctx, MoonSlot(0.015, 10.0, 0.01), planet, ZoneType.FarOuter, "SYS-S1-P1-M1")
	assert isinstance(moon, Moon)
	assert moon.parent_planet_id == planet.id
	assert ctx.registry.get_moon(moon.id) is moon
	assert moon.orbital_period > 0
	assert moon.daytime_temperature >= moon.nighttime_temperature >= 3.0
	assert moon.moon_type is moon.planet_type


def test_moon_without_registered_star_is_lit_at_one_au():
	moons = []
	for distance in (0.05, 1.0, 30.0):
		planet = hyperion()
		planet.parent_star_id = "missing"
		planet.semi_major_axis = distance
		moons.append(generate_moon(context(6), MoonSlot(0.015, 10.0, 0.01), planet, ZoneType.Outer, "SYS-S1-P1-M1"))
	assert moons[0] == moons[1] == moons[2]


def test_tidal_heating_needs_eccentricity():
	assert tidal_heating(318.0, 0.015, 0.29, 6.0, 11.0, 0.0) == 0.0
	assert tidal_heating(318.0, 0.015, 0.29, 6.0, 11.0, 0.004) > 0.0


def test_nearest_simple_ratio():
	assert nearest_simple_ratio(2.05) == 2.0
	assert nearest_simple_ratio(1.49) == 1.5
	assert math.isclose(nearest_simple_ratio(1.35), 4.0 / 3.0)


def test_surface_fields_bounded_over_many_planets():
	ctx = context(77)
	draws = Roll.for_task(77, 1)
	zones = list(ZoneType)
	for n in range(10_000):
		distance = 10 ** draws.find_range(-1.5, 2.0)
		luminosity = 10 ** draws.find_range(-3.0, 3.0)
		body = generate_basic_properties(
			ctx, BodyKind.Planet,
			body_id=f"SWEEP-P{n}",
			mass=10 ** draws.find_range(-2.3, 3.6),
			orbital_distance=distance,
			zone=draws.pick(zones),
			eccentricity=draws.find_range(0.0, 0.3),
			luminosity=luminosity,
		)
		finalize_celestial_body(ctx, BodyKind.Planet, body, luminosity, distance, draws.find_range(0.1, 12.0))
		for value in (body.habitability_index, body.tectonic_activity, body.volcanic_activity,
				body.water_coverage, body.magnetic_field, body.terraforming_index):
			assert 0.0 <= value <= 1.0
		assert body.surface_temperature > 0.0
		if body.atmospheric_composition:
			assert math.isclose(sum(body.atmospheric_composition.values()), 100.0, rel_tol=1e-9)
		if body.biosphere is not None:
			assert 0.0 <= body.biosphere.biodiversity <= 1.0
	assert ctx.registry.counts()["planets"] == 10_000
