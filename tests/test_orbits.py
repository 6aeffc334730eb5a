from astrogen.sampling.roll import Roll
from astrogen.tables.loaders import load_tables
from astrogen.model.entities import Star
from astrogen.model.enums import PlanetType, StellarStage, ZoneType
from astrogen.gen.star import generate_star
from astrogen.gen.zones import calculate_orbital_zones
from astrogen.gen.orbits import (
	determine_planet_type, generate_circumbinary_orbits, generate_circumstellar_orbits, titius_bode_distances,
)


def test_titius_bode_candidates():
	distances = titius_bode_distances(0.3, 100.0)
	assert distances == sorted(distances)
	assert 0 < len(distances) <= 15
	assert all(0.3 <= d <= 100.0 for d in distances)
	wide = titius_bode_distances(0.3, 100.0, circumbinary=True)
	assert wide[0] > distances[0]


def test_planet_type_cascade():
	roll = Roll.for_task(1)
	assert determine_planet_type(roll, 0.005, 1.0, ZoneType.Outer, 1.0, 3.0) is PlanetType.Asterian
	assert determine_planet_type(roll, 0.05, 1.0, ZoneType.Outer, 1.0, 3.0) is PlanetType.Metian
	assert determine_planet_type(roll, 300.0, 0.3, ZoneType.Inner, 1.0, 0.5) is PlanetType.Hyperion
	assert determine_planet_type(roll, 300.0, 0.3, ZoneType.FarOuter, 1.0, 20.0) is PlanetType.Atlantean
	assert determine_planet_type(roll, 1.0, 1.0, ZoneType.Habitable, 1.0, 1.0, water_content=0.7) is PlanetType.Gaian
	assert determine_planet_type(roll, 1.0, 1.0, ZoneType.FarOuter, 1.0, 20.0, water_content=0.8) is PlanetType.Phoeboan


def test_circumstellar_orbits_follow_zones():
	tables = load_tables()
	for seed in range(30):
		roll = Roll.for_task(seed)
		star = generate_star(roll, tables, spectral_type="G", subclass="2", stage=StellarStage.V, star_id="S")
		star.zones = calculate_orbital_zones(star)
		orbits = generate_circumstellar_orbits(roll, star)
		distances = [o.distance for o in orbits]
		assert distances == sorted(distances)
		for orbit in orbits:
			assert orbit.zone is star.zones.zone_for(orbit.distance)
			assert orbit.mass > 0
			assert orbit.planet_type is not None
			if orbit.is_asteroid_belt:
				assert orbit.planet_type is PlanetType.Asterian


def test_circumbinary_orbits_clear_the_pair():
	# a close pair uses the zones of its combined light
	zones = calculate_orbital_zones(Star(id="AB", mass=2.0, luminosity=2.0, radius=1.0, temperature=5778.0))
	produced = 0
	for seed in range(30):
		orbits = generate_circumbinary_orbits(Roll.for_task(seed), zones, 1.0, 1.0, 1.0, 1.0, 1.0, 2.0)
		produced += len(orbits)
		for orbit in orbits:
			assert orbit.circumbinary
			assert orbit.distance >= 2.5
	assert produced > 0
	assert generate_circumbinary_orbits(Roll.for_task(0), zones, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0) == []
