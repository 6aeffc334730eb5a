import math
from astrogen.sampling.roll import Roll
from astrogen.tables.loaders import load_tables
from astrogen.model.enums import ZoneType
from astrogen.gen.asteroid_belt import belt_mass, generate_asteroid_belt, is_navigation_hazard


def test_navigation_hazard_threshold():
	asteroids = load_tables().asteroids
	assert is_navigation_hazard(asteroids, 1500.0)
	assert not is_navigation_hazard(asteroids, 500.0)


def test_belt_mass_scales_with_count():
	one = belt_mass(1000.0, 1.0, 1.0, 2.0)
	assert one > 0
	assert math.isclose(belt_mass(2000.0, 1.0, 1.0, 2.0), 2.0 * one)
	assert belt_mass(0.0, 1.0, 1.0, 2.0) == 0.0


def test_generated_belt():
	asteroids = load_tables().asteroids
	for seed, zone in enumerate(ZoneType):
		belt = generate_asteroid_belt(Roll.for_task(seed), asteroids, "SYS-S1-ABelt-1", 2.2, 3.3, zone,
			parent_star_id="SYS-S1", system_id="SYS")
		assert belt.inner_radius < belt.outer_radius
		assert belt.total_mass > 0
		assert math.isclose(sum(belt.composition.values()), 1.0, rel_tol=1e-9)
		assert belt.navigation_hazard == (belt.average_density > 1000.0)
		assert len(belt.notable_objects) <= 18
		assert belt.has_dwarf_planets == bool(belt.notable_objects)
		radii = [o.radius for o in belt.notable_objects]
		assert radii == sorted(radii, reverse=True)
		for n, obj in enumerate(belt.notable_objects, 1):
			assert obj.id == f"SYS-S1-ABelt-1-NO{n}"
			assert belt.inner_radius <= obj.orbital_distance <= belt.outer_radius
			if obj.composition:
				assert math.isclose(sum(obj.composition.values()), 1.0, rel_tol=1e-9)
