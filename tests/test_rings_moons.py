import math
from astrogen.sampling.roll import Roll
from astrogen.tables.loaders import load_tables
from astrogen.model.entities import Planet
from astrogen.model.enums import PlanetType, RingComplexity, ZoneType
from astrogen.gen.rings import generate_gaps, generate_rings
from astrogen.gen.moon_system import determine_moon_orbits, moon_roche_limit, potential_moon_system_mass


def test_ring_gaps_sorted_and_disjoint():
	rings = load_tables().rings
	for seed in range(200):
		gaps = generate_gaps(Roll.for_task(seed), rings, 26.8, 60.0)
		assert len(gaps) <= rings.constants.max_gaps
		for n, gap in enumerate(gaps, 1):
			assert gap.name == f"Gap {n}"
			assert 26.8 <= gap.inner_radius < gap.outer_radius <= 60.0
		for a, b in zip(gaps, gaps[1:]):
			assert a.outer_radius <= b.inner_radius


def test_ring_system_shape():
	rings = load_tables().rings
	planet = Planet(id="P", planet_type=PlanetType.Cronusian, mass=95.0, radius=9.0)
	made = 0
	for seed in range(300):
		system = generate_rings(Roll.for_task(seed), rings, planet)
		if system is None:
			continue
		made += 1
		assert math.isclose(system.inner_radius, 2.44 * 9.0)
		assert system.inner_radius < system.outer_radius
		assert math.isclose(sum(system.composition.values()), 1.0, rel_tol=1e-9)
		assert 0.4 <= system.opacity <= 0.9
		assert system.total_mass > 0
		if system.complexity is not RingComplexity.Complex:
			assert system.gaps == []
	assert made > 0


def test_asterian_never_has_rings():
	rings = load_tables().rings
	planet = Planet(id="P", planet_type=PlanetType.Asterian, mass=0.001, radius=0.1)
	assert all(generate_rings(Roll.for_task(seed), rings, planet) is None for seed in range(100))


def test_moon_orbits_increase_beyond_roche():
	tables = load_tables()
	formation = tables.moon_formation(PlanetType.Hyperion)
	min_mass = tables.moons.minimum_moon_mass(ZoneType.FarOuter)
	produced = 0
	for seed in range(100):
		roll = Roll.for_task(seed)
		slots = determine_moon_orbits(roll, tables.moons, formation, 3.0, 318.0, 11.0, 5.2, 1.0, ZoneType.FarOuter)
		produced += len(slots)
		assert len(slots) <= formation.max_moons
		for slot in slots:
			assert slot.orbital_distance > moon_roche_limit(318.0, min_mass)
			assert 0.001 <= slot.eccentricity <= 0.1
			assert slot.mass >= min_mass
		for inner, outer in zip(slots, slots[1:]):
			assert outer.orbital_distance > inner.orbital_distance
	assert produced > 0


def test_moon_mass_budget_bounds():
	moons = load_tables().moons
	for seed in range(100):
		mass = potential_moon_system_mass(Roll.for_task(seed), moons, 318.0, ZoneType.FarOuter)
		assert mass == 0.0 or mass <= 318.0 * 0.1
