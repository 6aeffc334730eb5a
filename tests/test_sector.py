import json
import math
import pytest
from astrogen.config import GenerationConfig
from astrogen.sampling.roll import Roll
from astrogen.tables.loaders import load_tables
from astrogen.registry import EntityRegistry
from astrogen.model.entities import Sector, StarSystem
from astrogen.model.enums import ComponentKind, StellarStage
from astrogen.gen.body import GenerationContext
from astrogen.gen.star import generate_star
from astrogen.gen.system import organize_star_hierarchy, system_summary
from astrogen.gen.sector import SectorGenerator, generate_sectors, sector_id
from astrogen.persist.flatten import from_record, to_record


def small_config(**overrides):
	values = dict(sector_size_x=1, sector_size_y=1, sector_size_z=1, parsecs_per_sector=3,
		star_density=0.5, random_seed=2024, galaxy_type=0)
	values.update(overrides)
	return GenerationConfig(**values)


@pytest.fixture(scope="module")
def sectors():
	return generate_sectors([(0, 0, 0), (1, 0, 0), (0, 1, 0)], small_config(), progress=False)


def test_sector_is_deterministic():
	a = SectorGenerator(small_config()).generate_sector((0, 0, 0))
	b = SectorGenerator(small_config()).generate_sector((0, 0, 0))
	assert json.dumps(to_record(a), sort_keys=True) == json.dumps(to_record(b), sort_keys=True)


def test_different_seeds_differ():
	a = SectorGenerator(small_config()).generate_sector((0, 0, 0))
	b = SectorGenerator(small_config(random_seed=7)).generate_sector((0, 0, 0))
	assert to_record(a) != to_record(b)


def test_full_density_fills_every_cell():
	sector = SectorGenerator(small_config(parsecs_per_sector=2, star_density=1.0)).generate_sector((0, 0, 0))
	assert len(sector.systems) == 8
	assert sector.anomaly_count == 0
	assert len({s.id for s in sector.systems}) == 8
	assert all(s.id.startswith(sector.id) for s in sector.systems)


def test_sector_id_format():
	assert sector_id((1.0, 0.0, 0.0)) == "SEC_0.0/0.0/1"
	assert sector_id((0.0, -2.0, 0.0)) == "SEC_270.0/0.0/2"
	assert sector_id((1.0, 0.0, 0.0), (3, -1, 0)) == "SEC_0.0/0.0/1_3_-1_0"


def test_neighbouring_sectors_do_not_share_ids():
	registry = EntityRegistry()
	cfg = small_config(parsecs_per_sector=2, star_density=1.0)
	pair = generate_sectors([(0, 0, 0), (0, 1, 0)], cfg, registry=registry, progress=False)
	assert pair[0].id != pair[1].id
	systems = [s for sector in pair for s in sector.systems]
	assert len(systems) == 16
	assert len({s.id for s in systems}) == 16
	assert registry.counts()["systems"] == 16
	assert registry.counts()["stars"] == sum(len(s.stars) for s in systems)
	for system in systems:
		assert registry.get_system(system.id) is system
		for star in system.stars:
			assert registry.get_star(star.id) is star


def test_system_ids_unique_on_large_grids(monkeypatch):
	monkeypatch.setattr("astrogen.gen.sector.generate_system", lambda ctx, system, distribution="realistic": system)
	sector = SectorGenerator(small_config(parsecs_per_sector=11, star_density=1.0)).generate_sector((0, 0, 0))
	ids = [s.id for s in sector.systems]
	assert len(ids) == 11 ** 3
	assert len(set(ids)) == len(ids)
	assert len(sector.distance_map) == len(ids)
	# (10, 1, 0) and (1, 0, 10) share the digits 1010
	assert f"{sector.id}-10.1.0" in ids and f"{sector.id}-1.0.10" in ids


def test_distance_map(sectors):
	sector = next(s for s in sectors if len(s.systems) >= 2)
	a, b = sector.systems[0], sector.systems[1]
	assert math.isclose(sector.system_distance(a.id, b.id), sector.system_distance(b.id, a.id))
	assert math.isclose(sector.system_distance(a.id, b.id), math.dist(a.position, b.position))
	assert sector.system_distance(a.id, "nowhere") == -1.0
	assert sector.find_system(b.id) is b


def test_referential_integrity(sectors):
	for sector in sectors:
		for system in sector.systems:
			star_ids = {s.id for s in system.stars}
			planet_ids = {p.id for p in system.all_planets()}
			assert len(planet_ids) == sum(1 for _ in system.all_planets())
			for star in system.stars:
				assert star.parent_system_id == system.id
			for planet in system.all_planets():
				assert planet.parent_star_id in star_ids
				assert planet.parent_system_id == system.id
				if planet.parent_pair_id is not None:
					assert system.find_pair(planet.parent_pair_id) is not None
				for moon in planet.moons:
					assert moon.parent_planet_id == planet.id
					assert moon.parent_planet_id in planet_ids
				if planet.rings is not None:
					gaps = planet.rings.gaps
					assert all(g.inner_radius < g.outer_radius for g in gaps)
					assert all(x.outer_radius <= y.inner_radius for x, y in zip(gaps, gaps[1:]))
			for belt in system.all_belts():
				assert belt.parent_star_id in star_ids


def test_bounded_fields_and_compositions(sectors):
	bodies = [b for s in sectors for sys in s.systems for p in sys.all_planets() for b in [p, *p.moons]]
	assert bodies
	for body in bodies:
		for value in (body.habitability_index, body.tectonic_activity, body.volcanic_activity,
				body.water_coverage, body.magnetic_field, body.terraforming_index):
			assert 0.0 <= value <= 1.0
		if body.atmospheric_composition:
			assert math.isclose(sum(body.atmospheric_composition.values()), 100.0, rel_tol=1e-9)
		if body.biosphere is not None:
			assert 0.0 <= body.biosphere.biodiversity <= 1.0
		rings = getattr(body, "rings", None)
		if rings is not None:
			assert math.isclose(sum(rings.composition.values()), 1.0, rel_tol=1e-9)
			assert 0.0 <= rings.opacity <= 1.0
	for sector in sectors:
		for system in sector.systems:
			for belt in system.all_belts():
				assert math.isclose(sum(belt.composition.values()), 1.0, rel_tol=1e-9)


def test_terraformability_consistency(sectors):
	for sector in sectors:
		for system in sector.systems:
			for planet in system.all_planets():
				for body in [planet, *planet.moons]:
					expected = body.terraforming_index > 0.3 and len(body.terraforming_challenges) < 3
					assert body.is_terraformable == expected


def test_moon_orbits_increase(sectors):
	for sector in sectors:
		for system in sector.systems:
			for planet in system.all_planets():
				distances = [m.orbital_distance for m in planet.moons]
				assert distances == sorted(distances)
				assert len(set(distances)) == len(distances)


def test_flatten_round_trip(sectors):
	sector = max(sectors, key=lambda s: len(s.systems))
	record = json.loads(json.dumps(to_record(sector)))
	rebuilt = from_record(Sector, record)
	assert rebuilt == sector
	assert isinstance(rebuilt.systems[0], StarSystem)


def test_registry_sees_every_body():
	registry = EntityRegistry()
	sector = SectorGenerator(small_config(), registry=registry).generate_sector((0, 0, 0))
	counts = registry.counts()
	assert counts["systems"] == len(sector.systems)
	assert counts["stars"] == sum(len(s.stars) for s in sector.systems)
	assert counts["planets"] == sum(system_summary(s)["planets"] for s in sector.systems)
	assert counts["moons"] == sum(system_summary(s)["moons"] for s in sector.systems)


def test_triple_star_hierarchy():
	tables = load_tables()
	roll = Roll.for_task(31)
	system = StarSystem(id="SYS")
	for n, (kind, sub) in enumerate((("K", "2"), ("G", "2"), ("M", "5")), 1):
		system.stars.append(generate_star(roll, tables, spectral_type=kind, subclass=sub,
			stage=StellarStage.V, star_id=f"SYS-S{n}", system_id="SYS"))
	root = organize_star_hierarchy(roll, system)
	assert root == "SYS-BP1"
	outer = system.find_pair(root)
	assert outer.primary_id == "SYS-S2"
	assert outer.primary_kind is ComponentKind.Star
	assert outer.secondary_kind is ComponentKind.BinaryPair
	inner = system.find_pair(outer.secondary_id)
	assert {inner.primary_id, inner.secondary_id} == {"SYS-S1", "SYS-S3"}
	for pair in system.binary_pairs:
		assert pair.separation > 0
		assert 0 < pair.mass_ratio <= 1.0
		assert math.isclose(pair.primary_orbit_radius + pair.secondary_orbit_radius, pair.separation)


def test_single_star_has_no_hierarchy():
	system = StarSystem(id="SYS")
	system.stars.append(generate_star(Roll.for_task(1), load_tables(), star_id="SYS-S1"))
	assert organize_star_hierarchy(Roll.for_task(1), system) is None
	assert system.binary_pairs == []
