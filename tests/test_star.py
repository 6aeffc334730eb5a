from astrogen.sampling.roll import Roll
from astrogen.tables.loaders import load_tables
from astrogen.registry import EntityRegistry
from astrogen.gen.star import generate_star
from astrogen.model.enums import StellarStage


def test_forced_g2v():
	tables = load_tables()
	for i in range(50):
		star = generate_star(Roll.for_task(5, i), tables, spectral_type="G", subclass="2", stage=StellarStage.V)
		assert 0.8 < star.mass < 1.04
		assert 5200 <= star.temperature <= 6000
		assert star.spectral_class == "G2"
		assert star.stage is StellarStage.V
		# subclass 2 sits toward the hot, massive end
		assert star.mass > 0.92


def test_subclass_orders_mass():
	tables = load_tables()
	g2 = generate_star(Roll.for_task(6), tables, spectral_type="G", subclass="2", stage=StellarStage.V)
	g8 = generate_star(Roll.for_task(6), tables, spectral_type="G", subclass="8", stage=StellarStage.V)
	assert g2.mass > g8.mass


def test_derived_distances():
	star = generate_star(Roll.for_task(7), load_tables(), spectral_type="G", subclass="2", stage=StellarStage.V)
	assert 0 < star.habitable_zone_inner < star.habitable_zone_outer < star.frost_line
	assert star.roche_limit > 0
	assert star.hill_sphere > 0


def test_registered_when_registry_given():
	registry = EntityRegistry()
	star = generate_star(Roll.for_task(8), load_tables(), registry, star_id="S-1", system_id="SYS")
	assert registry.get_star("S-1") is star
	assert star.parent_system_id == "SYS"


def test_every_distribution_produces_valid_stars():
	tables = load_tables()
	roll = Roll.for_task(9)
	for distribution in ("hot", "realistic", "cool"):
		for _ in range(300):
			star = generate_star(roll, tables, distribution=distribution)
			assert star.spectral_type in tables.stars.spectral_ranges
			assert star.mass > 0
			assert 0.01 <= star.age <= 13.8


def test_white_dwarf_class():
	star = generate_star(Roll.for_task(10), load_tables(), spectral_type="I")
	assert star.spectral_class.startswith("D")
	assert star.stage is StellarStage.VII
