import pytest
from astrogen.registry import EntityRegistry
from astrogen.model.entities import AsteroidBelt, Moon, Planet, Star, StarSystem


def test_reregistration_replaces():
	registry = EntityRegistry()
	first = Planet(id="P-1", mass=1.0)
	second = Planet(id="P-1", mass=2.0)
	registry.register_planet(first)
	registry.register_planet(second)
	assert registry.counts()["planets"] == 1
	assert registry.get_planet("P-1") is second


def test_separate_tables_and_clear():
	registry = EntityRegistry()
	registry.register_star(Star(id="S-1"))
	registry.register_moon(Moon(id="M-1"))
	assert registry.get_star("S-1") is not None
	assert registry.get_moon("S-1") is None
	assert registry.get_planet("missing") is None
	registry.clear()
	assert sum(registry.counts().values()) == 0


def test_id_required():
	with pytest.raises(ValueError):
		EntityRegistry().register_planet(Planet())


def test_listing():
	registry = EntityRegistry()
	registry.register_star(Star(id="S-1"))
	registry.register_system(StarSystem(id="SYS", stars=[Star(id="S-1")]))
	registry.register_belt(AsteroidBelt(id="B-1"))
	assert [s.id for s in registry.all_stars()] == ["S-1"]
	assert [s.id for s in registry.all_systems()] == ["SYS"]
	assert registry.get_system("SYS").find_star("S-1") is not None
	assert registry.get_belt("B-1") is registry.all_belts()[0]
	assert registry.all_planets() == [] and registry.all_moons() == []
