from __future__ import annotations
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Optional
from .schema import DomainTables
from ..model.enums import PlanetType, BiomeType, ChemistryType, ZoneType, LifeForm, AsteroidComposition
from ..logger_setup import get_logger

log = get_logger(__name__)

DATA_DIR = Path(__file__).parent / "data"
TABLE_FILES = ("stars", "planets", "moons", "rings", "asteroids", "biology", "systems")


def load_json(path: str | Path) -> Dict[str, Any]:
	p = Path(path)
	with p.open("r", encoding="utf-8") as f:
		return json.load(f)


def _require(label: str, present: Iterable[Any], expected: Iterable[Any]) -> None:
	missing = [getattr(e, "value", e) for e in expected if e not in set(present)]
	if missing:
		raise KeyError(f"{label} table is missing entries for: {', '.join(map(str, missing))}")


def check_completeness(tables: DomainTables) -> None:
	"""Every enum member a generator can look up must have a table entry."""
	_require("planet type", tables.planets.types, PlanetType)
	_require("moon formation", tables.moons.formation, PlanetType)
	_require("ring", set(tables.rings.types) | set(tables.rings.no_rings), PlanetType)
	_require("atmosphere template", tables.planets.atmosphere_templates, ChemistryType)
	_require("biome biodiversity", tables.biology.biodiversity_modifiers, BiomeType)
	_require("life form", tables.biology.life_forms, LifeForm)
	_require("asteroid composition", tables.asteroids.compositions, AsteroidComposition)
	_require("zone composition", tables.asteroids.zone_compositions, ZoneType)
	stars = tables.stars
	letters = {letter for dist in stars.spectral_distributions.values() for _, letter in dist}
	_require("spectral range", stars.spectral_ranges, sorted(letters))
	_require("luminosity distribution", stars.luminosity_distributions, sorted(letters))


@lru_cache(maxsize=None)
def load_tables(data_dir: Optional[Path] = None) -> DomainTables:
	base = Path(data_dir) if data_dir else DATA_DIR
	raw = {name: load_json(base / f"{name}.json") for name in TABLE_FILES}
	tables = DomainTables(**raw)
	check_completeness(tables)
	log.debug("loaded domain tables from %s", base)
	return tables
