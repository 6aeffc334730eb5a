from __future__ import annotations
import threading
from typing import Dict, List, Optional
from .model.entities import Star, StarSystem, Planet, Moon, AsteroidBelt
from .logger_setup import get_logger

log = get_logger(__name__)


class EntityRegistry:
	"""ID -> entity lookup shared by the generators of one task.

	Registration replaces any entry with the same ID, so registering a body
	after its basic phase and again after finalisation never duplicates it.
	"""

	def __init__(self) -> None:
		self._lock = threading.RLock()
		self._stars: Dict[str, Star] = {}
		self._systems: Dict[str, StarSystem] = {}
		self._planets: Dict[str, Planet] = {}
		self._moons: Dict[str, Moon] = {}
		self._belts: Dict[str, AsteroidBelt] = {}

	def _put(self, table: Dict[str, object], entity_id: str, entity: object) -> None:
		if not entity_id:
			raise ValueError(f"cannot register {type(entity).__name__} without an id")
		with self._lock:
			table[entity_id] = entity

	def register_star(self, star: Star) -> None:
		self._put(self._stars, star.id, star)

	def register_system(self, system: StarSystem) -> None:
		self._put(self._systems, system.id, system)

	def register_planet(self, planet: Planet) -> None:
		self._put(self._planets, planet.id, planet)

	def register_moon(self, moon: Moon) -> None:
		self._put(self._moons, moon.id, moon)

	def register_belt(self, belt: AsteroidBelt) -> None:
		self._put(self._belts, belt.id, belt)

	def get_star(self, star_id: str) -> Optional[Star]:
		with self._lock:
			return self._stars.get(star_id)

	def get_system(self, system_id: str) -> Optional[StarSystem]:
		with self._lock:
			return self._systems.get(system_id)

	def get_planet(self, planet_id: str) -> Optional[Planet]:
		with self._lock:
			return self._planets.get(planet_id)

	def get_moon(self, moon_id: str) -> Optional[Moon]:
		with self._lock:
			return self._moons.get(moon_id)

	def get_belt(self, belt_id: str) -> Optional[AsteroidBelt]:
		with self._lock:
			return self._belts.get(belt_id)

	def all_stars(self) -> List[Star]:
		with self._lock:
			return list(self._stars.values())

	def all_systems(self) -> List[StarSystem]:
		with self._lock:
			return list(self._systems.values())

	def all_belts(self) -> List[AsteroidBelt]:
		with self._lock:
			return list(self._belts.values())

	def all_planets(self) -> List[Planet]:
		with self._lock:
			return list(self._planets.values())

	def all_moons(self) -> List[Moon]:
		with self._lock:
			return list(self._moons.values())

	def counts(self) -> Dict[str, int]:
		with self._lock:
			return {
				"stars": len(self._stars),
				"systems": len(self._systems),
				"planets": len(self._planets),
				"moons": len(self._moons),
				"belts": len(self._belts),
			}

	def clear(self) -> None:
		with self._lock:
			for table in (self._stars, self._systems, self._planets, self._moons, self._belts):
				table.clear()
		log.debug("registry cleared")
