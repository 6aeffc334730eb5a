from __future__ import annotations
import math
from itertools import product
from typing import Iterable, List, Optional, Sequence, Tuple
from tqdm import tqdm
from ..config import GenerationConfig, resolve_seed
from ..sampling.roll import Roll
from ..tables.schema import DomainTables
from ..tables.loaders import load_tables
from ..registry import EntityRegistry
from ..model.entities import Sector, StarSystem
from ..physics.constants import LIGHT_YEARS_PER_PARSEC
from .body import GenerationContext
from .system import generate_system
from ..logger_setup import get_logger

log = get_logger(__name__)

# our sector origin relative to the galactic centre, parsecs
GALACTIC_OFFSET = (8015, 25, -5)
POSITION_JITTER_PC = 0.5

Coords = Tuple[int, int, int]


def apply_galaxy_structure(sector_coords: Sequence[int], cell: Sequence[int], base_density: float,
		galaxy_type: int, size: Sequence[int], parsecs_per_sector: int) -> float:
	"""Star density at a grid cell for the configured galaxy shape."""
	if galaxy_type == 0:
		return base_density
	x, y, z = (sector_coords[i] * parsecs_per_sector + cell[i] for i in range(3))
	distance_xy = math.hypot(x, y)
	distance = math.sqrt(x * x + y * y + z * z)
	max_distance = math.sqrt(sum((s * parsecs_per_sector // 2) ** 2 for s in size))
	normalized = distance / max_distance if max_distance > 0 else 0.0

	if galaxy_type == 1:
		arm = math.sin(math.atan2(y, x) * 4.0 + distance_xy * 0.1)
		spiral = 1.0 + 0.5 * max(0.0, arm) - 0.5 * normalized
		height = 1.0 - 0.8 * abs(z) / (size[2] * parsecs_per_sector / 4.0)
		return base_density * max(0.1, spiral * height)
	if galaxy_type == 2:
		return base_density * max(0.1, 1.0 - 0.9 * normalized)
	if galaxy_type == 3:
		pocket = math.sin(x * 0.1) * math.cos(y * 0.11) * math.sin(z * 0.13)
		return base_density * max(0.1, 1.0 + 0.8 * pocket - 0.6 * normalized)
	return base_density


def galactic_coordinates(coords: Coords, parsecs_per_sector: int) -> Tuple[Coords, Tuple[float, float, float]]:
	"""(offset sector coordinates, sector centre in parsecs from the galactic centre)."""
	ox, oy, oz = GALACTIC_OFFSET
	relative = (coords[0] + ox, coords[1] + oy, coords[2] - oz)
	half = parsecs_per_sector / 2.0
	center = (
		relative[0] * parsecs_per_sector + half,
		relative[1] * parsecs_per_sector + half,
		relative[2] * parsecs_per_sector + half,
	)
	return relative, center


def sector_id(center: Sequence[float], coords: Optional[Sequence[int]] = None) -> str:
	x, y, z = center
	distance = math.sqrt(x * x + y * y + z * z)
	theta = math.degrees(math.atan2(y, x))
	if theta < 0:
		theta += 360.0
	phi = math.degrees(math.atan2(z, math.hypot(x, y)))
	label = f"SEC_{theta:.1f}/{phi:.1f}/{distance:.0f}"
	if coords is None:
		return label
	# far from the core neighbouring sectors share the angular label
	return label + "_{}_{}_{}".format(*coords)


class SectorGenerator:
	"""Walks a sector's parsec grid and generates a system in each occupied cell."""

	def __init__(self, config: GenerationConfig, tables: Optional[DomainTables] = None,
			registry: Optional[EntityRegistry] = None):
		self.config = config
		self.seed = resolve_seed(config.random_seed)
		self.tables = tables if tables is not None else load_tables()
		self.registry = registry if registry is not None else EntityRegistry()

	def system_context(self, coords: Coords, cell_index: int) -> GenerationContext:
		return GenerationContext(
			roll=Roll.for_task(self.seed, *coords, cell_index),
			tables=self.tables,
			registry=self.registry,
		)

	def generate_sector(self, coords: Iterable[int]) -> Sector:
		cfg = self.config
		coords = tuple(int(c) for c in coords)
		pps = cfg.parsecs_per_sector
		size = (cfg.sector_size_x, cfg.sector_size_y, cfg.sector_size_z)
		relative, center = galactic_coordinates(coords, pps)
		sector = Sector(id=sector_id(center, coords), coordinates=list(coords), center=list(center))
		walk = Roll.for_task(self.seed, *coords)

		for index, cell in enumerate(product(range(pps), repeat=3)):
			density = apply_galaxy_structure(relative, cell, cfg.star_density, cfg.galaxy_type, size, pps)
			if walk.random() < density:
				sector.systems.append(self._generate_system(sector, coords, cell, index))
			elif walk.random() < cfg.anomaly_chance:
				# anomalies are counted but not generated
				sector.anomaly_count += 1

		sector.calculate_distance_map()
		log.info("sector %s: %d systems, %d anomalies", sector.id, len(sector.systems), sector.anomaly_count)
		return sector

	def _generate_system(self, sector: Sector, coords: Coords, cell: Coords, index: int) -> StarSystem:
		ctx = self.system_context(coords, index)
		pps = self.config.parsecs_per_sector
		position = [
			(coords[i] * pps + cell[i] + ctx.roll.find_range(-POSITION_JITTER_PC, POSITION_JITTER_PC))
			* LIGHT_YEARS_PER_PARSEC
			for i in range(3)
		]
		system = StarSystem(
			id=f"{sector.id}-{cell[0]}.{cell[1]}.{cell[2]}",
			sector_id=sector.id,
			position=position,
		)
		return generate_system(ctx, system, self.config.spectral_table)


def generate_sectors(coords_list: Sequence[Iterable[int]], config: GenerationConfig,
		tables: Optional[DomainTables] = None, registry: Optional[EntityRegistry] = None,
		progress: bool = True) -> List[Sector]:
	generator = SectorGenerator(config, tables, registry)
	sectors: List[Sector] = []
	for coords in tqdm(coords_list, desc="Sectors", disable=not progress):
		sectors.append(generator.generate_sector(coords))
	return sectors
