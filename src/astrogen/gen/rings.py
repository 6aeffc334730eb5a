from __future__ import annotations
from typing import Dict, List, Optional
from ..sampling.roll import Roll
from ..tables.schema import RingTables, RingTypeData
from ..model.entities import Planet, RingGap, RingSystem
from ..model.enums import RingComplexity
from ..util import clamp, normalize

GAP_ATTEMPTS = 10
OUTER_MULTIPLIER_VARIATION = 0.15
MASS_DEFAULT_VARIATION = 0.9
DEFAULT_COMPOSITION_VARIATION = 0.2


def ring_chance(tables: RingTables, planet: Planet) -> float:
	if planet.planet_type in tables.no_rings:
		return 0.0
	data = tables.types.get(planet.planet_type)
	return data.complexity_probability if data is not None else tables.constants.base_ring_chance


def determine_complexity(roll: Roll, tables: RingTables, data: Optional[RingTypeData]) -> RingComplexity:
	if data is None:
		return RingComplexity.Simple
	tiers = list(tables.complexity_weights)
	return roll.choice(tiers, [tables.complexity_weights[t] for t in tiers])


def ring_mass(roll: Roll, tables: RingTables, planet_mass: float, data: Optional[RingTypeData]) -> float:
	if data is None:
		lo, hi = tables.constants.default_mass_ratio
		return planet_mass * roll.vary((lo + hi) / 2.0, MASS_DEFAULT_VARIATION)
	lo, hi = data.mass_ratio
	average = (lo + hi) / 2.0
	return planet_mass * roll.vary(average, (hi - lo) / average / 2.0)


def ring_extent(roll: Roll, tables: RingTables, complexity: RingComplexity, planet_radius: float):
	"""(inner, outer) in Earth radii; the inner edge sits at the Roche limit."""
	inner = tables.constants.roche_multiplier * planet_radius
	lo, hi = tables.outer_multipliers.get(complexity, (1.5, 1.5))
	multiplier = clamp(roll.vary((lo + hi) / 2.0, OUTER_MULTIPLIER_VARIATION), lo, hi)
	return inner, inner * multiplier


def _overlaps(candidate: RingGap, accepted: List[RingGap]) -> bool:
	return any(
		candidate.inner_radius < gap.outer_radius and gap.inner_radius < candidate.outer_radius
		for gap in accepted
	)


def generate_gaps(roll: Roll, tables: RingTables, inner: float, outer: float) -> List[RingGap]:
	"""Non-overlapping gaps sorted by inner radius. A gap that keeps colliding is dropped."""
	c = tables.constants
	count = c.min_gaps + int(roll.vary((c.max_gaps - c.min_gaps) / 2.0, 0.5))
	count = int(clamp(count, c.min_gaps, c.max_gaps))
	width = outer - inner
	gaps: List[RingGap] = []
	for _ in range(count):
		for _attempt in range(GAP_ATTEMPTS):
			start = inner + width * roll.find_range(0.1, 0.9)
			factor = clamp(roll.vary((c.min_gap_width + c.max_gap_width) / 2.0, 0.3), c.min_gap_width, c.max_gap_width)
			candidate = RingGap(inner_radius=start, outer_radius=start + width * factor)
			if not _overlaps(candidate, gaps):
				gaps.append(candidate)
				break
	gaps.sort(key=lambda g: g.inner_radius)
	for n, gap in enumerate(gaps, 1):
		gap.name = f"Gap {n}"
	return gaps


def ring_composition(roll: Roll, tables: RingTables, data: Optional[RingTypeData]) -> Dict[str, float]:
	if data is None:
		raw = {
			material: roll.vary(share, DEFAULT_COMPOSITION_VARIATION)
			for material, share in tables.default_composition.items()
		}
		return normalize(raw)
	raw = {}
	for material, (lo, hi) in data.composition.items():
		average = (lo + hi) / 2.0
		raw[material] = roll.vary(average, (hi - lo) / 2.0 / average) if average > 0 else 0.0
	return normalize(raw)


def generate_rings(roll: Roll, tables: RingTables, planet: Planet) -> Optional[RingSystem]:
	"""Ring system for ``planet``, or None when the presence roll fails."""
	if not roll.conditional_probability(ring_chance(tables, planet)):
		return None
	data = tables.types.get(planet.planet_type)
	complexity = determine_complexity(roll, tables, data)
	inner, outer = ring_extent(roll, tables, complexity, planet.radius)
	rings = RingSystem(
		complexity=complexity,
		inner_radius=inner,
		outer_radius=outer,
		total_mass=ring_mass(roll, tables, planet.mass, data),
	)
	if complexity is RingComplexity.Complex:
		rings.gaps = generate_gaps(roll, tables, inner, outer)
	rings.composition = ring_composition(roll, tables, data)
	if data is not None:
		rings.opacity = roll.find_range(*data.opacity)
	else:
		rings.opacity = roll.find_range(*tables.constants.default_opacity)
	return rings
