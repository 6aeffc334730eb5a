from __future__ import annotations
import math
from typing import Any, List, Optional, Sequence, Tuple, TypeVar
import numpy as np

T = TypeVar("T")

Table = Sequence[Tuple[float, Any]]

DISTRIBUTION_MAX = 10000


def _entropy(value: int) -> int:
	# SeedSequence only accepts non-negative words
	return int(value) & 0xFFFFFFFF


def threshold_lookup(table: Table, key: float) -> Any:
	"""Return the value of the first threshold >= key, falling back to the last entry."""
	if not table:
		raise ValueError("threshold table is empty")
	for threshold, value in table:
		if key <= threshold:
			return value
	return table[-1][1]


class Roll:
	"""Seeded sampling service owned by one generation task."""

	def __init__(self, rng: np.random.Generator, key: Sequence[int] = ()):
		self.rng = rng
		self.key = tuple(key)

	@classmethod
	def for_task(cls, seed: int, *task: int) -> "Roll":
		key = (_entropy(seed),) + tuple(_entropy(t) for t in task)
		return cls(np.random.default_rng(np.random.SeedSequence(list(key))), key)

	def spawn(self, *task: int) -> "Roll":
		key = self.key + tuple(_entropy(t) for t in task)
		return Roll(np.random.default_rng(np.random.SeedSequence(list(key))), key)

	# -- scalar draws

	def random(self) -> float:
		return float(self.rng.random())

	def find_range(self, lo: float, hi: float) -> float:
		if hi <= lo:
			return float(lo)
		return float(self.rng.uniform(lo, hi))

	def dice(self, number: int = 3, sides: int = 6, modifier: int = 0,
			low: Optional[int] = None, high: Optional[int] = None) -> int:
		if number <= 0 or sides <= 0:
			return 0
		total = int(self.rng.integers(1, sides + 1, size=number).sum()) + modifier
		if low is not None:
			total = max(low, total)
		if high is not None:
			total = min(high, total)
		return total

	def distribution(self) -> int:
		return int(self.rng.integers(1, DISTRIBUTION_MAX + 1))

	def vary(self, amount: float, factor: float = 0.05) -> float:
		return amount * self.find_range(1.0 - factor, 1.0 + factor)

	def gaussian(self, mean: float = 0.0, std: float = 1.0) -> float:
		# Box-Muller on (0, 1] so log() never sees zero
		u1 = 1.0 - self.random()
		u2 = 1.0 - self.random()
		z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
		return mean + std * z

	def chance(self, p: float) -> bool:
		return self.random() < p

	def conditional_probability(self, base: float, modifier: float = 0.0) -> bool:
		base = min(1.0, max(0.0, base))
		modifier = min(1.0, max(-1.0, modifier))
		if modifier > 0:
			adjusted = base + modifier * (1.0 - base)
		else:
			adjusted = base + modifier * base
		return self.random() < adjusted

	# -- discrete picks

	def pick(self, options: Sequence[T]) -> T:
		if not options:
			raise ValueError("cannot pick from an empty sequence")
		return options[int(self.rng.integers(0, len(options)))]

	def choice(self, options: Sequence[T], weights: Sequence[float]) -> T:
		if len(options) != len(weights):
			raise ValueError(f"{len(options)} options but {len(weights)} weights")
		if not options:
			raise ValueError("cannot choose from an empty sequence")
		total = float(sum(weights))
		r = self.find_range(0.0, total)
		cumulative = 0.0
		for option, weight in zip(options, weights):
			cumulative += weight
			if r <= cumulative:
				return option
		return options[-1]

	def seek(self, table: Table, value: Optional[float] = None) -> Any:
		"""Threshold lookup keyed on the 1..10000 distribution space."""
		key = self.distribution() if value is None else value
		return threshold_lookup(table, key)

	def search(self, table: Table, value: Optional[float] = None) -> Any:
		"""Threshold lookup keyed on a 3d6 roll."""
		key = self.dice() if value is None else value
		return threshold_lookup(table, key)

	def seek_percent(self, table: Table) -> Any:
		"""Threshold lookup for tables laid out on a 0..100 scale."""
		return threshold_lookup(table, self.find_range(0.0, 100.0))

	def sample(self, options: Sequence[T], k: int) -> List[T]:
		k = max(0, min(k, len(options)))
		idx = self.rng.choice(len(options), size=k, replace=False)
		return [options[int(i)] for i in idx]

	def uid(self, prefix: str) -> str:
		return f"{prefix}-{int(self.rng.integers(0, 2**32)):08x}"
