from __future__ import annotations
from typing import Dict


def clamp(value: float, lo: float, hi: float) -> float:
	return max(lo, min(hi, value))


def clamp01(value: float) -> float:
	return clamp(value, 0.0, 1.0)


def lerp(a: float, b: float, t: float) -> float:
	t = clamp01(t)
	return a + (b - a) * t


def normalize(values: Dict[str, float], total: float = 1.0) -> Dict[str, float]:
	"""Scale a mapping so its values sum to ``total``. Empty or all-zero input returns {}."""
	s = sum(values.values())
	if s <= 0:
		return {}
	return {k: v / s * total for k, v in values.items()}
