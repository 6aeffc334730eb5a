from __future__ import annotations
import yaml
import secrets
from pathlib import Path
from typing import Any, Dict
from pydantic import BaseModel, Field, field_validator
from .logger_setup import get_logger

log = get_logger(__name__)

GALAXY_TYPES = {0: "uniform", 1: "spiral", 2: "elliptical", 3: "irregular"}
SPECTRAL_DISTRIBUTIONS = {0: "hot", 1: "realistic", 2: "cool"}


class GenerationConfig(BaseModel):
	sector_size_x: int = Field(5, ge=1)
	sector_size_y: int = Field(5, ge=1)
	sector_size_z: int = Field(5, ge=1)
	parsecs_per_sector: int = Field(10, ge=1)
	star_density: float = Field(0.12, ge=0.0, le=1.0)
	anomaly_chance: float = Field(0.001, ge=0.0, le=1.0)
	random_seed: int = Field(0, ge=0)
	galaxy_type: int = 1
	spectral_distribution: int = 1

	model_config = {"extra": "ignore"}

	@field_validator("galaxy_type")
	@classmethod
	def _known_galaxy(cls, v: int) -> int:
		if v not in GALAXY_TYPES:
			raise ValueError(f"galaxy_type must be one of {sorted(GALAXY_TYPES)}")
		return v

	@field_validator("spectral_distribution")
	@classmethod
	def _known_distribution(cls, v: int) -> int:
		if v not in SPECTRAL_DISTRIBUTIONS:
			raise ValueError(f"spectral_distribution must be one of {sorted(SPECTRAL_DISTRIBUTIONS)}")
		return v

	@property
	def spectral_table(self) -> str:
		return SPECTRAL_DISTRIBUTIONS[self.spectral_distribution]


def load_yaml_config(path: str | Path) -> Dict[str, Any]:
	p = Path(path)
	with p.open("r", encoding="utf-8") as f:
		cfg = yaml.safe_load(f)
	return cfg or {}


def build_config(raw: Dict[str, Any] | None) -> GenerationConfig:
	raw = raw or {}
	if isinstance(raw.get("generation"), dict):
		raw = raw["generation"]
	return GenerationConfig(**raw)


def resolve_seed(seed: int) -> int:
	"""A seed of 0 asks for fresh entropy; the drawn value is logged so the run can be replayed."""
	if seed:
		return int(seed)
	drawn = secrets.randbits(32) or 1
	log.info("random_seed=0, using entropy seed %d", drawn)
	return drawn
