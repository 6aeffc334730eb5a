import pytest
from pydantic import ValidationError
from astrogen.config import GenerationConfig, build_config, load_yaml_config, resolve_seed


def test_nested_and_flat_configs_agree(tmp_path):
	path = tmp_path / "cfg.yaml"
	path.write_text("generation:\n  parsecs_per_sector: 4\n  random_seed: 99\n  unknown_key: 1\n", encoding="utf-8")
	nested = build_config(load_yaml_config(path))
	flat = build_config({"parsecs_per_sector": 4, "random_seed": 99})
	assert nested == flat
	assert nested.parsecs_per_sector == 4


def test_defaults():
	cfg = build_config(None)
	assert cfg.parsecs_per_sector == 10
	assert cfg.spectral_table == "realistic"


def test_out_of_range_values_rejected():
	with pytest.raises(ValidationError):
		GenerationConfig(star_density=1.5)
	with pytest.raises(ValidationError):
		GenerationConfig(galaxy_type=7)
	with pytest.raises(ValidationError):
		GenerationConfig(spectral_distribution=3)


def test_spectral_selector():
	assert GenerationConfig(spectral_distribution=0).spectral_table == "hot"
	assert GenerationConfig(spectral_distribution=2).spectral_table == "cool"


def test_seed_resolution():
	assert resolve_seed(1234) == 1234
	assert resolve_seed(0) > 0
