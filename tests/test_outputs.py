import json
import pandas as pd
from astrogen.cli import main
from astrogen.config import GenerationConfig
from astrogen.gen.sector import SectorGenerator
from astrogen.persist.flatten import flatten_mapping, rebuild_mapping
from astrogen.persist.outputs import load_sector, plot_run, write_outputs


def small_sector():
	cfg = GenerationConfig(sector_size_x=1, sector_size_y=1, sector_size_z=1, parsecs_per_sector=2,
		star_density=1.0, random_seed=99, galaxy_type=0)
	return SectorGenerator(cfg).generate_sector((0, 0, 0))


def test_flatten_mapping_round_trip():
	mapping = {"Nitrogen": 78.0, "Oxygen": 21.0, "Argon": 1.0}
	entries = flatten_mapping(mapping)
	assert entries[0] == {"key": "Nitrogen", "value": 78.0}
	assert rebuild_mapping(entries) == mapping
	assert rebuild_mapping(flatten_mapping({})) == {}


def test_write_and_load(tmp_path):
	sector = small_sector()
	summary = write_outputs(sector, tmp_path)
	for name in ("sector.json", "summary.json", "stars.csv", "planets.csv", "moons.csv", "belts.csv"):
		assert (tmp_path / name).exists()
	assert (tmp_path / "figs" / "spectral_types.png").exists()
	assert summary["systems"] == len(sector.systems)
	assert load_sector(tmp_path) == sector

	stars = pd.read_csv(tmp_path / "stars.csv")
	assert len(stars) == summary["stars"]
	belts = pd.read_csv(tmp_path / "belts.csv")
	pct = [c for c in belts.columns if c.startswith("pct_")]
	if len(belts) and pct:
		totals = belts[pct].fillna(0.0).sum(axis=1)
		assert ((totals - 100.0).abs() < 0.01).all()

	plot_run(tmp_path)
	assert (tmp_path / "figs" / "planet_types.png").exists() or summary["planets"] == 0


def test_cli_run(tmp_path, capsys):
	cfg = tmp_path / "cfg.yaml"
	cfg.write_text(
		"generation:\n  sector_size_x: 1\n  sector_size_y: 1\n  sector_size_z: 1\n"
		"  parsecs_per_sector: 2\n  star_density: 0.5\n  random_seed: 5\n  galaxy_type: 0\n",
		encoding="utf-8",
	)
	out = tmp_path / "run"
	main(["--log-level", "WARNING", "run", "--config", str(cfg), "--out", str(out), "--sectors", "2"])
	printed = json.loads(capsys.readouterr().out)
	assert printed["seed"] == 5
	assert len(printed["sectors"]) == 2
	assert (out / "sector_000" / "sector.json").exists()
	assert (out / "sector_001" / "planets.csv").exists()


def test_cli_stars(tmp_path, capsys):
	out = tmp_path / "stars.csv"
	main(["stars", "--count", "25", "--seed", "3", "--out", str(out)])
	printed = json.loads(capsys.readouterr().out)
	assert printed["count"] == 25
	frame = pd.read_csv(out)
	assert len(frame) == 25
	assert frame["mass"].gt(0).all()
