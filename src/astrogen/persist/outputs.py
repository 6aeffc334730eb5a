from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List
import pandas as pd
import json
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
from ..model.entities import Sector
from .flatten import to_record, from_record
from ..logger_setup import get_logger
plt.style.use("seaborn-v0_8-darkgrid")

log = get_logger(__name__)

SECTOR_FILE = "sector.json"


def _percent(composition: Dict[str, float]) -> Dict[str, float]:
	return {f"pct_{name}": round(fraction * 100.0, 3) for name, fraction in composition.items()}


def stars_frame(sector: Sector) -> pd.DataFrame:
	rows = [
		{
			"id": star.id,
			"system_id": system.id,
			"spectral_type": star.spectral_type,
			"spectral_class": star.spectral_class,
			"stage": star.stage.value,
			"mass": star.mass,
			"radius": star.radius,
			"luminosity": star.luminosity,
			"temperature": star.temperature,
			"age_gyr": star.age,
			"planets": len(star.planets),
			"belts": len(star.belts),
		}
		for system in sector.systems for star in system.stars
	]
	return pd.DataFrame(rows, columns=None if rows else ["id", "spectral_type"])


def planets_frame(sector: Sector) -> pd.DataFrame:
	rows: List[Dict[str, Any]] = []
	for system in sector.systems:
		for p in system.all_planets():
			row = {
				"id": p.id,
				"system_id": system.id,
				"star_id": p.parent_star_id,
				"pair_id": p.parent_pair_id or "",
				"planet_type": p.planet_type.value,
				"zone": p.zone.value,
				"mass": p.mass,
				"radius": p.radius,
				"gravity": p.surface_gravity,
				"semi_major_axis": p.semi_major_axis,
				"orbital_period": p.orbital_period,
				"temperature": p.surface_temperature,
				"pressure": p.atmospheric_pressure,
				"water_coverage": p.water_coverage,
				"habitability": p.habitability_index,
				"is_habitable": p.is_habitable,
				"is_terraformable": p.is_terraformable,
				"moons": len(p.moons),
				"has_rings": p.has_rings,
				"has_life": p.biosphere is not None,
			}
			if p.rings is not None:
				row["ring_complexity"] = p.rings.complexity.value
				row.update(_percent(p.rings.composition))
			rows.append(row)
	return pd.DataFrame(rows, columns=None if rows else ["id", "planet_type", "habitability"])


def moons_frame(sector: Sector) -> pd.DataFrame:
	rows = [
		{
			"id": m.id,
			"planet_id": m.parent_planet_id,
			"moon_type": m.moon_type.value,
			"mass": m.mass,
			"radius": m.radius,
			"orbital_distance": m.orbital_distance,
			"orbital_period": m.orbital_period,
			"tidal_heating": m.tidal_heating,
			"orbital_resonance": m.orbital_resonance,
			"temperature": m.surface_temperature,
			"habitability": m.habitability_index,
		}
		for system in sector.systems for m in system.all_moons()
	]
	return pd.DataFrame(rows, columns=None if rows else ["id", "planet_id"])


def belts_frame(sector: Sector) -> pd.DataFrame:
	rows = []
	for system in sector.systems:
		for b in system.all_belts():
			row = {
				"id": b.id,
				"star_id": b.parent_star_id,
				"zone": b.zone.value,
				"inner_radius": b.inner_radius,
				"outer_radius": b.outer_radius,
				"total_mass": b.total_mass,
				"economic_value": b.economic_value,
				"navigation_hazard": b.navigation_hazard,
				"notable_objects": len(b.notable_objects),
			}
			row.update(_percent(b.composition))
			rows.append(row)
	return pd.DataFrame(rows, columns=None if rows else ["id", "zone"])


def summarize(sector: Sector) -> Dict[str, Any]:
	planets = [p for s in sector.systems for p in s.all_planets()]
	return {
		"sector_id": sector.id,
		"coordinates": list(sector.coordinates),
		"systems": len(sector.systems),
		"anomalies": sector.anomaly_count,
		"stars": sum(len(s.stars) for s in sector.systems),
		"planets": len(planets),
		"moons": sum(1 for s in sector.systems for _ in s.all_moons()),
		"belts": sum(1 for s in sector.systems for _ in s.all_belts()),
		"habitable_planets": sum(1 for p in planets if p.is_habitable),
		"planets_with_life": sum(1 for p in planets if p.biosphere is not None),
	}


def _plot_figures(stars: pd.DataFrame, planets: pd.DataFrame, fig_dir: Path) -> None:
	if not stars.empty:
		counts = stars["spectral_type"].value_counts().sort_index()
		plt.figure(figsize=(9,4.8))
		plt.bar(counts.index.astype(str), counts.values)
		plt.gca().yaxis.set_major_locator(mticker.MaxNLocator(integer=True))
		plt.xlabel("Spectral type")
		plt.ylabel("Stars")
		plt.grid(True)
		plt.tight_layout()
		plt.savefig(fig_dir / "spectral_types.png", dpi=150)
		plt.close()

	if not planets.empty:
		plt.figure(figsize=(9,4.8))
		plt.hist(planets["habitability"], bins=20, range=(0.0, 1.0))
		plt.xlabel("Habitability index")
		plt.ylabel("Planets")
		plt.grid(True)
		plt.tight_layout()
		plt.savefig(fig_dir / "habitability.png", dpi=150)
		plt.close()

		counts = planets["planet_type"].value_counts().sort_values()
		plt.figure(figsize=(9,4.8))
		plt.barh(counts.index.astype(str), counts.values)
		plt.gca().xaxis.set_major_locator(mticker.MaxNLocator(integer=True))
		plt.xlabel("Planets")
		plt.ylabel("Planet type")
		plt.grid(True)
		plt.tight_layout()
		plt.savefig(fig_dir / "planet_types.png", dpi=150)
		plt.close()


def write_outputs(sector: Sector, out_dir: Path) -> Dict[str, Any]:
	out_dir = Path(out_dir)
	out_dir.mkdir(parents=True, exist_ok=True)
	fig_dir = out_dir / "figs"
	fig_dir.mkdir(parents=True, exist_ok=True)

	with (out_dir / SECTOR_FILE).open("w", encoding="utf-8") as f:
		json.dump(to_record(sector), f, indent=2)

	stars = stars_frame(sector)
	planets = planets_frame(sector)
	stars.to_csv(out_dir / "stars.csv", index=False)
	planets.to_csv(out_dir / "planets.csv", index=False)
	moons_frame(sector).to_csv(out_dir / "moons.csv", index=False)
	belts_frame(sector).to_csv(out_dir / "belts.csv", index=False)

	summary = summarize(sector)
	with (out_dir / "summary.json").open("w", encoding="utf-8") as f:
		json.dump(summary, f, indent=2)

	_plot_figures(stars, planets, fig_dir)
	log.info("wrote sector %s to %s", sector.id, out_dir)
	return summary


def load_sector(path: Path) -> Sector:
	"""Rebuild a Sector from ``sector.json`` or from the directory holding it."""
	p = Path(path)
	if p.is_dir():
		p = p / SECTOR_FILE
	with p.open("r", encoding="utf-8") as f:
		return from_record(Sector, json.load(f))


def plot_run(out_dir: Path) -> None:
	out_dir = Path(out_dir)
	fig_dir = out_dir / "figs"
	fig_dir.mkdir(parents=True, exist_ok=True)
	stars = pd.read_csv(out_dir / "stars.csv")
	planets = pd.read_csv(out_dir / "planets.csv")
	_plot_figures(stars, planets, fig_dir)
	log.info("replotted %s", fig_dir)
