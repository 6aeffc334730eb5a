import argparse
from pathlib import Path
from .config import load_yaml_config, build_config, resolve_seed
from .gen.sector import SectorGenerator
from .gen.star import generate_star
from .sampling.roll import Roll
from .tables.loaders import load_tables
from .persist.outputs import write_outputs, plot_run
from .logger_setup import setup_logging, get_logger
import json
import pandas as pd
from tqdm import tqdm

log = get_logger(__name__)

STAR_SAMPLE_TASK = 7


def main(argv=None) -> None:
	parser = argparse.ArgumentParser(prog="astrogen", description="Procedural sector and star system generator")
	parser.add_argument("--log-level", default="INFO", type=str)
	sub = parser.add_subparsers(dest="cmd", required=True)

	p_run = sub.add_parser("run", help="Generate sectors")
	p_run.add_argument("--config", required=True, type=str)
	p_run.add_argument("--out", required=True, type=str)
	p_run.add_argument("--sectors", type=int, default=1)
	p_run.add_argument("--origin", type=int, nargs=3, default=[0, 0, 0], metavar=("X", "Y", "Z"))

	p_stars = sub.add_parser("stars", help="Sample stars to a CSV")
	p_stars.add_argument("--count", required=True, type=int)
	p_stars.add_argument("--seed", type=int, default=0)
	p_stars.add_argument("--distribution", type=str, default="realistic", choices=["hot", "realistic", "cool"])
	p_stars.add_argument("--out", required=True, type=str)

	p_plot = sub.add_parser("plot", help="Replot a prior run")
	p_plot.add_argument("--run", required=True, type=str)

	args = parser.parse_args(argv)
	setup_logging(args.log_level)

	if args.cmd == "run":
		cfg = build_config(load_yaml_config(args.config))
		generator = SectorGenerator(cfg)
		base = Path(args.out)
		base.mkdir(parents=True, exist_ok=True)
		x, y, z = args.origin
		summaries = []
		for i in tqdm(range(args.sectors), desc="Sectors"):
			sector = generator.generate_sector((x + i, y, z))
			out_i = base if args.sectors == 1 else base / f"sector_{i:03d}"
			summaries.append(write_outputs(sector, out_i))
		print(json.dumps({"seed": generator.seed, "sectors": summaries}, indent=2))
	elif args.cmd == "stars":
		seed = resolve_seed(args.seed)
		roll = Roll.for_task(seed, STAR_SAMPLE_TASK)
		tables = load_tables()
		rows = []
		for n in tqdm(range(1, args.count + 1), desc="Stars"):
			star = generate_star(roll, tables, star_id=f"STAR-{n}", distribution=args.distribution)
			rows.append({
				"id": star.id,
				"spectral_type": star.spectral_type,
				"spectral_class": star.spectral_class,
				"stage": star.stage.value,
				"mass": star.mass,
				"radius": star.radius,
				"luminosity": star.luminosity,
				"temperature": star.temperature,
				"age_gyr": star.age,
				"habitable_zone_inner": star.habitable_zone_inner,
				"habitable_zone_outer": star.habitable_zone_outer,
			})
		out = Path(args.out)
		out.parent.mkdir(parents=True, exist_ok=True)
		pd.DataFrame(rows).to_csv(out, index=False)
		print(json.dumps({"seed": seed, "count": len(rows), "out": str(out)}, indent=2))
	elif args.cmd == "plot":
		plot_run(Path(args.run))

if __name__ == "__main__":
	main()
