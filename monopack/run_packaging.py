"""Orchestration logic for packaging an entry file's dependencies."""

import argparse
import tempfile
from pathlib import Path
from typing import Any

from monopack.build_package_json import build_package_json
from monopack.compute_config_hash import compute_config_hash
from monopack.deep_merge import deep_merge
from monopack.dependency_collector import DependencyCollector
from monopack.find_monorepo_root import find_monorepo_root
from monopack.load_config import find_config_file, load_config
from monopack.load_observations import load_observations
from monopack.render_resolution import render_resolution
from monopack.resolution_report import ResolutionReport
from monopack.write_output import write_output


def run_packaging(args: argparse.Namespace) -> int:
    """Execute the full packaging pipeline."""
    main_file = args.main.resolve()
    main_dir = main_file.parent
    print(f"=>> monopack {main_file}")

    config_file, config = _init_config(args, main_dir)
    monorepo_root = (
        Path(config["monorepo_root"])
        if config["monorepo_root"]
        else find_monorepo_root(config_file.parent if config_file else main_dir)
    )
    print(f"=>> monopack is using monorepo root {monorepo_root}")

    collector = DependencyCollector(
        monorepo_root,
        lock_file_names=config["lock_file_names"],
        dependency_fields=config["dependency_fields"],
    )
    for extra_module in config["extra_modules"]:
        collector.collect_dependency(extra_module, main_dir)
    for observation in load_observations(args.observations, main_dir):
        collector.collect_dependency(observation.package_name, observation.context)

    print("=>> monopack will resolve dependencies")
    result = collector.resolve_dependencies()
    rendered = render_resolution(result)
    print(rendered.output, end="")

    if args.report:
        report = ResolutionReport(compute_config_hash(config), monorepo_root)
        report.set_result(result, len(collector.observations))
        report.generate_report(args.report)
        print(f"=>> monopack wrote a resolution report to {args.report}")

    if rendered.exit_code != 0:
        return rendered.exit_code
    if args.dry_run:
        return 0

    out_dir = (
        Path(config["output_directory"])
        if config["output_directory"]
        else Path(tempfile.mkdtemp(prefix="monopack-"))
    )
    package_json = build_package_json(rendered.dependencies, config["package_json"])
    print(f"=>> monopack will build a package.json into {out_dir}")
    lock_file = rendered.lock_file_to_copy
    if lock_file is not None:
        print(f"=>> monopack will copy {lock_file.name} from {lock_file}")
    write_output(out_dir, package_json, lock_file)

    print(f"=>> monopack successfully packaged your app in {out_dir}")
    return 0


def _init_config(
    args: argparse.Namespace, main_dir: Path
) -> tuple[Path | None, dict[str, Any]]:
    """Load the config file, then apply command line overrides."""
    config_file = args.config or find_config_file(main_dir)
    config = load_config(config_file)

    overrides: dict[str, Any] = {}
    if args.monorepo_root:
        overrides["monorepo_root"] = str(args.monorepo_root.resolve())
    if args.out_dir:
        overrides["output_directory"] = str(args.out_dir.resolve())
    if args.extra_module:
        overrides["extra_modules"] = list(args.extra_module)
    return config_file, deep_merge(config, overrides)
