#!/usr/bin/env python3
"""
Dive planning CLI for the U.S. Navy no-decompression tables.

Usage:
    python run_planner.py dalton --depth 99 --o2 21       # Solve Dalton's triangle
    python run_planner.py single 60 50                    # NDL and pressure group
    python run_planner.py surface K 0:29                  # New group after surface interval
    python run_planner.py repetitive D 1:30 40 --time 20  # Full repetitive dive chain
    python run_planner.py final 40 20 37                  # Group after a repetitive dive
    python run_planner.py min-interval K J                # Shortest interval K -> J
    python run_planner.py --o2 32 nitrox 90               # EAD, MOD and narcosis check
    python run_planner.py --o2 32 bands                   # Actual depths for each table row

Gas settings default to config.yaml; --o2 and --po2-limit override it.
"""

import argparse
import logging
import sys

from divetables import (
    DiveTableError,
    actual_depth_bands,
    daltons_triangle,
    equivalent_air_depth,
    final_group,
    format_interval,
    is_narcosis_risk,
    load_effective_config,
    minimum_surface_interval,
    plan_repetitive_dive,
    single_dive,
    surface_interval,
)
from divetables.daltons import WarningLevel
from divetables.navy_tables import TableMark
from divetables.units import percent_to_fraction, fraction_to_percent

logger = logging.getLogger("run_planner")


def setup_logging(verbose: bool = False, level: str = "INFO"):
    """Set up logging configuration."""
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    console_level = logging.DEBUG if verbose else getattr(logging, level, logging.INFO)
    logging.basicConfig(
        level=console_level,
        format=log_format,
        handlers=[logging.StreamHandler()],
    )


def _group_text(group) -> str:
    return group if group else "none"


def _minutes_text(value) -> str:
    if value is TableMark.NO_LIMIT:
        return "no limit"
    return f"{value} min"


def cmd_dalton(args, config):
    o2_fraction = percent_to_fraction(args.o2) if args.o2 is not None else None
    result = daltons_triangle(depth=args.depth, o2_fraction=o2_fraction, po2=args.po2)

    print("--- DALTON'S TRIANGLE ---")
    print(f"Depth: {result.depth:.1f} ft")
    print(f"O2: {fraction_to_percent(result.o2_fraction):.1f}%")
    print(f"Pressure: {result.pressure:.2f} ATA")
    print(f"pO2: {result.po2:.2f} ATA")
    print(f"pN2: {result.pn2:.2f} ATA")

    warnings = result.warnings()
    if warnings.o2_status is WarningLevel.DANGER:
        print("DANGER: pO2 exceeds 1.6 ATA (risk of oxygen toxicity)")
    elif warnings.o2_status is WarningLevel.CAUTION:
        print("WARNING: pO2 exceeds 1.4 ATA (maximum recommended for recreational diving)")
    if warnings.n2_status is WarningLevel.CAUTION:
        print("WARNING: pN2 exceeds 3.94 ATA (risk of nitrogen narcosis)")
    return 0


def cmd_single(args, config):
    gas = config["gas"]
    result = single_dive(args.depth, args.time, gas.o2_percent)

    print("--- SINGLE DIVE ---")
    if not gas.is_air:
        print(f"EAN{gas.o2_percent:g}: EAD {result.equivalent_air_depth:.1f} ft")
    print(f"Table depth: {result.table_depth} ft")
    print(f"No-decompression limit: {result.no_deco_limit} min")
    if result.exceeded:
        print(
            f"WARNING: Bottom time exceeds the no-decompression limit of "
            f"{result.no_deco_limit} minutes for {result.table_depth} feet."
        )
        return 0
    print(f"Pressure group: {_group_text(result.pressure_group)}")
    if result.short_ndl:
        print("WARNING: Very short no-decompression limit. Consider a shallower depth.")
    return 0


def cmd_surface(args, config):
    new_group = surface_interval(args.group, args.interval)
    print(f"New pressure group: {_group_text(new_group)}")
    return 0


def cmd_repetitive(args, config):
    gas = config["gas"]
    plan = plan_repetitive_dive(
        args.group, args.interval, args.depth,
        actual_bottom_time=args.time, o2_percent=gas.o2_percent,
    )

    print("--- REPETITIVE DIVE ---")
    print(f"Surface interval: {format_interval(plan.surface_interval)}")
    print(f"New pressure group: {_group_text(plan.new_group)}")
    if not plan.repetitive:
        print("No residual nitrogen remains; plan the next dive as a single dive.")
        if plan.single is not None:
            print(f"Pressure group: {_group_text(plan.final_group)}")
        return 0

    dive = plan.dive
    if dive.exceeded:
        print(f"WARNING: {dive.reason}")
        return 0
    print(f"Residual nitrogen time: {dive.residual_nitrogen_time} min")
    print(f"Adjusted no-decompression limit: {_minutes_text(dive.adjusted_no_deco_limit)}")
    if args.time is not None:
        print(f"Final pressure group: {plan.final_group or 'Exceeds limits'}")
    return 0


def cmd_final(args, config):
    group = final_group(args.depth, args.time, args.rnt, config["gas"].o2_percent)
    print(f"Final pressure group: {group or 'Exceeds limits'}")
    return 0


def cmd_min_interval(args, config):
    target = None if args.target.lower() == "none" else args.target
    minutes = minimum_surface_interval(args.group, target)
    if minutes is None:
        print(f"Cannot reach group {args.target} from {args.group} by waiting")
        return 0
    print(f"Minimum surface interval: {format_interval(minutes)}")
    return 0


def cmd_nitrox(args, config):
    gas = config["gas"]
    mod = gas.max_operating_depth(config["po2_limit"])

    print("--- NITROX ---")
    print(f"Gas: {gas.o2_percent:g}% O2")
    print(f"Equivalent air depth: {equivalent_air_depth(args.depth, gas.o2_percent):.1f} ft")
    print(f"Maximum operating depth (pO2 {config['po2_limit']:g}): {mod:.1f} ft")
    if args.depth > mod:
        print("DANGER: Depth exceeds maximum operating depth for this mix")
    if is_narcosis_risk(args.depth):
        print("WARNING: Nitrogen narcosis risk at this depth")
    return 0


def cmd_bands(args, config):
    gas = config["gas"]
    print(f"--- TABLE DEPTHS FOR {gas.o2_percent:g}% O2 ---")
    for air_depth, actual in actual_depth_bands(gas.o2_percent):
        print(f"{air_depth:>4} ft air -> {actual:6.1f} ft actual")
    return 0


COMMANDS = {
    "dalton": cmd_dalton,
    "single": cmd_single,
    "surface": cmd_surface,
    "repetitive": cmd_repetitive,
    "final": cmd_final,
    "min-interval": cmd_min_interval,
    "nitrox": cmd_nitrox,
    "bands": cmd_bands,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="U.S. Navy no-decompression dive table planner",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to config.yaml")
    parser.add_argument(
        "--o2", dest="gas_o2", type=float, default=None,
        help="Breathing gas O2 percent (overrides config)",
    )
    parser.add_argument(
        "--po2-limit", type=float, default=None,
        help="pO2 limit in ATA for maximum operating depth (overrides config)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    dalton_parser = subparsers.add_parser("dalton", help="Solve Dalton's triangle (give 2 of 3)")
    dalton_parser.add_argument("--depth", type=float, default=None, help="Depth in feet")
    dalton_parser.add_argument("--o2", type=float, default=None, help="O2 percent")
    dalton_parser.add_argument("--po2", type=float, default=None, help="pO2 in ATA")

    single_parser = subparsers.add_parser("single", help="Single dive NDL and pressure group")
    single_parser.add_argument("depth", type=float, help="Depth in feet")
    single_parser.add_argument("time", type=float, nargs="?", default=0, help="Bottom time (min)")

    surface_parser = subparsers.add_parser("surface", help="New group after a surface interval")
    surface_parser.add_argument("group", type=str, help="Current pressure group")
    surface_parser.add_argument("interval", type=str, help="Surface interval (H:MM)")

    rep_parser = subparsers.add_parser("repetitive", help="Repetitive dive planning")
    rep_parser.add_argument("group", type=str, help="Pressure group after previous dive")
    rep_parser.add_argument("interval", type=str, help="Surface interval (H:MM)")
    rep_parser.add_argument("depth", type=float, help="Depth of the next dive in feet")
    rep_parser.add_argument("--time", type=float, default=None, help="Actual bottom time (min)")

    final_parser = subparsers.add_parser("final", help="Pressure group after a repetitive dive")
    final_parser.add_argument("depth", type=float, help="Depth in feet")
    final_parser.add_argument("time", type=float, help="Actual bottom time (min)")
    final_parser.add_argument("rnt", type=int, help="Residual nitrogen time (min)")

    min_parser = subparsers.add_parser("min-interval", help="Minimum surface interval")
    min_parser.add_argument("group", type=str, help="Starting pressure group")
    min_parser.add_argument("target", type=str, help="Target pressure group, or 'none'")

    nitrox_parser = subparsers.add_parser("nitrox", help="EAD, MOD and narcosis check")
    nitrox_parser.add_argument("depth", type=float, help="Depth in feet")

    subparsers.add_parser("bands", help="Actual depths for each table row on nitrox")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = load_effective_config(
            o2_override=args.gas_o2,
            po2_override=args.po2_limit,
            config_path=args.config,
        )
        setup_logging(args.verbose, config["log_level"])
        logger.debug(f"Using config {config['config_path']} (gas from {config['gas_source']})")
        return COMMANDS[args.command](args, config)
    except DiveTableError as e:
        print(f"ERROR: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
