#!/usr/bin/env python3
"""
Detect and remove pipeline hazards from a MIPS ROM dump.

Reads one instruction word per line (hex, 0x-hex, or 32-char binary), inserts the no-ops a classic
5-stage pipeline needs, relinks branches/jumps, and writes one corrected ROM per policy:

    python3 hazard_resolver.py program.hex -o out/
    python3 hazard_resolver.py program.hex --variant integrated_forwarding --listing
    python3 hazard_resolver.py program.hex --variant custom --forwarding --no-control
"""

from __future__ import annotations

import argparse
import logging
import os
import pathlib
import sys

from mips32 import VARIANTS, RomFormatError, ResolutionPolicy, decode_program, read_rom, resolve_hazards, write_listing, write_rom

logger = logging.getLogger("hazard_resolver")

LOG_LEVEL_ENV = "HAZARD_RESOLVER_LOG_LEVEL"  # default log level override
CUSTOM = "custom"  # variant built from --forwarding/--no-data/--no-control


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="MIPS pipeline hazard resolver")
    parser.add_argument("rom", type=pathlib.Path, help="ROM file with one instruction word per line")
    parser.add_argument("--out-dir", "-o", type=pathlib.Path, default=pathlib.Path("."),
                        help="Directory for corrected ROMs (default: current directory)")
    parser.add_argument("--variant", action="append", choices=[*VARIANTS, CUSTOM], default=None,
                        help="Policy to run (repeatable; default: all six named variants)")
    parser.add_argument("--forwarding", action="store_true", help="custom policy: forwarding available")
    parser.add_argument("--no-data", action="store_true", help="custom policy: ignore data hazards")
    parser.add_argument("--no-control", action="store_true", help="custom policy: ignore control hazards")
    parser.add_argument("--listing", action="store_true", help="Also write <variant>.txt address listings")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every inserted stall")
    return parser


def _configure_logging(verbose: bool) -> None:
    level = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    valid = isinstance(logging.getLevelName(level), int)
    logging.basicConfig(level=level if valid else "WARNING", format="%(levelname)s: %(message)s")
    if not valid:
        logger.warning("ignoring %s=%r: not a log level", LOG_LEVEL_ENV, level)


def _policies(args: argparse.Namespace) -> dict[str, ResolutionPolicy]:
    names = args.variant or list(VARIANTS)
    out = {}
    for name in names:
        if name == CUSTOM:
            out[CUSTOM] = ResolutionPolicy(
                forwarding=args.forwarding,
                resolve_data=not args.no_data,
                resolve_control=not args.no_control,
            )
        else:
            out[name] = VARIANTS[name]
    return out


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        program = decode_program(read_rom(args.rom))
    except (OSError, RomFormatError) as e:
        logger.error("cannot load ROM: %s", e)
        return 1
    print(f"Loaded {len(program)} instructions from {args.rom}")

    results = {name: resolve_hazards(program, policy) for name, policy in _policies(args).items()}

    try:
        args.out_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for name, res in results.items():
            rom_path = args.out_dir / f"{name}.hex"
            write_rom(rom_path, res.words)
            written.append(rom_path)
            if args.listing:
                listing_path = args.out_dir / f"{name}.txt"
                write_listing(listing_path, res.instructions)
                written.append(listing_path)
    except OSError as e:
        logger.error("cannot write output: %s", e)
        return 1

    print("--- Overhead (instructions inserted per policy) ---")
    print(f"Original: {len(program)} instructions")
    for name, res in results.items():
        print(f"{name:<26} {res.corrected_count:>6} (+{res.inserted})"
              f"  data hazards: {res.data_hazards}  control hazards: {res.control_hazards}")
        if res.unresolved:
            addrs = ", ".join(f"0x{a:04X}" for a in res.unresolved)
            print(f"{'':<26} unresolved targets left unchanged at: {addrs}")
    print("Files written:")
    for p in written:
        print(f" - {p}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
