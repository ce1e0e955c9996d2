#!/usr/bin/env python3
"""Apply `path=value` field patches to a save archive."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from jominisave.patch import ValueKind
from jominisave.state import SaveStateStore


def _split_assignment(raw: str) -> tuple[str, str]:
    path, sep, value = raw.partition("=")
    if not sep or not path or not value:
        raise argparse.ArgumentTypeError(f"Expected PATH=VALUE, got {raw!r}")
    return path, value


def main() -> int:
    parser = argparse.ArgumentParser(description="Patch fields of a Clausewitz save without reformatting it")
    parser.add_argument("save", type=Path, help="Input .sav archive")
    parser.add_argument(
        "patches",
        nargs="*",
        type=_split_assignment,
        help="Field assignments such as planets.0.planet_size=20",
    )
    parser.add_argument(
        "--kind",
        choices=[kind.value for kind in ValueKind],
        default=ValueKind.RAW.value,
        help="Validate every value as this type before writing it (default: raw literal)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Output path (default: <name>_edited.sav)")
    parser.add_argument("--summary", action="store_true", help="Print the save overview and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    store = SaveStateStore()
    loaded = store.load(args.save.read_bytes(), args.save.name)
    if not loaded.ok:
        for diagnostic in loaded.diagnostics:
            print(f"error: {diagnostic.code}: {diagnostic.message}")
        return 1

    if args.summary:
        summary = store.summary()
        assert summary is not None
        print(f"Empire:  {summary.empire_name}")
        print(f"Date:    {summary.game_date}")
        print(f"Version: {summary.version}")
        print(f"Ironman: {'yes' if summary.is_ironman else 'no'}")
        print(f"Planets: {summary.num_planets}")
        for planet in summary.planets:
            print(f"  {planet.id:>6} {planet.name:<24} {planet.type:<20} size={planet.size}")
        return 0

    kind = ValueKind(args.kind)
    for path, value in args.patches:
        result = store.apply_field_patch(path, value, kind)
        if not result.ok:
            for diagnostic in result.diagnostics:
                print(f"error: {diagnostic.code}: {diagnostic.message}")
            return 1

    exported = store.export()
    if exported.data is None or exported.download_name is None:
        return 1
    output = args.output or args.save.with_name(exported.download_name)
    output.write_bytes(exported.data)
    print(f"Wrote {len(args.patches)} patches to {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
