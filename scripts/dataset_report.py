#!/usr/bin/env python3
"""CLI script to summarise a farm polygon dataset."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure the project source is importable when running the script directly.
_project_root = Path(__file__).resolve().parent.parent
_src = _project_root / "src"
if str(_src) not in sys.path:
    sys.path.insert(0, str(_src))

from farmlands.gis.store import DatasetError, GeoRecordStore  # noqa: E402
from farmlands.viewer.aggregation import aggregate_owners, rank_farms  # noqa: E402
from farmlands.viewer.filtering import filter_records, filter_state_for  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print record counts, owners and farms for a GeoJSON dataset."
    )
    parser.add_argument(
        "--dataset",
        type=str,
        default=str(_project_root / "data" / "locations.json"),
        help="Path to the GeoJSON FeatureCollection.",
    )
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Only include farms granted in or before this year.",
    )
    parser.add_argument(
        "--by-size",
        action="store_true",
        help="Rank farms by bounding-box width instead of by name.",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    try:
        store = GeoRecordStore.from_file(args.dataset)
    except DatasetError as exc:
        print(f"Error: {exc}")
        return 1

    summary = store.summary()
    print(f"Dataset: {args.dataset}")
    print(f"  Records:          {summary.total}")
    print(f"  Skipped features: {summary.skipped}")
    print(f"  Unnamed:          {summary.unnamed}")
    print(f"  Unowned:          {summary.unowned}")
    print(f"  Undated:          {summary.undated}")
    print(f"  Unparsable dates: {summary.unparsable_dates}")

    records = filter_records(store.records, filter_state_for(args.year))
    if args.year is not None:
        print(f"\nFarms granted by {args.year}: {len(records)}")

    print("\nOwners:")
    for entry in aggregate_owners(records):
        print(f"  {entry.owner:<40} {entry.count:>4}")

    print("\nFarms:")
    for farm in rank_farms(records, args.by_size, store.bounds_for):
        owner = farm.owner or "-"
        print(f"  {farm.name:<30} {owner:<30} {farm.size_proxy:.4f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
