#!/usr/bin/env python3
"""Dataset generation script for performance testing.

Generates synthetic CSV files with dotted (nested) headers:
- Row 1: Header row (``name.firstName,name.lastName,age,address.*,...``)
- Row 2+: Data rows

Some string values contain commas, so they come out quoted; the files
exercise the quote-aware tokenizer as well as the nested record builder.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

FIRST_NAMES = ["Alice", "Bob", "Carol", "Dave", "Erin", "Frank", "Grace", "Heidi"]
LAST_NAMES = ["Smith", "Jones", "Brown", "Taylor", "Wilson", "Evans", "Thomas"]
CITIES = ["Springfield", "Riverside", "Franklin", "Greenville", "Fairview"]
STREETS = ["Main St", "Oak Ave", "Pine Rd", "Maple Dr", "Cedar Ln"]


def generate_synthetic_data(rows: int, extra_cols: int = 0, seed: int = 42) -> pd.DataFrame:
    """Generate a DataFrame whose column names are dotted property paths.

    Args:
        rows: Number of data rows to generate
        extra_cols: Additional numeric ``metrics.mN`` columns
        seed: Random seed for reproducible data

    Returns:
        DataFrame with mandatory, nested and mixed-type columns
    """
    rng = np.random.default_rng(seed)

    data: dict[str, Any] = {
        "name.firstName": rng.choice(FIRST_NAMES, rows),
        "name.lastName": rng.choice(LAST_NAMES, rows),
        "age": rng.integers(1, 90, rows),
        "address.line1": [
            f"{n} {s}, Apt {a}"
            for n, s, a in zip(
                rng.integers(1, 999, rows), rng.choice(STREETS, rows), rng.integers(1, 40, rows)
            )
        ],
        "address.city": rng.choice(CITIES, rows),
        "address.zip": rng.integers(10000, 99999, rows),
        "active": rng.choice(["true", "false"], rows),
        "score": np.round(rng.uniform(0, 100, rows), 2),
    }
    for i in range(extra_cols):
        data[f"metrics.m{i}"] = rng.integers(0, 10_000, rows)

    return pd.DataFrame(data)


def create_csv_file(output_path: Path, rows: int, extra_cols: int = 0, seed: int = 42) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_synthetic_data(rows, extra_cols, seed)
    df.to_csv(output_path, index=False)

    print(f"Created CSV file: {output_path}")
    print(f"  Rows: {rows} (+ 1 header row)")
    print(f"  Columns: {len(df.columns)}")


def main() -> int:
    """Main CLI interface for dataset generation."""
    parser = argparse.ArgumentParser(
        description="Generate synthetic nested-header CSV datasets for performance testing",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate default 50k rows
  %(prog)s data/perf.csv

  # Generate a wider dataset
  %(prog)s data/wide.csv --rows 100000 --extra-cols 20
        """,
    )
    parser.add_argument("output", type=Path, help="Output CSV file path")
    parser.add_argument("--rows", type=int, default=50_000, help="Number of data rows (default: 50,000)")
    parser.add_argument("--extra-cols", type=int, default=0, help="Additional metrics.* columns (default: 0)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducible data (default: 42)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be generated without creating files",
    )
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.extra_cols < 0:
        print("Error: --extra-cols must not be negative", file=sys.stderr)
        return 1

    print("Dataset generation plan:")
    print(f"  Output file: {args.output}")
    print(f"  Rows: {args.rows:,}")
    print(f"  Columns: {8 + args.extra_cols}")
    print(f"  Random seed: {args.seed}")

    if args.dry_run:
        print("\n[DRY RUN] Would generate files but not creating them.")
        return 0

    try:
        create_csv_file(args.output, args.rows, args.extra_cols, args.seed)
    except OSError as e:
        print(f"\nError generating dataset: {e}", file=sys.stderr)
        return 1
    print("\nDataset generation completed successfully!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
