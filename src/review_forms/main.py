from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .aggregation import to_tsv
from .config import ReviewFormsConfig, load_config_override
from .generator import generate_forms, parse_review_type
from .importer import import_scores


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Performance review form generator and score importer")
    parser.add_argument("--config", required=False, help="Optional JSON config override file")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="Build review forms from a KPI template workbook")
    gen.add_argument("--input", required=True, help="Path to the KPI template .xlsx")
    gen.add_argument("--output", required=True, help="Path to the output .zip archive")
    gen.add_argument("--review-type", default="mid", choices=["mid", "end"], help="Middle or end of year review")
    gen.add_argument("--fiscal-year", default=None, help="Fiscal year label, e.g. FY25")

    imp = sub.add_parser("import", help="Summarise completed review forms")
    imp.add_argument("files", nargs="+", help="Completed .xlsx forms, in merge order")
    imp.add_argument("--output", required=False, help="Write the summary as TSV instead of printing JSON")

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    cfg = ReviewFormsConfig()

    if args.config:
        cfg = load_config_override(args.config, cfg)

    if args.command == "generate":
        _run_generate(args, cfg)
    else:
        _run_import(args, cfg)


def _run_generate(args: argparse.Namespace, cfg: ReviewFormsConfig) -> None:
    input_path = Path(args.input)
    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_path}")

    result = generate_forms(
        input_path.read_bytes(),
        review_type=parse_review_type(args.review_type),
        fiscal_year=args.fiscal_year,
        cfg=cfg,
    )

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(result.archive)

    print(f"Generated {len(result.forms)} form(s)")
    print(f"Output: {output_path}")


def _run_import(args: argparse.Namespace, cfg: ReviewFormsConfig) -> None:
    uploads = []
    for name in args.files:
        path = Path(name)
        if not path.exists():
            raise FileNotFoundError(f"Input file not found: {path}")
        uploads.append((path.name, path.read_bytes()))

    result = import_scores(uploads, cfg)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(to_tsv(result.rows) + "\n", encoding="utf-8")
        print(f"Output: {output_path}")
    else:
        print(json.dumps(result.to_dict(), indent=2, default=str))


if __name__ == "__main__":
    main()
