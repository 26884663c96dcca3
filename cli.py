#!/usr/bin/env python
"""
Command-line interface for the Work Area Coverage Engine

Usage:
    python cli.py analyze --input request.json --output analysis.json
    python cli.py batch --input ./requests/ --output ./analyses/
    python cli.py taxonomy
"""

import os
import sys
import json
import argparse
from pathlib import Path

from loguru import logger
from workarea.pipeline import WorkAreaAnalysisPipeline
from workarea.taxonomy import build_default_taxonomy, flatten_taxonomy


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def cmd_analyze(args):
    """Analyse a single work area request"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    pipeline = WorkAreaAnalysisPipeline()

    try:
        request = pipeline.load_request(args.input)
    except ValueError as e:
        logger.error(str(e))
        return 1

    result = pipeline.run_request(request)

    if args.output:
        pipeline.save(result, args.output)
        logger.info(f"✓ Generated: {args.output}")

    if not result.active:
        logger.warning("Draw a polygon with at least 3 vertices to analyse the work area")
        return 0

    if args.summary:
        summary = {
            "work_area_id": result.work_area_id,
            "area_sq_meters": result.area_sq_meters,
            "records_inside": len(result.record_ids_inside),
            "completeness_pct": result.completeness.completeness_pct,
            "categories_missing": result.completeness.categories_missing,
            "gaps": result.completeness.gaps,
            "guidance": result.guidance.summary,
        }
        print(json.dumps(summary, indent=2))

    if args.checklist:
        print(result.guidance.checklist)

    return 0


def cmd_batch(args):
    """Analyse every request JSON file in a directory"""
    setup_logging(args.verbose)

    input_dir = Path(args.input)
    if not input_dir.is_dir():
        logger.error(f"Input directory not found: {args.input}")
        return 1

    request_files = sorted(input_dir.glob("*.json"))
    if not request_files:
        logger.error(f"No request files found in {args.input}")
        return 1

    logger.info(f"Processing {len(request_files)} work areas...")
    os.makedirs(args.output, exist_ok=True)

    pipeline = WorkAreaAnalysisPipeline()
    success = 0
    failed = 0

    for i, path in enumerate(request_files, 1):
        logger.info(f"[{i}/{len(request_files)}] {path.name}")

        try:
            request = pipeline.load_request(str(path))
        except ValueError as e:
            logger.error(f"  ✗ Failed: {e}")
            failed += 1
            continue

        result = pipeline.run_request(request)
        pipeline.save(result, os.path.join(args.output, path.name))

        if result.active:
            logger.info(f"  ✓ {path.name}: {result.completeness.completeness_pct}% complete")
        else:
            logger.info(f"  ✓ {path.name}: inactive work area")
        success += 1

    logger.info(f"\nComplete: {success} succeeded, {failed} failed")
    return 0 if failed == 0 else 1


def cmd_taxonomy(args):
    """List the default taxonomy"""
    setup_logging(args.verbose)

    rows = flatten_taxonomy(build_default_taxonomy())

    if args.json:
        print(json.dumps([
            {
                "id": r.id,
                "owner": r.owner,
                "domain": r.domain,
                "label": r.label,
                "priority": int(r.priority),
                "path": r.path,
            }
            for r in rows
        ], indent=2))
    else:
        for r in rows:
            print(f"P{int(r.priority)}  {r.path}")

    return 0


def main():
    parser = argparse.ArgumentParser(
        description="Work Area Coverage Engine CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Analyse a work area:
    python cli.py analyze --input request.json --output analysis.json --summary

  Print the missing record checklist:
    python cli.py analyze --input request.json --checklist

  Batch analyse a directory of requests:
    python cli.py batch --input ./requests/ --output ./analyses/

  List expected record types:
    python cli.py taxonomy
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Analyze command
    analyze_parser = subparsers.add_parser("analyze", help="Analyse a work area request JSON file")
    analyze_parser.add_argument("--input", "-i", required=True, help="Input request JSON file (polygon + records)")
    analyze_parser.add_argument("--output", "-o", help="Output analysis JSON file")
    analyze_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    analyze_parser.add_argument("--checklist", "-c", action="store_true", help="Print missing record checklist")
    analyze_parser.set_defaults(func=cmd_analyze)

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Analyse every request in a directory")
    batch_parser.add_argument("--input", "-i", required=True, help="Directory of request JSON files")
    batch_parser.add_argument("--output", "-o", default="output", help="Output directory")
    batch_parser.set_defaults(func=cmd_batch)

    # Taxonomy command
    taxonomy_parser = subparsers.add_parser("taxonomy", help="List the default record type taxonomy")
    taxonomy_parser.add_argument("--json", action="store_true", help="Print as JSON")
    taxonomy_parser.set_defaults(func=cmd_taxonomy)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
