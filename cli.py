#!/usr/bin/env python
"""
Command-line interface for Area Scan

Usage:
    python cli.py scan --lat 12.9716 --lon 77.5946 --output scan.json
    python cli.py scan --location "Indiranagar, Bangalore" --summary
    python cli.py batch --input locations.csv --output ./scans/
"""

import os
import sys
import json
import csv
import time
import argparse
from datetime import datetime

from loguru import logger

from areascan.errors import ScanError
from areascan.pipeline import AreaScanPipeline


def setup_logging(verbose: bool = False):
    """Configure logging"""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{message}</cyan>",
        level=level
    )


def scan_summary(scan) -> dict:
    summary = {
        "scan_id": scan.scan_id,
        "center": [scan.center.lat, scan.center.lon],
        "total_elements": scan.total_elements,
        "density": scan.density_label,
        "top_categories": {c.name: c.count for c in scan.top_categories},
        "opportunities": [f"{r.label}: {r.score}/100" for r in scan.recommendations],
    }
    if scan.accessibility:
        summary["road_score"] = scan.accessibility.road_score
        summary["transit_score"] = scan.accessibility.transit_score
        summary["logistics_score"] = scan.accessibility.logistics_score
        summary["accessibility_summary"] = scan.accessibility.summary
    return summary


def cmd_scan(args):
    """Scan a single location"""
    setup_logging(args.verbose)

    if args.location is None and (args.lat is None or args.lon is None):
        logger.error("Provide --location or both --lat and --lon")
        return 1

    output_path = args.output or f"scan_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

    pipeline = AreaScanPipeline(cache_dir=args.cache_dir)

    try:
        if args.location is not None:
            result = pipeline.run_location(
                args.location,
                radius_m=args.radius,
                include_accessibility=not args.no_accessibility
            )
        else:
            result = pipeline.run(
                lat=args.lat,
                lon=args.lon,
                radius_m=args.radius,
                include_accessibility=not args.no_accessibility
            )

        pipeline.save(result, output_path)

        logger.info(f"✓ Generated: {output_path}")
        logger.info(f"  Scan ID: {result.scan_id}")
        logger.info(f"  Elements: {result.total_elements} ({result.density_label} density)")
        if result.recommendations:
            best = result.recommendations[0]
            logger.info(f"  Top opportunity: {best.label} ({best.score}/100)")

        if args.summary:
            print(json.dumps(scan_summary(result), indent=2, ensure_ascii=False))

        return 0

    except ScanError as e:
        logger.error(f"Analysis failed: {e}")
        return 1
    except OSError as e:
        logger.error(f"Analysis failed: could not write {output_path}: {e}")
        return 1


def cmd_batch(args):
    """Scan multiple locations from CSV"""
    setup_logging(args.verbose)

    if not os.path.exists(args.input):
        logger.error(f"Input file not found: {args.input}")
        return 1

    # Rows need either lat+lon or location
    locations = []
    with open(args.input, "r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        for row in reader:
            try:
                if row.get("lat") and row.get("lon"):
                    locations.append({
                        "name": row.get("name", ""),
                        "lat": float(row["lat"]),
                        "lon": float(row["lon"]),
                        "location": row.get("location") or None
                    })
                elif row.get("location"):
                    locations.append({
                        "name": row.get("name", ""),
                        "lat": None,
                        "lon": None,
                        "location": row["location"]
                    })
                else:
                    logger.warning(f"Skipping row without lat/lon or location: {row}")
            except ValueError as e:
                logger.warning(f"Skipping invalid row: {e}")

    if not locations:
        logger.error("No valid locations found in CSV")
        return 1

    logger.info(f"Processing {len(locations)} locations...")

    try:
        os.makedirs(args.output, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create output directory {args.output}: {e}")
        return 1

    pipeline = AreaScanPipeline(cache_dir=args.cache_dir)
    success = 0
    failed = 0

    for i, loc in enumerate(locations, 1):
        name = loc.get("name") or f"scan_{i:03d}"
        logger.info(f"[{i}/{len(locations)}] {name}")

        try:
            if loc["lat"] is not None:
                result = pipeline.run(
                    lat=loc["lat"],
                    lon=loc["lon"],
                    radius_m=args.radius,
                    location=loc["location"]
                )
            else:
                result = pipeline.run_location(loc["location"], radius_m=args.radius)

            filename = f"{name.replace(' ', '_').lower()}.json"
            pipeline.save(result, os.path.join(args.output, filename))

            logger.info(f"  ✓ {filename}")
            success += 1

        except ScanError as e:
            logger.error(f"  ✗ Analysis failed: {e}")
            failed += 1
        except OSError as e:
            logger.error(f"  ✗ Analysis failed: could not save {name}: {e}")
            failed += 1

        # Rate limiting
        if i < len(locations):
            time.sleep(args.delay)

    logger.info(f"\nComplete: {success} succeeded, {failed} failed")
    return 0 if failed == 0 else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Area Scan CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  Scan a coordinate:
    python cli.py scan --lat 12.9716 --lon 77.5946 --output scan.json

  Scan a named place and print a summary:
    python cli.py scan --location "Koramangala, Bangalore" --summary

  Batch scan from CSV (columns: name,lat,lon or name,location):
    python cli.py batch --input locations.csv --output ./scans/
        """
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Scan command
    scan_parser = subparsers.add_parser("scan", help="Scan one location")
    scan_parser.add_argument("--lat", type=float, help="Latitude")
    scan_parser.add_argument("--lon", type=float, help="Longitude")
    scan_parser.add_argument("--location", "-l", help="Location text to geocode instead of lat/lon")
    scan_parser.add_argument("--output", "-o", help="Output JSON file")
    scan_parser.add_argument("--radius", "-r", type=float, default=None, help="Search radius in meters")
    scan_parser.add_argument("--cache-dir", help="Cache raw Overpass responses here")
    scan_parser.add_argument("--no-accessibility", action="store_true", help="Skip road/transit/logistics scoring")
    scan_parser.add_argument("--summary", "-s", action="store_true", help="Print summary to stdout")
    scan_parser.set_defaults(func=cmd_scan)

    # Batch command
    batch_parser = subparsers.add_parser("batch", help="Batch scan from CSV file")
    batch_parser.add_argument("--input", "-i", required=True, help="Input CSV file")
    batch_parser.add_argument("--output", "-o", default="output", help="Output directory")
    batch_parser.add_argument("--radius", "-r", type=float, default=None, help="Search radius in meters")
    batch_parser.add_argument("--cache-dir", help="Cache raw Overpass responses here")
    batch_parser.add_argument("--delay", type=float, default=2.0, help="Delay between scans (seconds)")
    batch_parser.set_defaults(func=cmd_batch)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
