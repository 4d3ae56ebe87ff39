#!/usr/bin/env python3
"""
IGC to GeoJSON Converter Script

Parses an IGC flight log and writes a GeoJSON FeatureCollection holding the
flight track as a LineString (``[lon, lat, gps_altitude]``) and one Point per
declared task turnpoint.  Output goes to ``config.DIR.GEOJSON`` unless an
explicit path is given.

Usage:
    igc-to-geojson <input_igc_file> [-o OUTPUT] [-v]

Example:
    igc-to-geojson IGCData/07_niskie_ladowanie.igc
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

import rich.console
import rich.logging
import rich.markup

from igc_track.config import config
from igc_track.geodesy import leg_distances
from igc_track.igc_parser import parse_igc_file
from igc_track.track_data import FlightTrack, IGCFormatError
from igc_track.utils import flight_summary_text

logger = logging.getLogger(__name__)


class EscapeMarkupFilter(logging.Filter):
    """Escape rich markup in the rendered message.

    Log arguments carry text read from IGC files; only the handler's format
    string is interpreted as markup.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = rich.markup.escape(record.getMessage())
        record.args = ()
        return True


def setup_logging(verbose: bool = False):
    log_format = r"\[[bold]%(name)s[/bold]] %(message)s"
    handler = rich.logging.RichHandler(
        console=rich.console.Console(color_system="auto"),
        show_level=True,
        show_path=False,
        enable_link_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=False,
        markup=True,
    )
    handler.addFilter(EscapeMarkupFilter())
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=log_format,
        datefmt="[%X]",
        handlers=[handler],
    )


def create_geojson(track: FlightTrack) -> dict[str, Any]:
    """
    Build a GeoJSON FeatureCollection from a parsed flight track.

    Raises:
        ValueError: if the track has no position fixes.
    """
    if not track.fixes:
        raise ValueError("No position fixes found in IGC file")

    coordinates = [[fix.longitude, fix.latitude, fix.gps_altitude] for fix in track.fixes]
    gps_altitudes = track.gps_altitudes

    properties: dict[str, Any] = {
        "name": "Flight Track",
        "description": f"Flight track with {len(track.fixes)} points",
        "total_points": len(track.fixes),
        "start_time": track.fixes[0].time.isoformat(),
        "end_time": track.fixes[-1].time.isoformat(),
        "track_length_km": round(float(leg_distances(track.lat_longs).sum()), 3),
        "elevation_stats": {
            "min_elevation": min(gps_altitudes),
            "max_elevation": max(gps_altitudes),
            "avg_elevation": round(sum(gps_altitudes) / len(gps_altitudes), 2),
        },
        "headers": {header.name: header.value.strip() for header in track.headers},
        "source": "IGC",
        "coordinate_system": "WGS84",
    }
    if track.task.takeoff_name:
        properties["takeoff"] = track.task.takeoff_name
    if track.task.landing_name:
        properties["landing"] = track.task.landing_name

    features: list[dict[str, Any]] = [
        {
            "type": "Feature",
            "geometry": {"type": "LineString", "coordinates": coordinates},
            "properties": properties,
        }
    ]
    for order, turnpoint in enumerate(track.task.turnpoints, start=1):
        features.append(
            {
                "type": "Feature",
                "geometry": {
                    "type": "Point",
                    "coordinates": [turnpoint.longitude, turnpoint.latitude],
                },
                "properties": {"name": turnpoint.name.strip(), "order": order},
            }
        )

    return {"type": "FeatureCollection", "features": features}


def save_geojson(geojson_data: dict[str, Any], output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(geojson_data, indent=2) + "\n", encoding="utf-8")
    logger.info("GeoJSON file saved to: %s", output_path)


def main(argv: list[str] | None = None) -> int:
    """Command line entry point; returns the process exit status."""
    parser = argparse.ArgumentParser(
        description="Convert an IGC file to GeoJSON format",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  igc-to-geojson flight.igc                    # Write to the GeoJSON data directory
  igc-to-geojson flight.igc -o out.geojson     # Write to a specific file
        """,
    )
    parser.add_argument("input", type=Path, help="Path to the IGC file")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Output GeoJSON file path (default: <stem>_igc.geojson in config.DIR.GEOJSON)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    input_path: Path = args.input
    output_path: Path = args.output or config.DIR.GEOJSON / f"{input_path.stem}_igc.geojson"

    try:
        logger.info("Reading IGC file: %s", input_path)
        track = parse_igc_file(input_path)
        geojson_data = create_geojson(track)
        save_geojson(geojson_data, output_path)
    except IGCFormatError as exc:
        logger.error("%s is not a valid IGC file (%s): %s", input_path, exc.kind, exc)
        return 1
    except (OSError, ValueError) as exc:
        logger.error("Error processing %s: %s", input_path, exc)
        return 1

    # Summary
    props = geojson_data["features"][0]["properties"]
    summary = flight_summary_text(track)
    if summary:
        logger.info("  %s", summary)
    logger.info("  Total points: %d", props["total_points"])
    logger.info("  Track length: %.1f km", props["track_length_km"])
    logger.info(
        "  GPS altitude: %d m - %d m",
        props["elevation_stats"]["min_elevation"],
        props["elevation_stats"]["max_elevation"],
    )
    if track.task.turnpoints:
        logger.info("  Task: %d turnpoints", len(track.task.turnpoints))

    return 0


if __name__ == "__main__":
    sys.exit(main())
