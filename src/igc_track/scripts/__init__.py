"""
igc_track Scripts Package

This package contains command-line scripts for converting parsed IGC flight
tracks to other formats.

Available scripts:
- igc_to_geojson: Convert IGC files to GeoJSON format
"""

__version__ = "1.0.0"
__all__ = ["igc_to_geojson"]
