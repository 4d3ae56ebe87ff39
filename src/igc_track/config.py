import pathlib

import pydantic_settings


class IGCTrackDirs(pydantic_settings.BaseSettings):
    PROJECT_ROOT: pathlib.Path = pathlib.Path(__file__).parents[2]
    IGC: pathlib.Path = PROJECT_ROOT / "IGCData"

    PROCESSED_DATA: pathlib.Path = PROJECT_ROOT / "ProcessedData"
    GEOJSON: pathlib.Path = PROCESSED_DATA / "GeoJSONData"


class IGCTrackConfig(pydantic_settings.BaseSettings):
    DIR: IGCTrackDirs = IGCTrackDirs()

    # --- Barogram ---
    # Multiplier applied to altitudes in metres before charting (3.28084 for feet)
    ALTITUDE_CONVERSION_FACTOR: float = 1.0

    # Tracks longer than the threshold are pruned to roughly TARGET_POINTS samples
    PRUNING_THRESHOLD: int = 200
    PRUNING_TARGET_POINTS: int = 50

    # --- Geodesy ---
    # Units: kilometres (2 * mean Earth radius)
    EARTH_DIAMETER_KM: float = 12742.0


config = IGCTrackConfig()
