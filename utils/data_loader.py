# utils/data_loader.py
# Intake of the precomputed tract travel-time payload (GeoJSON)

import os
import tempfile
from urllib.parse import urlparse

import geopandas as gpd
import pandas as pd
import requests
from loguru import logger

from config import DATA_PATH_ENV, DEFAULT_DATA_PATH, ID_FIELD, POPULATION_FIELD
from models.travel_time import destination_fields


def _is_url(path):
    return urlparse(str(path)).scheme in ("http", "https")


def download_file(url, local_path, label="travel times"):
    """Stream ``url`` to ``local_path`` unless it is already there."""
    if os.path.exists(local_path):
        logger.debug(f"Using cached {label}: {local_path}")
        return local_path
    logger.info(f"Downloading {label} from {url}")
    with requests.get(url, stream=True, allow_redirects=True, timeout=60) as r:
        r.raise_for_status()
        with open(local_path, "wb") as f:
            for chunk in r.iter_content(chunk_size=8192):
                f.write(chunk)
    return local_path


def get_data_path(source=None):
    """
    Local path of the travel-time GeoJSON.

    ``source`` defaults to $WALKING_ACCESS_DATA, then DEFAULT_DATA_PATH.
    Remote sources are downloaded once into the temp directory.
    """
    source = source or os.getenv(DATA_PATH_ENV) or DEFAULT_DATA_PATH
    if not _is_url(source):
        if not os.path.exists(source):
            raise FileNotFoundError(
                f"Travel time data not found: {source} "
                f"(set {DATA_PATH_ENV} to a GeoJSON path or URL)"
            )
        return source

    data_dir = os.path.join(tempfile.gettempdir(), "walking_access_data")
    os.makedirs(data_dir, exist_ok=True)
    name = os.path.basename(urlparse(source).path) or "travel_times.geojson"
    return download_file(source, os.path.join(data_dir, name))


def load_travel_times(path) -> gpd.GeoDataFrame:
    """
    Read tract travel times and check their shape.

    Expected properties per tract: GEOID, population (optional) and one
    numeric column of walking minutes per destination category.
    """
    tracts = gpd.read_file(path)
    if tracts.empty:
        raise ValueError(f"No tracts in {path}")
    if ID_FIELD not in tracts.columns:
        raise KeyError(f"Travel time data must contain a '{ID_FIELD}' column.")

    destinations = destination_fields(tracts.columns)
    if not destinations:
        raise ValueError("Travel time data has no destination columns.")

    for col in destinations:
        before = tracts[col].notna().sum()
        tracts[col] = pd.to_numeric(tracts[col], errors="coerce")
        dropped = before - tracts[col].notna().sum()
        if dropped:
            logger.warning(f"{dropped} non-numeric values in '{col}' set to missing")

    if POPULATION_FIELD in tracts.columns:
        tracts[POPULATION_FIELD] = pd.to_numeric(
            tracts[POPULATION_FIELD], errors="coerce"
        ).fillna(0)

    if tracts.crs is None:
        logger.warning("Travel time data has no CRS; assuming EPSG:4326")
        tracts = tracts.set_crs(epsg=4326)
    elif tracts.crs.to_epsg() != 4326:
        tracts = tracts.to_crs(epsg=4326)

    tracts[ID_FIELD] = tracts[ID_FIELD].astype(str)
    logger.info(f"Loaded {len(tracts)} tracts with destinations {destinations}")
    return tracts


def bounding_box(tracts: gpd.GeoDataFrame):
    xmin, ymin, xmax, ymax = (float(v) for v in tracts.total_bounds)
    return {
        "xmin": xmin, "xmax": xmax,
        "ymin": ymin, "ymax": ymax,
        "xmid": (xmin + xmax) / 2.0,
        "ymid": (ymin + ymax) / 2.0,
    }
