import geopandas as gpd
import numpy as np
import pytest
from shapely.geometry import box


@pytest.fixture
def tracts():
    """Four square tracts with walking minutes to three destinations."""
    return gpd.GeoDataFrame(
        {
            "GEOID": ["001", "002", "003", "004"],
            "population": [100, 200, 300, 400],
            "supermarkets": [3.0, 8.5, 14.6, 31.5],
            "pharmacies": [6.8, 11.0, 22.1, 28.4],
            "fire_stations": [12.4, 17.9, np.nan, 44.0],
        },
        geometry=[
            box(-122.34, 47.60, -122.33, 47.61),
            box(-122.33, 47.60, -122.32, 47.61),
            box(-122.34, 47.61, -122.33, 47.62),
            box(-122.33, 47.61, -122.32, 47.62),
        ],
        crs="EPSG:4326",
    )
