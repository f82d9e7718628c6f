# config.py
# ============================================
# Walking Access Map – configuration
# ============================================

import os

from dotenv import load_dotenv

load_dotenv()

# --------------------------------------------
# Data
# --------------------------------------------
# Precomputed tract travel times (GeoJSON). A local path or an http(s) URL.
DEFAULT_DATA_PATH = os.path.join("data", "travel_time_results_for_viz.geojson")
DATA_PATH_ENV = "WALKING_ACCESS_DATA"

ID_FIELD = "GEOID"
POPULATION_FIELD = "population"
SKIP_FIELDS = (ID_FIELD, POPULATION_FIELD)
DEFAULT_DESTINATION = "supermarkets"

# Derived column holding the aggregated walking time of each tract
TT_FIELD = "tt"

# --------------------------------------------
# Map
# --------------------------------------------
MIN_ZOOM = 11
MAX_ZOOM = 16
START_ZOOM = 12
MAP_WIDTH = 1000
MAP_HEIGHT = 650

TILE_ATTRIBUTION = (
    '&copy; <a href="https://www.openstreetmap.org/copyright">OSM</a> contributors'
    ' | Basemap &copy; <a href="https://carto.com/attributions">CARTO</a>'
)
BASE_TILES_URL = "https://{s}.basemaps.cartocdn.com/light_nolabels/{z}/{x}/{y}{r}.png"
LABEL_TILES_URL = "https://{s}.basemaps.cartocdn.com/light_only_labels/{z}/{x}/{y}{r}.png"
TILE_SUBDOMAINS = "abcd"

# Tract polygon style
TRACT_WEIGHT = 0.25
TRACT_HIGHLIGHT_WEIGHT = 3
TRACT_LINE_COLOR = "#222"
TRACT_FILL_OPACITY = 0.9

# Share of population "within reach" on the comparison page (minutes)
REACH_MINUTES = 15
