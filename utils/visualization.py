# utils/visualization.py
import folium
import geopandas as gpd
from loguru import logger

from config import (
    BASE_TILES_URL, LABEL_TILES_URL, MAX_ZOOM, MIN_ZOOM, START_ZOOM,
    TILE_ATTRIBUTION, TILE_SUBDOMAINS, TRACT_FILL_OPACITY,
    TRACT_HIGHLIGHT_WEIGHT, TRACT_LINE_COLOR, TRACT_WEIGHT, TT_FIELD,
)
from models.color_scheme import TRAVEL_TIME_SCHEME, ColorScheme
from models.travel_time import SelectionState, apply_selection, info_lines
from utils.data_loader import bounding_box

SELECT_PROMPT = "Select destinations, then<br/>hover over a tract for details"

# Hover text of each tract, one "Label: time" line per ticked destination
INFO_FIELD = "__info__"

_BOX_CSS = """
<style>
  .leafinfo {
      position: fixed;
      z-index: 9999;
      background-color: rgba(255, 255, 255, 0.9);
      box-shadow: 0 0 15px rgba(0, 0, 0, 0.2);
      border-radius: 5px;
      padding: 6px 8px;
      font: 13px/16px Arial, Helvetica, sans-serif;
  }
  .leafinfo h4 { margin: 0 0 4px; }
  .leaflegend { bottom: 30px; right: 10px; }
  .leaflegend b {
      display: inline-block;
      width: 14px;
      height: 14px;
      margin-right: 4px;
      vertical-align: middle;
  }
  .movebox { top: 10px; right: 10px; }
</style>
"""


def legend_element(scheme: ColorScheme, title="Walking time"):
    """Bottom-right legend box for ``scheme``."""
    html = (
        '<div class="leafinfo leaflegend">'
        '<p style="text-align:center; margin:0px 0px 4px 0px; line-height:16px;">'
        f"<strong>{title}</strong></p>"
        f"{scheme.legend_html()}"
        "</div>"
    )
    return folium.Element(html)


def info_element(selection: SelectionState):
    """Top-right info box; prompts for a selection when nothing is ticked."""
    if selection.is_empty:
        body = f"<h4>{SELECT_PROMPT}</h4>"
    else:
        names = ", ".join(selection.labels[d] for d in selection.selected)
        body = (
            '<h4 style="margin:0px;"><u>Walking time</u></h4>'
            f'<p style="margin:0px;">Slowest of: {names}</p>'
        )
    return folium.Element(f'<div class="leafinfo movebox">{body}</div>')


def add_base_tiles(m):
    """CARTO Positron without labels below, labels-only on top of the tracts."""
    folium.TileLayer(
        tiles=BASE_TILES_URL,
        attr=TILE_ATTRIBUTION,
        name="CartoDB Positron (no labels)",
        subdomains=TILE_SUBDOMAINS,
        max_zoom=20,
        control=False,
    ).add_to(m)
    folium.TileLayer(
        tiles=LABEL_TILES_URL,
        attr=TILE_ATTRIBUTION,
        name="Place labels",
        subdomains=TILE_SUBDOMAINS,
        max_zoom=20,
        overlay=True,
        pane="markerPane",
    ).add_to(m)
    return m


def build_walking_map(tracts: gpd.GeoDataFrame, selection: SelectionState,
                      scheme: ColorScheme = TRAVEL_TIME_SCHEME):
    """
    Build the walking time choropleth.

    Parameters
    ----------
    tracts : GeoDataFrame
        EPSG:4326 tracts with one walking-time column per destination.
        If it already carries the aggregated column (output of
        ``apply_selection`` for the same selection) it is used as is.
    selection : SelectionState
        Ticked destinations; tracts are coloured by the slowest of them.
    scheme : ColorScheme
        Classes applied to the aggregated walking time.

    Returns
    -------
    folium.Map
    """
    if tracts is None or len(tracts) == 0:
        raise ValueError("No tracts to map.")

    if TT_FIELD in tracts.columns:
        gdf = tracts.copy()
    else:
        gdf = apply_selection(tracts, selection.selected, column=TT_FIELD)

    if not selection.is_empty:
        gdf[INFO_FIELD] = [
            "<br/>".join(info_lines(rec, selection.selected, selection.labels))
            for rec in gdf.drop(columns="geometry").to_dict("records")
        ]

    bbox = bounding_box(gdf)
    m = folium.Map(
        location=[bbox["ymid"], bbox["xmid"]],
        zoom_start=START_ZOOM,
        min_zoom=MIN_ZOOM,
        max_zoom=MAX_ZOOM,
        tiles=None,
        zoom_control=False,
        max_bounds=True,
        min_lat=bbox["ymin"], max_lat=bbox["ymax"],
        min_lon=bbox["xmin"], max_lon=bbox["xmax"],
        control_scale=True,
    )
    add_base_tiles(m)

    def style_fn(feature):
        return {
            "fillColor": scheme.classify(feature["properties"].get(TT_FIELD)),
            "weight": TRACT_WEIGHT,
            "opacity": 1,
            "color": TRACT_LINE_COLOR,
            "fillOpacity": TRACT_FILL_OPACITY,
        }

    def highlight_fn(feature):
        return {"weight": TRACT_HIGHLIGHT_WEIGHT}

    tooltip = None
    if not selection.is_empty:
        tooltip = folium.GeoJsonTooltip(
            fields=[INFO_FIELD],
            labels=False,
            sticky=True,
        )

    folium.GeoJson(
        gdf.to_json(),
        name="Walking time",
        style_function=style_fn,
        highlight_function=highlight_fn,
        tooltip=tooltip,
    ).add_to(m)

    root = m.get_root()
    root.header.add_child(folium.Element(_BOX_CSS))
    root.html.add_child(legend_element(scheme))
    root.html.add_child(info_element(selection))

    m.fit_bounds([[bbox["ymin"], bbox["xmin"]], [bbox["ymax"], bbox["xmax"]]])
    logger.debug(f"Built walking map for {len(gdf)} tracts, selection={selection.selected}")
    return m
