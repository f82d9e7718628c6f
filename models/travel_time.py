# models/travel_time.py
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import geopandas as gpd
from loguru import logger

from config import DEFAULT_DESTINATION, SKIP_FIELDS, TT_FIELD
from models.color_scheme import is_number

# Aggregated value when no destination is selected; lands in the top class
NOT_APPLICABLE = 999

LOWER_LIMIT_MIN = 5
UPPER_LIMIT_MIN = 30


def _as_minutes(value) -> Optional[float]:
    """Float minutes, or None for absent / NaN / non-numeric values."""
    if not is_number(value):
        return None
    return float(value)


def aggregate(record: Mapping, selected: Iterable[str]) -> Optional[float]:
    """
    Representative walking time of one tract for the selected destinations.

    Returns NOT_APPLICABLE when nothing is selected, otherwise the maximum over
    the selected fields. Missing or non-numeric fields are skipped; if every
    selected field is missing the result is None.
    """
    selected = list(selected)
    if not selected:
        return NOT_APPLICABLE

    values = [_as_minutes(record.get(name)) for name in selected]
    values = [v for v in values if v is not None]
    if not values:
        return None
    return max(values)


def format_label(raw_name: str) -> str:
    with_spaces = raw_name.replace("_", " ")
    return with_spaces[:1].upper() + with_spaces[1:]


def format_travel_time(minutes) -> str:
    minutes = _as_minutes(minutes)
    if minutes is None:
        return "No data"
    if minutes < LOWER_LIMIT_MIN:
        return f"<{LOWER_LIMIT_MIN} min."
    if minutes > UPPER_LIMIT_MIN:
        return f">{UPPER_LIMIT_MIN} min."
    # Halves round up
    return f"{int(math.floor(minutes + 0.5))} min."


def info_lines(record: Mapping, selected: Sequence[str],
               labels: Mapping[str, str]) -> List[str]:
    return [
        f"{labels.get(d, format_label(d))}: {format_travel_time(record.get(d))}"
        for d in selected
    ]


def destination_fields(columns: Iterable[str],
                       skip_fields: Sequence[str] = SKIP_FIELDS) -> List[str]:
    """Destination columns of a travel-time table, in table order."""
    skip = set(skip_fields) | {"geometry", TT_FIELD}
    return [c for c in columns if c not in skip]


def default_selection(destinations: Sequence[str]) -> List[str]:
    if DEFAULT_DESTINATION in destinations:
        return [DEFAULT_DESTINATION]
    return list(destinations[:1])


@dataclass(frozen=True)
class SelectionState:
    """Destinations currently ticked, plus their display labels."""
    selected: Tuple[str, ...] = ()
    labels: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_destinations(cls, destinations: Sequence[str],
                          selected: Iterable[str] = ()):
        labels = {d: format_label(d) for d in destinations}
        selected = list(selected)
        unknown = [s for s in selected if s not in labels]
        if unknown:
            raise KeyError(f"Unknown destinations selected: {unknown}")
        # Keep destination order regardless of click order
        chosen = set(selected)
        return cls(tuple(d for d in destinations if d in chosen), labels)

    @property
    def is_empty(self) -> bool:
        return not self.selected


def apply_selection(tracts: gpd.GeoDataFrame, selected: Sequence[str],
                    column: str = TT_FIELD) -> gpd.GeoDataFrame:
    """Copy of ``tracts`` with ``column`` set to the aggregated walking time."""
    out = tracts.copy()
    selected = list(selected)
    missing = [s for s in selected if s not in out.columns]
    if missing:
        logger.warning(f"Selected destinations not in data, skipped: {missing}")

    out[column] = [aggregate(rec, selected) for rec in out.to_dict("records")]
    out[column] = out[column].astype("float64")

    n_missing = int(out[column].isna().sum())
    if n_missing:
        logger.warning(f"{n_missing} tracts have no walking time for {selected}")
    logger.debug(f"Recomputed '{column}' for {len(out)} tracts, selection={selected}")
    return out
