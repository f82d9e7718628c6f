# models/color_scheme.py
"""
Threshold and category colour schemes for choropleth maps.

A scheme is a single tagged type: ``kind`` says whether ``keys`` are ascending
numeric thresholds or exact-match categories, and ``classify`` dispatches on it.
Malformed schemes fail when they are built, so lookups never raise.
"""

import math
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Any, List, NamedTuple, Sequence, Tuple


class SchemeConfigError(ValueError):
    """Raised when a colour scheme is built from inconsistent inputs."""


class SchemeKind(Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


class LegendEntry(NamedTuple):
    color: str
    label: str


def is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return not math.isnan(value)


@dataclass(frozen=True)
class ColorScheme:
    kind: SchemeKind
    keys: Tuple[Any, ...]
    colors: Tuple[str, ...]
    labels: Tuple[str, ...]
    na_color: str = "#888"
    na_label: str = "No data"

    def __post_init__(self):
        n = len(self.keys)
        if n == 0:
            raise SchemeConfigError("Colour scheme needs at least one class.")
        if len(self.colors) != n or len(self.labels) != n:
            raise SchemeConfigError(
                f"Colour scheme lengths differ: {n} keys, "
                f"{len(self.colors)} colors, {len(self.labels)} labels."
            )

        if self.kind is SchemeKind.NUMERIC:
            bad = [k for k in self.keys if not is_number(k)]
            if bad:
                raise SchemeConfigError(f"Non-numeric thresholds: {bad}")
            for lower, upper in zip(self.keys, self.keys[1:]):
                if not lower < upper:
                    raise SchemeConfigError(
                        f"Thresholds must strictly increase, got {lower} then {upper}."
                    )
        elif self.kind is SchemeKind.CATEGORICAL:
            seen = set()
            for key in self.keys:
                if key in seen:
                    raise SchemeConfigError(f"Duplicate category: {key!r}")
                seen.add(key)
        else:
            raise SchemeConfigError(f"Unknown scheme kind: {self.kind!r}")

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------
    @classmethod
    def numeric(cls, limits_asc: Sequence[float], colors: Sequence[str],
                labels: Sequence[str], na_color="#888", na_label="No data"):
        return cls(SchemeKind.NUMERIC, tuple(limits_asc), tuple(colors),
                   tuple(labels), na_color, na_label)

    @classmethod
    def categorical(cls, categories: Sequence[Any], colors: Sequence[str],
                    labels: Sequence[str], na_color="#888", na_label="No data"):
        return cls(SchemeKind.CATEGORICAL, tuple(categories), tuple(colors),
                   tuple(labels), na_color, na_label)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def class_index(self, value):
        """Index of the class ``value`` falls in, or None when unmatched."""
        if self.kind is SchemeKind.NUMERIC:
            if not is_number(value):
                return None
            found = None
            # Last threshold <= value wins
            for ii, limit in enumerate(self.keys):
                if value >= limit:
                    found = ii
            return found

        for ii, category in enumerate(self.keys):
            try:
                if value == category:
                    return ii
            except (TypeError, ValueError):
                # e.g. comparing arrays; treated as no match
                continue
        return None

    def classify(self, value) -> str:
        ii = self.class_index(value)
        return self.na_color if ii is None else self.colors[ii]

    def classify_label(self, value) -> str:
        ii = self.class_index(value)
        return self.na_label if ii is None else self.labels[ii]

    # ------------------------------------------------------------------
    # Legend
    # ------------------------------------------------------------------
    def legend_entries(self) -> List[LegendEntry]:
        return [LegendEntry(c, l) for c, l in zip(self.colors, self.labels)]

    def legend_html(self) -> str:
        """Swatch + label per class, one per line, no trailing <br/>."""
        return "<br/>".join(
            f'<b style="background:{entry.color}"></b> {entry.label}'
            for entry in self.legend_entries()
        )


# Walking time, 5-minute classes
TRAVEL_TIME_SCHEME = ColorScheme.numeric(
    limits_asc=[0, 5, 10, 15, 20, 25, 30],
    colors=["#0868ac", "#5aabac", "#abedab", "#fda668", "#dd643c", "#b8432e", "#999999"],
    labels=[
        "Under 5 min", "5 - 10 min", "10 - 15 min", "15 - 20 min", "20 - 25 min",
        "25 - 30 min", "Over 30 min",
    ],
)
