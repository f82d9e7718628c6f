# utils/summary.py
# Population tables for the walking time classes

import numpy as np
import pandas as pd

from config import POPULATION_FIELD, REACH_MINUTES, TT_FIELD
from models.color_scheme import ColorScheme
from models.travel_time import format_label


def _population(tracts):
    if POPULATION_FIELD in tracts.columns:
        return tracts[POPULATION_FIELD].astype("float64")
    return pd.Series(0.0, index=tracts.index)


def population_by_class(tracts, scheme: ColorScheme, column=TT_FIELD):
    """
    Tracts and population per legend class, in legend order.

    A trailing row with the scheme's no-data label is added only when some
    tracts fall outside every class.
    """
    pop = _population(tracts)
    classes = tracts[column].map(scheme.classify_label)

    order = list(scheme.labels)
    if (classes == scheme.na_label).any() and scheme.na_label not in order:
        order.append(scheme.na_label)

    total = float(pop.sum())
    rows = []
    for label in order:
        in_class = classes == label
        class_pop = float(pop[in_class].sum())
        rows.append({
            "Walking time": label,
            "Tracts": int(in_class.sum()),
            "Population": class_pop,
            "Percent": class_pop / total * 100.0 if total > 0 else 0.0,
        })
    return pd.DataFrame(rows).set_index("Walking time")


def destination_comparison(tracts, destinations, reach_minutes=REACH_MINUTES):
    """Median walking time and population share within reach, per destination."""
    pop = _population(tracts)
    total = float(pop.sum())

    rows = []
    for d in destinations:
        minutes = tracts[d].astype("float64")
        has_data = minutes.notna()
        within = (minutes <= reach_minutes) & has_data
        rows.append({
            "Destination": format_label(d),
            "Median (min)": float(np.nanmedian(minutes)) if has_data.any() else np.nan,
            f"Population within {reach_minutes} min": float(pop[within].sum()),
            "Percent": float(pop[within].sum()) / total * 100.0 if total > 0 else 0.0,
            "Tracts without data": int((~has_data).sum()),
        })
    return pd.DataFrame(rows).set_index("Destination")
