"""
Accident location maps.

``map_state`` loads one year of accidents, keeps a single state and draws each
accident with a known location as a point over US state borders. The view is
clipped to the bounding box of the plotted points.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

import pandas as pd
import plotly.graph_objects as go

from .data_loader import (
    LATITUDE_COLUMN,
    LONGITUDE_COLUMN,
    STATE_COLUMN,
    PathArg,
    load_year,
    parse_state,
    parse_year,
)
from .errors import InvalidStateError


logger = logging.getLogger(__name__)

NO_ACCIDENTS_MESSAGE = "no accidents to plot"

# Smallest axis span (degrees) so a single accident still gets a usable view.
_MIN_SPAN_DEG = 0.5

_MARKER_STYLE = {"size": 3, "color": "black", "opacity": 0.8}


def _axis_range(values: pd.Series) -> Tuple[float, float]:
    low, high = float(values.min()), float(values.max())
    if high - low < _MIN_SPAN_DEG:
        center = (low + high) / 2
        low, high = center - _MIN_SPAN_DEG / 2, center + _MIN_SPAN_DEG / 2
    return low, high


def plot_accident_points(
    data: pd.DataFrame,
    title: Optional[str] = None,
    show: bool = True,
) -> Optional[go.Figure]:
    """
    Draw accident locations on a map of US state borders.

    Rows whose longitude or latitude is NaN are skipped. When nothing is left
    to draw an informational notice is logged and ``None`` is returned without
    rendering.

    Args:
        data: Accident rows with ``LONGITUD`` and ``LATITUDE`` columns, sentinel
            codes already replaced by NaN.
        title: Optional figure title.
        show: Call ``fig.show()`` on the finished figure.

    Returns:
        The ``plotly.graph_objects.Figure`` or ``None`` when nothing was drawn.
    """
    points = data.dropna(subset=[LONGITUDE_COLUMN, LATITUDE_COLUMN])
    if points.empty:
        logger.info(NO_ACCIDENTS_MESSAGE)
        return None

    lon_range = _axis_range(points[LONGITUDE_COLUMN])
    lat_range = _axis_range(points[LATITUDE_COLUMN])

    fig = go.Figure(
        go.Scattergeo(
            lon=points[LONGITUDE_COLUMN],
            lat=points[LATITUDE_COLUMN],
            mode="markers",
            marker=_MARKER_STYLE,
            hoverinfo="lon+lat",
            showlegend=False,
        )
    )
    fig.update_geos(
        scope="north america",
        projection_type="mercator",
        resolution=50,
        showcountries=True,
        showsubunits=True,
        subunitcolor="gray",
        showland=True,
        landcolor="white",
        lonaxis_range=list(lon_range),
        lataxis_range=list(lat_range),
    )
    fig.update_layout(
        title=title,
        margin=dict(l=10, r=10, t=50 if title else 10, b=10),
    )

    if show:
        fig.show()
    return fig


def map_state(
    state_id: Any,
    year: Any,
    data_dir: Optional[PathArg] = None,
    show: bool = True,
) -> Optional[go.Figure]:
    """
    Plot the accidents of one state for one year.

    Raises:
        FileNotFoundError: No data file exists for ``year``.
        InvalidStateError: ``state_id`` does not occur in that year's data.
    """
    year = parse_year(year)
    data = load_year(year, data_dir)
    state_id = parse_state(state_id)

    if state_id not in set(data[STATE_COLUMN].dropna().unique()):
        raise InvalidStateError(state_id)

    subset = data[data[STATE_COLUMN] == state_id]
    if subset.empty:
        logger.info(NO_ACCIDENTS_MESSAGE)
        return None

    return plot_accident_points(
        subset,
        title=f"Fatal accidents, state {state_id}, {year}",
        show=show,
    )
