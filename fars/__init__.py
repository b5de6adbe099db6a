"""Summaries and maps of FARS (Fatality Analysis Reporting System) accident files."""

from .data_loader import (  # noqa: F401
    YearResult,
    build_filename,
    load_year,
    parse_state,
    parse_year,
    read_table,
    read_years,
)
from .errors import InvalidStateError, StateParseError, YearParseError  # noqa: F401
from .mapping import map_state, plot_accident_points  # noqa: F401
from .summary import summarize_results, summarize_years  # noqa: F401
