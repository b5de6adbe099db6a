from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence, Union

import pandas as pd

from .data_loader import MONTH_COLUMN, YEAR_COLUMN, PathArg, YearResult, read_years


def summarize_results(
    results: Sequence[YearResult],
    fill_value: Optional[int] = None,
) -> pd.DataFrame:
    """Pivot already-read years into a MONTH x year count table."""
    frames = [result.data for result in results if result.ok]
    if not frames:
        return pd.DataFrame(index=pd.Index([], name=MONTH_COLUMN))

    counts = (
        pd.concat(frames, ignore_index=True)
        .groupby([YEAR_COLUMN, MONTH_COLUMN])
        .size()
        .rename("n")
        .reset_index()
    )
    summary = counts.pivot(index=MONTH_COLUMN, columns=YEAR_COLUMN, values="n")
    summary.columns.name = None

    if fill_value is not None:
        summary = summary.fillna(fill_value).astype(int)
    return summary


def summarize_years(
    years: Union[Any, Iterable[Any]],
    data_dir: Optional[PathArg] = None,
    fill_value: Optional[int] = None,
) -> pd.DataFrame:
    """
    Count accidents per month for each requested year.

    Returns a dataframe indexed by MONTH with one column per year that could
    be read. Month/year pairs without accidents are NaN unless ``fill_value``
    is given.
    """
    return summarize_results(read_years(years, data_dir), fill_value=fill_value)
