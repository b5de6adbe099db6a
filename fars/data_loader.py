from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from os import getenv
from pathlib import Path
from typing import Any, Iterable, List, Optional, Type, Union

import numpy as np
import pandas as pd

from .errors import StateParseError, YearParseError


logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = REPO_ROOT / "data"
DATA_DIR_ENV = "FARS_DATA_DIR"

FILENAME_TEMPLATE = "accident_{year}.csv.bz2"

STATE_COLUMN = "STATE"
MONTH_COLUMN = "MONTH"
YEAR_COLUMN = "year"
LONGITUDE_COLUMN = "LONGITUD"
LATITUDE_COLUMN = "LATITUDE"

# Coordinate codes above these limits mean the location was not reported.
LONGITUDE_SENTINEL = 900
LATITUDE_SENTINEL = 90

PathArg = Union[str, Path]


@dataclass(frozen=True)
class YearResult:
    """One year's (MONTH, year) table, or ``data=None`` plus the ``warning`` explaining why."""

    year: Any
    data: Optional[pd.DataFrame] = None
    warning: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.data is not None


def _parse_int(value: Any, error_cls: Type[ValueError], label: str) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise error_cls(f"{label} must be an integer, got {value!r}")
    if isinstance(value, (int, np.integer)):
        return int(value)
    if isinstance(value, (float, np.floating)):
        if math.isnan(value) or not float(value).is_integer():
            raise error_cls(f"{label} must be an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise error_cls(f"{label} must be an integer, got {value!r}") from None
        if math.isnan(number) or not number.is_integer():
            raise error_cls(f"{label} must be an integer, got {value!r}")
        return int(number)
    raise error_cls(f"{label} must be an integer, got {value!r}")


def parse_year(value: Any) -> int:
    """Parse a year given as an int, an integral float or a numeric string.

    Strings follow the same rule as floats: ``"2013"`` and ``"2013.0"`` both
    give 2013 while ``"2013.5"`` is rejected.

    No range is enforced: negative or zero years parse fine and simply map to
    a filename that will not exist.
    """
    return _parse_int(value, YearParseError, "year")


def parse_state(value: Any) -> int:
    """Parse a FARS state id the same way as :func:`parse_year`."""
    return _parse_int(value, StateParseError, "state id")


def resolve_data_dir(data_dir: Optional[PathArg] = None) -> Path:
    """Return the directory holding the yearly accident files.

    An explicit ``data_dir`` wins, then the ``FARS_DATA_DIR`` environment
    variable, then ``<repo>/data``.
    """
    if data_dir is not None:
        return Path(data_dir)
    env_dir = getenv(DATA_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    return DATA_DIR


def build_filename(year: Any) -> str:
    """Return the canonical file name for a year, e.g. ``accident_2013.csv.bz2``."""
    return FILENAME_TEMPLATE.format(year=parse_year(year))


def read_table(filename: PathArg) -> pd.DataFrame:
    """Load a (possibly bz2-compressed) CSV file into a DataFrame."""
    data_path = Path(filename)
    if not data_path.exists():
        raise FileNotFoundError(f"file '{data_path}' does not exist")

    # low_memory=False keeps pandas from warning about mixed-type columns.
    return pd.read_csv(data_path, low_memory=False)


def mask_coordinate_sentinels(df: pd.DataFrame) -> pd.DataFrame:
    """Replace out-of-range longitude/latitude codes with NaN."""
    df = df.copy()
    limits = {
        LONGITUDE_COLUMN: LONGITUDE_SENTINEL,
        LATITUDE_COLUMN: LATITUDE_SENTINEL,
    }
    for col, limit in limits.items():
        if col not in df.columns:
            continue
        values = pd.to_numeric(df[col], errors="coerce")
        df[col] = values.where(values <= limit)
    return df


def year_path(year: Any, data_dir: Optional[PathArg] = None) -> Path:
    return resolve_data_dir(data_dir) / build_filename(year)


def load_year(year: Any, data_dir: Optional[PathArg] = None) -> pd.DataFrame:
    """Read one year of accidents with sentinel coordinates already masked."""
    path = year_path(year, data_dir)
    logger.debug("Loading %s", path)
    return mask_coordinate_sentinels(read_table(path))


def available_years(data_dir: Optional[PathArg] = None) -> List[int]:
    """List the years that have a data file in the data directory."""
    directory = resolve_data_dir(data_dir)
    if not directory.is_dir():
        return []
    years = []
    for path in directory.glob("accident_*.csv.bz2"):
        stem = path.name[len("accident_"):-len(".csv.bz2")]
        try:
            years.append(parse_year(stem))
        except YearParseError:
            continue
    return sorted(years)


def _read_month_year(year: Any, data_dir: Optional[PathArg]) -> pd.DataFrame:
    parsed = parse_year(year)
    df = read_table(year_path(parsed, data_dir))
    return df.assign(**{YEAR_COLUMN: parsed})[[MONTH_COLUMN, YEAR_COLUMN]]


def read_years(
    years: Union[Any, Iterable[Any]],
    data_dir: Optional[PathArg] = None,
) -> List[YearResult]:
    """Read the MONTH column of each year's file, tagged with that year.

    Returns one :class:`YearResult` per requested year, in input order. A year
    that cannot be read does not stop the others: its result carries no data
    and an ``invalid year`` warning, which is also logged.
    """
    if isinstance(years, (str, bytes, int, float, np.integer, np.floating)):
        years = [years]

    results: List[YearResult] = []
    for year in years:
        try:
            data = _read_month_year(year, data_dir)
        except (OSError, ValueError, KeyError) as exc:
            message = f"invalid year: {year}"
            logger.warning("%s (%s)", message, exc)
            results.append(YearResult(year=year, warning=message))
            continue
        results.append(YearResult(year=parse_year(year), data=data))
    return results
