from pathlib import Path
from typing import List, Tuple

import pandas as pd
import pytest


# (STATE, MONTH, LONGITUD, LATITUDE)
Row = Tuple[int, int, float, float]


def _accidents_2013() -> List[Row]:
    rows: List[Row] = [
        (1, 1, -86.5, 32.4),
        (1, 1, -87.1, 33.9),
        (1, 1, 999.9999, 99.9999),
    ]
    for month in range(2, 13):
        rows.append((6, month, -118.2 - month / 10, 34.0 + month / 10))
    return rows


def _accidents_2014() -> List[Row]:
    rows: List[Row] = [(4, 1, 999.9999, 99.9999), (5, 1, 900.0, 90.0)]
    for month in range(2, 13):
        rows.append((6, month, -120.0, 36.5))
    rows.append((6, 2, -121.0, 37.5))
    return rows


def _accidents_2015() -> List[Row]:
    return [
        (6, 1, -119.0, 35.0),
        (6, 1, -119.5, 35.5),
    ]


def accident_frame(rows: List[Row]) -> pd.DataFrame:
    df = pd.DataFrame(rows, columns=["STATE", "MONTH", "LONGITUD", "LATITUDE"])
    df.insert(0, "ST_CASE", range(10001, 10001 + len(df)))
    return df


def write_year(directory: Path, year: int, rows: List[Row]) -> Path:
    path = directory / f"accident_{year}.csv.bz2"
    accident_frame(rows).to_csv(path, index=False, compression="bz2")
    return path


@pytest.fixture
def fars_dir(tmp_path: Path) -> Path:
    write_year(tmp_path, 2013, _accidents_2013())
    write_year(tmp_path, 2014, _accidents_2014())
    write_year(tmp_path, 2015, _accidents_2015())
    return tmp_path
