import logging

import pandas as pd
import plotly.graph_objects as go
import pytest

from fars.errors import InvalidStateError
from fars.mapping import NO_ACCIDENTS_MESSAGE, map_state, plot_accident_points


@pytest.fixture
def no_show(monkeypatch):
    calls = []
    monkeypatch.setattr(go.Figure, "show", lambda self, *a, **kw: calls.append(self))
    return calls


def test_map_state_invalid_state(fars_dir):
    with pytest.raises(InvalidStateError, match="invalid STATE number: 99") as excinfo:
        map_state(99, 2013, data_dir=fars_dir, show=False)
    assert excinfo.value.state_id == 99


def test_map_state_missing_year(fars_dir):
    with pytest.raises(FileNotFoundError, match="accident_2000.csv.bz2"):
        map_state(1, 2000, data_dir=fars_dir, show=False)


def test_map_state_plots_valid_points(fars_dir):
    fig = map_state("1", 2013, data_dir=fars_dir, show=False)

    assert isinstance(fig, go.Figure)
    trace = fig.data[0]
    assert list(trace.lon) == pytest.approx([-86.5, -87.1])
    assert list(trace.lat) == pytest.approx([32.4, 33.9])
    assert list(fig.layout.geo.lonaxis.range) == pytest.approx([-87.1, -86.5])
    assert list(fig.layout.geo.lataxis.range) == pytest.approx([32.4, 33.9])
    assert "2013" in fig.layout.title.text


def test_map_state_shows_figure(fars_dir, no_show):
    fig = map_state(6, 2013, data_dir=fars_dir)
    assert len(no_show) == 1
    assert no_show[0] is fig
    assert len(fig.data[0].lon) == 11


def test_map_state_nothing_to_plot(fars_dir, no_show, caplog):
    # state 4 only has an accident coded 999.9999 / 99.9999 in 2014
    with caplog.at_level(logging.INFO, logger="fars.mapping"):
        assert map_state(4, 2014, data_dir=fars_dir) is None
    assert NO_ACCIDENTS_MESSAGE in caplog.text
    assert no_show == []


def test_map_state_keeps_coordinates_at_the_limits(fars_dir):
    # 900 / 90 are valid values; only codes above them are unreported
    fig = map_state(5, 2014, data_dir=fars_dir, show=False)
    assert list(fig.data[0].lon) == pytest.approx([900.0])
    assert list(fig.data[0].lat) == pytest.approx([90.0])


def test_plot_accident_points_empty_subset(no_show, caplog):
    empty = pd.DataFrame(columns=["STATE", "MONTH", "LONGITUD", "LATITUDE"])
    with caplog.at_level(logging.INFO, logger="fars.mapping"):
        assert plot_accident_points(empty) is None
    assert [r.getMessage() for r in caplog.records] == [NO_ACCIDENTS_MESSAGE]
    assert no_show == []


def test_plot_accident_points_widens_single_point():
    data = pd.DataFrame({"LONGITUD": [-100.0], "LATITUDE": [40.0]})
    fig = plot_accident_points(data, show=False)
    low, high = fig.layout.geo.lonaxis.range
    assert low < -100.0 < high
    assert high - low == pytest.approx(0.5)
    assert fig.layout.title.text is None
