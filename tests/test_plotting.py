import os

import matplotlib
import pytest

from onlinefit import LinearRegression, Observation, RegressionData
from onlinefit.plotting import plot_history, plot_regression, style


def _engine(points):
    engine = LinearRegression(
        ignoring_variance_in_y=False, minimum_variance_in_y=0.25, keeping_history=True
    )
    for x, y in points:
        engine.add(Observation.from_values(x, y, y_standard_deviation=0.5))
    return engine


@pytest.mark.parametrize(
    "points",
    [
        [(0, 1), (1, 2.9), (2, 5.2), (3, 7.1)],
        [(2, 1), (2, 4)],
        [(1, 1), (1, 1)],
        [(3, 3)],
    ],
)
def test_plot_regression_writes_png(tmp_path, points):
    path = plot_regression(_engine(points).current_data, str(tmp_path), formats=("png",))
    assert path == os.path.join(str(tmp_path), "regression.png")
    assert os.path.getsize(path) > 0


def test_plot_regression_writes_every_format(tmp_path):
    data = _engine([(0, 0), (1, 1), (2, 2.5)]).current_data
    plot_regression(data, str(tmp_path), filename="fit.png", formats=("png", "svg"))
    assert (tmp_path / "fit.png").exists()
    assert (tmp_path / "fit.svg").exists()
    assert not (tmp_path / "fit.pdf").exists()


def test_plot_regression_rejects_empty_snapshot(tmp_path):
    with pytest.raises(ValueError, match="without observations"):
        plot_regression(RegressionData.empty(), str(tmp_path), formats=("png",))


def test_plot_history(tmp_path):
    engine = _engine([(0, 1), (1, 2.9), (1, 2.9), (2, 5.2), (3, 7.1)])
    path = plot_history(engine.history, str(tmp_path), formats=("png",))
    assert path.endswith("history.png")
    assert os.path.getsize(path) > 0


def test_plot_history_rejects_empty(tmp_path):
    with pytest.raises(ValueError, match="empty"):
        plot_history([], str(tmp_path), formats=("png",))


def test_set_global_style_applies_shared_rcparams(monkeypatch):
    monkeypatch.setitem(style._STYLE_STATE, "initialized", False)
    with matplotlib.rc_context():
        style.set_global_style()
        assert style._STYLE_STATE["initialized"]
        assert matplotlib.rcParams["errorbar.capsize"] == 3.0
        assert matplotlib.rcParams["savefig.dpi"] == style.FIGURE_DPI
        assert matplotlib.rcParams["font.size"] == style.STYLE.BASE_FONTSIZE
