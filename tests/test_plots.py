"""Test suite for the PIT diagram."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from pitens import PITConfig, PlotResult, compute_pit, pit_diagram_coordinates, plot_pit_diagram


@pytest.fixture
def result():
    x = [5.0, 15.0, np.nan, -1.0]
    ens = [
        [1.0, 2.0, 3.0, 4.0, 5.0],
        [20.0, 21.0, 22.0, 23.0, 24.0],
        [1.0, 2.0, 3.0, 4.0, 5.0],
        [1.0, 2.0, 3.0, 4.0, 5.0],
    ]
    return compute_pit(x, ens)


class TestPlotResult:
    """Test PlotResult dataclass."""

    def test_boolean(self):
        assert not PlotResult(created=False, figure=None, message="nothing")
        fig = plt.figure()
        assert PlotResult(created=True, figure=fig)
        plt.close(fig)


class TestCoordinates:
    """Test PIT diagram coordinates."""

    def test_rank_over_length(self):
        pit, ecdf = pit_diagram_coordinates([0.5, 0.5, 0.2, 1.0])
        np.testing.assert_array_equal(pit, [0.5, 0.5, 0.2, 1.0])
        np.testing.assert_allclose(ecdf, [0.5, 0.5, 0.25, 1.0])

    def test_empty(self):
        pit, ecdf = pit_diagram_coordinates([])
        assert pit.size == 0
        assert ecdf.size == 0


class TestPlotPitDiagram:
    """Test PIT diagram rendering."""

    def test_creates_figure(self, result):
        plot = plot_pit_diagram(result)
        assert plot
        assert plot.message is None
        ax = plot.figure.axes[0]
        assert ax.get_title() == "PIT diagram, alpha = 0.50, xi = 0.00"
        assert ax.get_xlim() == (0.0, 1.0)
        assert ax.get_ylim() == (0.0, 1.0)
        plt.close(plot.figure)

    def test_draws_on_given_axes(self, result):
        fig, ax = plt.subplots()
        plot = plot_pit_diagram(result, ax=ax)
        assert plot.figure is fig
        plt.close(fig)

    def test_result_plot_method(self, result):
        plot = result.plot(figsize=(4, 4))
        assert plot.created
        plt.close(plot.figure)

    def test_nothing_to_plot(self):
        cfg = PITConfig(discard_warning_fraction=None)
        with pytest.warns(RuntimeWarning):
            empty = compute_pit([np.nan], [[1.0, 2.0]], cfg)
        plot = plot_pit_diagram(empty)
        assert not plot
        assert plot.figure is None
        assert plot.message
