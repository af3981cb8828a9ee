"""PIT diagram: PIT values against their empirical CDF, with the 1:1 line."""

from dataclasses import dataclass
from typing import Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .pit import pit_ranks


@dataclass
class PlotResult:
    """Result of plotting a PIT diagram."""

    created: bool
    figure: Optional[plt.Figure]
    message: Optional[str] = None

    def __bool__(self) -> bool:
        return self.created


def pit_diagram_coordinates(pit) -> Tuple[np.ndarray, np.ndarray]:
    """
    Points of the PIT diagram.

    Returns
    -------
    pit_values : np.ndarray
        The PIT values, unchanged.
    ecdf_values : np.ndarray
        Rank of each value over the sequence length, using the same tie rule
        as the Alpha index.
    """
    pit = np.asarray(pit, dtype=float).ravel()
    if pit.size == 0:
        return pit, np.empty(0, dtype=float)
    return pit, pit_ranks(pit) / pit.size


def plot_pit_diagram(
    result,
    ax: Optional[plt.Axes] = None,
    figsize: Tuple[float, float] = (5, 5),
) -> PlotResult:
    """
    Scatter the PIT diagram of a :class:`~pitens.PITResult`.

    Parameters
    ----------
    result : PITResult
        Output of :func:`pitens.compute_pit`.
    ax : matplotlib.axes.Axes, optional
        Axes to draw on. A new figure is created when omitted.
    figsize : tuple of float, default=(5, 5)
        Figure size in inches, used only when *ax* is None.

    Returns
    -------
    PlotResult
        Structured plot result with creation status, figure, and message.
    """
    if result.n_valid == 0:
        return PlotResult(
            created=False,
            figure=None,
            message="No PIT values to plot",
        )

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    pit, ecdf = pit_diagram_coordinates(result.pit_values)
    ax.scatter(pit, ecdf, s=12, alpha=0.6, color="steelblue", label="PIT")
    ax.plot([0, 1], [0, 1], color="red", lw=2, label="Uniform")
    ax.set(
        xlim=(0, 1),
        ylim=(0, 1),
        xlabel="PIT value",
        ylabel="Empirical CDF",
        title=f"PIT diagram, alpha = {result.alpha:.2f}, xi = {result.xi:.2f}",
    )
    ax.grid(True, alpha=0.5)
    ax.legend(fontsize=9, loc="upper left")

    return PlotResult(created=True, figure=fig, message=None)
