"""
pitens: PIT diagnostics for ensemble forecasts

Computes Probability Integral Transform values of an observed series
against an ensemble forecast, and the Alpha (reliability) and Xi
(coverage) indices derived from them.
"""

from .config import PITConfig
from .pit import (
    AllEnsembleMissingError,
    Diagnostics,
    DimensionMismatchError,
    FilteredPair,
    NoValidDataError,
    PITError,
    PITResult,
    alpha_index,
    compute_pit,
    compute_pits,
    ensemble_ecdf,
    filter_valid,
    pit_ranks,
    pit_value,
    reduce_diagnostics,
    xi_index,
)
from .plots import PlotResult, pit_diagram_coordinates, plot_pit_diagram

__version__ = "0.1.0"
__all__ = [
    "PITConfig",
    "PITResult",
    "FilteredPair",
    "Diagnostics",
    "PlotResult",
    "PITError",
    "DimensionMismatchError",
    "AllEnsembleMissingError",
    "NoValidDataError",
    "compute_pit",
    "filter_valid",
    "compute_pits",
    "ensemble_ecdf",
    "pit_value",
    "pit_ranks",
    "reduce_diagnostics",
    "alpha_index",
    "xi_index",
    "plot_pit_diagram",
    "pit_diagram_coordinates",
]
