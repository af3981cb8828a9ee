"""
Probability Integral Transform of observations against ensemble forecasts.

The computation runs in three stages over a full series:

1. :func:`filter_valid` drops time steps with missing (or negative) values
   in the observation or in any ensemble member.
2. :func:`compute_pits` evaluates each observation against the empirical
   CDF of its ensemble.
3. :func:`reduce_diagnostics` summarises the PIT values into the Alpha
   (reliability) and Xi (coverage) indices.

:func:`compute_pit` runs all three and returns a :class:`PITResult`.

References
----------
Diebold, Gunther & Tay (1998), Evaluating density forecasts with
applications to financial risk management. International Economic Review
39(4), 863-883.

Laio & Tamea (2007), Verification tools for probabilistic forecasts of
continuous hydrological variables. HESS 11, 1267-1277.

Renard et al. (2010), Understanding predictive uncertainty in hydrologic
modeling. Water Resources Research 46, W05521.
"""

import warnings
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

import numpy as np
from scipy.stats import rankdata

from .config import PITConfig


class PITError(ValueError):
    """Base class for invalid PIT inputs."""


class DimensionMismatchError(PITError):
    """Observation and ensemble series have different lengths."""


class AllEnsembleMissingError(PITError):
    """No time step has a complete ensemble."""


class NoValidDataError(PITError):
    """Every time step was discarded by the filter."""


@dataclass
class FilteredPair:
    """Observations and ensemble rows that survived filtering."""

    observations: np.ndarray
    ensemble: np.ndarray
    mask: np.ndarray

    @property
    def n_total(self) -> int:
        return int(self.mask.size)

    @property
    def n_valid(self) -> int:
        return int(self.observations.size)


@dataclass
class Diagnostics:
    """Alpha and Xi indices of a PIT sequence (optimal value 1 for both)."""

    alpha: float
    xi: float


@dataclass
class PITResult:
    """
    Result of :func:`compute_pit`.

    Unpacks as ``(pit_values, alpha, xi)``, so callers interested in the PIT
    values only can write ``pits, *_ = compute_pit(x, ens)``.

    Attributes
    ----------
    pit_values : np.ndarray
        One PIT value per retained time step, in original order.
    alpha : float
        Reliability index, ``1 - 2 * mean|ECDF(pit) - pit|``.
    xi : float
        Coverage index, ``1 - fraction of PIT values equal to 0 or 1``.
    mask : np.ndarray
        Boolean mask over the input time steps, True where retained.
    """

    pit_values: np.ndarray
    alpha: float
    xi: float
    mask: np.ndarray

    def __iter__(self) -> Iterator:
        return iter((self.pit_values, self.alpha, self.xi))

    @property
    def n_total(self) -> int:
        """Number of input time steps."""
        return int(self.mask.size)

    @property
    def n_valid(self) -> int:
        """Number of time steps that produced a PIT value."""
        return int(self.pit_values.size)

    def summary(self) -> dict:
        return {
            "n_total": self.n_total,
            "n_valid": self.n_valid,
            "n_discarded": self.n_total - self.n_valid,
            "alpha": self.alpha,
            "xi": self.xi,
        }

    def plot(self, **kwargs):
        """Render the PIT diagram. See :func:`pitens.plots.plot_pit_diagram`."""
        from .plots import plot_pit_diagram

        return plot_pit_diagram(self, **kwargs)


# ── Data filter ──────────────────────────────────────────────────────────────


def _as_observations(x) -> np.ndarray:
    arr = np.asarray(x, dtype=float)
    if arr.ndim == 2 and arr.shape[1] == 1:
        arr = arr[:, 0]
    if arr.ndim != 1:
        raise ValueError(f"x must be a 1-D series, got shape {arr.shape}")
    return arr


def _as_ensemble(ens) -> np.ndarray:
    arr = np.asarray(ens, dtype=float)
    if arr.ndim == 1:
        arr = arr[:, None]
    if arr.ndim != 2:
        raise ValueError(f"ens must be a 2-D (k, m) array, got shape {arr.shape}")
    if arr.shape[1] == 0:
        raise ValueError("ens must have at least one member per time step")
    return arr


def filter_valid(x, ens, config: Optional[PITConfig] = None) -> FilteredPair:
    """
    Keep only time steps where the observation and every member are usable.

    Parameters
    ----------
    x : array-like, shape (k,)
        Observations. Missing values are NaN (or None).
    ens : array-like, shape (k, m)
        Ensemble members per time step.
    config : PITConfig, optional
        ``reject_negative`` controls whether negative values count as
        missing; ``discard_warning_fraction`` controls the filtering warning.

    Returns
    -------
    FilteredPair

    Raises
    ------
    DimensionMismatchError
        If ``x`` and ``ens`` have different numbers of time steps.
    AllEnsembleMissingError
        If every ensemble row contains at least one missing member.
    """
    cfg = config or PITConfig()
    x = _as_observations(x)
    ens = _as_ensemble(ens)

    if x.shape[0] != ens.shape[0]:
        raise DimensionMismatchError(
            f"Mismatch of x and ens dimensions: {x.shape[0]} observations "
            f"vs {ens.shape[0]} ensemble rows"
        )

    complete_rows = ~np.isnan(ens).any(axis=1)
    if not complete_rows.any():
        raise AllEnsembleMissingError(
            "The ensemble contains missing values at every time step"
        )

    keep = ~np.isnan(x) & complete_rows
    if cfg.reject_negative:
        with np.errstate(invalid="ignore"):
            keep &= (x >= 0) & (ens >= 0).all(axis=1)

    n_total = int(keep.size)
    n_dropped = n_total - int(keep.sum())
    frac = cfg.discard_warning_fraction
    if frac is not None and n_dropped > frac * n_total:
        warnings.warn(
            f"Discarded {n_dropped} of {n_total} time steps with missing "
            f"or negative values; PIT diagnostics rest on "
            f"{n_total - n_dropped} time steps.",
            UserWarning,
            stacklevel=2,
        )

    return FilteredPair(observations=x[keep], ensemble=ens[keep], mask=keep)


# ── PIT computation ──────────────────────────────────────────────────────────


def ensemble_ecdf(members) -> Tuple[np.ndarray, np.ndarray]:
    """
    Empirical CDF of one ensemble.

    Returns
    -------
    support : np.ndarray
        Distinct member values, ascending.
    cdf : np.ndarray
        Fraction of members less than or equal to each support point. The
        last entry is always 1.
    """
    members = np.sort(np.asarray(members, dtype=float).ravel())
    support, counts = np.unique(members, return_counts=True)
    return support, np.cumsum(counts) / members.size


def pit_value(observation: float, members) -> float:
    """
    PIT of a single observation against its ensemble.

    Inside the ensemble range the ECDF is read at the largest support point
    not exceeding the observation. Below the range the PIT is 0, above it 1.
    """
    members = np.array(members, dtype=float).ravel()
    if members.size == 0:
        raise ValueError("pit_value needs at least one ensemble member")
    if np.isnan(observation) or np.isnan(members).any():
        raise ValueError("pit_value needs non-missing observation and members")

    support, cdf = ensemble_ecdf(members)
    lo, hi = support[0], support[-1]

    if lo <= observation <= hi:
        return float(cdf[support <= observation].max())
    elif observation < lo:
        return 0.0
    else:
        return 1.0


def compute_pits(pair: FilteredPair, config: Optional[PITConfig] = None) -> np.ndarray:
    """
    PIT value for every retained time step of *pair*, in order.

    Rows are independent; with ``config.max_workers > 1`` they are spread
    over a thread pool.
    """
    cfg = config or PITConfig()
    if pair.n_valid == 0:
        return np.empty(0, dtype=float)

    observations = pair.observations.tolist()
    rows = [row.copy() for row in pair.ensemble]

    if cfg.max_workers > 1:
        with ThreadPoolExecutor(max_workers=cfg.max_workers) as executor:
            pits = list(executor.map(pit_value, observations, rows))
    else:
        pits = [pit_value(obs, row) for obs, row in zip(observations, rows)]

    return np.asarray(pits, dtype=float)


# ── Diagnostics ──────────────────────────────────────────────────────────────


def _check_pits(pit) -> np.ndarray:
    pit = np.asarray(pit, dtype=float).ravel()
    if np.isnan(pit).any():
        raise ValueError("PIT values must not contain NaN")
    if pit.size and (pit.min() < 0 or pit.max() > 1):
        raise ValueError("PIT values must lie in [0, 1]")
    return pit


def pit_ranks(pit) -> np.ndarray:
    """
    1-based position of each PIT value in the sorted sequence.

    Tied values share the position of their first occurrence in the sorted
    sequence, so the lookup depends on value only.
    """
    pit = np.asarray(pit, dtype=float).ravel()
    return rankdata(pit, method="min")


def alpha_index(pit) -> float:
    """
    Reliability index: ``1 - 2 * mean(|rank / n - pit|)``.

    Equals 1 when the empirical CDF of the PIT values lies on the 1:1 line.
    NaN for an empty sequence.
    """
    pit = _check_pits(pit)
    if pit.size == 0:
        return float("nan")
    ecdf = pit_ranks(pit) / pit.size
    return float(1.0 - 2.0 * np.mean(np.abs(ecdf - pit)))


def xi_index(pit) -> float:
    """
    Coverage index: one minus the fraction of observations outside the
    ensemble range (PIT exactly 0 or 1). NaN for an empty sequence.
    """
    pit = _check_pits(pit)
    if pit.size == 0:
        return float("nan")
    outside = (pit == 0) | (pit == 1)
    return float(1.0 - outside.mean())


def reduce_diagnostics(pit) -> Diagnostics:
    """Alpha and Xi of a PIT sequence."""
    return Diagnostics(alpha=alpha_index(pit), xi=xi_index(pit))


# ── Entry point ──────────────────────────────────────────────────────────────


def compute_pit(x, ens, config: Optional[PITConfig] = None) -> PITResult:
    """
    Compute PIT values and the Alpha / Xi diagnostics for a forecast series.

    Parameters
    ----------
    x : array-like, shape (k,)
        Observed target series. NaN (or None) marks missing values.
    ens : array-like, shape (k, m)
        Ensemble forecasts, one row of m members per time step.
    config : PITConfig, optional
        Filtering, empty-result and threading policies.

    Returns
    -------
    PITResult
        PIT values for the k2 retained time steps plus Alpha and Xi.

    Raises
    ------
    DimensionMismatchError
        If ``x`` and ``ens`` have different numbers of time steps.
    AllEnsembleMissingError
        If every ensemble row contains a missing member.
    NoValidDataError
        If nothing survives filtering and ``config.on_empty == "raise"``.

    Example
    -------
    >>> x = [5.0, 15.0, np.nan, -1.0]
    >>> ens = [[1, 2, 3, 4, 5], [20, 21, 22, 23, 24], [1, 2, 3, 4, 5], [1, 2, 3, 4, 5]]
    >>> pits, alpha, xi = compute_pit(x, ens)
    >>> pits
    array([1., 0.])
    """
    cfg = config or PITConfig()
    pair = filter_valid(x, ens, cfg)

    if pair.n_valid == 0:
        if cfg.on_empty == "raise":
            raise NoValidDataError(
                f"All {pair.n_total} time steps contain missing or negative values"
            )
        warnings.warn(
            f"All {pair.n_total} time steps were discarded; "
            "returning empty PIT values with NaN alpha and xi.",
            RuntimeWarning,
            stacklevel=2,
        )

    pits = compute_pits(pair, cfg)
    diagnostics = reduce_diagnostics(pits)
    return PITResult(
        pit_values=pits,
        alpha=diagnostics.alpha,
        xi=diagnostics.xi,
        mask=pair.mask,
    )
