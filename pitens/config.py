"""PIT computation settings.

All policy knobs live here so that the filter, the PIT loop and the
reducer share one source of truth.
"""

from dataclasses import asdict, dataclass
from typing import Optional

_EMPTY_POLICIES = ("nan", "raise")


@dataclass(frozen=True)
class PITConfig:
    """Immutable settings for :func:`pitens.compute_pit`.

    Parameters
    ----------
    reject_negative : bool, default=True
        Treat negative observations or ensemble members as missing. Suited
        to non-negative variables such as streamflow or precipitation.
    on_empty : {"nan", "raise"}, default="nan"
        What to do when no time step survives filtering. ``"nan"`` returns
        an empty PIT array with NaN Alpha and Xi (and a RuntimeWarning);
        ``"raise"`` raises :class:`pitens.NoValidDataError`.
    max_workers : int, default=1
        Thread pool size for the per-time-step PIT loop. 1 runs serially.
    discard_warning_fraction : float or None, default=0.5
        Warn when more than this fraction of time steps is discarded.
        ``None`` disables the warning.
    """

    reject_negative: bool = True
    on_empty: str = "nan"
    max_workers: int = 1
    discard_warning_fraction: Optional[float] = 0.5

    def __post_init__(self):
        if self.on_empty not in _EMPTY_POLICIES:
            raise ValueError(
                f"on_empty must be one of {_EMPTY_POLICIES}, got {self.on_empty!r}"
            )
        if int(self.max_workers) != self.max_workers or self.max_workers < 1:
            raise ValueError("max_workers must be an integer >= 1")
        frac = self.discard_warning_fraction
        if frac is not None and not 0 <= frac <= 1:
            raise ValueError("discard_warning_fraction must be in [0, 1] or None")

    def to_dict(self) -> dict:
        return asdict(self)
