"""
Value types shared by the moves, the initializer and the sampler.

All of them are immutable. A generation is produced once per iteration
and is only ever read by the update that builds the next one.
"""

from dataclasses import dataclass

import numpy as np

from .errors import DimensionMismatch, InsufficientWalkers


def _frozen_vector(params):
    arr = np.array(params, dtype=float)
    if arr.ndim != 1:
        raise DimensionMismatch(
            f"walker parameters must be 1-D, got shape {arr.shape}"
        )
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class WalkerState:
    """
    Position of one walker and the log-density cached at that position.

    Parameters
    ----------
    params : array_like, shape (n_dim,)
        Parameter vector. Stored as a read-only float copy.
    log_density : float
        Target log-density evaluated at `params`.

    Notes
    -----
    Equality is identity: a rejected proposal hands back the very same
    object, so ``new is old`` tells whether a walker moved.
    """

    params: np.ndarray
    log_density: float

    def __post_init__(self):
        object.__setattr__(self, "params", _frozen_vector(self.params))
        object.__setattr__(self, "log_density", float(self.log_density))

    @property
    def n_dim(self):
        return self.params.shape[0]


@dataclass(frozen=True, eq=False)
class EnsembleGeneration:
    """
    The complete set of walker states at one iteration.

    Parameters
    ----------
    walkers : sequence of WalkerState
        At least two walkers, all of the same dimensionality.

    Raises
    ------
    InsufficientWalkers
        If fewer than two walkers are given.
    DimensionMismatch
        If the walkers disagree in dimensionality.
    """

    walkers: tuple

    def __post_init__(self):
        walkers = tuple(self.walkers)
        if len(walkers) < 2:
            raise InsufficientWalkers(
                f"an ensemble needs at least 2 walkers, got {len(walkers)}"
            )
        n_dim = walkers[0].n_dim
        for i, w in enumerate(walkers):
            if w.n_dim != n_dim:
                raise DimensionMismatch(
                    f"walker {i} has {w.n_dim} parameters, expected {n_dim}"
                )
        object.__setattr__(self, "walkers", walkers)

    def __len__(self):
        return len(self.walkers)

    def __getitem__(self, i):
        return self.walkers[i]

    def __iter__(self):
        return iter(self.walkers)

    @property
    def n_walkers(self):
        return len(self.walkers)

    @property
    def n_dim(self):
        return self.walkers[0].n_dim

    @property
    def positions(self):
        """Walker positions stacked into shape (n_walkers, n_dim)."""
        return np.stack([w.params for w in self.walkers])

    @property
    def log_densities(self):
        """Cached log-densities, shape (n_walkers,)."""
        return np.array([w.log_density for w in self.walkers])


@dataclass(frozen=True)
class StretchParameters:
    """
    Tuning of the stretch move.

    Parameters
    ----------
    a : float, optional
        Stretch scale. Proposals stretch or contract the walker's distance
        to its partner by a factor in ``[1/a, a]``. Must satisfy a > 1.
    """

    a: float = 2.0

    def __post_init__(self):
        if not self.a > 1.0:
            raise ValueError(f"stretch scale `a` must be > 1, got {self.a}")
