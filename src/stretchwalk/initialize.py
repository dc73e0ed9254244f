"""
Construction of the first generation of walkers.

Walkers start either at explicit points or at independent draws from an
initial distribution. Each start is evaluated once; no stretch moves are
made here.
"""

import logging

import numpy as np

from .density import evaluate_log_density
from .errors import InsufficientWalkers, InvalidStart
from .state import EnsembleGeneration, WalkerState

log = logging.getLogger(__name__)


def _check_feasible(generation):
    finite = np.isfinite(generation.log_densities)
    if not finite.any():
        raise InvalidStart(
            "All initial walkers have non-finite log-density. "
            "Move the starting points or check the prior."
        )
    if not finite.all():
        log.warning(
            "%d of %d initial walkers have non-finite log-density",
            int((~finite).sum()),
            len(finite),
        )
    return generation


def initialize_from_points(points, log_density):
    """
    Start one walker at each of the given points.

    Parameters
    ----------
    points : array_like, shape (n_walkers, n_dim)
        Starting parameter vectors.
    log_density : callable
        Target log-density.

    Returns
    -------
    generation : EnsembleGeneration

    Raises
    ------
    InvalidStart
        If the points are ragged or not a 2-D collection of vectors.
    InsufficientWalkers
        If fewer than two points are given.
    """
    points = list(points)
    if len(points) < 2:
        raise InsufficientWalkers(
            f"an ensemble needs at least 2 walkers, got {len(points)}"
        )

    vectors = []
    for i, p in enumerate(points):
        v = np.asarray(p, dtype=float)
        if v.ndim != 1:
            raise InvalidStart(f"starting point {i} is not a 1-D vector")
        if vectors and v.shape != vectors[0].shape:
            raise InvalidStart(
                f"starting point {i} has {v.shape[0]} parameters, "
                f"expected {vectors[0].shape[0]}"
            )
        vectors.append(v)

    walkers = [WalkerState(v, evaluate_log_density(log_density, v)) for v in vectors]
    return _check_feasible(EnsembleGeneration(walkers))


def initialize_from_distribution(rng, draw, n_walkers, log_density):
    """
    Start each walker at an independent draw from an initial distribution.

    Parameters
    ----------
    rng : numpy.random.Generator
        Source of randomness, passed to `draw`.
    draw : callable
        ``draw(rng)`` returns one parameter vector, e.g. a prior sample.
    n_walkers : int
        Number of walkers, at least 2.
    log_density : callable
        Target log-density.

    Returns
    -------
    generation : EnsembleGeneration
    """
    if n_walkers < 2:
        raise InsufficientWalkers(
            f"an ensemble needs at least 2 walkers, got {n_walkers}"
        )
    return initialize_from_points([draw(rng) for _ in range(n_walkers)], log_density)


def initialize(rng, log_density, n_walkers, start=None, draw=None):
    """
    Build generation 0 from explicit points or an initial distribution.

    Explicit `start` points take precedence over `draw`.

    Raises
    ------
    InvalidStart
        If neither `start` nor `draw` is given, or `start` does not hold
        exactly `n_walkers` points.
    """
    if start is not None:
        start = list(start)
        if len(start) != n_walkers:
            raise InvalidStart(
                f"got {len(start)} starting points for {n_walkers} walkers"
            )
        return initialize_from_points(start, log_density)
    if draw is not None:
        return initialize_from_distribution(rng, draw, n_walkers, log_density)
    raise InvalidStart("either starting points or an initial distribution is required")
