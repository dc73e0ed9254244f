"""
The target-density contract.

A target density is any callable mapping a 1-D parameter vector to the
natural log of an (unnormalized) probability density. Infeasible points
are signalled by returning ``-np.inf``, never by raising.
"""

from typing import Protocol

import numpy as np

from .errors import DensityEvaluationFailure


class TargetDensity(Protocol):
    """Structural type of a log-density callable."""

    def __call__(self, params: np.ndarray) -> float:
        ...


def evaluate_log_density(log_density, params):
    """
    Evaluate `log_density` at `params` and return the result as a float.

    Parameters
    ----------
    log_density : callable
        Target log-density.
    params : ndarray, shape (n_dim,)
        Point to evaluate.

    Returns
    -------
    lp : float
        Log-density at `params`. May be ``-inf``.

    Raises
    ------
    DensityEvaluationFailure
        If `log_density` raises, or returns a value that is not a
        real scalar.
    """
    try:
        value = log_density(params)
    except Exception as exc:
        raise DensityEvaluationFailure(
            f"target density failed at {params!r}"
        ) from exc

    value = np.asarray(value)
    if value.ndim != 0 and value.size != 1:
        raise DensityEvaluationFailure(
            f"target density returned shape {value.shape}, expected a scalar"
        )
    if np.iscomplexobj(value):
        raise DensityEvaluationFailure("target density returned a complex value")
    try:
        return float(value.reshape(()))
    except (TypeError, ValueError) as exc:
        raise DensityEvaluationFailure(
            f"target density returned non-numeric {value!r}"
        ) from exc
