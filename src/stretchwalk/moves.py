"""
Proposal kernels for the ensemble sampler.

A move takes one walker and a complementary walker drawn from the same
generation and returns the walker's next state. The sampler picks a move
once at construction and calls it for every walker of every iteration.
"""

import math

from .density import evaluate_log_density
from .errors import DimensionMismatch
from .state import StretchParameters, WalkerState

__all__ = ["Move", "StretchMove", "stretch_move", "z_sample", "propose_stretch"]


def z_sample(rng, a=2.0):
    """
    Draw a stretch-move scale factor.

    Samples the stretch variable `z` from the distribution

        g(z) ∝ 1 / sqrt(z),   z ∈ [1/a, a]

    by inverting its CDF on a single uniform draw. This is the only
    choice of g that keeps the move affine invariant.

    Parameters
    ----------
    rng : numpy.random.Generator
        Source of randomness.
    a : float, optional
        Stretch scale parameter, a > 1.

    Returns
    -------
    z : float
        Random stretch factor.
    """
    u = rng.random()
    return ((a - 1.0) * u + 1.0) ** 2 / a


def propose_stretch(theta, theta_other, z):
    """
    Point on the line through two walkers.

    The proposal is

        y = x_other + z * (x - x_other)

    i.e. the walker is stretched about its partner. z = 1 keeps the
    walker where it is; the (n - 1) log z acceptance term is the Jacobian
    of exactly this map.

    Parameters
    ----------
    theta : ndarray, shape (n_dim,)
        Position of the walker being updated.
    theta_other : ndarray, shape (n_dim,)
        Position of the complementary walker.
    z : float
        Stretch factor.

    Returns
    -------
    proposal : ndarray, shape (n_dim,)
    """
    return theta_other + z * (theta - theta_other)


class Move:
    """
    Base class for proposal kernels.

    Subclasses implement `move`, which must return either `walker` itself
    (rejection) or a fresh `WalkerState` whose log-density was evaluated
    exactly once.
    """

    def move(self, rng, walker, other, log_density):
        raise NotImplementedError


class StretchMove(Move):
    """
    Goodman & Weare (2010) affine-invariant stretch move.

    Parameters
    ----------
    a : float, optional
        Stretch scale parameter (default 2.0).
    """

    def __init__(self, a=2.0):
        self.params = StretchParameters(a)

    @property
    def a(self):
        return self.params.a

    def __repr__(self):
        return f"StretchMove(a={self.a!r})"

    def move(self, rng, walker, other, log_density):
        """
        Stretch the walker about `other` and accept or reject.

        Parameters
        ----------
        rng : numpy.random.Generator
            Stream reserved for this walker; one uniform and one
            exponential variate are consumed.
        walker : WalkerState
            Walker being updated.
        other : WalkerState
            Complementary walker, read only.
        log_density : callable
            Target log-density.

        Returns
        -------
        state : WalkerState
            The accepted proposal, or `walker` itself.
        """
        return stretch_move(rng, walker, other, log_density, self.params)


def stretch_move(rng, walker, other, log_density, params):
    """Functional form of `StretchMove.move` taking `StretchParameters`."""
    n_dim = walker.n_dim
    if other.n_dim != n_dim:
        raise DimensionMismatch(
            f"complementary walker has {other.n_dim} parameters, expected {n_dim}"
        )

    z = z_sample(rng, params.a)
    y = propose_stretch(walker.params, other.params, z)
    lp_y = evaluate_log_density(log_density, y)

    # (n - 1) log z is the Jacobian of the stretch; -inf in lp_y rejects
    log_alpha = (n_dim - 1) * math.log(z) + lp_y - walker.log_density
    if -rng.standard_exponential() <= log_alpha:
        return WalkerState(y, lp_y)
    return walker
