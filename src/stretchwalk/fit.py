"""
Bayesian parameter estimation on top of the ensemble sampler.

`Posterior` turns data, a model, a prior and a transform into a target
log-density in unconstrained coordinates. `EnsembleFit` samples it and
summarizes the result in physical coordinates.
"""

import logging

import numpy as np

from .errors import DimensionMismatch
from .moves import StretchMove
from .sampler import EnsembleSampler, run_sampler
from .transforms import CompositeTransform

log = logging.getLogger(__name__)


class Posterior:
    """
    Log-posterior of a model with Gaussian measurement errors.

    Parameters
    ----------
    x, y : array_like
        Observed data.
    yerr : array_like
        1σ uncertainties on `y`, same shape as `y`.
    model : callable
        ``model(x, theta)`` returning predicted `y`.
    log_prior : callable
        ``log p(theta)`` in physical space.
    transform : Transform
        Map from internal ``u`` to physical ``theta``.
    n_dim : int, optional
        Number of parameters. Taken from the transform when it is a
        `CompositeTransform`; required otherwise.

    Notes
    -----
    Instances are callables ``u -> float`` and can be handed to
    `EnsembleSampler` directly.
    """

    def __init__(self, x, y, yerr, model, log_prior, transform, n_dim=None):
        self.x = np.asarray(x)
        self.y = np.asarray(y)
        self.yerr = np.asarray(yerr)
        if self.yerr.shape != self.y.shape:
            raise ValueError(
                f"yerr has shape {self.yerr.shape}, expected {self.y.shape}"
            )

        self.model = model
        self.log_prior = log_prior
        self.transform = transform

        if n_dim is None:
            if not isinstance(transform, CompositeTransform):
                raise ValueError(
                    "`n_dim` is required unless the transform is a CompositeTransform"
                )
            n_dim = len(transform)
        elif isinstance(transform, CompositeTransform) and n_dim != len(transform):
            raise DimensionMismatch(
                f"n_dim={n_dim} but the transform covers {len(transform)} parameters"
            )
        if n_dim < 1:
            raise ValueError(f"`n_dim` must be 1 or greater, got {n_dim}")
        self.n_dim = int(n_dim)

    def log_likelihood(self, theta):
        resid = self.y - self.model(self.x, theta)
        return -0.5 * np.sum(
            (resid / self.yerr) ** 2 + np.log(2 * np.pi * self.yerr ** 2)
        )

    def log_posterior(self, u):
        theta = self.transform.forward(u)

        lp = self.log_prior(theta)
        if not np.isfinite(lp):
            return -np.inf

        return lp + self.log_likelihood(theta) + self.transform.log_jacobian(u)

    __call__ = log_posterior


class EnsembleFit:
    """
    High-level interface for ensemble MCMC parameter estimation.

    Parameters
    ----------
    posterior : Posterior
    """

    def __init__(self, posterior):
        self.posterior = posterior
        self.chain = None

    def sample(self, rng, n_walkers, n_steps, a=2.0, init_scale=1e-2, thin=1,
               progress=False, pool=None):
        """
        Run the stretch-move sampler on the posterior.

        Walkers start in a small Gaussian ball around the origin of the
        internal space.

        Parameters
        ----------
        rng : numpy.random.Generator
        n_walkers : int
        n_steps : int
        a : float, optional
            Stretch scale parameter.
        init_scale : float, optional
            Standard deviation of the initial ball.
        thin : int, optional
            Keep every `thin`-th generation.
        progress : bool, optional
            Show a progress bar.
        pool : object, optional
            Executor with a ``map`` method for per-walker updates.

        Returns
        -------
        chain : Chain
        """
        if thin < 1:
            raise ValueError("`thin` must be 1 or greater.")
        if n_steps // thin < 1:
            raise ValueError(
                f"n_steps={n_steps} with thin={thin} would keep no generations"
            )
        n_dim = self.posterior.n_dim
        sampler = EnsembleSampler(
            self.posterior, n_walkers, move=StretchMove(a), pool=pool
        )
        initial = sampler.initialize(
            rng, draw=lambda r: init_scale * r.standard_normal(n_dim)
        )
        self.chain = run_sampler(
            sampler, rng, initial, n_steps, thin=thin, progress=progress
        )
        return self.chain

    def _kept(self, burnin):
        if self.chain is None:
            raise RuntimeError("You must run sample() first")
        if burnin < 0:
            raise ValueError("`burnin` must be 0 or greater.")

        n_kept = self.chain.positions.shape[0]
        if burnin >= n_kept:
            raise ValueError(
                f"burnin={burnin} discards all {n_kept} kept generations"
            )
        return self.chain.flat(burnin), self.chain.log_densities[burnin:].reshape(-1)

    def samples(self, burnin=0, physical=True):
        """
        Flattened posterior samples, shape (n_samples, n_dim).

        Parameters
        ----------
        burnin : int
            Kept generations to discard from the start.
        physical : bool
            Return physical parameters rather than internal ones.
        """
        u_samples, _ = self._kept(burnin)
        if not physical:
            return u_samples
        return np.array([self.posterior.transform.forward(u) for u in u_samples])

    def mean(self, burnin=0):
        return self.samples(burnin).mean(axis=0)

    def median(self, burnin=0):
        return np.median(self.samples(burnin), axis=0)

    def credible_interval(self, level=0.68, burnin=0):
        """
        Equal-tailed credible interval per parameter.

        Returns
        -------
        intervals : list of tuples
            ``[(low, high), ...]``, one per parameter.
        """
        if not 0.0 < level < 1.0:
            raise ValueError(f"`level` must lie in (0, 1), got {level}")
        theta = self.samples(burnin)

        alpha = (1.0 - level) / 2.0
        lo = np.percentile(theta, 100 * alpha, axis=0)
        hi = np.percentile(theta, 100 * (1 - alpha), axis=0)
        return list(zip(lo, hi))

    def map(self, burnin=0):
        """Highest-posterior sample in physical space."""
        u_samples, logp = self._kept(burnin)
        u_map = u_samples[np.argmax(logp)]
        return self.posterior.transform.forward(u_map)
