"""
Affine-invariant ensemble sampler.

One iteration pairs every walker with a uniformly random other walker of
the current generation and applies the sampler's move to the pair. The
next generation is assembled in a fresh container from reads of the
current one only, so the per-walker updates are independent and may run
in any order or in parallel.
"""

import logging
from dataclasses import dataclass

import numpy as np
from tqdm import tqdm

from .errors import InsufficientWalkers
from .initialize import initialize
from .moves import StretchMove
from .state import EnsembleGeneration

log = logging.getLogger(__name__)

__all__ = ["EnsembleSampler", "Chain", "complementary_indices", "run_sampler"]


def complementary_indices(rng, n_walkers):
    """
    Draw a partner index for every walker.

    Walker ``i`` is paired with ``(i + k) % n_walkers`` where ``k`` is
    uniform on ``1..n_walkers-1``, so no walker is paired with itself and
    every other walker is equally likely.

    Parameters
    ----------
    rng : numpy.random.Generator
    n_walkers : int

    Returns
    -------
    partners : ndarray of int, shape (n_walkers,)
    """
    if n_walkers < 2:
        raise InsufficientWalkers(
            f"an ensemble needs at least 2 walkers, got {n_walkers}"
        )
    offsets = rng.integers(1, n_walkers, size=n_walkers)
    return (np.arange(n_walkers) + offsets) % n_walkers


class _WalkerUpdate:
    # a plain class rather than a closure so it pickles for process pools
    def __init__(self, move, log_density):
        self.move = move
        self.log_density = log_density

    def __call__(self, task):
        rng, walker, other = task
        return self.move.move(rng, walker, other, self.log_density)


class EnsembleSampler:
    """
    Ensemble MCMC sampler driven by a single proposal kernel.

    Parameters
    ----------
    log_density : callable
        Target log-density ``f(params) -> float``; ``-inf`` marks
        infeasible points.
    n_walkers : int
        Size of the ensemble, at least 2.
    move : Move, optional
        Proposal kernel. Defaults to ``StretchMove(a=2.0)``.
    pool : object, optional
        Anything with a ``map(func, iterable)`` method, e.g. a
        ``concurrent.futures`` executor. Per-walker updates are mapped
        over it. Defaults to the builtin ``map``.
    """

    def __init__(self, log_density, n_walkers, move=None, pool=None):
        if n_walkers < 2:
            raise InsufficientWalkers(
                f"an ensemble needs at least 2 walkers, got {n_walkers}"
            )
        self.log_density = log_density
        self.n_walkers = int(n_walkers)
        self.move = StretchMove() if move is None else move
        self.pool = pool
        self._update = _WalkerUpdate(self.move, log_density)

    def initialize(self, rng, start=None, draw=None):
        """
        Build generation 0.

        Parameters
        ----------
        rng : numpy.random.Generator
        start : array_like, shape (n_walkers, n_dim), optional
            Explicit starting points.
        draw : callable, optional
            ``draw(rng)`` returning one starting vector; used when
            `start` is not given.
        """
        return initialize(rng, self.log_density, self.n_walkers, start=start, draw=draw)

    def advance(self, rng, current):
        """
        Produce the next generation from `current`.

        All partner indices are drawn first, then one child generator is
        spawned per walker, so each update depends only on its own stream
        and on `current`.

        Parameters
        ----------
        rng : numpy.random.Generator
            Parent random source.
        current : EnsembleGeneration or sequence of WalkerState
            Generation to update. Never modified.

        Returns
        -------
        generation : EnsembleGeneration
            A new generation. Walkers whose proposal was rejected are the
            same objects as in `current`.
        """
        if not isinstance(current, EnsembleGeneration):
            current = EnsembleGeneration(tuple(current))

        partners = complementary_indices(rng, len(current))
        streams = rng.spawn(len(current))
        tasks = [
            (streams[i], current[i], current[j]) for i, j in enumerate(partners)
        ]

        mapper = map if self.pool is None else self.pool.map
        # nothing escapes until every update has finished
        new_walkers = tuple(mapper(self._update, tasks))
        return EnsembleGeneration(new_walkers)

    def sample(self, rng, initial, n_steps):
        """
        Iterate `advance`, yielding each new generation.

        Parameters
        ----------
        rng : numpy.random.Generator
        initial : EnsembleGeneration
            Generation 0; not yielded.
        n_steps : int
            Number of iterations.
        """
        if n_steps < 0:
            raise ValueError("`n_steps` must be 0 or greater.")
        return self._iterate(rng, initial, n_steps)

    def _iterate(self, rng, current, n_steps):
        for _ in range(n_steps):
            current = self.advance(rng, current)
            yield current


@dataclass(frozen=True, eq=False)
class Chain:
    """
    Stored output of a sampler run.

    Attributes
    ----------
    positions : ndarray, shape (n_kept, n_walkers, n_dim)
        Walker positions of every kept generation.
    log_densities : ndarray, shape (n_kept, n_walkers)
        Matching log-density values.
    accepted : ndarray of int, shape (n_walkers,)
        Accepted proposals per walker over all `n_steps` iterations.
    n_steps : int
        Iterations performed, kept or not.
    final : EnsembleGeneration
        Generation after the last iteration, ready to resume from.
    """

    positions: np.ndarray
    log_densities: np.ndarray
    accepted: np.ndarray
    n_steps: int
    final: EnsembleGeneration

    @property
    def acceptance_fraction(self):
        if self.n_steps == 0:
            return np.zeros_like(self.accepted, dtype=float)
        return self.accepted / self.n_steps

    def flat(self, burnin=0):
        """
        Kept positions with walkers merged, shape (n_samples, n_dim).

        `burnin` counts kept generations, not iterations.
        """
        kept = self.positions[burnin:]
        return kept.reshape(-1, kept.shape[-1])


def run_sampler(sampler, rng, initial, n_steps, thin=1, progress=False):
    """
    Run an ensemble sampler and record the chain.

    Parameters
    ----------
    sampler : EnsembleSampler
    rng : numpy.random.Generator
    initial : EnsembleGeneration
        Generation 0, not recorded.
    n_steps : int
        Number of iterations.
    thin : int, optional
        Record every `thin`-th generation.
    progress : bool, optional
        Whether to display a progress bar.

    Returns
    -------
    chain : Chain

    Notes
    -----
    No burn-in removal or convergence checking is done here.
    """
    if n_steps < 0:
        raise ValueError("`n_steps` must be 0 or greater.")
    if thin < 1:
        raise ValueError("`thin` must be 1 or greater.")

    n_kept = n_steps // thin
    positions = np.zeros((n_kept, initial.n_walkers, initial.n_dim))
    log_densities = np.zeros((n_kept, initial.n_walkers))
    accepted = np.zeros(initial.n_walkers, dtype=int)

    log.info(
        "Sampling %d walkers in %d dimensions for %d steps",
        initial.n_walkers,
        initial.n_dim,
        n_steps,
    )

    steps = sampler.sample(rng, initial, n_steps)
    if progress:
        steps = tqdm(steps, total=n_steps, desc="Sampling", unit="step")

    previous = initial
    for t, current in enumerate(steps, start=1):
        moved = np.array([new is not old for new, old in zip(current, previous)])
        accepted += moved
        log.debug("step %d: %d/%d proposals accepted", t, moved.sum(), len(moved))
        if t % thin == 0:
            positions[t // thin - 1] = current.positions
            log_densities[t // thin - 1] = current.log_densities
        previous = current

    chain = Chain(positions, log_densities, accepted, n_steps, previous)
    log.info(
        "Finished sampling, mean acceptance fraction %.3f",
        float(np.mean(chain.acceptance_fraction)),
    )
    return chain
