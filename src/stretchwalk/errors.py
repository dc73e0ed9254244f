"""
Exceptions raised by the ensemble sampler.

Rejected proposals are ordinary control flow and never raise. Everything
below signals either a bad setup (walkers, starting points) or a failure
of the user-supplied target density.
"""


class EnsembleError(Exception):
    """Base class for all sampler errors."""


class InvalidStart(EnsembleError, ValueError):
    """
    The initial ensemble cannot be built.

    Raised when starting points are ragged or disagree in dimensionality,
    when neither starting points nor an initial distribution is given, or
    when no initial walker has a finite log-density.
    """


class InsufficientWalkers(EnsembleError, ValueError):
    """Fewer than two walkers; no complementary walker exists."""


class DimensionMismatch(EnsembleError, ValueError):
    """A parameter vector disagrees with the ensemble's dimensionality."""


class DensityEvaluationFailure(EnsembleError, RuntimeError):
    """
    The target density raised or returned something other than a scalar.

    The original exception, if any, is available as ``__cause__``. The
    sampler never retries the evaluation; the step in progress is
    abandoned.
    """
