"""
Reparameterizations between the sampler's unconstrained space and the
physical parameters of a model.

The sampler moves walkers in internal coordinates ``u``; a transform maps
them to physical ``theta`` and supplies the log-Jacobian needed to keep
the target density correct in ``u``.
"""

import numpy as np

from .errors import DimensionMismatch


class Transform:
    """
    Base class for parameter transforms.

    Subclasses must implement:
    - `forward(u)`: map internal parameters to physical parameters.
    - `log_jacobian(u)`: log absolute Jacobian determinant, log |dθ/du|.
    """

    def forward(self, u):
        raise NotImplementedError

    def log_jacobian(self, u):
        raise NotImplementedError


class Identity(Transform):
    """θ = u, for parameters that are already unconstrained."""

    def forward(self, u):
        return u

    def log_jacobian(self, u):
        return 0.0


class Log(Transform):
    """θ = exp(u), for strictly positive parameters; log|dθ/du| = u."""

    def forward(self, u):
        return np.exp(u)

    def log_jacobian(self, u):
        return u


class Logit(Transform):
    """
    Scaled logistic map from the real line onto the open interval (low, high).

    Parameters
    ----------
    low, high : float
        Interval bounds, low < high.
    """

    def __init__(self, low, high):
        if not low < high:
            raise ValueError(f"Logit bounds must satisfy low < high, got ({low}, {high})")
        self.low = low
        self.high = high

    def forward(self, u):
        s = 0.5 * (1.0 + np.tanh(0.5 * u))
        return self.low + (self.high - self.low) * s

    def log_jacobian(self, u):
        # log(b - a) + log s(u) + log(1 - s(u)), written to stay finite for large |u|
        return np.log(self.high - self.low) - np.logaddexp(0.0, -u) - np.logaddexp(0.0, u)


class CompositeTransform(Transform):
    """
    One transform per coordinate of a parameter vector.

    Parameters
    ----------
    transforms : sequence of Transform
    """

    def __init__(self, transforms):
        self.transforms = list(transforms)

    def __len__(self):
        return len(self.transforms)

    def _check(self, u):
        if len(u) != len(self.transforms):
            raise DimensionMismatch(
                f"got {len(u)} parameters for {len(self.transforms)} transforms"
            )

    def forward(self, u):
        self._check(u)
        return np.array([t.forward(ui) for t, ui in zip(self.transforms, u)])

    def log_jacobian(self, u):
        self._check(u)
        return float(sum(t.log_jacobian(ui) for t, ui in zip(self.transforms, u)))
