from .density import TargetDensity, evaluate_log_density
from .errors import (
    DensityEvaluationFailure,
    DimensionMismatch,
    EnsembleError,
    InsufficientWalkers,
    InvalidStart,
)
from .fit import EnsembleFit, Posterior
from .initialize import initialize, initialize_from_distribution, initialize_from_points
from .moves import Move, StretchMove, propose_stretch, stretch_move, z_sample
from .sampler import Chain, EnsembleSampler, complementary_indices, run_sampler
from .state import EnsembleGeneration, StretchParameters, WalkerState
from .transforms import CompositeTransform, Identity, Log, Logit, Transform

__version__ = "0.1.0"

__all__ = [
    "WalkerState",
    "EnsembleGeneration",
    "StretchParameters",
    "TargetDensity",
    "evaluate_log_density",
    "Move",
    "StretchMove",
    "stretch_move",
    "z_sample",
    "propose_stretch",
    "EnsembleSampler",
    "complementary_indices",
    "Chain",
    "run_sampler",
    "initialize",
    "initialize_from_points",
    "initialize_from_distribution",
    "Posterior",
    "EnsembleFit",
    "Transform",
    "Identity",
    "Log",
    "Logit",
    "CompositeTransform",
    "EnsembleError",
    "InvalidStart",
    "InsufficientWalkers",
    "DimensionMismatch",
    "DensityEvaluationFailure",
]
