from .adaptor import Gaussian1dCrossAssetAdaptor
from .cross_asset import CrossAssetModel
from .fxeq_parametrization import (
    EqBsConstantParametrization,
    EqBsParametrization,
    EqBsPiecewiseConstantParametrization,
    FxBsConstantParametrization,
    FxBsParametrization,
    FxBsPiecewiseConstantParametrization,
)
from .gaussian1d import Gaussian1dModel
from .lgm import LgmStateProcess, LinearGaussMarkovModel
from .parametrization import (
    IrLgm1fParametrization,
    Lgm1fConstantParametrization,
    Lgm1fPiecewiseConstantParametrization,
    Parametrization,
)
from .piecewise_constant import PiecewiseConstantFunction

__all__ = [
    "CrossAssetModel",
    "EqBsConstantParametrization",
    "EqBsParametrization",
    "EqBsPiecewiseConstantParametrization",
    "FxBsConstantParametrization",
    "FxBsParametrization",
    "FxBsPiecewiseConstantParametrization",
    "Gaussian1dCrossAssetAdaptor",
    "Gaussian1dModel",
    "IrLgm1fParametrization",
    "LgmStateProcess",
    "Lgm1fConstantParametrization",
    "Lgm1fPiecewiseConstantParametrization",
    "LinearGaussMarkovModel",
    "Parametrization",
    "PiecewiseConstantFunction",
]
