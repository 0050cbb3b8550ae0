"""
Gaussian one-factor view of an LGM component.

Lets single-factor Gaussian tooling (zero bond options on a state grid,
model forward and swap rates) run on the interest rate component of a
cross asset model.
"""

import math
from typing import Optional, Union

from xalib.curves.base import YieldCurve

from .cross_asset import CrossAssetModel
from .gaussian1d import Gaussian1dModel
from .lgm import LinearGaussMarkovModel


class Gaussian1dCrossAssetAdaptor(Gaussian1dModel):
    """
    Adapt an LGM model to :class:`Gaussian1dModel`.

    Either pass an LGM model directly, or the currency index and a cross
    asset model to adapt its IR component ``ccy``. The standardized state
    ``y`` maps to ``x = y * sqrt(zeta(t))``.

    When a curve override ``yts`` is given, numeraire and zero bonds are
    rescaled from the model curve onto ``yts``.
    """

    def __init__(
        self,
        model: Union[LinearGaussMarkovModel, int],
        cross_asset_model: Optional[CrossAssetModel] = None,
    ):
        if isinstance(model, LinearGaussMarkovModel):
            lgm = model
        else:
            if cross_asset_model is None:
                raise ValueError("cross asset model required to adapt component by index")
            lgm = cross_asset_model.lgm(model)
        super().__init__(lgm.term_structure)
        self.lgm = lgm
        self.state_process = lgm.state_process
        self.register_with(lgm)

    def _x(self, t: float, y: float) -> float:
        return y * math.sqrt(self.lgm.parametrization.zeta(t))

    def _numeraire_impl(self, t: float, y: float, yts: Optional[YieldCurve]) -> float:
        x = self._x(t, y)
        value = self.lgm.numeraire(t, x)
        if yts is None:
            return value
        curve = self.term_structure
        return value * curve.df(t) / yts.df(t)

    def _zerobond_impl(self, T: float, t: float, y: float, yts: Optional[YieldCurve]) -> float:
        x = self._x(t, y)
        value = self.lgm.discount_bond(t, T, x)
        if yts is None:
            return value
        curve = self.term_structure
        return value * curve.df(t) / curve.df(T) * yts.df(T) / yts.df(t)
