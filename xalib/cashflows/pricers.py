"""
Floating rate coupon pricers.
"""

from abc import ABC, abstractmethod

from xalib.observable import Observable, Observer


class UnsupportedOperationError(NotImplementedError):
    """The pricer does not provide this quantity."""


class FloatingRateCouponPricer(Observable, Observer, ABC):
    """
    Turns a floating rate coupon into a rate.

    ``initialize`` binds the pricer to a coupon and must be called before
    any of the rate or price methods.
    """

    def __init__(self):
        Observable.__init__(self)
        self.coupon = None

    def update(self) -> None:
        self.notify_observers()

    @abstractmethod
    def initialize(self, coupon) -> None:
        """Bind to ``coupon`` and cache its terms."""

    @abstractmethod
    def swaplet_rate(self) -> float:
        pass

    @abstractmethod
    def swaplet_price(self) -> float:
        pass

    @abstractmethod
    def caplet_price(self, effective_cap: float) -> float:
        pass

    @abstractmethod
    def caplet_rate(self, effective_cap: float) -> float:
        pass

    @abstractmethod
    def floorlet_price(self, effective_floor: float) -> float:
        pass

    @abstractmethod
    def floorlet_rate(self, effective_floor: float) -> float:
        pass


class RateOnlyCouponPricer(FloatingRateCouponPricer):
    """Pricer that replicates the coupon rate only; no prices, no optionality."""

    def swaplet_price(self) -> float:
        raise UnsupportedOperationError("swapletPrice not available")

    def caplet_price(self, effective_cap: float) -> float:
        raise UnsupportedOperationError("capletPrice not available")

    def caplet_rate(self, effective_cap: float) -> float:
        raise UnsupportedOperationError("capletRate not available")

    def floorlet_price(self, effective_floor: float) -> float:
        raise UnsupportedOperationError("floorletPrice not available")

    def floorlet_rate(self, effective_floor: float) -> float:
        raise UnsupportedOperationError("floorletRate not available")


class IborCouponPricer(RateOnlyCouponPricer):
    """Plain Ibor coupon: ``gearing * fixing + spread``."""

    def initialize(self, coupon) -> None:
        self.coupon = coupon
        self._gearing = coupon.gearing
        self._spread = coupon.spread

    def swaplet_rate(self) -> float:
        return self._gearing * self.coupon.index_fixing() + self._spread
