"""
Observer wiring between market data and the objects priced off it.

Every observable keeps a version counter and a weak set of observers.
Mutating an observable bumps its version and calls ``update()`` on each
observer; a :class:`LazyObject` merely marks itself dirty there and
recomputes the next time its results are asked for.
"""

import weakref
from abc import ABC, abstractmethod


class Observable:
    """Something other objects may depend on."""

    def __init__(self):
        self._observers = weakref.WeakSet()
        self._version = 0

    @property
    def version(self) -> int:
        """Number of notifications sent so far."""
        return self._version

    def register_observer(self, observer: "Observer") -> None:
        self._observers.add(observer)

    def unregister_observer(self, observer: "Observer") -> None:
        self._observers.discard(observer)

    def notify_observers(self) -> None:
        self._version += 1
        for observer in list(self._observers):
            observer.update()


class Observer:
    """Something that reacts to changes of observables it registered with."""

    def register_with(self, observable) -> None:
        if observable is not None:
            observable.register_observer(self)

    def unregister_with(self, observable) -> None:
        if observable is not None:
            observable.unregister_observer(self)

    def update(self) -> None:
        pass


class LazyObject(Observable, Observer, ABC):
    """Observable whose results are computed on demand and kept until invalidated."""

    def __init__(self):
        Observable.__init__(self)
        self._calculated = False

    @property
    def is_calculated(self) -> bool:
        return self._calculated

    def update(self) -> None:
        self._calculated = False
        self.notify_observers()

    def recalculate(self) -> None:
        self._calculated = False
        self.calculate()

    def calculate(self) -> None:
        if self._calculated:
            return
        self._calculated = True
        try:
            self.perform_calculations()
        except Exception:
            self._calculated = False
            raise

    @abstractmethod
    def perform_calculations(self) -> None:
        """Recompute the cached results."""
