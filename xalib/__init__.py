"""Analytic rates and cross-asset pricing library.

This package provides closed-form valuation of interest-rate and cross-asset
derivatives under calibrated Linear Gauss-Markov models, together with the
cashflow types and discounting engines around them.

Key modules:
- models: LGM parametrizations, Gaussian one-factor model base, cross asset model
- engines: analytic swaption / FX option / equity option engines, discounting engines
- cashflows: average overnight, sub-period and FX-linked coupons and their pricers
- instruments: swaps, swaptions, deposits, forwards, options
- market: quotes, indexes and fixing histories
- curves, schedule, conventions, interpolation, math: supporting building blocks
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "models",
    "engines",
    "cashflows",
    "instruments",
    "market",
    "curves",
    "schedule",
    "conventions",
    "interpolation",
    "math",
]
