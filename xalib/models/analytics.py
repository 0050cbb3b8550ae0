"""
Analytic moments of the cross asset model.

Integrands are built from small component expressions, each a function
``(model, t) -> float``; :func:`P` multiplies them and :func:`integral`
integrates the product with the model's integrator. Index conventions:
IR components ``0..n-1`` (0 is domestic), FX component ``i`` is the rate of
IR currency ``i + 1`` against the domestic one.
"""

import math
from typing import Callable

from xalib.conventions.types import AssetType

from .cross_asset import CrossAssetModel

Expr = Callable[[CrossAssetModel, float], float]


def Hz(i: int) -> Expr:
    return lambda model, t: model.irlgm1f(i).H(t)


def az(i: int) -> Expr:
    return lambda model, t: model.irlgm1f(i).alpha(t)


def zetaz(i: int) -> Expr:
    return lambda model, t: model.irlgm1f(i).zeta(t)


def sx(i: int) -> Expr:
    return lambda model, t: model.fxbs(i).sigma(t)


def vx(i: int) -> Expr:
    return lambda model, t: model.fxbs(i).variance(t)


def ss(i: int) -> Expr:
    return lambda model, t: model.eqbs(i).sigma(t)


def vs(i: int) -> Expr:
    return lambda model, t: model.eqbs(i).variance(t)


def _rho(s: AssetType, t: AssetType) -> Callable[[int, int], Expr]:
    def component(i: int, j: int) -> Expr:
        return lambda model, _: model.correlation(s, i, t, j)

    return component


rzz = _rho(AssetType.IR, AssetType.IR)
rzx = _rho(AssetType.IR, AssetType.FX)
rxx = _rho(AssetType.FX, AssetType.FX)
rss = _rho(AssetType.EQ, AssetType.EQ)
rzs = _rho(AssetType.IR, AssetType.EQ)
rxs = _rho(AssetType.FX, AssetType.EQ)


def P(*exprs: Expr) -> Expr:
    """Pointwise product of component expressions."""

    def product(model: CrossAssetModel, t: float) -> float:
        result = 1.0
        for expr in exprs:
            result *= expr(model, t)
        return result

    return product


def integral(model: CrossAssetModel, expr: Expr, a: float, b: float) -> float:
    """``int_a^b expr(model, t) dt`` with the model's integrator."""
    return model.integrate(lambda t: expr(model, t), a, b)


def ir_expectation_1(model: CrossAssetModel, i: int, t0: float, dt: float) -> float:
    """State independent part of the IR state expectation (domestic measure)."""
    if i == 0:
        return 0.0
    t1 = t0 + dt
    return (
        -integral(model, P(Hz(i), az(i), az(i)), t0, t1)
        - integral(model, P(az(i), sx(i - 1), rzx(i, i - 1)), t0, t1)
        + integral(model, P(Hz(0), az(0), az(i), rzz(0, i)), t0, t1)
    )


def ir_expectation_2(model: CrossAssetModel, i: int, zi_0: float) -> float:
    return zi_0


def fx_expectation_1(model: CrossAssetModel, i: int, t0: float, dt: float) -> float:
    """State independent part of the log FX expectation."""
    t1 = t0 + dt
    H0_a, Hi_a = Hz(0)(model, t0), Hz(i + 1)(model, t0)
    H0_b, Hi_b = Hz(0)(model, t1), Hz(i + 1)(model, t1)
    zeta0_a, zetai_a = zetaz(0)(model, t0), zetaz(i + 1)(model, t0)
    zeta0_b, zetai_b = zetaz(0)(model, t1), zetaz(i + 1)(model, t1)
    foreign = model.irlgm1f(i + 1).term_structure
    domestic = model.irlgm1f(0).term_structure

    res = math.log(
        foreign.df(t1) / foreign.df(t0) * domestic.df(t0) / domestic.df(t1)
    )
    res -= 0.5 * (vx(i)(model, t1) - vx(i)(model, t0))
    res += 0.5 * (
        H0_b * H0_b * zeta0_b
        - H0_a * H0_a * zeta0_a
        - integral(model, P(Hz(0), Hz(0), az(0), az(0)), t0, t1)
    )
    res -= 0.5 * (
        Hi_b * Hi_b * zetai_b
        - Hi_a * Hi_a * zetai_a
        - integral(model, P(Hz(i + 1), Hz(i + 1), az(i + 1), az(i + 1)), t0, t1)
    )
    res += integral(model, P(Hz(0), az(0), sx(i), rzx(0, i)), t0, t1)
    res -= Hi_b * (
        -integral(model, P(Hz(i + 1), az(i + 1), az(i + 1)), t0, t1)
        + integral(model, P(Hz(0), az(0), az(i + 1), rzz(0, i + 1)), t0, t1)
        - integral(model, P(az(i + 1), sx(i), rzx(i + 1, i)), t0, t1)
    )
    res += (
        -integral(model, P(Hz(i + 1), Hz(i + 1), az(i + 1), az(i + 1)), t0, t1)
        + integral(model, P(Hz(0), Hz(i + 1), az(0), az(i + 1), rzz(0, i + 1)), t0, t1)
        - integral(model, P(Hz(i + 1), az(i + 1), sx(i), rzx(i + 1, i)), t0, t1)
    )
    return res


def fx_expectation_2(
    model: CrossAssetModel,
    i: int,
    t0: float,
    xi_0: float,
    zi_0: float,
    z0_0: float,
    dt: float,
) -> float:
    t1 = t0 + dt
    return (
        xi_0
        + (Hz(0)(model, t1) - Hz(0)(model, t0)) * z0_0
        - (Hz(i + 1)(model, t1) - Hz(i + 1)(model, t0)) * zi_0
    )


def ir_ir_covariance(model: CrossAssetModel, i: int, j: int, t0: float, dt: float) -> float:
    return integral(model, P(az(i), az(j), rzz(i, j)), t0, t0 + dt)


def ir_fx_covariance(model: CrossAssetModel, i: int, j: int, t0: float, dt: float) -> float:
    t1 = t0 + dt
    return (
        Hz(0)(model, t1) * integral(model, P(az(0), az(i), rzz(0, i)), t0, t1)
        - integral(model, P(Hz(0), az(0), az(i), rzz(0, i)), t0, t1)
        - Hz(j + 1)(model, t1) * integral(model, P(az(j + 1), az(i), rzz(j + 1, i)), t0, t1)
        + integral(model, P(Hz(j + 1), az(j + 1), az(i), rzz(j + 1, i)), t0, t1)
        + integral(model, P(az(i), sx(j), rzx(i, j)), t0, t1)
    )


def fx_fx_covariance(model: CrossAssetModel, i: int, j: int, t0: float, dt: float) -> float:
    t1 = t0 + dt
    H0 = Hz(0)(model, t1)
    Hi = Hz(i + 1)(model, t1)
    Hj = Hz(j + 1)(model, t1)

    def _int(*exprs: Expr) -> float:
        return integral(model, P(*exprs), t0, t1)

    return (
        H0 * H0 * (zetaz(0)(model, t1) - zetaz(0)(model, t0))
        - 2.0 * H0 * _int(Hz(0), az(0), az(0))
        + _int(Hz(0), Hz(0), az(0), az(0))
        - H0 * Hj * _int(az(0), az(j + 1), rzz(0, j + 1))
        + Hj * _int(Hz(0), az(0), az(j + 1), rzz(0, j + 1))
        + H0 * _int(Hz(j + 1), az(j + 1), az(0), rzz(j + 1, 0))
        - _int(Hz(0), Hz(j + 1), az(0), az(j + 1), rzz(0, j + 1))
        - H0 * Hi * _int(az(0), az(i + 1), rzz(0, i + 1))
        + Hi * _int(Hz(0), az(0), az(i + 1), rzz(0, i + 1))
        + H0 * _int(Hz(i + 1), az(i + 1), az(0), rzz(i + 1, 0))
        - _int(Hz(0), Hz(i + 1), az(0), az(i + 1), rzz(0, i + 1))
        + H0 * _int(az(0), sx(j), rzx(0, j))
        - _int(Hz(0), az(0), sx(j), rzx(0, j))
        + H0 * _int(az(0), sx(i), rzx(0, i))
        - _int(Hz(0), az(0), sx(i), rzx(0, i))
        - Hi * _int(az(i + 1), sx(j), rzx(i + 1, j))
        + _int(Hz(i + 1), az(i + 1), sx(j), rzx(i + 1, j))
        - Hj * _int(az(j + 1), sx(i), rzx(j + 1, i))
        + _int(Hz(j + 1), az(j + 1), sx(i), rzx(j + 1, i))
        + Hi * Hj * _int(az(i + 1), az(j + 1), rzz(i + 1, j + 1))
        - Hj * _int(Hz(i + 1), az(i + 1), az(j + 1), rzz(i + 1, j + 1))
        - Hi * _int(Hz(j + 1), az(j + 1), az(i + 1), rzz(j + 1, i + 1))
        + _int(Hz(i + 1), Hz(j + 1), az(i + 1), az(j + 1), rzz(i + 1, j + 1))
        + _int(sx(i), sx(j), rxx(i, j))
    )


def ir_eq_covariance(model: CrossAssetModel, j: int, k: int, t0: float, dt: float) -> float:
    t1 = t0 + dt
    i = model.ccy_index(model.eqbs(k).currency)
    Hi_b = Hz(i)(model, t1)
    res = Hi_b * integral(model, P(rzz(i, j), az(i), az(j)), t0, t1)
    res -= integral(model, P(Hz(i), rzz(i, j), az(i), az(j)), t0, t1)
    res += integral(model, P(rzs(j, k), az(j), ss(k)), t0, t1)
    return res


def fx_eq_covariance(model: CrossAssetModel, j: int, k: int, t0: float, dt: float) -> float:
    t1 = t0 + dt
    i = model.ccy_index(model.eqbs(k).currency)
    j_lgm = j + 1
    Hi_b = Hz(i)(model, t1)
    Hj_b = Hz(j_lgm)(model, t1)
    H0_b = Hz(0)(model, t1)

    def _int(*exprs: Expr) -> float:
        return integral(model, P(*exprs), t0, t1)

    res = Hi_b * H0_b * _int(rzz(0, i), az(0), az(i))
    res -= Hi_b * _int(Hz(0), rzz(0, i), az(0), az(i))
    res -= H0_b * _int(Hz(i), rzz(0, i), az(0), az(i))
    res += _int(Hz(0), Hz(i), rzz(0, i), az(0), az(i))
    res -= Hi_b * Hj_b * _int(rzz(j_lgm, i), az(j_lgm), az(i))
    res += Hi_b * _int(Hz(j_lgm), rzz(j_lgm, i), az(j_lgm), az(i))
    res += Hj_b * _int(Hz(i), rzz(j_lgm, i), az(j_lgm), az(i))
    res -= _int(Hz(j_lgm), Hz(i), rzz(j_lgm, i), az(j_lgm), az(i))
    res += Hi_b * _int(rzx(i, j), sx(j), az(i))
    res -= _int(Hz(i), rzx(i, j), sx(j), az(i))
    res += H0_b * _int(rzs(0, k), az(0), ss(k))
    res -= _int(Hz(0), rzs(0, k), az(0), ss(k))
    res -= Hj_b * _int(rzs(j_lgm, k), az(j_lgm), ss(k))
    res += _int(Hz(j_lgm), rzs(j_lgm, k), az(j_lgm), ss(k))
    res += _int(rxs(j, k), sx(j), ss(k))
    return res


def eq_eq_covariance(model: CrossAssetModel, k: int, m: int, t0: float, dt: float) -> float:
    t1 = t0 + dt
    i = model.ccy_index(model.eqbs(k).currency)
    j = model.ccy_index(model.eqbs(m).currency)
    Hi_b = Hz(i)(model, t1)
    Hj_b = Hz(j)(model, t1)

    def _int(*exprs: Expr) -> float:
        return integral(model, P(*exprs), t0, t1)

    res = _int(rss(k, m), ss(k), ss(m))
    res += Hj_b * _int(rzs(j, k), az(j), ss(k))
    res -= _int(Hz(j), rzs(j, k), az(j), ss(k))
    res += Hi_b * _int(rzs(i, m), az(i), ss(m))
    res -= _int(Hz(i), rzs(i, m), az(i), ss(m))
    res += Hi_b * Hj_b * _int(rzz(i, j), az(i), az(j))
    res -= Hi_b * _int(Hz(j), rzz(i, j), az(i), az(j))
    res -= Hj_b * _int(Hz(i), rzz(i, j), az(i), az(j))
    res += _int(Hz(i), Hz(j), rzz(i, j), az(i), az(j))
    return res


def eq_expectation_1(model: CrossAssetModel, k: int, t0: float, dt: float) -> float:
    """State independent part of the log equity expectation."""
    t1 = t0 + dt
    eq = model.eqbs(k)
    i = model.ccy_index(eq.currency)
    Hi_a, Hi_b = Hz(i)(model, t0), Hz(i)(model, t1)
    zetai_a, zetai_b = zetaz(i)(model, t0), zetaz(i)(model, t1)

    def _int(*exprs: Expr) -> float:
        return integral(model, P(*exprs), t0, t1)

    res = math.log(
        eq.div_curve.df(t1) / eq.div_curve.df(t0) * eq.ir_curve.df(t0) / eq.ir_curve.df(t1)
    )
    res -= 0.5 * (vs(k)(model, t1) - vs(k)(model, t0))
    res += 0.5 * (
        Hi_b * Hi_b * zetai_b - Hi_a * Hi_a * zetai_a - _int(Hz(i), Hz(i), az(i), az(i))
    )
    res += _int(rzs(0, k), Hz(0), az(0), ss(k))
    if i > 0:
        res -= _int(rxs(i - 1, k), sx(i - 1), ss(k))
        res += Hi_b * (
            -_int(Hz(i), az(i), az(i))
            - _int(rzx(i, i - 1), sx(i - 1), az(i))
            + _int(rzz(0, i), az(i), az(0), Hz(0))
        )
        res -= (
            -_int(Hz(i), Hz(i), az(i), az(i))
            - _int(Hz(i), rzx(i, i - 1), sx(i - 1), az(i))
            + _int(Hz(i), rzz(0, i), az(i), az(0), Hz(0))
        )
    return res


def eq_expectation_2(
    model: CrossAssetModel, k: int, t0: float, sk_0: float, zi_0: float, dt: float
) -> float:
    i = model.ccy_index(model.eqbs(k).currency)
    return sk_0 + (Hz(i)(model, t0 + dt) - Hz(i)(model, t0)) * zi_0
