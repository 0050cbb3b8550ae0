"""
Multi-currency swap discounting engine.
"""

from datetime import date
from typing import Dict, Optional, Sequence

from xalib.cashflows import analysis
from xalib.curves.base import YieldCurve
from xalib.instruments.currency_swap import CurrencySwapArguments, CurrencySwapResults
from xalib.market.quotes import SimpleQuote

from .base import LegValuationError, PricingEngine, ordinal


class DiscountingCurrencySwapEngine(PricingEngine):
    """
    Discounts each leg on its currency's curve and converts it into
    ``npv_currency`` with the matching FX quote.

    Args:
        discount_curves: One curve per currency in ``currencies``
        fx_quotes: Units of ``npv_currency`` per unit of each currency
        currencies: Currencies the curves and quotes are given for
        npv_currency: Currency of the total value; its curve anchors the dates
        include_settlement_date_flows: Whether flows on the settlement date count
        settlement_date: Defaults to the npv currency curve reference date
        npv_date: Defaults to the npv currency curve reference date
    """

    def __init__(
        self,
        discount_curves: Sequence[YieldCurve],
        fx_quotes: Sequence[SimpleQuote],
        currencies: Sequence[str],
        npv_currency: str,
        include_settlement_date_flows: Optional[bool] = None,
        settlement_date: Optional[date] = None,
        npv_date: Optional[date] = None,
    ):
        super().__init__()
        if len(discount_curves) != len(currencies):
            raise ValueError(
                f"number of discount curves ({len(discount_curves)}) does not match "
                f"number of currencies ({len(currencies)})"
            )
        if len(fx_quotes) != len(currencies):
            raise ValueError(
                f"number of fx quotes ({len(fx_quotes)}) does not match "
                f"number of currencies ({len(currencies)})"
            )
        self._curves: Dict[str, YieldCurve] = dict(zip(currencies, discount_curves))
        self._fx_quotes: Dict[str, SimpleQuote] = dict(zip(currencies, fx_quotes))
        self.currencies = list(currencies)
        self.npv_currency = npv_currency
        self.include_settlement_date_flows = include_settlement_date_flows
        self.settlement_date = settlement_date
        self.npv_date = npv_date
        for observable in (*discount_curves, *fx_quotes):
            self.register_with(observable)

    def fetch_curve(self, currency: str) -> YieldCurve:
        curve = self._curves.get(currency)
        if curve is None:
            raise ValueError(f"{currency} discount curve not found")
        return curve

    def fetch_fx(self, currency: str) -> SimpleQuote:
        quote = self._fx_quotes.get(currency)
        if quote is None:
            raise ValueError(f"{currency} fx quote not found")
        return quote

    def calculate(self, arguments: CurrencySwapArguments) -> CurrencySwapResults:
        npv_curve = self.fetch_curve(self.npv_currency)
        reference = npv_curve.reference_date

        settlement_date = self.settlement_date or reference
        if settlement_date < reference:
            raise ValueError(
                f"settlement date ({settlement_date}) before discount curve "
                f"reference date ({reference})"
            )
        npv_date = self.npv_date or reference
        if npv_date < reference:
            raise ValueError(
                f"npv date ({npv_date}) before discount curve reference date ({reference})"
            )

        n = len(arguments.legs)
        results = CurrencySwapResults(
            value=0.0,
            valuation_date=npv_date,
            leg_npv=[0.0] * n,
            leg_bps=[0.0] * n,
            in_ccy_leg_npv=[0.0] * n,
            in_ccy_leg_bps=[0.0] * n,
            start_discounts=[None] * n,
            end_discounts=[None] * n,
            npv_date_discount=npv_curve.df(npv_date),
        )
        for i, (leg, payer, currency) in enumerate(
            zip(arguments.legs, arguments.payer, arguments.currencies)
        ):
            try:
                curve = self.fetch_curve(currency)
                npv, bps = analysis.npvbps(
                    leg, curve, self.include_settlement_date_flows, settlement_date, npv_date
                )
                results.in_ccy_leg_npv[i] = npv * payer
                results.in_ccy_leg_bps[i] = bps * payer

                fx = self.fetch_fx(currency).value()
                results.leg_npv[i] = results.in_ccy_leg_npv[i] * fx
                results.leg_bps[i] = results.in_ccy_leg_bps[i] * fx

                if leg:
                    d1 = analysis.start_date(leg)
                    if d1 >= reference:
                        results.start_discounts[i] = curve.df(d1)
                    d2 = analysis.maturity_date(leg)
                    if d2 >= reference:
                        results.end_discounts[i] = curve.df(d2)
            except Exception as exc:
                raise LegValuationError(f"{ordinal(i + 1)} leg: {exc}") from exc
            results.value += results.leg_npv[i]

        return results
