"""Yearly income tax effect of the rental activity.

Approximates the marginal-rate effect on the investor's overall income:
a taxable profit costs tax, a loss offsets other income and saves tax.
Not a statutory computation.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from immocalc.config import Settings, settings as default_settings

HUNDRED = Decimal("100")
ZERO = Decimal("0")


@dataclass(frozen=True)
class TaxEffect:
    taxable_income: Decimal  # Negative = loss
    tax_payable: Decimal
    tax_saved: Decimal

    @property
    def net(self) -> Decimal:
        """Positive = cash benefit to the investor."""
        return self.tax_saved - self.tax_payable


def effective_tax_rate(
    tax_rate_pct: Decimal,
    settings: Settings = default_settings,
) -> Decimal:
    """Marginal rate (percent) -> effective fraction after the surcharge factor."""
    factor = settings.tax_surcharge_factor
    if factor <= 0:
        return tax_rate_pct / HUNDRED
    return tax_rate_pct / HUNDRED / factor


def taxable_rental_income(
    noi: Decimal,
    maintenance_reserve: Decimal,
    interest_paid: Decimal,
    deductions: Decimal,
) -> Decimal:
    """Taxable income from the rental.

    The maintenance reserve is added back to NOI (only costs actually incurred
    are deductible); interest and all depreciation/write-offs are deducted.
    Principal payments are NOT deductible.
    """
    return noi + maintenance_reserve - interest_paid - deductions


def compute_tax_effect(taxable_income: Decimal, rate: Decimal) -> TaxEffect:
    """Tax payable on a profit or tax saved on a loss, at the given rate."""
    if taxable_income > 0:
        return TaxEffect(taxable_income, taxable_income * rate, ZERO)
    return TaxEffect(taxable_income, ZERO, abs(taxable_income) * rate)
