"""Exit (sale) analysis at the end of the holding period.

Gains are taxed only when the property is sold inside the speculation
period; afterwards the sale is tax free.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from immocalc.config import Settings, settings as default_settings
from immocalc.engine.cashflow import property_value
from immocalc.models.inputs import InvestmentInputs

HUNDRED = Decimal("100")
ZERO = Decimal("0")


@dataclass(frozen=True)
class ExitResult:
    sale_price: Decimal
    land_value: Decimal
    book_value: Decimal  # Remaining structure book value
    taxable_gain: Decimal
    exit_tax: Decimal
    remaining_debt: Decimal
    net_proceeds: Decimal  # Sale price - exit tax - remaining debt

    @property
    def wealth_accumulation(self) -> Decimal:
        """Sale price - remaining debt, before any exit tax."""
        return self.sale_price - self.remaining_debt


def capital_gains_taxable(inputs: InvestmentInputs, settings: Settings = default_settings) -> bool:
    return (
        inputs.holding_period_years < settings.speculation_period_years
        and inputs.capital_gains_tax_pct > 0
    )


def compute_exit(
    inputs: InvestmentInputs,
    book_value: Decimal,
    remaining_debt: Decimal,
    settings: Settings = default_settings,
) -> ExitResult:
    """Compute sale proceeds after exit tax and loan payoff.

    Args:
        inputs: Investment assumptions (price, appreciation, holding period)
        book_value: Structure book value left after depreciation
        remaining_debt: Total loan balance outstanding at sale
        settings: Speculation period and related configuration
    """
    sale_price = property_value(inputs, inputs.holding_period_years)
    land_value = inputs.land_value

    taxable_gain = ZERO
    exit_tax = ZERO
    if capital_gains_taxable(inputs, settings):
        gain = sale_price - (land_value + book_value)
        if gain > 0:
            taxable_gain = gain
            exit_tax = gain * inputs.capital_gains_tax_pct / HUNDRED

    return ExitResult(
        sale_price=sale_price,
        land_value=land_value,
        book_value=book_value,
        taxable_gain=taxable_gain,
        exit_tax=exit_tax,
        remaining_debt=remaining_debt,
        net_proceeds=sale_price - exit_tax - remaining_debt,
    )
