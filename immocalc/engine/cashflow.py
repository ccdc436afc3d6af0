"""Operating cash flow: rent, vacancy, operating costs, NOI, and ratios.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal

from immocalc.models.inputs import InvestmentInputs

HUNDRED = Decimal("100")
ZERO = Decimal("0")


def growth_factor(growth_pct: Decimal, periods: int) -> Decimal:
    """Compound growth multiplier after the given number of periods."""
    if periods <= 0:
        return Decimal("1")
    return (1 + growth_pct / HUNDRED) ** periods


def potential_rent(inputs: InvestmentInputs, year: int) -> Decimal:
    """Gross scheduled cold rent for a year (1-indexed), before vacancy."""
    return inputs.monthly_cold_rent * 12 * growth_factor(inputs.rent_growth_pct, year - 1)


def rental_income(inputs: InvestmentInputs, year: int) -> Decimal:
    """Effective rental income after vacancy."""
    return potential_rent(inputs, year) * (1 - inputs.vacancy_pct / HUNDRED)


def operating_costs(inputs: InvestmentInputs, year: int) -> dict[str, Decimal]:
    """Itemized non-recoverable costs for a year, each grown at the cost growth rate."""
    factor = growth_factor(inputs.cost_growth_pct, year - 1)
    operating = inputs.operating_costs_monthly * 12 * factor
    management = inputs.management_costs_monthly * 12 * factor
    maintenance = inputs.maintenance_reserve_monthly * 12 * factor
    return {
        "operating": operating,
        "management": management,
        "maintenance_reserve": maintenance,
        "total": operating + management + maintenance,
    }


def noi(inputs: InvestmentInputs, year: int) -> Decimal:
    """Net Operating Income = rental income - operating costs."""
    return rental_income(inputs, year) - operating_costs(inputs, year)["total"]


def property_value(inputs: InvestmentInputs, year: int) -> Decimal:
    """Appreciated market value at the end of a year."""
    return inputs.purchase_price * growth_factor(inputs.appreciation_pct, year)


def ratio_pct(numerator: Decimal, denominator: Decimal) -> Decimal:
    """numerator / denominator in percent, 0 when the denominator is not positive."""
    if denominator <= 0:
        return ZERO
    return numerator / denominator * HUNDRED


def dscr(noi_amount: Decimal, debt_service: Decimal) -> Decimal:
    """Debt Service Coverage Ratio = NOI / debt service.

    Without debt service the ratio is undefined: Infinity when NOI is
    positive, 0 otherwise.
    """
    if debt_service > 0:
        return noi_amount / debt_service
    if noi_amount > 0:
        return Decimal("Infinity")
    return ZERO


def break_even_rent_monthly(inputs: InvestmentInputs, debt_service_year1: Decimal) -> Decimal:
    """Monthly rent that covers operating costs and year 1 debt service."""
    monthly_costs = (
        inputs.operating_costs_monthly
        + inputs.management_costs_monthly
        + inputs.maintenance_reserve_monthly
    )
    return monthly_costs + debt_service_year1 / 12
