"""Projection orchestrator: composes the engine sub-modules into MetricsResult.

Pure computation. No I/O. InvestmentInputs in, MetricsResult out.
"""

import logging
from decimal import Decimal

from immocalc.config import Settings, settings as default_settings
from immocalc.models.inputs import InvestmentInputs
from immocalc.models.results import (
    AcquisitionMetrics,
    FinancingMetrics,
    MetricsResult,
    OperationsMetrics,
    ReturnMetrics,
    TimelineYear,
    WealthMetrics,
)

from immocalc.engine.cashflow import (
    break_even_rent_monthly,
    dscr,
    noi,
    operating_costs,
    potential_rent,
    property_value,
    ratio_pct,
    rental_income,
)
from immocalc.engine.debt import AmortizationRow, amortize, open_loan
from immocalc.engine.depreciation import depreciation_schedule
from immocalc.engine.disposition import compute_exit
from immocalc.engine.irr import equity_multiple, find_rate
from immocalc.engine.tax import compute_tax_effect, effective_tax_rate, taxable_rental_income

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")
ZERO = Decimal("0")
NO_LOAN = AmortizationRow(year=0, interest=ZERO, principal=ZERO, write_down=ZERO, balance=ZERO)


def project(
    inputs: InvestmentInputs,
    settings: Settings = default_settings,
) -> MetricsResult:
    """Run the full multi-year projection.

    Returns MetricsResult with the yearly timeline, exit analysis, and
    summary return metrics. Never raises on out-of-domain numbers: zero
    denominators yield 0 and a non-converging IRR is reported as None.
    """
    years = inputs.holding_period_years
    equity = inputs.equity_required
    subsidy = inputs.repayment_subsidy
    tax_rate = effective_tax_rate(inputs.tax_rate_pct, settings)

    # Loans: each facility amortized on its own, combined per year
    primary = open_loan(
        principal=inputs.primary_loan_amount,
        interest_pct=inputs.interest_pct,
        repayment_pct=inputs.repayment_pct,
    )
    primary_rows = amortize(primary, years)
    remaining_debt = primary_rows[-1].balance if primary_rows else primary.balance

    secondary_rows: list[AmortizationRow] = []
    if inputs.secondary is not None:
        secondary = open_loan(
            principal=inputs.secondary_loan_amount,
            interest_pct=inputs.secondary.interest_pct,
            repayment_pct=inputs.secondary.repayment_pct,
            grace_period_years=inputs.secondary.grace_period_years,
        )
        # The repayment subsidy is written off once, at the end of year 1
        secondary_rows = amortize(secondary, years, write_downs={1: subsidy})
        remaining_debt += secondary_rows[-1].balance if secondary_rows else secondary.balance

    schedule = depreciation_schedule(inputs, settings)
    book_value = schedule[-1].book_value if schedule else inputs.depreciable_basis

    timeline: list[TimelineYear] = []
    cumulative_cash_flow = ZERO
    cumulative_tax_savings = ZERO

    for year in range(1, years + 1):
        # Operations
        year_rent = potential_rent(inputs, year)
        year_income = rental_income(inputs, year)
        costs = operating_costs(inputs, year)
        year_noi = noi(inputs, year)

        # Debt service, both facilities in lockstep
        p = primary_rows[year - 1]
        s = secondary_rows[year - 1] if secondary_rows else NO_LOAN
        interest = p.interest + s.interest
        principal = p.principal + s.principal
        debt_service = interest + principal
        balance = p.balance + s.balance

        # Depreciation & tax
        dep = schedule[year - 1]
        taxable = taxable_rental_income(
            noi=year_noi,
            maintenance_reserve=costs["maintenance_reserve"],
            interest_paid=interest,
            deductions=dep.total,
        )
        tax = compute_tax_effect(taxable, tax_rate)

        # Cash flow
        cf_pre_tax = year_noi - debt_service
        cf_post_tax = cf_pre_tax - tax.tax_payable + tax.tax_saved
        cumulative_cash_flow += cf_post_tax
        cumulative_tax_savings += tax.tax_saved

        value = property_value(inputs, year)
        timeline.append(TimelineYear(
            year=year,
            potential_rent=year_rent,
            rental_income=year_income,
            operating_costs=costs["total"],
            noi=year_noi,
            interest_payment=interest,
            principal_payment=principal,
            subsidy=s.write_down,
            depreciation=dep.structure,
            furniture_depreciation=dep.furniture,
            renovation_deduction=dep.renovation,
            book_value=dep.book_value,
            taxable_income=taxable,
            tax_payable=tax.tax_payable,
            tax_saved=tax.tax_saved,
            cash_flow_pre_tax=cf_pre_tax,
            cash_flow_post_tax=cf_post_tax,
            loan_balance=balance,
            property_value=value,
            ltv=balance / value if value > 0 else ZERO,
        ))

    exit_result = compute_exit(inputs, book_value, remaining_debt, settings)
    total_economic_benefit = exit_result.wealth_accumulation + cumulative_tax_savings

    # IRR: equity out at t0, post-tax cash flows, exit proceeds in the last year
    irr_stream = [-equity] + [t.cash_flow_post_tax for t in timeline]
    irr_stream[-1] += exit_result.net_proceeds
    irr = find_rate(irr_stream, settings=settings)
    if irr is None:
        logger.debug("IRR undefined for stream %s", irr_stream)

    y1 = timeline[0] if timeline else TimelineYear(year=0)

    # Averages over the holding period smooth out year 1 subsidies and write-offs
    avg_cash_flow = ZERO
    avg_principal = ZERO
    if years > 0:
        avg_cash_flow = sum((t.cash_flow_post_tax for t in timeline), ZERO) / years
        avg_principal = sum((t.principal_payment for t in timeline), ZERO) / years

    roi_annualized = ZERO
    if equity > 0 and years > 0:
        growth = total_economic_benefit / equity
        if growth > 0:
            roi_annualized = (growth ** (Decimal(1) / Decimal(years)) - 1) * HUNDRED
        else:
            roi_annualized = -HUNDRED

    result = MetricsResult(
        inputs=inputs,
        acquisition=AcquisitionMetrics(
            purchase_costs=inputs.purchase_costs,
            total_investment=inputs.total_investment,
            equity_required=equity,
            depreciation_base=inputs.depreciable_basis,
            price_per_sqm=inputs.purchase_price / inputs.size_sqm if inputs.size_sqm > 0 else ZERO,
        ),
        operations=OperationsMetrics(
            noi=y1.noi,
            net_yield=ratio_pct(y1.noi, inputs.total_investment),
            gross_yield=ratio_pct(y1.potential_rent, inputs.purchase_price),
            gross_yield_on_investment=ratio_pct(y1.potential_rent, inputs.total_investment),
            expense_ratio=ratio_pct(y1.operating_costs, y1.rental_income),
        ),
        financing=FinancingMetrics(
            debt_service_year1=y1.debt_service,
            initial_dscr=dscr(y1.noi, y1.debt_service),
            loan_amount_total=inputs.total_loan_amount,
            loan_amount_primary=inputs.primary_loan_amount,
            loan_amount_secondary=inputs.secondary_loan_amount,
            blended_interest_rate=_blended_interest_rate(inputs),
        ),
        return_metrics=ReturnMetrics(
            cash_flow_pre_tax_year1=y1.cash_flow_pre_tax,
            cash_flow_post_tax_year1=y1.cash_flow_post_tax,
            cash_on_cash_avg=ratio_pct(avg_cash_flow, equity),
            roe_avg=ratio_pct(avg_cash_flow + avg_principal, equity),
            roi_total=ratio_pct(total_economic_benefit - equity, equity),
            roi_annualized=roi_annualized,
            break_even_rent_monthly=break_even_rent_monthly(inputs, y1.debt_service),
            equity_multiple=equity_multiple(
                cumulative_cash_flow + exit_result.net_proceeds, equity
            ),
            irr=irr,
            timeline=timeline,
        ),
        wealth=WealthMetrics(
            exit_price=exit_result.sale_price,
            remaining_debt=remaining_debt,
            exit_tax=exit_result.exit_tax,
            net_exit_proceeds=exit_result.net_proceeds,
            wealth_accumulation=exit_result.wealth_accumulation,
            subsidy_amount=subsidy,
            cumulative_tax_savings=cumulative_tax_savings,
            total_economic_benefit=total_economic_benefit,
            holding_years=years,
            exit_price_per_sqm=(
                exit_result.sale_price / inputs.size_sqm if inputs.size_sqm > 0 else ZERO
            ),
        ),
    )
    logger.debug(
        "Projected %d years: equity=%s irr=%s multiple=%s",
        years, equity, irr, result.return_metrics.equity_multiple,
    )
    return result


def _blended_interest_rate(inputs: InvestmentInputs) -> Decimal:
    """Loan-weighted interest rate (percent) across both facilities."""
    total = inputs.total_loan_amount
    if total <= 0:
        return ZERO
    blended = inputs.primary_loan_amount * inputs.interest_pct
    if inputs.secondary is not None:
        blended += inputs.secondary_loan_amount * inputs.secondary.interest_pct
    return blended / total
