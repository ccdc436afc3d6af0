from dataclasses import dataclass, field
from decimal import Decimal

from immocalc.models.inputs import InvestmentInputs


@dataclass(frozen=True)
class TimelineYear:
    year: int

    # Income
    potential_rent: Decimal = Decimal("0")
    rental_income: Decimal = Decimal("0")  # After vacancy
    operating_costs: Decimal = Decimal("0")
    noi: Decimal = Decimal("0")

    # Debt (both facilities combined)
    interest_payment: Decimal = Decimal("0")
    principal_payment: Decimal = Decimal("0")
    subsidy: Decimal = Decimal("0")  # Repayment subsidy written off this year

    # Depreciation
    depreciation: Decimal = Decimal("0")  # Structure base + bonus
    furniture_depreciation: Decimal = Decimal("0")
    renovation_deduction: Decimal = Decimal("0")
    book_value: Decimal = Decimal("0")  # Structure book value at year end

    # Tax
    taxable_income: Decimal = Decimal("0")  # Negative = loss
    tax_payable: Decimal = Decimal("0")
    tax_saved: Decimal = Decimal("0")

    # Cash flow
    cash_flow_pre_tax: Decimal = Decimal("0")
    cash_flow_post_tax: Decimal = Decimal("0")

    # Balance sheet
    loan_balance: Decimal = Decimal("0")
    property_value: Decimal = Decimal("0")
    ltv: Decimal = Decimal("0")

    @property
    def debt_service(self) -> Decimal:
        return self.interest_payment + self.principal_payment


@dataclass(frozen=True)
class AcquisitionMetrics:
    purchase_costs: Decimal = Decimal("0")
    total_investment: Decimal = Decimal("0")
    equity_required: Decimal = Decimal("0")
    depreciation_base: Decimal = Decimal("0")
    price_per_sqm: Decimal = Decimal("0")


@dataclass(frozen=True)
class OperationsMetrics:
    noi: Decimal = Decimal("0")  # Year 1
    net_yield: Decimal = Decimal("0")  # NOI / total investment, percent
    gross_yield: Decimal = Decimal("0")  # Potential rent / price, percent
    gross_yield_on_investment: Decimal = Decimal("0")  # Potential rent / total investment
    expense_ratio: Decimal = Decimal("0")  # Operating costs / rental income


@dataclass(frozen=True)
class FinancingMetrics:
    debt_service_year1: Decimal = Decimal("0")
    initial_dscr: Decimal = Decimal("0")  # Decimal("Infinity") when no debt service
    loan_amount_total: Decimal = Decimal("0")
    loan_amount_primary: Decimal = Decimal("0")
    loan_amount_secondary: Decimal = Decimal("0")
    blended_interest_rate: Decimal = Decimal("0")  # Percent


@dataclass(frozen=True)
class ReturnMetrics:
    cash_flow_pre_tax_year1: Decimal = Decimal("0")
    cash_flow_post_tax_year1: Decimal = Decimal("0")
    cash_on_cash_avg: Decimal = Decimal("0")  # Percent
    roe_avg: Decimal = Decimal("0")  # Percent
    roi_total: Decimal = Decimal("0")  # Percent
    roi_annualized: Decimal = Decimal("0")  # Percent
    break_even_rent_monthly: Decimal = Decimal("0")
    equity_multiple: Decimal = Decimal("0")
    irr: Decimal | None = None  # Percent; None when the solver did not converge
    timeline: list[TimelineYear] = field(default_factory=list)


@dataclass(frozen=True)
class WealthMetrics:
    exit_price: Decimal = Decimal("0")
    remaining_debt: Decimal = Decimal("0")
    exit_tax: Decimal = Decimal("0")
    net_exit_proceeds: Decimal = Decimal("0")
    wealth_accumulation: Decimal = Decimal("0")  # Exit price - remaining debt
    subsidy_amount: Decimal = Decimal("0")
    cumulative_tax_savings: Decimal = Decimal("0")
    total_economic_benefit: Decimal = Decimal("0")  # Wealth + tax savings
    holding_years: int = 0
    exit_price_per_sqm: Decimal = Decimal("0")


@dataclass(frozen=True)
class MetricsResult:
    inputs: InvestmentInputs
    acquisition: AcquisitionMetrics = field(default_factory=AcquisitionMetrics)
    operations: OperationsMetrics = field(default_factory=OperationsMetrics)
    financing: FinancingMetrics = field(default_factory=FinancingMetrics)
    return_metrics: ReturnMetrics = field(default_factory=ReturnMetrics)
    wealth: WealthMetrics = field(default_factory=WealthMetrics)
