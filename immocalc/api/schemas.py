"""Pydantic schemas for API request/response models.

All percentages are in percent units (4.5 == 4.5%).
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from immocalc.engine import programs
from immocalc.models.inputs import DepreciationMethod, InvestmentInputs, LoanProgram


# ---- Request schemas ----

class SecondaryLoanRequest(BaseModel):
    program: LoanProgram = LoanProgram.STANDARD
    amount: Decimal = Field(Decimal("0"), ge=0)
    interest_pct: Decimal = Field(Decimal("0"), ge=0)
    repayment_pct: Decimal = Field(Decimal("0"), ge=0)
    grace_period_years: int = Field(0, ge=0, le=30)
    subsidy_pct: Decimal = Field(Decimal("0"), ge=0, le=100)


class ProjectionRequest(BaseModel):
    # Acquisition
    purchase_price: Decimal = Field(..., ge=0)
    transfer_tax_pct: Decimal = Field(Decimal("0"), ge=0)
    notary_pct: Decimal = Field(Decimal("0"), ge=0)
    broker_pct: Decimal = Field(Decimal("0"), ge=0)
    size_sqm: Decimal = Field(Decimal("0"), ge=0)
    building_share_pct: Decimal = Field(Decimal("0"), ge=0, le=100)

    # Operating
    monthly_cold_rent: Decimal = Field(Decimal("0"), ge=0)
    vacancy_pct: Decimal = Field(Decimal("0"), ge=0, le=100)
    operating_costs_monthly: Decimal = Field(Decimal("0"), ge=0)
    management_costs_monthly: Decimal = Field(Decimal("0"), ge=0)
    maintenance_reserve_monthly: Decimal = Field(Decimal("0"), ge=0)

    # Growth (may be negative)
    rent_growth_pct: Decimal = Decimal("0")
    cost_growth_pct: Decimal = Decimal("0")
    appreciation_pct: Decimal = Decimal("0")

    # Primary financing
    loan_pct: Decimal = Field(Decimal("0"), ge=0)
    interest_pct: Decimal = Field(Decimal("0"), ge=0)
    repayment_pct: Decimal = Field(Decimal("0"), ge=0)
    loan_term_years: int = Field(0, ge=0)

    # Secondary financing
    secondary: SecondaryLoanRequest | None = None
    apply_program_defaults: bool = Field(
        False, description="Adjust depreciation to the selected secondary loan program"
    )

    # Depreciation & tax
    depreciation_method: DepreciationMethod = DepreciationMethod.LINEAR
    depreciation_rate_pct: Decimal = Field(Decimal("0"), ge=0, le=100)
    bonus_depreciation: bool = False
    tax_rate_pct: Decimal = Field(Decimal("0"), ge=0, le=100)
    holding_period_years: int = Field(10, ge=1, le=100)
    capital_gains_tax_pct: Decimal = Field(Decimal("0"), ge=0, le=100)
    renovation_cost: Decimal = Field(Decimal("0"), ge=0)
    furniture_cost: Decimal = Field(Decimal("0"), ge=0)

    def to_inputs(self) -> InvestmentInputs:
        fields = self.model_dump(exclude={"secondary", "apply_program_defaults"})
        secondary = None
        if self.secondary is not None:
            secondary = programs.secondary_loan(**self.secondary.model_dump())
        inputs = InvestmentInputs(secondary=secondary, **fields)
        if self.apply_program_defaults:
            inputs = programs.apply_program_defaults(inputs)
        return inputs


# ---- Response schemas ----

class _FromEngine(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class TimelineYearResponse(_FromEngine):
    year: int
    potential_rent: Decimal
    rental_income: Decimal
    operating_costs: Decimal
    noi: Decimal
    interest_payment: Decimal
    principal_payment: Decimal
    debt_service: Decimal
    subsidy: Decimal
    depreciation: Decimal
    furniture_depreciation: Decimal
    renovation_deduction: Decimal
    book_value: Decimal
    taxable_income: Decimal
    tax_payable: Decimal
    tax_saved: Decimal
    cash_flow_pre_tax: Decimal
    cash_flow_post_tax: Decimal
    loan_balance: Decimal
    property_value: Decimal
    ltv: Decimal


class AcquisitionResponse(_FromEngine):
    purchase_costs: Decimal
    total_investment: Decimal
    equity_required: Decimal
    depreciation_base: Decimal
    price_per_sqm: Decimal


class OperationsResponse(_FromEngine):
    noi: Decimal
    net_yield: Decimal
    gross_yield: Decimal
    gross_yield_on_investment: Decimal
    expense_ratio: Decimal


class FinancingResponse(_FromEngine):
    debt_service_year1: Decimal
    initial_dscr: Decimal | None = Field(None, description="Null when there is no debt service")
    loan_amount_total: Decimal
    loan_amount_primary: Decimal
    loan_amount_secondary: Decimal
    blended_interest_rate: Decimal

    @field_validator("initial_dscr", mode="before")
    @classmethod
    def _undefined_dscr(cls, v):
        if isinstance(v, Decimal) and not v.is_finite():
            return None
        return v


class ReturnMetricsResponse(_FromEngine):
    cash_flow_pre_tax_year1: Decimal
    cash_flow_post_tax_year1: Decimal
    cash_on_cash_avg: Decimal
    roe_avg: Decimal
    roi_total: Decimal
    roi_annualized: Decimal
    break_even_rent_monthly: Decimal
    equity_multiple: Decimal
    irr: Decimal | None = Field(None, description="Null when the IRR solver did not converge")
    timeline: list[TimelineYearResponse]


class WealthResponse(_FromEngine):
    exit_price: Decimal
    remaining_debt: Decimal
    exit_tax: Decimal
    net_exit_proceeds: Decimal
    wealth_accumulation: Decimal
    subsidy_amount: Decimal
    cumulative_tax_savings: Decimal
    total_economic_benefit: Decimal
    holding_years: int
    exit_price_per_sqm: Decimal


class ProjectionResponse(_FromEngine):
    acquisition: AcquisitionResponse
    operations: OperationsResponse
    financing: FinancingResponse
    return_metrics: ReturnMetricsResponse
    wealth: WealthResponse
