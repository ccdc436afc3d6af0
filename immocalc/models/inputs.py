from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

HUNDRED = Decimal("100")


class DepreciationMethod(Enum):
    LINEAR = "linear"        # Fixed % of the original depreciation base
    DECLINING = "declining"  # Fixed % of the current book value


class LoanProgram(Enum):
    RENOVATION = "261"  # Efficiency renovation loan, carries a repayment subsidy
    QNG40 = "qng40"     # New build with sustainability seal
    STANDARD = "standard"

    @property
    def has_repayment_subsidy(self) -> bool:
        return self is LoanProgram.RENOVATION


@dataclass(frozen=True)
class SecondaryLoan:
    """Subsidized development-bank loan drawn alongside the bank loan."""
    program: LoanProgram = LoanProgram.STANDARD
    amount: Decimal = Decimal("0")
    interest_pct: Decimal = Decimal("0")
    repayment_pct: Decimal = Decimal("0")
    grace_period_years: int = 0  # Interest-only years
    subsidy_pct: Decimal = Decimal("0")  # Principal write-down, RENOVATION only


@dataclass(frozen=True)
class InvestmentInputs:
    """Flat assumption set for one projection.

    All ``*_pct`` fields are in percent units (``Decimal("4.5")`` is 4.5%).
    """
    # Acquisition
    purchase_price: Decimal
    transfer_tax_pct: Decimal = Decimal("0")
    notary_pct: Decimal = Decimal("0")
    broker_pct: Decimal = Decimal("0")
    size_sqm: Decimal = Decimal("0")
    building_share_pct: Decimal = Decimal("0")  # Depreciable structure vs land

    # Operating (monthly amounts)
    monthly_cold_rent: Decimal = Decimal("0")
    vacancy_pct: Decimal = Decimal("0")
    operating_costs_monthly: Decimal = Decimal("0")  # Non-recoverable
    management_costs_monthly: Decimal = Decimal("0")
    maintenance_reserve_monthly: Decimal = Decimal("0")

    # Growth
    rent_growth_pct: Decimal = Decimal("0")
    cost_growth_pct: Decimal = Decimal("0")
    appreciation_pct: Decimal = Decimal("0")

    # Primary (bank) financing
    loan_pct: Decimal = Decimal("0")
    interest_pct: Decimal = Decimal("0")
    repayment_pct: Decimal = Decimal("0")
    loan_term_years: int = 0

    # Secondary (subsidized) financing
    secondary: SecondaryLoan | None = None

    # Depreciation
    depreciation_method: DepreciationMethod = DepreciationMethod.LINEAR
    depreciation_rate_pct: Decimal = Decimal("0")
    bonus_depreciation: bool = False

    # Tax
    tax_rate_pct: Decimal = Decimal("0")
    holding_period_years: int = 10
    capital_gains_tax_pct: Decimal = Decimal("0")
    renovation_cost: Decimal = Decimal("0")
    furniture_cost: Decimal = Decimal("0")

    @property
    def purchase_costs_pct(self) -> Decimal:
        return self.transfer_tax_pct + self.notary_pct + self.broker_pct

    @property
    def purchase_costs(self) -> Decimal:
        return self.purchase_price * self.purchase_costs_pct / HUNDRED

    @property
    def capital_improvements(self) -> Decimal:
        """Renovation and furniture, financed together with the purchase."""
        return self.renovation_cost + self.furniture_cost

    @property
    def total_investment(self) -> Decimal:
        return self.purchase_price + self.purchase_costs + self.capital_improvements

    @property
    def total_loan_amount(self) -> Decimal:
        return self.purchase_price * self.loan_pct / HUNDRED + self.capital_improvements

    @property
    def secondary_loan_amount(self) -> Decimal:
        """Drawn secondary amount, capped at the total financing need."""
        if self.secondary is None:
            return Decimal("0")
        return max(Decimal("0"), min(self.secondary.amount, self.total_loan_amount))

    @property
    def primary_loan_amount(self) -> Decimal:
        return self.total_loan_amount - self.secondary_loan_amount

    @property
    def repayment_subsidy(self) -> Decimal:
        if self.secondary is None or not self.secondary.program.has_repayment_subsidy:
            return Decimal("0")
        return self.secondary_loan_amount * self.secondary.subsidy_pct / HUNDRED

    @property
    def equity_required(self) -> Decimal:
        """Cash needed at closing; the subsidy does not reduce it."""
        return self.total_investment - (self.primary_loan_amount + self.secondary_loan_amount)

    @property
    def acquisition_basis(self) -> Decimal:
        """Purchase price plus purchase costs, split between land and structure."""
        return self.purchase_price + self.purchase_costs

    @property
    def depreciable_basis(self) -> Decimal:
        return self.acquisition_basis * self.building_share_pct / HUNDRED

    @property
    def land_value(self) -> Decimal:
        return self.acquisition_basis - self.depreciable_basis
