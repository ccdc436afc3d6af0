"""Annual annuity loan amortization.

Each facility is a small value struct advanced one year at a time by the
same step function. Pure functions: Decimal in, dataclass out. No I/O.
"""

from dataclasses import dataclass, replace
from decimal import Decimal

HUNDRED = Decimal("100")
ZERO = Decimal("0")


@dataclass(frozen=True)
class LoanState:
    balance: Decimal
    annuity: Decimal  # Fixed yearly payment after the grace period
    rate: Decimal  # Annual interest rate as a fraction
    grace_period_years: int = 0


@dataclass(frozen=True)
class LoanYear:
    interest: Decimal
    principal: Decimal

    @property
    def debt_service(self) -> Decimal:
        return self.interest + self.principal


@dataclass(frozen=True)
class AmortizationRow:
    year: int
    interest: Decimal
    principal: Decimal
    write_down: Decimal
    balance: Decimal  # After the payment and any write-down

    @property
    def debt_service(self) -> Decimal:
        return self.interest + self.principal


def annuity(principal: Decimal, interest_pct: Decimal, repayment_pct: Decimal) -> Decimal:
    """Yearly annuity = principal x (interest rate + initial repayment rate)."""
    if principal <= 0:
        return ZERO
    return principal * (interest_pct + repayment_pct) / HUNDRED


def open_loan(
    principal: Decimal,
    interest_pct: Decimal,
    repayment_pct: Decimal,
    grace_period_years: int = 0,
) -> LoanState:
    """Start a loan; the annuity is fixed from the original principal."""
    return LoanState(
        balance=principal,
        annuity=annuity(principal, interest_pct, repayment_pct),
        rate=interest_pct / HUNDRED,
        grace_period_years=grace_period_years,
    )


def loan_year(loan: LoanState, year: int) -> LoanYear:
    """Interest and principal due in a given year (1-indexed).

    Interest-only while year <= grace period. Principal never exceeds the
    remaining balance and is never negative.
    """
    if loan.balance <= 0:
        return LoanYear(interest=ZERO, principal=ZERO)

    interest = loan.balance * loan.rate
    if year <= loan.grace_period_years:
        return LoanYear(interest=interest, principal=ZERO)

    principal = loan.annuity - interest
    principal = min(principal, loan.balance)
    principal = max(principal, ZERO)
    return LoanYear(interest=interest, principal=principal)


def advance(loan: LoanState, payment: LoanYear, write_down: Decimal = ZERO) -> LoanState:
    """Apply a year's principal payment and any one-time principal write-down."""
    balance = loan.balance - payment.principal - write_down
    return replace(loan, balance=max(balance, ZERO))


def amortize(
    loan: LoanState,
    years: int,
    write_downs: dict[int, Decimal] | None = None,
) -> list[AmortizationRow]:
    """Yearly schedule of a single facility.

    write_downs maps a year to a one-time principal reduction (e.g. a
    repayment subsidy) applied after that year's payment.
    """
    write_downs = write_downs or {}
    schedule: list[AmortizationRow] = []
    for year in range(1, years + 1):
        payment = loan_year(loan, year)
        write_down = write_downs.get(year, ZERO)
        loan = advance(loan, payment, write_down=write_down)
        schedule.append(AmortizationRow(
            year=year,
            interest=payment.interest,
            principal=payment.principal,
            write_down=write_down,
            balance=loan.balance,
        ))
    return schedule
