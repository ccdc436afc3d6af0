"""Subsidized loan programs and the assumptions they imply."""

from dataclasses import replace
from decimal import Decimal

from immocalc.models.inputs import DepreciationMethod, InvestmentInputs, LoanProgram, SecondaryLoan

# New builds financed under the sustainability-seal program qualify for
# declining-balance depreciation plus the bonus depreciation.
QNG40_DEPRECIATION_RATE_PCT = Decimal("5")

PROGRAM_DESCRIPTIONS: dict[LoanProgram, str] = {
    LoanProgram.RENOVATION: "Efficiency renovation loan with repayment subsidy",
    LoanProgram.QNG40: "Climate-friendly new build with sustainability seal",
    LoanProgram.STANDARD: "Standard development-bank loan",
}


def secondary_loan(
    program: LoanProgram | str,
    amount: Decimal,
    interest_pct: Decimal,
    repayment_pct: Decimal,
    grace_period_years: int = 0,
    subsidy_pct: Decimal = Decimal("0"),
) -> SecondaryLoan:
    """Build a secondary facility; the subsidy is dropped for programs without one."""
    program = LoanProgram(program)
    return SecondaryLoan(
        program=program,
        amount=amount,
        interest_pct=interest_pct,
        repayment_pct=repayment_pct,
        grace_period_years=grace_period_years,
        subsidy_pct=subsidy_pct if program.has_repayment_subsidy else Decimal("0"),
    )


def apply_program_defaults(inputs: InvestmentInputs) -> InvestmentInputs:
    """Return inputs adjusted to the selected secondary loan program.

    QNG40: declining-balance depreciation at 5% with bonus depreciation.
    Other programs and no secondary facility leave the inputs unchanged.
    """
    if inputs.secondary is None or inputs.secondary.program is not LoanProgram.QNG40:
        return inputs
    return replace(
        inputs,
        depreciation_method=DepreciationMethod.DECLINING,
        depreciation_rate_pct=QNG40_DEPRECIATION_RATE_PCT,
        bonus_depreciation=True,
    )
