"""Canonical test fixtures used across all engine tests.

Fixture: 300K apartment, 75 m2, 100% bank loan at 4.5% + 1.5% repayment,
1,200/month cold rent, 42% marginal tax rate, 10-year hold.
"""

import pytest
from decimal import Decimal

from immocalc.models.inputs import (
    DepreciationMethod,
    InvestmentInputs,
    LoanProgram,
    SecondaryLoan,
)


@pytest.fixture
def canonical_inputs() -> InvestmentInputs:
    """300K apartment, fully financed, straight-line depreciation."""
    return InvestmentInputs(
        purchase_price=Decimal("300000"),
        transfer_tax_pct=Decimal("6"),
        notary_pct=Decimal("2"),
        broker_pct=Decimal("0"),
        size_sqm=Decimal("75"),
        building_share_pct=Decimal("80"),
        monthly_cold_rent=Decimal("1200"),
        vacancy_pct=Decimal("0"),
        operating_costs_monthly=Decimal("100"),
        management_costs_monthly=Decimal("30"),
        maintenance_reserve_monthly=Decimal("50"),
        rent_growth_pct=Decimal("2"),
        cost_growth_pct=Decimal("0"),
        appreciation_pct=Decimal("2"),
        loan_pct=Decimal("100"),
        interest_pct=Decimal("4.5"),
        repayment_pct=Decimal("1.5"),
        loan_term_years=10,
        depreciation_method=DepreciationMethod.LINEAR,
        depreciation_rate_pct=Decimal("2"),
        tax_rate_pct=Decimal("42"),
        holding_period_years=10,
        capital_gains_tax_pct=Decimal("0"),
    )


@pytest.fixture
def renovation_loan() -> SecondaryLoan:
    """100K renovation loan at 1% + 3% repayment with a 5% repayment subsidy."""
    return SecondaryLoan(
        program=LoanProgram.RENOVATION,
        amount=Decimal("100000"),
        interest_pct=Decimal("1"),
        repayment_pct=Decimal("3"),
        grace_period_years=0,
        subsidy_pct=Decimal("5"),
    )


@pytest.fixture
def scenario_payload() -> dict:
    """The canonical scenario as a JSON request body."""
    return {
        "purchase_price": 300000,
        "transfer_tax_pct": 6,
        "notary_pct": 2,
        "size_sqm": 75,
        "building_share_pct": 80,
        "monthly_cold_rent": 1200,
        "operating_costs_monthly": 100,
        "management_costs_monthly": 30,
        "maintenance_reserve_monthly": 50,
        "rent_growth_pct": 2,
        "appreciation_pct": 2,
        "loan_pct": 100,
        "interest_pct": "4.5",
        "repayment_pct": "1.5",
        "depreciation_rate_pct": 2,
        "tax_rate_pct": 42,
        "holding_period_years": 10,
    }
