from dataclasses import replace
from decimal import Decimal

from immocalc.config import Settings
from immocalc.engine.projection import project
from immocalc.models.inputs import DepreciationMethod, InvestmentInputs, LoanProgram


class TestProjection:
    def test_timeline_length(self, canonical_inputs):
        result = project(canonical_inputs)
        timeline = result.return_metrics.timeline
        assert len(timeline) == 10
        assert [t.year for t in timeline] == list(range(1, 11))

    def test_loan_balance_decreases(self, canonical_inputs):
        timeline = project(canonical_inputs).return_metrics.timeline
        balances = [Decimal("300000")] + [t.loan_balance for t in timeline]
        for prev, cur in zip(balances, balances[1:]):
            assert cur < prev

    def test_noi_below_potential_rent(self, canonical_inputs):
        y1 = project(canonical_inputs).return_metrics.timeline[0]
        assert y1.noi < y1.potential_rent
        assert y1.noi == Decimal("12240")

    def test_irr_finite(self, canonical_inputs):
        result = project(canonical_inputs)
        assert result.return_metrics.irr is not None
        assert result.return_metrics.irr.is_finite()
        assert result.return_metrics.irr > 0

    def test_year1_values(self, canonical_inputs):
        y1 = project(canonical_inputs).return_metrics.timeline[0]
        assert y1.interest_payment == Decimal("13500")
        assert y1.principal_payment == Decimal("4500")
        assert y1.depreciation == Decimal("5184")
        assert y1.taxable_income == Decimal("-5844")
        assert y1.tax_payable == Decimal("0")
        expected_saving = Decimal("5844") * Decimal("0.42") / Decimal("1.09")
        assert abs(y1.tax_saved - expected_saving) < Decimal("0.01")
        assert y1.cash_flow_pre_tax == Decimal("-5760")
        assert y1.cash_flow_post_tax == y1.cash_flow_pre_tax + y1.tax_saved
        assert y1.loan_balance == Decimal("295500")
        assert y1.ltv == Decimal("295500") / Decimal("306000")

    def test_acquisition(self, canonical_inputs):
        acq = project(canonical_inputs).acquisition
        assert acq.purchase_costs == Decimal("24000")
        assert acq.total_investment == Decimal("324000")
        assert acq.equity_required == Decimal("24000")
        assert acq.depreciation_base == Decimal("259200")
        assert acq.price_per_sqm == Decimal("4000")

    def test_operations(self, canonical_inputs):
        ops = project(canonical_inputs).operations
        assert ops.noi == Decimal("12240")
        assert ops.gross_yield == Decimal("4.8")
        assert ops.expense_ratio == Decimal("15")

    def test_financing(self, canonical_inputs):
        fin = project(canonical_inputs).financing
        assert fin.debt_service_year1 == Decimal("18000")
        assert fin.initial_dscr == Decimal("12240") / Decimal("18000")
        assert fin.loan_amount_total == Decimal("300000")
        assert fin.loan_amount_primary == Decimal("300000")
        assert fin.loan_amount_secondary == Decimal("0")
        assert fin.blended_interest_rate == Decimal("4.5")

    def test_wealth(self, canonical_inputs):
        result = project(canonical_inputs)
        wealth = result.wealth
        last = result.return_metrics.timeline[-1]
        assert wealth.exit_price == Decimal("300000") * Decimal("1.02") ** 10
        assert wealth.remaining_debt == last.loan_balance
        assert wealth.wealth_accumulation == wealth.exit_price - wealth.remaining_debt
        assert wealth.cumulative_tax_savings == sum(
            t.tax_saved for t in result.return_metrics.timeline
        )
        assert wealth.total_economic_benefit == (
            wealth.wealth_accumulation + wealth.cumulative_tax_savings
        )
        assert wealth.exit_tax == Decimal("0")
        assert wealth.holding_years == 10

    def test_equity_multiple(self, canonical_inputs):
        result = project(canonical_inputs)
        ret = result.return_metrics
        cumulative = sum(t.cash_flow_post_tax for t in ret.timeline)
        expected = (cumulative + result.wealth.net_exit_proceeds) / Decimal("24000")
        assert ret.equity_multiple == expected
        assert ret.equity_multiple > Decimal("1")

    def test_averages_over_holding_period(self, canonical_inputs):
        ret = project(canonical_inputs).return_metrics
        avg_cf = sum(t.cash_flow_post_tax for t in ret.timeline) / 10
        avg_principal = sum(t.principal_payment for t in ret.timeline) / 10
        assert abs(ret.cash_on_cash_avg - avg_cf / Decimal("24000") * 100) < Decimal("1E-20")
        assert abs(
            ret.roe_avg - (avg_cf + avg_principal) / Decimal("24000") * 100
        ) < Decimal("1E-20")

    def test_annualized_roi_compounds_to_total(self, canonical_inputs):
        result = project(canonical_inputs)
        ret = result.return_metrics
        growth = result.wealth.total_economic_benefit / Decimal("24000")
        compounded = (1 + ret.roi_annualized / 100) ** 10
        assert abs(compounded - growth) < Decimal("0.0001")
        assert abs(ret.roi_total - (growth - 1) * 100) < Decimal("1E-20")

    def test_inputs_retained(self, canonical_inputs):
        assert project(canonical_inputs).inputs is canonical_inputs

    def test_deterministic(self, canonical_inputs):
        assert project(canonical_inputs) == project(canonical_inputs)

    def test_surcharge_factor_override(self, canonical_inputs):
        plain = project(canonical_inputs, Settings(tax_surcharge_factor=Decimal("1")))
        y1 = plain.return_metrics.timeline[0]
        assert y1.tax_saved == Decimal("5844") * Decimal("0.42")


class TestAmortizationConservation:
    def test_single_facility_pays_off(self):
        inputs = InvestmentInputs(
            purchase_price=Decimal("100000"),
            loan_pct=Decimal("100"),
            interest_pct=Decimal("5"),
            repayment_pct=Decimal("20"),
            holding_period_years=6,
        )
        timeline = project(inputs).return_metrics.timeline
        assert sum(t.principal_payment for t in timeline) == Decimal("100000")
        assert timeline[-1].loan_balance == Decimal("0")
        assert timeline[-1].principal_payment == Decimal("0")


class TestDepreciationChoices:
    def test_declining_book_value_monotonic(self, canonical_inputs):
        inputs = replace(
            canonical_inputs,
            depreciation_method=DepreciationMethod.DECLINING,
            depreciation_rate_pct=Decimal("5"),
            bonus_depreciation=False,
        )
        timeline = project(inputs).return_metrics.timeline
        values = [inputs.depreciable_basis] + [t.book_value for t in timeline]
        for prev, cur in zip(values, values[1:]):
            assert cur <= prev
            assert cur >= 0

    def test_full_deduction_after_basis_spent(self, canonical_inputs):
        inputs = replace(canonical_inputs, depreciation_rate_pct=Decimal("40"))
        timeline = project(inputs).return_metrics.timeline
        assert timeline[2].depreciation == Decimal("103680")
        assert timeline[2].book_value == Decimal("0")

    def test_bonus_needs_size(self, canonical_inputs):
        inputs = replace(canonical_inputs, size_sqm=Decimal("0"), bonus_depreciation=True)
        timeline = project(inputs).return_metrics.timeline
        assert timeline[0].depreciation == Decimal("5184")

    def test_bonus_only_first_four_years(self, canonical_inputs):
        inputs = replace(canonical_inputs, bonus_depreciation=True)
        timeline = project(inputs).return_metrics.timeline
        assert [t.depreciation for t in timeline[:4]] == [Decimal("18144")] * 4
        assert [t.depreciation for t in timeline[4:]] == [Decimal("5184")] * 6

    def test_furniture_and_renovation(self, canonical_inputs):
        inputs = replace(
            canonical_inputs, furniture_cost=Decimal("10000"), renovation_cost=Decimal("20000")
        )
        result = project(inputs)
        timeline = result.return_metrics.timeline
        assert result.financing.loan_amount_total == Decimal("330000")
        assert result.acquisition.total_investment == Decimal("354000")
        assert result.acquisition.equity_required == Decimal("24000")
        assert timeline[0].renovation_deduction == Decimal("20000")
        assert timeline[1].renovation_deduction == Decimal("0")
        assert all(t.furniture_depreciation == Decimal("1000") for t in timeline)

    def test_maintenance_reserve_not_deductible(self, canonical_inputs):
        with_reserve = project(canonical_inputs).return_metrics.timeline[0]
        without = project(
            replace(canonical_inputs, maintenance_reserve_monthly=Decimal("0"))
        ).return_metrics.timeline[0]
        assert with_reserve.taxable_income == without.taxable_income
        assert with_reserve.noi == without.noi - Decimal("600")


class TestSecondaryFacility:
    def test_split_financing(self, canonical_inputs, renovation_loan):
        inputs = replace(canonical_inputs, secondary=renovation_loan)
        fin = project(inputs).financing
        assert fin.loan_amount_primary == Decimal("200000")
        assert fin.loan_amount_secondary == Decimal("100000")
        assert fin.blended_interest_rate == (
            Decimal("200000") * Decimal("4.5") + Decimal("100000") * Decimal("1")
        ) / Decimal("300000")

    def test_secondary_capped_at_total_need(self, canonical_inputs, renovation_loan):
        loan = replace(renovation_loan, amount=Decimal("500000"))
        inputs = replace(canonical_inputs, secondary=loan)
        result = project(inputs)
        assert result.financing.loan_amount_secondary == Decimal("300000")
        assert result.financing.loan_amount_primary == Decimal("0")
        assert result.acquisition.equity_required == Decimal("24000")

    def test_subsidy_applied_in_year1_only(self, canonical_inputs, renovation_loan):
        inputs = replace(canonical_inputs, secondary=renovation_loan)
        result = project(inputs)
        timeline = result.return_metrics.timeline
        assert timeline[0].subsidy == Decimal("5000")
        assert all(t.subsidy == Decimal("0") for t in timeline[1:])
        assert result.wealth.subsidy_amount == Decimal("5000")

    def test_secondary_balance_after_year1(self, canonical_inputs, renovation_loan):
        """Bank: 200,000 - 3,000. Secondary: 100,000 - 5,000 subsidy - 3,000 principal."""
        inputs = replace(canonical_inputs, secondary=renovation_loan)
        y1 = project(inputs).return_metrics.timeline[0]
        assert y1.interest_payment == Decimal("9000") + Decimal("1000")
        assert y1.principal_payment == Decimal("3000") + Decimal("3000")
        assert y1.loan_balance == Decimal("197000") + Decimal("92000")

    def test_subsidy_is_not_cash(self, canonical_inputs, renovation_loan):
        no_subsidy = replace(renovation_loan, subsidy_pct=Decimal("0"))
        with_subsidy = project(replace(canonical_inputs, secondary=renovation_loan))
        without = project(replace(canonical_inputs, secondary=no_subsidy))
        y1_with = with_subsidy.return_metrics.timeline[0]
        y1_without = without.return_metrics.timeline[0]
        assert y1_with.cash_flow_post_tax == y1_without.cash_flow_post_tax
        assert with_subsidy.acquisition.equity_required == without.acquisition.equity_required
        assert with_subsidy.wealth.remaining_debt < without.wealth.remaining_debt

    def test_grace_period(self, canonical_inputs, renovation_loan):
        loan = replace(renovation_loan, grace_period_years=2)
        timeline = project(replace(canonical_inputs, secondary=loan)).return_metrics.timeline
        # Year 1: bank principal only; secondary balance reduced by the subsidy
        assert timeline[0].principal_payment == Decimal("3000")
        assert timeline[0].loan_balance == Decimal("197000") + Decimal("95000")
        assert timeline[1].principal_payment < timeline[2].principal_payment

    def test_subsidy_only_for_renovation_program(self, canonical_inputs, renovation_loan):
        loan = replace(renovation_loan, program=LoanProgram.QNG40)
        result = project(replace(canonical_inputs, secondary=loan))
        assert result.wealth.subsidy_amount == Decimal("0")
        assert all(t.subsidy == Decimal("0") for t in result.return_metrics.timeline)


class TestEdgeCases:
    def test_zero_equity_ratios(self):
        inputs = InvestmentInputs(
            purchase_price=Decimal("200000"),
            monthly_cold_rent=Decimal("800"),
            loan_pct=Decimal("100"),
            interest_pct=Decimal("4"),
            repayment_pct=Decimal("2"),
            appreciation_pct=Decimal("2"),
            holding_period_years=10,
        )
        ret = project(inputs).return_metrics
        assert project(inputs).acquisition.equity_required == Decimal("0")
        assert ret.cash_on_cash_avg == Decimal("0")
        assert ret.roe_avg == Decimal("0")
        assert ret.roi_total == Decimal("0")
        assert ret.roi_annualized == Decimal("0")
        assert ret.equity_multiple == Decimal("0")

    def test_zero_holding_period(self, canonical_inputs):
        result = project(replace(canonical_inputs, holding_period_years=0))
        ret = result.return_metrics
        assert ret.timeline == []
        assert ret.cash_on_cash_avg == Decimal("0")
        assert ret.roi_annualized == Decimal("0")
        assert result.operations.noi == Decimal("0")
        assert result.financing.initial_dscr == Decimal("0")

    def test_zero_price(self):
        result = project(InvestmentInputs(purchase_price=Decimal("0")))
        assert result.acquisition.price_per_sqm == Decimal("0")
        assert result.operations.gross_yield == Decimal("0")
        assert result.operations.net_yield == Decimal("0")
        assert result.wealth.exit_price_per_sqm == Decimal("0")
        assert all(t.ltv == Decimal("0") for t in result.return_metrics.timeline)

    def test_cash_purchase_dscr_infinite(self, canonical_inputs):
        result = project(replace(canonical_inputs, loan_pct=Decimal("0")))
        assert result.financing.initial_dscr == Decimal("Infinity")
        assert result.financing.blended_interest_rate == Decimal("0")

    def test_never_profitable_irr_undefined(self):
        """Nothing ever comes back: no root for the IRR."""
        inputs = InvestmentInputs(
            purchase_price=Decimal("100000"),
            operating_costs_monthly=Decimal("100"),
            appreciation_pct=Decimal("-100"),
            holding_period_years=5,
        )
        assert project(inputs).return_metrics.irr is None

    def test_total_loss_annualized_roi(self):
        inputs = InvestmentInputs(
            purchase_price=Decimal("100000"),
            appreciation_pct=Decimal("-100"),
            holding_period_years=5,
        )
        assert project(inputs).return_metrics.roi_annualized == Decimal("-100")
