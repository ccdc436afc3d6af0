"""CLI for projecting a scenario file and printing a terminal report.

Usage:
    python -m immocalc.cli scenario.json
    python -m immocalc.cli scenario.json --timeline
    python -m immocalc.cli scenario.json --json
"""

import argparse
import logging
import sys
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from immocalc.api.schemas import ProjectionRequest, ProjectionResponse
from immocalc.config import settings
from immocalc.engine.programs import PROGRAM_DESCRIPTIONS
from immocalc.engine.projection import project
from immocalc.models.results import MetricsResult

logger = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────────────

def _pct(v: Decimal | None) -> str:
    """Format a percent-unit value; None and infinite values are N/A."""
    if v is None or not v.is_finite():
        return "N/A"
    return f"{float(v):.2f}%"


def _eur(v: Decimal) -> str:
    return f"{float(v):,.0f} EUR"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_summary(result: MetricsResult) -> None:
    acq = result.acquisition
    ops = result.operations
    fin = result.financing
    ret = result.return_metrics
    wealth = result.wealth

    _header("Acquisition")
    print(f"  Purchase Costs:       {_eur(acq.purchase_costs)}")
    print(f"  Total Investment:     {_eur(acq.total_investment)}")
    print(f"  Equity Required:      {_eur(acq.equity_required)}")
    print(f"  Depreciation Base:    {_eur(acq.depreciation_base)}")

    _header("Operations (Year 1)")
    print(f"  NOI:                  {_eur(ops.noi)}")
    print(f"  Gross Yield:          {_pct(ops.gross_yield)}")
    print(f"  Net Yield:            {_pct(ops.net_yield)}")
    print(f"  Expense Ratio:        {_pct(ops.expense_ratio)}")

    _header("Financing")
    print(f"  Loan (total):         {_eur(fin.loan_amount_total)}")
    print(f"  Loan (bank):          {_eur(fin.loan_amount_primary)}")
    print(f"  Loan (subsidized):    {_eur(fin.loan_amount_secondary)}")
    if result.inputs.secondary is not None:
        print(f"  Program:              {PROGRAM_DESCRIPTIONS[result.inputs.secondary.program]}")
    print(f"  Blended Rate:         {_pct(fin.blended_interest_rate)}")
    print(f"  Debt Service Year 1:  {_eur(fin.debt_service_year1)}")
    dscr = "N/A" if not fin.initial_dscr.is_finite() else f"{float(fin.initial_dscr):.2f}x"
    print(f"  DSCR:                 {dscr}")

    _header("Returns")
    print(f"  IRR:                  {_pct(ret.irr)}")
    print(f"  Equity Multiple:      {float(ret.equity_multiple):.2f}x")
    print(f"  Avg Cash-on-Cash:     {_pct(ret.cash_on_cash_avg)}")
    print(f"  Avg ROE:              {_pct(ret.roe_avg)}")
    print(f"  ROI (total):          {_pct(ret.roi_total)}")
    print(f"  ROI (annualized):     {_pct(ret.roi_annualized)}")
    print(f"  Break-even Rent:      {_eur(ret.break_even_rent_monthly)}/mo")

    _header(f"Exit after {wealth.holding_years} years")
    print(f"  Sale Price:           {_eur(wealth.exit_price)}")
    print(f"  Remaining Debt:       {_eur(wealth.remaining_debt)}")
    print(f"  Exit Tax:             {_eur(wealth.exit_tax)}")
    print(f"  Wealth Accumulation:  {_eur(wealth.wealth_accumulation)}")
    print(f"  Tax Savings (cum.):   {_eur(wealth.cumulative_tax_savings)}")
    print(f"  Total Benefit:        {_eur(wealth.total_economic_benefit)}")
    if wealth.subsidy_amount > 0:
        print(f"  Repayment Subsidy:    {_eur(wealth.subsidy_amount)}")


def print_timeline(result: MetricsResult) -> None:
    _header("Timeline")
    print(f"  {'Year':>4} {'NOI':>10} {'Interest':>10} {'Principal':>10} "
          f"{'Tax +/-':>10} {'CF post':>10} {'Balance':>12}")
    for t in result.return_metrics.timeline:
        tax = t.tax_saved - t.tax_payable
        print(f"  {t.year:>4} {float(t.noi):>10,.0f} {float(t.interest_payment):>10,.0f} "
              f"{float(t.principal_payment):>10,.0f} {float(tax):>10,.0f} "
              f"{float(t.cash_flow_post_tax):>10,.0f} {float(t.loan_balance):>12,.0f}")


def load_request(path: Path) -> ProjectionRequest:
    return ProjectionRequest.model_validate_json(path.read_text(encoding="utf-8"))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Real estate investment projection")
    parser.add_argument("scenario", type=Path, help="JSON file with the scenario inputs")
    parser.add_argument("--timeline", action="store_true", help="Print the yearly timeline")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level)

    try:
        request = load_request(args.scenario)
    except OSError as e:
        print(f"Cannot read scenario: {e}", file=sys.stderr)
        return 2
    except ValidationError as e:
        print(f"Invalid scenario:\n{e}", file=sys.stderr)
        return 2

    result = project(request.to_inputs())
    logger.debug("Projection finished for %s", args.scenario)

    if args.json:
        print(ProjectionResponse.model_validate(result).model_dump_json(indent=2))
        return 0

    print_summary(result)
    if args.timeline:
        print_timeline(result)
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
