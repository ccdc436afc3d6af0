"""IRR computation by Newton-Raphson on the NPV function.

Pure functions. No I/O.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from immocalc.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

FOUR_PLACES = Decimal("0.0001")


def npv(cash_flows: Sequence[float], rate: float) -> float:
    """Net present value of periodic cash flows, cash_flows[0] undiscounted."""
    return sum(cf / (1 + rate) ** t for t, cf in enumerate(cash_flows))


def _npv_derivative(cash_flows: Sequence[float], rate: float) -> float:
    return sum(-t * cf / (1 + rate) ** (t + 1) for t, cf in enumerate(cash_flows))


def find_rate(
    cash_flows: Sequence[Decimal | float],
    guess: float | None = None,
    settings: Settings = default_settings,
) -> Decimal | None:
    """Find the periodic rate (in percent) at which NPV of the cash flows is zero.

    cash_flows[0] is the initial outlay (usually negative).
    Returns None when Newton-Raphson does not converge: the derivative goes
    flat, the iteration cap is reached, or the rate runs off to -100%/overflow.
    A stream of all (near) zero flows has rate 0 by convention.
    """
    tolerance = settings.irr_tolerance
    rate = settings.irr_default_guess if guess is None else float(guess)

    cf_float = [float(cf) for cf in cash_flows]
    if sum(abs(cf) for cf in cf_float) < tolerance:
        return Decimal("0")

    for _ in range(settings.irr_max_iterations):
        try:
            value = npv(cf_float, rate)
            slope = _npv_derivative(cf_float, rate)
        except (ZeroDivisionError, OverflowError):
            logger.debug("IRR diverged at rate %r", rate)
            return None

        if abs(value) < tolerance:
            return Decimal(str(rate * 100)).quantize(FOUR_PLACES, ROUND_HALF_UP)

        # Flat NPV curve: no further progress possible
        if abs(slope) < tolerance:
            logger.debug("IRR derivative vanished at rate %r", rate)
            return None

        rate -= value / slope

    logger.debug("IRR did not converge in %d iterations", settings.irr_max_iterations)
    return None


def equity_multiple(total_cash_returned: Decimal, equity_invested: Decimal) -> Decimal:
    """Equity multiple = total cash out / total cash in."""
    if equity_invested <= 0:
        return Decimal("0")
    return total_cash_returned / equity_invested
