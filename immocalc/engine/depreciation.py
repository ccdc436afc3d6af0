"""Depreciation of the structure, furniture, and renovation write-off.

Structure: straight-line on the original base or declining-balance on the
current book value, plus optional bonus depreciation in the first years
capped per square meter. Furniture: straight-line over its useful life.
Renovation: expensed in full in year 1.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal

from immocalc.config import Settings, settings as default_settings
from immocalc.models.inputs import DepreciationMethod, InvestmentInputs

HUNDRED = Decimal("100")
ZERO = Decimal("0")


@dataclass(frozen=True)
class YearlyDepreciation:
    year: int
    base: Decimal  # Linear or declining-balance
    bonus: Decimal
    furniture: Decimal
    renovation: Decimal
    book_value: Decimal  # Structure book value after this year

    @property
    def structure(self) -> Decimal:
        return self.base + self.bonus

    @property
    def total(self) -> Decimal:
        return self.base + self.bonus + self.furniture + self.renovation


def base_depreciation(
    method: DepreciationMethod,
    depreciable_basis: Decimal,
    book_value: Decimal,
    rate_pct: Decimal,
) -> Decimal:
    if method is DepreciationMethod.DECLINING:
        return book_value * rate_pct / HUNDRED
    return depreciable_basis * rate_pct / HUNDRED


def bonus_depreciation(
    depreciable_basis: Decimal,
    size_sqm: Decimal,
    year: int,
    settings: Settings = default_settings,
) -> Decimal:
    """Special depreciation for the first years on a per-m2-capped basis.

    bonus = rate x min(basis / m2, cap per m2) x m2. Without a known size
    the per-m2 basis is 0 and no bonus applies.
    """
    if year < 1 or year > settings.bonus_depreciation_years or size_sqm <= 0:
        return ZERO
    per_sqm = min(depreciable_basis / size_sqm, settings.bonus_depreciation_cap_per_sqm)
    return per_sqm * size_sqm * settings.bonus_depreciation_rate_pct / HUNDRED


def furniture_depreciation(
    furniture_cost: Decimal,
    year: int,
    settings: Settings = default_settings,
) -> Decimal:
    life = settings.furniture_useful_life_years
    if furniture_cost <= 0 or life <= 0 or year < 1 or year > life:
        return ZERO
    return furniture_cost / life


def renovation_deduction(renovation_cost: Decimal, year: int) -> Decimal:
    if year == 1 and renovation_cost > 0:
        return renovation_cost
    return ZERO


def compute_yearly_depreciation(
    inputs: InvestmentInputs,
    year: int,
    book_value: Decimal,
    settings: Settings = default_settings,
) -> YearlyDepreciation:
    """Depreciation for one year given the structure book value at its start.

    The full base + bonus is deducted; only the book value is floored at 0.
    """
    basis = inputs.depreciable_basis
    base = base_depreciation(
        inputs.depreciation_method, basis, book_value, inputs.depreciation_rate_pct
    )
    bonus = ZERO
    if inputs.bonus_depreciation:
        bonus = bonus_depreciation(basis, inputs.size_sqm, year, settings)

    return YearlyDepreciation(
        year=year,
        base=base,
        bonus=bonus,
        furniture=furniture_depreciation(inputs.furniture_cost, year, settings),
        renovation=renovation_deduction(inputs.renovation_cost, year),
        book_value=max(book_value - base - bonus, ZERO),
    )


def depreciation_schedule(
    inputs: InvestmentInputs,
    settings: Settings = default_settings,
) -> list[YearlyDepreciation]:
    """Depreciation for every year of the holding period."""
    schedule: list[YearlyDepreciation] = []
    book_value = inputs.depreciable_basis
    for year in range(1, inputs.holding_period_years + 1):
        dep = compute_yearly_depreciation(inputs, year, book_value, settings)
        schedule.append(dep)
        book_value = dep.book_value
    return schedule
