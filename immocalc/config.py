from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "IMMOCALC_"}

    # App
    debug: bool = False
    log_level: str = "INFO"

    # Effective tax rate = marginal rate / surcharge factor.
    # Calibrated against a third-party calculator, not a statutory rule.
    # Confirm against the target jurisdiction before relying on it.
    tax_surcharge_factor: Decimal = Decimal("1.09")

    # Bonus (special) depreciation on new rental construction
    bonus_depreciation_rate_pct: Decimal = Decimal("5")
    bonus_depreciation_years: int = 4
    bonus_depreciation_cap_per_sqm: Decimal = Decimal("4000")

    # Furniture is written off straight-line over its useful life
    furniture_useful_life_years: int = 10

    # Sale gains are taxable only when sold inside this window
    speculation_period_years: int = 10

    # Root finder
    irr_max_iterations: int = 1000
    irr_tolerance: float = 1e-7
    irr_default_guess: float = 0.10


settings = Settings()
