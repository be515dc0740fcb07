from __future__ import annotations

import math
from enum import Enum
from typing import Iterator, List

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from compound_backend.logging_config import get_logger

logger = get_logger(__name__)

MONTHS_PER_YEAR = 12
DEFAULT_RATE_STEP = 0.5

# absorbs float noise when variance_range / step should be a whole number
_STEP_TOLERANCE = 1e-9
# swept rates are rounded to this many decimals before the non-negative filter
_RATE_DIGITS = 10


class InvalidParameter(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


class CompoundingFrequency(int, Enum):
    ANNUALLY = 1
    SEMIANNUALLY = 2
    QUARTERLY = 4
    MONTHLY = 12
    DAILY = 365

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str) -> "CompoundingFrequency":
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"unknown compounding frequency {label!r}") from None


class _Record(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class FinancialParameters(_Record):
    initial_principal: float
    monthly_contribution: float
    annual_rate_percent: float
    compounds_per_year: int
    years: int


class ProjectionResult(_Record):
    future_value: float
    total_contributions: float
    total_interest: float


class YearlyDataPoint(_Record):
    year: int
    balance: float
    contributions: float
    interest: float


class RateSweepPoint(_Record):
    rate: float
    future_value: float
    total_contributions: float
    total_interest: float


def check_parameters(params: FinancialParameters) -> None:
    """Raise InvalidParameter for inputs outside the formula's domain."""
    errors: List[str] = []
    if params.compounds_per_year <= 0:
        errors.append(f"compounds_per_year must be positive, got {params.compounds_per_year}")
    if params.years < 0:
        errors.append(f"years must not be negative, got {params.years}")
    if not params.annual_rate_percent >= -100:
        errors.append(
            f"annual_rate_percent must be at least -100, got {params.annual_rate_percent}"
        )
    if errors:
        raise InvalidParameter(errors)


def _future_value(params: FinancialParameters, years: int) -> float:
    """
    Closed-form balance after `years` whole years.

    The annuity factor (g - 1) / (r / n) is applied to the monthly amount as is,
    without converting it to the compounding cadence.
    """
    n = params.compounds_per_year
    total_periods = n * years
    if total_periods == 0:
        return float(params.initial_principal)

    r = params.annual_rate_percent / 100
    if r == 0:
        return params.initial_principal + params.monthly_contribution * total_periods

    periodic_rate = r / n
    try:
        growth = (1 + periodic_rate) ** total_periods
    except OverflowError:
        raise _overflow(params, years) from None
    balance = (
        params.initial_principal * growth
        + params.monthly_contribution * (growth - 1) / periodic_rate
    )
    if not math.isfinite(balance):
        raise _overflow(params, years)
    return balance


def _overflow(params: FinancialParameters, years: int) -> InvalidParameter:
    return InvalidParameter(
        [
            f"projection overflows after {years} years at {params.annual_rate_percent}% "
            f"compounded {params.compounds_per_year} times a year"
        ]
    )


def _contributions(params: FinancialParameters, years: int) -> float:
    return params.initial_principal + MONTHS_PER_YEAR * params.monthly_contribution * years


def project(params: FinancialParameters) -> ProjectionResult:
    """Future value, money paid in and interest earned at the horizon."""
    check_parameters(params)

    future_value = _future_value(params, params.years)
    total_contributions = _contributions(params, params.years)
    logger.debug(
        "projection computed",
        rate=params.annual_rate_percent,
        years=params.years,
        future_value=future_value,
    )
    return ProjectionResult(
        future_value=future_value,
        total_contributions=total_contributions,
        total_interest=future_value - total_contributions,
    )


def iter_timeline(params: FinancialParameters) -> Iterator[YearlyDataPoint]:
    """
    Yield one snapshot per whole year from 0 through params.years.

    Every point is recomputed from the closed form for its own year, so the
    iterator can be restarted or sliced without replaying earlier years.
    """
    check_parameters(params)
    return _timeline_points(params)


def _timeline_points(params: FinancialParameters) -> Iterator[YearlyDataPoint]:
    for year in range(params.years + 1):
        balance = _future_value(params, year)
        contributions = _contributions(params, year)
        yield YearlyDataPoint(
            year=year,
            balance=balance,
            contributions=contributions,
            interest=balance - contributions,
        )


def timeline(params: FinancialParameters) -> List[YearlyDataPoint]:
    return list(iter_timeline(params))


def _snap(rate: float) -> float:
    # adding 0.0 turns a rounded -0.0 into 0.0
    return round(rate, _RATE_DIGITS) + 0.0


def sweep_rates(base_rate: float, variance_range: float, step: float = DEFAULT_RATE_STEP) -> List[float]:
    """Non-negative rates base_rate + k * step for k in [-variance/step, +variance/step]."""
    errors: List[str] = []
    if not (step > 0 and math.isfinite(step)):
        errors.append(f"step must be a positive finite number, got {step}")
    if not (variance_range >= 0 and math.isfinite(variance_range)):
        errors.append(f"variance_range must be a non-negative finite number, got {variance_range}")
    if errors:
        raise InvalidParameter(errors)

    k_max = math.floor(variance_range / step + _STEP_TOLERANCE)
    rates = [_snap(base_rate + k * step) for k in range(-k_max, k_max + 1)]
    return [rate for rate in rates if rate >= 0]


def rate_sweep(
    params: FinancialParameters,
    variance_range: float,
    step: float = DEFAULT_RATE_STEP,
) -> List[RateSweepPoint]:
    """
    Project the plan at every rate in a symmetric band around its base rate.

    Negative rates in the band are dropped rather than clamped. Output is
    ascending by rate.
    """
    check_parameters(params)
    rates = sweep_rates(params.annual_rate_percent, variance_range, step)

    points: List[RateSweepPoint] = []
    for rate in rates:
        result = project(params.model_copy(update={"annual_rate_percent": rate}))
        points.append(RateSweepPoint(rate=rate, **result.model_dump()))

    logger.debug(
        "rate sweep computed",
        base_rate=params.annual_rate_percent,
        variance_range=variance_range,
        step=step,
        points=len(points),
    )
    return points


__all__ = [
    "CompoundingFrequency",
    "DEFAULT_RATE_STEP",
    "FinancialParameters",
    "InvalidParameter",
    "MONTHS_PER_YEAR",
    "ProjectionResult",
    "RateSweepPoint",
    "YearlyDataPoint",
    "check_parameters",
    "iter_timeline",
    "project",
    "rate_sweep",
    "sweep_rates",
    "timeline",
]
