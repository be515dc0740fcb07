"""Data contracts for the calculator endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator
from pydantic.alias_generators import to_camel

from compound_backend.core.projection import (
    DEFAULT_RATE_STEP,
    CompoundingFrequency,
    FinancialParameters,
    ProjectionResult,
    RateSweepPoint,
    YearlyDataPoint,
)

DEFAULT_VARIANCE_RANGE = 2.0
MAX_YEARS = 1000
MAX_VARIANCE_RANGE = 100.0
MAX_SWEEP_STEPS = 1000


class CalculatorRequest(BaseModel):
    """Raw calculator inputs as sent by the frontend form."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    initial_principal: float = Field(10000.0, description="Starting balance.")
    monthly_contribution: float = Field(
        500.0,
        description="Deposit added every month; negative values model withdrawals.",
    )
    annual_rate_percent: float = Field(7.0, description="Nominal annual rate in percent (7 means 7%).")
    years: int = Field(10, le=MAX_YEARS, description="Projection horizon in whole years.")
    compounds_per_year: Optional[int] = Field(
        None,
        description="Compounding periods per year. Takes precedence over frequency.",
    )
    frequency: Optional[CompoundingFrequency] = Field(
        None,
        description="Compounding frequency label, e.g. 'Monthly' or 'Daily'.",
    )
    variance_range: Optional[float] = Field(
        None,
        le=MAX_VARIANCE_RANGE,
        description="Half-width of the rate sweep band in percentage points; defaults from settings.",
    )
    step: Optional[float] = Field(
        None,
        le=MAX_VARIANCE_RANGE,
        description="Distance between swept rates in percentage points; defaults from settings.",
    )

    @field_validator("frequency", mode="before")
    @classmethod
    def parse_frequency_label(cls, value: object) -> object:
        if isinstance(value, str):
            return CompoundingFrequency.from_label(value)
        return value

    @model_validator(mode="after")
    def resolve_sweep_band(self, info: ValidationInfo) -> "CalculatorRequest":
        """Fill the band from the caller's defaults and cap how many rates it can produce."""
        defaults = info.context or {}
        if self.variance_range is None:
            self.variance_range = defaults.get("variance_range", DEFAULT_VARIANCE_RANGE)
        if self.step is None:
            self.step = defaults.get("step", DEFAULT_RATE_STEP)

        if self.step > 0 and self.variance_range / self.step > MAX_SWEEP_STEPS:
            raise ValueError(
                f"step {self.step} is too fine for a rate band of {self.variance_range}; "
                f"at most {MAX_SWEEP_STEPS} steps each side"
            )
        return self

    @model_validator(mode="after")
    def default_frequency(self) -> "CalculatorRequest":
        if self.compounds_per_year is None and self.frequency is None:
            self.frequency = CompoundingFrequency.MONTHLY
        return self

    def to_parameters(self) -> FinancialParameters:
        compounds_per_year = (
            self.compounds_per_year
            if self.compounds_per_year is not None
            else int(self.frequency)
        )
        return FinancialParameters(
            initial_principal=self.initial_principal,
            monthly_contribution=self.monthly_contribution,
            annual_rate_percent=self.annual_rate_percent,
            compounds_per_year=compounds_per_year,
            years=self.years,
        )


class CalculatorSummary(BaseModel):
    """Everything the calculator page renders for one set of inputs."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    parameters: FinancialParameters
    result: ProjectionResult
    timeline: List[YearlyDataPoint]
    rate_sweep: List[RateSweepPoint]
