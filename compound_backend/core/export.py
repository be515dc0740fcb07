"""Delimited-text report of a projection, in the calculator's export layout."""

from __future__ import annotations

import csv
import io
from typing import Sequence

from compound_backend.core.projection import (
    CompoundingFrequency,
    FinancialParameters,
    ProjectionResult,
    RateSweepPoint,
    YearlyDataPoint,
)

REPORT_FILENAME = "compound_interest_calculator.csv"
REPORT_TITLE = "COMPOUND INTEREST CALCULATOR"


def _whole(value: float) -> int:
    return int(round(value))


def _plain(value: float) -> float | int:
    return int(value) if float(value).is_integer() else value


def _frequency_label(compounds_per_year: int) -> str:
    try:
        return CompoundingFrequency(compounds_per_year).label
    except ValueError:
        return f"{compounds_per_year} per year"


def build_csv_report(
    params: FinancialParameters,
    result: ProjectionResult,
    yearly: Sequence[YearlyDataPoint],
    sweep: Sequence[RateSweepPoint],
) -> str:
    """
    Render inputs, headline result, yearly breakdown and rate sensitivity.

    Amounts are rounded to whole units with no currency symbol or grouping;
    rates keep one decimal.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")

    writer.writerow([REPORT_TITLE])
    writer.writerow([])

    writer.writerow(["INPUT PARAMETERS"])
    writer.writerow(["Initial Investment", _plain(params.initial_principal)])
    writer.writerow(["Monthly Contribution", _plain(params.monthly_contribution)])
    writer.writerow(["Length of Time", f"{params.years} years"])
    writer.writerow(["Interest Rate", f"{_plain(params.annual_rate_percent)}%"])
    writer.writerow(["Compound Frequency", _frequency_label(params.compounds_per_year)])
    writer.writerow([])

    writer.writerow(["MAIN RESULTS"])
    writer.writerow(["Future Value", _whole(result.future_value)])
    writer.writerow(["Total Contributions", _whole(result.total_contributions)])
    writer.writerow(["Total Interest Earned", _whole(result.total_interest)])
    writer.writerow([])

    writer.writerow(["YEAR-BY-YEAR BREAKDOWN"])
    writer.writerow(["Year", "Balance", "Contributions", "Interest"])
    for point in yearly:
        writer.writerow(
            [
                point.year,
                _whole(point.balance),
                _whole(point.contributions),
                _whole(point.interest),
            ]
        )
    writer.writerow([])

    writer.writerow(["INTEREST RATE VARIANCE ANALYSIS"])
    writer.writerow(["Rate", "Future Value", "Total Interest"])
    for point in sweep:
        writer.writerow(
            [f"{point.rate:.1f}%", _whole(point.future_value), _whole(point.total_interest)]
        )

    return buffer.getvalue()
