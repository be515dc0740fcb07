"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from compound_backend import __version__
from compound_backend.config import Settings
from compound_backend.core.export import REPORT_FILENAME, build_csv_report
from compound_backend.core.projection import (
    FinancialParameters,
    InvalidParameter,
    project,
    rate_sweep,
    timeline,
)
from compound_backend.logging_config import get_logger
from compound_backend.schemas.ping import PingResponse
from compound_backend.schemas.projection import CalculatorRequest, CalculatorSummary

api_bp = Blueprint("api", __name__)
logger = get_logger(__name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("request rejected", path=request.path, errors=exc.error_count())
    detail = exc.errors(include_url=False, include_context=False, include_input=False)
    return jsonify({"detail": detail}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InvalidParameter)
def _handle_invalid_parameter(exc: InvalidParameter):
    """Out-of-domain numbers reach the engine and come back as 400s."""
    logger.warning("invalid parameters", path=request.path, errors=exc.errors)
    return jsonify({"error": exc.errors}), HTTPStatus.BAD_REQUEST


def _settings() -> Settings:
    return current_app.config["SETTINGS"]


def _read_request() -> CalculatorRequest:
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    settings = _settings()
    return CalculatorRequest.model_validate(
        raw_payload,
        context={
            "variance_range": settings.DEFAULT_VARIANCE_RANGE,
            "step": settings.RATE_SWEEP_STEP,
        },
    )


def _summarize(payload: CalculatorRequest) -> CalculatorSummary:
    params: FinancialParameters = payload.to_parameters()
    return CalculatorSummary(
        parameters=params,
        result=project(params),
        timeline=timeline(params),
        rate_sweep=rate_sweep(params, payload.variance_range, payload.step),
    )


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", version=__version__)
    return jsonify(response.model_dump())


@api_bp.post("/calc/projection")
def projection() -> Any:
    """Future value, contributions and interest at the horizon."""
    result = project(_read_request().to_parameters())
    return jsonify(result.model_dump(by_alias=True))


@api_bp.post("/calc/timeline")
def yearly_timeline() -> Any:
    """Year-by-year breakdown from year 0 through the horizon."""
    points = timeline(_read_request().to_parameters())
    return jsonify([point.model_dump(by_alias=True) for point in points])


@api_bp.post("/calc/rate-sweep")
def sweep() -> Any:
    """Projections across the rate band around the requested rate."""
    payload = _read_request()
    points = rate_sweep(payload.to_parameters(), payload.variance_range, payload.step)
    return jsonify([point.model_dump(by_alias=True) for point in points])


@api_bp.post("/calc/summary")
def summary() -> Any:
    """Headline result, timeline and rate sweep in one response."""
    return jsonify(_summarize(_read_request()).model_dump(by_alias=True))


@api_bp.post("/calc/export")
def export_csv() -> Response:
    """Download the calculator report as CSV."""
    report = _summarize(_read_request())
    body = build_csv_report(report.parameters, report.result, report.timeline, report.rate_sweep)
    logger.info("csv export", rows=len(report.timeline), sweep_points=len(report.rate_sweep))
    return Response(
        body,
        mimetype="text/csv",
        headers={"Content-Disposition": f"attachment; filename={REPORT_FILENAME}"},
    )
