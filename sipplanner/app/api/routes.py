"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from sipplanner.core.analytics import aggregate_stats, process_analytics, risk_return_points, time_series
from sipplanner.core.annuity import calculate_sip, required_contribution, required_duration, yearly_growth
from sipplanner.core.comparison import calculate_multiple_sips
from sipplanner.core.lumpsum import calculate_lump_sum, compare_sip_vs_lump_sum
from sipplanner.core.ping import get_ping_message, get_version
from sipplanner.core.portfolio import portfolio_metrics, validate_allocation
from sipplanner.core.projection import sample_projection
from sipplanner.core.recommendations import (
    get_recommendations,
    market_insights,
    optimize_allocation,
    personalized_tips,
    recommended_allocation,
)
from sipplanner.core.reporting import analytics_report_csv
from sipplanner.core.risk import RiskProfile, assess_risk_profile
from sipplanner.domain.errors import InputValidationError
from sipplanner.models import Portfolio, RiskAnswers, SIPScenario
from sipplanner.schemas.calculator import (
    AnalyticsRequest,
    CompareRequest,
    LumpSumRequest,
    OptimizeAllocationRequest,
    ProjectionRequest,
    RecommendationRequest,
    RequiredContributionRequest,
    RequiredDurationRequest,
    ScenarioListRequest,
    SIPRequest,
    YearlyGrowthRequest,
)
from sipplanner.schemas.ping import PingResponse
from sipplanner.schemas.storage import StorageBundle
from sipplanner.storage import Store

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


def _payload() -> Dict[str, Any]:
    return request.get_json(force=True, silent=False)


def _store() -> Store:
    return current_app.extensions["sipplanner.store"]


def _not_found(message: str):
    return jsonify({"detail": message}), HTTPStatus.NOT_FOUND


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("Rejected request to %s: %d validation error(s)", request.path, exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(InputValidationError)
def _handle_input_error(exc: InputValidationError):
    """Range errors raised by the calculators name the offending field."""
    logger.info("Rejected request to %s: %s", request.path, exc)
    return jsonify({"detail": exc.to_detail()}), HTTPStatus.BAD_REQUEST


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message=get_ping_message(), version=get_version())
    return jsonify(response.model_dump())


# ---------- SIP ----------


@api_bp.post("/sip")
def sip() -> Any:
    payload = SIPRequest.model_validate(_payload())
    logger.debug("SIP calculation %s", payload)
    result = calculate_sip(payload.monthlyAmount, payload.years, payload.annualReturns)
    return jsonify(result.model_dump())


@api_bp.post("/sip/yearly")
def sip_yearly() -> Any:
    payload = YearlyGrowthRequest.model_validate(_payload())
    rows = yearly_growth(payload.monthlyAmount, payload.years, payload.annualReturns)
    return jsonify([row.model_dump() for row in rows])


@api_bp.post("/sip/projection")
def sip_projection() -> Any:
    payload = ProjectionRequest.model_validate(_payload())
    interval = payload.interval or current_app.config["PROJECTION_INTERVAL"]
    series = sample_projection(payload.monthlyAmount, payload.years, payload.annualReturns, interval)
    body = series.model_dump()
    body["chart"] = series.chart_data()
    return jsonify(body)


@api_bp.post("/sip/required-contribution")
def sip_required_contribution() -> Any:
    payload = RequiredContributionRequest.model_validate(_payload())
    amount = required_contribution(payload.targetAmount, payload.years, payload.annualReturns)
    return jsonify({"monthlyAmount": amount})


@api_bp.post("/sip/required-duration")
def sip_required_duration() -> Any:
    payload = RequiredDurationRequest.model_validate(_payload())
    estimate = required_duration(payload.monthlyAmount, payload.targetAmount, payload.annualReturns)
    return jsonify(estimate.model_dump())


@api_bp.post("/sip/compare")
def sip_compare() -> Any:
    payload = ScenarioListRequest.model_validate(_payload())
    results = calculate_multiple_sips(payload.scenarios)
    return jsonify([result.model_dump() for result in results])


# ---------- lump sum ----------


@api_bp.post("/lump-sum")
def lump_sum() -> Any:
    payload = LumpSumRequest.model_validate(_payload())
    result = calculate_lump_sum(payload.principal, payload.years, payload.annualReturns)
    return jsonify(result.model_dump())


@api_bp.post("/compare")
def compare() -> Any:
    payload = CompareRequest.model_validate(_payload())
    result = compare_sip_vs_lump_sum(
        payload.monthlySIP, payload.lumpSumAmount, payload.years, payload.annualReturns
    )
    return jsonify(result.model_dump())


# ---------- risk profile / recommendations ----------


@api_bp.post("/risk/assess")
def risk_assess() -> Any:
    answers = RiskAnswers.model_validate(_payload())
    profile = assess_risk_profile(answers)
    logger.debug("Risk profile %s (%.1f)", profile.riskLevel, profile.riskScore)
    return jsonify(profile.model_dump())


@api_bp.post("/recommendations")
def recommendations() -> Any:
    payload = RecommendationRequest.model_validate(_payload())
    if payload.answers is None:
        return jsonify(get_recommendations(None).model_dump())

    profile = assess_risk_profile(payload.answers)
    body = get_recommendations(profile, payload.goals).model_dump()
    body["tips"] = personalized_tips(profile, payload.goals)
    body["marketInsights"] = market_insights()
    body["recommendedAllocation"] = recommended_allocation(profile.riskLevel)
    return jsonify(body)


@api_bp.post("/allocation/optimize")
def allocation_optimize() -> Any:
    payload = OptimizeAllocationRequest.model_validate(_payload())
    return jsonify(optimize_allocation(payload.riskTolerance, payload.timeHorizon))


# ---------- portfolio / analytics ----------


@api_bp.post("/portfolio/metrics")
def portfolio() -> Any:
    payload = Portfolio.model_validate(_payload())
    body = portfolio_metrics(payload).model_dump()
    body["allocationCheck"] = validate_allocation(payload).model_dump()
    return jsonify(body)


@api_bp.post("/analytics")
def analytics() -> Any:
    payload = AnalyticsRequest.model_validate(_payload())
    result = process_analytics(payload.portfolios, payload.scenarios)
    body = result.model_dump()
    body["stats"] = aggregate_stats(result).model_dump()
    body["riskReturn"] = [
        point.model_dump() for point in risk_return_points(payload.portfolios, payload.scenarios)
    ]
    body["timeSeries"] = time_series(payload.scenarios, payload.portfolios, payload.years).model_dump()
    return jsonify(body)


@api_bp.post("/analytics/report")
def analytics_report() -> Any:
    payload = AnalyticsRequest.model_validate(_payload())
    report = analytics_report_csv(process_analytics(payload.portfolios, payload.scenarios))
    return Response(
        report,
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=analytics-report.csv"},
    )


# ---------- storage ----------


@api_bp.get("/storage/scenarios")
def list_scenarios() -> Any:
    return jsonify(_store().sip_scenarios())


@api_bp.post("/storage/scenarios")
def save_scenario() -> Any:
    scenario = SIPScenario.model_validate(_payload())
    scenarios = _store().save_sip_scenario(scenario.model_dump())
    return jsonify(scenarios), HTTPStatus.CREATED


@api_bp.delete("/storage/scenarios/<int:index>")
def delete_scenario(index: int) -> Any:
    if not _store().delete_sip_scenario(index):
        return _not_found(f"no saved scenario at index {index}")
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/storage/portfolios")
def list_portfolios() -> Any:
    return jsonify(_store().portfolios())


@api_bp.post("/storage/portfolios")
def save_portfolio() -> Any:
    portfolio_in = Portfolio.model_validate(_payload())
    saved = _store().save_portfolio(portfolio_in.model_dump())
    return jsonify(saved), HTTPStatus.CREATED


@api_bp.get("/storage/portfolios/<portfolio_id>")
def get_portfolio(portfolio_id: str) -> Any:
    found = _store().portfolio(portfolio_id)
    if found is None:
        return _not_found(f"no portfolio with id {portfolio_id}")
    return jsonify(found)


@api_bp.delete("/storage/portfolios/<portfolio_id>")
def delete_portfolio(portfolio_id: str) -> Any:
    if not _store().delete_portfolio(portfolio_id):
        return _not_found(f"no portfolio with id {portfolio_id}")
    return "", HTTPStatus.NO_CONTENT


@api_bp.get("/storage/risk-profile")
def get_risk_profile() -> Any:
    profile = _store().risk_profile()
    if profile is None:
        return _not_found("no risk profile saved")
    return jsonify(profile)


@api_bp.put("/storage/risk-profile")
def put_risk_profile() -> Any:
    profile = RiskProfile.model_validate(_payload())
    _store().save_risk_profile(profile.model_dump())
    return jsonify(profile.model_dump())


@api_bp.get("/storage/export")
def export_storage() -> Any:
    return jsonify(_store().export_all())


@api_bp.post("/storage/import")
def import_storage() -> Any:
    bundle = StorageBundle.model_validate(_payload())
    imported = _store().import_data(bundle.model_dump())
    return jsonify({"imported": imported})


@api_bp.delete("/storage")
def clear_storage() -> Any:
    _store().clear()
    return "", HTTPStatus.NO_CONTENT
