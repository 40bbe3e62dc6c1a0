"""
API router for disease risk endpoints.
"""
from typing import Annotated, List, Optional
from fastapi import APIRouter, Query

from ricecare.api.dependencies import RiskServiceDep
from ricecare.api.v1.models.requests import RiskAssessmentRequest
from ricecare.api.v1.models.responses import (
    DayRiskResponse,
    DiseaseProfilesResponse,
    RiskAssessmentResponse,
    RiskResultResponse,
)
from ricecare.domain.disease_profiles import DISEASE_LIST, get_profile
from ricecare.domain.models import DayRiskAssessment, RiskResult


router = APIRouter(
    prefix="/risk",
    tags=["risk"],
)


def _to_result_response(result: RiskResult) -> RiskResultResponse:
    profile = get_profile(result.code)
    return RiskResultResponse(
        code=result.code,
        name=profile.name if profile else None,
        risk=result.risk,
        match_count=result.match_count,
        total_conditions=result.total_conditions,
        match_rate=result.match_rate,
    )


def _to_assessment_response(assessments: List[DayRiskAssessment]) -> RiskAssessmentResponse:
    return RiskAssessmentResponse(
        days=[
            DayRiskResponse(
                date=a.date,
                results=[_to_result_response(r) for r in a.results],
            )
            for a in assessments
        ]
    )


@router.get(
    "/diseases",
    response_model=DiseaseProfilesResponse,
    summary="List monitored disease profiles",
)
async def list_diseases() -> DiseaseProfilesResponse:
    """Return every disease and pest profile in canonical monitoring order."""
    return DiseaseProfilesResponse(
        diseases=[get_profile(code) for code in DISEASE_LIST]
    )


@router.post(
    "/assess",
    response_model=RiskAssessmentResponse,
    summary="Score risk for supplied weather days",
    description="""
    Score each monitored disease against each supplied weather day.
    
    Results per day are sorted by risk (HIGH, MODERATE, LOW). Diseases with
    equal risk keep the order given in `monitored_codes`. Unknown codes are
    reported as LOW with zero matches.
    """,
)
async def assess_risk(
    body: RiskAssessmentRequest,
    risk_service: RiskServiceDep,
) -> RiskAssessmentResponse:
    """Rank disease risk for caller-supplied weather days."""
    assessments = risk_service.assess(body.days, body.monitored_codes)
    return _to_assessment_response(assessments)


@router.get(
    "/forecast",
    response_model=RiskAssessmentResponse,
    summary="Score risk from the weather forecast",
    responses={
        502: {"description": "Weather provider failure"},
    }
)
async def forecast_risk(
    latitude: Annotated[float, Query(ge=-90, le=90)],
    longitude: Annotated[float, Query(ge=-180, le=180)],
    risk_service: RiskServiceDep,
    codes: Annotated[Optional[List[str]], Query(description="Monitored disease codes")] = None,
) -> RiskAssessmentResponse:
    """Fetch the short-range agro forecast for a field and rank disease risk per day."""
    assessments = await risk_service.forecast_risk(latitude, longitude, codes)
    return _to_assessment_response(assessments)
