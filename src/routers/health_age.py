"""Health-age computation endpoints.

Endpoints:
    POST /health-age         — Compute from explicit measurements
    POST /health-age/inbody  — Compute from an extracted InBody record

Results are returned, never stored.  Persistence is the caller's concern.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from src.dependencies import Calculator
from src.health_age.base import HealthAgeInput, HealthAgeResult, HealthAgeValidationError
from src.health_age.inbody import input_from_inbody_record
from src.health_age.interpretation import age_status, build_narrative_context
from src.models.base import ErrorDetail
from src.models.health_age import (
    HealthAgeRequest,
    HealthAgeResponse,
    InBodyHealthAgeRequest,
    InBodyHealthAgeResponse,
)

logger = logging.getLogger("yanggaeng.routers.health_age")

router = APIRouter(prefix="/health-age", tags=["health-age"])


def _compute_or_422(calc: Calculator, inp: HealthAgeInput) -> HealthAgeResult:
    try:
        return calc.compute(inp)
    except HealthAgeValidationError as exc:
        logger.info("Rejected health-age input (%s): %s", exc.field, exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc


@router.post("", response_model=HealthAgeResponse, responses={422: {"model": ErrorDetail}})
async def compute_health_age_endpoint(body: HealthAgeRequest, calc: Calculator) -> Any:
    inp = body.to_input()
    result = _compute_or_422(calc, inp)
    return {
        "health_age": result.health_age,
        "is_athletic": result.is_athletic,
        "age_status": age_status(result.health_age, inp.actual_age),
        "policy_version": calc.policy.version,
        "debug": result.debug.to_dict(),
    }


@router.post(
    "/inbody",
    response_model=InBodyHealthAgeResponse,
    responses={422: {"model": ErrorDetail}},
)
async def compute_from_inbody(body: InBodyHealthAgeRequest, calc: Calculator) -> Any:
    inp = input_from_inbody_record(
        body.record,
        body.actual_age,  # type: ignore[arg-type]
        body.gender,  # type: ignore[arg-type]
        muscle_above_standard=body.muscle_above_standard,
    )
    result = _compute_or_422(calc, inp)
    context = build_narrative_context(inp, result)
    return {
        "health_age": result.health_age,
        "is_athletic": result.is_athletic,
        "age_status": context.age_status,
        "policy_version": calc.policy.version,
        "gender": context.gender,
        "debug": result.debug.to_dict(),
        "narrative_context": context.to_dict(),
    }
