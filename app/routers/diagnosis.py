"""Diagnosis router.

Exposes symptom lookup, diagnosis lookup and persistence of a clinician's
verdict under ``/api/v1``. Gateway failures are reported as 500 with a
machine-readable ``error`` kind in the detail.
"""

from __future__ import annotations

import logging
from collections.abc import Generator

import httpx
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.clients.apimedic import ApiMedicClient
from app.clients.errors import DiagnosisGatewayError
from app.core.config import Settings, get_settings
from app.db.session import get_db
from app.repositories.diagnosis_result_repository import DiagnosisResultRepository
from app.schemas.apimedic import DiagnosisCandidate, DiagnosisRequest, Symptom
from app.schemas.diagnosis_result import DiagnosisResultCreate, DiagnosisResultRead
from app.services.diagnosis_service import DiagnosisService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["diagnosis"])


def get_apimedic_client(settings: Settings = Depends(get_settings)) -> Generator[ApiMedicClient, None, None]:
    config = settings.apimedic
    with httpx.Client(timeout=config.timeout_seconds) as http:
        yield ApiMedicClient(config, http)


def _gateway_failure(exc: DiagnosisGatewayError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail={"error": exc.kind, "message": str(exc)},
    )


@router.get("/symptoms", response_model=list[Symptom])
def get_symptoms(
    settings: Settings = Depends(get_settings),
    client: ApiMedicClient = Depends(get_apimedic_client),
) -> list[Symptom]:
    service = DiagnosisService(settings.apimedic, client=client)
    try:
        return service.get_symptoms()
    except DiagnosisGatewayError as exc:
        logger.exception("Failed to fetch symptoms")
        raise _gateway_failure(exc) from exc


@router.post("/diagnosis", response_model=list[DiagnosisCandidate])
def get_diagnosis(
    payload: DiagnosisRequest,
    settings: Settings = Depends(get_settings),
    client: ApiMedicClient = Depends(get_apimedic_client),
) -> list[DiagnosisCandidate]:
    service = DiagnosisService(settings.apimedic, client=client)
    try:
        return service.get_diagnosis(payload)
    except DiagnosisGatewayError as exc:
        logger.exception("Failed to fetch diagnosis")
        raise _gateway_failure(exc) from exc


@router.post("/save", response_model=DiagnosisResultRead, status_code=status.HTTP_201_CREATED)
def save(
    payload: DiagnosisResultCreate,
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> DiagnosisResultRead:
    service = DiagnosisService(settings.apimedic, repository=DiagnosisResultRepository(db))
    try:
        row = service.save_diagnosis(payload)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to insert diagnosis_results")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="failed to save diagnosis result",
        ) from exc

    return DiagnosisResultRead.model_validate(row)


@router.get("/results/{result_id}", response_model=DiagnosisResultRead)
def get_result(
    result_id: int,
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db),
) -> DiagnosisResultRead:
    service = DiagnosisService(settings.apimedic, repository=DiagnosisResultRepository(db))
    row = service.get_result(result_id)
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="diagnosis result not found")

    return DiagnosisResultRead.model_validate(row)
