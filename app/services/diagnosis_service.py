"""Diagnosis gateway service.

Serves symptom and diagnosis lookups either from canned mock payloads or from
the live ApiMedic API, and records clinicians' verdicts on a diagnosis.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from app.clients.apimedic import ApiMedicClient
from app.clients.errors import ApiMedicParseError
from app.core.config import ApiMedicConfig
from app.data.mock_responses import MOCK_DIAGNOSIS_JSON, MOCK_SYMPTOMS_JSON
from app.models.diagnosis_result import DiagnosisResult
from app.repositories.diagnosis_result_repository import DiagnosisResultRepository
from app.schemas.apimedic import DiagnosisCandidate, DiagnosisCandidateList, DiagnosisRequest, Symptom, SymptomList
from app.schemas.diagnosis_result import DiagnosisResultCreate

logger = logging.getLogger(__name__)


class DiagnosisService:
    def __init__(
        self,
        config: ApiMedicConfig,
        client: ApiMedicClient | None = None,
        repository: DiagnosisResultRepository | None = None,
    ) -> None:
        self.config = config
        self.client = client
        self.repository = repository

    def get_symptoms(self) -> list[Symptom]:
        logger.info("Fetching all the symptoms...")
        if self.config.mock_enabled:
            logger.info("Mock enabled - returning mock symptoms")
            try:
                return SymptomList.validate_json(MOCK_SYMPTOMS_JSON)
            except ValidationError as exc:
                raise ApiMedicParseError(f"Failed to parse mock symptoms: {exc}") from exc

        token = self._require_client().fetch_token().token
        logger.info("Mock disabled - fetching symptoms from API")
        return self.client.fetch_symptoms(token)

    def get_diagnosis(self, request: DiagnosisRequest) -> list[DiagnosisCandidate]:
        request_body = request.model_dump_json(by_alias=True)
        logger.info("Diagnosis request body: %s", request_body)
        if self.config.mock_enabled:
            logger.info("Mock enabled - returning mock diagnosis")
            try:
                return DiagnosisCandidateList.validate_json(MOCK_DIAGNOSIS_JSON)
            except ValidationError as exc:
                raise ApiMedicParseError(f"Failed to parse mock diagnosis: {exc}") from exc

        logger.info("Mock disabled - fetching diagnosis from API")
        token = self._require_client().fetch_token().token
        return self.client.fetch_diagnosis(token, request_body)

    def save_diagnosis(self, result: DiagnosisResultCreate) -> DiagnosisResult:
        logger.info("Saving diagnosis result for user...")
        return self._require_repository().create(result)

    def get_result(self, result_id: int) -> DiagnosisResult | None:
        return self._require_repository().get(result_id)

    def _require_client(self) -> ApiMedicClient:
        if self.client is None:
            raise RuntimeError("ApiMedic client is required when mock mode is disabled")
        return self.client

    def _require_repository(self) -> DiagnosisResultRepository:
        if self.repository is None:
            raise RuntimeError("DiagnosisResultRepository is not configured")
        return self.repository
