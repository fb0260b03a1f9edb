from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.diagnosis_result import DiagnosisResult
from app.schemas.diagnosis_result import DiagnosisResultCreate


class DiagnosisResultRepository:
    def __init__(self, db: Session) -> None:
        self.db = db

    def create(self, payload: DiagnosisResultCreate) -> DiagnosisResult:
        row = DiagnosisResult(
            symptoms=payload.symptoms,
            gender=payload.gender,
            year_of_birth=payload.year_of_birth,
            diagnosis=payload.diagnosis,
            is_valid=payload.is_valid,
            timestamp=payload.timestamp,
        )
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return row

    def get(self, result_id: int) -> DiagnosisResult | None:
        stmt = select(DiagnosisResult).where(DiagnosisResult.id == result_id)
        return self.db.execute(stmt).scalar_one_or_none()
