from app.db.base import Base

# Import all models here
from app.models.diagnosis_result import DiagnosisResult

__all__ = ["Base", "DiagnosisResult"]
