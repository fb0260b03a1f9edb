"""Medical Diagnosis FastAPI application.

A thin gateway in front of the ApiMedic symptom checker. It serves the
symptom catalogue and diagnosis candidates (live or from canned mock data)
and records clinicians' verdicts on the diagnoses they were shown.
"""

import logging

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import Settings, get_settings
from app.routers import diagnosis


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)

    app = FastAPI(
        title="Medical Diagnosis",
        version="0.1.0",
        description="Symptom and diagnosis lookups backed by ApiMedic, plus diagnosis outcome storage.",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(diagnosis.router)

    @app.get("/health", tags=["health"])
    def health(current: Settings = Depends(get_settings)) -> dict:
        return {"status": "ok", "mock_enabled": current.apimedic_mock_enabled}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        log_level="info",
    )
