from __future__ import annotations

import json
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class DiagnosisResultCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    symptoms: str | None = None
    gender: str | None = None
    year_of_birth: int = 0
    diagnosis: str | None = None
    is_valid: bool = False
    timestamp: datetime = Field(default_factory=datetime.now)

    @field_validator("symptoms", "diagnosis", mode="before")
    @classmethod
    def _serialize_structured(cls, value: object) -> object:
        # The front end posts symptoms as a list of {id, description}.
        if isinstance(value, (list, dict)):
            return json.dumps(value)
        return value


class DiagnosisResultRead(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    symptoms: str | None
    gender: str | None
    year_of_birth: int
    diagnosis: str | None
    is_valid: bool
    timestamp: datetime
