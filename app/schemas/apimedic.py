"""Pydantic models for symptom and diagnosis payloads.

The browser front end speaks camelCase while ApiMedic answers in PascalCase
(``ID``, ``Name``, ``IcdName``, ``SpecialistID``). Both are accepted on input;
output is always camelCase.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel


def _lower_first(key: str) -> str:
    if key.isupper():
        return key.lower()
    if key.endswith("ID"):
        key = key[:-2] + "Id"
    return key[:1].lower() + key[1:]


class ApiMedicModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _accept_pascal_case(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {_lower_first(k) if isinstance(k, str) else k: v for k, v in data.items()}
        return data


class Symptom(ApiMedicModel):
    id: str
    name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("name", "description"),
        serialization_alias="name",
    )


class DiagnosisRequest(ApiMedicModel):
    gender: str
    year_of_birth: int
    patient_name: str | None = None
    symptoms: list[Symptom] = Field(default_factory=list)


class Issue(ApiMedicModel):
    id: int
    name: str
    accuracy: float = Field(ge=0, le=100)
    icd: str | None = None
    icd_name: str | None = None
    prof_name: str | None = None


class Specialisation(ApiMedicModel):
    id: int
    name: str
    spec_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("specId", "specialistId"),
        serialization_alias="specId",
    )
    specialist_name: str | None = None


class DiagnosisCandidate(ApiMedicModel):
    issue: Issue
    specialisation: list[Specialisation] = Field(default_factory=list)


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    token: str = Field(alias="Token")
    valid_through: int | None = Field(default=None, alias="ValidThrough")


SymptomList = TypeAdapter(list[Symptom])
DiagnosisCandidateList = TypeAdapter(list[DiagnosisCandidate])
