"""HTTP client for the ApiMedic diagnosis API.

Authentication is a two-step affair. A credential is derived locally from the
configured username, password and auth URL (HMAC-MD5, see
:func:`derive_auth_header`) and exchanged at the auth endpoint for a
short-lived token. Every data call then carries that token.

Tokens are not cached: each data call performs its own exchange.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import logging
from urllib.parse import urlsplit

import httpx
from pydantic import ValidationError

from app.clients.errors import (
    ApiMedicAuthenticationError,
    ApiMedicParseError,
    ApiMedicTransportError,
    ApiMedicUpstreamError,
)
from app.core.config import ApiMedicConfig
from app.schemas.apimedic import (
    DiagnosisCandidate,
    DiagnosisCandidateList,
    Symptom,
    SymptomList,
    TokenResponse,
)

logger = logging.getLogger(__name__)


def derive_auth_header(username: str, password: str, auth_url: str) -> str:
    """Build the ``Authorization`` header value for the token exchange.

    The password's MD5 hex digest keys an HMAC-MD5 over the auth URL; the
    resulting hex digest is base64 encoded and prefixed with the username.
    """
    md5_pass = hashlib.md5(password.encode("utf-8")).hexdigest()
    digest = hmac.new(md5_pass.encode("ascii"), auth_url.encode("utf-8"), hashlib.md5).hexdigest()
    auth_string = f"{username}:{base64.b64encode(digest.encode('ascii')).decode('ascii')}"
    return f"Bearer {auth_string}"


def diagnosis_url(base_url: str) -> str:
    parts = urlsplit(base_url)
    return f"{parts.scheme}://{parts.netloc}/api/diagnosis"


class ApiMedicClient:
    def __init__(self, config: ApiMedicConfig, http: httpx.Client) -> None:
        self.config = config
        self.http = http

    def fetch_token(self) -> TokenResponse:
        auth_header = derive_auth_header(self.config.username, self.config.password, self.config.auth_url)
        try:
            response = self.http.post(self.config.auth_url, headers={"Authorization": auth_header})
        except httpx.TransportError as exc:
            raise ApiMedicTransportError(f"Failed to obtain ApiMedic token: {exc}") from exc

        if response.is_client_error:
            logger.warning("ApiMedic token request rejected: status=%s", response.status_code)
            raise ApiMedicAuthenticationError(response.status_code, response.text)
        if not response.is_success:
            logger.error("ApiMedic token request failed: status=%s body=%s", response.status_code, response.text)
            raise ApiMedicUpstreamError(
                "Failed to obtain ApiMedic token",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return TokenResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise ApiMedicParseError(f"Malformed ApiMedic token response: {exc}") from exc

    def fetch_symptoms(self, token: str) -> list[Symptom]:
        response = self._send(
            "GET",
            f"{self.config.base_url}/symptoms",
            params={"language": self.config.language},
            headers={"Authorization": f"Bearer {token}", "Accept": "application/json"},
        )
        logger.info("Symptoms response code: %s Raw response body: %s", response.status_code, response.text)
        if response.is_error:
            raise ApiMedicUpstreamError(
                "An error occurred on symptoms fetching",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return SymptomList.validate_json(response.content)
        except ValidationError as exc:
            raise ApiMedicParseError(f"Malformed ApiMedic symptoms response: {exc}") from exc

    def fetch_diagnosis(self, token: str, request_body: str) -> list[DiagnosisCandidate]:
        response = self._send(
            "POST",
            diagnosis_url(self.config.base_url),
            content=request_body,
            headers={
                "Authorization": f"{self.config.diagnosis_auth_scheme} {token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
            },
        )
        logger.info("Diagnosis response code: %s Raw response body: %s", response.status_code, response.text)
        if response.is_error:
            raise ApiMedicUpstreamError(
                "An error occurred on diagnosis",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            return DiagnosisCandidateList.validate_json(response.content)
        except ValidationError as exc:
            raise ApiMedicParseError(f"Malformed ApiMedic diagnosis response: {exc}") from exc

    def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            return self.http.request(method, url, **kwargs)
        except httpx.TransportError as exc:
            raise ApiMedicTransportError(f"{method} {url} failed: {exc}") from exc
