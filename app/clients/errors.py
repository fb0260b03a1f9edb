"""Failure kinds raised by the diagnosis gateway.

Every error carries a stable ``kind`` so HTTP callers can tell an
authentication problem apart from a network outage or a malformed upstream
payload.
"""

from __future__ import annotations


class DiagnosisGatewayError(RuntimeError):
    kind = "gateway_error"


class ApiMedicAuthenticationError(DiagnosisGatewayError):
    kind = "authentication_failure"

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Authentication failed: {status_code}")
        self.status_code = status_code
        self.body = body


class ApiMedicTransportError(DiagnosisGatewayError):
    kind = "transport_failure"


class ApiMedicUpstreamError(DiagnosisGatewayError):
    kind = "upstream_error"

    def __init__(self, message: str, *, status_code: int, body: str = "") -> None:
        super().__init__(f"{message} (status {status_code})")
        self.status_code = status_code
        self.body = body


class ApiMedicParseError(DiagnosisGatewayError):
    kind = "parse_failure"
