# src/campaign_ai/core/errors.py
"""Status-bearing errors raised by the gateway."""


class GatewayError(Exception):
    status = 500
    kind = "internal"

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_dict(self) -> dict:
        return {"status": self.status, "kind": self.kind, "message": self.message}


class MissingApiKeyError(GatewayError):
    status = 403
    kind = "auth"

    def __init__(self, message: str = "API key is missing"):
        super().__init__(message)


class EmptyResponseError(GatewayError):
    status = 502
    kind = "empty_response"

    def __init__(self, message: str = "Empty response from AI"):
        super().__init__(message)


class CampaignSchemaError(GatewayError):
    """Parsed campaign JSON does not match the documented schema."""

    status = 502
    kind = "schema"

    def __init__(self, message: str, errors: list | None = None):
        super().__init__(message)
        self.errors = errors or []
